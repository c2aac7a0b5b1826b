"""Backend-info KVM generation and validation."""

from apigee_builder.strategies.kvm.generator import (
    backend_info_kvm_name,
    convert_to_kvm_entries,
    create_backend_info_kvm,
    get_next_kvm_index,
    get_variabilization_summary,
    has_empty_values,
    merge_kvm_entries,
    update_backend_info_value,
)
from apigee_builder.strategies.kvm.models import Kvm, KvmEntry, ValidationResult
from apigee_builder.strategies.kvm.validation import (
    validate_entry_name,
    validate_entry_value,
    validate_kvm_entries,
    validate_kvm_name,
)

__all__ = [
    "Kvm",
    "KvmEntry",
    "ValidationResult",
    "backend_info_kvm_name",
    "convert_to_kvm_entries",
    "create_backend_info_kvm",
    "get_next_kvm_index",
    "get_variabilization_summary",
    "has_empty_values",
    "merge_kvm_entries",
    "update_backend_info_value",
    "validate_entry_name",
    "validate_entry_value",
    "validate_kvm_entries",
    "validate_kvm_name",
]
