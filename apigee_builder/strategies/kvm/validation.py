"""KVM name and value validation.

Limits follow Apigee X / hybrid quotas.
"""

import re
from collections import Counter
from collections.abc import Iterable, Sequence

from apigee_builder.strategies.kvm.models import KvmEntry, ValidationResult

KVM_NAME_MAX_LENGTH = 255
ENTRY_NAME_MAX_LENGTH = 2048
ENTRY_VALUE_MAX_LENGTH = 524288
ENTRY_VALUE_WARNING_THRESHOLD = 100000
MAX_ENTRIES_PER_KVM = 5000
ENTRIES_WARNING_THRESHOLD = 4000

NAME_PATTERN = re.compile(r"^[a-zA-Z0-9._-]+$")

RESERVED_KVM_NAMES = frozenset(
    {
        "default",
        "system",
        "config",
        "configuration",
        "settings",
        "admin",
        "test",
        "temp",
        "tmp",
        "cache",
        "backup",
    }
)

_INVALID_FORMAT = "Name can only contain letters, numbers, dots, hyphens, and underscores"


def _invalid(error: str, error_key: str) -> ValidationResult:
    return ValidationResult(valid=False, error=error, error_key=error_key)


def validate_kvm_name(
    name: str,
    existing_names: Iterable[str] = (),
    check_reserved: bool = True,
) -> ValidationResult:
    """Validate a KVM name.

    Args:
        name: Candidate name; surrounding whitespace is ignored.
        existing_names: Names already in use.
        check_reserved: Whether reserved names are rejected.

    Returns:
        ValidationResult. Names starting with ``.``, ``-`` or ``_`` are
        valid but carry a warning.
    """
    trimmed = name.strip()

    if not trimmed:
        return _invalid("KVM name is required", "kvm.validation.nameRequired")
    if len(trimmed) > KVM_NAME_MAX_LENGTH:
        return _invalid(
            f"KVM name must be {KVM_NAME_MAX_LENGTH} characters or less "
            f"(current: {len(trimmed)})",
            "kvm.validation.nameTooLong",
        )
    if not NAME_PATTERN.match(trimmed):
        return _invalid(_INVALID_FORMAT, "kvm.validation.nameInvalidFormat")
    if check_reserved and trimmed.lower() in RESERVED_KVM_NAMES:
        return _invalid(
            f'"{trimmed}" is a reserved name. Please choose a different name.',
            "kvm.validation.nameReserved",
        )
    if trimmed in set(existing_names):
        return _invalid("A KVM with this name already exists", "kvm.validation.nameDuplicate")

    if trimmed[0] in ".-_":
        return ValidationResult(
            valid=True,
            warning="Names starting with special characters may cause issues",
            warning_key="kvm.validation.nameStartsWithSpecial",
        )
    return ValidationResult(valid=True)


def validate_entry_name(name: str, existing_names: Iterable[str] = ()) -> ValidationResult:
    """Validate a KVM entry name."""
    trimmed = name.strip()

    if not trimmed:
        return _invalid("Entry name is required", "kvm.validation.entryNameRequired")
    if len(trimmed) > ENTRY_NAME_MAX_LENGTH:
        return _invalid(
            f"Entry name must be {ENTRY_NAME_MAX_LENGTH} characters or less "
            f"(current: {len(trimmed)})",
            "kvm.validation.entryNameTooLong",
        )
    if not NAME_PATTERN.match(trimmed):
        return _invalid(_INVALID_FORMAT, "kvm.validation.entryNameInvalidFormat")
    if trimmed in set(existing_names):
        return _invalid(
            "An entry with this name already exists", "kvm.validation.entryNameDuplicate"
        )
    return ValidationResult(valid=True)


def validate_entry_value(value: str) -> ValidationResult:
    """Validate a KVM entry value against the size limits."""
    size_kb = round(len(value) / 1024)

    if len(value) > ENTRY_VALUE_MAX_LENGTH:
        return _invalid(
            f"Entry value must be {round(ENTRY_VALUE_MAX_LENGTH / 1024)}KB or less "
            f"(current: {size_kb}KB)",
            "kvm.validation.entryValueTooLong",
        )
    if len(value) > ENTRY_VALUE_WARNING_THRESHOLD:
        return ValidationResult(
            valid=True,
            warning=f"Large value ({size_kb}KB) may impact performance",
            warning_key="kvm.validation.entryValueLarge",
        )
    return ValidationResult(valid=True)


def validate_kvm_entries(entries: Sequence[KvmEntry]) -> ValidationResult:
    """Validate a complete entry list: names, values, duplicates and count."""
    errors: list[str] = []
    for entry in entries:
        if not NAME_PATTERN.match(entry.name):
            errors.append(f'Entry "{entry.name}" has invalid characters in name')
        elif len(entry.name) > ENTRY_NAME_MAX_LENGTH:
            errors.append(f'Entry "{entry.name}" name exceeds maximum length')
        elif len(entry.value) > ENTRY_VALUE_MAX_LENGTH:
            errors.append(f'Entry "{entry.name}" value exceeds maximum length')
    if errors:
        return _invalid("; ".join(errors), "kvm.validation.jsonEntryErrors")

    duplicates = [name for name, count in Counter(e.name for e in entries).items() if count > 1]
    if duplicates:
        return _invalid(
            f"Duplicate entry names found: {', '.join(duplicates)}",
            "kvm.validation.duplicateEntryNames",
        )

    if len(entries) > MAX_ENTRIES_PER_KVM:
        return _invalid(
            f"Too many entries ({len(entries)}). Maximum is {MAX_ENTRIES_PER_KVM}",
            "kvm.validation.tooManyEntries",
        )
    if len(entries) > ENTRIES_WARNING_THRESHOLD:
        return ValidationResult(
            valid=True,
            warning=f"Large number of entries ({len(entries)}) may impact performance",
            warning_key="kvm.validation.manyEntries",
        )
    return ValidationResult(valid=True)
