"""Backend-info KVM generation.

Turns variabilization entries into the per-environment ``backend-info``
KVM that the generated proxy reads its URL variables from.
"""

import logging
from collections.abc import Sequence

from apigee_builder.strategies.kvm.models import Kvm, KvmEntry
from apigee_builder.strategies.url.models import BackendInfoEntry

logger = logging.getLogger(__name__)

BACKEND_INFO_SUFFIX = "backend-info"


def backend_info_kvm_name(proxy_name: str | None, suffix: str = BACKEND_INFO_SUFFIX) -> str:
    """Return ``<proxy>.backend-info``, or ``backend-info`` without a proxy name."""
    return f"{proxy_name}.{suffix}" if proxy_name else suffix


def convert_to_kvm_entries(
    entries: Sequence[BackendInfoEntry], environment: str
) -> list[KvmEntry]:
    """Return one KVM entry per backend variable with its value in ``environment``."""
    return [
        KvmEntry(name=entry.variable_name, value=entry.values.get(environment, ""))
        for entry in entries
    ]


def create_backend_info_kvm(
    proxy_name: str | None,
    entries: Sequence[BackendInfoEntry],
    environment: str,
    encrypted: bool = True,
    suffix: str = BACKEND_INFO_SUFFIX,
) -> Kvm:
    """Create the dedicated backend-info KVM for one environment.

    Args:
        proxy_name: Proxy name used to prefix the KVM name.
        entries: Backend-info entries to include.
        environment: Environment whose values are used.
        encrypted: Whether the KVM is encrypted.
        suffix: KVM name suffix.

    Returns:
        The KVM.
    """
    return Kvm(
        name=backend_info_kvm_name(proxy_name, suffix),
        encrypted=encrypted,
        entries=convert_to_kvm_entries(entries, environment),
    )


def merge_kvm_entries(
    existing_kvms: Sequence[Kvm],
    entries: Sequence[BackendInfoEntry],
    environment: str,
    proxy_name: str | None = None,
    encrypted: bool = True,
    suffix: str = BACKEND_INFO_SUFFIX,
) -> list[Kvm]:
    """Merge backend-info entries into an environment's KVM list.

    An existing backend-info KVM (exact name or any ``*.<suffix>``) gains the
    entries it does not have yet; existing values are never overwritten.
    Otherwise a new backend-info KVM is prepended.

    Args:
        existing_kvms: Current KVMs of the environment.
        entries: Backend-info entries to merge.
        environment: Environment whose values are used.
        proxy_name: Proxy name used to prefix the KVM name.
        encrypted: Whether a newly created KVM is encrypted.
        suffix: KVM name suffix.

    Returns:
        A new list of KVMs.
    """
    if not entries:
        return list(existing_kvms)

    kvm_name = backend_info_kvm_name(proxy_name, suffix)
    new_kvm = create_backend_info_kvm(proxy_name, entries, environment, encrypted, suffix)

    for position, kvm in enumerate(existing_kvms):
        if kvm.name == kvm_name or kvm.name.endswith(f".{suffix}"):
            known = {e.name for e in kvm.entries}
            added = [e for e in new_kvm.entries if e.name not in known]
            logger.debug(f"Merging {len(added)} entries into KVM {kvm.name} ({environment})")
            merged = kvm.model_copy(update={"entries": [*kvm.entries, *added]})
            return [*existing_kvms[:position], merged, *existing_kvms[position + 1:]]

    logger.debug(f"Creating KVM {kvm_name} for {environment}")
    return [new_kvm, *existing_kvms]


def get_next_kvm_index(entries: Sequence[BackendInfoEntry]) -> int:
    """Return the first index above every allocated one (1 when empty)."""
    if not entries:
        return 1
    return max(entry.kvm_index for entry in entries) + 1


def update_backend_info_value(
    entries: Sequence[BackendInfoEntry],
    kvm_index: int,
    environment: str,
    value: str,
) -> list[BackendInfoEntry]:
    """Set one environment value of one entry.

    The edited entry is marked as no longer auto-detected.

    Returns:
        A new list of entries; the inputs are left untouched.
    """
    return [
        entry.model_copy(
            update={
                "values": {**entry.values, environment: value},
                "is_auto_detected": False,
            }
        )
        if entry.kvm_index == kvm_index
        else entry
        for entry in entries
    ]


def has_empty_values(entries: Sequence[BackendInfoEntry], environment: str) -> bool:
    """Return True if any entry still lacks a value for ``environment``."""
    return any(not entry.values.get(environment) for entry in entries)


def get_variabilization_summary(
    variabilized_path: str,
    variabilized_host: str | None,
    entries: Sequence[BackendInfoEntry],
) -> str:
    """Return a one-line human-readable summary, e.g. ``Path: ... | Variables: ...``."""
    parts: list[str] = []
    if variabilized_host:
        parts.append(f"Host: {variabilized_host}")
    if variabilized_path != "/":
        parts.append(f"Path: {variabilized_path}")
    if entries:
        parts.append("Variables: " + ", ".join(e.variable_name for e in entries))
    return " | ".join(parts)
