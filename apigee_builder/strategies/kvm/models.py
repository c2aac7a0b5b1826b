"""Key-Value Map domain models."""

from pydantic import BaseModel, ConfigDict, Field


class KvmEntry(BaseModel):
    """A single KVM entry."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: str = ""


class Kvm(BaseModel):
    """An environment-scoped Apigee Key-Value Map."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="KVM name, e.g. 'customer-api.backend-info'")
    encrypted: bool = False
    entries: list[KvmEntry] = Field(default_factory=list)


class ValidationResult(BaseModel):
    """Outcome of validating a KVM or entry name/value.

    ``error_key`` / ``warning_key`` are stable identifiers for i18n lookups.
    """

    model_config = ConfigDict(frozen=True)

    valid: bool
    error: str | None = None
    warning: str | None = None
    error_key: str | None = None
    warning_key: str | None = None
