"""API request and response schemas.

Pydantic v2 models for API serialization/deserialization.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field
from pydantic.types import PositiveInt

# Re-export domain models used in request/response bodies
from apigee_builder.strategies.kvm import Kvm, ValidationResult
from apigee_builder.strategies.openapi import AutoDetectedConfig
from apigee_builder.strategies.url import (
    BackendInfoEntry,
    ServerDescriptor,
    VariabilizationResult,
)


# =============================================================================
# Variabilization Schemas
# =============================================================================


class VariabilizeRequest(BaseModel):
    """Request schema for variabilizing server URLs."""

    servers: list[ServerDescriptor] = Field(
        default_factory=list, description="Backend servers, typically one per environment"
    )
    starting_index: PositiveInt = Field(default=1, description="First KVM index to allocate")

    model_config = {
        "json_schema_extra": {
            "example": {
                "servers": [
                    {"url": "https://api.example.com/dev/v1", "environment": "dev1"},
                    {"url": "https://api.example.com/prod/v1", "environment": "prod1"},
                ],
                "starting_index": 1,
            }
        }
    }


class VariabilizeResponse(BaseModel):
    """Response for the URL variabilization endpoint."""

    result: VariabilizationResult
    summary: str = Field(description="One-line human-readable summary")
    next_index: int = Field(description="First KVM index still free after this run")


class OpenAPIAnalyzeRequest(BaseModel):
    """Request schema for analyzing an OpenAPI / Swagger document."""

    spec: str = Field(min_length=1, description="Raw JSON or YAML document")
    format: Literal["json", "yaml"] | None = Field(
        default=None, description="Document format; sniffed from the content when omitted"
    )
    starting_index: PositiveInt = Field(default=1, description="First KVM index to allocate")


# =============================================================================
# KVM Schemas
# =============================================================================


class BackendInfoKvmRequest(BaseModel):
    """Request schema for building per-environment backend-info KVMs."""

    entries: list[BackendInfoEntry] = Field(description="Entries from a variabilization result")
    proxy_name: str | None = Field(default=None, description="Proxy name prefixing the KVM")
    existing_kvms: dict[str, list[Kvm]] = Field(
        default_factory=dict, description="Current KVMs per environment to merge into"
    )


class BackendInfoKvmResponse(BaseModel):
    """Response with the merged KVMs of every environment."""

    kvms: dict[str, list[Kvm]]
    environments_with_empty_values: list[str] = Field(
        default_factory=list,
        description="Environments where some backend variable still has no value",
    )


class NameValidationRequest(BaseModel):
    """Request schema for validating a KVM or entry name."""

    name: str
    kind: Literal["kvm", "entry"] = "kvm"
    existing_names: list[str] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Standard error response."""

    detail: str = Field(description="Error message")
    error_code: str | None = Field(default=None, description="Application-specific error code")
    extra: dict[str, Any] | None = Field(default=None, description="Additional error context")


__all__ = [
    "AutoDetectedConfig",
    "BackendInfoKvmRequest",
    "BackendInfoKvmResponse",
    "ErrorResponse",
    "NameValidationRequest",
    "OpenAPIAnalyzeRequest",
    "ValidationResult",
    "VariabilizeRequest",
    "VariabilizeResponse",
]
