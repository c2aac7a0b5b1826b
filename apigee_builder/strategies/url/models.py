"""URL variabilization domain models.

Immutable Pydantic models shared by the URL parsing, comparison and
variabilization strategies and re-used by the API layer.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ServerDescriptor(BaseModel):
    """One declared backend endpoint."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(description="Server URL, possibly containing {placeholders}")
    description: str | None = Field(default=None, description="Human-readable description")
    environment: str | None = Field(
        default=None,
        description="Already-classified environment id (dev1, uat1, staging, prod1)",
    )
    host: str = Field(default="", description="Host name when known from ingestion")
    base_path: str = Field(default="", description="Base path when known from ingestion")
    scheme: str = Field(default="https", description="URL scheme when known from ingestion")


class TemplateVariable(BaseModel):
    """A {placeholder} found inside a URL host or path."""

    model_config = ConfigDict(frozen=True)

    original_name: str = Field(description="Bare placeholder name, e.g. 'env'")
    position: int = Field(description="Character offset inside its component")
    context: Literal["host", "path"] = Field(description="Component the placeholder sits in")
    full_match: str = Field(description="Placeholder including braces, e.g. '{env}'")


class ParsedUrl(BaseModel):
    """Placeholder-safe decomposition of a URL."""

    model_config = ConfigDict(frozen=True)

    protocol: str = "https"
    host: str = ""
    port: int | None = None
    path: str = "/"
    host_variables: list[TemplateVariable] = Field(default_factory=list)
    path_variables: list[TemplateVariable] = Field(default_factory=list)


class UrlWithEnv(BaseModel):
    """A URL tagged with the environment it belongs to."""

    model_config = ConfigDict(frozen=True)

    url: str
    environment: str


class UrlComparisonResult(BaseModel):
    """Outcome of comparing several environment URLs."""

    model_config = ConfigDict(frozen=True)

    has_host_differences: bool = False
    has_path_differences: bool = False
    common_host_prefix: str = ""
    common_host_suffix: str = ""
    common_path_prefix: str = ""
    common_path_suffix: str = ""
    host_differences: dict[str, str] = Field(
        default_factory=dict, description="Environment -> full host"
    )
    path_differences: dict[str, str] = Field(
        default_factory=dict, description="Environment -> varying path fragment"
    )


class BackendInfoEntry(BaseModel):
    """One synthesized backend-info KVM variable."""

    model_config = ConfigDict(frozen=True)

    kvm_index: int = Field(ge=1, description="1-based index used to build the variable name")
    variable_name: str = Field(description="KVM entry name, e.g. 'backend_info_1'")
    original_name: str = Field(description="Placeholder name or 'path_segment'")
    description: str = Field(description="Human-readable description")
    values: dict[str, str] = Field(description="Environment -> value mapping")
    is_auto_detected: bool = Field(
        default=False, description="Whether values were filled from server comparison"
    )


class VariabilizationResult(BaseModel):
    """Aggregate output of a variabilization run."""

    model_config = ConfigDict(frozen=True)

    variabilized_host: str | None = Field(
        default=None, description="Host template, None when hosts need no template"
    )
    variabilized_path: str = Field(default="/", description="Path template")
    kvm_entries: list[BackendInfoEntry] = Field(default_factory=list)
    hosts_per_environment: dict[str, str] = Field(
        default_factory=dict, description="Environment -> resolved host"
    )
    has_variabilization: bool = False
