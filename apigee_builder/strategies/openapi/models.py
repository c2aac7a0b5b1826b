"""OpenAPI ingestion domain models."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from apigee_builder.strategies.url.models import ServerDescriptor, VariabilizationResult


class DetectedAuth(BaseModel):
    """Backend authentication detected from security schemes."""

    model_config = ConfigDict(frozen=True)

    type: Literal["Basic", "OAuth2-ClientCredentials", "None"] = "None"
    security_scheme_name: str | None = None
    token_url: str | None = None
    scopes: list[str] = Field(default_factory=list)


class AutoDetectedConfig(BaseModel):
    """Proxy configuration detected from an API description."""

    model_config = ConfigDict(frozen=True)

    spec_version: str = Field(description="Value of the 'openapi' or 'swagger' field")
    title: str | None = None
    description: str | None = None
    api_version: str | None = None
    servers: list[ServerDescriptor] = Field(default_factory=list)
    auth: DetectedAuth = Field(default_factory=DetectedAuth)
    url_variabilization: VariabilizationResult = Field(default_factory=VariabilizationResult)
