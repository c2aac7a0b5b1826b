"""Concrete strategy implementations."""

from apigee_builder.strategies.openapi import (
    OpenAPIServerExtractor,
)
from apigee_builder.strategies.url import (
    UrlVariabilizer,
)

__all__ = [
    "OpenAPIServerExtractor",
    "UrlVariabilizer",
]
