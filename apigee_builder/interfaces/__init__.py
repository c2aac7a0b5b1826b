"""Abstract base classes for variabilization strategies."""

from apigee_builder.interfaces.openapi import BaseServerExtractor, OpenAPIParsingError
from apigee_builder.interfaces.variabilizer import BaseUrlVariabilizer

__all__ = [
    "BaseServerExtractor",
    "BaseUrlVariabilizer",
    "OpenAPIParsingError",
]
