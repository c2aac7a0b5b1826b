"""OpenAPI ingestion strategies.

Loads OpenAPI 3.x / Swagger 2.0 documents and extracts backend servers.
"""

from apigee_builder.strategies.openapi.extractor import OpenAPIServerExtractor
from apigee_builder.strategies.openapi.loader import load_document, validate_document
from apigee_builder.strategies.openapi.models import AutoDetectedConfig, DetectedAuth

__all__ = [
    "AutoDetectedConfig",
    "DetectedAuth",
    "OpenAPIServerExtractor",
    "load_document",
    "validate_document",
]
