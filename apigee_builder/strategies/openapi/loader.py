"""Loading and structural validation of OpenAPI / Swagger documents."""

import json
import logging
from typing import Any, Literal

import jsonschema
import yaml

from apigee_builder.interfaces.openapi import OpenAPIParsingError

logger = logging.getLogger(__name__)

# OpenAPI 3.x schema (simplified version for validation)
OPENAPI_3_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["openapi", "info", "paths"],
    "properties": {
        "openapi": {"type": "string", "pattern": r"^3\.\d+\.\d+$"},
        "info": {
            "type": "object",
            "required": ["title", "version"],
            "properties": {
                "title": {"type": "string"},
                "version": {"type": "string"},
                "description": {"type": "string"},
            },
        },
        "servers": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["url"],
                "properties": {
                    "url": {"type": "string"},
                    "description": {"type": "string"},
                },
            },
        },
        "paths": {"type": "object"},
    },
}

# Swagger 2.0 schema (simplified version for validation)
SWAGGER_2_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["swagger", "info", "paths"],
    "properties": {
        "swagger": {"type": "string", "enum": ["2.0"]},
        "info": {
            "type": "object",
            "required": ["title", "version"],
            "properties": {
                "title": {"type": "string"},
                "version": {"type": "string"},
            },
        },
        "host": {"type": "string"},
        "basePath": {"type": "string"},
        "schemes": {
            "type": "array",
            "items": {"type": "string", "enum": ["http", "https", "ws", "wss"]},
        },
        "paths": {"type": "object"},
    },
}


def detect_format(text: str) -> Literal["json", "yaml"]:
    """Guess the document format from its first non-blank character."""
    return "json" if text.lstrip().startswith("{") else "yaml"


def load_document(
    text: str, format: Literal["json", "yaml"] | None = None
) -> dict[str, Any]:
    """Parse a JSON or YAML API description.

    Unquoted YAML versions (``swagger: 2.0``, ``version: 1.0``) load as
    numbers and are converted back to strings.

    Args:
        text: Raw document.
        format: Document format. Sniffed from the content when None.

    Returns:
        The document as a dictionary.

    Raises:
        OpenAPIParsingError: If the text is not a JSON/YAML mapping.
    """
    format = format or detect_format(text)

    try:
        document = json.loads(text) if format == "json" else yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        logger.error(f"Failed to load {format} document: {e}")
        raise OpenAPIParsingError(f"Invalid {format.upper()} document: {e}") from e

    if not isinstance(document, dict):
        raise OpenAPIParsingError("API description must be a mapping at the top level")

    for key in ("openapi", "swagger"):
        if isinstance(document.get(key), (int, float)):
            document[key] = str(document[key])
    info = document.get("info")
    if isinstance(info, dict) and isinstance(info.get("version"), (int, float)):
        info["version"] = str(info["version"])

    return document


def validate_document(document: dict[str, Any]) -> str:
    """Validate a document against the schema matching its version.

    Args:
        document: The loaded document.

    Returns:
        A label such as ``"OpenAPI 3.0.3"`` or ``"Swagger 2.0"``.

    Raises:
        OpenAPIParsingError: If the version is unsupported or validation fails.
    """
    if "openapi" in document:
        schema = OPENAPI_3_SCHEMA
        version = f"OpenAPI {document['openapi']}"
    elif "swagger" in document:
        schema = SWAGGER_2_SCHEMA
        version = f"Swagger {document['swagger']}"
    else:
        logger.error("Unsupported OpenAPI/Swagger version")
        raise OpenAPIParsingError(
            "Unsupported document: expected an 'openapi' (3.x) or 'swagger' (2.0) field"
        )

    try:
        jsonschema.validate(instance=document, schema=schema)
    except jsonschema.exceptions.ValidationError as e:
        logger.error(f"{version} validation failed: {e.message}")
        raise OpenAPIParsingError(f"{version} validation failed: {e.message}") from e

    logger.info(f"Successfully validated {version} specification")
    return version
