"""Core configuration components."""

from apigee_builder.core.config import DEFAULT_ENVIRONMENTS, Settings, get_settings

__all__ = [
    "DEFAULT_ENVIRONMENTS",
    "Settings",
    "get_settings",
]
