"""FastAPI routers and dependencies."""

from apigee_builder.api.deps import (
    get_app_settings,
    get_component_factory,
    get_server_extractor,
    get_variabilizer,
)
from apigee_builder.api.variabilization import router as variabilization_router

__all__ = [
    "get_app_settings",
    "get_component_factory",
    "get_server_extractor",
    "get_variabilizer",
    "variabilization_router",
]
