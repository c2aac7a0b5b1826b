"""FastAPI dependencies for dependency injection.

Provides the configured strategies to routes through the component
factory stored on the application state.
"""

import logging

from fastapi import Depends, HTTPException, Request, status

from apigee_builder.core.config import Settings
from apigee_builder.core.factory import ComponentFactory
from apigee_builder.interfaces.openapi import BaseServerExtractor
from apigee_builder.interfaces.variabilizer import BaseUrlVariabilizer

logger = logging.getLogger(__name__)


def get_app_settings(request: Request) -> Settings:
    """Dependency returning the settings the application was created with."""
    return request.app.state.settings


def get_component_factory(request: Request) -> ComponentFactory:
    """Dependency returning the application's component factory."""
    return request.app.state.factory


def get_variabilizer(
    factory: ComponentFactory = Depends(get_component_factory),
) -> BaseUrlVariabilizer:
    """Dependency for the configured URL variabilizer.

    Raises:
        HTTPException: If the configured strategy cannot be built.
    """
    try:
        return factory.get_variabilizer()
    except ValueError as e:
        logger.error(f"Variabilizer misconfigured: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e),
        ) from e


def get_server_extractor(
    factory: ComponentFactory = Depends(get_component_factory),
) -> BaseServerExtractor:
    """Dependency for the configured server extractor.

    Raises:
        HTTPException: If the configured strategy cannot be built.
    """
    try:
        return factory.get_server_extractor()
    except ValueError as e:
        logger.error(f"Server extractor misconfigured: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e),
        ) from e
