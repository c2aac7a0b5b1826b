"""Component Factory for strategy instantiation.

The Factory Pattern allows the application to instantiate
different strategy implementations at runtime based on
configuration or environment variables.
"""

import logging

from apigee_builder.core.config import Settings, get_settings
from apigee_builder.interfaces.openapi import BaseServerExtractor
from apigee_builder.interfaces.variabilizer import BaseUrlVariabilizer
from apigee_builder.strategies.openapi import OpenAPIServerExtractor
from apigee_builder.strategies.url import UrlVariabilizer

logger = logging.getLogger(__name__)


class ComponentFactory:
    """Factory for creating component instances based on configuration.

    Example:
        ```python
        factory = ComponentFactory(get_settings())

        variabilizer = factory.get_variabilizer()
        extractor = factory.get_server_extractor()
        ```
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize the factory with optional settings.

        Args:
            settings: Application settings. If None, uses global settings.
        """
        self._settings = settings or get_settings()
        self._variabilizer_cache: BaseUrlVariabilizer | None = None
        self._server_extractor_cache: BaseServerExtractor | None = None

    @property
    def settings(self) -> Settings:
        """Return the settings components are built from."""
        return self._settings

    def get_variabilizer(self, variabilizer_type: str | None = None) -> BaseUrlVariabilizer:
        """Get a URL variabilizer instance based on the specified type.

        Args:
            variabilizer_type: The variabilizer type to instantiate. If None, uses settings.

        Returns:
            A BaseUrlVariabilizer implementation instance.

        Raises:
            ValueError: If the variabilizer type is unknown.
        """
        if self._variabilizer_cache is None or variabilizer_type is not None:
            variabilizer_type = variabilizer_type or self._settings.variabilizer_type

            logger.info(f"Instantiating variabilizer: {variabilizer_type}")

            match variabilizer_type:
                case "default":
                    self._variabilizer_cache = UrlVariabilizer(settings=self._settings)
                case _:
                    raise ValueError(
                        f"Unknown variabilizer type: {variabilizer_type}. "
                        f"Valid options: 'default'"
                    )

        return self._variabilizer_cache

    def get_server_extractor(self, extractor_type: str | None = None) -> BaseServerExtractor:
        """Get a server extractor instance based on the specified type.

        Args:
            extractor_type: The extractor type to instantiate. If None, uses settings.

        Returns:
            A BaseServerExtractor implementation instance.

        Raises:
            ValueError: If the extractor type is unknown.
        """
        if self._server_extractor_cache is None or extractor_type is not None:
            extractor_type = extractor_type or self._settings.server_extractor_type

            logger.info(f"Instantiating server extractor: {extractor_type}")

            match extractor_type:
                case "openapi":
                    self._server_extractor_cache = OpenAPIServerExtractor(
                        variabilizer=self.get_variabilizer(),
                    )
                case _:
                    raise ValueError(
                        f"Unknown server extractor type: {extractor_type}. "
                        f"Valid options: 'openapi'"
                    )

        return self._server_extractor_cache

    def clear_cache(self) -> None:
        """Clear all cached component instances.

        This forces new instances to be created on next access.
        Useful for testing or when settings change.
        """
        self._variabilizer_cache = None
        self._server_extractor_cache = None
        logger.debug("Component factory cache cleared")


# Global factory instance
_factory: ComponentFactory | None = None


def get_factory() -> ComponentFactory:
    """Get or create the global ComponentFactory instance.

    Returns:
        The singleton ComponentFactory instance.
    """
    global _factory
    if _factory is None:
        _factory = ComponentFactory()
    return _factory
