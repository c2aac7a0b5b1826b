"""OpenAPI ingestion interfaces.

Defines the abstract base class for extracting backend servers and other
auto-detectable settings from an API description document.
"""

from abc import ABC, abstractmethod
from typing import Any, Literal


class BaseServerExtractor(ABC):
    """Abstract base class for server extraction strategies."""

    @abstractmethod
    def extract_servers(self, document: dict[str, Any]) -> list[Any]:
        """Extract declared backend servers.

        Args:
            document: A loaded and validated API description.

        Returns:
            List of ServerDescriptor objects in declaration order.
        """

    @abstractmethod
    def analyze(
        self,
        text: str,
        format: Literal["json", "yaml"] | None = None,
        starting_index: int = 1,
    ) -> Any:
        """Load a document and auto-detect its proxy configuration.

        Args:
            text: Raw JSON or YAML document.
            format: Document format. Sniffed from the content when None.
            starting_index: First KVM index handed to the variabilizer.

        Returns:
            An AutoDetectedConfig.

        Raises:
            OpenAPIParsingError: If the document cannot be loaded or is invalid.
        """


class OpenAPIParsingError(Exception):
    """Exception raised when an API description cannot be loaded or validated."""

    pass
