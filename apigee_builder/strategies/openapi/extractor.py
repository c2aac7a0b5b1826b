"""OpenAPI server extractor strategy.

Reads the backend servers and authentication scheme out of an OpenAPI 3.x
or Swagger 2.0 document and hands the servers to the URL variabilizer.
"""

import logging
from typing import Any, Literal

from apigee_builder.interfaces.openapi import BaseServerExtractor
from apigee_builder.interfaces.variabilizer import BaseUrlVariabilizer
from apigee_builder.strategies.openapi.loader import load_document, validate_document
from apigee_builder.strategies.openapi.models import AutoDetectedConfig, DetectedAuth
from apigee_builder.strategies.url.environments import detect_environment
from apigee_builder.strategies.url.models import ServerDescriptor
from apigee_builder.strategies.url.parsing import parse_url

logger = logging.getLogger(__name__)


class OpenAPIServerExtractor(BaseServerExtractor):
    """Extracts servers from OpenAPI 3.x ``servers`` or Swagger 2.0 ``host``.

    Example:
        ```python
        extractor = OpenAPIServerExtractor(UrlVariabilizer())
        config = extractor.analyze(spec_text, starting_index=1)
        config.url_variabilization.variabilized_path
        ```
    """

    def __init__(self, variabilizer: BaseUrlVariabilizer) -> None:
        """Initialize the extractor.

        Args:
            variabilizer: Strategy used to variabilize the extracted servers.
        """
        self._variabilizer = variabilizer

    def extract_servers(self, document: dict[str, Any]) -> list[ServerDescriptor]:
        """Extract declared backend servers.

        OpenAPI 3.x yields one server per ``servers`` entry. Swagger 2.0
        yields one server per scheme (default ``https``) when ``host`` is set.

        Args:
            document: A loaded and validated API description.

        Returns:
            ServerDescriptor objects in declaration order.
        """
        servers: list[ServerDescriptor] = []

        if "openapi" in document:
            for server in document.get("servers") or []:
                url = server.get("url", "")
                if not url:
                    continue
                description = server.get("description")
                parsed = parse_url(url)
                servers.append(
                    ServerDescriptor(
                        url=url,
                        description=description,
                        environment=detect_environment(url, description),
                        host=parsed.host,
                        base_path="" if parsed.path == "/" else parsed.path,
                        scheme=parsed.protocol,
                    )
                )
        elif "swagger" in document:
            host = document.get("host") or ""
            base_path = document.get("basePath") or ""
            if host:
                for scheme in document.get("schemes") or ["https"]:
                    servers.append(
                        ServerDescriptor(
                            url=f"{scheme}://{host}{base_path}",
                            environment=detect_environment(host),
                            host=host.split(":")[0],
                            base_path=base_path,
                            scheme=scheme,
                        )
                    )

        logger.info(f"Extracted {len(servers)} server(s) from API description")
        return servers

    def detect_auth(self, document: dict[str, Any]) -> DetectedAuth:
        """Detect Basic or OAuth2 client-credentials backend authentication.

        The first matching security scheme wins.

        Args:
            document: A loaded API description.

        Returns:
            DetectedAuth, with type ``"None"`` when nothing matches.
        """
        if "openapi" in document:
            components = document.get("components") or {}
            schemes = components.get("securitySchemes") if isinstance(components, dict) else None
        else:
            schemes = document.get("securityDefinitions")
        if not isinstance(schemes, dict):
            return DetectedAuth()

        for name, scheme in schemes.items():
            if not isinstance(scheme, dict):
                logger.warning(f"Skipping malformed security scheme {name!r}")
                continue
            scheme_type = scheme.get("type")

            if scheme_type == "http" and str(scheme.get("scheme", "")).lower() == "basic":
                return DetectedAuth(type="Basic", security_scheme_name=name)

            # Swagger 2.0 declares Basic as its own type
            if scheme_type == "basic":
                return DetectedAuth(type="Basic", security_scheme_name=name)

            if scheme_type == "oauth2":
                flows = scheme.get("flows")
                client_credentials = (
                    flows.get("clientCredentials") if isinstance(flows, dict) else None
                )
                if isinstance(client_credentials, dict):
                    return DetectedAuth(
                        type="OAuth2-ClientCredentials",
                        security_scheme_name=name,
                        token_url=client_credentials.get("tokenUrl"),
                        scopes=list((client_credentials.get("scopes") or {}).keys()),
                    )
                # Swagger 2.0 "application" flow is client credentials
                if scheme.get("flow") == "application":
                    return DetectedAuth(
                        type="OAuth2-ClientCredentials",
                        security_scheme_name=name,
                        token_url=scheme.get("tokenUrl"),
                        scopes=list((scheme.get("scopes") or {}).keys()),
                    )

        return DetectedAuth()

    def analyze(
        self,
        text: str,
        format: Literal["json", "yaml"] | None = None,
        starting_index: int = 1,
    ) -> AutoDetectedConfig:
        """Load a document and auto-detect its proxy configuration.

        Args:
            text: Raw JSON or YAML document.
            format: Document format. Sniffed from the content when None.
            starting_index: First KVM index handed to the variabilizer.

        Returns:
            AutoDetectedConfig with servers, auth and URL variabilization.

        Raises:
            OpenAPIParsingError: If the document cannot be loaded or is invalid.
        """
        document = load_document(text, format)
        version = validate_document(document)
        logger.info(f"Analyzing {version} document")

        servers = self.extract_servers(document)
        info = document.get("info") or {}

        return AutoDetectedConfig(
            spec_version=str(document.get("openapi") or document.get("swagger")),
            title=info.get("title"),
            description=info.get("description"),
            api_version=info.get("version"),
            servers=servers,
            auth=self.detect_auth(document),
            url_variabilization=self._variabilizer.variabilize(servers, starting_index),
        )
