"""Variabilization API routes.

Exposes URL variabilization, OpenAPI server auto-detection and the
backend-info KVM helpers.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from apigee_builder.api.deps import get_app_settings, get_server_extractor, get_variabilizer
from apigee_builder.api.schemas import (
    AutoDetectedConfig,
    BackendInfoKvmRequest,
    BackendInfoKvmResponse,
    NameValidationRequest,
    OpenAPIAnalyzeRequest,
    ValidationResult,
    VariabilizeRequest,
    VariabilizeResponse,
)
from apigee_builder.core.config import Settings
from apigee_builder.interfaces.openapi import BaseServerExtractor, OpenAPIParsingError
from apigee_builder.interfaces.variabilizer import BaseUrlVariabilizer
from apigee_builder.strategies.kvm import (
    get_next_kvm_index,
    get_variabilization_summary,
    has_empty_values,
    merge_kvm_entries,
    validate_entry_name,
    validate_kvm_name,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/variabilization", tags=["variabilization"])


# =============================================================================
# Endpoints
# =============================================================================


@router.post("/urls", response_model=VariabilizeResponse, status_code=status.HTTP_200_OK)
async def variabilize_urls(
    request: VariabilizeRequest,
    variabilizer: BaseUrlVariabilizer = Depends(get_variabilizer),
) -> VariabilizeResponse:
    """Variabilize per-environment backend server URLs.

    Never fails on malformed URLs: they are parsed heuristically.

    Args:
        request: Servers and the first KVM index to allocate.
        variabilizer: The configured variabilizer.

    Returns:
        VariabilizeResponse with the result and the next free index.
    """
    result = variabilizer.variabilize(request.servers, request.starting_index)
    next_index = max(request.starting_index, get_next_kvm_index(result.kvm_entries))

    return VariabilizeResponse(
        result=result,
        summary=get_variabilization_summary(
            result.variabilized_path, result.variabilized_host, result.kvm_entries
        ),
        next_index=next_index,
    )


@router.post("/openapi", response_model=AutoDetectedConfig, status_code=status.HTTP_200_OK)
async def analyze_openapi(
    request: OpenAPIAnalyzeRequest,
    extractor: BaseServerExtractor = Depends(get_server_extractor),
) -> AutoDetectedConfig:
    """Auto-detect servers, auth and URL variabilization from a document.

    Args:
        request: The raw document and the first KVM index to allocate.
        extractor: The configured server extractor.

    Returns:
        AutoDetectedConfig for the document.

    Raises:
        HTTPException: 422 if the document cannot be loaded or is invalid.
    """
    try:
        config = extractor.analyze(request.spec, request.format, request.starting_index)
    except OpenAPIParsingError as e:
        logger.warning(f"Rejected API description: {e}")
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Failed to parse OpenAPI specification: {e}",
        ) from e

    logger.info(
        f"Analyzed '{config.title}': {len(config.servers)} server(s), "
        f"{len(config.url_variabilization.kvm_entries)} backend variable(s)"
    )
    return config


@router.post("/kvms", response_model=BackendInfoKvmResponse, status_code=status.HTTP_200_OK)
async def build_backend_info_kvms(
    request: BackendInfoKvmRequest,
    settings: Settings = Depends(get_app_settings),
) -> BackendInfoKvmResponse:
    """Merge backend-info entries into every environment's KVMs.

    Args:
        request: Entries, proxy name and current KVMs per environment.
        settings: Application settings (environments, KVM naming).

    Returns:
        BackendInfoKvmResponse with one KVM list per environment.
    """
    environments = list(dict.fromkeys([*settings.environments, *request.existing_kvms]))

    kvms = {
        env: merge_kvm_entries(
            request.existing_kvms.get(env, []),
            request.entries,
            env,
            request.proxy_name,
            encrypted=settings.encrypt_backend_info_kvm,
            suffix=settings.backend_info_kvm_suffix,
        )
        for env in environments
    }

    return BackendInfoKvmResponse(
        kvms=kvms,
        environments_with_empty_values=[
            env for env in environments if has_empty_values(request.entries, env)
        ],
    )


@router.post("/kvms/validate", response_model=ValidationResult, status_code=status.HTTP_200_OK)
async def validate_name(request: NameValidationRequest) -> ValidationResult:
    """Validate a KVM or KVM entry name."""
    if request.kind == "entry":
        return validate_entry_name(request.name, request.existing_names)
    return validate_kvm_name(request.name, request.existing_names)
