"""System endpoints exposing dependency health and application info."""

from typing import List, Optional

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status

from vitals.application.dtos.health_dto import ApplicationInfoDTO, HealthReportDTO
from vitals.application.use_cases.health_use_cases import (
    GetApplicationInfoUseCase,
    GetHealthStatusUseCase,
)
from vitals.domain.entities.health import AggregateResult, HealthStatus
from vitals.presentation.writers import CONTENT_TYPE, write
from vitals.shared import HEALTH_PATH, INFO_PATH, LIVENESS_PATH, get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["System"])

_HEALTH_RESPONSES = {
    status.HTTP_503_SERVICE_UNAVAILABLE: {
        "model": HealthReportDTO,
        "description": "At least one dependency is unhealthy",
    }
}


def _render(result: AggregateResult) -> Response:
    body, status_code = write(result)
    return Response(content=body, status_code=status_code, media_type=CONTENT_TYPE)


@router.get(HEALTH_PATH, response_model=HealthReportDTO, responses=_HEALTH_RESPONSES)
@inject
async def health(
    tag: Optional[List[str]] = Query(
        default=None, description="Only run probes carrying one of these tags"
    ),
    get_health_status_use_case: GetHealthStatusUseCase = Depends(
        Provide["get_health_status_use_case"]
    ),
) -> Response:
    """Probe every registered dependency and report the aggregated health."""
    try:
        result = await get_health_status_use_case.execute(tags=tag)
        response = _render(result)
    except Exception as exc:
        logger.error("health.check.failure", error=repr(exc), exc_info=exc)
        result = AggregateResult(status=HealthStatus.UNHEALTHY)
        response = _render(result)
    logger.debug("health.check.completed", status=result.status.value)
    return response


@router.get(LIVENESS_PATH, response_model=HealthReportDTO)
async def liveness() -> Response:
    """Report that the process is up without touching any dependency."""
    return _render(AggregateResult(status=HealthStatus.HEALTHY))


@router.get(INFO_PATH, response_model=ApplicationInfoDTO)
@inject
async def info(
    request: Request,
    get_application_info_use_case: GetApplicationInfoUseCase = Depends(
        Provide["get_application_info_use_case"]
    ),
) -> ApplicationInfoDTO:
    """Return strategic information about the application."""
    started_at = getattr(request.app.state, "started_at", None)
    try:
        info_response = await get_application_info_use_case.execute(started_at)
        logger.debug("info.retrieved", status=info_response.status.value)
        return info_response
    except Exception as exc:  # pragma: no cover
        logger.error("info.fetch.failure", error=str(exc), exc_info=exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to retrieve application info",
        ) from exc
