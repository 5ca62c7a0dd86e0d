"""Rendering of aggregated health into the /healthz wire format."""

from __future__ import annotations

from typing import Dict, Mapping, Optional, Tuple

from vitals.application.dtos.health_dto import HealthReportDTO
from vitals.domain.entities.health import AggregateResult, HealthStatus

CONTENT_TYPE = "application/json"

DEFAULT_STATUS_CODES: Mapping[HealthStatus, int] = {
    HealthStatus.HEALTHY: 200,
    HealthStatus.DEGRADED: 200,
    HealthStatus.UNHEALTHY: 503,
}


def status_code_for(
    status: HealthStatus,
    status_codes: Optional[Mapping[HealthStatus, int]] = None,
) -> int:
    codes: Dict[HealthStatus, int] = dict(DEFAULT_STATUS_CODES)
    codes.update(status_codes or {})
    return codes[status]


def write(
    result: AggregateResult,
    *,
    status_codes: Optional[Mapping[HealthStatus, int]] = None,
) -> Tuple[bytes, int]:
    """Render ``result`` as UTF-8 JSON and pick the HTTP status code.

    Every entry is written, healthy ones included, so consumers can tell a
    probe that passed from one that never ran. Diagnostic data values are
    coerced to strings.

    Args:
        result: Aggregated health of one run.
        status_codes: Optional overrides of the default status mapping
            (Healthy and Degraded answer 200, Unhealthy answers 503).

    Returns:
        Tuple of response body and HTTP status code.
    """
    report = HealthReportDTO.from_domain(result)
    body = report.model_dump_json(by_alias=True).encode("utf-8")
    return body, status_code_for(result.status, status_codes)
