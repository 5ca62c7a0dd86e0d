"""Application use cases package."""

from .health_use_cases import (
    GetApplicationInfoUseCase,
    GetHealthStatusUseCase,
    redact_credentials,
)

__all__ = ["GetApplicationInfoUseCase", "GetHealthStatusUseCase", "redact_credentials"]
