"""Helpers shared by the domain services."""

from __future__ import annotations

from typing import Any

from entitykit.core.config import PaginationConfig
from entitykit.core.errors import Failure
from entitykit.core.result import Result, error
from entitykit.repository.pagination import PaginationParams
from entitykit.validation.models import ValidationResult


def resolve_params(
    params: PaginationParams | None, config: PaginationConfig,
) -> PaginationParams:
    """Default page size when *params* is None; clamp page size to the max."""
    if params is None:
        return PaginationParams(page=1, page_size=config.default_page_size)
    if params.page_size > config.max_page_size:
        return params.model_copy(update={"page_size": config.max_page_size})
    return params


def not_found(result: Result[Any, str]) -> Result[Any, Failure]:
    """Lift a repository not-found failure into a service failure."""
    return error(Failure.not_found(result.error or "not found"))


def invalid(validation: ValidationResult) -> Result[Any, Failure]:
    return error(Failure.validation(validation.errors))
