"""
FastAPI dependency injection module.

Request body validation with per-route status codes.
"""

from collections.abc import Callable
from typing import Any, TypeVar

from fastapi import Body
from pydantic import BaseModel, ValidationError

from ..error_handlers import PayloadValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)

# =============================================================================
# Body Validation
# =============================================================================


def validated_body(model: type[ModelT], status_code: int = 422) -> Callable[..., ModelT]:
    """
    Build a dependency that validates the JSON body against ``model``.

    FastAPI's own body validation always answers 422; some routes report
    field errors as 400, so the body is taken raw and validated here.

    Usage:
        @router.put("/experience")
        def add_experience(payload: ExperienceRequest = Depends(validated_body(ExperienceRequest, 400))):
            ...
    """

    def dependency(payload: dict[str, Any] | None = Body(None)) -> ModelT:
        try:
            return model.model_validate(payload or {})
        except ValidationError as exc:
            raise PayloadValidationError.from_pydantic(exc, status_code) from None

    return dependency


__all__ = [
    "validated_body",
]
