from __future__ import annotations

from fastapi import APIRouter, Depends

from ..data import get_store
from ..data.store import TrailStore
from ..stamps.models import ValidationRequest, ValidationResponse
from ..stamps.validation import list_user_stamps, validate_code

router = APIRouter(prefix="/api/validate", tags=["validation"])


@router.post("", response_model=ValidationResponse, response_model_by_alias=True)
def validate(body: ValidationRequest, store: TrailStore = Depends(get_store)) -> ValidationResponse:
    result = validate_code(store, body.brewery_id, body.code, body.user_id)

    if not result.valid:
        return ValidationResponse(valid=False, message="Invalid code")

    if body.user_id and not result.stamp_created:
        message = "Stamp already collected"
    else:
        message = "Code validated successfully!"

    return ValidationResponse(
        valid=True,
        message=message,
        brewery_id=body.brewery_id,
        stamp_created=result.stamp_created,
    )


@router.get("/stamps/{user_id}")
def user_stamps(
    user_id: str,
    trail: str | None = None,
    store: TrailStore = Depends(get_store),
) -> dict:
    return {"success": True, "stamps": list_user_stamps(store, user_id, trail)}
