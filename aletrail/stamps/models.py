from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ValidationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    brewery_id: str = Field(..., min_length=1, alias="breweryId")
    code: str = Field(..., min_length=1)
    user_id: str | None = Field(default=None, alias="userId")


class ValidationResult(BaseModel):
    valid: bool
    stamp_created: bool = False


class ValidationResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    valid: bool
    message: str
    brewery_id: str | None = Field(default=None, alias="breweryId")
    stamp_created: bool = Field(default=False, alias="stampCreated")
