from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class RecommendationResult(BaseModel):
    recommendations: list[dict[str, Any]] = Field(default_factory=list)
    message: str


class RecommendationResponse(BaseModel):
    success: bool = True
    recommendations: list[dict[str, Any]]
    message: str
    visited: int
    total: int
