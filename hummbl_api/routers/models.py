# =============================================
# File: hummbl_api/routers/models.py
# Purpose: Catalog browsing endpoints (models and transformations)
# =============================================
from __future__ import annotations
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from hummbl_api.routers.common import enforce_rate_limit
from hummbl_api.services.catalog import (
    get_catalog,
    get_model_by_code,
    models_by_transformation,
    transformation_summaries,
)
from hummbl_api.utils.recommend_core import MentalModel, TransformationType

router = APIRouter(tags=["models"], dependencies=[Depends(enforce_rate_limit)])


class ModelListResponse(BaseModel):
    success: bool = True
    data: List[MentalModel]
    count: int


class ModelResponse(BaseModel):
    success: bool = True
    data: MentalModel


class TransformationListResponse(BaseModel):
    success: bool = True
    data: List[Dict[str, Any]]


@router.get("/v1/transformations", response_model=TransformationListResponse)
def list_transformations() -> TransformationListResponse:
    return TransformationListResponse(data=transformation_summaries())


@router.get("/v1/models", response_model=ModelListResponse)
def list_models(transformation: Optional[str] = None) -> ModelListResponse:
    """All catalog models, optionally restricted to one transformation (e.g. ?transformation=DE)."""
    if transformation:
        try:
            tag = TransformationType(transformation.strip().upper())
        except ValueError:
            raise HTTPException(status_code=400, detail=f"Unknown transformation: {transformation}")
        models = models_by_transformation(tag)
    else:
        models = list(get_catalog())
    return ModelListResponse(data=models, count=len(models))


@router.get("/v1/models/{code}", response_model=ModelResponse)
def get_model(code: str) -> ModelResponse:
    model = get_model_by_code(code)
    if model is None:
        raise HTTPException(status_code=404, detail=f"Model not found: {code.upper()}")
    return ModelResponse(data=model)
