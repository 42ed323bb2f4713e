# =============================================
# File: hummbl_api/services/catalog.py
# Purpose: Load the Base120 mental-model catalog from JSON and expose read-only lookups
# =============================================

from __future__ import annotations
import json
import os
from typing import Any, Dict, List, Optional, Tuple

from loguru import logger
from pydantic import ValidationError

from hummbl_api.config import catalog_path
from hummbl_api.utils.recommend_core import MentalModel, TransformationType

Catalog = Tuple[MentalModel, ...]


class CatalogError(ValueError):
    """The catalog file is missing, malformed or inconsistent."""


def load_catalog(path: str) -> Catalog:
    """
    Read and validate a catalog file.

    The file holds a JSON array of {code, name, definition, priority}
    records. Codes must be unique; order is preserved.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except FileNotFoundError as e:
        raise CatalogError(f"catalog not found: {path}") from e
    except json.JSONDecodeError as e:
        raise CatalogError(f"catalog is not valid JSON: {path}: {e}") from e

    if not isinstance(raw, list):
        raise CatalogError("catalog must be a JSON array of models")

    models: List[MentalModel] = []
    seen = set()
    for i, rec in enumerate(raw):
        try:
            model = MentalModel.model_validate(rec)
        except ValidationError as e:
            raise CatalogError(f"invalid model at index {i}: {e}") from e
        if model.code in seen:
            raise CatalogError(f"duplicate model code: {model.code}")
        seen.add(model.code)
        models.append(model)

    logger.info(f"[catalog] loaded {len(models)} models from {path}")
    return tuple(models)


_catalog: Optional[Catalog] = None
_index: Dict[str, MentalModel] = {}


def get_catalog() -> Catalog:
    """Process-wide catalog, loaded on first use."""
    global _catalog, _index
    if _catalog is None:
        models = load_catalog(catalog_path())
        _index = {m.code: m for m in models}
        _catalog = models
    return _catalog


def reset_catalog() -> None:
    """For tests: forget the loaded catalog so the next call reloads it."""
    global _catalog, _index
    _catalog = None
    _index = {}


def get_model_by_code(code: str) -> Optional[MentalModel]:
    get_catalog()
    return _index.get((code or "").strip().upper())


def models_by_transformation(tag: TransformationType) -> List[MentalModel]:
    return [m for m in get_catalog() if m.transformation == tag]


def transformation_summaries() -> List[Dict[str, Any]]:
    """Key, display name, description and model count for each transformation."""
    out: List[Dict[str, Any]] = []
    for tag in TransformationType:
        out.append({
            "key": tag.value,
            "name": tag.display_name,
            "description": tag.description,
            "model_count": len(models_by_transformation(tag)),
        })
    return out


def catalog_version() -> str:
    """Short token that changes whenever the catalog file changes (used in cache keys)."""
    try:
        return str(int(os.path.getmtime(catalog_path())))
    except OSError:
        return "0"
