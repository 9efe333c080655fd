"""
EMA query utilities.

This package fetches the European Medicines Agency JSON reports and turns
loosely-typed query parameters into filtered, uniform result envelopes.
"""

# Type exports
from .types import EmaRecord, MedicineFound, MedicineNotFound, ResultEnvelope

# Client exports
from .client import (
    EMA_BASE_URL,
    REQUEST_TIMEOUT,
    EmaApiError,
    EmaClient,
    EmaHttpError,
    EmaNetworkError,
    EmaRequestError,
    EmaTimeoutError,
    FetchMode,
    InvalidResponseShapeError,
    build_url,
    unwrap_records,
)

# Date exports
from .dates import parse_ema_date

# Validation exports
from .validators import LIMIT_MAX, LIMIT_MIN, YEAR_MIN, ParamRule, validate_params

# Filter exports
from .filters import FieldFilter, apply_filters

# Dataset exports
from .datasets import DATASETS, DatasetSpec

# Query exports
from .queries import (
    METHODS,
    UnknownMethodError,
    get_medicine_by_name,
    invoke,
    query_dataset,
)

__all__ = [
    # Types
    "EmaRecord",
    "ResultEnvelope",
    "MedicineFound",
    "MedicineNotFound",
    # Client
    "EMA_BASE_URL",
    "REQUEST_TIMEOUT",
    "EmaClient",
    "FetchMode",
    "EmaApiError",
    "EmaTimeoutError",
    "EmaHttpError",
    "EmaNetworkError",
    "EmaRequestError",
    "InvalidResponseShapeError",
    "build_url",
    "unwrap_records",
    # Dates
    "parse_ema_date",
    # Validation
    "ParamRule",
    "validate_params",
    "LIMIT_MIN",
    "LIMIT_MAX",
    "YEAR_MIN",
    # Filters
    "FieldFilter",
    "apply_filters",
    # Datasets
    "DatasetSpec",
    "DATASETS",
    # Queries
    "METHODS",
    "UnknownMethodError",
    "invoke",
    "query_dataset",
    "get_medicine_by_name",
]
