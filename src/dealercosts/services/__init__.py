"""Service module exports."""

from . import (
    aggregation,
    cost_cache,
    costs,
    export_csv,
    projections,
    proration,
    windows,
)
from .projections import project

__all__ = [
    "aggregation",
    "cost_cache",
    "costs",
    "export_csv",
    "project",
    "projections",
    "proration",
    "windows",
]
