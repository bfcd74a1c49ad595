"""DealerCosts: dealership cost tracking and cost projections."""

from __future__ import annotations

from .config import BaseConfig, DevConfig
from .services.projections import project

__all__ = ["BaseConfig", "DevConfig", "project"]
