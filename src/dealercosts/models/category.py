"""Cost category definitions."""

from __future__ import annotations

from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class CostCategory(SQLModel, table=True):
    """Label grouping dealership costs for display and export."""

    __tablename__: ClassVar[str] = "cost_category"

    id: Optional[int] = Field(default=None, primary_key=True)
    dealer_id: str = Field(default="default", nullable=False, index=True, max_length=64)
    name: str = Field(index=True, nullable=False, max_length=64)
    description: Optional[str] = Field(default=None, max_length=255)
    color: str = Field(default="#6B7280", nullable=False, max_length=7)
    icon: Optional[str] = Field(default=None, max_length=32)
    is_default: bool = Field(default=False, nullable=False)
