"""Pydantic models for API responses and form options."""

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models import DISABLED_COLUMN


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    service: str
    version: str


class DetailedHealthResponse(BaseModel):
    """Detailed health check response."""

    status: str
    systems: Dict[str, str]


class ErrorResponse(BaseModel):
    """Standard error response."""

    detail: str


class CompareOptions(BaseModel):
    """Form options of a compare upload, mirroring the CLI flags."""

    model_config = ConfigDict(frozen=True)

    delimiter: str = Field(default=";", min_length=1, max_length=1)
    primary_code_index: int = Field(default=0, ge=0)
    primary_price_index: int = Field(default=1, ge=0)
    secondary_code_index: int = Field(default=0, ge=0)
    secondary_price_index: int = Field(default=1, ge=0)
    dealer_column: int = Field(default=DISABLED_COLUMN, ge=DISABLED_COLUMN)
    description_index: int = Field(default=DISABLED_COLUMN, ge=DISABLED_COLUMN)
    weight_index: int = Field(default=DISABLED_COLUMN, ge=DISABLED_COLUMN)
    worst_price_index: int = Field(default=DISABLED_COLUMN, ge=DISABLED_COLUMN)
    worst_dealer_index: int = Field(default=DISABLED_COLUMN, ge=DISABLED_COLUMN)
    dealer_number: Optional[int] = Field(default=None, ge=0)
    offset_percentage: Optional[float] = Field(default=None, ge=0)
    additional_columns: bool = False


class RepriceOptions(BaseModel):
    """Form options of a reprice upload."""

    model_config = ConfigDict(frozen=True)

    delimiter: str = Field(default=";", min_length=1, max_length=1)
    price_index: int = Field(..., ge=0, description="1-based position of the catalog price column")
    code_index: int = Field(default=0, ge=0)
    percentage: float = 0.0
    dealer_code_index: int = Field(default=0, ge=0)
    dealer_price_index: int = Field(default=1, ge=0)
    dealer_label_index: int = Field(default=DISABLED_COLUMN, ge=DISABLED_COLUMN)
    worst_price_index: int = Field(default=DISABLED_COLUMN, ge=DISABLED_COLUMN)
    worst_dealer_index: int = Field(default=DISABLED_COLUMN, ge=DISABLED_COLUMN)
    include_dealer: bool = False
    additional_columns: bool = False
