from typing import Dict

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SaleRecord(BaseModel):
    """A single transaction as posted by the client"""
    category: str = Field(..., min_length=1, strict=True)
    amount: float = Field(..., ge=0, strict=True, allow_inf_nan=False)


class Insights(BaseModel):
    """Aggregate statistics computed from a batch of sale records"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_sales: float
    average_sale: float
    category_sales: Dict[str, float]
    best_performing_category: str


class SalesInsightsResponse(BaseModel):
    """Response model for the sales insights endpoint"""
    insights: Insights
    summary: str


class ErrorResponse(BaseModel):
    error: str
