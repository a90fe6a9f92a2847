from typing import Any, Dict, List
import json
import logging

from langchain_core.prompts import PromptTemplate
from pydantic import ValidationError

from app.schemas import Insights, SaleRecord

logger = logging.getLogger(__name__)

INVALID_INPUT_MESSAGE = "Invalid input: Expected an array of sales records"
INVALID_RECORD_MESSAGE = "Invalid sale record"

INSIGHTS_PROMPT = PromptTemplate(
    input_variables=["total_sales", "average_sale", "best_category", "category_breakdown"],
    template="""
    Based on the sales data, here are some key insights:
    - Total sales: ${total_sales}
    - Average sales per transaction: ${average_sale}
    - Best performing product category: {best_category}
    - Breakdown per category: {category_breakdown}

    Summarize this data in a business-friendly tone.
    """
)


class SalesValidationError(ValueError):
    """Base class for client errors; ``message`` is safe to return to the caller"""
    message = INVALID_INPUT_MESSAGE

    def __init__(self):
        super().__init__(self.message)


class InvalidSalesInputError(SalesValidationError):
    message = INVALID_INPUT_MESSAGE


class InvalidSaleRecordError(SalesValidationError):
    message = INVALID_RECORD_MESSAGE


def validate_sales(payload: Any) -> List[SaleRecord]:
    """
    Check that the payload is a non-empty list of well-formed sale records.

    Records are validated in order and the first bad one aborts the whole
    batch. The raised error does not say which record or field failed.

    Raises:
        InvalidSalesInputError: payload is not a list or is empty
        InvalidSaleRecordError: a record has a bad category or amount
    """
    if not isinstance(payload, list) or not payload:
        raise InvalidSalesInputError()

    records = []
    for index, item in enumerate(payload):
        try:
            records.append(SaleRecord.model_validate(item))
        except ValidationError as e:
            logger.debug(f"Rejected sale record at index {index}: {e.error_count()} error(s)")
            raise InvalidSaleRecordError() from e
    return records


def compute_insights(records: List[SaleRecord]) -> Insights:
    """Aggregate totals per category and pick the best performer"""
    if not records:
        raise InvalidSalesInputError()

    total_sales = 0.0
    category_sales: Dict[str, float] = {}
    for sale in records:
        total_sales += sale.amount
        category_sales[sale.category] = category_sales.get(sale.category, 0) + sale.amount

    # Strictly greater keeps the earliest category on ties
    best_category, best_amount = "", 0.0
    for category, amount in category_sales.items():
        if amount > best_amount:
            best_category, best_amount = category, amount

    return Insights(
        total_sales=total_sales,
        average_sale=total_sales / len(records),
        category_sales=category_sales,
        best_performing_category=best_category,
    )


def build_prompt(insights: Insights) -> str:
    """Render the insights into the summarization prompt"""
    return INSIGHTS_PROMPT.format(
        total_sales=f"{insights.total_sales:.2f}",
        average_sale=f"{insights.average_sale:.2f}",
        best_category=insights.best_performing_category,
        category_breakdown=json.dumps(insights.category_sales, indent=2, ensure_ascii=False),
    )
