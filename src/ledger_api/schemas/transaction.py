"""Pydantic schemas for the transactions API."""

import uuid
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# --- Request Schemas ---


class TransactionCreate(BaseModel):
    """Request to create a transaction.

    Fields are deliberately loose so that every problem can be reported per
    field by the service instead of failing on the first bad value.
    """

    model_config = ConfigDict(populate_by_name=True)

    merchant: str | None = None
    amount: Decimal | str | None = None
    type: str | None = None
    category: str | None = Field(
        default=None, description="Category id or category name"
    )
    date: str | None = Field(default=None, description="ISO date or date-time")
    time: str | None = Field(default=None, description="ISO time of day")
    tags: list[str] | None = None
    notes: str | None = None
    payment_method: str | None = Field(default=None, alias="paymentMethod")


class TransactionUpdate(TransactionCreate):
    """Request to update a transaction. Only fields sent are changed."""

    pass


# --- Response Schemas ---


class TransactionResponse(BaseModel):
    """A transaction in its denormalized, read-shaped form."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: uuid.UUID
    merchant: str
    amount: float
    type: str
    category: uuid.UUID
    category_icon: str | None = None
    date: str
    tags: list[str]
    notes: str | None = None
    payment_method: str | None = None
    created_at: str
    updated_at: str


class MerchantTotals(BaseModel):
    """Expense count and total for one merchant."""

    count: int
    total: float


class SpendingStatsResponse(BaseModel):
    """Aggregate totals over a date window."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_spent: float
    total_income: float
    category_breakdown: dict[str, float]
    merchant_breakdown: dict[str, MerchantTotals]
