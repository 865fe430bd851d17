"""Pydantic schemas for categories, accounts and tags."""

import uuid
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

CategoryType = Literal["expense", "income"]
AccountType = Literal["checking", "savings", "credit", "cash", "other"]


# --- Category Schemas ---


class CategoryCreate(BaseModel):
    """Request to create a category."""

    name: str = Field(..., min_length=1, max_length=100)
    type: CategoryType
    icon: str | None = None
    color: str | None = None


class CategoryUpdate(BaseModel):
    """Request to update a category."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    type: CategoryType | None = None
    icon: str | None = None
    color: str | None = None


class CategoryResponse(BaseModel):
    """Response with category details."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    type: str
    icon: str | None = None
    color: str | None = None


# --- Account Schemas ---


class AccountCreate(BaseModel):
    """Request to create an account."""

    name: str = Field(..., min_length=1, max_length=100)
    type: AccountType


class AccountUpdate(BaseModel):
    """Request to update an account."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    type: AccountType | None = None


class AccountResponse(BaseModel):
    """Response with account details."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    type: str


# --- Tag Schemas ---


class TagCreate(BaseModel):
    """Request to create (or fetch) a tag by name."""

    name: str = Field(..., min_length=1, max_length=50)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value: object) -> object:
        """Trim surrounding whitespace before the length check."""
        return value.strip() if isinstance(value, str) else value


class TagResponse(BaseModel):
    """Response with tag details."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
