"""Input Schemas: Pydantic models with field-level validation for command input.

Invariants:
    - Text fields are stripped; required text fields reject empty/whitespace input
    - Passwords are at most MAX_PASSWORD_BYTES once UTF-8 encoded
    - Prices are finite decimals > 0 when listing or editing, >= 0 as search bounds
    - SearchFilters rejects min_price > max_price
    - ReviewInput.rating is an integer in 1..5
    - parse_input() turns any ValidationError into InvalidArgumentError (first error only)
"""

from decimal import Decimal
from typing import TypeVar

from pydantic import (
    BaseModel, Field, ValidationError, field_validator, model_validator,
)

from market.core.domain_types import (
    UserRole, MIN_RATING, MAX_RATING, MAX_PASSWORD_BYTES,
)
from market.core.errors import InvalidArgumentError

ModelT = TypeVar("ModelT", bound=BaseModel)

ROLE_CHOICES = {"1": UserRole.BUYER, "2": UserRole.SELLER}


def _strip_required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("cannot be empty")
    return v


def _finite(v: Decimal | None) -> Decimal | None:
    if v is not None and not v.is_finite():
        raise ValueError("must be a finite number")
    return v


class RegistrationForm(BaseModel):
    """Self-service registration. Only Buyer and Seller can be chosen."""
    username: str = Field(max_length=64)
    password: str
    confirm_password: str
    role_choice: str
    email: str | None = Field(None, max_length=254)
    phone: str | None = Field(None, max_length=32)

    @field_validator("username", "password")
    @classmethod
    def strip_required(cls, v: str) -> str:
        return _strip_required(v)

    @field_validator("password")
    @classmethod
    def fits_hasher(cls, v: str) -> str:
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"must be at most {MAX_PASSWORD_BYTES} bytes")
        return v

    @field_validator("email", "phone")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None

    @field_validator("role_choice")
    @classmethod
    def known_role(cls, v: str) -> str:
        v = v.strip()
        if v not in ROLE_CHOICES:
            raise ValueError("choose 1 (Buyer) or 2 (Seller)")
        return v

    @model_validator(mode="after")
    def passwords_match(self) -> "RegistrationForm":
        if self.password != self.confirm_password.strip():
            raise ValueError("passwords do not match")
        return self

    @property
    def role(self) -> UserRole:
        return ROLE_CHOICES[self.role_choice]


class ProductForm(BaseModel):
    """New listing."""
    name: str = Field(max_length=200)
    description: str = Field(max_length=2000)
    category: str = Field(max_length=100)
    price: Decimal = Field(gt=0)

    @field_validator("name", "description", "category")
    @classmethod
    def strip_required(cls, v: str) -> str:
        return _strip_required(v)

    @field_validator("price")
    @classmethod
    def finite_price(cls, v: Decimal) -> Decimal:
        return _finite(v)


class ProductEdit(BaseModel):
    """Listing edit. Blank answers keep the current value (None)."""
    name: str | None = Field(None, max_length=200)
    description: str | None = Field(None, max_length=2000)
    category: str | None = Field(None, max_length=100)
    price: Decimal | None = Field(None, gt=0)

    @field_validator("name", "description", "category", "price", mode="before")
    @classmethod
    def blank_to_none(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            return None
        return v.strip() if isinstance(v, str) else v

    @field_validator("price")
    @classmethod
    def finite_price(cls, v: Decimal | None) -> Decimal | None:
        return _finite(v)


class SearchFilters(BaseModel):
    """search [keyword] [min_price] [max_price]"""
    keyword: str = ""
    min_price: Decimal | None = Field(None, ge=0)
    max_price: Decimal | None = Field(None, ge=0)

    @field_validator("min_price", "max_price")
    @classmethod
    def finite_bounds(cls, v: Decimal | None) -> Decimal | None:
        return _finite(v)

    @model_validator(mode="after")
    def ordered_range(self) -> "SearchFilters":
        if (
            self.min_price is not None
            and self.max_price is not None
            and self.min_price > self.max_price
        ):
            raise ValueError("min_price must not exceed max_price")
        return self


class ReviewInput(BaseModel):
    """review add <order_id> <rating> <comment...>"""
    order_id: str = Field(min_length=1)
    rating: int = Field(ge=MIN_RATING, le=MAX_RATING)
    comment: str = Field(min_length=1, max_length=1000)


def parse_input(model: type[ModelT], **fields: object) -> ModelT:
    """Validate fields into model; the first validation error becomes InvalidArgumentError."""
    try:
        return model(**fields)
    except ValidationError as e:
        first = e.errors()[0]
        loc = ".".join(str(p) for p in first["loc"])
        msg = first["msg"].removeprefix("Value error, ")
        message = f"Invalid {loc}: {msg}" if loc else f"Invalid input: {msg}"
        raise InvalidArgumentError(message, loc or None) from e
