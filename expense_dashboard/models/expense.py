from datetime import date as Date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Annotated, Literal, Optional
from uuid import uuid4

from pydantic import AfterValidator, BaseModel, Field

ExpenseCategory = Literal[
    "food",
    "transportation",
    "entertainment",
    "utilities",
    "shopping",
    "health",
    "education",
    "other",
]


def _clean_title(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("Title is required")
    return value


def _round_amount(value: float) -> float:
    rounded = float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))
    if rounded <= 0:
        raise ValueError("Amount must be greater than 0")
    return rounded


def _not_in_future(value: Date) -> Date:
    if value > Date.today():
        raise ValueError("Date cannot be in the future")
    return value


Title = Annotated[str, Field(max_length=200), AfterValidator(_clean_title)]
Amount = Annotated[float, Field(gt=0), AfterValidator(_round_amount)]
ExpenseDate = Annotated[Date, AfterValidator(_not_in_future)]


class ExpenseCreate(BaseModel):
    title: Title
    amount: Amount
    date: ExpenseDate
    category: ExpenseCategory


class ExpenseUpdate(BaseModel):
    title: Optional[Title] = None
    amount: Optional[Amount] = None
    date: Optional[ExpenseDate] = None
    category: Optional[ExpenseCategory] = None


class ExpenseInDB(BaseModel):
    id: str = Field(default_factory=lambda: uuid4().hex)
    title: str
    amount: float
    date: Date
    category: ExpenseCategory
    created_at: str = Field(default_factory=lambda: datetime.utcnow().isoformat())
    updated_at: str = Field(default_factory=lambda: datetime.utcnow().isoformat())


class ExpensePublic(BaseModel):
    id: str
    title: str
    amount: float
    date: Date
    category: ExpenseCategory
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
