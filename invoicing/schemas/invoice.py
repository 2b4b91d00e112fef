from datetime import date
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

InvoiceType = Literal["debit", "credit"]
InvoiceState = Literal[
    "booked",
    "canceled",
    "paid",
    "reactivated",
    "written_off",
    "reminded",
    "2xreminded",
    "3xreminded",
    "encashment",
]


class LineItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    times: float
    quantity: str
    price: float
    amount: float
    credit_account_code: str
    debit_account_code: str


class LineItemIn(BaseModel):
    id: int | None = Field(None, description="Existing line item to update; omit to create a new one")
    title: str = Field(..., min_length=1, max_length=255)
    times: Decimal = Field(default=Decimal("1"), description="Multiplier applied to price")
    quantity: str = Field(default="x", min_length=1, max_length=20, description="Unit label, e.g. 'x' or 'h'")
    price: Decimal
    credit_account_code: str = Field(..., min_length=1, max_length=20)
    debit_account_code: str = Field(..., min_length=1, max_length=20)


class Invoice(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    type: InvoiceType
    title: str
    state: str
    value_date: date
    due_date: date
    duration_from: date | None = None
    duration_to: date | None = None
    text: str | None = None
    remarks: str | None = None
    amount: float
    company_id: int
    customer_id: int
    line_items: list[LineItem] = []


class _InvoiceFields(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    state: InvoiceState
    value_date: date
    due_date: date
    duration_from: date | None = None
    duration_to: date | None = None
    text: str | None = None
    remarks: str | None = None

    @model_validator(mode="after")
    def validate_duration_order(self):
        """Ensure duration_to doesn't precede duration_from."""
        if self.duration_from is not None and self.duration_to is not None:
            if self.duration_to < self.duration_from:
                raise ValueError(
                    f"duration_to ({self.duration_to}) cannot precede duration_from ({self.duration_from})"
                )
        return self


class InvoiceCreate(_InvoiceFields):
    address_id: int = Field(..., description="Customer (debit) or supplier company (credit)")
    type: InvoiceType
    line_items: list[LineItemIn] = Field(default_factory=list)


class InvoiceUpdate(_InvoiceFields):
    # Counterparty and subtype are fixed at creation; accepted here and ignored.
    address_id: int | None = None
    type: InvoiceType | None = None
    line_items: list[LineItemIn] | None = Field(
        None, description="Full list of line items; omit to leave line items untouched"
    )
