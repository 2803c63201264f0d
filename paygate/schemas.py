"""
Canonical, provider-agnostic data model.

Adapters translate between these models and each provider's wire format.
"""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ChannelCategory(str, Enum):
    VIRTUAL_ACCOUNT = "virtual-account"
    STORE = "store"
    E_WALLET = "e-wallet"
    UNKNOWN = "unknown"


class PaymentType(str, Enum):
    URL = "url"
    CODE = "code"


class TransactionState(str, Enum):
    """Well-known states. Transaction.state keeps any other provider value as-is."""
    UNPAID = "UNPAID"
    PAID = "PAID"
    EXPIRED = "EXPIRED"
    FAILED = "FAILED"
    REFUND = "REFUND"


class ChannelFee(BaseModel):
    model_config = ConfigDict(frozen=True)

    flat: float = 0
    percent: float = 0
    min: float = 0
    max: float = 0


class Channel(BaseModel):
    """Payment method offered by a provider. Snapshot, never persisted."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    category: ChannelCategory = ChannelCategory.UNKNOWN
    fee: ChannelFee = Field(default_factory=ChannelFee)
    image_url: Optional[str] = None


class TransactionItem(BaseModel):
    sku: str
    price: int = Field(ge=0)      # smallest currency unit
    quantity: int = Field(gt=0)


class Customer(BaseModel):
    name: str
    email: str
    phone: Optional[str] = None


class CreateTransaction(BaseModel):
    id: str                       # caller-chosen, unique per merchant
    channel: str
    items: List[TransactionItem]
    customer: Optional[Customer] = None

    @field_validator("items")
    @classmethod
    def items_not_empty(cls, v):
        if not v:
            raise ValueError("at least one item is required")
        return v

    @property
    def amount(self) -> int:
        """Sum of price * quantity, before any provider fee."""
        return sum(item.price * item.quantity for item in self.items)


class Payment(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    type: PaymentType
    data: str


class Transaction(BaseModel):
    id: str                       # echoes CreateTransaction.id
    payment_id: str               # provider reference
    amount: int                   # provider total, fees included
    items: List[TransactionItem] = Field(default_factory=list)
    customer: Optional[Customer] = None
    state: str
    payments: List[Payment]

    @field_validator("payments")
    @classmethod
    def payments_not_empty(cls, v):
        if not v:
            raise ValueError("a transaction needs at least one payment instruction")
        return v

    def payment(self, name: str, payment_type: Optional[PaymentType] = None) -> Optional[Payment]:
        from .utils import payment_is
        return next((p for p in self.payments if payment_is(p, name, payment_type)), None)
