"""Data model of the inquiry relay.

Customer and order records are immutable snapshots fetched fresh for every
inquiry. On the wire they use camelCase keys, matching the customer directory
API.
"""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, model_validator
from pydantic.alias_generators import to_camel


class MembershipTier(StrEnum):
    """Customer loyalty level."""

    BRONZE = "Bronze"
    SILVER = "Silver"
    GOLD = "Gold"
    PLATINUM = "Platinum"


class OrderStatus(StrEnum):
    """Order fulfilment status, valued by its display label."""

    IN_TRANSIT = "配送中"
    PROCESSING = "処理中"
    COMPLETED = "完了"
    CANCELLED = "キャンセル"


class _Record(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class CustomerProfile(_Record):
    id: str = Field(..., min_length=1)
    name: str
    email: str
    phone: str
    address: str
    membership_level: MembershipTier
    registration_date: date
    last_purchase_date: date


class LineItem(_Record):
    id: str
    name: str
    price: PositiveInt
    quantity: PositiveInt

    @property
    def subtotal(self) -> int:
        return self.price * self.quantity


class OrderRecord(_Record):
    id: str = Field(..., min_length=1)
    customer_id: str
    order_date: date
    status: OrderStatus
    items: list[LineItem]
    total_amount: int

    @model_validator(mode="after")
    def _check_total_amount(self):
        expected = sum(item.subtotal for item in self.items)
        if self.total_amount != expected:
            raise ValueError(
                f"total_amount {self.total_amount} does not match line items total {expected}"
            )
        return self


class CustomerRecord(BaseModel):
    """Result of a directory lookup: one profile and its order history."""

    model_config = ConfigDict(frozen=True)

    profile: CustomerProfile
    orders: list[OrderRecord] = Field(default_factory=list)


@dataclass(frozen=True)
class InquiryContext:
    """One inbound text message, valid for a single exchange.

    Attributes:
        sender_id: LINE user ID of the customer
        text: Verbatim message text
        reply_token: One-time LINE reply token; never stored
    """

    sender_id: str
    text: str
    reply_token: str


class CorrelationToken(_Record):
    """Round-trip state linking a Slack staff action to a LINE inquiry.

    Serialized into the notification button value and the reply dialog's
    private metadata; Slack echoes it back, so no session store is needed.
    """

    reply_token: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)

    def serialize(self) -> str:
        return self.model_dump_json(by_alias=True)

    @classmethod
    def parse(cls, raw: str | None) -> "CorrelationToken":
        """Parse a serialized token.

        Raises:
            ValueError: If ``raw`` is missing, not JSON, or lacks a field
        """
        if not raw:
            raise ValueError("correlation token is empty")
        return cls.model_validate_json(raw)
