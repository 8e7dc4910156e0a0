"""Shared fixtures for relay unit tests."""

from datetime import date

import pytest

from line_slack_relay.relay.models import (
    CustomerProfile,
    LineItem,
    MembershipTier,
    OrderRecord,
    OrderStatus,
)


@pytest.fixture
def profile() -> CustomerProfile:
    return CustomerProfile(
        id="CUST-000123",
        name="山田 太郎",
        email="taro@example.com",
        phone="090-1234-5678",
        address="東京都渋谷区代々木1-2-3",
        membership_level=MembershipTier.GOLD,
        registration_date=date(2023, 4, 1),
        last_purchase_date=date(2024, 5, 20),
    )


def make_order(order_id: str, order_date: date, status=OrderStatus.COMPLETED, price=1500, quantity=2):
    return OrderRecord(
        id=order_id,
        customer_id="CUST-000123",
        order_date=order_date,
        status=status,
        items=[LineItem(id=f"{order_id}-1", name="商品A", price=price, quantity=quantity)],
        total_amount=price * quantity,
    )


@pytest.fixture
def orders() -> list[OrderRecord]:
    return [
        make_order("ORDER-1", date(2024, 5, 1)),
        make_order("ORDER-2", date(2024, 5, 20), status=OrderStatus.IN_TRANSIT),
        make_order("ORDER-3", date(2024, 4, 10), status=OrderStatus.PROCESSING),
        make_order("ORDER-4", date(2024, 5, 10), price=12000, quantity=1),
    ]


@pytest.fixture
def order_factory():
    """Build a single-item order; the total always matches the item."""
    return make_order
