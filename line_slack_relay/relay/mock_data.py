"""Deterministic demo customer data keyed by LINE user ID.

Stands in for the real customer and order systems. The same user ID and
reference date always produce the same profile and orders.
"""

import hashlib
from datetime import date, timedelta

from line_slack_relay.relay.models import (
    CustomerProfile,
    LineItem,
    MembershipTier,
    OrderRecord,
    OrderStatus,
)

MEMBERSHIP_TIERS = list(MembershipTier)
ORDER_STATUSES = list(OrderStatus)
PRODUCT_NAMES = ["商品A", "商品B", "商品C", "商品D", "商品E"]


def user_seed(user_id: str) -> int:
    """Stable non-negative integer derived from a user ID."""
    digest = hashlib.sha256(user_id.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big")


def generate_customer(user_id: str, today: date | None = None) -> CustomerProfile:
    today = today or date.today()
    seed = user_seed(user_id)
    n = seed % 1000

    return CustomerProfile(
        id=f"CUST-{seed % 1_000_000:06d}",
        name=f"顧客 {n}",
        email=f"customer{n}@example.com",
        phone=f"090-{1000 + seed % 9000}-{1000 + (seed * 2) % 9000}",
        address=f"東京都渋谷区代々木{seed % 10}-{seed % 100}-{n}",
        membership_level=MEMBERSHIP_TIERS[seed % len(MEMBERSHIP_TIERS)],
        registration_date=today - timedelta(days=seed % 365),
        last_purchase_date=today - timedelta(days=seed % 30),
    )


def generate_orders(user_id: str, today: date | None = None) -> list[OrderRecord]:
    """Generate 1-5 orders of 1-3 line items each, newest dates within 30 days."""
    today = today or date.today()
    seed = user_seed(user_id)
    customer = generate_customer(user_id, today)

    orders = []
    for i in range(seed % 5 + 1):
        items = []
        for j in range((seed >> (4 + i)) % 3 + 1):
            k = seed + i * 7 + j
            items.append(
                LineItem(
                    id=f"ITEM-{k % 1_000_000:06d}",
                    name=PRODUCT_NAMES[k % len(PRODUCT_NAMES)],
                    price=1000 + (k % 10) * 500,
                    quantity=k % 3 + 1,
                )
            )

        orders.append(
            OrderRecord(
                id=f"ORDER-{(seed + i) % 1_000_000:06d}",
                customer_id=customer.id,
                order_date=today - timedelta(days=(seed + i * 11) % 30),
                status=ORDER_STATUSES[(seed + i) % len(ORDER_STATUSES)],
                items=items,
                total_amount=sum(item.subtotal for item in items),
            )
        )

    return orders
