"""Unit tests for the demo customer data generator."""

from datetime import date, timedelta

from line_slack_relay.relay.mock_data import (
    PRODUCT_NAMES,
    generate_customer,
    generate_orders,
    user_seed,
)

TODAY = date(2024, 6, 1)


class TestUserSeed:
    def test_stable(self):
        assert user_seed("U123") == user_seed("U123")

    def test_anagrams_differ(self):
        """IDs with the same characters in another order get different seeds."""
        assert user_seed("Uabc") != user_seed("Ucba")

    def test_non_negative(self):
        assert user_seed("") >= 0


class TestGenerateCustomer:
    """Tests for generate_customer."""

    def test_deterministic(self):
        assert generate_customer("U123", TODAY) == generate_customer("U123", TODAY)

    def test_id_format(self):
        customer = generate_customer("U123", TODAY)

        assert customer.id.startswith("CUST-")
        assert len(customer.id) == len("CUST-") + 6

    def test_dates_not_in_future(self):
        customer = generate_customer("U123", TODAY)

        assert TODAY - timedelta(days=365) <= customer.registration_date <= TODAY
        assert TODAY - timedelta(days=30) <= customer.last_purchase_date <= TODAY

    def test_defaults_to_today(self):
        customer = generate_customer("U123")

        assert customer.last_purchase_date <= date.today()


class TestGenerateOrders:
    """Tests for generate_orders."""

    def test_deterministic(self):
        assert generate_orders("U123", TODAY) == generate_orders("U123", TODAY)

    def test_between_one_and_five_orders(self):
        for user_id in ["U1", "U2", "U3", "Uabcdef", "U" + "9" * 32]:
            orders = generate_orders(user_id, TODAY)
            assert 1 <= len(orders) <= 5

    def test_orders_belong_to_customer(self):
        customer = generate_customer("U123", TODAY)
        orders = generate_orders("U123", TODAY)

        assert all(order.customer_id == customer.id for order in orders)

    def test_totals_match_items(self):
        for order in generate_orders("U123", TODAY):
            assert order.total_amount == sum(item.price * item.quantity for item in order.items)

    def test_items_within_bounds(self):
        for order in generate_orders("U123", TODAY):
            assert 1 <= len(order.items) <= 3
            for item in order.items:
                assert item.name in PRODUCT_NAMES
                assert 1000 <= item.price <= 5500
                assert 1 <= item.quantity <= 3

    def test_order_dates_within_thirty_days(self):
        for order in generate_orders("U123", TODAY):
            assert TODAY - timedelta(days=30) < order.order_date <= TODAY
