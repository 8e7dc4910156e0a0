"""Customer directory lookup.

Fetches a customer's profile and order history for a LINE sender. The two
reads are independent and run concurrently; the combined lookup fails as a
whole if either read fails.
"""

import asyncio
from abc import ABC, abstractmethod
from datetime import date

import httpx
from pydantic import TypeAdapter, ValidationError

from line_slack_relay.platform.observability.logging import get_logger
from line_slack_relay.relay.exceptions import LookupFailure
from line_slack_relay.relay.mock_data import generate_customer, generate_orders
from line_slack_relay.relay.models import CustomerProfile, CustomerRecord, OrderRecord

logger = get_logger(__name__)

_orders_adapter = TypeAdapter(list[OrderRecord])


class CustomerDirectory(ABC):
    """Base class for customer directory backends."""

    @abstractmethod
    async def fetch_profile(self, sender_id: str) -> CustomerProfile:
        """Fetch the profile of a sender."""

    @abstractmethod
    async def fetch_orders(self, sender_id: str) -> list[OrderRecord]:
        """Fetch the order history of a sender, possibly empty."""

    async def fetch_profile_and_orders(self, sender_id: str) -> CustomerRecord:
        """Fetch profile and order history concurrently.

        Raises:
            LookupFailure: If the sender ID is empty or either fetch fails
        """
        if not sender_id:
            raise LookupFailure("sender id is empty")

        try:
            async with asyncio.TaskGroup() as tg:
                profile_task = tg.create_task(self.fetch_profile(sender_id))
                orders_task = tg.create_task(self.fetch_orders(sender_id))
        except ExceptionGroup as eg:
            cause = eg.exceptions[0]
            if isinstance(cause, LookupFailure):
                raise cause
            raise LookupFailure(str(cause), sender_id=sender_id) from eg

        record = CustomerRecord(profile=profile_task.result(), orders=orders_task.result())
        logger.info(
            "customer_lookup_complete",
            sender_id=sender_id,
            customer_id=record.profile.id,
            order_count=len(record.orders),
        )
        return record


class HttpCustomerDirectory(CustomerDirectory):
    """Directory backed by the customer HTTP API.

    Expects ``GET {base_url}/customer/{id}`` and ``GET {base_url}/orders/{id}``
    returning camelCase JSON.
    """

    def __init__(self, http_client: httpx.AsyncClient, base_url: str, timeout: float = 10.0):
        self._client = http_client
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    async def _get_json(self, path: str, sender_id: str):
        url = f"{self._base_url}/{path}/{sender_id}"
        try:
            response = await self._client.get(url, timeout=self._timeout)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise LookupFailure(
                f"GET {path} returned {e.response.status_code}", sender_id=sender_id
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise LookupFailure(f"GET {path} failed: {e}", sender_id=sender_id) from e

    async def fetch_profile(self, sender_id: str) -> CustomerProfile:
        payload = await self._get_json("customer", sender_id)
        try:
            return CustomerProfile.model_validate(payload)
        except ValidationError as e:
            raise LookupFailure(f"invalid customer payload: {e}", sender_id=sender_id) from e

    async def fetch_orders(self, sender_id: str) -> list[OrderRecord]:
        payload = await self._get_json("orders", sender_id)
        try:
            return _orders_adapter.validate_python(payload)
        except ValidationError as e:
            raise LookupFailure(f"invalid orders payload: {e}", sender_id=sender_id) from e


class MockCustomerDirectory(CustomerDirectory):
    """In-process directory serving generated demo data."""

    def __init__(self, today: date | None = None):
        self._today = today

    async def fetch_profile(self, sender_id: str) -> CustomerProfile:
        return generate_customer(sender_id, self._today)

    async def fetch_orders(self, sender_id: str) -> list[OrderRecord]:
        return generate_orders(sender_id, self._today)
