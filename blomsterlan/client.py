# blomsterlan/client.py
"""
REST client for the BlomsterLån API.

Reads are cached per client instance, keyed by logical resource name
("customers", ("balances", 3), ...). Every mutation invalidates the keys
whose content it can change, so the next read goes back to the server.
"""

import logging
from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional, Tuple

import httpx

from blomsterlan.models.balances import CustomerBalance
from blomsterlan.models.customers import CustomerOut
from blomsterlan.models.items import ItemOut
from blomsterlan.models.transactions import TransactionOut, TransactionType

logger = logging.getLogger(__name__)

DEFAULT_ERROR = "Ett fel uppstod"


class ApiError(Exception):
    """Non-2xx response from the API."""

    def __init__(self, status_code: int, message: str, fields: Optional[list] = None):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.fields = fields or []


class ResourceCache:
    """
    Fetch-and-cache keyed by resource name.

    A key is either a plain name ("customers") or a tuple whose first element
    is the name (("transactions", 3)). Invalidating a name drops the plain key
    and every tuple key under it.
    """

    def __init__(self):
        self._entries: Dict[Hashable, Any] = {}

    def fetch(self, key: Hashable, loader: Callable[[], Any]) -> Any:
        if key not in self._entries:
            self._entries[key] = loader()
        return self._entries[key]

    def invalidate(self, *names: str) -> None:
        for key in list(self._entries):
            name = key[0] if isinstance(key, tuple) else key
            if name in names:
                del self._entries[key]

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries


def _raise_for_status(response: httpx.Response) -> None:
    if response.is_success:
        return
    try:
        body = response.json()
    except ValueError:
        body = {}
    message = body.get("error") or DEFAULT_ERROR
    logger.warning("%s %s -> %s: %s", response.request.method, response.request.url, response.status_code, message)
    raise ApiError(response.status_code, message, body.get("fields"))


class _Resource:
    def __init__(self, client: "BlomsterLanClient"):
        self._client = client

    @property
    def _cache(self) -> ResourceCache:
        return self._client.cache


class _EntityResource(_Resource):
    """Shared CRUD for customers and items."""

    name: str = ""
    model: Any = None
    # Keys to drop when a record of this kind is edited or deleted.
    dependents: Tuple[str, ...] = ()

    def list(self) -> List[Any]:
        return self._cache.fetch(
            self.name,
            lambda: [self.model.model_validate(r) for r in self._client._get(f"/{self.name}")],
        )

    def get(self, record_id: int) -> Any:
        return self._cache.fetch(
            (self.name, record_id),
            lambda: self.model.model_validate(self._client._get(f"/{self.name}/{record_id}")),
        )

    def create(self, **fields) -> Any:
        record = self.model.model_validate(self._client._post(f"/{self.name}", fields))
        self._cache.invalidate(self.name)
        return record

    def update(self, record_id: int, **fields) -> Any:
        record = self.model.model_validate(
            self._client._patch(f"/{self.name}/{record_id}", fields)
        )
        self._cache.invalidate(self.name, *self.dependents)
        return record

    def delete(self, record_id: int) -> None:
        self._client._delete(f"/{self.name}/{record_id}")
        self._cache.invalidate(self.name, "transactions", *self.dependents)


class CustomersResource(_EntityResource):
    name = "customers"
    model = CustomerOut
    dependents = ("balances",)


class ItemsResource(_EntityResource):
    name = "items"
    model = ItemOut
    dependents = ("balances",)


class TransactionsResource(_Resource):
    def list(self) -> List[TransactionOut]:
        return self._cache.fetch(
            "transactions",
            lambda: [TransactionOut.model_validate(r) for r in self._client._get("/transactions")],
        )

    def list_by_customer(self, customer_id: int) -> List[TransactionOut]:
        return self._cache.fetch(
            ("transactions", customer_id),
            lambda: [
                TransactionOut.model_validate(r)
                for r in self._client._get(f"/transactions/customer/{customer_id}")
            ],
        )

    def create(
        self,
        customer_id: int,
        item_id: int,
        quantity: int,
        type: TransactionType,
        note: Optional[str] = None,
    ) -> TransactionOut:
        payload = {
            "customerId": customer_id,
            "itemId": item_id,
            "quantity": quantity,
            "type": TransactionType(type).value,
            "note": note,
        }
        record = TransactionOut.model_validate(self._client._post("/transactions", payload))
        self._cache.invalidate("transactions", "balances")
        return record


class BalancesResource(_Resource):
    def list(self) -> List[CustomerBalance]:
        return self._cache.fetch(
            "balances",
            lambda: [CustomerBalance.model_validate(r) for r in self._client._get("/balances")],
        )

    def for_customer(self, customer_id: int) -> List[CustomerBalance]:
        return self._cache.fetch(
            ("balances", customer_id),
            lambda: [
                CustomerBalance.model_validate(r)
                for r in self._client._get(f"/balances/{customer_id}")
            ],
        )


class BlomsterLanClient:
    """
    Client for the /api surface.

    Pass either a base URL or a ready httpx.Client (a FastAPI TestClient works
    too). The base URL is the server root; "/api" is appended here.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        http: Optional[httpx.Client] = None,
        timeout: float = 10.0,
    ):
        self._http = http or httpx.Client(base_url=base_url.rstrip("/"), timeout=timeout)
        self.cache = ResourceCache()

        self.customers = CustomersResource(self)
        self.items = ItemsResource(self)
        self.transactions = TransactionsResource(self)
        self.balances = BalancesResource(self)

    # ---- transport ----

    def _get(self, path: str) -> Any:
        response = self._http.get(f"/api{path}")
        _raise_for_status(response)
        return response.json()

    def _post(self, path: str, payload: dict) -> Any:
        response = self._http.post(f"/api{path}", json=payload)
        _raise_for_status(response)
        return response.json()

    def _patch(self, path: str, payload: dict) -> Any:
        response = self._http.patch(f"/api{path}", json=payload)
        _raise_for_status(response)
        return response.json()

    def _delete(self, path: str) -> None:
        response = self._http.delete(f"/api{path}")
        _raise_for_status(response)

    def close(self) -> None:
        self._http.close()

    # ---- multi-item form ----

    def create_transactions(
        self,
        customer_id: int,
        type: TransactionType,
        lines: Iterable[Tuple[int, int]],
        note: Optional[str] = None,
    ) -> List[TransactionOut]:
        """
        Record several items in one submission: one transaction per
        (item_id, quantity) line. Lines with quantity 0 are skipped.
        """
        created = []
        for item_id, quantity in lines:
            if not quantity:
                continue
            created.append(
                self.transactions.create(customer_id, item_id, quantity, type, note)
            )
        return created
