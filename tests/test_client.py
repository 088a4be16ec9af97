# tests/test_client.py

import pytest

from blomsterlan.client import ApiError, BlomsterLanClient, ResourceCache
from blomsterlan.models.transactions import TransactionType


@pytest.fixture
def api(client):
    return BlomsterLanClient(http=client)


class TestResourceCache:
    def test_fetch_loads_once(self):
        cache = ResourceCache()
        calls = []

        def loader():
            calls.append(1)
            return ["x"]

        assert cache.fetch("customers", loader) == ["x"]
        assert cache.fetch("customers", loader) == ["x"]
        assert len(calls) == 1

    def test_invalidate_drops_plain_and_tuple_keys(self):
        cache = ResourceCache()
        cache.fetch("balances", lambda: [])
        cache.fetch(("balances", 1), lambda: [])
        cache.fetch("items", lambda: [])

        cache.invalidate("balances")

        assert "balances" not in cache
        assert ("balances", 1) not in cache
        assert "items" in cache


class TestClientCrud:
    def test_customer_round_trip(self, api):
        anna = api.customers.create(name="Anna", company="Firma AB")
        assert api.customers.get(anna.id) == anna

        updated = api.customers.update(anna.id, phone="08-123")
        assert updated.phone == "08-123"
        assert updated.company == "Firma AB"

        api.customers.delete(anna.id)
        with pytest.raises(ApiError) as excinfo:
            api.customers.get(anna.id)
        assert excinfo.value.status_code == 404

    def test_validation_error_carries_fields(self, api):
        with pytest.raises(ApiError) as excinfo:
            api.items.create(description="utan namn")
        assert excinfo.value.status_code == 400
        assert [f["field"] for f in excinfo.value.fields] == ["name"]


class TestClientCaching:
    def test_list_is_cached_until_mutation(self, api, client):
        api.customers.create(name="Anna")
        assert [c.name for c in api.customers.list()] == ["Anna"]

        # written behind the client's back: the cached list is served
        client.post("/api/customers", json={"name": "Bertil"})
        assert [c.name for c in api.customers.list()] == ["Anna"]

        api.customers.create(name="Cecilia")
        assert [c.name for c in api.customers.list()] == ["Anna", "Bertil", "Cecilia"]

    def test_transaction_invalidates_balances(self, api):
        anna = api.customers.create(name="Anna")
        hink = api.items.create(name="Hink 10L")
        assert api.balances.list() == []
        assert api.balances.for_customer(anna.id) == []

        api.transactions.create(anna.id, hink.id, 5, TransactionType.DELIVERY)

        assert [b.balance for b in api.balances.list()] == [5]
        assert [b.balance for b in api.balances.for_customer(anna.id)] == [5]
        assert len(api.transactions.list_by_customer(anna.id)) == 1

    def test_renaming_item_invalidates_balances(self, api):
        anna = api.customers.create(name="Anna")
        hink = api.items.create(name="Hink 10L")
        api.transactions.create(anna.id, hink.id, 1, "delivery")
        assert api.balances.list()[0].item_name == "Hink 10L"

        api.items.update(hink.id, name="Hink 12L")
        assert api.balances.list()[0].item_name == "Hink 12L"

    def test_deleting_customer_invalidates_transactions_and_balances(self, api):
        anna = api.customers.create(name="Anna")
        hink = api.items.create(name="Hink 10L")
        api.transactions.create(anna.id, hink.id, 2, "delivery")
        api.transactions.list()
        api.balances.list()

        api.customers.delete(anna.id)

        assert "transactions" not in api.cache
        assert "balances" not in api.cache
        assert api.balances.list() == []


class TestMultiItemForm:
    def test_one_transaction_per_line_skipping_zero(self, api):
        anna = api.customers.create(name="Anna")
        hink = api.items.create(name="Hink 10L")
        vagn = api.items.create(name="Vagn")
        kruka = api.items.create(name="Kruka")

        created = api.create_transactions(
            anna.id,
            TransactionType.DELIVERY,
            [(hink.id, 3), (vagn.id, 0), (kruka.id, 2)],
            note="Leverans",
        )

        assert [t.item_id for t in created] == [hink.id, kruka.id]
        assert all(t.note == "Leverans" for t in created)
        assert {b.item_name: b.balance for b in api.balances.list()} == {"Hink 10L": 3, "Kruka": 2}
