# tests/test_api.py

from conftest import post_transaction


class TestHealth:
    def test_health(self, client):
        r = client.get("/health")
        assert r.status_code == 200
        assert r.json() == {"status": "ok"}


class TestCustomersApi:
    def test_create_returns_201_with_id(self, client):
        r = client.post("/api/customers", json={"name": "Anna", "email": "anna@example.se"})
        assert r.status_code == 201
        data = r.json()
        assert isinstance(data["id"], int)
        assert data["name"] == "Anna"
        assert data["email"] == "anna@example.se"
        assert data["company"] is None

    def test_create_without_name_is_400(self, client):
        r = client.post("/api/customers", json={"company": "Firma AB"})
        assert r.status_code == 400
        body = r.json()
        assert "error" in body
        assert [f["field"] for f in body["fields"]] == ["name"]

    def test_non_object_body_is_400(self, client):
        r = client.post("/api/customers", json=["Anna"])
        assert r.status_code == 400
        assert r.json()["fields"][0]["field"] == "body"

    def test_list_and_get(self, client, anna):
        r = client.get("/api/customers")
        assert r.status_code == 200
        assert r.json() == [anna]

        r = client.get(f"/api/customers/{anna['id']}")
        assert r.status_code == 200
        assert r.json() == anna

    def test_get_missing_is_404(self, client):
        r = client.get("/api/customers/999")
        assert r.status_code == 404
        assert r.json()["error"]

    def test_non_integer_id_is_400(self, client):
        r = client.get("/api/customers/abc")
        assert r.status_code == 400

    def test_patch_changes_only_given_field(self, client, anna):
        r = client.patch(f"/api/customers/{anna['id']}", json={"phone": "08-123"})
        assert r.status_code == 200
        assert r.json() == {**anna, "phone": "08-123"}
        assert client.get(f"/api/customers/{anna['id']}").json()["phone"] == "08-123"

    def test_patch_missing_is_404(self, client):
        r = client.patch("/api/customers/999", json={"phone": "08-123"})
        assert r.status_code == 404

    def test_patch_invalid_is_400(self, client, anna):
        r = client.patch(f"/api/customers/{anna['id']}", json={"email": "nope"})
        assert r.status_code == 400
        assert r.json()["fields"][0]["field"] == "email"

    def test_delete_is_204_even_when_absent(self, client, anna):
        r = client.delete(f"/api/customers/{anna['id']}")
        assert r.status_code == 204
        assert client.get(f"/api/customers/{anna['id']}").status_code == 404

        r = client.delete(f"/api/customers/{anna['id']}")
        assert r.status_code == 204


class TestItemsApi:
    def test_crud_cycle(self, client, hink):
        assert client.get("/api/items").json() == [hink]

        r = client.patch(f"/api/items/{hink['id']}", json={"description": "Zinkhink"})
        assert r.status_code == 200
        assert r.json()["description"] == "Zinkhink"
        assert r.json()["category"] == "Hinkar"

        assert client.delete(f"/api/items/{hink['id']}").status_code == 204
        assert client.get(f"/api/items/{hink['id']}").status_code == 404
        assert client.delete("/api/items/12345").status_code == 204

    def test_create_blank_name_is_400(self, client):
        r = client.post("/api/items", json={"name": ""})
        assert r.status_code == 400


class TestTransactionsApi:
    def test_create_uses_camel_case(self, client, anna, hink):
        tx = post_transaction(client, anna["id"], hink["id"], 5, note="Vecka 12")
        assert tx["customerId"] == anna["id"]
        assert tx["itemId"] == hink["id"]
        assert tx["quantity"] == 5
        assert tx["type"] == "delivery"
        assert tx["note"] == "Vecka 12"
        assert "createdAt" in tx

    def test_created_at_is_not_user_settable(self, client, anna, hink):
        r = client.post(
            "/api/transactions",
            json={
                "customerId": anna["id"],
                "itemId": hink["id"],
                "quantity": 1,
                "type": "delivery",
                "createdAt": "2001-01-01T00:00:00Z",
            },
        )
        assert r.status_code == 201
        assert not r.json()["createdAt"].startswith("2001")

    def test_invalid_quantity_is_400(self, client, anna, hink):
        r = client.post(
            "/api/transactions",
            json={"customerId": anna["id"], "itemId": hink["id"], "quantity": 0, "type": "delivery"},
        )
        assert r.status_code == 400
        assert [f["field"] for f in r.json()["fields"]] == ["quantity"]

    def test_unknown_reference_is_400(self, client, anna):
        r = client.post(
            "/api/transactions",
            json={"customerId": anna["id"], "itemId": 999, "quantity": 1, "type": "delivery"},
        )
        assert r.status_code == 400
        assert [f["field"] for f in r.json()["fields"]] == ["itemId"]
        assert client.get("/api/transactions").json() == []

    def test_listings_newest_first(self, client, anna, hink):
        bertil = client.post("/api/customers", json={"name": "Bertil"}).json()
        first = post_transaction(client, anna["id"], hink["id"], 1)
        second = post_transaction(client, bertil["id"], hink["id"], 2)
        third = post_transaction(client, anna["id"], hink["id"], 1, "return")

        all_ids = [t["id"] for t in client.get("/api/transactions").json()]
        assert all_ids == [third["id"], second["id"], first["id"]]

        annas = client.get(f"/api/transactions/customer/{anna['id']}").json()
        assert [t["id"] for t in annas] == [third["id"], first["id"]]

    def test_no_update_or_delete(self, client, anna, hink):
        tx = post_transaction(client, anna["id"], hink["id"], 1)
        assert client.delete(f"/api/transactions/{tx['id']}").status_code in (404, 405)
        assert client.patch(f"/api/transactions/{tx['id']}", json={"quantity": 9}).status_code in (404, 405)
        assert len(client.get("/api/transactions").json()) == 1


class TestBalanceScenarios:
    def test_delivery_and_full_return(self, client, anna, hink):
        post_transaction(client, anna["id"], hink["id"], 5)
        assert client.get("/api/balances").json() == [
            {
                "customerId": anna["id"],
                "customerName": "Anna",
                "itemId": hink["id"],
                "itemName": "Hink 10L",
                "balance": 5,
            }
        ]

        post_transaction(client, anna["id"], hink["id"], 5, "return")
        assert client.get("/api/balances").json() == []

        rows = client.get(f"/api/balances/{anna['id']}").json()
        assert len(rows) == 1
        assert rows[0]["balance"] == 0

    def test_over_return_is_accepted(self, client, anna, hink):
        post_transaction(client, anna["id"], hink["id"], 3)
        post_transaction(client, anna["id"], hink["id"], 5, "return")

        [row] = client.get("/api/balances").json()
        assert row["balance"] == -2

    def test_two_items_two_rows(self, client, anna, hink):
        vagn = client.post("/api/items", json={"name": "Vagn"}).json()
        post_transaction(client, anna["id"], hink["id"], 2)
        post_transaction(client, anna["id"], vagn["id"], 1)

        rows = client.get("/api/balances").json()
        assert len(rows) == 2
        assert {r["customerName"] for r in rows} == {"Anna"}
        assert {r["itemId"] for r in rows} == {hink["id"], vagn["id"]}

    def test_delete_customer_with_transactions(self, client, anna, hink):
        post_transaction(client, anna["id"], hink["id"], 4)

        assert client.delete(f"/api/customers/{anna['id']}").status_code == 204

        # the log keeps the orphaned rows, the balance views drop them
        assert len(client.get("/api/transactions").json()) == 1
        assert len(client.get(f"/api/transactions/customer/{anna['id']}").json()) == 1
        assert client.get("/api/balances").json() == []
        assert client.get(f"/api/balances/{anna['id']}").json() == []


class TestOutOfRangeIds:
    HUGE = 99999999999999999999

    def test_get_is_404(self, client):
        assert client.get(f"/api/customers/{self.HUGE}").status_code == 404
        assert client.get(f"/api/items/{self.HUGE}").status_code == 404
        assert client.get(f"/api/items/-{self.HUGE}").status_code == 404

    def test_patch_is_404(self, client):
        r = client.patch(f"/api/customers/{self.HUGE}", json={"phone": "08-123"})
        assert r.status_code == 404

    def test_delete_is_204(self, client, anna):
        assert client.delete(f"/api/customers/{self.HUGE}").status_code == 204
        assert client.delete(f"/api/items/{self.HUGE}").status_code == 204
        assert client.get("/api/customers").json() == [anna]

    def test_customer_listings_are_empty(self, client):
        assert client.get(f"/api/transactions/customer/{self.HUGE}").json() == []
        assert client.get(f"/api/balances/{self.HUGE}").json() == []

    def test_oversized_quantity_is_400(self, client, anna, hink):
        r = client.post(
            "/api/transactions",
            json={"customerId": anna["id"], "itemId": hink["id"], "quantity": 2**64, "type": "delivery"},
        )
        assert r.status_code == 400
        assert [f["field"] for f in r.json()["fields"]] == ["quantity"]

    def test_oversized_references_are_400(self, client):
        r = client.post(
            "/api/transactions",
            json={"customerId": self.HUGE, "itemId": self.HUGE, "quantity": 1, "type": "delivery"},
        )
        assert r.status_code == 400
        assert sorted(f["field"] for f in r.json()["fields"]) == ["customerId", "itemId"]
