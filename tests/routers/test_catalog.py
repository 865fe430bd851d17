"""Tests for the category, account and tag endpoints."""

import uuid

from fastapi.testclient import TestClient

from ledger_api.models.account import Account
from ledger_api.models.category import Category


def add_transaction(client: TestClient, category_id: str, **extra: object) -> dict:
    """Create a transaction through the API."""
    body: dict[str, object] = {
        "merchant": "Coffee Shop",
        "amount": 4.5,
        "type": "expense",
        "category": category_id,
        "date": "2024-01-15",
    }
    body.update(extra)
    response = client.post("/api/transactions", json=body)
    assert response.status_code == 201
    return response.json()


class TestCategories:
    """Tests for /api/categories."""

    def test_create_and_list(self, client: TestClient) -> None:
        """Test creating categories and listing them by type then name."""
        assert (
            client.post("/api/categories", json={"name": "Salary", "type": "income"})
        ).status_code == 201
        response = client.post(
            "/api/categories", json={"name": "Food", "type": "expense", "icon": "🍔"}
        )
        assert response.status_code == 201
        assert response.json()["icon"] == "🍔"

        names = [c["name"] for c in client.get("/api/categories").json()]

        assert names == ["Food", "Salary"]

    def test_create_duplicate(self, client: TestClient, food_category: Category) -> None:
        """Test a duplicate name returns 400."""
        response = client.post("/api/categories", json={"name": "Food", "type": "expense"})

        assert response.status_code == 400
        assert response.json() == {"message": "Category name already exists"}

    def test_create_duplicate_ignoring_case(
        self, client: TestClient, food_category: Category
    ) -> None:
        """Test a name differing only in case returns 400."""
        response = client.post("/api/categories", json={"name": "fOOD", "type": "expense"})

        assert response.status_code == 400
        assert response.json() == {"message": "Category name already exists"}
        assert len(client.get("/api/categories").json()) == 1

    def test_create_invalid_type(self, client: TestClient) -> None:
        """Test an unknown category type returns 400."""
        response = client.post("/api/categories", json={"name": "X", "type": "other"})

        assert response.status_code == 400

    def test_update_clears_icon(
        self, client: TestClient, food_category: Category
    ) -> None:
        """Test icon can be cleared while other fields stay."""
        response = client.put(
            f"/api/categories/{food_category.id}", json={"icon": None, "name": None}
        )

        assert response.status_code == 200
        assert response.json()["icon"] is None
        assert response.json()["name"] == "Food"

    def test_update_unknown(self, client: TestClient) -> None:
        """Test updating an unknown category returns 404."""
        response = client.put(f"/api/categories/{uuid.uuid4()}", json={"name": "X"})

        assert response.status_code == 404

    def test_delete_unused(self, client: TestClient, food_category: Category) -> None:
        """Test deleting an unused category."""
        response = client.delete(f"/api/categories/{food_category.id}")

        assert response.status_code == 204
        assert client.get("/api/categories").json() == []

    def test_delete_in_use(self, client: TestClient, food_category: Category) -> None:
        """Test a category with transactions cannot be deleted."""
        add_transaction(client, str(food_category.id))

        response = client.delete(f"/api/categories/{food_category.id}")

        assert response.status_code == 400
        assert response.json() == {"message": "Category is used by existing transactions"}


class TestAccounts:
    """Tests for /api/accounts."""

    def test_create_and_list(self, client: TestClient) -> None:
        """Test creating and listing accounts."""
        response = client.post("/api/accounts", json={"name": "Savings", "type": "savings"})
        assert response.status_code == 201

        accounts = client.get("/api/accounts").json()

        assert [(a["name"], a["type"]) for a in accounts] == [("Savings", "savings")]

    def test_payment_method_creates_account(
        self, client: TestClient, food_category: Category
    ) -> None:
        """Test a new payment method shows up as a generic account."""
        add_transaction(client, str(food_category.id), paymentMethod="PayPal")

        accounts = client.get("/api/accounts").json()

        assert [(a["name"], a["type"]) for a in accounts] == [("PayPal", "other")]

    def test_update(self, client: TestClient, visa_account: Account) -> None:
        """Test renaming an account."""
        response = client.put(f"/api/accounts/{visa_account.id}", json={"name": "Amex"})

        assert response.status_code == 200
        assert response.json()["name"] == "Amex"
        assert response.json()["type"] == "credit"

    def test_delete_keeps_transactions(
        self, client: TestClient, food_category: Category, visa_account: Account
    ) -> None:
        """Test deleting an account leaves its transactions without one."""
        created = add_transaction(client, str(food_category.id), paymentMethod="Visa")

        response = client.delete(f"/api/accounts/{visa_account.id}")

        assert response.status_code == 204
        data = client.get(f"/api/transactions/{created['id']}").json()
        assert data["paymentMethod"] is None

    def test_delete_unknown(self, client: TestClient) -> None:
        """Test deleting an unknown account returns 404."""
        assert client.delete(f"/api/accounts/{uuid.uuid4()}").status_code == 404


class TestTags:
    """Tests for /api/tags."""

    def test_create_is_idempotent(self, client: TestClient) -> None:
        """Test posting the same name twice returns the same tag."""
        first = client.post("/api/tags", json={"name": "coffee"}).json()
        second = client.post("/api/tags", json={"name": " coffee "}).json()

        assert first["id"] == second["id"]
        assert len(client.get("/api/tags").json()) == 1

    def test_rename(self, client: TestClient) -> None:
        """Test renaming a tag."""
        tag = client.post("/api/tags", json={"name": "cofee"}).json()

        response = client.put(f"/api/tags/{tag['id']}", json={"name": "coffee"})

        assert response.status_code == 200
        assert response.json()["name"] == "coffee"

    def test_rename_to_existing_name(self, client: TestClient) -> None:
        """Test renaming onto an existing name returns 400."""
        client.post("/api/tags", json={"name": "coffee"})
        tag = client.post("/api/tags", json={"name": "tea"}).json()

        response = client.put(f"/api/tags/{tag['id']}", json={"name": "coffee"})

        assert response.status_code == 400
        assert response.json() == {"message": "Tag name already exists"}

    def test_delete_detaches_from_transactions(
        self, client: TestClient, food_category: Category
    ) -> None:
        """Test deleting a tag removes it from transactions."""
        created = add_transaction(client, str(food_category.id), tags=["a", "b"])
        tag_id = next(t["id"] for t in client.get("/api/tags").json() if t["name"] == "a")

        response = client.delete(f"/api/tags/{tag_id}")

        assert response.status_code == 204
        assert client.get(f"/api/transactions/{created['id']}").json()["tags"] == ["b"]

    def test_blank_name_rejected(self, client: TestClient) -> None:
        """Test a whitespace-only name is rejected and no tag is created."""
        response = client.post("/api/tags", json={"name": "   "})

        assert response.status_code == 400
        assert "name" in response.json()["errors"]
        assert client.get("/api/tags").json() == []

    def test_rename_to_blank_rejected(self, client: TestClient) -> None:
        """Test a tag cannot be renamed to whitespace."""
        tag = client.post("/api/tags", json={"name": "coffee"}).json()

        response = client.put(f"/api/tags/{tag['id']}", json={"name": " "})

        assert response.status_code == 400
        assert client.get("/api/tags").json()[0]["name"] == "coffee"
