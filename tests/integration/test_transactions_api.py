"""Integration tests for transaction API endpoints."""

from pathlib import Path

from httpx import AsyncClient

from app.config import settings

CSV_HEADERS = {"Content-Type": "text/csv"}


async def _create(client: AsyncClient, title: str, value: int, type: str, category: str):
    return await client.post(
        "/api/v1/transactions",
        json={"title": title, "value": value, "type": type, "category": category},
    )


class TestCreateTransaction:
    """POST /api/v1/transactions."""

    async def test_create_income(self, client: AsyncClient):
        response = await _create(client, "Salary", 100000, "income", "Job")

        assert response.status_code == 201
        data = response.json()
        assert data["title"] == "Salary"
        assert data["value"] == 100000
        assert data["type"] == "income"
        assert data["category"]["title"] == "Job"
        assert data["category_id"] == data["category"]["id"]
        assert "X-Request-ID" in response.headers

    async def test_insufficient_balance(self, client: AsyncClient):
        await _create(client, "Salary", 1000, "income", "Job")

        response = await _create(client, "TV", 1001, "outcome", "Electronics")

        assert response.status_code == 400
        body = response.json()
        assert body["error_code"] == "TXN_002"
        assert body["retry_allowed"] is False

        listing = (await client.get("/api/v1/transactions")).json()
        assert len(listing["transactions"]) == 1
        assert listing["balance"]["total"] == 1000

    async def test_invalid_type_rejected(self, client: AsyncClient):
        response = await _create(client, "Transfer", 10, "transfer", "Misc")

        assert response.status_code == 400
        assert response.json()["error_code"] == "VAL_001"

    async def test_negative_value_rejected(self, client: AsyncClient):
        response = await _create(client, "Oops", -10, "income", "Misc")

        assert response.status_code == 400
        assert response.json()["error_code"] == "VAL_001"

    async def test_missing_fields_rejected(self, client: AsyncClient):
        response = await client.post("/api/v1/transactions", json={"title": "Salary"})

        assert response.status_code == 400
        assert "body.value" in response.json()["message"]


class TestListTransactions:
    """GET /api/v1/transactions and /balance."""

    async def test_empty_ledger(self, client: AsyncClient):
        response = await client.get("/api/v1/transactions")

        assert response.status_code == 200
        data = response.json()
        assert data["transactions"] == []
        assert data["balance"] == {"income": 0, "outcome": 0, "total": 0}
        assert data["money"] == {
            "currency": settings.currency,
            "minor_unit": settings.currency_minor_unit,
        }

    async def test_balance_endpoint(self, client: AsyncClient):
        await _create(client, "Salary", 5000, "income", "Job")
        await _create(client, "Lunch", 1200, "outcome", "Food")

        response = await client.get("/api/v1/transactions/balance")

        assert response.status_code == 200
        assert response.json() == {"income": 5000, "outcome": 1200, "total": 3800}


class TestImportTransactions:
    """POST /api/v1/transactions/import."""

    async def test_import_csv(self, client: AsyncClient, upload_folder: Path):
        body = (
            "title,type,value,category\n"
            "Salary,income,1000.00,Job\n"
            ",outcome,50,Food\n"
            "Lunch,outcome,20.00,Food\n"
        )

        response = await client.post(
            "/api/v1/transactions/import", content=body.encode(), headers=CSV_HEADERS
        )

        assert response.status_code == 201
        data = response.json()
        assert data["imported_count"] == 2
        assert [t["title"] for t in data["transactions"]] == ["Salary", "Lunch"]
        assert data["transactions"][1]["category"]["title"] == "Food"
        assert list(upload_folder.iterdir()) == []

        balance = (await client.get("/api/v1/transactions/balance")).json()
        assert balance["total"] == 98000

    async def test_rejects_wrong_content_type(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/transactions/import",
            content=b"title,type,value,category\n",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "API_001"

    async def test_rejects_empty_body(self, client: AsyncClient):
        response = await client.post("/api/v1/transactions/import", content=b"", headers=CSV_HEADERS)

        assert response.status_code == 400
        assert response.json()["error_code"] == "API_003"

    async def test_rejects_non_utf8_body_without_storing_it(self, client: AsyncClient, upload_folder: Path):
        response = await client.post(
            "/api/v1/transactions/import",
            content=b"title,type,value,category\nCaf\xe9,income,10,Food\n",
            headers=CSV_HEADERS,
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "API_004"
        assert list(upload_folder.iterdir()) == []

    async def test_rejects_oversized_body(self, client: AsyncClient, monkeypatch):
        monkeypatch.setattr(settings, "import_max_size_mb", 0)

        response = await client.post(
            "/api/v1/transactions/import",
            content=b"title,type,value,category\nSalary,income,1,Job\n",
            headers=CSV_HEADERS,
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "API_002"

    async def test_import_then_create_uses_same_category(self, client: AsyncClient):
        await client.post(
            "/api/v1/transactions/import",
            content=b"title,type,value,category\nSalary,income,100,Job\n",
            headers=CSV_HEADERS,
        )

        response = await _create(client, "Bonus", 500, "income", "Job")
        listing = (await client.get("/api/v1/transactions")).json()

        category_ids = {t["category_id"] for t in listing["transactions"]}
        assert response.status_code == 201
        assert len(category_ids) == 1
