"""Catalog API test cases."""
import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError
from sqlmodel.ext.asyncio.session import AsyncSession

CATALOG = "/api/v1/catalog"


class TestCategories:
    """Test category endpoints."""

    @pytest.mark.asyncio
    async def test_list_categories_paged(self, client: AsyncClient, seeded_categories):
        response = await client.get(f"{CATALOG}/categories", params={"page_number": 3, "page_size": 10})

        assert response.status_code == 200
        data = response.json()
        assert data["code"] == 200
        page = data["data"]
        assert [item["id"] for item in page["items"]] == [21, 22, 23, 24, 25]
        assert page["totalCount"] == 25
        assert page["pageNumber"] == 3
        assert page["pageSize"] == 10
        assert page["totalPages"] == 3
        assert page["hasPrevious"] is True
        assert page["hasNext"] is False

    @pytest.mark.asyncio
    async def test_list_categories_default_paging(self, client: AsyncClient, seeded_categories):
        response = await client.get(f"{CATALOG}/categories")

        page = response.json()["data"]
        assert len(page["items"]) == 10
        assert page["pageNumber"] == 1
        assert page["hasNext"] is True

    @pytest.mark.asyncio
    async def test_invalid_page_number(self, client: AsyncClient):
        response = await client.get(f"{CATALOG}/categories", params={"page_number": 0})

        assert response.status_code == 400
        assert response.json()["code"] == 400

    @pytest.mark.asyncio
    async def test_create_and_get_category(self, client: AsyncClient):
        response = await client.post(f"{CATALOG}/categories", json={"name": "Games"})

        assert response.status_code == 200
        created = response.json()["data"]
        assert created["id"] is not None
        assert created["name"] == "Games"

        response = await client.get(f"{CATALOG}/categories/{created['id']}")
        assert response.json()["data"]["name"] == "Games"

    @pytest.mark.asyncio
    async def test_failed_commit_returns_generic_500(
        self,
        client: AsyncClient,
        async_session: AsyncSession,
        monkeypatch
    ):
        """Test a store failure at commit becomes a 500 envelope without details."""
        async def failing_commit():
            raise OperationalError("COMMIT", {}, Exception("database is locked"))

        monkeypatch.setattr(async_session, "commit", failing_commit)

        response = await client.post(f"{CATALOG}/categories", json={"name": "Games"})

        assert response.status_code == 500
        data = response.json()
        assert data["code"] == 500
        assert data["message"] == "Service temporarily unavailable"
        assert data["data"] is None

    @pytest.mark.asyncio
    async def test_duplicate_category_name(self, client: AsyncClient, sample_category):
        response = await client.post(f"{CATALOG}/categories", json={"name": sample_category.name})

        assert response.status_code == 409
        assert response.json()["code"] == 409

    @pytest.mark.asyncio
    async def test_get_missing_category(self, client: AsyncClient):
        response = await client.get(f"{CATALOG}/categories/999")

        assert response.status_code == 404
        assert response.json()["code"] == 404

    @pytest.mark.asyncio
    async def test_update_category(self, client: AsyncClient, sample_category):
        response = await client.put(
            f"{CATALOG}/categories/{sample_category.id}",
            json={"name": "Novels", "image_url": "novels.jpg"}
        )

        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Novels"

        response = await client.get(f"{CATALOG}/categories/{sample_category.id}")
        assert response.json()["data"]["image_url"] == "novels.jpg"

    @pytest.mark.asyncio
    async def test_update_missing_category(self, client: AsyncClient):
        response = await client.put(f"{CATALOG}/categories/999", json={"name": "Ghost"})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_category(self, client: AsyncClient, sample_category):
        response = await client.delete(f"{CATALOG}/categories/{sample_category.id}")

        assert response.status_code == 200
        assert response.json()["data"]["id"] == sample_category.id

        response = await client.get(f"{CATALOG}/categories/{sample_category.id}")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_category_with_products(self, client: AsyncClient, sample_products):
        category_id = sample_products[0].category_id

        response = await client.delete(f"{CATALOG}/categories/{category_id}")

        assert response.status_code == 409


class TestProducts:
    """Test product endpoints."""

    @pytest.mark.asyncio
    async def test_list_products_by_category(self, client: AsyncClient, sample_products):
        category_id = sample_products[0].category_id

        response = await client.get(
            f"{CATALOG}/products",
            params={"category_id": category_id, "page_size": 3}
        )

        page = response.json()["data"]
        assert page["totalCount"] == 4
        assert len(page["items"]) == 3
        assert page["totalPages"] == 2

    @pytest.mark.asyncio
    async def test_list_products_unknown_category(self, client: AsyncClient):
        response = await client.get(f"{CATALOG}/products", params={"category_id": 77})

        assert response.status_code == 404

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "criterion,expected",
        [("greater", [25.0, 35.0]), ("less", [5.0, 15.0]), ("equal", [])],
    )
    async def test_filter_by_price(self, client: AsyncClient, sample_products, criterion, expected):
        response = await client.get(
            f"{CATALOG}/products/price",
            params={"price": 20, "criterion": criterion}
        )

        assert response.status_code == 200
        page = response.json()["data"]
        assert [item["price"] for item in page["items"]] == expected
        assert page["totalCount"] == len(expected)

    @pytest.mark.asyncio
    async def test_create_product(self, client: AsyncClient, sample_category):
        payload = {
            "name": "Atlas",
            "price": 49.9,
            "stock": 2,
            "category_id": sample_category.id
        }

        response = await client.post(f"{CATALOG}/products", json=payload)

        assert response.status_code == 200
        product = response.json()["data"]
        assert product["id"] is not None
        assert product["category_id"] == sample_category.id

    @pytest.mark.asyncio
    async def test_create_product_unknown_category(self, client: AsyncClient):
        payload = {"name": "Orphan", "price": 1.0, "category_id": 404}

        response = await client.post(f"{CATALOG}/products", json=payload)

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_create_product_invalid_body(self, client: AsyncClient, sample_category):
        payload = {"name": "Free", "price": 0, "category_id": sample_category.id}

        response = await client.post(f"{CATALOG}/products", json=payload)

        assert response.status_code == 422
        assert response.json()["code"] == 422

    @pytest.mark.asyncio
    async def test_update_product(self, client: AsyncClient, sample_products):
        product = sample_products[0]
        payload = {
            "name": "Book 5 (2nd ed.)",
            "price": 7.5,
            "stock": 10,
            "category_id": product.category_id
        }

        response = await client.put(f"{CATALOG}/products/{product.id}", json=payload)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["price"] == 7.5
        assert data["stock"] == 10

    @pytest.mark.asyncio
    async def test_delete_product(self, client: AsyncClient, sample_products):
        product_id = sample_products[1].id

        response = await client.delete(f"{CATALOG}/products/{product_id}")
        assert response.status_code == 200

        response = await client.get(f"{CATALOG}/products/{product_id}")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_missing_product(self, client: AsyncClient):
        response = await client.delete(f"{CATALOG}/products/999")

        assert response.status_code == 404
