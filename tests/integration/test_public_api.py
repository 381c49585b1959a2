"""Public read endpoints against the demo (in-memory) backend."""

from isdapresyo.domain.models.fish_price import FishPriceDraft


class TestHealth:
    async def test_demo_health(self, demo_client):
        res = await demo_client.get("/api/health")
        assert res.status_code == 200
        assert res.json() == {"ok": True, "demoMode": True}

    async def test_durable_health(self, durable_client):
        res = await durable_client.get("/api/health")
        assert res.json() == {"ok": True, "demoMode": False}


class TestPublicReads:
    async def test_fish_types(self, demo_client):
        res = await demo_client.get("/api/fish-types")
        assert res.status_code == 200
        assert res.json() == ["Galunggong", "Tamban"]

    async def test_latest_prices(self, demo_client):
        res = await demo_client.get("/api/fish-prices")
        assert res.status_code == 200
        data = res.json()
        assert [r["fish_type"] for r in data] == ["Galunggong", "Tamban"]
        assert data[0] == {
            "id": 1,
            "fish_type": "Galunggong",
            "min_price": 120.0,
            "max_price": 160.0,
            "avg_price": 140.0,
            "date_updated": "2026-01-22",
        }

    async def test_latest_by_type(self, demo_client):
        res = await demo_client.get("/api/fish-prices/Tamban")
        assert res.status_code == 200
        assert res.json()["id"] == 2

    async def test_type_with_space_in_path(self, demo_client, demo_container):
        await demo_container.store().create(
            FishPriceDraft(fish_type="Dalagang Bukid", min_price=1, max_price=3, avg_price=2)
        )
        res = await demo_client.get("/api/fish-prices/Dalagang%20Bukid")
        assert res.status_code == 200
        assert res.json()["fish_type"] == "Dalagang Bukid"

    async def test_unknown_type_is_404(self, demo_client):
        res = await demo_client.get("/api/fish-prices/Lapu-Lapu")
        assert res.status_code == 404
        assert res.json() == {"message": "Not found"}

    async def test_type_lookup_is_case_sensitive(self, demo_client):
        res = await demo_client.get("/api/fish-prices/tamban")
        assert res.status_code == 404

    async def test_overlong_type_is_400(self, demo_client):
        res = await demo_client.get("/api/fish-prices/" + "x" * 101)
        assert res.status_code == 400
        body = res.json()
        assert body["message"] == "Validation failed"
        assert body["errors"][0]["field"] == "fish_type"

    async def test_cors_header(self, demo_client):
        res = await demo_client.get("/api/fish-types", headers={"Origin": "https://example.org"})
        assert res.headers["access-control-allow-origin"] == "*"
