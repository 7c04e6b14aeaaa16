"""HTTP tests for companies, buildings and health."""


async def create_company(client, name="Buildup Investment"):
    resp = await client.post("/api/create-company", json={"name": name})
    assert resp.status_code == 201, resp.text
    return resp.json()


def building_payload(company_id, **overrides):
    payload = {
        "name": "Tower A",
        "address": "12 Rustaveli Ave",
        "company_id": company_id,
        "desktop_paths": {},
        "mobile_paths": "{}",
    }
    payload.update(overrides)
    return payload


class TestCompanies:
    async def test_create_and_list(self, client):
        company = await create_company(client)

        resp = await client.get("/api/companies")

        assert resp.status_code == 200
        assert resp.json()["total"] == 1
        assert resp.json()["companies"][0]["id"] == company["id"]

    async def test_duplicate_name(self, client):
        await create_company(client)

        resp = await client.post("/api/create-company", json={"name": "Buildup Investment"})

        assert resp.status_code == 409
        assert resp.json()["error"] == "COMPANY_EXIST"

    async def test_empty_name(self, client):
        resp = await client.post("/api/create-company", json={"name": ""})

        assert resp.status_code == 400
        assert resp.json()["error"] == "VALIDATION_ERROR"


class TestBuildings:
    async def test_create_get_and_list(self, client):
        company = await create_company(client)

        created = await client.post("/api/buildings", json=building_payload(company["id"]))
        assert created.status_code == 201
        building_id = created.json()["id"]

        resp = await client.get(f"/api/buildings/{building_id}")
        assert resp.status_code == 200
        assert resp.json()["name"] == "Tower A"
        assert resp.json()["mobile_paths"] == {}

        resp = await client.get("/api/buildings")
        assert [b["id"] for b in resp.json()["buildings"]] == [building_id]

    async def test_unknown_company(self, client):
        resp = await client.post("/api/buildings", json=building_payload(999))

        assert resp.status_code == 404
        assert resp.json()["error"] == "COMPANY_NOT_FOUND"

    async def test_duplicate_name_within_company(self, client):
        company = await create_company(client)
        await client.post("/api/buildings", json=building_payload(company["id"]))

        resp = await client.post("/api/buildings", json=building_payload(company["id"]))

        assert resp.status_code == 409
        assert resp.json()["error"] == "BUILDING_EXISTS"

    async def test_missing_building(self, client):
        resp = await client.get("/api/buildings/999")

        assert resp.status_code == 404
        assert resp.json()["error"] == "NOT_FOUND"


async def test_health(client):
    resp = await client.get("/api/health")

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


async def test_root_document(client):
    resp = await client.get("/")

    assert resp.status_code == 200
    assert resp.json()["docs"] == "/docs"
