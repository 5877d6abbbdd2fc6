import pytest

MISSING_ID = "64b7f0c2a1b2c3d4e5f60718"


def create(client, headers, payload):
    res = client.post("/projects", json=payload, headers=headers)
    assert res.status_code == 201, res.text
    return res.json()


def test_create_project(client, mongo, admin_headers, project_payload):
    body = create(client, admin_headers, project_payload)
    assert body["id"]
    assert body["titleEn"] == "Modern Oak Dining Table"
    assert body["materials"] == ["Solid Oak", "Steel Legs", "Polyurethane Finish"]
    assert body["featured"] is True
    assert body["createdAt"] is not None
    stored = mongo["project"].find_one()
    assert stored["dimensions"] == {"length": "180", "width": "90", "height": "75", "unit": "cm"}


def test_client_id_is_ignored_on_create(client, admin_headers, project_payload):
    body = create(client, admin_headers, {**project_payload, "id": MISSING_ID})
    assert body["id"] != MISSING_ID


def test_dimensions_round_trip(client, admin_headers, project_payload):
    pid = create(client, admin_headers, project_payload)["id"]
    res = client.get(f"/projects/{pid}")
    assert res.status_code == 200
    assert res.json()["dimensions"] == {"length": "180", "width": "90", "height": "75", "unit": "cm"}


def test_numeric_dimensions_are_kept_as_strings(client, admin_headers, project_payload):
    payload = {**project_payload, "dimensions": {"length": 200, "width": 180, "height": 40}}
    body = create(client, admin_headers, payload)
    assert body["dimensions"] == {"length": "200", "width": "180", "height": "40", "unit": "cm"}


def test_dimensions_optional(client, admin_headers, project_payload):
    project_payload.pop("dimensions")
    assert create(client, admin_headers, project_payload)["dimensions"] is None


@pytest.mark.parametrize("featured", [None, "true", 1, "yes"])
def test_featured_coerced_to_false(client, admin_headers, project_payload, featured):
    payload = {**project_payload, "featured": featured}
    assert create(client, admin_headers, payload)["featured"] is False


def test_featured_omitted(client, admin_headers, project_payload):
    project_payload.pop("featured")
    assert create(client, admin_headers, project_payload)["featured"] is False


@pytest.mark.parametrize("field", ["titleEn", "titleAm", "descriptionEn", "descriptionAm", "category", "materials", "images"])
def test_create_requires_field(client, mongo, admin_headers, project_payload, field):
    project_payload.pop(field)
    res = client.post("/projects", json=project_payload, headers=admin_headers)
    assert res.status_code == 400
    assert res.json()["detail"]["field"] == field
    assert mongo["project"].count_documents({}) == 0


def test_create_requires_admin(client, mongo, project_payload):
    res = client.post("/projects", json=project_payload)
    assert res.status_code == 401
    assert mongo["project"].count_documents({}) == 0


def test_list_is_public_and_newest_first(client, admin_headers, project_payload):
    ids = [create(client, admin_headers, {**project_payload, "titleEn": t})["id"] for t in ("A", "B", "C")]
    res = client.get("/projects")
    assert res.status_code == 200
    assert [p["id"] for p in res.json()] == list(reversed(ids))


def test_list_filters(client, admin_headers, project_payload):
    create(client, admin_headers, {**project_payload, "category": "bedroom", "featured": False})
    living = create(client, admin_headers, project_payload)["id"]
    assert [p["id"] for p in client.get("/projects", params={"category": "living"}).json()] == [living]
    assert [p["id"] for p in client.get("/projects", params={"featured": "true"}).json()] == [living]
    assert [p["id"] for p in client.get("/projects/featured").json()] == [living]
    assert len(client.get("/projects", params={"limit": 1}).json()) == 1


def test_list_empty(client):
    assert client.get("/projects").json() == []


def test_get_unknown_project(client):
    res = client.get(f"/projects/{MISSING_ID}")
    assert res.status_code == 404
    assert res.json() == {"detail": "Project not found"}


def test_get_malformed_id_is_not_found(client):
    res = client.get("/projects/not-an-id")
    assert res.status_code == 404
    assert res.json() == {"detail": "Project not found"}


def test_patch_toggles_featured(client, mongo, admin_headers, project_payload):
    pid = create(client, admin_headers, project_payload)["id"]
    res = client.patch(f"/projects/{pid}", json={"featured": False}, headers=admin_headers)
    assert res.status_code == 200
    body = res.json()
    assert body["featured"] is False
    assert body["titleEn"] == project_payload["titleEn"]
    assert mongo["project"].count_documents({}) == 1


def test_patch_partial_fields(client, admin_headers, project_payload):
    pid = create(client, admin_headers, project_payload)["id"]
    res = client.patch(
        f"/projects/{pid}",
        json={"materials": ["Walnut"], "dimensions": {"length": "100", "width": "50", "height": "45", "unit": "in"}},
        headers=admin_headers,
    )
    assert res.status_code == 200
    fetched = client.get(f"/projects/{pid}").json()
    assert fetched["materials"] == ["Walnut"]
    assert fetched["dimensions"]["unit"] == "in"
    assert fetched["category"] == "living"


def test_patch_empty_body_returns_record(client, admin_headers, project_payload):
    pid = create(client, admin_headers, project_payload)["id"]
    res = client.patch(f"/projects/{pid}", json={}, headers=admin_headers)
    assert res.status_code == 200
    assert res.json()["id"] == pid


def test_patch_rejects_blank_title(client, admin_headers, project_payload):
    pid = create(client, admin_headers, project_payload)["id"]
    res = client.patch(f"/projects/{pid}", json={"titleEn": ""}, headers=admin_headers)
    assert res.status_code == 400
    assert client.get(f"/projects/{pid}").json()["titleEn"] == project_payload["titleEn"]


@pytest.mark.parametrize("body", [{"featured": True}, {}])
def test_patch_unknown_project(client, admin_headers, body):
    res = client.patch(f"/projects/{MISSING_ID}", json=body, headers=admin_headers)
    assert res.status_code == 404


def test_delete_project(client, mongo, admin_headers, project_payload):
    pid = create(client, admin_headers, project_payload)["id"]
    res = client.delete("/projects", params={"id": pid}, headers=admin_headers)
    assert res.status_code == 200
    assert mongo["project"].count_documents({}) == 0
    assert client.get(f"/projects/{pid}").status_code == 404


def test_delete_unknown_project(client, mongo, admin_headers, project_payload):
    create(client, admin_headers, project_payload)
    res = client.delete("/projects", params={"id": MISSING_ID}, headers=admin_headers)
    assert res.status_code == 404
    assert mongo["project"].count_documents({}) == 1


def test_delete_requires_id(client, admin_headers):
    res = client.delete("/projects", headers=admin_headers)
    assert res.status_code == 400


def test_dashboard_stats(client, admin_headers, project_payload, submission_payload):
    create(client, admin_headers, project_payload)
    create(client, admin_headers, {**project_payload, "featured": False})
    sid = client.post("/contact", json=submission_payload).json()["id"]
    client.post("/contact", json=submission_payload)
    client.patch(f"/contact/{sid}", json={"status": "quoted"}, headers=admin_headers)

    res = client.get("/admin/stats", headers=admin_headers)
    assert res.status_code == 200
    assert res.json() == {
        "totalProjects": 2,
        "featuredProjects": 1,
        "totalSubmissions": 2,
        "submissionsByStatus": {"pending": 1, "contacted": 0, "quoted": 1, "completed": 0, "cancelled": 0},
    }


def test_health_reports_collections(client, admin_headers, project_payload):
    create(client, admin_headers, project_payload)
    body = client.get("/test").json()
    assert body["connection_status"] == "Connected"
    assert "project" in body["collections"]


def test_dimensions_keep_extra_keys(client, admin_headers, project_payload):
    dims = {"length": "180", "width": "90", "height": "75", "unit": "cm", "depth": "40"}
    pid = create(client, admin_headers, {**project_payload, "dimensions": dims})["id"]
    assert client.get(f"/projects/{pid}").json()["dimensions"] == dims


def test_partial_dimensions_are_accepted(client, mongo, admin_headers, project_payload):
    dims = {"length": "180", "width": "90", "unit": "cm"}
    pid = create(client, admin_headers, {**project_payload, "dimensions": dims})["id"]
    assert client.get(f"/projects/{pid}").json()["dimensions"] == dims
    assert mongo["project"].find_one()["dimensions"] == dims


@pytest.mark.parametrize("field, value", [("materials", ["Oak", ""]), ("images", ["  "])])
def test_blank_list_entries_are_rejected(client, mongo, admin_headers, project_payload, field, value):
    res = client.post("/projects", json={**project_payload, field: value}, headers=admin_headers)
    assert res.status_code == 400
    assert res.json()["detail"]["field"] == field
    assert mongo["project"].count_documents({}) == 0
