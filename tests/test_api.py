"""
Tests for the HTTP routes.
"""
import io

from openpyxl import load_workbook

from conftest import make_lead
from leadtracker.config import settings
from leadtracker.repositories.lead_repo import LeadRepository

CSV = b"con.no,KVA,Client Name,Mo.No,Lead Status\n1001,100,Raj,9876543210,Busy\n1002,50,Meena,9123456780,Hot\n"


def seed(store, *leads):
    LeadRepository(store).extend(leads)


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_create_and_get_lead(client):
    response = client.post("/api/leads", json={
        "kva": "150",
        "consumerNumber": "1001",
        "clientName": "Raj Patel",
        "mobileNumbers": [{"number": "9876543210", "isMain": True}],
    })
    assert response.status_code == 201
    body = response.json()
    assert body["consumerNumber"] == "1001"
    assert body["mobileNumber"] == "9876543210"
    assert body["isUpdated"] is False

    fetched = client.get(f"/api/leads/{body['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["clientName"] == "Raj Patel"


def test_create_requires_identity_fields(client):
    response = client.post("/api/leads", json={"kva": "150"})
    assert response.status_code == 422


def test_missing_lead_is_404(client):
    assert client.get("/api/leads/missing").status_code == 404
    assert client.patch("/api/leads/missing", json={"notes": "x"}).status_code == 404
    assert client.delete("/api/leads/missing").status_code == 404


def test_feed_filters(client, store):
    seed(
        store,
        make_lead(id="a", status="Busy", discom="DGVCL"),
        make_lead(id="b", status="CNR", discom="MGVCL"),
        make_lead(id="c", status="Busy", is_updated=True),
        make_lead(id="d", status="Busy", is_deleted=True),
    )

    assert [lead["id"] for lead in client.get("/api/leads").json()] == ["a", "b"]
    assert [lead["id"] for lead in client.get("/api/leads", params={"status": "Busy"}).json()] == ["a", "c"]
    assert [lead["id"] for lead in client.get("/api/leads", params={"discom": "mgvcl"}).json()] == ["b"]
    assert [lead["id"] for lead in client.get("/api/leads/all").json()] == ["d", "a", "b", "c"]


def test_update_delete_done_restore(client, store):
    seed(store, make_lead(id="a"), make_lead(id="b"))

    response = client.patch("/api/leads/a", json={"status": "Follow-up", "followUpDate": "2024-02-01"})
    assert response.status_code == 200
    assert response.json()["followUpDate"] == "01-02-2024"
    assert response.json()["isUpdated"] is True

    assert client.post("/api/leads/b/done").json()["isDone"] is True
    assert client.delete("/api/leads/a").status_code == 204

    restored = client.post("/api/leads/restore", json={"leadIds": ["a"]})
    assert restored.json()["count"] == 1

    reset = client.post("/api/leads/reset-updated")
    assert reset.json()["count"] == 1
    assert [lead["id"] for lead in client.get("/api/leads").json()] == ["a"]


def test_add_activity(client, store):
    seed(store, make_lead(id="a"))
    response = client.post("/api/leads/a/activities", json={"description": "Called"})
    assert response.status_code == 201
    assert response.json()["leadId"] == "a"
    assert client.post("/api/leads/a/activities", json={"description": ""}).status_code == 422


def test_purge(client, store):
    seed(store, make_lead(id="a"), make_lead(id="b"))

    rejected = client.post("/api/leads/purge", json={"leadIds": ["a"], "password": "nope"})
    assert rejected.status_code == 403

    accepted = client.post("/api/leads/purge", json={"leadIds": ["a"], "password": settings.PURGE_PASSWORD})
    assert accepted.json()["count"] == 1
    assert [lead["id"] for lead in client.get("/api/leads/all").json()] == ["b"]


def test_import_and_stats(client):
    response = client.post("/api/leads/import", files={"file": ("leads.csv", CSV, "text/csv")})
    assert response.status_code == 200
    assert response.json() == {"totalRows": 2, "imported": 2, "skipped": 0}

    stats = client.get("/api/leads/stats").json()
    assert stats["summary"]["totalLeads"] == 2
    assert stats["byStatus"]["Busy"] == 1
    assert stats["byStatus"]["Hotlead"] == 1


def test_import_rejects_unreadable_source(client):
    response = client.post("/api/leads/import", files={"file": ("leads.pdf", b"%PDF", "application/pdf")})
    assert response.status_code == 422

    header_only = client.post("/api/leads/import", files={"file": ("leads.csv", b"con.no,KVA\n", "text/csv")})
    assert header_only.status_code == 422


def test_export(client, store):
    seed(store, make_lead(id="a", consumer_number="1001"))

    csv_response = client.get("/api/leads/export")
    assert csv_response.headers["content-type"].startswith("text/csv")
    assert csv_response.text.splitlines()[1].startswith("1001,")

    xlsx_response = client.get("/api/leads/export", params={"format": "xlsx"})
    sheet = load_workbook(io.BytesIO(xlsx_response.content)).active
    assert sheet["A2"].value == "1001"

    assert client.get("/api/leads/export", params={"format": "pdf"}).status_code == 422


def test_upcoming_and_mandates(client, store):
    seed(
        store,
        make_lead(id="m", status="Mandate Sent"),
        make_lead(id="n", status="New"),
    )
    assert [lead["id"] for lead in client.get("/api/leads/mandates").json()] == ["m"]
    assert client.get("/api/leads/upcoming").status_code == 200


def test_saved_views(client):
    created = client.post("/api/views", json={"name": "Busy", "filters": {"status": ["Busy"], "discom": "DGVCL"}})
    assert created.status_code == 201
    view_id = created.json()["id"]

    views = client.get("/api/views").json()
    assert views[0]["filters"]["discom"] == "DGVCL"

    assert client.post("/api/views", json={"name": " "}).status_code == 422
    assert client.delete(f"/api/views/{view_id}").status_code == 204
    assert client.delete(f"/api/views/{view_id}").status_code == 404
