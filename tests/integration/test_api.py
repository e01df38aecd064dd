"""Integration tests for API endpoints."""

from __future__ import annotations

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.models import Base
from app.main import app
from app.db.engine import get_db


@pytest_asyncio.fixture
async def client():
    """Create a test client backed by an in-memory database."""
    test_engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    test_factory = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async def override_get_db():
        async with test_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
    await test_engine.dispose()


async def _technician(client, name, **extra):
    r = await client.post("/api/technicians", json={"name": name, **extra})
    assert r.status_code == 201
    return r.json()


async def _team(client, name, technician_ids=(), box="CAIXA-01"):
    r = await client.post(
        "/api/teams", json={"name": name, "technicianIds": list(technician_ids), "boxNumber": box},
    )
    assert r.status_code == 201, r.json()
    return r.json()


async def _order(client, code, **extra):
    r = await client.post("/api/service-orders", json={"code": code, "type": "LOSS", **extra})
    assert r.status_code == 201, r.json()
    return r.json()


@pytest.mark.asyncio
async def test_health(client):
    r = await client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


# ── Technicians ──────────────────────────────────────────

@pytest.mark.asyncio
async def test_technician_crud(client):
    tech = await _technician(client, "Hugo Silva", cities=["UBA-MG"], neighborhoods=["Centro"])
    assert tech["isActive"] is True
    assert tech["cities"] == ["UBA-MG"]
    assert "createdAt" in tech

    r = await client.get(f"/api/technicians/{tech['id']}")
    assert r.status_code == 200
    assert r.json()["name"] == "Hugo Silva"

    r = await client.put(f"/api/technicians/{tech['id']}", json={"neighborhoods": ["Centro", "Aeroporto"]})
    assert r.status_code == 200
    assert r.json()["neighborhoods"] == ["Centro", "Aeroporto"]
    assert r.json()["name"] == "Hugo Silva"

    r = await client.delete(f"/api/technicians/{tech['id']}")
    assert r.status_code == 204

    r = await client.get("/api/technicians")
    assert r.json() == []
    r = await client.get(f"/api/technicians/{tech['id']}")
    assert r.json()["isActive"] is False


@pytest.mark.asyncio
async def test_technician_not_found(client):
    r = await client.get("/api/technicians/missing")
    assert r.status_code == 404
    assert r.json() == {"message": "Technician not found"}


@pytest.mark.asyncio
async def test_invalid_body_returns_400(client):
    r = await client.post("/api/technicians", json={"cities": []})
    assert r.status_code == 400
    body = r.json()
    assert body["message"] == "Invalid request data"
    assert body["errors"]


@pytest.mark.asyncio
async def test_available_technicians(client):
    hugo = await _technician(client, "hugo")
    ana = await _technician(client, "Ana")
    busy = await _technician(client, "Zeca")
    await _team(client, "EQUIPE 1", [busy["id"]])

    r = await client.get("/api/technicians/available")
    assert r.status_code == 200
    assert [t["id"] for t in r.json()] == [ana["id"], hugo["id"]]


# ── Teams ────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_team_rejects_double_booked_technician(client):
    hugo = await _technician(client, "Hugo")
    await _team(client, "EQUIPE 1", [hugo["id"]])

    r = await client.post(
        "/api/teams", json={"name": "EQUIPE 2", "technicianIds": [hugo["id"]], "boxNumber": "CAIXA-02"},
    )
    assert r.status_code == 400
    assert "Hugo" in r.json()["message"]
    assert "EQUIPE 1" in r.json()["message"]


@pytest.mark.asyncio
async def test_team_size_limit(client):
    ids = [(await _technician(client, f"T{i}"))["id"] for i in range(4)]
    r = await client.post("/api/teams", json={"name": "EQUIPE", "technicianIds": ids, "boxNumber": "CAIXA"})
    assert r.status_code == 400
    assert "at most 3" in r.json()["message"]


@pytest.mark.asyncio
async def test_team_update_and_soft_delete(client):
    a = await _technician(client, "A")
    b = await _technician(client, "B")
    team = await _team(client, "EQUIPE 1", [a["id"]])

    r = await client.put(f"/api/teams/{team['id']}", json={"technicianIds": [a["id"], b["id"]], "notes": "Tarde"})
    assert r.status_code == 200
    assert r.json()["technicianIds"] == [a["id"], b["id"]]
    assert r.json()["notes"] == "Tarde"

    r = await client.delete(f"/api/teams/{team['id']}")
    assert r.status_code == 204

    r = await client.get("/api/teams")
    assert len(r.json()) == 1
    assert r.json()[0]["isActive"] is False

    # members of an inactive team are free again
    await _team(client, "EQUIPE 2", [a["id"]], box="CAIXA-02")


@pytest.mark.asyncio
async def test_substitute_technician(client):
    a = await _technician(client, "A")
    b = await _technician(client, "B")
    c = await _technician(client, "C")
    d = await _technician(client, "D")
    team = await _team(client, "EQUIPE 1", [a["id"], b["id"]])
    await _team(client, "EQUIPE 2", [d["id"]], box="CAIXA-02")

    body = {"teamId": team["id"], "oldTechnicianId": a["id"], "newTechnicianId": c["id"]}
    r = await client.post("/api/teams/substitute", json=body)
    assert r.status_code == 200
    assert r.json()["technicianIds"] == [c["id"], b["id"]]

    body = {"teamId": team["id"], "oldTechnicianId": b["id"], "newTechnicianId": d["id"]}
    r = await client.post("/api/teams/substitute", json=body)
    assert r.status_code == 400
    assert "EQUIPE 2" in r.json()["message"]

    body = {"teamId": team["id"], "oldTechnicianId": a["id"], "newTechnicianId": d["id"]}
    r = await client.post("/api/teams/substitute", json=body)
    assert r.status_code == 400

    body = {"teamId": "missing", "oldTechnicianId": a["id"], "newTechnicianId": c["id"]}
    r = await client.post("/api/teams/substitute", json=body)
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_team_summary(client):
    team = await _team(client, "EQUIPE 1")
    await _order(client, "1", teamId=team["id"], scheduledDate="2025-09-05", status="Concluído")
    await _order(client, "2", teamId=team["id"], scheduledDate="2025-09-05", status="Cancelado")
    await _order(client, "3", teamId=team["id"], scheduledDate="2025-09-06")

    r = await client.get("/api/teams/summary", params={"date": "2025-09-05"})
    assert r.status_code == 200
    [summary] = r.json()
    assert summary["total"] == 2
    assert summary["counts"]["Concluído"] == 1
    assert summary["allCompleted"] is True

    r = await client.get("/api/teams/summary")
    assert r.json()[0]["allCompleted"] is False


# ── Service orders ───────────────────────────────────────

@pytest.mark.asyncio
async def test_service_order_crud_and_search(client):
    order = await _order(client, "139390", scheduledDate="2025-09-05", scheduledTime="08:00")
    assert order["status"] == "Pendente"
    assert order["reminderEnabled"] is True

    r = await client.get("/api/service-orders/search/139390")
    assert r.status_code == 200
    assert r.json()["id"] == order["id"]

    r = await client.get("/api/service-orders/search/000")
    assert r.status_code == 404

    r = await client.put(f"/api/service-orders/{order['id']}", json={"status": "Concluído"})
    assert r.status_code == 200
    assert r.json()["status"] == "Concluído"
    assert r.json()["scheduledTime"] == "08:00"

    r = await client.delete(f"/api/service-orders/{order['id']}")
    assert r.status_code == 204
    r = await client.get(f"/api/service-orders/{order['id']}")
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_duplicate_service_order_code(client):
    await _order(client, "111")
    r = await client.post("/api/service-orders", json={"code": "111", "type": "UPGRADE"})
    assert r.status_code == 400
    assert r.json()["message"] == "Invalid service order data"

    r = await client.get("/api/service-orders")
    assert len(r.json()) == 1


@pytest.mark.asyncio
async def test_invalid_status_rejected(client):
    r = await client.post("/api/service-orders", json={"code": "1", "type": "LOSS", "status": "Feito"})
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_list_filters_and_team_lookup(client):
    team = await _team(client, "EQUIPE 1")
    await _order(client, "m", teamId=team["id"], scheduledDate="2025-09-05", scheduledTime="09:00")
    await _order(client, "t", teamId=team["id"], scheduledDate="2025-09-05", scheduledTime="14:00")
    await _order(client, "x", scheduledDate="2025-09-05")
    await _order(client, "o", scheduledDate="2025-09-06", status="Concluído")

    r = await client.get("/api/service-orders", params={"date": "2025-09-05", "shift": "Manhã"})
    assert sorted(o["code"] for o in r.json()) == ["m", "x"]

    r = await client.get("/api/service-orders", params={"teamId": team["id"]})
    assert sorted(o["code"] for o in r.json()) == ["m", "t"]

    r = await client.get("/api/service-orders", params={"status": "Concluído"})
    assert [o["code"] for o in r.json()] == ["o"]

    r = await client.get(f"/api/service-orders/team/{team['id']}")
    assert len(r.json()) == 2


@pytest.mark.asyncio
async def test_reallocate_clears_technician(client):
    tech = await _technician(client, "Hugo")
    src = await _team(client, "EQUIPE 1")
    dst = await _team(client, "EQUIPE 2", box="CAIXA-02")
    a = await _order(client, "a", teamId=src["id"], technicianId=tech["id"])
    b = await _order(client, "b", teamId=src["id"], technicianId=tech["id"])

    r = await client.post(
        "/api/service-orders/reallocate",
        json={"serviceOrderIds": [a["id"], "missing"], "newTeamId": dst["id"]},
    )
    assert r.status_code == 200
    [moved] = r.json()
    assert moved["teamId"] == dst["id"]
    assert moved["technicianId"] is None

    r = await client.post(
        "/api/service-orders/reallocate",
        json={"serviceOrderIds": [b["id"]], "newTeamId": dst["id"], "clearTechnician": False},
    )
    assert r.json()[0]["technicianId"] == tech["id"]


@pytest.mark.asyncio
async def test_reallocate_validation(client):
    r = await client.post("/api/service-orders/reallocate", json={"serviceOrderIds": "x", "newTeamId": "t"})
    assert r.status_code == 400

    r = await client.post("/api/service-orders/reallocate", json={"serviceOrderIds": [], "newTeamId": "nope"})
    assert r.status_code == 400
    assert r.json()["message"] == "Target team not found"


@pytest.mark.asyncio
async def test_alerts_and_dismissal(client):
    order = await _order(client, "1", alert="Ligar antes", scheduledDate="2025-09-05")
    await _order(client, "2", alert="Portão azul", scheduledDate="2025-09-06")
    await _order(client, "3", scheduledDate="2025-09-05")

    r = await client.get("/api/service-orders/alerts", params={"date": "2025-09-05"})
    assert [o["code"] for o in r.json()] == ["1"]

    r = await client.post(f"/api/service-orders/{order['id']}/dismiss-alert", json={"reason": "  "})
    assert r.status_code == 400

    r = await client.post(f"/api/service-orders/{order['id']}/dismiss-alert", json={"reason": "cliente avisado"})
    assert r.status_code == 200
    assert r.json()["alert"] == ""
    assert r.json()["description"] == "Alerta excluído: cliente avisado"

    r = await client.get("/api/service-orders/alerts")
    assert [o["code"] for o in r.json()] == ["2"]


@pytest.mark.asyncio
async def test_reminders(client):
    await _order(client, "1", scheduledDate="2025-09-06", createdViaCalendar=True)
    await _order(client, "2", scheduledDate="2025-09-06")
    await _order(client, "3", scheduledDate="2025-09-06", createdViaCalendar=True, reminderEnabled=False)

    r = await client.get("/api/service-orders/reminders", params={"today": "2025-09-05"})
    assert r.status_code == 200
    assert [o["code"] for o in r.json()] == ["1"]


@pytest.mark.asyncio
async def test_suggest(client):
    for code in ("139390", "139391", "200000"):
        await _order(client, code)

    r = await client.get("/api/service-orders/suggest", params={"q": "1"})
    assert r.json() == []

    r = await client.get("/api/service-orders/suggest", params={"q": "1393"})
    assert sorted(o["code"] for o in r.json()) == ["139390", "139391"]


@pytest.mark.asyncio
async def test_calendar(client):
    await _order(client, "1", scheduledDate="2025-09-01")
    await _order(client, "2", scheduledDate="2025-09-30")
    await _order(client, "3", scheduledDate="2025-10-01")

    r = await client.get("/api/service-orders/calendar", params={"month": "2025-09"})
    assert r.status_code == 200
    assert set(r.json()) == {"2025-09-01", "2025-09-30"}

    r = await client.get("/api/service-orders/calendar", params={"month": "2025-13"})
    assert r.status_code == 400


# ── Reports ──────────────────────────────────────────────

@pytest.mark.asyncio
async def test_report_crud(client):
    r = await client.post(
        "/api/reports",
        json={"name": "Agenda", "date": "2025-09-05", "shift": "Manhã", "content": "texto"},
    )
    assert r.status_code == 201
    report = r.json()

    r = await client.get(f"/api/reports/{report['id']}")
    assert r.json()["content"] == "texto"

    r = await client.delete(f"/api/reports/{report['id']}")
    assert r.status_code == 204
    r = await client.get(f"/api/reports/{report['id']}")
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_report_history(client):
    for day in ("2025-09-01", "2025-09-05", "2025-09-10"):
        await client.post("/api/reports", json={"name": day, "date": day, "shift": "Tarde", "content": ""})

    r = await client.get("/api/reports/history", params={"today": "2025-09-05"})
    assert r.status_code == 200
    data = r.json()
    assert [x["date"] for x in data["past"]] == ["2025-09-01"]
    assert [x["date"] for x in data["upcoming"]] == ["2025-09-10", "2025-09-05"]


@pytest.mark.asyncio
async def test_generate_report(client):
    team = await _team(client, "EQUIPE 1")
    await _order(client, "139390", type="ATIVAÇÃO", teamId=team["id"], scheduledDate="2025-09-05")

    r = await client.post("/api/reports/generate", json={
        "name": "Agenda sexta",
        "date": "2025-09-05",
        "shift": "Manhã",
        "newServiceOrders": [
            {"code": "333333", "type": "LOSS", "teamId": team["id"]},
            {"code": "139390", "type": "LOSS", "teamId": team["id"]},
        ],
        "save": True,
    })
    assert r.status_code == 200, r.json()
    data = r.json()
    dashes = "-" * 57
    assert data["content"] == (
        "Serviços da Agenda: 05/09/2025 - TURNO: MANHÃ\n"
        f"{dashes}\n"
        "EQUIPE 1: (CAIXA-01)\n"
        "- 139390 ATIVAÇÃO\n"
        "- 333333 LOSS\n"
        f"{dashes}\n"
    )
    assert [o["code"] for o in data["createdOrders"]] == ["333333"]
    assert data["skippedOrders"] == ["139390"]
    assert data["report"]["content"] == data["content"]

    r = await client.get("/api/reports")
    assert len(r.json()) == 1


@pytest.mark.asyncio
async def test_generate_report_assignment_conflict(client):
    hugo = await _technician(client, "Hugo")
    t1 = await _team(client, "EQUIPE 1")
    t2 = await _team(client, "EQUIPE 2", box="CAIXA-02")

    r = await client.post("/api/reports/generate", json={
        "name": "Agenda", "date": "2025-09-05", "shift": "Tarde",
        "assignments": [
            {"teamId": t1["id"], "technicianIds": [hugo["id"]]},
            {"teamId": t2["id"], "technicianIds": [hugo["id"]]},
        ],
    })
    assert r.status_code == 400
    assert "Hugo" in r.json()["message"]


# ── Reference data ───────────────────────────────────────

@pytest.mark.asyncio
async def test_cities_and_duplicate_name(client):
    r = await client.post("/api/cities", json={"name": "UBA-MG"})
    assert r.status_code == 201
    city = r.json()

    r = await client.post("/api/cities", json={"name": "UBA-MG"})
    assert r.status_code == 400
    assert r.json()["message"] == "Invalid city data"

    r = await client.delete(f"/api/cities/{city['id']}")
    assert r.status_code == 204
    r = await client.get("/api/cities")
    assert r.json() == []


@pytest.mark.asyncio
async def test_neighborhoods_by_city_and_import(client):
    city = (await client.post("/api/cities", json={"name": "UBA-MG"})).json()

    r = await client.post("/api/neighborhoods", json={"name": "Centro", "cityId": city["id"]})
    assert r.status_code == 201

    r = await client.post("/api/neighborhoods", json={"name": "Centro", "cityId": "missing"})
    assert r.status_code == 400

    r = await client.post(
        "/api/neighborhoods/import",
        json={"cityId": city["id"], "names": "centro, Aeroporto, Vitória,, Aeroporto"},
    )
    assert r.status_code == 201
    data = r.json()
    assert [n["name"] for n in data["created"]] == ["Aeroporto", "Vitória"]
    assert data["skipped"] == ["centro"]

    r = await client.get(f"/api/neighborhoods/city/{city['id']}")
    assert [n["name"] for n in r.json()] == ["Aeroporto", "Centro", "Vitória"]

    r = await client.post("/api/neighborhoods/import", json={"cityId": city["id"], "names": "Centro"})
    assert r.status_code == 400

    r = await client.post("/api/neighborhoods/import", json={"cityId": "missing", "names": "X"})
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_service_types(client):
    r = await client.post("/api/service-types", json={"name": "ATIVAÇÃO"})
    assert r.status_code == 201
    st = r.json()

    r = await client.post("/api/service-types", json={"name": "ATIVAÇÃO"})
    assert r.status_code == 400

    r = await client.put(f"/api/service-types/{st['id']}", json={"name": "ATIVACAO"})
    assert r.json()["name"] == "ATIVACAO"

    r = await client.delete(f"/api/service-types/{st['id']}")
    assert r.status_code == 204
    assert (await client.get("/api/service-types")).json() == []


# ── Export ───────────────────────────────────────────────

@pytest.mark.asyncio
async def test_export(client):
    team = await _team(client, "EQUIPE 1")
    await _order(client, "1", teamId=team["id"])

    r = await client.get("/api/export")
    assert r.status_code == 200
    assert "dashboard-export.json" in r.headers["content-disposition"]
    data = r.json()
    assert [t["name"] for t in data["teams"]] == ["EQUIPE 1"]
    assert data["serviceOrders"][0]["teamId"] == team["id"]
    assert data["reports"] == []


# ── Input normalisation and updates ──────────────────────

@pytest.mark.asyncio
async def test_blank_required_fields_rejected(client):
    r = await client.post("/api/service-orders", json={"code": "   ", "type": "LOSS"})
    assert r.status_code == 400
    assert r.json()["message"] == "Invalid request data"

    r = await client.post("/api/technicians", json={"name": "   "})
    assert r.status_code == 400

    r = await client.post("/api/cities", json={"name": "  "})
    assert r.status_code == 400

    r = await client.post("/api/service-types", json={"name": " "})
    assert r.status_code == 400

    r = await client.post("/api/teams", json={"name": " ", "technicianIds": [], "boxNumber": "CAIXA-01"})
    assert r.status_code == 400

    r = await client.post(
        "/api/reports", json={"name": "  ", "date": "2025-09-05", "shift": "Manhã", "content": ""},
    )
    assert r.status_code == 400

    assert (await client.get("/api/service-orders")).json() == []
    assert (await client.get("/api/technicians")).json() == []


@pytest.mark.asyncio
async def test_names_stored_trimmed(client):
    order = await _order(client, " 139390 ")
    assert order["code"] == "139390"
    r = await client.get("/api/service-orders/search/139390")
    assert r.status_code == 200

    tech = await _technician(client, "  Hugo  ")
    assert tech["name"] == "Hugo"


@pytest.mark.asyncio
async def test_reactivating_team_rechecks_members(client):
    a = await _technician(client, "A")
    team1 = await _team(client, "EQUIPE 1", [a["id"]])

    r = await client.delete(f"/api/teams/{team1['id']}")
    assert r.status_code == 204
    await _team(client, "EQUIPE 2", [a["id"]], box="CAIXA-02")

    r = await client.put(f"/api/teams/{team1['id']}", json={"isActive": True})
    assert r.status_code == 400
    assert "EQUIPE 2" in r.json()["message"]

    r = await client.get(f"/api/teams/{team1['id']}")
    assert r.json()["isActive"] is False


@pytest.mark.asyncio
async def test_service_order_update_is_idempotent(client):
    team = await _team(client, "EQUIPE 1")
    order = await _order(client, "139390")
    body = {"status": "Reagendado", "teamId": team["id"], "scheduledDate": "2025-09-06", "alert": "Ligar"}

    first = await client.put(f"/api/service-orders/{order['id']}", json=body)
    second = await client.put(f"/api/service-orders/{order['id']}", json=body)
    assert first.status_code == 200
    assert second.status_code == 200
    assert first.json() == second.json()
    assert second.json()["status"] == "Reagendado"


@pytest.mark.asyncio
async def test_team_update_is_idempotent(client):
    a = await _technician(client, "A")
    b = await _technician(client, "B")
    team = await _team(client, "EQUIPE 1", [a["id"]])
    body = {"technicianIds": [a["id"], b["id"]], "boxNumber": "CAIXA-07"}

    first = await client.put(f"/api/teams/{team['id']}", json=body)
    second = await client.put(f"/api/teams/{team['id']}", json=body)
    assert first.status_code == 200
    assert second.status_code == 200
    assert first.json() == second.json()
    assert second.json()["technicianIds"] == [a["id"], b["id"]]


@pytest.mark.asyncio
async def test_service_order_patch(client):
    tech = await _technician(client, "Hugo")
    order = await _order(client, "139390", technicianId=tech["id"], scheduledTime="08:00")

    r = await client.patch(f"/api/service-orders/{order['id']}", json={"status": "Concluído"})
    assert r.status_code == 200
    assert r.json()["status"] == "Concluído"
    assert r.json()["scheduledTime"] == "08:00"

    r = await client.patch(f"/api/service-orders/{order['id']}", json={"technicianId": None})
    assert r.json()["technicianId"] is None

    r = await client.patch("/api/service-orders/missing", json={"status": "Concluído"})
    assert r.status_code == 404
