from datetime import date
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from squadledger.api import create_app
from squadledger.config_loader import SeedProfile, Settings


SAMPLE_SEED = Path(__file__).resolve().parents[1] / "seed.sample.json"


@pytest.fixture
async def client():
    app = create_app(store=SeedProfile.load(SAMPLE_SEED).build_store(), settings=Settings())
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        async_client.app = app
        yield async_client


def _player_payload(**overrides) -> dict:
    payload = {
        "name": "New Player",
        "date_of_birth": "2004-05-06",
        "position": "Defender",
        "payment_method": "Cash",
        "amount_paid": 25,
        "team_ids": ["t1"],
    }
    payload.update(overrides)
    return payload


@pytest.mark.anyio
async def test_health(client: AsyncClient):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


@pytest.mark.anyio
async def test_create_app_uses_injected_store(client: AsyncClient):
    store = client.app.state.store
    resp = await client.get("/players")

    assert [item["id"] for item in resp.json()] == [player.id for player in store.players]


@pytest.mark.anyio
async def test_team_financials_and_overall(client: AsyncClient):
    team = (await client.get("/teams/t1/financials")).json()
    overall = (await client.get("/financials")).json()
    unknown = (await client.get("/teams/missing/financials")).json()

    assert team == {"total_collected": 100.0, "total_owed": 50.0, "balance": 50.0}
    assert overall == {"total_collected": 115.0, "total_owed": 170.0, "balance": -55.0}
    assert unknown == {"total_collected": 0.0, "total_owed": 0.0, "balance": 0.0}


@pytest.mark.anyio
async def test_list_and_get_teams(client: AsyncClient):
    teams = (await client.get("/teams")).json()
    assert [item["player_count"] for item in teams] == [3, 3]

    assert (await client.get("/teams/missing")).status_code == 404
    assert (await client.get("/teams/missing/players")).json() == []


@pytest.mark.anyio
async def test_create_player_and_reject_invalid(client: AsyncClient):
    resp = await client.post("/players", json=_player_payload())
    assert resp.status_code == 201
    created = resp.json()
    assert created["id"]
    assert created["eligibility"] == "Eligible"

    roster = (await client.get("/teams/t1/players")).json()
    assert created["id"] in {item["id"] for item in roster}

    resp = await client.post("/players", json=_player_payload(name=" "))
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Please enter a player name"

    resp = await client.post("/players", json=_player_payload(amount_paid=-3))
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Amount cannot be negative"

    resp = await client.post("/players", json=_player_payload(team_ids=["nope"]))
    assert resp.status_code == 404


@pytest.mark.anyio
async def test_player_payment_updates(client: AsyncClient):
    resp = await client.put("/players/p1/payment", json={"amount": 40, "method": "venmo"})
    assert resp.status_code == 200
    assert (resp.json()["amount_paid"], resp.json()["payment_method"]) == (40.0, "Venmo")

    resp = await client.put("/players/p1/amount", json={"amount": -1})
    assert resp.status_code == 400

    resp = await client.put("/players/p1/payment-method", json={"method": "Card"})
    assert resp.json()["payment_method"] == "Card"

    resp = await client.put("/players/missing/amount", json={"amount": 1})
    assert resp.status_code == 404


@pytest.mark.anyio
async def test_eligibility_endpoints(client: AsyncClient):
    statuses = []
    for _ in range(4):
        resp = await client.post("/players/p1/eligibility/cycle")
        statuses.append(resp.json()["eligibility"])
    assert statuses == ["Ineligible", "Suspended", "Injured", "Eligible"]

    resp = await client.put("/players/p1/eligibility", json={"status": "Injured"})
    assert resp.json()["eligibility"] == "Injured"


@pytest.mark.anyio
async def test_team_debt_update_and_rejection(client: AsyncClient):
    resp = await client.put("/teams/t1/debt", json={"total_owed": -10})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Debt amount cannot be negative"
    assert (await client.get("/teams/t1")).json()["team"]["total_owed"] == 50.0

    resp = await client.put("/teams/t1/debt", json={"total_owed": 75})
    assert resp.json()["total_owed"] == 75.0


@pytest.mark.anyio
async def test_create_team(client: AsyncClient):
    resp = await client.post("/teams", json={"name": "Storm", "total_owed": 10, "formation": "5-3-2"})
    assert resp.status_code == 201
    assert resp.json()["formation"] == "5-3-2"

    resp = await client.post("/teams", json={"name": ""})
    assert resp.status_code == 400


@pytest.mark.anyio
async def test_payment_method_lifecycle(client: AsyncClient):
    resp = await client.post("/payment-methods", json={"name": "PayPal"})
    assert resp.status_code == 201
    method = resp.json()
    assert method["is_default"] is False

    size = len((await client.get("/payment-methods")).json())
    resp = await client.post("/payment-methods", json={"name": "paypal"})
    assert resp.status_code == 400
    assert len((await client.get("/payment-methods")).json()) == size

    resp = await client.put(f"/payment-methods/{method['id']}", json={"name": "cash"})
    assert resp.status_code == 400

    resp = await client.put(f"/payment-methods/{method['id']}", json={"name": "PayPal Business"})
    assert resp.json()["name"] == "PayPal Business"

    resp = await client.delete("/payment-methods/1")
    assert resp.status_code == 409
    assert resp.json()["detail"] == "Cannot delete default payment methods"

    resp = await client.delete(f"/payment-methods/{method['id']}")
    assert resp.json() == {"id": method["id"], "deleted": True}
    assert (await client.delete(f"/payment-methods/{method['id']}")).status_code == 404


@pytest.mark.anyio
async def test_gameday_and_export(client: AsyncClient):
    sheet = (await client.get("/teams/t1/gameday")).json()
    assert sheet["formation"] == "4-4-2"
    assert len(sheet["positions"]) == 11
    assert sheet["positions"][0]["player_id"] == "p3"

    resp = await client.get("/teams/t1/export.csv")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    assert "Alex Morgan" in resp.text


@pytest.mark.anyio
async def test_ui_index_renders_teams(client: AsyncClient):
    resp = await client.get("/ui")
    assert resp.status_code == 200
    assert "Overall Financial Summary" in resp.text
    assert "Lightning FC" in resp.text
    assert "Teams (2)" in resp.text
    assert "Deficit" in resp.text

    resp = await client.get("/ui?modal=add-player")
    assert "Add New Player" in resp.text


@pytest.mark.anyio
async def test_ui_add_player_redirects_and_rejects(client: AsyncClient):
    form = {
        "name": "Form Player",
        "date_of_birth": date(2003, 2, 1).isoformat(),
        "position": "Midfielder",
        "payment_method": "Card",
        "amount_paid": "12",
        "team_id": "t2",
        "redirect": "/ui/teams/t2",
    }
    resp = await client.post("/ui/players", data=form)
    assert resp.status_code == 303
    assert resp.headers["location"] == "/ui/teams/t2"
    names = [p.name for p in client.app.state.store.get_team_players("t2")]
    assert "Form Player" in names

    resp = await client.post("/ui/players", data={**form, "name": ""})
    assert resp.status_code == 400
    assert "Please enter a player name" in resp.text


@pytest.mark.anyio
async def test_ui_team_views(client: AsyncClient):
    detailed = await client.get("/ui/teams/t1?details=1")
    assert "Team Finances" in detailed.text
    assert "Hide Details" in detailed.text

    roster = await client.get("/ui/teams/t2?view=roster")
    assert "Defenders (1)" in roster.text
    assert "No forwards assigned" in roster.text

    gameday = await client.get("/ui/teams/t1?view=gameday")
    assert "Game Day Setup" in gameday.text
    assert "Formation: 4-4-2" in gameday.text

    missing = await client.get("/ui/teams/missing")
    assert missing.status_code == 404
    assert "Team not found" in missing.text


@pytest.mark.anyio
async def test_ui_debt_form(client: AsyncClient):
    resp = await client.post("/ui/teams/t1/debt", data={"total_owed": "-10"})
    assert resp.status_code == 400
    assert "Debt amount cannot be negative" in resp.text
    assert client.app.state.store.get_team("t1").total_owed == 50

    resp = await client.post("/ui/teams/t1/debt", data={"total_owed": "80"})
    assert resp.status_code == 303
    assert client.app.state.store.get_team("t1").total_owed == 80


@pytest.mark.anyio
async def test_ui_player_edits(client: AsyncClient):
    redirect = "/ui/teams/t1?view=detailed&details=1"
    resp = await client.post("/ui/players/p2/amount", data={"amount": "33", "redirect": redirect})
    assert resp.status_code == 303
    assert resp.headers["location"] == redirect

    resp = await client.post("/ui/players/p2/amount", data={"amount": "-1", "redirect": redirect})
    assert resp.status_code == 400
    assert "Amount cannot be negative" in resp.text

    await client.post("/ui/players/p2/payment-method", data={"method": "Check", "redirect": redirect})
    await client.post("/ui/players/p2/eligibility", data={"redirect": "https://evil.example"})

    player = client.app.state.store.get_player("p2")
    assert (player.amount_paid, player.payment_method, player.eligibility.value) == (33, "Check", "Ineligible")


@pytest.mark.anyio
async def test_ui_payment_methods(client: AsyncClient):
    page = await client.get("/ui/payment-methods")
    assert "Default payment methods cannot be deleted" in page.text

    resp = await client.post("/ui/payment-methods", data={"name": "venmo"})
    assert resp.status_code == 400
    assert "already exists" in resp.text

    resp = await client.post("/ui/payment-methods", data={"name": "Zelle"})
    assert resp.status_code == 303

    resp = await client.post("/ui/payment-methods/1/delete")
    assert resp.status_code == 400
    assert "Cannot delete default payment methods" in resp.text

    resp = await client.post("/ui/payment-methods/4", data={"name": " "})
    assert resp.status_code == 400
    assert "Please enter a valid name" in resp.text

    resp = await client.post("/ui/payment-methods/5/delete")
    assert resp.status_code == 303
    names = [m.name for m in client.app.state.store.payment_methods]
    assert names == ["Cash", "Card", "Transfer", "Venmo", "Zelle"]


@pytest.mark.anyio
@pytest.mark.parametrize("bad", ["nan", "inf", "-inf"])
async def test_non_finite_amounts_rejected(client: AsyncClient, bad: str):
    store = client.app.state.store

    resp = await client.put("/players/p1/amount", json={"amount": bad})
    assert resp.status_code == 422
    resp = await client.put("/players/p1/payment", json={"amount": bad, "method": "Cash"})
    assert resp.status_code == 422
    resp = await client.put("/teams/t1/debt", json={"total_owed": bad})
    assert resp.status_code == 422
    resp = await client.post("/players", json=_player_payload(amount_paid=bad))
    assert resp.status_code == 422
    resp = await client.post("/teams", json={"name": "Storm", "total_owed": bad})
    assert resp.status_code == 422

    assert store.get_player("p1").amount_paid == 30
    assert store.get_team("t1").total_owed == 50
    assert len(store.players) == 5
    assert len(store.teams) == 2
    overall = (await client.get("/financials")).json()
    assert overall == {"total_collected": 115.0, "total_owed": 170.0, "balance": -55.0}


@pytest.mark.anyio
async def test_ui_overflowing_amount_rejected(client: AsyncClient):
    huge = "9" * 400

    resp = await client.post("/ui/teams/t1/debt", data={"total_owed": huge})
    assert resp.status_code == 400
    assert "Please enter a valid amount" in resp.text
    assert client.app.state.store.get_team("t1").total_owed == 50

    resp = await client.post("/ui/players/p2/amount", data={"amount": huge, "redirect": "/ui/teams/t1"})
    assert resp.status_code == 400
    assert client.app.state.store.get_player("p2").amount_paid == 20


@pytest.mark.anyio
async def test_ui_payment_method_name_stays_out_of_script(client: AsyncClient):
    name = "x');alert(document.cookie);('"
    resp = await client.post("/ui/payment-methods", data={"name": name})
    assert resp.status_code == 303

    page = await client.get("/ui/payment-methods")
    assert 'data-name="x&#x27;);alert(document.cookie);(&#x27;"' in page.text
    for line in page.text.splitlines():
        if "onsubmit=" in line:
            assert "alert" not in line
            assert "this.dataset.name" in line
