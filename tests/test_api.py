"""API route tests."""

import pytest
from fastapi.testclient import TestClient

from api import game_store, main as api_main
from api.game_store import get as store_get, set_backing_store
from api.main import app
from undercover.rules import Role
from undercover.storage import MemoryStore

client = TestClient(app)

NAMES = ["Alice", "Bob", "Carol", "Dave"]


@pytest.fixture(autouse=True)
def fresh_store():
    """Every test gets its own score/used-words store."""
    set_backing_store(MemoryStore())
    yield
    set_backing_store(None)


def _create(language: str | None = None) -> str:
    r = client.post("/games", json={"language": language} if language else {})
    assert r.status_code == 200
    return r.json()["game_id"]


def _start(gid: str, names=NAMES, settings=None) -> dict:
    body = {"names": names}
    if settings is not None:
        body["settings"] = settings
    r = client.post(f"/games/{gid}/start", json=body)
    assert r.status_code == 200, r.text
    return r.json()


def _to_voting(gid: str) -> dict:
    client.post(f"/games/{gid}/reveal/finish")
    client.post(f"/games/{gid}/voting/open")
    r = client.post(f"/games/{gid}/voting/countdown-finished")
    assert r.status_code == 200
    return r.json()


def _ids_with_role(gid: str, role: Role) -> list[str]:
    return [p.id for p in store_get(gid).state.players if p.role == role]


def test_health():
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_create_game_in_setup():
    gid = _create()
    r = client.get(f"/games/{gid}")
    assert r.status_code == 200
    data = r.json()
    assert data["game_id"] == gid
    assert data["phase"] == "setup"
    assert data["language"] == "en"
    assert data["players"] == []
    assert gid in client.get("/games").json()


def test_create_game_rejects_unknown_language():
    r = client.post("/games", json={"language": "de"})
    assert r.status_code == 422


def test_get_game_404():
    assert client.get("/games/nonexistent-id").status_code == 404
    assert client.post("/games/nonexistent-id/reveal/finish").status_code == 404


def test_start_with_recommended_settings():
    gid = _create()
    data = _start(gid, names=["A", "B", "C", "D", "E"])
    assert data["phase"] == "reveal"
    assert len(data["players"]) == 5
    assert sorted(p["turn_position"] for p in data["players"]) == [1, 2, 3, 4, 5]
    assert all(p["role"] is None for p in data["players"])
    roles = [p.role for p in store_get(gid).state.players]
    assert roles.count(Role.MR_WHITE) == 1
    assert roles.count(Role.UNDERCOVER) == 1


def test_start_invalid_settings_returns_400():
    gid = _create()
    r = client.post(
        f"/games/{gid}/start",
        json={"names": NAMES, "settings": {"civils": 2, "undercovers": 1, "mr_whites": 1}},
    )
    assert r.status_code == 400
    assert client.get(f"/games/{gid}").json()["phase"] == "setup"


def test_start_validation_errors():
    gid = _create()
    assert client.post(f"/games/{gid}/start", json={"names": ["A", "B"]}).status_code == 422
    assert client.post(f"/games/{gid}/start", json={"names": ["A", " ", "C"]}).status_code == 422


def test_wrong_phase_returns_409():
    gid = _create()
    _start(gid)
    r = client.post(f"/games/{gid}/votes", json={"tally": {"player_0": 4}})
    assert r.status_code == 409
    r = client.post(f"/games/{gid}/mr-white/guess", json={"guess": "x"})
    assert r.status_code == 409


def test_reroll_keeps_roles():
    gid = _create()
    before = _start(gid)
    roles_before = [p.role for p in store_get(gid).state.players]
    r = client.post(f"/games/{gid}/reroll")
    assert r.status_code == 200
    after = r.json()
    assert [p["id"] for p in after["players"]] == [p["id"] for p in before["players"]]
    assert [p.role for p in store_get(gid).state.players] == roles_before


def test_full_game_civilians_win_and_scores_recorded():
    gid = _create()
    _start(gid, settings={"civils": 3, "undercovers": 1, "mr_whites": 0})
    data = _to_voting(gid)
    assert data["phase"] == "voting"
    assert len(data["ballot_ids"]) == 4

    undercover = _ids_with_role(gid, Role.UNDERCOVER)[0]
    r = client.post(f"/games/{gid}/votes", json={"tally": {undercover: 4}})
    assert r.status_code == 200
    data = r.json()
    assert data["phase"] == "game_over"
    assert data["winner"]["role"] == "civil"
    assert len(data["winner"]["winner_names"]) == 3
    assert data["winner"]["message"]
    assert data["civil_word"]
    assert all(p["role"] is not None for p in data["players"])

    scores = client.get("/scores").json()
    assert sorted(s["score"] for s in scores) == [0, 2, 2, 2]
    assert len(client.get("/settings/names").json()) == 4

    r = client.post(f"/games/{gid}/reset")
    assert r.json()["phase"] == "setup"
    assert client.delete("/scores").status_code == 200
    assert client.get("/scores").json() == []


def test_tie_feedback_is_localized():
    gid = _create(language="fr")
    _start(gid, settings={"civils": 3, "undercovers": 1, "mr_whites": 0})
    _to_voting(gid)
    r = client.post(f"/games/{gid}/votes", json={"tally": {"player_0": 2, "player_1": 2}})
    data = r.json()
    assert data["phase"] == "voting"
    assert data["feedback"] == "tie_revote"
    assert data["feedback_message"] == "Égalité ! Nouveau vote."
    assert data["ballot_ids"] == ["player_0", "player_1"]

    r = client.post(f"/games/{gid}/votes", json={"tally": {"player_0": 2, "player_2": 2}})
    assert r.status_code == 400
    r = client.post(f"/games/{gid}/eliminate", json={"player_id": "player_3"})
    assert r.status_code == 409

    r = client.post(f"/games/{gid}/votes", json={"tally": {"player_0": 2, "player_1": 2}})
    data = r.json()
    assert data["phase"] == "discussion"
    assert data["feedback"] == "persistent_tie"
    assert data["feedback_message"] == "Égalité persistante !"


def test_partial_and_empty_ballots():
    gid = _create()
    _start(gid, settings={"civils": 3, "undercovers": 1, "mr_whites": 0})
    _to_voting(gid)
    assert client.post(f"/games/{gid}/votes", json={"tally": {"player_0": 1}}).status_code == 400
    assert client.post(f"/games/{gid}/votes", json={"tally": {"player_0": -1}}).status_code == 422
    r = client.post(f"/games/{gid}/votes", json={"tally": {}})
    assert r.status_code == 200
    assert r.json()["phase"] == "voting"


def test_mr_white_guess_flow():
    gid = _create()
    _start(gid, names=["A", "B", "C", "D", "E"], settings={"civils": 3, "undercovers": 1, "mr_whites": 1})
    _to_voting(gid)
    mr_white = _ids_with_role(gid, Role.MR_WHITE)[0]
    r = client.post(f"/games/{gid}/eliminate", json={"player_id": mr_white})
    assert r.json()["phase"] == "mr_white_guess"
    assert r.json()["eliminated_player_id"] == mr_white

    civil_word = store_get(gid).state.word_pair.civil
    r = client.post(f"/games/{gid}/mr-white/guess", json={"guess": f"  {civil_word.upper()} "})
    data = r.json()
    assert data["phase"] == "game_over"
    assert data["winner"]["role"] == "mr_white"
    guess_event = data["events"][-2]
    assert guess_event["kind"] == "mr_white_guess"
    assert guess_event["extra"] == {"correct": True}
    assert data["events"][-1]["extra"]["role"] == "mr_white"
    mr_white_name = store_get(gid).state.get_player(mr_white).name
    assert {"name": mr_white_name, "score": 10} in client.get("/scores").json()


def test_elimination_result_then_acknowledge():
    gid = _create()
    _start(gid, names=["A", "B", "C", "D", "E"], settings={"civils": 4, "undercovers": 1, "mr_whites": 0})
    _to_voting(gid)
    civil = _ids_with_role(gid, Role.CIVIL)[0]
    r = client.post(f"/games/{gid}/eliminate", json={"player_id": civil})
    data = r.json()
    assert data["phase"] == "elimination_result"
    eliminated = next(p for p in data["players"] if p["id"] == civil)
    assert eliminated["role"] == "civil"
    assert civil not in data["discussion_order"]

    r = client.post(f"/games/{gid}/elimination/acknowledge")
    data = r.json()
    assert data["phase"] == "discussion"
    assert data["round_index"] == 1
    assert data["discussion_order"][0] == data["starting_player_id"]


def test_language_switch_only_in_setup():
    gid = _create()
    r = client.post(f"/games/{gid}/language", json={"language": "fr"})
    assert r.status_code == 200
    assert r.json()["language"] == "fr"
    _start(gid)
    r = client.post(f"/games/{gid}/language", json={"language": "en"})
    assert r.status_code == 409


def test_recommended_settings_and_word_stock():
    r = client.get("/settings/recommended", params={"num_players": 8})
    assert r.json() == {"civils": 5, "undercovers": 2, "mr_whites": 1}
    assert client.get("/settings/recommended", params={"num_players": 2}).status_code == 422

    gid = _create()
    stock = client.get("/words/en").json()
    assert stock["remaining"] == stock["total"]
    _start(gid)
    stock = client.get("/words/en", params={"game_id": gid}).json()
    assert stock["remaining"] == stock["total"] - 1
    assert client.get("/words/de").status_code == 404


def test_delete_game():
    gid = _create()
    assert client.delete(f"/games/{gid}").status_code == 200
    assert game_store.get(gid) is None


def test_logging_configured_on_startup_not_import(monkeypatch):
    calls = []
    monkeypatch.setattr(api_main, "configure_logging", lambda: calls.append(1))
    assert calls == []
    with TestClient(app) as started:
        assert calls == [1]
        assert started.get("/health").status_code == 200
