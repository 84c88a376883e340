"""
Testing API via TestClient
- Trick: temporarily replace fetch_index / utcnow so the answer is predictable.
- Tool: pytest's "monkeypatch" fixture does that for just one test at a time.
"""

from datetime import datetime, timezone

import wordle_api.main as app_main
from wordle_api.daily import word_index

TODAY = datetime(2025, 8, 24, 12, 0, tzinfo=timezone.utc)


def pin_answer(monkeypatch, index=0):
    # Patch the bound symbol that main.py actually uses
    monkeypatch.setattr(app_main, "fetch_index", lambda size: index)


def pin_today(monkeypatch):
    monkeypatch.setattr(app_main, "utcnow", lambda: TODAY)


def daily_answer(store):
    answers = store.dictionary.answers
    return answers[word_index(TODAY, app_main.settings.daily_salt, len(answers))]


def test_start_normal_and_win(client, monkeypatch):
    """
    Flow:
    1) Start normal game; answer is "crane" due to patch.
    2) Bad shape -> 400 InvalidGuess, no round used.
    3) Unknown word -> 400 WordNotAllowed.
    4) Wrong guess -> marks.
    5) Winning guess -> 'won' and answer revealed.
    """
    pin_answer(monkeypatch)

    response = client.post("/games", json={"mode": "normal", "max_rounds": 6})
    assert response.status_code == 200
    body = response.json()
    assert body["mode"] == "normal"
    assert body["max_rounds"] == 6
    game_id = body["game_id"]

    response = client.post(f"/games/{game_id}/guess", json={"guess": "cran"})
    assert response.status_code == 400
    assert response.json()["detail"]["error"] == "InvalidGuess"

    response = client.post(f"/games/{game_id}/guess", json={"guess": "zzzzz"})
    assert response.status_code == 400
    assert response.json()["detail"]["error"] == "WordNotAllowed"

    response = client.post(f"/games/{game_id}/guess", json={"guess": "bolts"})
    assert response.status_code == 200
    body = response.json()
    assert body["marks"] == ["miss"] * 5
    assert body["round"] == 1
    assert body["state"] == "playing"
    assert body["answer"] is None

    response = client.post(f"/games/{game_id}/guess", json={"guess": "CRANE"})
    assert response.status_code == 200
    final = response.json()
    assert final["state"] == "won"
    assert final["round"] == 2
    assert final["answer"] == "crane"
    assert final["keyboard"]["c"] == "hit"


def test_default_body_starts_normal_game(client, monkeypatch):
    pin_answer(monkeypatch)
    response = client.post("/games")
    assert response.status_code == 200
    assert response.json()["mode"] == "normal"
    assert response.json()["max_rounds"] == app_main.settings.default_max_rounds


def test_max_rounds_is_bounded(client):
    assert client.post("/games", json={"mode": "normal", "max_rounds": 0}).status_code == 422
    assert client.post("/games", json={"mode": "normal", "max_rounds": 11}).status_code == 422


def test_cannot_guess_after_game_finished(client, monkeypatch):
    pin_answer(monkeypatch)
    game_id = client.post("/games", json={"mode": "normal", "max_rounds": 1}).json()["game_id"]

    first = client.post(f"/games/{game_id}/guess", json={"guess": "bolts"})
    assert first.json()["state"] == "lost"
    assert first.json()["answer"] == "crane"

    second = client.post(f"/games/{game_id}/guess", json={"guess": "crane"})
    assert second.status_code == 409
    assert second.json()["detail"]["error"] == "SessionFinished"

    state = client.get(f"/games/{game_id}").json()
    assert state["round"] == 1
    assert state["state"] == "lost"


def test_unknown_game(client):
    response = client.post("/games/missing/guess", json={"guess": "crane"})
    assert response.status_code == 404
    assert response.json()["detail"]["error"] == "SessionNotFound"
    assert client.get("/games/missing").status_code == 404


def test_cheat_game_flow(client):
    start = client.post("/games", json={"mode": "cheat", "max_rounds": 6})
    assert start.status_code == 200
    game_id = start.json()["game_id"]

    first = client.post(f"/games/{game_id}/guess", json={"guess": "crane"}).json()
    assert first["marks"] == ["miss", "miss", "hit", "miss", "hit"]
    assert first["state"] == "playing"

    state = client.get(f"/games/{game_id}").json()
    assert state["answer"] is None
    assert state["history"][0]["guess"] == "crane"

    final = client.post(f"/games/{game_id}/guess", json={"guess": "slate"}).json()
    assert final["state"] == "won"
    assert final["answer"] == "slate"


def test_daily_win_goes_on_leaderboard(client, store, monkeypatch):
    pin_today(monkeypatch)
    answer = daily_answer(store)

    start = client.post("/games", json={"mode": "daily", "player_id": "alice"})
    assert start.status_code == 200
    body = start.json()
    assert body["date"] == "2025-08-24"
    assert body["played"] is False
    game_id = body["game_id"]

    # Asking again while playing hands back the same game
    again = client.post("/games", json={"mode": "daily", "player_id": "alice"}).json()
    assert again["game_id"] == game_id

    won = client.post(f"/games/{game_id}/guess", json={"guess": answer}).json()
    assert won["state"] == "won"

    board = client.get("/daily/leaderboard", params={"date": "2025-08-24"}).json()
    assert board["date"] == "2025-08-24"
    assert [row["player_id"] for row in board["top"]] == ["alice"]
    assert board["top"][0]["guesses"] == 1

    # Default date is today
    assert client.get("/daily/leaderboard").json()["date"] == "2025-08-24"

    # One result per player per day
    replay = client.post("/games", json={"mode": "daily", "player_id": "alice"}).json()
    assert replay["played"] is True
    assert replay["game_id"] is None


def test_daily_same_answer_for_everyone(client, store, monkeypatch):
    pin_today(monkeypatch)
    answer = daily_answer(store)
    for player in ("alice", "bob"):
        game_id = client.post("/games", json={"mode": "daily", "player_id": player}).json()["game_id"]
        assert client.post(f"/games/{game_id}/guess", json={"guess": answer}).json()["state"] == "won"


def test_daily_anonymous_player_gets_an_id(client, monkeypatch):
    pin_today(monkeypatch)
    body = client.post("/games", json={"mode": "daily"}).json()
    assert body["player_id"].startswith("anon-")


def test_leaderboard_rejects_bad_date(client):
    assert client.get("/daily/leaderboard", params={"date": "24/08/2025"}).status_code == 422


def test_stats_after_a_loss(client, monkeypatch):
    pin_answer(monkeypatch)

    assert client.post("/stats/reset").status_code == 200

    gid = client.post("/games", json={"mode": "normal", "max_rounds": 3}).json()["game_id"]
    for _ in range(3):
        r = client.post(f"/games/{gid}/guess", json={"guess": "bolts"})
        assert r.status_code == 200

    stats = client.get("/stats").json()
    assert stats["games_started"] == 1
    assert stats["games_lost"] == 1
    assert stats["games_won"] == 0
    assert stats["average_guesses_to_win"] is None


def test_health(client):
    assert client.get("/health").json() == {"ok": True}


def test_any_bad_guess_is_reported_as_invalid_guess(client, monkeypatch):
    pin_answer(monkeypatch)
    game_id = client.post("/games", json={"mode": "normal", "max_rounds": 6}).json()["game_id"]

    for bad in ["a" * 33, 12345, None, ["c", "r", "a", "n", "e"]]:
        response = client.post(f"/games/{game_id}/guess", json={"guess": bad})
        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "InvalidGuess"

    # none of them used a round
    assert client.get(f"/games/{game_id}").json()["round"] == 0


def test_error_payload_is_documented(client):
    spec = client.get("/openapi.json").json()
    assert "ErrorOut" in spec["components"]["schemas"]
    responses = spec["paths"]["/games/{game_id}/guess"]["post"]["responses"]
    for status in ("400", "404", "409"):
        assert responses[status]["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorOut")
