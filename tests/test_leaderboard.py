import http.client
import io
import json
import threading
from urllib.error import URLError

import pytest

from game.barrage import leaderboard
from game.barrage.entities import Projectile, Owner
from game.barrage.leaderboard import LeaderboardClient, LeaderboardSink, format_score
from game.barrage.session import GameSession, GameState, start_new_game, advance_to_next_boss, tick


class FakeResponse(io.BytesIO):
    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False


class FakeBackend:
    def __init__(self, rows=None, fail=False):
        self.rows = rows if rows is not None else []
        self.fail = fail
        self.requests = []

    def __call__(self, req, timeout=None):
        self.requests.append(req)
        if self.fail:
            raise URLError("connection refused")
        if req.get_method() == "POST":
            return FakeResponse(b"")
        return FakeResponse(json.dumps(self.rows).encode("utf-8"))


@pytest.fixture
def backend(monkeypatch):
    fake = FakeBackend(rows=[{"score": "3.5"}, {"score": 12.25}, {"score": 7}, {"nope": 1}, {"score": "x"}])
    monkeypatch.setattr(leaderboard, "urlopen", fake)
    return fake


def test_format_score():
    assert format_score(12.3456) == "12.35s"
    assert format_score(0) == "0.00s"


def test_submit_posts_json(backend):
    client = LeaderboardClient("https://scores.example/api/", verbose=0)
    assert client.submit_score(4.2)

    req = backend.requests[0]
    assert req.get_method() == "POST"
    assert req.full_url == "https://scores.example/api/submitScore"
    assert json.loads(req.data.decode("utf-8")) == {"score": 4.2}
    assert req.get_header("Content-type") == "application/json"


def test_fetch_sorts_descending_and_limits(backend):
    client = LeaderboardClient("https://scores.example/api", verbose=0)
    assert client.fetch_leaderboard(limit=2) == [12.25, 7.0]
    assert client.fetch_leaderboard() == [12.25, 7.0, 3.5]
    assert backend.requests[0].full_url == "https://scores.example/api/leaderboard"


def test_network_errors_are_swallowed(monkeypatch, capsys):
    monkeypatch.setattr(leaderboard, "urlopen", FakeBackend(fail=True))
    client = LeaderboardClient("https://scores.example/api")
    assert client.submit_score(1.0) is False
    assert client.fetch_leaderboard() == []
    out = capsys.readouterr().out
    assert "[Leaderboard] score submission failed" in out
    assert "[Leaderboard] leaderboard retrieval failed" in out


def test_sink_submits_then_refreshes(backend):
    seen = []
    client = LeaderboardClient("https://scores.example/api", verbose=0)
    sink = LeaderboardSink(client, top_n=1, on_leaderboard=seen.append, background=False)

    sink.report_outcome(9.87, 2, "lost")

    methods = [r.get_method() for r in backend.requests]
    assert methods == ["POST", "GET"]
    assert seen == [[12.25]]
    assert sink.last_scores == [12.25]


def test_background_sink_survives_backend_failure(monkeypatch):
    monkeypatch.setattr(leaderboard, "urlopen", FakeBackend(fail=True))
    done = threading.Event()
    seen = []

    def on_leaderboard(scores):
        seen.append(scores)
        done.set()

    client = LeaderboardClient("https://scores.example/api", verbose=0)
    sink = LeaderboardSink(client, on_leaderboard=on_leaderboard)
    sink.report_outcome(1.0, 0, "lost")

    assert done.wait(timeout=5)
    assert seen == [[]]


def _park_on(session, owner, x, y, n=1):
    bullets = session.player_bullets if owner is Owner.PLAYER else session.boss_bullets
    for _ in range(n):
        bullets.append(Projectile(x=x, y=y, vx=0.0, vy=0.0, owner=owner, radius=3.0))


def test_only_the_final_loss_is_submitted(backend):
    client = LeaderboardClient("https://scores.example/api", verbose=0)
    sink = LeaderboardSink(client, background=False)
    s = GameSession(seed=5)
    start_new_game(s, 0.0)

    now = 0.0
    for _ in range(2):
        s.boss.dx = s.boss.dy = 0.0
        _park_on(s, Owner.PLAYER, *s.boss.center, n=s.boss.hp)
        now += 16.0
        tick(s, now, outcome_sink=sink)
        assert s.state is GameState.WON
        now += 1000.0
        advance_to_next_boss(s, now)

    p = s.player
    _park_on(s, Owner.BOSS, p.x + p.size / 2, p.y + p.size / 2)
    now += 16.0
    tick(s, now, outcome_sink=sink)
    assert s.state is GameState.LOST
    assert s.defeat_count == 2

    posts = [json.loads(r.data.decode("utf-8")) for r in backend.requests if r.get_method() == "POST"]
    assert len(posts) == 1
    assert posts[0]["score"] == pytest.approx(s.outcome.elapsed_seconds)



def test_won_outcome_is_logged_not_submitted(backend, capsys):
    client = LeaderboardClient("https://scores.example/api")
    sink = LeaderboardSink(client, background=False)
    sink.report_outcome(4.0, 1, "won")
    assert backend.requests == []
    assert "[Leaderboard] won: 4.00s, bosses defeated: 1" in capsys.readouterr().out


@pytest.mark.parametrize("body", [b"5", b'"oops"', b'{"score": 3}'])
def test_non_list_leaderboard_body_is_empty(monkeypatch, body):
    monkeypatch.setattr(leaderboard, "urlopen", lambda req, timeout=None: FakeResponse(body))
    client = LeaderboardClient("https://scores.example/api", verbose=0)
    assert client.fetch_leaderboard() == []


def test_http_protocol_errors_are_swallowed(monkeypatch):
    def broken(req, timeout=None):
        raise http.client.IncompleteRead(b"")

    monkeypatch.setattr(leaderboard, "urlopen", broken)
    seen = []
    client = LeaderboardClient("https://scores.example/api", verbose=0)
    sink = LeaderboardSink(client, on_leaderboard=seen.append, background=False)
    sink.report_outcome(2.0, 0, "lost")
    assert seen == [[]]
