"""
Leaderboard backend client.

POST {base}/submitScore   body {"score": <seconds>}
GET  {base}/leaderboard   -> [{"score": ...}, ...]

Submission is fire-and-forget: it runs on a daemon thread and any network
error is printed and dropped. The game never waits for it.
"""

from __future__ import annotations

import json
import threading
from http.client import HTTPException
from typing import Callable, List, Optional
from urllib.error import URLError
from urllib.request import Request, urlopen

from .session import GameState


def format_score(seconds: float) -> str:
    return f"{seconds:.2f}s"


class LeaderboardClient:
    def __init__(self, base_url: str, timeout: float = 10.0, verbose: int = 1):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.verbose = verbose

    def log(self, msg: str):
        if self.verbose > 0:
            print(f"[Leaderboard] {msg}")

    def _http_json(self, path: str, payload: Optional[dict] = None):
        headers = {"Accept": "application/json"}
        data = None
        if payload is not None:
            data = json.dumps(payload).encode("utf-8")
            headers["Content-Type"] = "application/json"
        req = Request(f"{self.base_url}{path}", data=data, headers=headers,
                      method="POST" if data is not None else "GET")
        with urlopen(req, timeout=self.timeout) as r:
            body = r.read()
        if not body:
            return None
        return json.loads(body.decode("utf-8"))

    def submit_score(self, score: float) -> bool:
        try:
            self._http_json("/submitScore", {"score": score})
        except (URLError, HTTPException, OSError, ValueError) as e:
            self.log(f"score submission failed: {e}")
            return False
        return True

    def fetch_leaderboard(self, limit: int = 10) -> List[float]:
        """Top `limit` scores, best first. Empty list if the backend is unreachable."""
        try:
            rows = self._http_json("/leaderboard")
        except (URLError, HTTPException, OSError, ValueError) as e:
            self.log(f"leaderboard retrieval failed: {e}")
            return []

        if not isinstance(rows, list):
            rows = []

        scores = []
        for row in rows:
            try:
                scores.append(float(row["score"] if isinstance(row, dict) else row))
            except (KeyError, TypeError, ValueError):
                continue
        scores.sort(reverse=True)
        return scores[:limit]


class LeaderboardSink:
    """Outcome sink that submits the final score of a run and then refreshes the top-N list.

    Boss defeats are only logged: the run continues, so its score is not final.
    """

    def __init__(
        self,
        client: LeaderboardClient,
        top_n: int = 10,
        on_leaderboard: Optional[Callable[[List[float]], None]] = None,
        background: bool = True,
    ):
        self.client = client
        self.top_n = top_n
        self.on_leaderboard = on_leaderboard
        self.background = background
        self.last_scores: List[float] = []

    def _submit_and_refresh(self, score: float):
        self.client.submit_score(score)
        self.last_scores = self.client.fetch_leaderboard(self.top_n)
        if self.on_leaderboard is not None:
            self.on_leaderboard(self.last_scores)

    def report_outcome(self, elapsed_seconds: float, defeat_count: int, outcome: str):
        self.client.log(f"{outcome}: {format_score(elapsed_seconds)}, bosses defeated: {defeat_count}")
        if outcome != GameState.LOST.value:
            return
        if not self.background:
            self._submit_and_refresh(elapsed_seconds)
            return
        t = threading.Thread(target=self._submit_and_refresh, args=(elapsed_seconds,), daemon=True)
        t.start()
