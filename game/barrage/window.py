"""
Arcade front-end for the boss barrage game.

- `ArcadeRenderSink` turns the core's draw calls into Arcade primitives
  (the core uses a y-down field, Arcade draws y-up).
- `BarrageWindow` is the render sink host, score display and input provider.
  With `interactive=True` it runs a playable game; otherwise it only draws a
  session owned by someone else (the RL environment).

Play:
    python -m game.barrage.window
    python -m game.barrage.window --leaderboard-url https://example.invalid/api

Keys: arrows / WASD move, mouse drag moves, N next boss, R restart, Esc quit.
"""

from __future__ import annotations

import argparse
import time
from typing import List, Optional

import arcade

from .constants import (
    FIELD_WIDTH, FIELD_HEIGHT, BG_COLOR, HUD_COLOR, BOSS_BULLET_COLOR, PLAYER_COLOR,
)
from .interfaces import InputIntent, TOUCH_SCALE
from .leaderboard import LeaderboardClient, LeaderboardSink, format_score
from .session import (
    GameSession, GameState, start_new_game, advance_to_next_boss,
    tick, render, resize,
)

LEFT_KEYS = (arcade.key.LEFT, arcade.key.A)
RIGHT_KEYS = (arcade.key.RIGHT, arcade.key.D)
UP_KEYS = (arcade.key.UP, arcade.key.W)
DOWN_KEYS = (arcade.key.DOWN, arcade.key.S)


class ArcadeRenderSink:
    """Render sink drawing onto the current Arcade window"""

    def __init__(self, height: float):
        self.height = height

    def draw_entity(self, shape, position, size, color):
        x, y = position
        w, h = size
        color = color or BOSS_BULLET_COLOR
        if shape == "circle":
            arcade.draw_circle_filled(x, self.height - y, w / 2, color)
        else:
            top = self.height - y
            arcade.draw_lrbt_rectangle_filled(x, x + w, top - h, top, color)


class BarrageWindow(arcade.Window):
    """Arcade window for playing or watching a boss barrage session"""

    def __init__(
        self,
        session: Optional[GameSession] = None,
        width: int = FIELD_WIDTH,
        height: int = FIELD_HEIGHT,
        title: str = "Boss Barrage",
        interactive: bool = True,
        outcome_sink: Optional[LeaderboardSink] = None,
        visible: bool = True,
    ):
        super().__init__(width, height, title, resizable=interactive, visible=visible)
        self.session = session or GameSession(width=width, height=height)
        self.interactive = interactive
        self.outcome_sink = outcome_sink
        self.sink = ArcadeRenderSink(height)

        self._keys = set()
        self._drag_dx = 0.0
        self._drag_dy = 0.0
        self.score = 0.0
        self.leaderboard: List[float] = []

        arcade.set_background_color(BG_COLOR)

        if self.interactive and not self.session.running:
            start_new_game(self.session, self._now())

    @staticmethod
    def _now() -> float:
        return time.monotonic() * 1000.0

    # ----------------------------
    # Collaborator roles
    # ----------------------------

    def show_score(self, elapsed_seconds: float):
        self.score = elapsed_seconds

    def set_leaderboard(self, scores: List[float]):
        self.leaderboard = list(scores)

    def current_intent(self) -> InputIntent:
        keys = self._keys
        intent = InputIntent(
            left=any(k in keys for k in LEFT_KEYS),
            right=any(k in keys for k in RIGHT_KEYS),
            up=any(k in keys for k in UP_KEYS),
            down=any(k in keys for k in DOWN_KEYS),
            pointer_dx=self._drag_dx * TOUCH_SCALE,
            pointer_dy=self._drag_dy * TOUCH_SCALE,
        )
        self._drag_dx = 0.0
        self._drag_dy = 0.0
        return intent

    # ----------------------------
    # Arcade callbacks
    # ----------------------------

    def on_update(self, delta_time: float):
        if not self.interactive:
            return
        tick(
            self.session,
            self._now(),
            self.current_intent(),
            score_sink=self,
            outcome_sink=self.outcome_sink,
        )

    def on_key_press(self, key, modifiers):
        self._keys.add(key)
        if not self.interactive:
            return
        if key == arcade.key.ESCAPE:
            self.close()
        elif key == arcade.key.N and self.session.state is GameState.WON:
            advance_to_next_boss(self.session, self._now())
        elif key in (arcade.key.R, arcade.key.ENTER) and self.session.state in (GameState.LOST, GameState.WON):
            start_new_game(self.session, self._now())

    def on_key_release(self, key, modifiers):
        self._keys.discard(key)

    def on_mouse_drag(self, x, y, dx, dy, buttons, modifiers):
        # Arcade's y axis points up, the field's points down
        self._drag_dx += dx
        self._drag_dy -= dy

    def on_resize(self, width: int, height: int):
        super().on_resize(width, height)
        # pyglet can fire this before __init__ has finished
        if getattr(self, "session", None) is None:
            return
        self.sink.height = height
        if self.session.player is not None:
            resize(self.session, width, height)
        else:
            self.session.width, self.session.height = width, height

    def on_draw(self):
        """Draw the current game state"""
        self.clear()
        render(self.session, self.sink)
        self._draw_hud()

    def _draw_hud(self):
        s = self.session
        txt = f"Score: {format_score(self.score)}   Bosses: {s.defeat_count}"
        arcade.draw_text(txt, 12, self.height - 24, HUD_COLOR, 14)

        boss = s.boss
        if boss is not None:
            bar_w, bar_h = 180, 8
            x0, y0 = self.width - bar_w - 12, self.height - 20
            arcade.draw_lrbt_rectangle_filled(x0, x0 + bar_w, y0, y0 + bar_h, (60, 60, 60))
            fill = bar_w * max(0, boss.hp) / max(1, boss.max_hp)
            if fill > 0:
                arcade.draw_lrbt_rectangle_filled(x0, x0 + fill, y0, y0 + bar_h, (220, 80, 80))

        if s.state is GameState.WON:
            self._draw_banner("Boss defeated!", "Press N for the next boss")
        elif s.state is GameState.LOST:
            self._draw_banner("Game Over", "Press R to restart")

    def _draw_banner(self, title: str, hint: str):
        cx, cy = self.width / 2, self.height / 2
        arcade.draw_text(title, cx, cy + 20, PLAYER_COLOR, 28, anchor_x="center")
        arcade.draw_text(hint, cx, cy - 10, HUD_COLOR, 14, anchor_x="center")
        for i, score in enumerate(self.leaderboard):
            arcade.draw_text(f"{i + 1}. {format_score(score)}", cx, cy - 40 - 18 * i,
                             HUD_COLOR, 12, anchor_x="center")


def play(
    width: int = FIELD_WIDTH,
    height: int = FIELD_HEIGHT,
    leaderboard_url: Optional[str] = None,
    top_n: int = 10,
    ambient_chance: float = 0.0,
    seed: Optional[int] = None,
):
    """Open a window and play until it is closed"""
    session = GameSession(width=width, height=height, seed=seed, ambient_chance=ambient_chance)
    window = BarrageWindow(session, width, height)

    if leaderboard_url:
        client = LeaderboardClient(leaderboard_url)
        window.outcome_sink = LeaderboardSink(client, top_n=top_n, on_leaderboard=window.set_leaderboard)
        print(f"[play] Submitting scores to {leaderboard_url}")

    arcade.run()


def main():
    parser = argparse.ArgumentParser(description="Play the boss barrage game")
    parser.add_argument("--width", type=int, default=FIELD_WIDTH)
    parser.add_argument("--height", type=int, default=FIELD_HEIGHT)
    parser.add_argument(
        "--leaderboard-url",
        type=str,
        default=None,
        help="Base URL of the leaderboard API (scores are not submitted if omitted)",
    )
    parser.add_argument("--top-n", type=int, default=10, help="Leaderboard entries to show")
    parser.add_argument(
        "--ambient-chance",
        type=float,
        default=0.0,
        help="Per-frame chance of an extra petal barrage from the top edge",
    )
    parser.add_argument("--seed", type=int, default=None)

    args = parser.parse_args()
    play(
        width=args.width,
        height=args.height,
        leaderboard_url=args.leaderboard_url,
        top_n=args.top_n,
        ambient_chance=args.ambient_chance,
        seed=args.seed,
    )


if __name__ == "__main__":
    main()
