"""
GameSession - the boss-battle state machine
-------------------------------------------
One `GameSession` owns every entity, projectile list and timer of a game.
`tick()` runs a single frame:

    player movement -> boss movement -> boss barrage -> ambient barrage
    -> autofire -> combat -> score display -> outcome report

States:
    IDLE -> RUNNING                      start_new_game()
    RUNNING -> WON | LOST                from inside tick()
    WON -> RUNNING                       advance_to_next_boss() (defeat count kept)
    LOST/WON/RUNNING -> RUNNING          start_new_game() (defeat count reset)

All cadences (autofire, boss turns, boss fire) are timestamp comparisons made
inside tick(), so nothing fires while the session is WON or LOST.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .constants import (
    FIELD_WIDTH, FIELD_HEIGHT, PLAYER_SIZE, PLAYER_SPAWN_BOTTOM_OFFSET,
    BOSS_WIDTH, BOSS_SPAWN_Y, PLAYER_COLOR,
)
from .combat import CombatEvents, resolve_combat
from .difficulty import BossConfig, derive_boss_config, boss_color
from .entities import Player, Boss, Projectile
from .interfaces import InputIntent, RenderSink, ScoreSink, OutcomeSink
from .movement import move_player, update_boss, turn_boss
from .patterns import emit_boss_pattern, ambient_pattern, autofire
from .utils import clamp


class GameState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    WON = "won"
    LOST = "lost"


class InvalidTransition(RuntimeError):
    """A lifecycle trigger was called from a state that does not allow it"""


@dataclass
class OutcomeEvent:
    outcome: GameState
    elapsed_seconds: float
    defeat_count: int


@dataclass
class TickEvents:
    state: GameState
    boss_bullets_emitted: int = 0
    player_shots: int = 0
    combat: CombatEvents = field(default_factory=CombatEvents)
    score: float = 0.0
    outcome: Optional[OutcomeEvent] = None


@dataclass
class GameSession:
    width: float = FIELD_WIDTH
    height: float = FIELD_HEIGHT
    seed: Optional[int] = None
    ambient_chance: float = 0.0

    state: GameState = GameState.IDLE
    player: Optional[Player] = None
    boss: Optional[Boss] = None
    boss_config: Optional[BossConfig] = None
    next_boss_config: Optional[BossConfig] = None
    player_bullets: List[Projectile] = field(default_factory=list)
    boss_bullets: List[Projectile] = field(default_factory=list)

    defeat_count: int = 0
    started_at: Optional[float] = None
    paused_ms: float = 0.0
    ended_at: Optional[float] = None
    outcome: Optional[OutcomeEvent] = None
    frame: int = 0
    last_events: Optional[TickEvents] = None

    def __post_init__(self):
        self.rng = random.Random(self.seed)

    @property
    def running(self) -> bool:
        return self.state is GameState.RUNNING


# ----------------------------
# Spawning
# ----------------------------

def spawn_player(width: float, height: float, now: float) -> Player:
    return Player(
        x=width / 2 - PLAYER_SIZE / 2,
        y=height - PLAYER_SPAWN_BOTTOM_OFFSET,
        last_fire=now,
    )


def spawn_boss(config: BossConfig, width: float, now: float, rng: random.Random) -> Boss:
    boss = Boss(
        x=width / 2 - BOSS_WIDTH / 2,
        y=BOSS_SPAWN_Y,
        hp=config.hp,
        max_hp=config.hp,
        shot_interval=config.shot_interval,
        speed=config.boss_speed,
        last_shot=now,
        last_turn=now,
        hard=config.is_hard_tier,
        visual_tier=config.visual_tier,
    )
    turn_boss(boss, rng)
    return boss


# ----------------------------
# Lifecycle triggers
# ----------------------------

def start_new_game(session: GameSession, now: float) -> GameSession:
    """Full reset: defeat count back to 0, fresh player and first boss"""
    session.defeat_count = 0
    session.boss_config = derive_boss_config(0)
    session.next_boss_config = None
    session.player = spawn_player(session.width, session.height, now)
    session.boss = spawn_boss(session.boss_config, session.width, now, session.rng)
    session.player_bullets = []
    session.boss_bullets = []
    session.started_at = now
    session.paused_ms = 0.0
    session.ended_at = None
    session.outcome = None
    session.frame = 0
    session.last_events = None
    session.state = GameState.RUNNING
    return session


def advance_to_next_boss(session: GameSession, now: float) -> GameSession:
    """Leave the WON pause with the next, harder boss; defeat count is kept"""
    if session.state is not GameState.WON:
        raise InvalidTransition(f"cannot advance to next boss from {session.state.value}")

    session.boss_config = session.next_boss_config or derive_boss_config(session.defeat_count)
    session.next_boss_config = None
    session.boss = spawn_boss(session.boss_config, session.width, now, session.rng)
    session.player_bullets = []
    session.boss_bullets = []
    session.player.last_fire = now

    # Time spent on the victory screen does not count toward the score
    session.paused_ms += now - session.ended_at
    session.ended_at = None
    session.outcome = None
    session.state = GameState.RUNNING
    return session


# ----------------------------
# Score
# ----------------------------

def elapsed_seconds(session: GameSession, now: float) -> float:
    if session.started_at is None:
        return 0.0
    end = session.ended_at if session.ended_at is not None else now
    return max(0.0, end - session.started_at - session.paused_ms) / 1000.0


def _finish(session: GameSession, state: GameState, now: float) -> OutcomeEvent:
    session.state = state
    session.ended_at = now
    session.outcome = OutcomeEvent(
        outcome=state,
        elapsed_seconds=elapsed_seconds(session, now),
        defeat_count=session.defeat_count,
    )
    return session.outcome


# ----------------------------
# Frame
# ----------------------------

def tick(
    session: GameSession,
    now: float,
    intent: Optional[InputIntent] = None,
    score_sink: Optional[ScoreSink] = None,
    outcome_sink: Optional[OutcomeSink] = None,
) -> TickEvents:
    if not session.running:
        return TickEvents(state=session.state, score=elapsed_seconds(session, now))

    if intent is None:
        intent = InputIntent()

    events = TickEvents(state=session.state)
    session.frame += 1
    w, h = session.width, session.height

    move_player(session.player, intent, w, h)
    update_boss(session.boss, now, session.rng, w, h)

    barrage = emit_boss_pattern(session.boss, session.boss_config, now)
    if session.ambient_chance > 0 and session.rng.random() < session.ambient_chance:
        barrage += ambient_pattern(w, session.rng)
    session.boss_bullets.extend(barrage)
    events.boss_bullets_emitted = len(barrage)

    shot = autofire(session.player, now)
    if shot is not None:
        session.player_bullets.append(shot)
        events.player_shots = 1

    events.combat = resolve_combat(
        session.player, session.boss,
        session.player_bullets, session.boss_bullets,
        w, h,
    )

    if events.combat.player_hit:
        events.outcome = _finish(session, GameState.LOST, now)
    elif events.combat.boss_defeated:
        session.defeat_count += 1
        session.next_boss_config = derive_boss_config(session.defeat_count)
        events.outcome = _finish(session, GameState.WON, now)

    events.state = session.state
    events.score = elapsed_seconds(session, now)

    if score_sink is not None:
        score_sink.show_score(events.score)

    if events.outcome is not None and outcome_sink is not None:
        o = events.outcome
        outcome_sink.report_outcome(o.elapsed_seconds, o.defeat_count, o.outcome.value)

    session.last_events = events
    return events


# ----------------------------
# Viewport
# ----------------------------

def resize(session: GameSession, width: float, height: float) -> GameSession:
    """Rescale the field; game state and progression are untouched"""
    sx = width / session.width
    sy = height / session.height
    session.width = width
    session.height = height

    for b in session.player_bullets + session.boss_bullets:
        b.x *= sx
        b.y *= sy

    p = session.player
    if p is not None:
        p.x = clamp(p.x * sx, 0.0, width - p.size)
        p.y = clamp(p.y * sy, 0.0, height - p.size)

    boss = session.boss
    if boss is not None:
        boss.x = clamp(boss.x * sx, 0.0, width - boss.width)
        boss.y = clamp(boss.y * sy, 0.0, height - boss.height)

    return session


def render(session: GameSession, sink: RenderSink):
    """Push every visible entity to the render sink"""
    if session.player is None:
        return

    p = session.player
    sink.draw_entity("rect", (p.x, p.y), (p.size, p.size), PLAYER_COLOR)

    boss = session.boss
    if boss is not None and not boss.defeated:
        sink.draw_entity(
            "rect", (boss.x, boss.y), (boss.width, boss.height),
            boss_color(boss.visual_tier, session.frame),
        )

    for b in session.player_bullets:
        sink.draw_entity("circle", (b.x, b.y), (b.radius * 2, b.radius * 2), b.color)
    for b in session.boss_bullets:
        sink.draw_entity("circle", (b.x, b.y), (b.radius * 2, b.radius * 2), b.color)
