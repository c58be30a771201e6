"""
BossBarrageEnv - the boss battle as a Gymnasium environment
------------------------------------------------------------
- Wraps a GameSession with a simulated clock (dt_ms per step)
- Gymnasium API
- MultiDiscrete action space: [horizontal(3), vertical(3)], autofire is always on
- Vector observation: player + boss state + top-K nearest boss bullets
- Defeating a boss advances straight to the next one; getting hit terminates

Quick test:
    python -m game.barrage.boss_env
"""

from __future__ import annotations

from typing import Optional, Dict, Any

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .constants import FIELD_WIDTH, FIELD_HEIGHT, HARD_BOSS_SPEED, HARD_BULLET_SPEED
from .interfaces import InputIntent
from .session import (
    GameSession, GameState, TickEvents,
    start_new_game, advance_to_next_boss, tick, elapsed_seconds,
)
from .utils import clamp, seed_everything

DEFAULT_REWARDS = {
    "R_SURVIVE": 0.01,
    "R_HIT": 0.2,
    "R_DEFEAT": 5.0,
    "R_DEATH": 10.0,
}


class BossBarrageEnv(gym.Env):
    """Boss barrage environment rendered with Arcade"""

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        width: int = FIELD_WIDTH,
        height: int = FIELD_HEIGHT,
        dt_ms: float = 1000 / 60,
        max_steps: int = 3600,
        k_bullets: int = 8,
        ambient_chance: float = 0.0,
        reward_config: Optional[Dict[str, Any]] = None,
    ):
        super().__init__()

        self.render_mode = render_mode
        self.width = width
        self.height = height
        self.dt_ms = dt_ms
        self.max_steps = max_steps
        self.k_bullets = k_bullets
        self.ambient_chance = ambient_chance
        self.rewards = dict(DEFAULT_REWARDS)
        if reward_config:
            self.rewards.update({k: v for k, v in reward_config.items() if k.startswith("R_")})

        # horizontal: 0 stay, 1 left, 2 right
        # vertical:   0 stay, 1 up,   2 down
        self.action_space = spaces.MultiDiscrete([3, 3])

        # Player: pos(2)
        # Boss: pos(2) vel(2) hp(1) fire phase(1)
        # Each boss bullet: rel pos(2) vel(2)
        obs_dim = 2 + 2 + 2 + 1 + 1 + self.k_bullets * 4
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._window = None

        self.session: GameSession = None  # type: ignore
        self._now = 0.0
        self._step_count = 0
        self._boss_hits = 0

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        seed_everything(seed)

        self._now = 0.0
        self._step_count = 0
        self._boss_hits = 0

        session_seed = int(self.np_random.integers(0, 2**31 - 1))
        self.session = GameSession(
            width=self.width,
            height=self.height,
            seed=session_seed,
            ambient_chance=self.ambient_chance,
        )
        start_new_game(self.session, self._now)

        if self._window is not None:
            self._window.session = self.session

        return self._get_obs(), self._get_info()

    def step(self, action):
        horiz, vert = int(action[0]), int(action[1])
        intent = InputIntent(
            left=horiz == 1,
            right=horiz == 2,
            up=vert == 1,
            down=vert == 2,
        )

        self._now += self.dt_ms
        events = tick(self.session, self._now, intent)
        self._boss_hits += events.combat.boss_hits

        reward = self._compute_reward(events)

        # Keep the episode going through boss after boss
        if self.session.state is GameState.WON:
            advance_to_next_boss(self.session, self._now)

        terminated = self.session.state is GameState.LOST
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        obs = self._get_obs()
        info = self._get_info()
        if events.outcome is not None:
            info["outcome"] = events.outcome.outcome.value

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        s = self.session
        p = s.player
        boss = s.boss
        w, h = s.width, s.height

        px = p.x + p.size / 2
        py = p.y + p.size / 2
        bx, by = boss.center
        fire_phase = (self._now - boss.last_shot) / max(1.0, boss.shot_interval)

        obs_parts = [
            px / w * 2 - 1, py / h * 2 - 1,
            bx / w * 2 - 1, by / h * 2 - 1,
            clamp(boss.dx / HARD_BOSS_SPEED, -1, 1),
            clamp(boss.dy / HARD_BOSS_SPEED, -1, 1),
            clamp(boss.hp / max(1, boss.max_hp), 0, 1) * 2 - 1,
            clamp(fire_phase, 0, 1) * 2 - 1,
        ]

        # Boss bullets: top-K nearest to the player
        bullets_sorted = sorted(
            s.boss_bullets,
            key=lambda b: (b.x - px) ** 2 + (b.y - py) ** 2
        )
        for i in range(self.k_bullets):
            if i < len(bullets_sorted):
                b = bullets_sorted[i]
                obs_parts += [
                    clamp((b.x - px) / w, -1, 1),
                    clamp((b.y - py) / h, -1, 1),
                    clamp(b.vx / HARD_BULLET_SPEED, -1, 1),
                    clamp(b.vy / HARD_BULLET_SPEED, -1, 1),
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _compute_reward(self, events: TickEvents) -> float:
        r = self.rewards
        reward = 0.0

        reward += r["R_HIT"] * events.combat.boss_hits
        if events.combat.boss_defeated:
            reward += r["R_DEFEAT"]

        if events.state is GameState.LOST:
            reward -= r["R_DEATH"]
        else:
            reward += r["R_SURVIVE"]

        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        s = self.session
        return {
            "defeat_count": s.defeat_count,
            "boss_hp": s.boss.hp,
            "boss_hits": self._boss_hits,
            "elapsed_seconds": elapsed_seconds(s, self._now),
            "num_boss_bullets": len(s.boss_bullets),
            "num_player_bullets": len(s.player_bullets),
            "state": s.state.value,
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering with Arcade
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self._window is None:
            # Imported lazily so training never needs a display
            from .window import BarrageWindow
            self._window = BarrageWindow(
                self.session, self.width, self.height,
                title="BossBarrageEnv - Arcade",
                interactive=False,
                visible=self.render_mode == "human",
            )

        self._window.show_score(elapsed_seconds(self.session, self._now))
        self._window.dispatch_events()
        self._window.on_draw()

        if self.render_mode == "human":
            self._window.flip()
            return None
        return self._render_rgb_array()

    def _render_rgb_array(self) -> np.ndarray:
        import arcade
        img = arcade.get_image(0, 0, self.width, self.height)
        return np.asarray(img.convert("RGB"), dtype=np.uint8)

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True, seed: int = 42):
    """Run a random episode for testing"""
    env = BossBarrageEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    import time
    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward
        if render:
            time.sleep(1 / 60)

    print(f"Random episode return: {total:.2f}, "
          f"bosses defeated: {info['defeat_count']}, "
          f"survived: {info['elapsed_seconds']:.2f}s")

    env.close()
    return total, info


if __name__ == "__main__":
    run_random_episode(render=True)
