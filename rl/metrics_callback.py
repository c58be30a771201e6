"""
Custom callback for tracking boss-battle metrics during training.
Records: bosses defeated, boss hits, survival time.
"""

import os
import csv
from typing import Dict, List, Any, Optional

import numpy as np
from stable_baselines3.common.callbacks import BaseCallback


class BarrageMetricsCallback(BaseCallback):
    """
    Callback to track and log per-episode boss-battle metrics.
    Saves to CSV for easy plotting.
    """

    def __init__(
        self,
        log_dir: str,
        algo_name: str,
        verbose: int = 1,
    ):
        super().__init__(verbose)
        self.log_dir = log_dir
        self.algo_name = algo_name

        self.episode_rewards: List[float] = []
        self.episode_lengths: List[int] = []
        self.episode_defeats: List[int] = []
        self.episode_hits: List[int] = []
        self.episode_survival: List[float] = []

        self.csv_path: Optional[str] = None
        self.csv_file = None
        self.csv_writer = None

    def _on_training_start(self) -> None:
        os.makedirs(self.log_dir, exist_ok=True)
        self.csv_path = os.path.join(self.log_dir, f"{self.algo_name}_metrics.csv")

        self.csv_file = open(self.csv_path, "w", newline="")
        self.csv_writer = csv.writer(self.csv_file)
        self.csv_writer.writerow([
            "timestep", "episode", "reward", "length",
            "bosses_defeated", "boss_hits", "survival_seconds",
        ])
        self.csv_file.flush()

        if self.verbose > 0:
            print(f"[BarrageMetrics] Logging to {self.csv_path}")

    def record_episode(self, info: Dict[str, Any]) -> None:
        """Store one finished episode; `info` carries Monitor's "episode" entry"""
        ep = info["episode"]
        defeats = int(info.get("defeat_count", 0))
        hits = int(info.get("boss_hits", 0))
        survival = float(info.get("elapsed_seconds", 0.0))

        self.episode_rewards.append(float(ep["r"]))
        self.episode_lengths.append(int(ep["l"]))
        self.episode_defeats.append(defeats)
        self.episode_hits.append(hits)
        self.episode_survival.append(survival)

        if self.csv_writer:
            self.csv_writer.writerow([
                self.num_timesteps,
                len(self.episode_rewards),
                ep["r"],
                ep["l"],
                defeats,
                hits,
                survival,
            ])
            self.csv_file.flush()

        # Only attached once the callback is bound to a model
        if getattr(self, "model", None) is not None:
            self.logger.record("barrage/bosses_defeated", defeats)
            self.logger.record("barrage/survival_seconds", survival)

    def _on_step(self) -> bool:
        infos = self.locals.get("infos", [])
        dones = self.locals.get("dones", [])

        for info, done in zip(infos, dones):
            # Monitor adds the "episode" entry on the final step
            if done and "episode" in info:
                self.record_episode(info)

                if self.verbose > 0 and len(self.episode_rewards) % 10 == 0:
                    avg_reward = sum(self.episode_rewards[-10:]) / 10
                    avg_defeats = sum(self.episode_defeats[-10:]) / 10
                    print(f"[{self.algo_name}] Episode {len(self.episode_rewards)}, "
                          f"Timestep {self.num_timesteps}, "
                          f"Avg Reward (10 ep): {avg_reward:.2f}, "
                          f"Avg Bosses (10 ep): {avg_defeats:.1f}")

        return True

    def _on_training_end(self) -> None:
        if self.csv_file:
            self.csv_file.close()
            if self.verbose > 0:
                print(f"[BarrageMetrics] Saved {len(self.episode_rewards)} episodes to {self.csv_path}")

    def get_summary(self) -> Dict[str, Any]:
        if not self.episode_rewards:
            return {}

        return {
            "mean_reward": np.mean(self.episode_rewards),
            "std_reward": np.std(self.episode_rewards),
            "mean_length": np.mean(self.episode_lengths),
            "total_episodes": len(self.episode_rewards),
            "mean_defeats": np.mean(self.episode_defeats),
            "max_defeats": int(np.max(self.episode_defeats)),
            "mean_survival": np.mean(self.episode_survival),
        }
