"""
Custom callbacks for tracking game metrics during training.
Records: final score, level reached, kills, pickups, lives lost.
"""

import os
import csv
from typing import Dict, List, Any, Optional

import numpy as np
from stable_baselines3.common.callbacks import BaseCallback

CSV_COLUMNS = ["timestep", "episode", "reward", "length", "score", "level", "kills", "pickups", "lives_lost"]


class MetricsCallback(BaseCallback):
    """
    Tracks per-episode game metrics and appends them to a CSV file.
    """

    def __init__(self, log_dir: str, algo_name: str, verbose: int = 1):
        super().__init__(verbose)
        self.log_dir = log_dir
        self.algo_name = algo_name

        self.episodes: List[Dict[str, float]] = []

        self.csv_path: Optional[str] = None
        self.csv_file = None
        self.csv_writer = None

    def _on_training_start(self) -> None:
        os.makedirs(self.log_dir, exist_ok=True)
        self.csv_path = os.path.join(self.log_dir, f"{self.algo_name}_metrics.csv")

        self.csv_file = open(self.csv_path, "w", newline="")
        self.csv_writer = csv.writer(self.csv_file)
        self.csv_writer.writerow(CSV_COLUMNS)
        self.csv_file.flush()

        if self.verbose > 0:
            print(f"[MetricsCallback] Logging to {self.csv_path}")

    def _on_step(self) -> bool:
        infos = self.locals.get("infos", [])
        dones = self.locals.get("dones", [])

        for info, done in zip(infos, dones):
            # Monitor adds "episode" to the info of the final step
            if not (done and "episode" in info):
                continue
            row = {
                "timestep": self.num_timesteps,
                "episode": len(self.episodes) + 1,
                "reward": info["episode"]["r"],
                "length": info["episode"]["l"],
                "score": info.get("score", 0),
                "level": info.get("level", 0),
                "kills": info.get("kills", 0),
                "pickups": info.get("pickups", 0),
                "lives_lost": info.get("lives_lost", 0),
            }
            self.episodes.append(row)

            if self.csv_writer:
                self.csv_writer.writerow([row[c] for c in CSV_COLUMNS])
                self.csv_file.flush()

            if self.verbose > 0 and len(self.episodes) % 10 == 0:
                recent = self.episodes[-10:]
                print(f"[{self.algo_name}] Episode {len(self.episodes)}, "
                      f"Timestep {self.num_timesteps}, "
                      f"Avg Score (10 ep): {np.mean([r['score'] for r in recent]):.1f}")

        return True

    def _on_training_end(self) -> None:
        if self.csv_file:
            self.csv_file.close()
            if self.verbose > 0:
                print(f"[MetricsCallback] Saved {len(self.episodes)} episodes to {self.csv_path}")

    def get_summary(self) -> Dict[str, Any]:
        if not self.episodes:
            return {}
        rewards = [r["reward"] for r in self.episodes]
        return {
            "mean_reward": float(np.mean(rewards)),
            "std_reward": float(np.std(rewards)),
            "mean_score": float(np.mean([r["score"] for r in self.episodes])),
            "max_score": max(r["score"] for r in self.episodes),
            "mean_length": float(np.mean([r["length"] for r in self.episodes])),
            "total_episodes": len(self.episodes),
        }


class TensorboardMetricsCallback(BaseCallback):
    """
    Logs game metrics to TensorBoard at the end of each episode.
    """

    def _on_step(self) -> bool:
        infos = self.locals.get("infos", [])
        dones = self.locals.get("dones", [])

        for info, done in zip(infos, dones):
            if done and "episode" in info and self.logger:
                self.logger.record("game/score", info.get("score", 0))
                self.logger.record("game/level", info.get("level", 0))
                self.logger.record("game/kills", info.get("kills", 0))
                self.logger.record("game/lives_lost", info.get("lives_lost", 0))
        return True
