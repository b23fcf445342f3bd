# /experiments/sanity_rollout.py
"""
Sanity rollouts for FlapEnv:
- Runs RANDOM and/or TINY-HEURISTIC policies over fixed seeds
- Appends one row per episode to an episodes CSV for notebook analysis

Usage examples (from repo root):
  # Both policies over 20 default seeds, frame_skip=4:
  python -m experiments.sanity_rollout --policies both

  # Only heuristic, custom seeds:
  python -m experiments.sanity_rollout --policies heuristic --seeds 111,222,333

  # Quick random-only smoke:
  python -m experiments.sanity_rollout --policies random --steps 300 --out-dir /tmp/sanity
"""

from __future__ import annotations
import argparse
import csv
import logging
from pathlib import Path
from typing import List, Tuple, Optional

import numpy as np

from flapgap.env.flap_env import FlapEnv
from flapgap.game.game import setup_logging

logger = logging.getLogger(__name__)


# ------------------------ Policies ------------------------

def random_policy_init(action_seed: int, flap_prob: float = 0.1):
    rng = np.random.RandomState(action_seed)
    def act(_obs: np.ndarray) -> int:
        return int(rng.random_sample() < flap_prob)
    return act

def tiny_heuristic_policy_init(margin: float = 0.06):
    """
    Very small rule: flap when falling and the avatar center has sunk into the
    lower part of the next gap (gap_bottom - margin), else glide.
    """
    def act(obs: np.ndarray) -> int:
        y, vy, _dx, _gap_top, gap_bot = obs[0], obs[1], obs[2], obs[3], obs[4]
        return 1 if (vy >= 0.0 and y > gap_bot - margin) else 0
    return act


# ------------------------ Rollout core ------------------------

def write_episode_row(csv_path: Path, header: List[str], row: List):
    exists = csv_path.exists()
    with csv_path.open("a", newline="") as f:
        w = csv.writer(f)
        if not exists:
            w.writerow(header)
        w.writerow(row)

def run_one_episode(policy_name: str,
                    seed: int,
                    frame_skip: int,
                    steps_limit: int) -> Tuple[int, float, int, bool, bool, Optional[str]]:
    """Returns: (ep_len, ret_sum, distance, terminated, truncated, death_cause)."""
    env = FlapEnv(frame_skip=frame_skip)

    if policy_name == "random":
        policy = random_policy_init(10_000 + seed)
    elif policy_name == "heuristic":
        policy = tiny_heuristic_policy_init()
    else:
        raise ValueError(f"Unknown policy {policy_name!r}")

    ret_sum = 0.0
    ep_len = 0
    term = trunc = False
    info = {}
    try:
        obs, info = env.reset(seed=seed)
        for _ in range(steps_limit):
            obs, r, term, trunc, info = env.step(policy(obs))
            ret_sum += float(r)
            ep_len += 1
            if term or trunc:
                break
    finally:
        env.close()

    return ep_len, ret_sum, int(info.get("distance", 0)), bool(term), bool(trunc), info.get("death_cause")


def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument("--policies", type=str, default="both",
                    choices=["random", "heuristic", "both"],
                    help="Which policy to run")
    ap.add_argument("--seeds", type=str, default="",
                    help="Comma-separated seeds. If empty, uses 20 defaults: 101..120")
    ap.add_argument("--frame-skip", type=int, default=4,
                    help="Sim ticks per decision step")
    ap.add_argument("--steps", type=int, default=10_000,
                    help="Hard cap on decision steps (env may truncate earlier)")
    ap.add_argument("--out-dir", type=str, default="experiments/runs",
                    help="Directory to store episodes.csv")
    ap.add_argument("--debug", action="store_true", help="Verbose logging")
    args = ap.parse_args(argv)
    setup_logging(args.debug)

    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    if args.seeds.strip():
        seeds = [int(s) for s in args.seeds.split(",") if s.strip()]
    else:
        seeds = list(range(101, 121))

    episodes_csv = out_dir / "episodes.csv"
    header = [
        "policy_name", "seed", "frame_skip", "decision_hz",
        "episode_len_decisions", "return_sum", "distance",
        "terminated", "truncated", "death_cause",
    ]
    decision_hz = 60 / max(1, args.frame_skip)
    to_run = ["random", "heuristic"] if args.policies == "both" else [args.policies]

    logger.info(f"Running policies={to_run} on {len(seeds)} seeds "
                f"(frame_skip={args.frame_skip}, decision_hz≈{decision_hz:.1f}) -> {episodes_csv}")

    for policy_name in to_run:
        for seed in seeds:
            ep_len, ret_sum, dist, terminated, truncated, death_cause = run_one_episode(
                policy_name=policy_name,
                seed=seed,
                frame_skip=args.frame_skip,
                steps_limit=args.steps,
            )
            write_episode_row(episodes_csv, header, [
                policy_name, seed, args.frame_skip, decision_hz,
                ep_len, f"{ret_sum:.1f}", dist,
                int(terminated), int(truncated), (death_cause or ""),
            ])
            logger.info(f"[{policy_name}] seed={seed}  len={ep_len}  dist={dist}m  "
                        f"ret={ret_sum:.1f}  term={terminated} trunc={truncated}  cause={death_cause}")

    logger.info("Sanity rollouts complete")


if __name__ == "__main__":
    main()
