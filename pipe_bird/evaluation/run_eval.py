"""
Evaluation Harness
==================

Flies an agent through every seed of the seed bank and reports how far it got.

Per run the harness keeps the pipes passed, the steps survived, how the run
ended (fell, hit_pipe or step_cap) and the gap size of the last pipe faced,
which shows how deep into the narrowing sequence the agent reached.

Usage:
    python -m pipe_bird.evaluation.run_eval --agent contestants/baseline_flapper
"""

from __future__ import annotations

import argparse
import importlib.util
import json
import os
import sys
import time
from collections import Counter
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple
import numpy as np

from pipe_bird.bird_core.env_gym import PipeBirdEnv


DEFAULT_SEED_BANK = os.path.join(os.path.dirname(__file__), "seed_bank.json")

Policy = Callable[[Dict[str, np.ndarray]], int]


@dataclass
class RunRecord:
    """Outcome of one seeded flight."""
    seed: int
    pipes: int
    steps: int
    end: str
    final_gap: int
    seconds: float
    actions: Optional[List[int]] = None

    @property
    def pipes_per_step(self) -> float:
        return self.pipes / self.steps if self.steps else 0.0


@dataclass
class BankReport:
    """Aggregate over a seed bank."""
    runs: List[RunRecord]

    @property
    def ends(self) -> Dict[str, int]:
        """How many runs ended each way."""
        return dict(Counter(run.end for run in self.runs))

    @property
    def pipes(self) -> np.ndarray:
        return np.array([run.pipes for run in self.runs], dtype=np.int64)

    def stats(self) -> Dict[str, float]:
        """Pipe statistics over all runs: mean, std, min, max, median."""
        pipes = self.pipes
        return {
            "mean": float(pipes.mean()),
            "std": float(pipes.std()),
            "min": int(pipes.min()),
            "max": int(pipes.max()),
            "median": float(np.median(pipes)),
        }

    @property
    def pipes_per_step(self) -> float:
        """Pipes passed per step survived, pooled over the bank."""
        steps = sum(run.steps for run in self.runs)
        return float(self.pipes.sum()) / steps if steps else 0.0

    @property
    def narrowest_gap(self) -> int:
        return min(run.final_gap for run in self.runs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stats": self.stats(),
            "ends": self.ends,
            "pipes_per_step": self.pipes_per_step,
            "narrowest_gap": self.narrowest_gap,
            "runs": [
                {k: v for k, v in asdict(run).items() if k != "actions"}
                for run in self.runs
            ],
        }


def load_seed_bank(path: Optional[str] = None) -> List[int]:
    """Seeds listed under "seeds" in a JSON file (the bundled bank if None)."""
    with open(path or DEFAULT_SEED_BANK, "r") as f:
        return [int(seed) for seed in json.load(f)["seeds"]]


def load_agent(agent_path: str) -> Any:
    """
    Import an agent from a contestant directory or agent.py file.

    The module must define a BirdAgent class or an act(obs) function.
    A BirdAgent is instantiated and returned; otherwise the act function is.

    Raises:
        FileNotFoundError: No agent.py at the path.
        AttributeError: The module defines neither entry point.
    """
    path = Path(agent_path)
    agent_file = path / "agent.py" if path.is_dir() else path
    if not agent_file.exists():
        raise FileNotFoundError(f"Agent file not found: {agent_file}")

    module_spec = importlib.util.spec_from_file_location("bird_agent", agent_file)
    if module_spec is None or module_spec.loader is None:
        raise ImportError(f"Failed to load agent module from {agent_file}")
    module = importlib.util.module_from_spec(module_spec)
    module_spec.loader.exec_module(module)

    if hasattr(module, "BirdAgent"):
        return module.BirdAgent()
    if callable(getattr(module, "act", None)):
        return module.act
    raise AttributeError(f"{agent_file} defines neither a BirdAgent class nor an act function")


def _policy(agent: Any) -> Tuple[Policy, Optional[Callable[[], None]]]:
    """Split an agent into its act function and optional reset hook."""
    if callable(getattr(agent, "act", None)):
        return agent.act, getattr(agent, "reset", None)
    if callable(agent):
        return agent, None
    raise TypeError(f"Agent {agent!r} has no act method and is not callable")


def fly(
    agent: Any,
    seed: int,
    max_steps: Optional[int] = None,
    record_actions: bool = False
) -> RunRecord:
    """
    Fly one episode of the environment on a seed.

    Args:
        agent: BirdAgent-like object or act(obs) function.
        seed: Seed for the pipe sequence.
        max_steps: Step cap. Uses caps.max_env_steps if None.
        record_actions: Keep every action taken.
    """
    act, reset = _policy(agent)
    if reset is not None:
        reset()

    env = PipeBirdEnv(max_steps=max_steps)
    actions: Optional[List[int]] = [] if record_actions else None
    start = time.perf_counter()
    try:
        obs, info = env.reset(seed=seed)
        terminated = truncated = False
        while not (terminated or truncated):
            action = int(act(obs))
            if actions is not None:
                actions.append(action)
            obs, _, terminated, truncated, info = env.step(action)
        final_gap = env.game.obstacle.gap_size
    finally:
        env.close()

    return RunRecord(
        seed=seed,
        pipes=int(info["score"]),
        steps=int(info["steps"]),
        end=info["terminated_reason"],
        final_gap=final_gap,
        seconds=time.perf_counter() - start,
        actions=actions
    )


def evaluate_agent(
    agent: Any,
    seeds: Optional[List[int]] = None,
    max_steps: Optional[int] = None,
    record_actions: bool = False,
    verbose: bool = True
) -> BankReport:
    """Fly the agent over every seed (the seed bank if None) and aggregate."""
    if seeds is None:
        seeds = load_seed_bank()

    runs = []
    for seed in seeds:
        run = fly(agent, seed, max_steps=max_steps, record_actions=record_actions)
        runs.append(run)
        if verbose:
            print(f"  seed {run.seed:>6}: {run.pipes:>3} pipes in {run.steps:>5} steps, "
                  f"{run.end}, last gap {run.final_gap}")

    report = BankReport(runs)
    if verbose:
        print(format_report(report))
    return report


def format_report(report: BankReport) -> str:
    stats = report.stats()
    ends = ", ".join(f"{reason}={count}" for reason, count in sorted(report.ends.items()))
    return "\n".join([
        f"Pipes over {len(report.runs)} seeds: mean {stats['mean']:.2f} +/- {stats['std']:.2f}, "
        f"median {stats['median']:.1f}, range {stats['min']}..{stats['max']}",
        f"Run endings: {ends}",
        f"Pipes per step survived: {report.pipes_per_step:.4f}",
        f"Narrowest gap reached: {report.narrowest_gap}",
    ])


def save_results(report: BankReport, agent_name: str, output_path: str) -> None:
    """Write the report as JSON."""
    data = {"agent": agent_name, "timestamp": time.strftime("%Y-%m-%d %H:%M:%S")}
    data.update(report.to_dict())
    with open(output_path, "w") as f:
        json.dump(data, f, indent=2)
    print(f"Results saved to {output_path}")


def main():
    parser = argparse.ArgumentParser(description="Evaluate a Pipe Bird agent over the seed bank")
    parser.add_argument("--agent", required=True, help="Contestant directory or agent.py file")
    parser.add_argument("--seeds", default=None, help="Seed bank JSON (bundled bank if omitted)")
    parser.add_argument("--max-steps", type=int, default=None, help="Step cap per run")
    parser.add_argument("--output", default=None, help="Write the report to this JSON file")
    parser.add_argument("--quiet", action="store_true", help="Only print the summary")

    args = parser.parse_args()

    try:
        agent = load_agent(args.agent)
    except (FileNotFoundError, ImportError, AttributeError) as e:
        print(f"Error loading agent: {e}")
        return 1

    report = evaluate_agent(
        agent,
        seeds=load_seed_bank(args.seeds),
        max_steps=args.max_steps,
        verbose=not args.quiet
    )
    if args.quiet:
        print(format_report(report))

    if args.output:
        save_results(report, Path(args.agent).name, args.output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
