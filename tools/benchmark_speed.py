"""
Performance Benchmark
=====================

Measures engine tick throughput and environment step throughput.

Usage:
    python -m tools.benchmark_speed [--steps S] [--quick]
"""

from __future__ import annotations

import argparse
import sys
import time

import numpy as np

from frogger_core.config_loader import load_config
from frogger_core.env_gym import ACTION_DIRECTIONS, FroggerEnv
from frogger_core.events import Tick
from frogger_core.reducer import reduce_state
from frogger_core.state import initial_state


def benchmark_reducer(num_ticks: int = 10000) -> dict:
    """
    Benchmark the pure reducer on clock ticks alone.

    Args:
        num_ticks: Number of ticks to fold.

    Returns:
        Dict with timing results.
    """
    config = load_config()
    state = initial_state(config)

    start = time.perf_counter()
    for n in range(num_ticks):
        state = reduce_state(state, Tick(n), config)
        if state.game_over:
            state = initial_state(config)
    elapsed = time.perf_counter() - start

    return {
        "mode": "reducer",
        "num_steps": num_ticks,
        "elapsed_seconds": elapsed,
        "steps_per_second": num_ticks / elapsed,
        "ms_per_step": (elapsed * 1000) / num_ticks
    }


def benchmark_single_env(
    num_steps: int = 1000,
    seed: int = 42
) -> dict:
    """
    Benchmark single environment performance with random actions.

    Args:
        num_steps: Number of steps to run.
        seed: Random seed for the action sampler.

    Returns:
        Dict with timing results.
    """
    env = FroggerEnv()
    rng = np.random.default_rng(seed)

    # Warmup
    env.reset(seed=1)
    for _ in range(10):
        _, _, terminated, truncated, _ = env.step(int(rng.integers(len(ACTION_DIRECTIONS))))
        if terminated or truncated:
            env.reset()

    env.reset(seed=1)
    start = time.perf_counter()

    for _ in range(num_steps):
        _, _, terminated, truncated, _ = env.step(int(rng.integers(len(ACTION_DIRECTIONS))))
        if terminated or truncated:
            env.reset()

    elapsed = time.perf_counter() - start
    env.close()

    return {
        "mode": "env",
        "num_steps": num_steps,
        "elapsed_seconds": elapsed,
        "steps_per_second": num_steps / elapsed,
        "ms_per_step": (elapsed * 1000) / num_steps
    }


def run_all_benchmarks(steps: int = 1000) -> list:
    """Run every benchmark and print a summary."""
    results = []

    print("=" * 60)
    print("FROGGER ENGINE PERFORMANCE BENCHMARK")
    print("=" * 60)
    print()

    print("Benchmarking reducer (ticks)...")
    result = benchmark_reducer(num_ticks=steps * 10)
    results.append(result)
    print(f"  Ticks/sec: {result['steps_per_second']:.1f}")
    print()

    print("Benchmarking FroggerEnv (single)...")
    result = benchmark_single_env(num_steps=steps)
    results.append(result)
    print(f"  Steps/sec: {result['steps_per_second']:.1f}")
    print()

    print(f"{'Mode':<20} {'Steps/s':>12} {'ms/step':>10}")
    print("-" * 44)
    for r in results:
        print(f"{r['mode']:<20} {r['steps_per_second']:>12.1f} {r['ms_per_step']:>10.3f}")

    return results


def main():
    parser = argparse.ArgumentParser(description="Benchmark Frogger engine performance")
    parser.add_argument("--steps", type=int, default=1000, help="Env steps per benchmark")
    parser.add_argument("--quick", action="store_true", help="Quick benchmark (fewer steps)")

    args = parser.parse_args()

    steps = 100 if args.quick else args.steps
    run_all_benchmarks(steps=steps)
    return 0


if __name__ == "__main__":
    sys.exit(main())
