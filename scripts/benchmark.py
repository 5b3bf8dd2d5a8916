#!/usr/bin/env python3
"""
Benchmark Script for Pantry

Measures in-process throughput of the pantry operations, including
persistence to a temporary directory and contention between threads.

Usage:
    python scripts/benchmark.py                    # Run all benchmarks
    python scripts/benchmark.py --operations 10000 # Custom operation count
    python scripts/benchmark.py --threads 8        # Threads for the contention run
    python scripts/benchmark.py --profile          # Enable cProfile
"""

import argparse
import os
import random
import string
import sys
import tempfile
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, List

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from pantry import Options, Pantry


def random_string(length: int) -> str:
    """Generate a random alphanumeric string."""
    return ''.join(random.choices(string.ascii_letters + string.digits, k=length))


class Benchmark:
    """Collection of benchmarks for the pantry."""

    def __init__(self, operations: int = 10000, key_size: int = 16, value_size: int = 64, threads: int = 4):
        self.operations = operations
        self.threads = threads

        # Pre-generate test data
        self.keys = [random_string(key_size) for _ in range(operations)]
        self.values = [random_string(value_size) for _ in range(operations)]

    def _pantry(self, **kwargs) -> Pantry[str]:
        return Pantry(Options(expiration=3600, cleaning_interval=3600, **kwargs))

    def _filled(self, **kwargs) -> Pantry[str]:
        pantry = self._pantry(**kwargs)
        for key, value in zip(self.keys, self.values):
            pantry.set(key, value)
        return pantry

    def _timed(self, name: str, pantry: Pantry, run: Callable[[], None], count: int = None) -> Dict[str, Any]:
        count = self.operations if count is None else count
        start = time.perf_counter()
        run()
        total_ms = (time.perf_counter() - start) * 1000
        pantry.close()
        return {
            "operation": name,
            "count": count,
            "total_ms": total_ms,
            "mean_ms": total_ms / count,
            "ops_per_second": count / (total_ms / 1000),
        }

    def benchmark_set(self) -> Dict[str, Any]:
        """Benchmark SET operations."""
        pantry = self._pantry()

        def run():
            for key, value in zip(self.keys, self.values):
                pantry.set(key, value)

        return self._timed("SET", pantry, run)

    def benchmark_get(self) -> Dict[str, Any]:
        """Benchmark GET operations (hits)."""
        pantry = self._filled()

        def run():
            for key in self.keys:
                pantry.get(key)

        return self._timed("GET (hit)", pantry, run)

    def benchmark_get_miss(self) -> Dict[str, Any]:
        """Benchmark GET operations (misses)."""
        pantry = self._pantry()
        miss_keys = [random_string(8) for _ in range(self.operations)]

        def run():
            for key in miss_keys:
                pantry.get(key)

        return self._timed("GET (miss)", pantry, run)

    def benchmark_remove(self) -> Dict[str, Any]:
        """Benchmark REMOVE operations."""
        pantry = self._filled()

        def run():
            for key in self.keys:
                pantry.remove(key)

        return self._timed("REMOVE", pantry, run)

    def benchmark_enumerate(self) -> Dict[str, Any]:
        """Benchmark a full enumeration of live entries."""
        pantry = self._filled()

        def run():
            for _ in pantry.all():
                pass

        return self._timed("Enumerate (all)", pantry, run)

    def benchmark_sweep(self) -> Dict[str, Any]:
        """Benchmark one sweep over a half-expired pantry."""
        pantry = self._pantry()
        for i, (key, value) in enumerate(zip(self.keys, self.values)):
            pantry.set(key, value, ttl=-1 if i % 2 else 3600)

        return self._timed("Sweep", pantry, pantry.sweep)

    def benchmark_persist(self) -> Dict[str, Any]:
        """Benchmark SET + persist to a temporary directory."""
        count = min(self.operations, 1000)
        with tempfile.TemporaryDirectory() as directory:
            pantry = self._pantry(persistence_directory=directory)

            def run():
                for key, value in zip(self.keys[:count], self.values[:count]):
                    pantry.set(key, value).persist()

            return self._timed("SET + persist", pantry, run, count)

    def benchmark_contention(self) -> Dict[str, Any]:
        """Benchmark mixed SET/GET from several threads."""
        pantry = self._filled()
        chunk = self.operations // self.threads

        def worker(offset: int) -> None:
            for i in range(offset, offset + chunk):
                if i % 2:
                    pantry.set(self.keys[i], self.values[i])
                else:
                    pantry.get(self.keys[i])

        def run():
            with ThreadPoolExecutor(max_workers=self.threads) as executor:
                list(executor.map(worker, range(0, chunk * self.threads, chunk)))

        return self._timed(f"Mixed ({self.threads} threads)", pantry, run, chunk * self.threads)

    def run_all(self) -> List[Dict[str, Any]]:
        """Run all benchmarks."""
        benchmarks = [
            self.benchmark_set,
            self.benchmark_get,
            self.benchmark_get_miss,
            self.benchmark_remove,
            self.benchmark_enumerate,
            self.benchmark_sweep,
            self.benchmark_persist,
            self.benchmark_contention,
        ]

        results = []
        for func in benchmarks:
            print(f"Running: {func.__doc__.strip()}", end=" ", flush=True)
            result = func()
            print(f"{result['ops_per_second']:,.0f} ops/sec")
            results.append(result)

        return results


def print_results(results: List[Dict[str, Any]]):
    """Print benchmark results in a table."""
    print()
    print("=" * 70)
    print(f"{'Operation':<30} {'Ops/sec':>12} {'Mean (ms)':>12} {'Total (ms)':>12}")
    print("-" * 70)

    for r in results:
        print(f"{r['operation']:<30} {r['ops_per_second']:>12,.0f} "
              f"{r['mean_ms']:>12.4f} {r['total_ms']:>12.1f}")

    print("=" * 70)


def main():
    parser = argparse.ArgumentParser(
        description="Benchmark the pantry",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument("--operations", "-n", type=int, default=10000, help="Number of operations per benchmark")
    parser.add_argument("--key-size", type=int, default=16, help="Size of keys")
    parser.add_argument("--value-size", type=int, default=64, help="Size of values")
    parser.add_argument("--threads", type=int, default=4, help="Threads for the contention benchmark")
    parser.add_argument("--profile", action="store_true", help="Enable cProfile profiling")

    args = parser.parse_args()

    print(f"Pantry Benchmark ({args.operations:,} operations per test)")
    print()

    benchmark = Benchmark(
        operations=args.operations,
        key_size=args.key_size,
        value_size=args.value_size,
        threads=args.threads,
    )

    if args.profile:
        import cProfile
        import pstats

        profiler = cProfile.Profile()
        profiler.enable()
        results = benchmark.run_all()
        profiler.disable()

        print_results(results)

        print()
        print("Profiling Results (top 20):")
        stats = pstats.Stats(profiler)
        stats.sort_stats('cumulative')
        stats.print_stats(20)
    else:
        results = benchmark.run_all()
        print_results(results)


if __name__ == "__main__":
    main()
