# benchmark.py
#
# Measure bdecode throughput on real .torrent files.
#
# Measures, per file:
# - Size
# - Best and mean time of one full parse
# - Throughput

import argparse
import json
import logging
import sys
import time
from pathlib import Path

from bdecode import parse
from torrent_meta import setup_logging

_logger = logging.getLogger("benchmark")


def bench_file(path: str | Path, iterations: int = 100) -> dict:
    """Parse one file `iterations` times and report timings."""
    if iterations < 1:
        raise ValueError("iterations must be >= 1")

    path = Path(path)
    data = path.read_bytes()

    timings = []
    for _ in range(iterations):
        start = time.perf_counter()
        parse(data)
        timings.append(time.perf_counter() - start)

    best = min(timings)
    mean = sum(timings) / len(timings)
    _logger.debug(f"{path.name}: best {best:.6f}s over {iterations} runs")

    return {
        'file': str(path),
        'size': len(data),
        'iterations': iterations,
        'best': best,
        'mean': mean,
        'throughput': len(data) / best if best > 0 else 0,
    }


def run_benchmark(paths: list[str | Path], iterations: int = 100,
                  results_file: str | Path | None = None) -> list[dict]:
    print("=" * 60)
    print("bdecode Benchmark")
    print("=" * 60)
    print(f"\nIterations per file: {iterations}\n")

    results = [bench_file(p, iterations) for p in paths]

    print(f"{'File':<30} {'Size':>10} {'Best (ms)':>12} {'Mean (ms)':>12} {'MB/s':>10}")
    print("-" * 78)
    for r in results:
        name = Path(r['file']).name
        print(
            f"{name:<30} {r['size']:>10,} {r['best'] * 1000:>12.3f} "
            f"{r['mean'] * 1000:>12.3f} {r['throughput'] / 1_000_000:>10.2f}"
        )

    if results_file is not None:
        with open(results_file, 'w') as f:
            json.dump(results, f, indent=2)
        print(f"\nResults saved to {results_file}")

    return results


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="benchmark", description="Benchmark bdecode.parse")
    parser.add_argument("torrents", nargs="+")
    parser.add_argument("-n", "--iterations", type=int, default=100)
    parser.add_argument("-o", "--output", default=None, help="write results as JSON")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    try:
        run_benchmark(args.torrents, args.iterations, args.output)
    except Exception as e:
        print(f"Benchmark error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
