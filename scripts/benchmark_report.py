#!/usr/bin/env python3
"""
Benchmark Script for the Engagement Report API

Measures latency of the engagement report endpoint
"""

import sys
import time
import requests
import statistics


def percentile(times: list, q: float) -> float:
    ordered = sorted(times)
    return ordered[min(int(len(ordered) * q), len(ordered) - 1)]


def benchmark_report(base_url: str, runs: int = 20):
    """Benchmark the engagement report query"""
    print(f"\n{'=' * 60}")
    print("BENCHMARK: Engagement Report")
    print(f"{'=' * 60}")

    url = f"{base_url}/reports/engagement"
    times = []
    rows = 0

    for _ in range(runs):
        start = time.time()
        try:
            response = requests.get(url, timeout=30)
            elapsed = (time.time() - start) * 1000  # Convert to ms

            if response.status_code == 200:
                times.append(elapsed)
                rows = len(response.json()["data"])
            else:
                print(f"Error: Status {response.status_code}")
        except requests.RequestException as e:
            print(f"Error: {e}")

    if not times:
        print("No successful requests")
        return None

    result = {
        "rows": rows,
        "p50": statistics.median(times),
        "p95": percentile(times, 0.95),
        "p99": percentile(times, 0.99),
        "avg": statistics.mean(times),
        "min": min(times),
        "max": max(times)
    }

    print(f"\n{'Rows':>8} {'P50':>10} {'P95':>10} {'P99':>10} {'Avg':>10}")
    print(f"{'-' * 52}")
    print(f"{result['rows']:>8} {result['p50']:>9.0f}ms {result['p95']:>9.0f}ms "
          f"{result['p99']:>9.0f}ms {result['avg']:>9.0f}ms")
    print(f"{'=' * 60}\n")

    return result


def main():
    base_url = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:8000"

    print("\n" + "=" * 60)
    print("ENGAGEMENT REPORT API - BENCHMARK")
    print("=" * 60)
    print(f"Target: {base_url}")
    print("=" * 60)

    # Test connection
    try:
        response = requests.get(f"{base_url}/health", timeout=5)
        if response.status_code != 200:
            print("Error: API is not healthy")
            sys.exit(1)
    except requests.RequestException as e:
        print(f"Error: Cannot connect to API: {e}")
        sys.exit(1)

    benchmark_report(base_url)


if __name__ == "__main__":
    main()
