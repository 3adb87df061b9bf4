"""
Benchmark: structdiff on realistic documents.

Measures the three-way diff on:
    1. A service configuration that drifted between environments
    2. An API schema between two releases
    3. Order-insensitive comparison of shuffled arrays
    4. Growing arrays and objects (alignment cost)

The point is NOT raw speed; the point is:
    every difference lands in exactly one of three trees, with a path
    that leads back into the documents.
"""

import json
import random
import sys
import os
import time

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from structdiff import __version__, compare, compare_serialized, edit_script

# ═══════════════════════════════════════════════════════════════════
#  TEST DATA
# ═══════════════════════════════════════════════════════════════════

CONFIG_A = {
    "server": {
        "host": "0.0.0.0",
        "port": 443,
        "tls": True,
        "workers": 4,
    },
    "database": {
        "host": "db.internal",
        "port": 5432,
        "name": "production",
        "pool_size": 10,
        "ssl": True,
    },
    "logging": {
        "level": "WARN",
        "format": "json",
        "outputs": ["stdout", "file"],
    },
    "cache": {
        "backend": "redis",
        "ttl": 300,
        "max_size": 10000,
    },
}

CONFIG_B = {
    "server": {
        "host": "0.0.0.0",
        "port": 8080,        # Changed
        "tls": False,         # Changed
        "workers": 8,         # Changed
    },
    "database": {
        "host": "db.staging",  # Changed
        "port": 5432,
        "name": "staging",     # Changed
        "pool_size": 5,        # Changed
        "ssl": False,          # Changed
    },
    "logging": {
        "level": "DEBUG",      # Changed
        "format": "text",      # Changed
        "outputs": ["stdout"],  # Changed (removed "file")
    },
    "monitoring": {              # New key
        "enabled": True,
        "endpoint": "/health",
    },
    # "cache" removed entirely
}

# Larger nested data
API_SCHEMA_V1 = {
    "openapi": "3.0.0",
    "info": {"title": "My API", "version": "1.0.0"},
    "paths": {
        "/users": {
            "get": {
                "parameters": [
                    {"name": "page", "in": "query", "type": "integer"},
                    {"name": "limit", "in": "query", "type": "integer"},
                ],
                "responses": {
                    "200": {"description": "Success"},
                    "401": {"description": "Unauthorized"},
                }
            },
            "post": {
                "parameters": [
                    {"name": "name", "in": "body", "type": "string"},
                    {"name": "email", "in": "body", "type": "string"},
                ],
                "responses": {
                    "201": {"description": "Created"},
                    "400": {"description": "Bad Request"},
                }
            }
        },
        "/products": {
            "get": {
                "parameters": [
                    {"name": "category", "in": "query", "type": "string"},
                ],
                "responses": {
                    "200": {"description": "Success"},
                }
            }
        }
    }
}

API_SCHEMA_V2 = {
    "openapi": "3.1.0",  # Changed
    "info": {"title": "My API", "version": "2.0.0"},  # Changed version
    "paths": {
        "/users": {
            "get": {
                "parameters": [
                    {"name": "page", "in": "query", "type": "integer"},
                    {"name": "limit", "in": "query", "type": "integer"},
                    {"name": "sort", "in": "query", "type": "string"},  # Added
                ],
                "responses": {
                    "200": {"description": "Success"},
                    "401": {"description": "Unauthorized"},
                    "429": {"description": "Rate Limited"},  # Added
                }
            },
            "post": {
                "parameters": [
                    {"name": "name", "in": "body", "type": "string"},
                    {"name": "email", "in": "body", "type": "string"},
                    {"name": "role", "in": "body", "type": "string"},  # Added
                ],
                "responses": {
                    "201": {"description": "Created"},
                    "400": {"description": "Bad Request"},
                    "409": {"description": "Conflict"},  # Added
                }
            },
            "delete": {  # New operation
                "parameters": [
                    {"name": "id", "in": "path", "type": "string"},
                ],
                "responses": {
                    "204": {"description": "Deleted"},
                    "404": {"description": "Not Found"},
                }
            }
        },
        "/products": {
            "get": {
                "parameters": [
                    {"name": "category", "in": "query", "type": "string"},
                    {"name": "min_price", "in": "query", "type": "number"},  # Added
                ],
                "responses": {
                    "200": {"description": "Success"},
                }
            }
        },
        "/orders": {  # New path
            "get": {
                "parameters": [],
                "responses": {
                    "200": {"description": "Success"},
                }
            }
        }
    }
}


def _print_diffs(mismatch, limit=12):
    diffs = mismatch.all_diffs()
    for kind, entry in diffs[:limit]:
        print(f"    {kind}: {entry}")
    if len(diffs) > limit:
        print(f"    ... {len(diffs) - limit} more")


def _counts(mismatch):
    return (len(mismatch.left_only.get_diffs()),
            len(mismatch.right_only.get_diffs()),
            len(mismatch.both_different.get_diffs()))


# ═══════════════════════════════════════════════════════════════════
#  BENCHMARKS
# ═══════════════════════════════════════════════════════════════════

def benchmark_config_diff():
    """Config drift: changed values, a removed section, a new one."""
    print("=" * 70)
    print("  §1  CONFIG DIFF (realistic use case)")
    print("=" * 70)
    print()

    t0 = time.perf_counter()
    mismatch = compare(CONFIG_A, CONFIG_B)
    dt = time.perf_counter() - t0

    left, right, both = _counts(mismatch)
    _print_diffs(mismatch)
    print()
    print(f"  Extra on left:   {left}")
    print(f"  Extra on right:  {right}")
    print(f"  Mismatched:      {both}")
    print(f"  Time:            {dt*1000:.2f}ms")
    print()


def benchmark_api_schema_evolution():
    """Schema evolution: added parameters, responses, operations, paths."""
    print("=" * 70)
    print("  §2  API SCHEMA EVOLUTION")
    print("=" * 70)
    print()

    text_a = json.dumps(API_SCHEMA_V1)
    text_b = json.dumps(API_SCHEMA_V2)

    t0 = time.perf_counter()
    mismatch = compare_serialized(text_a, text_b)
    dt = time.perf_counter() - t0

    left, right, both = _counts(mismatch)
    _print_diffs(mismatch)
    print()
    print(f"  Extra on left:   {left}")
    print(f"  Extra on right:  {right}")
    print(f"  Mismatched:      {both}")
    print(f"  Time (parse + compare): {dt*1000:.2f}ms")
    print()

    # Ignoring descriptions should leave only structural changes
    mismatch = compare(API_SCHEMA_V1, API_SCHEMA_V2, exclude_keys=["^description$", "^version$"])
    print(f"  With -e ^description$ -e ^version$: {len(mismatch.all_diffs())} entries")
    print()


def benchmark_sorted_arrays():
    """Shuffled arrays compare equal only when sorting is enabled."""
    print("=" * 70)
    print("  §3  ORDER-INSENSITIVE ARRAYS")
    print("=" * 70)
    print()

    random.seed(0)
    for n in [10, 100, 500]:
        items = [{"id": i, "tags": [f"t{i % 7}", f"t{i % 3}"]} for i in range(n)]
        shuffled = [dict(item, tags=list(reversed(item["tags"]))) for item in items]
        random.shuffle(shuffled)

        t0 = time.perf_counter()
        unsorted = compare(items, shuffled)
        dt_plain = time.perf_counter() - t0

        t0 = time.perf_counter()
        ordered = compare(items, shuffled, sort_arrays=True)
        dt_sorted = time.perf_counter() - t0

        print(f"  {n:>4} objects: plain={len(unsorted.all_diffs()):>5} entries "
              f"({dt_plain*1000:>8.2f}ms)  sorted={len(ordered.all_diffs())} entries "
              f"({dt_sorted*1000:>8.2f}ms)")

    print()


def benchmark_scaling():
    """Test how the matcher scales with data size."""
    print("=" * 70)
    print("  §4  SCALING")
    print("=" * 70)
    print()

    for n in [10, 50, 100, 500]:
        # Shifted by 1: one deletion at the front, one insertion at the back
        a_data = list(range(n))
        b_data = list(range(1, n + 1))

        t0 = time.perf_counter()
        script = edit_script(a_data, b_data)
        mismatch = compare(a_data, b_data)
        dt = time.perf_counter() - t0

        print(f"  Array length {n:>4}: edits={len(script):>3}  "
              f"entries={len(mismatch.all_diffs()):>3}  time={dt*1000:>8.2f}ms")

    print()

    for n in [10, 50, 100, 500]:
        a_data = {f"key_{i}": i for i in range(n)}
        b_data = {f"key_{i}": i + 1 for i in range(n)}

        t0 = time.perf_counter()
        mismatch = compare(a_data, b_data)
        dt = time.perf_counter() - t0

        print(f"  Object size  {n:>4}: entries={len(mismatch.all_diffs()):>4}  "
              f"time={dt*1000:>8.2f}ms")

    print()


def main():
    print()
    print("╔══════════════════════════════════════════════════════════════════════╗")
    print("║          THREE-WAY JSON DIFF — BENCHMARK SUITE                       ║")
    print(f"║          structdiff v{__version__:<48}║")
    print("╚══════════════════════════════════════════════════════════════════════╝")
    print()

    benchmark_config_diff()
    benchmark_api_schema_evolution()
    benchmark_sorted_arrays()
    benchmark_scaling()

    print("=" * 70)
    print("  SUMMARY")
    print("=" * 70)
    print()
    print("  structdiff splits every difference between two documents into:")
    print("    1. what only the left document has")
    print("    2. what only the right document has")
    print("    3. what both have with different values")
    print()
    print("  Each entry carries a path (.a.[2].b) that resolves in the documents.")
    print()


if __name__ == "__main__":
    main()
