#!/usr/bin/env python3
"""
Post-Deployment Health Check Script

Validates that a deployed waitlist API is reachable, can talk to its
Supabase store, and answers browser preflights for the frontend origin.

Usage:
    python scripts/health_check.py --url <DEPLOYMENT_URL> --environment <staging|production>

Checks Performed:
    1. /api/health returns 200 and reports the store as connected
    2. /api/leaderboard?limit=1 returns 200 with a "leaderboard" list
    3. OPTIONS /api/join from the frontend origin returns 200 with CORS headers

Exit Codes:
    0: All health checks passed
    1: One or more health checks failed
"""

import argparse
import sys
import time
import requests
from typing import Dict, Tuple

DEFAULT_ORIGIN = "https://trysavoy.com"


def _full_url(url: str, endpoint: str) -> str:
    return f"{url.rstrip('/')}{endpoint}"


def check_health_endpoint(url: str, timeout: int = 10) -> Tuple[bool, str]:
    """
    Checks /api/health and verifies the store connection it reports.

    Returns:
        Tuple[bool, str]: (success, message)
    """
    try:
        response = requests.get(_full_url(url, "/api/health"), timeout=timeout)

        if response.status_code != 200:
            return False, f"✗ /api/health returned {response.status_code}"

        try:
            data = response.json()
        except ValueError:
            return False, "✗ /api/health returned invalid JSON"

        store_status = data.get('store', {}).get('status', 'unknown')
        if store_status == 'connected':
            return True, "✓ /api/health returned 200, store connected"
        return False, f"✗ /api/health store status: {store_status}"

    except requests.exceptions.Timeout:
        return False, f"✗ /api/health timed out after {timeout} seconds"
    except requests.exceptions.ConnectionError:
        return False, "✗ /api/health connection failed"


def check_leaderboard(url: str, timeout: int = 10) -> Tuple[bool, str]:
    endpoint = "/api/leaderboard?limit=1"
    try:
        response = requests.get(_full_url(url, endpoint), timeout=timeout)
        if response.status_code != 200:
            return False, f"✗ {endpoint} returned {response.status_code}"
        try:
            leaderboard = response.json().get('leaderboard')
        except ValueError:
            return False, f"✗ {endpoint} returned invalid JSON"
        if not isinstance(leaderboard, list):
            return False, f"✗ {endpoint} response has no leaderboard list"
        return True, f"✓ {endpoint} returned {len(leaderboard)} row(s)"

    except requests.exceptions.Timeout:
        return False, f"✗ {endpoint} timed out after {timeout} seconds"
    except requests.exceptions.ConnectionError:
        return False, f"✗ {endpoint} connection failed"


def check_preflight(url: str, origin: str, timeout: int = 10) -> Tuple[bool, str]:
    """Sends the preflight a browser would send before POST /api/join."""
    endpoint = "/api/join"
    headers = {
        "Origin": origin,
        "Access-Control-Request-Method": "POST",
        "Access-Control-Request-Headers": "Content-Type",
    }
    try:
        response = requests.options(_full_url(url, endpoint), headers=headers, timeout=timeout)
        if response.status_code != 200:
            return False, f"✗ OPTIONS {endpoint} returned {response.status_code}"

        allowed = response.headers.get('Access-Control-Allow-Origin')
        if allowed != origin:
            return False, f"✗ OPTIONS {endpoint} did not allow origin {origin} (got {allowed})"
        return True, f"✓ OPTIONS {endpoint} allowed {origin}"

    except requests.exceptions.Timeout:
        return False, f"✗ OPTIONS {endpoint} timed out after {timeout} seconds"
    except requests.exceptions.ConnectionError:
        return False, f"✗ OPTIONS {endpoint} connection failed"


def run_health_checks(url: str, environment: str, origin: str) -> Dict[str, Tuple[bool, str]]:
    print(f"\n{'='*60}")
    print(f"Post-Deployment Health Checks - {environment.upper()}")
    print(f"{'='*60}\n")
    print(f"Target URL: {url}\n")

    results = {}

    print("Check 1: API health with store (/api/health)...")
    results["api_health"] = check_health_endpoint(url, timeout=15)
    print(f"  {results['api_health'][1]}\n")

    print("Check 2: Leaderboard query (/api/leaderboard)...")
    results["leaderboard"] = check_leaderboard(url, timeout=15)
    print(f"  {results['leaderboard'][1]}\n")

    print(f"Check 3: CORS preflight from {origin}...")
    results["preflight"] = check_preflight(url, origin, timeout=15)
    print(f"  {results['preflight'][1]}\n")

    return results


def print_summary(results: Dict[str, Tuple[bool, str]], environment: str) -> bool:
    """
    Prints a summary of health check results.

    Returns:
        bool: True if all checks passed, False otherwise
    """
    print(f"{'='*60}")
    print(f"Health Check Summary - {environment.upper()}")
    print(f"{'='*60}\n")

    passed = sum(1 for success, _ in results.values() if success)
    total = len(results)

    for check_name, (success, _) in results.items():
        symbol = "✓" if success else "✗"
        print(f"{symbol} {check_name}: {'PASS' if success else 'FAIL'}")

    print(f"\nTotal: {passed}/{total} checks passed\n")
    return passed == total


def main():
    parser = argparse.ArgumentParser(description="Run post-deployment health checks")
    parser.add_argument("--url", required=True, help="Deployment URL to check")
    parser.add_argument(
        "--environment",
        required=True,
        choices=["staging", "production"],
        help="Deployment environment"
    )
    parser.add_argument(
        "--origin",
        default=DEFAULT_ORIGIN,
        help=f"Frontend origin used for the preflight check (default: {DEFAULT_ORIGIN})"
    )
    parser.add_argument(
        "--retry",
        type=int,
        default=3,
        help="Number of attempts before giving up (default: 3)"
    )
    parser.add_argument(
        "--retry-delay",
        type=int,
        default=10,
        help="Delay in seconds between retries (default: 10)"
    )

    args = parser.parse_args()

    for attempt in range(1, args.retry + 1):
        if attempt > 1:
            print(f"\nRetry attempt {attempt}/{args.retry}")
            time.sleep(args.retry_delay)

        results = run_health_checks(args.url, args.environment, args.origin)
        if print_summary(results, args.environment):
            sys.exit(0)

    print(f"✗ HEALTH CHECKS FAILED AFTER {args.retry} ATTEMPTS", file=sys.stderr)
    sys.exit(1)


if __name__ == "__main__":
    main()
