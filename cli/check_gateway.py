"""
CLI tool for checking a MAI Gateway deployment the way the extension does.
Usage: python -m cli.check_gateway [--base URL] [--call plans|recommend --data JSON]
"""

import sys
import json
import argparse
from typing import Any, Optional

import requests

from mai_gateway.config import get_settings


CALL_PATHS = {
    "plans": "/api/plans",
    "recommend": "/api/recommend",
}


# ANSI color codes for terminal output
class Colors:
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    ENDC = '\033[0m'
    BOLD = '\033[1m'


def normalize_base(base: str) -> str:
    """Trim whitespace and one trailing slash so paths join cleanly."""
    base = base.strip()
    if base.endswith("/"):
        base = base[:-1]
    return base


def ping_gateway(base: str, timeout: float = 5.0) -> bool:
    """
    Check connectivity with GET <base>/api/health.

    Returns:
        True only for an HTTP 200 answer; network errors count as unreachable
    """
    try:
        response = requests.get(f"{normalize_base(base)}/api/health", timeout=timeout)
    except requests.RequestException:
        return False
    return response.status_code == 200


def call_gateway(base: str, call: str, payload: Any, timeout: float = 60.0) -> requests.Response:
    """POST a JSON payload to one of the gateway operations."""
    url = f"{normalize_base(base)}{CALL_PATHS[call]}"
    return requests.post(url, json=payload, timeout=timeout)


def main(argv: Optional[list] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Check a MAI Gateway deployment",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m cli.check_gateway
  python -m cli.check_gateway --base https://my-gateway.azurewebsites.net/
  python -m cli.check_gateway --call plans --data '{"zip": "33101"}'
        """
    )
    parser.add_argument(
        "--base", "-b",
        help="Gateway base URL (defaults to the API_BASE setting)"
    )
    parser.add_argument(
        "--call", "-c",
        choices=sorted(CALL_PATHS),
        help="Operation to invoke after the health check"
    )
    parser.add_argument(
        "--data", "-d",
        default="{}",
        help="JSON payload for --call"
    )
    parser.add_argument(
        "--timeout", "-t",
        type=float,
        default=5.0,
        help="Health check timeout in seconds"
    )

    args = parser.parse_args(argv)
    base = normalize_base(args.base or get_settings().api_base)

    if not ping_gateway(base, timeout=args.timeout):
        print(f"{Colors.RED}Gateway not reachable: {base}{Colors.ENDC}")
        return 1
    print(f"{Colors.GREEN}Gateway reachable: {base}{Colors.ENDC}")

    if not args.call:
        return 0

    try:
        payload = json.loads(args.data)
    except json.JSONDecodeError as e:
        print(f"{Colors.RED}Error: --data is not valid JSON ({e}){Colors.ENDC}")
        return 1

    try:
        response = call_gateway(base, args.call, payload)
    except requests.RequestException as e:
        print(f"{Colors.RED}Error: {e}{Colors.ENDC}")
        return 1

    color = Colors.GREEN if response.status_code == 200 else Colors.YELLOW
    print(f"{Colors.BOLD}{args.call}{Colors.ENDC} -> {color}{response.status_code}{Colors.ENDC}")
    try:
        print(json.dumps(response.json(), indent=2))
    except ValueError:
        print(response.text)
    return 0 if response.status_code == 200 else 1


if __name__ == "__main__":
    sys.exit(main())
