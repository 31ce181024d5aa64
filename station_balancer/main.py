"""
CLI Entrypoint Module

Station balancer CLI:
- Loads a session JSON file ({"stations": [...], "tests": [...]}) or the built-in sample
- Runs balance(stations, tests, max_time, max_iterations)
- Prints the suggested moves (or the full result as JSON with --json)

Usage:
    python -m station_balancer.main session.json --max-time 60
    python -m station_balancer.main --sample
"""

import argparse
import json
import logging
from typing import Optional

from .adjustments import suggest_default_max_time
from .balancer import balance
from .config import get_default_max_iterations
from .models import SessionData
from .report import summarize_result
from .world import build_sample_session

logger = logging.getLogger(__name__)


def load_session(path: str) -> SessionData:
    """
    Load and validate a session JSON file.

    Raises:
        OSError: if the file cannot be read
        ValueError: if the JSON is malformed, invalid, or has duplicate IDs
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    session = SessionData.model_validate(data)
    session.validate_unique_ids()
    return session


def main(argv: Optional[list[str]] = None) -> int:
    """Run the station balancer CLI.

    Returns:
        0 on success, 1 on invalid input.
    """
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    parser = argparse.ArgumentParser(
        description="Suggest test moves that balance total duration across stations."
    )
    parser.add_argument("session", nargs="?", help="Path to a session JSON file with stations and tests.")
    parser.add_argument("--sample", action="store_true", help="Use the built-in sample session.")
    parser.add_argument(
        "--max-time",
        type=int,
        default=None,
        help="Maximum minutes per station (default: 120%% of the average station load).",
    )
    parser.add_argument("--no-max-time", action="store_true", help="Balance without a per-station cap.")
    parser.add_argument("--max-iterations", type=int, default=None, help="Maximum number of suggested moves.")
    parser.add_argument("--json", action="store_true", help="Print the full result as JSON.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.sample:
        session = build_sample_session()
    elif args.session:
        try:
            session = load_session(args.session)
        except (OSError, ValueError) as exc:
            # pydantic's ValidationError and json's JSONDecodeError are ValueErrors
            logger.error("could not load session from %s", args.session)
            print(f"ERROR: {exc}")
            return 1
    else:
        print("no session file given; pass a path or --sample.")
        return 1

    if args.no_max_time:
        max_time = None
    elif args.max_time is not None:
        max_time = args.max_time
    else:
        max_time = suggest_default_max_time(session.stations, session.tests) or None

    if max_time is not None and max_time <= 0:
        print(f"ERROR: --max-time must be a positive number of minutes, got {max_time}")
        return 1

    try:
        max_iterations = args.max_iterations if args.max_iterations is not None else get_default_max_iterations()
    except RuntimeError as exc:
        print(f"ERROR: {exc}")
        return 1
    if max_iterations <= 0:
        print(f"ERROR: --max-iterations must be positive, got {max_iterations}")
        return 1

    result = balance(session.stations, session.tests, max_time, max_iterations)

    if args.json:
        print(result.model_dump_json(indent=2))
        return 0

    if max_time is not None:
        print(f"Max time per station: {max_time} min\n")
    for line in summarize_result(result, session.stations, max_time):
        print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
