"""
Caller-side helpers around a balancer run.

- suggest_default_max_time: default cap offered before the user types one
- has_exceeded_max_time: whether the cap could not be fully satisfied
- moved_tests_map: which tests moved, and where they ended up
- apply_suggested_assignments: write suggested assignments back onto stations
"""

import logging
import math
from typing import Optional

from .config import DEFAULT_MAX_TIME_FACTOR
from .models import BalanceResult, MoveSuggestion, Station, StationTest

logger = logging.getLogger(__name__)


def suggest_default_max_time(stations: list[Station], tests: list[StationTest]) -> int:
    """
    Suggest a per-station cap: 120% of the average station load, rounded up.

    Returns 0 when there are no stations.
    """
    if not stations:
        return 0
    total_duration = sum(test.estimated_duration for test in tests)
    average = total_duration / len(stations)
    return math.ceil(average * DEFAULT_MAX_TIME_FACTOR)


def has_exceeded_max_time(result: BalanceResult, max_time: Optional[int]) -> bool:
    """Return True if any station is still above max_time after balancing."""
    if not max_time:
        return False
    return any(times.after > max_time for times in result.station_times.values())


def moved_tests_map(suggestions: list[MoveSuggestion]) -> dict[str, str]:
    """Map each moved test ID to its final destination station ID."""
    moved: dict[str, str] = {}
    for suggestion in suggestions:
        moved[suggestion.test_id] = suggestion.destination_station_id
    return moved


def apply_suggested_assignments(
    stations: list[Station],
    suggested_assignments: dict[str, list[str]],
) -> list[Station]:
    """
    Return copies of stations with their test lists replaced by the suggestion.

    test_count is recomputed for every station. Stations missing from the
    map keep their current tests.

    Args:
        stations: Current stations (never mutated)
        suggested_assignments: Station ID -> suggested test IDs

    Returns:
        New list of Station objects in the original order
    """
    updated: list[Station] = []
    for station in stations:
        test_ids = list(suggested_assignments.get(station.id, station.tests))
        updated.append(station.model_copy(update={"tests": test_ids, "test_count": len(test_ids)}))

    unknown = set(suggested_assignments) - {station.id for station in stations}
    if unknown:
        logger.warning("ignoring assignments for unknown stations: %s", sorted(unknown))

    return updated
