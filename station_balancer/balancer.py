"""
Test Distribution Balancer Module

Redistributes tests across stations with a greedy, single-move heuristic
to produce BalanceResult objects.

Two phases share one iteration budget:
1. Cap compliance (only when max_time is given): relocate one test at a time
   so that every station drops to max_time or below, where feasible.
2. Balance: move one test at a time from the busiest station to the
   least-busy station until the spread is within BALANCE_TOLERANCE_MINUTES.

The search is greedy and non-exhaustive. Only the first hit in sorted order
is taken, so optimality is not guaranteed; max_iterations bounds the run.

All durations are in integer minutes. Nothing here mutates its inputs.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .config import BALANCE_TOLERANCE_MINUTES, DEFAULT_MAX_ITERATIONS
from .models import BalanceResult, MoveSuggestion, Station, StationTest, StationTimes

logger = logging.getLogger(__name__)


@dataclass
class StationExtremes:
    """Busiest and least-busy stations of a duration map."""
    max_station_id: str
    max_duration: int
    min_station_id: str
    min_duration: int

    @property
    def spread(self) -> int:
        return self.max_duration - self.min_duration


def _build_catalog(tests: list[StationTest]) -> dict[str, StationTest]:
    # First occurrence wins for a repeated ID
    catalog: dict[str, StationTest] = {}
    for test in tests:
        catalog.setdefault(test.id, test)
    return catalog


def _durations_from_assignments(
    assignments: dict[str, list[str]],
    catalog: dict[str, StationTest],
) -> dict[str, int]:
    durations: dict[str, int] = {}
    for station_id, test_ids in assignments.items():
        total = 0
        for test_id in test_ids:
            test = catalog.get(test_id)
            if test is not None:
                total += test.estimated_duration
        durations[station_id] = total
    return durations


def _resolve_sorted(test_ids: list[str], catalog: dict[str, StationTest]) -> list[StationTest]:
    """Resolve test IDs against the catalog, dropping unknown ones, shortest first."""
    resolved = [catalog[test_id] for test_id in test_ids if test_id in catalog]
    return sorted(resolved, key=lambda t: t.estimated_duration)


def calculate_station_durations(
    stations: list[Station],
    tests: list[StationTest],
) -> dict[str, int]:
    """
    Compute the total assigned-test minutes of every station.

    Test IDs that do not resolve in the catalog contribute 0. Keys follow
    station input order.

    Args:
        stations: Stations with their current test ID lists
        tests: Full test catalog

    Returns:
        Station ID -> total minutes
    """
    catalog = _build_catalog(tests)
    assignments = {station.id: station.tests for station in stations}
    return _durations_from_assignments(assignments, catalog)


def find_extremes(durations: dict[str, int]) -> StationExtremes:
    """
    Find the busiest and least-busy station.

    Ties go to the first station in iteration order. An empty map yields
    empty IDs and zero durations.
    """
    if not durations:
        return StationExtremes(max_station_id="", max_duration=0, min_station_id="", min_duration=0)

    station_ids = list(durations)
    max_station_id = min_station_id = station_ids[0]
    max_duration = min_duration = durations[station_ids[0]]

    for station_id in station_ids[1:]:
        duration = durations[station_id]
        if duration > max_duration:
            max_station_id, max_duration = station_id, duration
        if duration < min_duration:
            min_station_id, min_duration = station_id, duration

    return StationExtremes(
        max_station_id=max_station_id,
        max_duration=max_duration,
        min_station_id=min_station_id,
        min_duration=min_duration,
    )


def stations_over_cap(durations: dict[str, int], max_time: int) -> list[str]:
    """Return IDs of stations whose total strictly exceeds max_time, in map order."""
    return [station_id for station_id, duration in durations.items() if duration > max_time]


def find_cap_relief_move(
    source_station_id: str,
    source_duration: int,
    max_time: int,
    durations: dict[str, int],
    assignments: dict[str, list[str]],
    catalog: dict[str, StationTest],
) -> Optional[MoveSuggestion]:
    """
    Find one test whose relocation brings an over-cap station to max_time or below.

    Search order:
    1. Source tests ascending by duration (smallest disruption first)
    2. Skip a test if removing it still leaves the source above max_time
    3. Other stations ascending by current load; skip any that the test
       would push above max_time
    4. Return the first (test, destination) pair found

    Args:
        source_station_id: Station currently above max_time
        source_duration: Its current total minutes
        max_time: Per-station cap in minutes (positive)
        durations: Current station ID -> minutes
        assignments: Current station ID -> test IDs
        catalog: Test ID -> StationTest

    Returns:
        MoveSuggestion, or None if no qualifying pair exists
    """
    source_tests = _resolve_sorted(assignments.get(source_station_id, []), catalog)
    if not source_tests:
        return None

    destinations = sorted(
        ((station_id, duration) for station_id, duration in durations.items() if station_id != source_station_id),
        key=lambda item: item[1],
    )

    for test in source_tests:
        new_source_duration = source_duration - test.estimated_duration
        if new_source_duration > max_time:
            continue

        for dest_station_id, dest_duration in destinations:
            new_dest_duration = dest_duration + test.estimated_duration
            if new_dest_duration > max_time:
                continue

            return MoveSuggestion(
                source_station_id=source_station_id,
                destination_station_id=dest_station_id,
                test_id=test.id,
                test_name=test.name,
                source_before=source_duration,
                source_after=new_source_duration,
                dest_before=dest_duration,
                dest_after=new_dest_duration,
            )

    return None


def find_balance_move(
    max_station_id: str,
    max_duration: int,
    min_station_id: str,
    min_duration: int,
    assignments: dict[str, list[str]],
    catalog: dict[str, StationTest],
) -> Optional[MoveSuggestion]:
    """
    Find one test to move from the busiest to the least-busy station.

    Tests are tried shortest first. The first one that leaves the busiest
    station at least as loaded as the least-busy one is accepted.
    """
    candidates = _resolve_sorted(assignments.get(max_station_id, []), catalog)

    for test in candidates:
        new_max_duration = max_duration - test.estimated_duration
        new_min_duration = min_duration + test.estimated_duration

        if new_max_duration >= new_min_duration:
            return MoveSuggestion(
                source_station_id=max_station_id,
                destination_station_id=min_station_id,
                test_id=test.id,
                test_name=test.name,
                source_before=max_duration,
                source_after=new_max_duration,
                dest_before=min_duration,
                dest_after=new_min_duration,
            )

    return None


def _apply_move(
    assignments: dict[str, list[str]],
    durations: dict[str, int],
    suggestion: MoveSuggestion,
) -> None:
    """Apply a suggestion to the working copies in place."""
    assignments[suggestion.source_station_id].remove(suggestion.test_id)
    assignments[suggestion.destination_station_id].append(suggestion.test_id)
    durations[suggestion.source_station_id] = suggestion.source_after
    durations[suggestion.destination_station_id] = suggestion.dest_after


def apply_moves(
    assignments: dict[str, list[str]],
    suggestions: list[MoveSuggestion],
) -> dict[str, list[str]]:
    """
    Replay suggestions in order on a copy of an assignment map.

    Raises:
        ValueError: If a suggestion references an unknown station or a test
            that is not on its source station at that point
    """
    replayed = {station_id: list(test_ids) for station_id, test_ids in assignments.items()}

    for index, suggestion in enumerate(suggestions):
        source = replayed.get(suggestion.source_station_id)
        dest = replayed.get(suggestion.destination_station_id)
        if source is None or dest is None:
            raise ValueError(
                f"Suggestion {index} references unknown station "
                f"'{suggestion.source_station_id}' or '{suggestion.destination_station_id}'"
            )
        if suggestion.test_id not in source:
            raise ValueError(
                f"Suggestion {index}: test '{suggestion.test_id}' is not on station "
                f"'{suggestion.source_station_id}'"
            )
        source.remove(suggestion.test_id)
        dest.append(suggestion.test_id)

    return replayed


def balance(
    stations: list[Station],
    tests: list[StationTest],
    max_time: Optional[int] = None,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> BalanceResult:
    """
    Suggest single-test relocations that balance station load.

    Pure function: works on private copies, never mutates stations or tests,
    and returns the same result for the same arguments.

    Args:
        stations: Stations with their current test assignments
        tests: Full test catalog
        max_time: Optional per-station cap in minutes (must be positive)
        max_iterations: Upper bound on the number of suggested moves

    Returns:
        BalanceResult with before/after durations, ordered suggestions and
        the final suggested assignments
    """
    original_total_time = sum(test.estimated_duration for test in tests)

    if len(stations) <= 1 or not tests:
        logger.debug(
            "balance: nothing to do (stations=%d tests=%d)", len(stations), len(tests)
        )
        return BalanceResult(
            original_total_time=original_total_time,
            original_max_time=0,
            original_min_time=0,
            adjusted_max_time=0,
            adjusted_min_time=0,
            station_times={},
            suggestions=[],
            suggested_assignments={station.id: list(station.tests) for station in stations},
        )

    catalog = _build_catalog(tests)
    assignments = {station.id: list(station.tests) for station in stations}
    original_durations = _durations_from_assignments(assignments, catalog)
    original = find_extremes(original_durations)

    durations = dict(original_durations)
    suggestions: list[MoveSuggestion] = []
    iteration = 0

    # Phase 1: bring every station to max_time or below, where feasible
    if max_time is not None:
        while iteration < max_iterations:
            over_cap = stations_over_cap(durations, max_time)
            if not over_cap:
                break

            suggestion = None
            for station_id in over_cap:
                suggestion = find_cap_relief_move(
                    station_id,
                    durations[station_id],
                    max_time,
                    durations,
                    assignments,
                    catalog,
                )
                if suggestion is not None:
                    break

            if suggestion is None:
                logger.debug("cap phase stopped: no relief move for %s", over_cap)
                break

            _apply_move(assignments, durations, suggestion)
            suggestions.append(suggestion)
            iteration += 1
            logger.debug(
                "cap move %d: %s %s -> %s",
                iteration,
                suggestion.test_id,
                suggestion.source_station_id,
                suggestion.destination_station_id,
            )

    # Phase 2: narrow the spread between busiest and least-busy station
    while iteration < max_iterations:
        extremes = find_extremes(durations)

        if extremes.spread <= BALANCE_TOLERANCE_MINUTES or extremes.max_station_id == extremes.min_station_id:
            break

        suggestion = find_balance_move(
            extremes.max_station_id,
            extremes.max_duration,
            extremes.min_station_id,
            extremes.min_duration,
            assignments,
            catalog,
        )
        if suggestion is None:
            logger.debug("balance phase stopped: no improving move (spread=%d)", extremes.spread)
            break

        if max_time is not None and suggestion.dest_after > max_time:
            logger.debug(
                "balance phase stopped: move would put %s at %d > %d",
                suggestion.destination_station_id,
                suggestion.dest_after,
                max_time,
            )
            break

        _apply_move(assignments, durations, suggestion)
        suggestions.append(suggestion)
        iteration += 1
        logger.debug(
            "balance move %d: %s %s -> %s",
            iteration,
            suggestion.test_id,
            suggestion.source_station_id,
            suggestion.destination_station_id,
        )

    final_durations = _durations_from_assignments(assignments, catalog)
    adjusted = find_extremes(final_durations)

    station_times = {
        station_id: StationTimes(before=before, after=final_durations[station_id])
        for station_id, before in original_durations.items()
    }

    result = BalanceResult(
        original_total_time=original_total_time,
        original_max_time=original.max_duration,
        original_min_time=original.min_duration,
        adjusted_max_time=adjusted.max_duration,
        adjusted_min_time=adjusted.min_duration,
        station_times=station_times,
        suggestions=suggestions,
        suggested_assignments=assignments,
    )

    logger.debug(
        "balance: %d moves, max %d -> %d, min %d -> %d",
        len(suggestions),
        result.original_max_time,
        result.adjusted_max_time,
        result.original_min_time,
        result.adjusted_min_time,
    )

    return result
