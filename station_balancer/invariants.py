"""
Invariant validation helpers for sessions and balance results.

These functions check properties of sessions and results without raising exceptions,
returning a list of human-readable violation messages instead.
"""

from collections import Counter
from typing import Optional

from .balancer import apply_moves, calculate_station_durations
from .models import BalanceResult, SessionData, Station, StationTest


def check_session_invariants(session: SessionData) -> list[str]:
    """
    Validate a SessionData against structural invariants.

    Args:
        session: The session to validate.

    Returns:
        List of violation messages. Empty list means all invariants passed.
    """
    violations = []

    # Invariant 1: unique station and test IDs
    for station_id, count in Counter(s.id for s in session.stations).items():
        if count > 1:
            violations.append(f"Station ID '{station_id}' appears {count} times")
    for test_id, count in Counter(t.id for t in session.tests).items():
        if count > 1:
            violations.append(f"Test ID '{test_id}' appears {count} times")

    # Invariant 2: durations are positive
    for test in session.tests:
        if test.estimated_duration <= 0:
            violations.append(
                f"Test {test.id}: estimated_duration={test.estimated_duration} is not positive"
            )

    # Invariant 3: a test is assigned to at most one station
    owners: dict[str, str] = {}
    for station in session.stations:
        for test_id in station.tests:
            if test_id in owners:
                violations.append(
                    f"Test {test_id} assigned to both {owners[test_id]} and {station.id}"
                )
            else:
                owners[test_id] = station.id

    # Invariant 4: assigned test IDs resolve in the catalog
    known = {t.id for t in session.tests}
    for station in session.stations:
        for test_id in station.tests:
            if test_id not in known:
                violations.append(f"Station {station.id}: unknown test_id '{test_id}'")

    return violations


def check_result_invariants(
    stations: list[Station],
    tests: list[StationTest],
    result: BalanceResult,
    max_iterations: Optional[int] = None,
) -> list[str]:
    """
    Validate a BalanceResult against the stations and tests it was computed from.

    Args:
        stations: The input stations.
        tests: The input test catalog.
        result: The balancer result.
        max_iterations: Move budget used for the run, if known.

    Returns:
        List of violation messages. Empty list means all invariants passed.
    """
    violations = []

    # Invariant 1: test IDs are conserved (no test created, dropped or duplicated)
    before = Counter(test_id for s in stations for test_id in s.tests)
    after = Counter(test_id for ids in result.suggested_assignments.values() for test_id in ids)
    if before != after:
        violations.append(
            f"Test IDs not conserved: missing={sorted((before - after).elements())} "
            f"extra={sorted((after - before).elements())}"
        )

    # Invariant 2: replaying suggestions reproduces the suggested assignments
    original = {s.id: list(s.tests) for s in stations}
    try:
        replayed = apply_moves(original, result.suggestions)
    except ValueError as exc:
        violations.append(f"Suggestions cannot be replayed: {exc}")
    else:
        if replayed != result.suggested_assignments:
            violations.append("Replaying suggestions does not reproduce suggested_assignments")

    # Invariant 3: reported after-times match the suggested assignments
    suggested_stations = [
        Station(id=station_id, tests=test_ids)
        for station_id, test_ids in result.suggested_assignments.items()
    ]
    durations = calculate_station_durations(suggested_stations, tests)
    for station_id, times in result.station_times.items():
        expected = durations.get(station_id)
        if times.after != expected:
            violations.append(
                f"Station {station_id}: station_times.after={times.after} but assignments sum to {expected}"
            )

    # Invariant 4: the move budget is respected
    if max_iterations is not None and len(result.suggestions) > max_iterations:
        violations.append(
            f"{len(result.suggestions)} suggestions exceed max_iterations={max_iterations}"
        )

    return violations
