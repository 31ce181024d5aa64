"""
Human-readable rendering of balance results.

Produces plain text lines suitable for a CLI or for the UI's move list.
"""

from typing import Optional

from .adjustments import has_exceeded_max_time
from .models import BalanceResult, MoveSuggestion, Station

UNKNOWN_STATION = "Unknown Station"


def format_duration(minutes: int) -> str:
    return f"{minutes} min"


def describe_suggestion(suggestion: MoveSuggestion, station_names: dict[str, str]) -> str:
    """
    Render one move as a single line.

    Example:
        Move 'Cognitive Assessment A' (30 min): Station Alpha 90 min → 60 min, Station Beta 0 min → 30 min
    """
    source_name = station_names.get(suggestion.source_station_id) or UNKNOWN_STATION
    dest_name = station_names.get(suggestion.destination_station_id) or UNKNOWN_STATION
    moved = suggestion.source_before - suggestion.source_after

    return (
        f"Move '{suggestion.test_name}' ({format_duration(moved)}): "
        f"{source_name} {format_duration(suggestion.source_before)} → {format_duration(suggestion.source_after)}, "
        f"{dest_name} {format_duration(suggestion.dest_before)} → {format_duration(suggestion.dest_after)}"
    )


def summarize_result(
    result: BalanceResult,
    stations: list[Station],
    max_time: Optional[int] = None,
) -> list[str]:
    """
    Build the summary lines for a balance result.

    Lines:
    - header with max/min station time before and after
    - one line per suggested move, or "No changes suggested"
    - a warning when a station is still above max_time
    """
    station_names = {station.id: station.name for station in stations}

    lines = [
        f"Max station time: {format_duration(result.original_max_time)} → "
        f"{format_duration(result.adjusted_max_time)}; "
        f"min station time: {format_duration(result.original_min_time)} → "
        f"{format_duration(result.adjusted_min_time)}"
    ]

    if result.suggestions:
        lines.append(f"Suggested Moves ({len(result.suggestions)})")
        lines.extend(describe_suggestion(s, station_names) for s in result.suggestions)
    else:
        lines.append("No changes suggested")

    if has_exceeded_max_time(result, max_time):
        over = result.adjusted_max_time - max_time
        lines.append(
            f"Some stations still exceed the max time of {format_duration(max_time)} "
            f"(+{format_duration(over)} over max)"
        )

    return lines
