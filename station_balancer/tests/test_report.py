"""
Tests for human-readable result rendering.
"""

from station_balancer.balancer import balance
from station_balancer.models import MoveSuggestion, Station, StationTest
from station_balancer.report import describe_suggestion, format_duration, summarize_result
from station_balancer.world import build_sample_session


def test_format_duration():
    assert format_duration(45) == "45 min"
    assert format_duration(0) == "0 min"


class TestDescribeSuggestion:
    """Test single-move lines."""

    def test_uses_station_names(self):
        suggestion = MoveSuggestion(
            source_station_id="s1",
            destination_station_id="s2",
            test_id="t1",
            test_name="Cognitive Assessment A",
            source_before=90,
            source_after=60,
            dest_before=0,
            dest_after=30,
        )
        line = describe_suggestion(suggestion, {"s1": "Station Alpha", "s2": "Station Beta"})

        assert line == (
            "Move 'Cognitive Assessment A' (30 min): "
            "Station Alpha 90 min → 60 min, Station Beta 0 min → 30 min"
        )

    def test_unknown_station(self):
        suggestion = MoveSuggestion(
            source_station_id="s1",
            destination_station_id="gone",
            test_id="t1",
            test_name="X",
            source_before=10,
            source_after=0,
            dest_before=0,
            dest_after=10,
        )
        line = describe_suggestion(suggestion, {"s1": ""})

        assert "Unknown Station 10 min → 0 min" in line
        assert "Unknown Station 0 min → 10 min" in line


class TestSummarizeResult:
    """Test summary lines."""

    def test_lists_moves(self):
        session = build_sample_session()
        result = balance(session.stations, session.tests, max_time=54)

        lines = summarize_result(result, session.stations, 54)

        assert lines[0] == "Max station time: 90 min → 45 min; min station time: 0 min → 45 min"
        assert lines[1] == "Suggested Moves (1)"
        assert lines[2].startswith("Move 'Motor Skills Test B' (45 min): Station Alpha")
        assert len(lines) == 3

    def test_no_changes(self):
        stations = [Station(id="a", tests=["x"]), Station(id="b", tests=["y"])]
        tests = [
            StationTest(id="x", name="X", estimated_duration=20),
            StationTest(id="y", name="Y", estimated_duration=20),
        ]
        result = balance(stations, tests)

        lines = summarize_result(result, stations)

        assert lines[-1] == "No changes suggested"

    def test_warns_when_cap_exceeded(self):
        stations = [Station(id="s1", name="Busy", tests=["a", "b", "c"]), Station(id="s2", name="Idle")]
        tests = [StationTest(id=t, name=t, estimated_duration=10) for t in ["a", "b", "c"]]
        result = balance(stations, tests, max_time=15)

        lines = summarize_result(result, stations, 15)

        assert lines[-1] == "Some stations still exceed the max time of 15 min (+5 min over max)"
