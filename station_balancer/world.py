"""
Sample Session Definition Module

This module defines the sample research session:
- Function: build_sample_session() -> SessionData
- 2 stations (s1: Station Alpha, s2: Station Beta)
- 3 tests (t1, t2, t3) with integer minute durations
- All tests start on Station Alpha, so the session is unbalanced
"""

from .models import SessionData, Station, StationTest, StationTestStatus


def build_sample_session() -> SessionData:
    """
    Build a sample session with 2 stations and 3 tests.

    Station Alpha holds 90 minutes of tests, Station Beta holds none.

    Returns:
        SessionData: freshly built session
    """
    tests = [
        StationTest(
            id="t1",
            name="Cognitive Assessment A",
            description="Standardized cognitive function test, version A.",
            estimated_duration=30,
            status=StationTestStatus.PENDING,
        ),
        StationTest(
            id="t2",
            name="Motor Skills Test B",
            description="Assesses fine and gross motor skills.",
            estimated_duration=45,
            status=StationTestStatus.IN_PROGRESS,
        ),
        StationTest(
            id="t3",
            name="User Feedback Survey",
            description="Gathers user feedback post-testing.",
            estimated_duration=15,
            status=StationTestStatus.COMPLETED,
        ),
    ]

    stations = [
        Station(id="s1", name="Station Alpha", tests=["t1", "t2", "t3"], test_count=3),
        Station(id="s2", name="Station Beta", tests=[], test_count=0),
    ]

    return SessionData(stations=stations, tests=tests)
