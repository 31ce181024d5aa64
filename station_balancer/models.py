"""
Core data models for the station balancer.

These models define the domain objects used throughout the system:
- Session data (stations, tests)
- Move suggestions and balance results
- HTTP request/response bodies
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from .config import get_default_max_iterations


class StationTestStatus(str, Enum):
    """Lifecycle status of a research test."""
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    FAILED = "Failed"
    SKIPPED = "Skipped"


class StationTest(BaseModel):
    """Represents a research test that can be assigned to one station."""
    id: str = Field(..., description="Unique test ID, e.g., 't1'")
    name: str = Field(..., description="Human-readable test name")
    estimated_duration: int = Field(..., gt=0, description="Estimated duration in minutes")
    description: Optional[str] = Field(default=None, description="Optional description")
    status: StationTestStatus = Field(default=StationTestStatus.PENDING, description="Test status")


class Station(BaseModel):
    """Represents a station holding an ordered list of assigned test IDs."""
    id: str = Field(..., description="Unique station ID, e.g., 's1'")
    name: str = Field(default="", description="Human-readable station name")
    tests: list[str] = Field(default_factory=list, description="Ordered test IDs assigned to this station")
    test_count: int = Field(default=0, ge=0, description="Number of assigned tests")


class SessionData(BaseModel):
    """Stations and the full test catalog of a research session."""
    stations: list[Station] = Field(default_factory=list, description="List of all stations")
    tests: list[StationTest] = Field(default_factory=list, description="Full test catalog")

    def validate_unique_ids(self):
        """Validate that stations and tests have unique IDs."""
        station_ids = [s.id for s in self.stations]
        test_ids = [t.id for t in self.tests]

        if len(station_ids) != len(set(station_ids)):
            raise ValueError("Duplicate station IDs")
        if len(test_ids) != len(set(test_ids)):
            raise ValueError("Duplicate test IDs")


class MoveSuggestion(BaseModel):
    """One single-test relocation proposed by the balancer."""
    source_station_id: str = Field(..., description="Station the test is moved from")
    destination_station_id: str = Field(..., description="Station the test is moved to")
    test_id: str = Field(..., description="Moved test ID")
    test_name: str = Field(..., description="Moved test name")
    source_before: int = Field(..., description="Source station minutes before the move")
    source_after: int = Field(..., description="Source station minutes after the move")
    dest_before: int = Field(..., description="Destination station minutes before the move")
    dest_after: int = Field(..., description="Destination station minutes after the move")


class StationTimes(BaseModel):
    """Total minutes of a station before and after balancing."""
    before: int
    after: int


class BalanceResult(BaseModel):
    """Result of a single balancer run."""
    original_total_time: int = Field(..., description="Sum of all test durations in the catalog")
    original_max_time: int = Field(..., description="Busiest station minutes before")
    original_min_time: int = Field(..., description="Least-busy station minutes before")
    adjusted_max_time: int = Field(..., description="Busiest station minutes after")
    adjusted_min_time: int = Field(..., description="Least-busy station minutes after")
    station_times: dict[str, StationTimes] = Field(default_factory=dict, description="Station ID -> before/after minutes")
    suggestions: list[MoveSuggestion] = Field(default_factory=list, description="Ordered suggested moves")
    suggested_assignments: dict[str, list[str]] = Field(default_factory=dict, description="Station ID -> suggested test IDs")


class BalanceRequest(BaseModel):
    """HTTP request body for the balance endpoint."""
    stations: list[Station] = Field(..., description="Stations with their current assignments")
    tests: list[StationTest] = Field(..., description="Full test catalog")
    max_time: Optional[int] = Field(default=None, gt=0, description="Optional per-station cap in minutes")
    max_iterations: int = Field(
        default_factory=get_default_max_iterations,
        gt=0,
        description="Maximum number of moves",
    )


class BalanceResponse(BaseModel):
    """HTTP response for the balance endpoint."""
    result: BalanceResult
    summary: list[str] = Field(default_factory=list, description="Human-readable list of moves")
    cap_exceeded: bool = Field(default=False, description="True if a station is still above max_time")
    moved_tests: dict[str, str] = Field(default_factory=dict, description="Test ID -> destination station ID")


class ApplyRequest(BaseModel):
    """HTTP request body for writing suggested assignments back onto stations."""
    stations: list[Station]
    suggested_assignments: dict[str, list[str]]
