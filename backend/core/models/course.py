"""
Course data models.

This module defines the data structures for course marks and the course
descriptor that the geometric transforms and the leg builder operate on.
"""

from dataclasses import dataclass, field, asdict, replace
from enum import Enum
from typing import Optional, List, Dict, Any


class MarkRole(str, Enum):
    """Role a mark plays on the course."""
    START_BOAT = "start_boat"
    PIN = "pin"
    WINDWARD = "windward"
    WING = "wing"
    LEEWARD = "leeward"
    GATE = "gate"
    OFFSET = "offset"
    TURNING_MARK = "turning_mark"
    FINISH = "finish"
    OTHER = "other"


class ScaleMode(str, Enum):
    """How marks flagged as start-line marks behave when the course is scaled."""
    RESIZE_ALL = "resize_all"  # Start line scales like every other mark
    KEEP_START_LINE = "keep_start_line"  # Start line marks do not move
    KEEP_COMMITTEE_BOAT = "keep_committee_boat"  # Committee boat fixed, pin scales from it


class StartLineEnd(str, Enum):
    """End of the start line held fixed while the other end is moved."""
    COMMITTEE_BOAT = "committee_boat"
    PIN = "pin"


# Tokens that stand for the start and finish line centers in a rounding sequence
START_TOKEN = "start"
FINISH_TOKEN = "finish"


@dataclass(frozen=True)
class GeoPoint:
    """A geographic position in decimal degrees."""
    lat: float
    lng: float


@dataclass(frozen=True)
class Mark:
    """
    A course mark.

    A mark flagged ``is_gate`` is laid as two buoys, so it carries the two
    gate buoy slots instead of a single ``assigned_buoy_id``.
    """
    id: str
    role: MarkRole
    lat: float
    lng: float
    name: str = ""
    order: int = 0

    # Line membership; a mark may sit on both lines
    is_start_line: bool = False
    is_finish_line: bool = False

    # Buoy assignment
    is_gate: bool = False
    assigned_buoy_id: Optional[str] = None
    gate_port_buoy_id: Optional[str] = None
    gate_starboard_buoy_id: Optional[str] = None

    @property
    def position(self) -> GeoPoint:
        """Mark position as a GeoPoint."""
        return GeoPoint(self.lat, self.lng)

    @property
    def display_name(self) -> str:
        """Name shown in leg listings, falling back to the mark id."""
        return self.name or self.id

    def moved_to(self, lat: float, lng: float) -> "Mark":
        """Return a copy of this mark at a new position."""
        return replace(self, lat=lat, lng=lng)

    def to_dict(self) -> Dict[str, Any]:
        """Convert mark to a plain dictionary."""
        data = asdict(self)
        data['role'] = self.role.value
        return data


@dataclass(frozen=True)
class Course:
    """
    Course descriptor.

    ``rounding_sequence`` lists ``"start"``, mark ids and ``"finish"`` in the
    order sailors must follow. The same mark id may appear more than once
    when the course is sailed in laps.
    """
    center_lat: float
    center_lng: float
    rotation: float = 0.0  # Degrees, 0-360
    scale: float = 1.0  # Relative size, 0.1-10
    rounding_sequence: List[str] = field(default_factory=list)

    @property
    def center(self) -> GeoPoint:
        """Course center as a GeoPoint."""
        return GeoPoint(self.center_lat, self.center_lng)

    def to_dict(self) -> Dict[str, Any]:
        """Convert course to a plain dictionary."""
        return asdict(self)


def find_mark_by_role(marks: List[Mark], role: MarkRole) -> Optional[Mark]:
    """Return the first mark with the given role, or None."""
    for mark in marks:
        if mark.role == role:
            return mark
    return None
