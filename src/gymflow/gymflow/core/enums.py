from __future__ import annotations

from enum import Enum
from typing import Optional


class Role(str, Enum):
    """User role used for endpoint authorization."""

    MEMBER = "MEMBER"
    TRAINER = "TRAINER"
    ADMIN = "ADMIN"


class AttendanceLabel(str, Enum):
    """Textual forms of the attended flag in exported reports."""

    COMPLETED = "Completed"
    PENDING = "Pending"
    YES = "Yes"
    NO = "No"



class EquipmentStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    IN_USE = "IN_USE"
    MAINTENANCE = "MAINTENANCE"
    OUT_OF_SERVICE = "OUT_OF_SERVICE"

    @classmethod
    def from_string(cls, value: Optional[str]) -> "EquipmentStatus":
        """Lenient lookup for stored values: 'in use' -> IN_USE, blank or unknown -> AVAILABLE."""
        key = (value or "").strip().upper().replace(" ", "_")
        try:
            return cls(key)
        except ValueError:
            return cls.AVAILABLE
