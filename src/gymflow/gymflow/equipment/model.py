from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import Optional

from ..core.enums import EquipmentStatus


@dataclass(frozen=True)
class Equipment:
    """Domain entity: a piece of gym equipment and its maintenance state."""

    equipment_id: int
    name: str
    status: EquipmentStatus = EquipmentStatus.AVAILABLE
    last_service_date: Optional[date] = None

    @property
    def is_available(self) -> bool:
        return self.status == EquipmentStatus.AVAILABLE

    @property
    def needs_maintenance(self) -> bool:
        return self.status in (EquipmentStatus.MAINTENANCE, EquipmentStatus.OUT_OF_SERVICE)

    def with_id(self, equipment_id: int) -> "Equipment":
        return replace(self, equipment_id=int(equipment_id))
