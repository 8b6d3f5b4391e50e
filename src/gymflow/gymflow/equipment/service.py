from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

from ..common.validators import require_non_empty, require_positive_id
from ..core.constants import UNASSIGNED_ID
from ..core.enums import EquipmentStatus
from ..core.exceptions import ValidationError
from .model import Equipment
from .repository import EquipmentRepository

logger = logging.getLogger(__name__)


class EquipmentService:
    """Use case: track equipment status and servicing."""

    def __init__(self, equipment: EquipmentRepository):
        self._equipment = equipment

    def create_equipment(
        self,
        name: str,
        status: EquipmentStatus = EquipmentStatus.AVAILABLE,
        last_service_date: Optional[date] = None,
    ) -> Equipment:
        item = Equipment(
            equipment_id=UNASSIGNED_ID,
            name=require_non_empty(name, "Name"),
            status=status,
            last_service_date=last_service_date,
        )
        equipment_id = self._equipment.create(item)
        logger.info("Added equipment %d (%s)", equipment_id, item.name)
        return item.with_id(equipment_id)

    def get_equipment(self, equipment_id: int) -> Equipment:
        item = self._equipment.get_by_id(require_positive_id(equipment_id, "Equipment ID"))
        if not item:
            raise ValidationError("Equipment not found")
        return item

    def all_equipment(self) -> Sequence[Equipment]:
        return self._equipment.list_all()

    def equipment_by_status(self, status: EquipmentStatus) -> Sequence[Equipment]:
        return self._equipment.list_by_status(status)

    def update_equipment(
        self,
        equipment_id: int,
        *,
        name: Optional[str] = None,
        status: Optional[EquipmentStatus] = None,
        last_service_date: Optional[date] = None,
    ) -> Equipment:
        """Arguments left as None keep their stored value."""
        item = self.get_equipment(equipment_id)
        updated = replace(
            item,
            name=require_non_empty(name, "Name") if name is not None else item.name,
            status=status or item.status,
            last_service_date=last_service_date or item.last_service_date,
        )
        self._equipment.update(updated)
        return updated

    def update_status(self, equipment_id: int, status: EquipmentStatus) -> Equipment:
        return self.update_equipment(equipment_id, status=status)

    def mark_for_service(self, equipment_id: int) -> Equipment:
        updated = self.update_status(equipment_id, EquipmentStatus.MAINTENANCE)
        logger.info("Equipment %d marked for service", updated.equipment_id)
        return updated
