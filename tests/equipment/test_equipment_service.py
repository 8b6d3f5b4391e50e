from __future__ import annotations

from datetime import date
from typing import Optional

import pytest

from src.gymflow.gymflow.core.enums import EquipmentStatus
from src.gymflow.gymflow.core.exceptions import ValidationError
from src.gymflow.gymflow.equipment.model import Equipment
from src.gymflow.gymflow.equipment.service import EquipmentService


class InMemoryEquipment:
    def __init__(self):
        self._items: dict[int, Equipment] = {}

    def get_by_id(self, equipment_id: int) -> Optional[Equipment]:
        return self._items.get(equipment_id)

    def list_all(self):
        return list(self._items.values())

    def list_by_status(self, status: EquipmentStatus):
        return [e for e in self._items.values() if e.status == status]

    def create(self, equipment: Equipment) -> int:
        equipment_id = len(self._items) + 1
        self._items[equipment_id] = equipment.with_id(equipment_id)
        return equipment_id

    def update(self, equipment: Equipment) -> bool:
        self._items[equipment.equipment_id] = equipment
        return True


def test_create_and_filter_by_status():
    svc = EquipmentService(InMemoryEquipment())
    treadmill = svc.create_equipment(" Treadmill ")
    svc.create_equipment("Rower", EquipmentStatus.OUT_OF_SERVICE, date(2024, 12, 1))

    assert (treadmill.equipment_id, treadmill.name, treadmill.is_available) == (1, "Treadmill", True)
    assert [e.name for e in svc.equipment_by_status(EquipmentStatus.OUT_OF_SERVICE)] == ["Rower"]
    assert len(svc.all_equipment()) == 2


def test_create_requires_name():
    with pytest.raises(ValidationError):
        EquipmentService(InMemoryEquipment()).create_equipment("  ")


def test_update_keeps_fields_not_given():
    svc = EquipmentService(InMemoryEquipment())
    item = svc.create_equipment("Bench", last_service_date=date(2025, 1, 10))

    updated = svc.update_equipment(item.equipment_id, status=EquipmentStatus.IN_USE)

    assert (updated.name, updated.status, updated.last_service_date) == ("Bench", EquipmentStatus.IN_USE, date(2025, 1, 10))
    assert svc.get_equipment(item.equipment_id) == updated


def test_mark_for_service_needs_maintenance():
    svc = EquipmentService(InMemoryEquipment())
    item = svc.create_equipment("Cable machine")

    serviced = svc.mark_for_service(item.equipment_id)

    assert serviced.status == EquipmentStatus.MAINTENANCE
    assert serviced.needs_maintenance and not serviced.is_available


def test_unknown_equipment():
    with pytest.raises(ValidationError):
        EquipmentService(InMemoryEquipment()).update_status(3, EquipmentStatus.AVAILABLE)


@pytest.mark.parametrize(
    "stored, expected",
    [
        ("in use", EquipmentStatus.IN_USE),
        ("Out_Of_Service", EquipmentStatus.OUT_OF_SERVICE),
        ("", EquipmentStatus.AVAILABLE),
        (None, EquipmentStatus.AVAILABLE),
        ("broken", EquipmentStatus.AVAILABLE),
    ],
)
def test_status_from_stored_string(stored, expected):
    assert EquipmentStatus.from_string(stored) == expected
