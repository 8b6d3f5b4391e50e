from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import EquipmentStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Equipment
from .repository import EquipmentRepository

_SELECT = "SELECT equipment_id, name, status, last_service_date FROM equipment"


def _to_equipment(r: Dict[str, Any]) -> Equipment:
    return Equipment(
        equipment_id=int(r["equipment_id"]),
        name=r["name"],
        status=EquipmentStatus.from_string(r.get("status")),
        last_service_date=r.get("last_service_date"),
    )


class MySQLEquipmentRepository(EquipmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select(self, where: str = "", params: tuple = ()) -> Sequence[Equipment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} {where} ORDER BY name ASC, equipment_id ASC", params)
            return [_to_equipment(r) for r in fetchall(cur)]

    def get_by_id(self, equipment_id: int) -> Optional[Equipment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE equipment_id=%s", (int(equipment_id),))
            r = fetchone(cur)
            return _to_equipment(r) if r else None

    def list_all(self) -> Sequence[Equipment]:
        return self._select()

    def list_by_status(self, status: EquipmentStatus) -> Sequence[Equipment]:
        return self._select("WHERE status=%s", (status.value,))

    def create(self, equipment: Equipment) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO equipment(name, status, last_service_date) VALUES(%s,%s,%s)",
                (equipment.name, equipment.status.value, equipment.last_service_date),
            )
            return int(cur.lastrowid)

    def update(self, equipment: Equipment) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE equipment SET name=%s, status=%s, last_service_date=%s WHERE equipment_id=%s",
                (equipment.name, equipment.status.value, equipment.last_service_date, int(equipment.equipment_id)),
            )
            return cur.rowcount > 0
