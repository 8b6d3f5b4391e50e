from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import EquipmentStatus
from .model import Equipment


class EquipmentRepository(Protocol):
    def get_by_id(self, equipment_id: int) -> Optional[Equipment]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Equipment]:
        raise NotImplementedError

    def list_by_status(self, status: EquipmentStatus) -> Sequence[Equipment]:
        raise NotImplementedError

    def create(self, equipment: Equipment) -> int:
        raise NotImplementedError

    def update(self, equipment: Equipment) -> bool:
        raise NotImplementedError
