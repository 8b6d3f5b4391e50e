from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import ClassSession


class ClassSessionRepository(Protocol):
    def get_by_id(self, session_id: int) -> Optional[ClassSession]:
        raise NotImplementedError

    def list_for_trainer(self, trainer_id: int) -> Sequence[ClassSession]:
        raise NotImplementedError

    def list_upcoming(self, now: datetime) -> Sequence[ClassSession]:
        """Sessions scheduled after `now`, soonest first."""

        raise NotImplementedError

    def list_all(self) -> Sequence[ClassSession]:
        raise NotImplementedError

    def create(self, session: ClassSession) -> int:
        raise NotImplementedError

    def update(self, session: ClassSession) -> bool:
        raise NotImplementedError

    def delete(self, session_id: int) -> bool:
        raise NotImplementedError
