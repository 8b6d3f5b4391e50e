from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.gymflow.gymflow.core.enums import Role
from src.gymflow.gymflow.core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from src.gymflow.gymflow.users.model import User
from src.gymflow.gymflow.users.service import AuthService, UserService


@dataclass
class InMemoryUsers:
    users: dict[str, User] = field(default_factory=dict)

    def get_by_username(self, username: str) -> Optional[User]:
        return self.users.get(username)

    def get_by_id(self, user_id: int) -> Optional[User]:
        return next((u for u in self.users.values() if u.user_id == user_id), None)

    def create_user(self, *, full_name: str, username: str, password_hash: str, role: Role) -> int:
        user_id = len(self.users) + 1
        self.users[username] = User(user_id, full_name, username, password_hash, role)
        return user_id


def _users() -> InMemoryUsers:
    repo = InMemoryUsers()
    repo.users["coach"] = User(1, "Coach Kim", "coach", generate_password_hash("secret1"), Role.TRAINER)
    repo.users["gone"] = User(2, "Old Member", "gone", generate_password_hash("secret1"), Role.MEMBER, is_active=False)
    repo.users["broken"] = User(3, "Broken", "broken", "CHANGE_ME", Role.MEMBER)
    return repo


def test_authenticate_success():
    user = AuthService(_users()).authenticate("coach", "secret1")

    assert (user.user_id, user.role) == (1, Role.TRAINER)


@pytest.mark.parametrize(
    "username, password",
    [("coach", "wrong"), ("nobody", "secret1"), ("gone", "secret1"), ("broken", "CHANGE_ME")],
)
def test_authenticate_failures(username, password):
    with pytest.raises(AuthenticationError):
        AuthService(_users()).authenticate(username, password)


def test_register_member_and_login():
    repo = _users()
    user_id = UserService(repo).register(
        current_role=None, full_name="New Member", username="newbie", password="hunter22", role=Role.MEMBER
    )

    assert AuthService(repo).authenticate("newbie", "hunter22").user_id == user_id


def test_register_rules():
    svc = UserService(_users())

    with pytest.raises(ValidationError):
        svc.register(current_role=Role.ADMIN, full_name="X", username="x", password="123456", role=Role.ADMIN)
    with pytest.raises(AuthorizationError):
        svc.register(current_role=None, full_name="X", username="x", password="123456", role=Role.TRAINER)
    with pytest.raises(ValidationError):
        svc.register(current_role=None, full_name="X", username="coach", password="123456", role=Role.MEMBER)
    with pytest.raises(ValidationError):
        svc.register(current_role=None, full_name="X", username="x", password="123", role=Role.MEMBER)
