from typing import Protocol

from dashboard.auth.domain.entities.user import User


class UserRepositoryPort(Protocol):
    async def get_by_email(self, email: str) -> User | None: ...
