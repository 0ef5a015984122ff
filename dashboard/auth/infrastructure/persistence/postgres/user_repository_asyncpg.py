import asyncpg  # type: ignore[import-untyped]

from dashboard.auth.domain.entities.user import User


class UserRepositoryAsyncpg:
    def __init__(self, db_pool: asyncpg.Pool) -> None:
        self._db_pool = db_pool

    async def get_by_email(self, email: str) -> User | None:
        async with self._db_pool.acquire() as connection:
            row = await connection.fetchrow(
                "SELECT id, name, email, password FROM users WHERE email = $1",
                email,
            )
        return User.from_record(row) if row is not None else None
