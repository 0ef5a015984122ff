import logging
from datetime import UTC, datetime, timedelta
from typing import Any, Mapping

from jose import JWTError, jwt
from passlib.context import CryptContext
from passlib.exc import UnknownHashError
from pydantic import BaseModel, Field, ValidationError

from dashboard.auth.application.ports.sign_in_port import SessionCookieSink
from dashboard.auth.application.ports.user_repository_port import UserRepositoryPort
from dashboard.auth.domain.entities.user import User
from dashboard.auth.domain.errors import (
    CALLBACK_ROUTE_ERROR,
    INVALID_PROVIDER,
    AuthError,
    CredentialsSignin,
)

logger = logging.getLogger(__name__)

# Seeded users carry bcrypt hashes; argon2 is used for anything hashed here.
password_context = CryptContext(schemes=["argon2", "bcrypt"], deprecated="auto")


class LoginCredentials(BaseModel):
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    password: str = Field(min_length=6)


class CredentialsProvider:
    """Email/password sign-in backed by the ``users`` table.

    A successful sign-in attaches a signed session token to the response as an
    HTTP-only cookie. Every failure surfaces as an :class:`AuthError`.
    """

    PROVIDER_ID = "credentials"
    _ALGORITHM = "HS256"

    def __init__(
        self,
        user_repository: UserRepositoryPort,
        secret: str,
        cookie_name: str,
        session_ttl_minutes: int = 60 * 24,
        secure_cookie: bool = True,
        crypt_context: CryptContext = password_context,
    ) -> None:
        self._user_repository = user_repository
        self._secret = secret
        self._cookie_name = cookie_name
        self._session_ttl = timedelta(minutes=session_ttl_minutes)
        self._secure_cookie = secure_cookie
        self._crypt_context = crypt_context

    @property
    def cookie_name(self) -> str:
        return self._cookie_name

    async def sign_in(
        self,
        provider: str,
        form_data: Mapping[str, Any],
        response: SessionCookieSink,
    ) -> None:
        if provider != self.PROVIDER_ID:
            raise AuthError(INVALID_PROVIDER, f"Unsupported sign-in provider: {provider}")

        user = await self._authorize(form_data)
        response.set_cookie(
            self._cookie_name,
            self.create_session_token(user.id),
            max_age=int(self._session_ttl.total_seconds()),
            httponly=True,
            secure=self._secure_cookie,
            samesite="lax",
        )
        logger.info("sign_in_succeeded user_id=%s", user.id, extra={"action": "authenticate"})

    async def _authorize(self, form_data: Mapping[str, Any]) -> User:
        try:
            credentials = LoginCredentials.model_validate(
                {"email": form_data.get("email"), "password": form_data.get("password")}
            )
        except ValidationError as exc:
            raise CredentialsSignin() from exc

        try:
            user = await self._user_repository.get_by_email(credentials.email)
        except Exception as exc:
            logger.exception("user_lookup_failed", extra={"action": "authenticate"})
            raise AuthError(CALLBACK_ROUTE_ERROR, "Failed to fetch user.") from exc

        if user is None or not self._verify_password(credentials.password, user.password_hash):
            raise CredentialsSignin()
        return user

    def _verify_password(self, plain: str, hashed: str) -> bool:
        try:
            return bool(self._crypt_context.verify(plain, hashed))
        except UnknownHashError:
            return False
        except ValueError:
            logger.exception("password_verify_failed", extra={"action": "authenticate"})
            raise

    def hash_password(self, plain: str) -> str:
        return str(self._crypt_context.hash(plain))

    def create_session_token(self, user_id: str, now_utc: datetime | None = None) -> str:
        issued_at = now_utc if now_utc is not None else datetime.now(UTC)
        claims = {"sub": str(user_id), "exp": issued_at + self._session_ttl}
        return str(jwt.encode(claims, self._secret, algorithm=self._ALGORITHM))

    def verify_session(self, token: str) -> str | None:
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._ALGORITHM])
        except JWTError:
            return None
        subject = payload.get("sub")
        return str(subject) if subject else None
