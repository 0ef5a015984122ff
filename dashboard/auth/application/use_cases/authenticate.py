import logging
from typing import Any, Mapping

from dashboard.auth.application.ports.sign_in_port import SessionCookieSink, SignInPort
from dashboard.auth.domain.errors import CREDENTIALS_SIGNIN, AuthError

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials."
GENERIC_FAILURE_MESSAGE = "Something went wrong."


class AuthenticateUseCase:
    """Runs the credentials sign-in and turns known auth failures into a form message.

    Returns ``None`` once the provider has attached the session to ``response``.
    Errors that are not ``AuthError`` are re-raised untouched.
    """

    def __init__(self, sign_in: SignInPort) -> None:
        self._sign_in = sign_in

    async def execute(
        self,
        previous_state: str | None,
        form_data: Mapping[str, Any],
        response: SessionCookieSink,
    ) -> str | None:
        try:
            await self._sign_in.sign_in("credentials", form_data, response)
        except AuthError as exc:
            logger.info("sign_in_rejected type=%s", exc.type, extra={"action": "authenticate"})
            if exc.type == CREDENTIALS_SIGNIN:
                return INVALID_CREDENTIALS_MESSAGE
            return GENERIC_FAILURE_MESSAGE
        return None
