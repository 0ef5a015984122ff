from typing import Any, Mapping, Protocol


class SessionCookieSink(Protocol):
    def set_cookie(self, key: str, value: str = "", **kwargs: Any) -> None: ...


class SignInPort(Protocol):
    async def sign_in(
        self,
        provider: str,
        form_data: Mapping[str, Any],
        response: SessionCookieSink,
    ) -> None: ...
