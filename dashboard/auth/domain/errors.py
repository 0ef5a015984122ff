CREDENTIALS_SIGNIN = "CredentialsSignin"
CALLBACK_ROUTE_ERROR = "CallbackRouteError"
INVALID_PROVIDER = "InvalidProvider"


class AuthError(Exception):
    """Sign-in failure raised by an identity provider, classified by ``type``."""

    def __init__(self, error_type: str, message: str | None = None) -> None:
        super().__init__(message or error_type)
        self.type = error_type


class CredentialsSignin(AuthError):
    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(CREDENTIALS_SIGNIN, message)
