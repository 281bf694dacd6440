"""Client-side error types."""


class ApiClientError(Exception):
    """Raised by ApiClient implementations for transport or HTTP failures.

    Attributes:
        status_code: HTTP status of the failed response, None for transport errors
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class SubmitFailure(Exception):
    """Raised when the settings pipeline fails to load or submit.

    The user record on the server is left untouched.
    """

    pass


class SettingsBusyError(Exception):
    """Raised when a submit is requested while another one is in flight."""

    pass
