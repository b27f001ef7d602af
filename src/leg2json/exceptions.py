"""Exceptions raised outside the parsing core."""


class Leg2JsonError(Exception):
    """Base class for leg2json errors."""


class FetchError(Leg2JsonError):
    """Raised when the register cannot be reached after all retries."""

    def __init__(self, url: str, attempts: int, cause: Exception | None = None):
        self.url = url
        self.attempts = attempts
        self.cause = cause
        message = f"Failed to fetch {url} after {attempts} attempts"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)
