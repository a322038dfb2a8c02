class PrepperError(Exception):
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(PrepperError):
    status_code = 400


class NotFound(PrepperError):
    status_code = 404


class UpstreamUnavailable(PrepperError):
    """TheMealDB could not be reached or sent back something unreadable."""

    status_code = 502


class AssistantUnavailable(PrepperError):
    """The completion service failed. Never answered locally instead."""

    status_code = 500
