"""Exception types raised by the learning and calculator core."""


class LinguaEducateError(Exception):
    """Base class for all domain errors."""


class InvalidInput(LinguaEducateError, ValueError):
    """Raised when caller-supplied values cannot be processed.

    Examples: non-positive salary, negative experience, a challenge score
    outside [0, 1], or scoring a challenge that has no questions.
    """


class PersistenceReadFailure(LinguaEducateError):
    """Raised when a persisted key holds data that cannot be decoded."""

    def __init__(self, key: str, reason: str):
        super().__init__(f"Failed to read persisted key '{key}': {reason}")
        self.key = key
        self.reason = reason
