from typing import Optional


class BurstTokenError(Exception):
    """Base class for every error the burst token flow reports to the conversation layer."""


class UnknownFieldError(BurstTokenError):
    def __init__(self, field: str):
        self.field = field
        super().__init__(f"{field} is not a user supplied token field")


class TokenValidationError(BurstTokenError):
    """A draft value breaks a launch rule. The draft is kept so the user can correct it."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"{field}: {reason}")


class SubmissionRejected(BurstTokenError):
    """The dry run of the factory call failed or returned nothing."""

    def __init__(self, reason: str, cause: Optional[BaseException] = None):
        self.reason = reason
        self.cause = cause
        super().__init__(reason)


class SubmissionFailed(BurstTokenError):
    """The transaction was sent (or sending was attempted) but did not complete."""

    def __init__(self, reason: str, tx_hash: Optional[str] = None, cause: Optional[BaseException] = None):
        self.reason = reason
        self.tx_hash = tx_hash
        self.cause = cause
        super().__init__(f"{reason} (tx: {tx_hash})" if tx_hash else reason)


class ExternalServiceError(BurstTokenError):
    def __init__(self, service: str, cause: Optional[BaseException] = None):
        self.service = service
        self.cause = cause
        super().__init__(f"{service} failed: {cause}")
