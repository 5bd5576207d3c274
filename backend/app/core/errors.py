"""
Error kinds raised by the credential services.

Each error carries the HTTP status the API reports for it; the exception
handlers render them as {"detail": ..., "error": kind}.
"""


class CredentialError(Exception):
    kind = "CredentialError"
    status_code = 400

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class InvalidInput(CredentialError):
    """A required field is missing or empty."""
    kind = "InvalidInput"


class NotFound(CredentialError):
    """No record matches the given key (unknown, consumed and revoked look the same)."""
    kind = "NotFound"
    status_code = 404


class ChallengeNotFound(NotFound):
    """Verify-code reports a missing challenge as a plain bad request."""
    status_code = 400


class Expired(CredentialError):
    """The record exists but its time window has passed."""
    kind = "Expired"


class Unauthorized(CredentialError):
    """A prior step of the onboarding flow has not been completed."""
    kind = "Unauthorized"
