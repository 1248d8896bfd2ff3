"""Domain layer errors.

Lower-level failures (``NotFoundError``, ``VerificationError``,
``UnverifiedEmailError``, ``DirectoryError``) are raised by the directory
client and the linking service's guards. The caller-facing surface reports
them wrapped in ``LinkError``, ``UnlinkError`` or ``CandidateLookupError``
with the originating error kept as ``cause``.
"""

from linkage.domain.value import LinkState


class DomainError(Exception):
    """Base domain error."""

    pass


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class UnverifiedEmailError(DomainError):
    """Raised when the caller's own email is not verified."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"Email of user {user_id} is not verified")


class VerificationError(DomainError):
    """Raised when a link target fails verification.

    The target id may come from an untrusted caller, so it is only linked
    when its email is verified and equal to the primary's email.
    """

    pass


class DirectoryError(DomainError):
    """Raised when a call to the identity directory fails.

    ``status_code`` is the remote HTTP status, or None when no response was
    received.
    """

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class DirectoryPayloadError(DirectoryError):
    """The directory accepted the call but its response body is unreadable.

    The remote change, if any, has been applied.
    """


class LinkError(DomainError):
    """Terminal failure of a link operation.

    Attributes:
        state: Last state reached before the failure
        cause: Originating error
    """

    def __init__(self, state: LinkState, cause: Exception):
        self.state = state
        self.cause = cause
        super().__init__(f"Link failed after {state.value}: {cause}")

    @property
    def metadata_committed(self) -> bool:
        """Whether merged metadata was already written to the primary user."""
        return False


class PartialLinkError(LinkError):
    """Link failed after merged metadata was committed.

    Metadata merge is safe to repeat, so callers may retry just the link step.
    A ``state`` of LINKED means the identity was linked as well.
    """

    @property
    def metadata_committed(self) -> bool:
        return True


class UnlinkError(DomainError):
    """Terminal failure of an unlink operation."""

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"Unlink failed: {cause}")


class CandidateLookupError(DomainError):
    """Failure looking up link candidates."""

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"Candidate lookup failed: {cause}")
