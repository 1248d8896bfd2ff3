"""Account linking domain service.

Runs link and unlink flows as explicit state machines over a
``LinkOperation``:

    INITIATED -> TARGET_FETCHED -> VERIFIED -> MERGED -> LINKED -> SESSION_UPDATED

Any failure moves the operation to FAILED and is reported as ``LinkError``
(``PartialLinkError`` once merged metadata has been committed). Nothing is
retried or rolled back.
"""

import logfire

from linkage.domain.error import (
    CandidateLookupError,
    DirectoryPayloadError,
    DomainError,
    LinkError,
    PartialLinkError,
    UnlinkError,
    UnverifiedEmailError,
    VerificationError,
)
from linkage.domain.model import LinkOperation, LinkRequest, UnlinkRequest, UserRecord
from linkage.domain.value import IdentityRef, LinkState, SessionId, UserId

from .directory import IdentityDirectory
from .merge import merge_records
from .session_projector import SessionProjector


class AccountLinkingService:
    """Domain service for linking and unlinking user accounts."""

    def __init__(
        self, directory: IdentityDirectory, session_projector: SessionProjector
    ) -> None:
        """Initialize account linking service.

        Args:
            directory: Identity directory client
            session_projector: Session identity projector
        """
        self.directory = directory
        self.session_projector = session_projector

    async def initiate_link(
        self, request: LinkRequest, session_id: SessionId
    ) -> LinkOperation:
        """Link the target user into the primary user.

        Steps:
        1. Fetch target and primary users
        2. Verify both emails are verified and the target's equals the primary's
        3. Merge metadata and commit it to the primary user
        4. Link the target identity to the primary user
        5. Overwrite the session's identities with the linked list

        Args:
            request: Primary and target user ids
            session_id: Caller session to project the result into

        Returns:
            Finished operation in SESSION_UPDATED with the new identity list

        Raises:
            LinkError: If any step fails; ``cause`` holds the originating error
            PartialLinkError: If a step after the metadata commit fails
        """
        operation = LinkOperation.start()

        with logfire.span(
            "account_linking_service.initiate_link",
            operation_id=str(operation.id),
            primary_user_id=str(request.primary_user_id),
            target_user_id=str(request.target_user_id),
        ):
            try:
                target = await self.directory.get_user(request.target_user_id)
                primary = await self.directory.get_user(request.primary_user_id)
                operation = operation.advance(LinkState.TARGET_FETCHED)

                self._verify_target(request, primary, target)
                operation = operation.advance(LinkState.VERIFIED)

                # Target metadata is not read past this point
                merged = merge_records(primary, target)
                try:
                    await self.directory.update_metadata(
                        request.primary_user_id,
                        merged.merged_user_metadata,
                        merged.merged_app_metadata,
                    )
                except DirectoryPayloadError as e:
                    logfire.warn(
                        "Metadata update response unreadable",
                        operation_id=str(operation.id),
                        error=str(e),
                    )
                operation = operation.advance(LinkState.MERGED)

                try:
                    identities = await self.directory.link_identity(
                        request.primary_user_id,
                        request.target_user_id.provider,
                        request.target_user_id.local_id,
                    )
                    operation = operation.advance(LinkState.LINKED)
                except DirectoryPayloadError as e:
                    operation = operation.advance(LinkState.LINKED)
                    identities = await self._read_back_identities(
                        operation, request.primary_user_id, e
                    )
                operation = operation.with_identities(tuple(identities))

                await self.session_projector.project(
                    session_id, request.primary_user_id, identities
                )
                operation = operation.advance(LinkState.SESSION_UPDATED)
            except DomainError as e:
                failed_at = operation.state
                operation = operation.fail(e)
                logfire.error(
                    "Account link failed",
                    operation_id=str(operation.id),
                    failed_at=failed_at.value,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                if LinkState.MERGED in operation.history:
                    raise PartialLinkError(failed_at, e) from e
                raise LinkError(failed_at, e) from e

            logfire.info(
                "Account linked",
                operation_id=str(operation.id),
                primary_user_id=str(request.primary_user_id),
                identity_count=len(operation.identities),
            )
            return operation

    async def _read_back_identities(
        self,
        operation: LinkOperation,
        user_id: UserId,
        error: DirectoryPayloadError,
    ) -> list[IdentityRef]:
        """Fetch ``user_id``'s identities after a write whose response was unreadable."""
        logfire.warn(
            "Identity write response unreadable, reading user back",
            operation_id=str(operation.id),
            user_id=str(user_id),
            error=str(error),
        )
        user = await self.directory.get_user(user_id)
        return list(user.identities)

    def _verify_target(
        self, request: LinkRequest, primary: UserRecord, target: UserRecord
    ) -> None:
        """Guard the link against untrusted or mismatched target ids.

        Raises:
            UnverifiedEmailError: If the primary user's email is not verified
            VerificationError: If the target must not be linked
        """
        if request.target_user_id == request.primary_user_id:
            raise VerificationError("Cannot link a user to itself")
        if not primary.email_verified:
            raise UnverifiedEmailError(str(request.primary_user_id))
        if not target.email_verified:
            raise VerificationError(
                f"Email of target user {request.target_user_id} is not verified"
            )
        if target.email is None or target.email != primary.email:
            raise VerificationError("Target email does not match primary email")

    async def unlink(self, request: UnlinkRequest, session_id: SessionId) -> LinkOperation:
        """Detach one identity from the root user.

        Metadata is left untouched; the detached account's metadata was
        discarded when it was linked.

        Args:
            request: Root user and identity to detach
            session_id: Caller session to project the result into

        Returns:
            Finished operation in UNLINKED with the remaining identities

        Raises:
            UnlinkError: If the identity is the root's primary identity or the
                directory call fails
        """
        operation = LinkOperation.start(LinkState.UNLINK_REQUESTED)

        with logfire.span(
            "account_linking_service.unlink",
            operation_id=str(operation.id),
            root_user_id=str(request.root_user_id),
            provider=request.provider,
            identity_id=request.identity_id,
        ):
            try:
                if (request.provider, request.identity_id) == (
                    request.root_user_id.provider,
                    request.root_user_id.local_id,
                ):
                    raise VerificationError("Cannot unlink the primary identity")

                try:
                    identities = await self.directory.unlink_identity(
                        request.root_user_id, request.provider, request.identity_id
                    )
                except DirectoryPayloadError as e:
                    identities = await self._read_back_identities(
                        operation, request.root_user_id, e
                    )
                await self.session_projector.project(
                    session_id, request.root_user_id, identities
                )
                operation = operation.advance(LinkState.UNLINKED).with_identities(
                    tuple(identities)
                )
            except DomainError as e:
                operation = operation.fail(e)
                logfire.error(
                    "Account unlink failed",
                    operation_id=str(operation.id),
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise UnlinkError(e) from e

            logfire.info(
                "Identity unlinked",
                operation_id=str(operation.id),
                root_user_id=str(request.root_user_id),
                provider=request.provider,
                remaining=len(operation.identities),
            )
            return operation

    async def suggest_link_candidates(
        self, primary_user: UserRecord
    ) -> list[UserRecord]:
        """Find accounts that could be linked into ``primary_user``.

        Args:
            primary_user: The caller's user record

        Returns:
            Other users sharing the caller's verified email

        Raises:
            CandidateLookupError: If the caller's email is unverified or the
                search fails
        """
        with logfire.span(
            "account_linking_service.suggest_link_candidates",
            user_id=str(primary_user.user_id),
        ):
            try:
                candidates = await self.directory.find_by_verified_email(
                    primary_user.email,
                    primary_user.user_id,
                    email_verified=primary_user.email_verified,
                )
            except DomainError as e:
                logfire.warn(
                    "Candidate lookup failed",
                    user_id=str(primary_user.user_id),
                    error=str(e),
                )
                raise CandidateLookupError(e) from e

            logfire.info(
                "Link candidates found",
                user_id=str(primary_user.user_id),
                count=len(candidates),
            )
            return candidates
