"""
Authorization guard.

Every gated entry point calls AuthorizationGuard.authorize once and acts
on the returned decision. The guard itself never signs anyone out or
redirects; shells do that from the decision's hints.
"""

from typing import Iterable, Optional

from shared.models import Role, Session

from .exceptions import ForbiddenError, NotAuthenticatedError
from .models import AuthDecision, DenialReason, EntryPage


class AuthorizationGuard:
    """
    Role and allow-list based access decisions.

    The allow-list is a fallback: an email listed there is treated as an
    organizer even when its profile has no admin role.
    """

    def __init__(self, admin_emails: Iterable[str] = ()):
        self._admin_emails = frozenset(
            email.strip().lower() for email in admin_emails if email.strip()
        )

    def is_allow_listed(self, email: Optional[str]) -> bool:
        """Check an email against the admin allow-list."""
        if not email:
            return False
        return email.strip().lower() in self._admin_emails

    def authorize(
        self,
        session: Optional[Session],
        required_role: Role = Role.USER,
    ) -> AuthDecision:
        """
        Decide whether the session may use an entry point.

        Rules, in order:
        1. No session: denied, not authenticated.
        2. Admin required, role is not admin, email not allow-listed:
           denied, forbidden. An unknown role (None) is not admin.
        3. Otherwise authorized.
        """
        entry = EntryPage.ADMIN_LOGIN if required_role == Role.ADMIN else EntryPage.LOGIN

        if session is None:
            return AuthDecision.deny(DenialReason.NOT_AUTHENTICATED, entry)

        if (
            required_role == Role.ADMIN
            and session.role != Role.ADMIN
            and not self.is_allow_listed(session.email)
        ):
            return AuthDecision.deny(DenialReason.FORBIDDEN, entry)

        return AuthDecision.allow()

    def require(
        self,
        session: Optional[Session],
        required_role: Role = Role.USER,
    ) -> Session:
        """
        Authorize and raise on denial.

        Returns:
            The session, known to be non-None

        Raises:
            NotAuthenticatedError: If there is no session
            ForbiddenError: If the session lacks the required role
        """
        decision = self.authorize(session, required_role)
        if decision.authorized:
            return session  # type: ignore[return-value]

        redirect_to = decision.redirect_to.value if decision.redirect_to else None
        if decision.reason == DenialReason.NOT_AUTHENTICATED:
            raise NotAuthenticatedError(redirect_to=redirect_to)

        user_role = session.role.value if session and session.role else None
        raise ForbiddenError(required_role.value, user_role, redirect_to=redirect_to)
