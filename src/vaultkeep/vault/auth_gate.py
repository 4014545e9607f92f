# Vault Module - Authentication Gate
#
# Boolean gate over a resolved RequestContext. Evaluated once per request
# before any gated route body runs; a denial never touches the vault.

from .models import Allowed, AuthDecision, Denied, RequestContext


class AuthGate:
    """Decides whether a request may proceed to the vault."""

    def authorize(self, context: RequestContext) -> AuthDecision:
        """
        Args:
            context: Session context produced by SessionResolver

        Returns:
            Allowed(principal) when logged in, Denied otherwise
        """
        if context.logged_in and context.principal is not None:
            return Allowed(principal=context.principal)
        return Denied()
