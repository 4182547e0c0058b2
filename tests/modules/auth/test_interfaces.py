from modules.auth.guard import AuthorizationGuard
from modules.auth.interfaces import IAuthorizationGuard, IAuthProvider, IAuthService
from modules.auth.providers import SupabaseAuthProvider
from modules.auth.service import AuthService

from tests.fakes import FakeAuthProvider


class TestAuthInterfaces:
    def test_auth_service_has_interface_methods(self):
        """AuthService should have all IAuthService methods."""
        methods = ["validate_token", "resolve_session", "sign_up", "sign_in"]
        for method in methods:
            assert hasattr(IAuthService, method)
            assert callable(getattr(AuthService, method))

    def test_guard_satisfies_protocol(self):
        assert isinstance(AuthorizationGuard(), IAuthorizationGuard)

    def test_providers_satisfy_protocol(self):
        """Both the Supabase provider and the test fake are IAuthProviders."""
        for method in ["sign_in", "sign_up", "sign_out", "subscribe"]:
            assert callable(getattr(SupabaseAuthProvider, method))
        assert isinstance(FakeAuthProvider(), IAuthProvider)
