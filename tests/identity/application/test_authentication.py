import pytest

from storefront.identity.authentication import authenticate, user_from_token
from storefront.identity.errors import AuthenticationError
from storefront.identity.tokens import get_token_service


class TestAuthenticate:
    def test_valid_credentials_issue_token(self, customer_id):
        auth = authenticate("jane.doe@example.com", "correct-horse-battery")

        assert str(auth.user.id) == customer_id
        claims = get_token_service().decode(auth.token)
        assert claims["sub"] == customer_id
        assert claims["role"] == "Customer"

    def test_email_lookup_ignores_case(self, customer_id):
        auth = authenticate("  JANE.DOE@EXAMPLE.COM ", "correct-horse-battery")
        assert str(auth.user.id) == customer_id

    def test_wrong_password(self, customer_id):
        with pytest.raises(AuthenticationError) as exc:
            authenticate("jane.doe@example.com", "wrong-password")
        assert exc.value.message == "Invalid email or password"

    def test_unknown_email_has_same_message(self):
        with pytest.raises(AuthenticationError) as exc:
            authenticate("nobody@example.com", "correct-horse-battery")
        assert exc.value.message == "Invalid email or password"


class TestUserFromToken:
    def test_resolves_user(self, customer_id):
        auth = authenticate("jane.doe@example.com", "correct-horse-battery")
        assert str(user_from_token(auth.token).id) == customer_id

    def test_token_for_unknown_user(self):
        token, _ = get_token_service().generate("missing", "ghost@example.com", "Ghost", "Customer")
        with pytest.raises(AuthenticationError):
            user_from_token(token)

    def test_garbage_token(self):
        with pytest.raises(AuthenticationError):
            user_from_token("not-a-token")


class TestLongPasswords:
    def test_login_with_128_character_password(self, register_user):
        password = "long-passphrase-" * 8
        user_id = register_user(password=password)

        auth = authenticate("jane.doe@example.com", password)

        assert str(auth.user.id) == user_id
