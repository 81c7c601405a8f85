"""Tests for registration, login, logout, and admin bootstrap."""

# pylint: disable=missing-function-docstring

import pytest

from vicat_keys.core.exceptions import AuthError, ConflictError, ErrorCode, ValidationError


class TestRegister:
    """Tests for AccountService.register."""

    def test_register_creates_user(self, services, clock):
        user = services.accounts.register("alice1", "pw123", "alice@example.com")

        assert user.username == "alice1"
        assert user.email == "alice@example.com"
        assert user.keys == []
        assert user.created_at == clock()
        assert user.password_hash != "pw123"
        assert services.gateway.snapshot().find_user(user.id) is not None

    def test_email_is_optional(self, services):
        assert services.accounts.register("alice1", "pw123").email is None

    @pytest.mark.parametrize("username", ["alice smith", "bob!", "carol.d", "dave-e", "x#y"])
    def test_rejects_username_outside_charset(self, services, username):
        with pytest.raises(ValidationError) as excinfo:
            services.accounts.register(username, "pw123")

        assert excinfo.value.code == ErrorCode.INVALID_USERNAME
        assert services.gateway.snapshot().users == []

    def test_accepts_at_sign(self, services):
        assert services.accounts.register("alice@home", "pw123").username == "alice@home"

    @pytest.mark.parametrize("username,password", [("", "pw"), ("alice1", ""), (None, None)])
    def test_requires_username_and_password(self, services, username, password):
        with pytest.raises(ValidationError) as excinfo:
            services.accounts.register(username, password)
        assert excinfo.value.code == ErrorCode.MISSING_FIELDS

    def test_rejects_duplicate_username(self, services):
        services.accounts.register("alice1", "pw123")

        with pytest.raises(ConflictError) as excinfo:
            services.accounts.register("alice1", "other")

        assert excinfo.value.code == ErrorCode.USERNAME_TAKEN
        assert len(services.gateway.snapshot().users) == 1

    def test_rejects_password_longer_than_bcrypt_limit(self, services):
        with pytest.raises(ValidationError) as excinfo:
            services.accounts.register("alice1", "x" * 73)
        assert excinfo.value.code == ErrorCode.PASSWORD_TOO_LONG


class TestLogin:
    """Tests for AccountService.login and logout."""

    def test_admin_login_returns_no_token(self, services, admin):
        username, password = admin

        result = services.accounts.login(username, password)

        assert result.role == "admin"
        assert result.session_token is None
        assert services.gateway.snapshot().sessions == []

    def test_user_login_creates_session(self, services):
        services.accounts.register("alice1", "pw123")

        result = services.accounts.login("alice1", "pw123")

        assert result.role == "user"
        assert result.session_token
        assert services.gateway.snapshot().find_session(result.session_token) is not None

    def test_wrong_password(self, services):
        services.accounts.register("alice1", "pw123")

        with pytest.raises(AuthError) as excinfo:
            services.accounts.login("alice1", "nope")

        assert excinfo.value.code == ErrorCode.INVALID_LOGIN

    def test_unknown_user(self, services):
        with pytest.raises(AuthError):
            services.accounts.login("ghost", "pw")

    def test_missing_fields(self, services):
        with pytest.raises(ValidationError):
            services.accounts.login("alice1", None)

    def test_logout_removes_session(self, services):
        services.accounts.register("alice1", "pw123")
        token = services.accounts.login("alice1", "pw123").session_token

        services.accounts.logout(token)
        services.accounts.logout(token)

        assert services.gateway.snapshot().sessions == []

    def test_logout_requires_token(self, services):
        with pytest.raises(ValidationError) as excinfo:
            services.accounts.logout(None)
        assert excinfo.value.code == ErrorCode.MISSING_TOKEN


class TestAdminAccount:
    """Tests for admin bootstrap and re-creation."""

    def test_bootstrap_creates_admin_once(self, services):
        assert services.accounts.bootstrap_admin("first", "pw-one") is True
        assert services.accounts.bootstrap_admin("second", "pw-two") is False

        admin = services.gateway.snapshot().admin
        assert admin is not None
        assert admin.username == "first"
        assert services.credentials.verify("pw-one", admin.password_hash)

    def test_bootstrap_rejects_overlong_password(self, services):
        with pytest.raises(ValidationError) as excinfo:
            services.accounts.bootstrap_admin("first", "p" * 73)

        assert excinfo.value.code == ErrorCode.PASSWORD_TOO_LONG
        assert services.gateway.snapshot().admin is None

    def test_bootstrap_ignores_password_when_admin_exists(self, services, admin):
        assert services.accounts.bootstrap_admin("first", "p" * 73) is False

    def test_reset_replaces_credentials(self, services, admin):
        old_username, old_password = admin

        services.accounts.reset_admin("newroot", "new-password")

        assert services.accounts.login("newroot", "new-password").role == "admin"
        with pytest.raises(AuthError):
            services.accounts.login(old_username, old_password)

    def test_list_users_hides_hashes(self, services):
        services.accounts.register("alice1", "pw123")

        users = services.accounts.list_users()

        assert [u.username for u in users] == ["alice1"]
        assert "password_hash" not in users[0].model_dump()
