"""Unit tests for the credentials provider, sign-in and the authenticate action."""

from unittest.mock import MagicMock

import psycopg
import pytest
from argon2 import PasswordHasher
from pydantic import ValidationError

from apps.dashboard.models.state import Redirect
from apps.dashboard.models.user import LoginForm
from apps.dashboard.services.auth import (
    Auth,
    AuthError,
    CallbackRouteError,
    CredentialsProvider,
    CredentialsSignin,
    InvalidProvider,
)
from apps.dashboard.services.auth_actions import authenticate

_hasher = PasswordHasher(time_cost=1, memory_cost=8, parallelism=1)
_HASH = _hasher.hash("123456")


@pytest.fixture
def user_row(cursor):
    cursor.description = [("id",), ("name",), ("email",), ("password",)]
    cursor.fetchone.return_value = ("u1", "User", "user@nextmail.com", _HASH)
    return cursor


# ── CredentialsProvider ───────────────────────────────────────────────────


def test_authorize_returns_user_for_matching_password(pool, user_row):
    provider = CredentialsProvider(pool, hasher=_hasher)

    user = provider.authorize({"email": "user@nextmail.com", "password": "123456"})

    assert user is not None
    assert user.id == "u1"
    assert user.email == "user@nextmail.com"
    assert user_row.execute.call_args.args[1] == ("user@nextmail.com",)


def test_authorize_rejects_wrong_password(pool, user_row):
    provider = CredentialsProvider(pool, hasher=_hasher)
    assert provider.authorize({"email": "user@nextmail.com", "password": "wrong-pass"}) is None


def test_authorize_rejects_unknown_user(pool, cursor):
    cursor.fetchone.return_value = None
    provider = CredentialsProvider(pool, hasher=_hasher)
    assert provider.authorize({"email": "nobody@nextmail.com", "password": "123456"}) is None


@pytest.mark.parametrize(
    "form",
    [
        {"email": "not-an-email", "password": "123456"},
        {"email": "user@@nextmail.com", "password": "123456"},
        {"email": "user@nextmail", "password": "123456"},
        {"email": "user@nextmail.com", "password": "123"},
        {"email": "user@nextmail.com"},
        {},
    ],
)
def test_authorize_rejects_malformed_credentials_without_lookup(pool, cursor, form):
    provider = CredentialsProvider(pool, hasher=_hasher)

    assert provider.authorize(form) is None
    cursor.execute.assert_not_called()


def test_login_form_rejects_malformed_email():
    with pytest.raises(ValidationError):
        LoginForm(email="user@@x.com", password="123456")


def test_login_form_accepts_well_formed_email():
    form = LoginForm(email="user@nextmail.com", password="123456")
    assert form.email == "user@nextmail.com"


# ── Auth.sign_in ──────────────────────────────────────────────────────────


def _auth_with(provider):
    provider.id = "credentials"
    return Auth({"credentials": provider}, redirect_to="/dashboard")


def test_sign_in_success_redirects():
    provider = MagicMock()
    provider.authorize.return_value = MagicMock(id="u1")

    assert _auth_with(provider).sign_in("credentials", {}) == Redirect("/dashboard")


def test_sign_in_rejected_credentials_raises_credentials_signin():
    provider = MagicMock()
    provider.authorize.return_value = None

    with pytest.raises(CredentialsSignin) as exc_info:
        _auth_with(provider).sign_in("credentials", {})
    assert exc_info.value.type == "CredentialsSignin"


def test_sign_in_unknown_provider_raises():
    with pytest.raises(InvalidProvider):
        Auth({}).sign_in("github", {})


def test_sign_in_wraps_database_errors():
    provider = MagicMock()
    provider.authorize.side_effect = psycopg.OperationalError("down")

    with pytest.raises(CallbackRouteError) as exc_info:
        _auth_with(provider).sign_in("credentials", {})
    assert isinstance(exc_info.value.__cause__, psycopg.OperationalError)


# ── authenticate ──────────────────────────────────────────────────────────


def test_authenticate_passes_redirect_through():
    auth = MagicMock()
    auth.sign_in.return_value = Redirect("/dashboard")
    form = {"email": "user@nextmail.com", "password": "123456"}

    assert authenticate(None, form, auth=auth) == Redirect("/dashboard")
    auth.sign_in.assert_called_once_with("credentials", form)


def test_authenticate_invalid_credentials_message():
    auth = MagicMock()
    auth.sign_in.side_effect = CredentialsSignin("nope")

    assert authenticate("previous", {}, auth=auth) == "Invalid credentials."


@pytest.mark.parametrize("error", [CallbackRouteError("x"), InvalidProvider("x"), AuthError("x")])
def test_authenticate_other_auth_errors_are_generic(error):
    auth = MagicMock()
    auth.sign_in.side_effect = error

    assert authenticate(None, {}, auth=auth) == "Something went wrong."


def test_authenticate_reraises_non_auth_errors():
    auth = MagicMock()
    auth.sign_in.side_effect = ConnectionError("identity provider unreachable")

    with pytest.raises(ConnectionError):
        authenticate(None, {}, auth=auth)
