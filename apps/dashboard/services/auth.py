"""
Credentials sign-in.

`Auth.sign_in` resolves a provider by id and asks it to authorize the
submitted form. Failures are raised as AuthError subclasses whose `type`
says what went wrong; callers decide which ones to show to the user.
"""
import logging
from typing import Any, Dict, Mapping, Optional, Protocol

import psycopg
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from pydantic import ValidationError
from psycopg_pool import ConnectionPool

from ..models.state import Redirect
from ..models.user import LoginForm, User
from ..repos.users import get_user_by_email
from .forms import extract_fields

logger = logging.getLogger(__name__)


class AuthError(Exception):
    type = "AuthError"


class CredentialsSignin(AuthError):
    type = "CredentialsSignin"


class InvalidProvider(AuthError):
    type = "InvalidProvider"


class CallbackRouteError(AuthError):
    type = "CallbackRouteError"


class Provider(Protocol):
    id: str

    def authorize(self, form_data: Mapping[str, Any]) -> Optional[User]: ...


class CredentialsProvider:
    id = "credentials"

    def __init__(self, pool: ConnectionPool, hasher: Optional[PasswordHasher] = None):
        self.pool = pool
        self.hasher = hasher or PasswordHasher()

    def authorize(self, form_data: Mapping[str, Any]) -> Optional[User]:
        try:
            creds = LoginForm.model_validate(extract_fields(form_data, ("email", "password")))
        except ValidationError:
            return None

        with self.pool.connection() as conn:
            row = get_user_by_email(conn, creds.email)
        if not row:
            return None

        user = User.model_validate(row)
        try:
            self.hasher.verify(user.password, creds.password)
        except (VerificationError, InvalidHashError):
            return None
        return user


class Auth:
    def __init__(self, providers: Dict[str, Provider], redirect_to: str = "/dashboard"):
        self.providers = providers
        self.redirect_to = redirect_to

    def sign_in(self, provider_id: str, form_data: Mapping[str, Any]) -> Redirect:
        provider = self.providers.get(provider_id)
        if provider is None:
            raise InvalidProvider(f"Unknown provider: {provider_id}")

        try:
            user = provider.authorize(form_data)
        except psycopg.Error as exc:
            raise CallbackRouteError("Credentials lookup failed") from exc

        if user is None:
            raise CredentialsSignin("Credentials rejected")

        logger.info("Signed in user %s via %s", user.id, provider_id)
        return Redirect(self.redirect_to)
