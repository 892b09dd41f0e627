import logging
from typing import Any, Mapping, Optional, Protocol, Union

from ..models.state import Redirect
from .auth import AuthError

logger = logging.getLogger(__name__)


class SignIn(Protocol):
    def sign_in(self, provider_id: str, form_data: Mapping[str, Any]) -> Redirect: ...


def authenticate(
    prev_state: Optional[str],
    form_data: Mapping[str, Any],
    *,
    auth: SignIn,
) -> Union[str, Redirect]:
    """Sign in with the submitted credentials.

    Returns the provider's Redirect on success, or a message for an
    AuthError. Any other exception is left to the caller.
    """
    try:
        return auth.sign_in("credentials", form_data)
    except AuthError as error:
        logger.info("Sign-in failed: %s", error.type)
        if error.type == "CredentialsSignin":
            return "Invalid credentials."
        return "Something went wrong."
