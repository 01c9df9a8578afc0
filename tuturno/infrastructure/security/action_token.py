from __future__ import annotations

import hmac
import logging

from tuturno.application.exceptions import ConfigurationError


logger = logging.getLogger(__name__)

SECRET_KEY_NAME = "APPOINTMENT_TOKEN_SECRET"
SEPARATOR = "."


def _signature(appointment_id: str, secret: str) -> str:
    return hmac.new(secret.encode("utf-8"), appointment_id.encode("utf-8"), "sha256").hexdigest()


def generate_appointment_token(appointment_id: str, secret: str | None) -> str:
    """
    Sign an appointment id for use in e-mailed action links.

    The token is ``"<appointment_id>.<hex hmac-sha256>"``. It carries no expiry
    or nonce, so the same id and secret always produce the same token.
    """
    if not secret:
        raise ConfigurationError(SECRET_KEY_NAME)
    return f"{appointment_id}{SEPARATOR}{_signature(appointment_id, secret)}"


def validate_appointment_token(appointment_id: str, token: str, secret: str | None) -> bool:
    if not appointment_id or not token:
        return False

    if not secret:
        logger.error("Missing token secret; rejecting action token", extra={"appointment_id": appointment_id})
        return False

    try:
        token_id, signature = token.split(SEPARATOR, 1)
    except ValueError:
        return False

    if not token_id or not signature:
        return False

    if token_id != appointment_id:
        return False

    expected = _signature(appointment_id, secret)
    return hmac.compare_digest(expected.encode("utf-8"), signature.encode("utf-8"))


class AppointmentTokenSigner:
    """Holds the signing secret so callers never read it from the environment."""

    def __init__(self, secret: str | None) -> None:
        self._secret = secret

    def generate(self, appointment_id: str) -> str:
        return generate_appointment_token(appointment_id, self._secret)

    def validate(self, appointment_id: str, token: str) -> bool:
        return validate_appointment_token(appointment_id, token, self._secret)
