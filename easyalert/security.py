"""Token generation and password hashing."""

import secrets
import string
from functools import lru_cache

import bcrypt

from easyalert.config import get_settings
from easyalert.errors import HashingError, RandomSourceError

USER_TOKEN_LENGTH = 32
TOKEN_ALPHABET = string.ascii_letters

_sysrand = secrets.SystemRandom()


def generate_token(length: int = USER_TOKEN_LENGTH) -> str:
    """Return a random string of exactly ``length`` ASCII letters.

    Characters come from the OS CSPRNG; digits and symbols never appear.
    """
    if length < 0:
        raise ValueError("token length must not be negative")
    try:
        return "".join(_sysrand.choice(TOKEN_ALPHABET) for _ in range(length))
    except (OSError, NotImplementedError) as e:
        raise RandomSourceError() from e


def hash_password(password: str, rounds: int | None = None) -> str:
    """Hash a password with a fresh bcrypt salt."""
    if rounds is None:
        rounds = get_settings().bcrypt_rounds
    try:
        return bcrypt.hashpw(
            password.encode("utf-8"),
            bcrypt.gensalt(rounds=rounds),
        ).decode("utf-8")
    except ValueError as e:
        # bcrypt rejects passwords over 72 bytes and out-of-range costs
        raise HashingError() from e


def verify_password(password_digest: str, password: str) -> bool:
    try:
        return bcrypt.checkpw(
            password.encode("utf-8"),
            password_digest.encode("utf-8"),
        )
    except ValueError:
        return False


@lru_cache()
def _placeholder_digest(rounds: int) -> str:
    return hash_password(generate_token(), rounds=rounds)


def reject_password(password: str, rounds: int | None = None) -> bool:
    """Compare ``password`` against a throwaway digest and return False.

    Used when there is no stored digest to check, so a missing account costs
    the same bcrypt work as a wrong password.
    """
    if rounds is None:
        rounds = get_settings().bcrypt_rounds
    verify_password(_placeholder_digest(rounds), password)
    return False
