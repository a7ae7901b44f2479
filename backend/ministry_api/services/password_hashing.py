"""Password Hashing — salted hashes via passlib, never plaintext storage or comparison.

Invariants:
    - hash_password output is a self-describing, salted passlib hash
    - verify_password returns False (never raises) for values that are not recognised hashes
"""

import logging

from passlib.context import CryptContext

from ministry_api.services.crud_resource import WritePlan
from ministry_api.infrastructure.query_executor import QueryExecutor

logger = logging.getLogger(__name__)

_pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

# Verified against when the username is unknown, so both failure paths hash once
DUMMY_HASH = _pwd_context.hash("not-a-real-password")


def hash_password(password: str) -> str:
    return _pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    if not hashed_password or _pwd_context.identify(hashed_password) is None:
        logger.warning("Stored credential is not a recognised password hash")
        return False
    return _pwd_context.verify(plain_password, hashed_password)


def hash_password_field(field: str = "password"):
    """before_write hook: replace the plaintext ``field`` with its hash."""

    async def hash_field(executor: QueryExecutor, plan: WritePlan) -> None:
        value = plan.values.get(field)
        if value is not None:
            plan.values[field] = hash_password(value)

    return hash_field
