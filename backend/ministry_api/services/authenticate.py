"""Authentication — verifies a username/password pair against the User table.

Invariants:
    - The username is bound as a parameter
    - Unknown username and wrong password raise AuthError with different reasons
      but an identical client-facing message and status
    - Unknown usernames still pay for one hash verification (DUMMY_HASH)
    - The first failure stops the operation; no success is reported after it
"""

import logging

from sqlalchemy import select

from ministry_api.core.entities import USER
from ministry_api.core.errors import AuthError, ErrorContext
from ministry_api.db.tables import build_table
from ministry_api.infrastructure.query_executor import QueryExecutor
from ministry_api.services.password_hashing import DUMMY_HASH, verify_password

logger = logging.getLogger(__name__)

UNKNOWN_USER = "unknown_user"
BAD_PASSWORD = "bad_password"


async def authenticate(
    executor: QueryExecutor, username: str, password: str,
) -> int:
    """Return the userId for valid credentials, raise AuthError otherwise."""
    users = build_table(USER)
    row = await executor.fetch_one(
        select(users.c.userId, users.c.password).where(users.c.username == username),
        ErrorContext(resource=USER.name),
    )
    if row is None:
        verify_password(password, DUMMY_HASH)
        _log_failure(username, UNKNOWN_USER)
        raise AuthError(UNKNOWN_USER, ErrorContext(resource=USER.name))

    if not verify_password(password, row["password"]):
        _log_failure(username, BAD_PASSWORD)
        raise AuthError(BAD_PASSWORD, ErrorContext(resource=USER.name))

    logger.info(
        "Login succeeded",
        extra={"resource": USER.name, "record_id": row["userId"], "username": username},
    )
    return row["userId"]


def _log_failure(username: str, reason: str) -> None:
    logger.warning(
        f"Login failed: {reason}",
        extra={"resource": USER.name, "username": username, "reason": reason},
    )
