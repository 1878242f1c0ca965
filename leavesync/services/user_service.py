"""
User service for database operations.
Users are read-only here; they are provisioned by the seed job or externally.
"""

from leavesync.db.helpers import fetch_all, fetch_one, with_db_retry
from leavesync.infrastructure.observability.logging import get_logger
from leavesync.models.domain.user_domain import User

logger = get_logger(__name__)


@with_db_retry(max_retries=3, base_delay=0.1)
async def list_users() -> list[User]:
    """All users ordered by name."""
    rows = await fetch_all("SELECT id, name, email, department, state FROM users ORDER BY name ASC")
    return [User(**row) for row in rows]


@with_db_retry(max_retries=3, base_delay=0.1)
async def get_user(user_id: int) -> User | None:
    """
    Fetch a single user.

    Args:
        user_id: Numeric user id

    Returns:
        User or None if not found
    """
    row = await fetch_one(
        "SELECT id, name, email, department, state FROM users WHERE id = %s", (user_id,)
    )
    if not row:
        logger.info("User not found", user_id=user_id)
        return None
    return User(**row)
