"""
Create an account directly in the user store, e.g. the first admin. Run from project root:
  python -m app.scripts.create_user USERNAME PASSWORD [role]
Example:
  python -m app.scripts.create_user admin your-secure-password ADMIN

The API only ever creates USER accounts; this script is how an ADMIN comes to exist.
"""
import argparse
import logging
import sys

from app.core.database import SessionLocal
from app.core.security import PASSWORD_MAX_LEN, USERNAME_MAX_LEN, hash_password
from app.models import Role
from app.services.errors import UserServiceError
from app.services.user_store import SqlAlchemyUserStore

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a watchlist user outside the API.")
    parser.add_argument("username", help=f"Username (1-{USERNAME_MAX_LEN} chars)")
    parser.add_argument("password", help=f"Password (1-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument(
        "role",
        nargs="?",
        default=Role.USER.value,
        type=str.upper,
        choices=[r.value for r in Role],
    )
    args = parser.parse_args(argv)

    username = args.username.strip()
    if not username or len(username) > USERNAME_MAX_LEN:
        logger.error("Invalid username length.")
        return 1
    if not args.password or len(args.password) > PASSWORD_MAX_LEN:
        logger.error("Password must be 1-%s characters.", PASSWORD_MAX_LEN)
        return 1

    db = SessionLocal()
    try:
        store = SqlAlchemyUserStore(db)
        if store.get_by_username(username) is not None:
            logger.error("User '%s' already exists.", username)
            return 1
        user = store.create(username, hash_password(args.password), Role(args.role))
        logger.info("Created user id=%s with role %s.", user.id, args.role)
        return 0
    except UserServiceError as e:
        logger.error("Could not create user: %s", e.message)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
