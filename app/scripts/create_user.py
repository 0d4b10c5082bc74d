"""
Create a user (e.g. first administrator). Run from project root:
  python -m app.scripts.create_user NAME EMAIL PASSWORD [--admin]
Example:
  python -m app.scripts.create_user "Site Admin" admin@example.com your-secure-password --admin
"""
import argparse
import sys

from app.core.config import get_settings
from app.core.database import SessionLocal
from app.core.logging_config import configure_logging
from app.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN
from app.schemas.auth import ADMIN_ROLE, DEFAULT_ROLE
from app.services.accounts import create_user
from app.services.errors import ValidationFailed


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a ResourceX user (verified, no email step).")
    parser.add_argument("name", help="Display name (1-255 chars)")
    parser.add_argument("email", help="Unique email address")
    parser.add_argument("password", help="Password (8-128 chars)")
    parser.add_argument("--admin", action="store_true", help="Grant the Administrator role")
    args = parser.parse_args(argv)

    configure_logging(get_settings().LOG_LEVEL)

    name = args.name.strip()
    if not name or len(name) > 255:
        print("Invalid name length.", file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print("Password must be 8-128 characters.", file=sys.stderr)
        return 1

    role = ADMIN_ROLE if args.admin else DEFAULT_ROLE
    db = SessionLocal()
    try:
        user = create_user(db, name, args.email, args.password, roles=[role], verified=True)
        email = user.email
    except ValidationFailed as e:
        for field, messages in e.errors.items():
            print(f"{field}: {' '.join(messages)}", file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created user '{email}' with role '{role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
