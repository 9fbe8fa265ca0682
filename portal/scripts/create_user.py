"""
Create an account directly in the database (e.g. the first admin or CEO). Run from project root:
  python -m portal.scripts.create_user EMAIL USERNAME PASSWORD [role]
Example:
  python -m portal.scripts.create_user ceo@example.com ceo 'Str0ng!Pass' ceo
"""
import argparse
import sys

from email_validator import EmailNotValidError, validate_email
from sqlalchemy import or_

from portal.core.database import SessionLocal
from portal.core.roles import Role
from portal.core.security import (
    USERNAME_PATTERN,
    hash_password,
    normalize_email,
    password_policy_error,
)
from portal.models import User
from portal.services.session_store import utcnow


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a studio portal account.")
    parser.add_argument("email", help="Email address")
    parser.add_argument("username", help="Username (3-20 letters, numbers, underscores)")
    parser.add_argument("password", help="Password (8-128 chars, letter, number, special)")
    parser.add_argument(
        "role",
        nargs="?",
        default=Role.USER.value,
        choices=[r.value for r in Role],
    )
    args = parser.parse_args(argv)

    try:
        email = normalize_email(
            validate_email(args.email.strip(), check_deliverability=False).normalized
        )
    except EmailNotValidError as e:
        print(f"Invalid email format: {e}", file=sys.stderr)
        return 1
    username = args.username.strip()
    if not USERNAME_PATTERN.match(username):
        print("Invalid username format.", file=sys.stderr)
        return 1
    problem = password_policy_error(args.password)
    if problem:
        print(problem, file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        existing = (
            db.query(User)
            .filter(or_(User.email == email, User.username == username))
            .first()
        )
        if existing:
            print(f"User '{username}' or '{email}' already exists.", file=sys.stderr)
            return 1
        user = User(
            email=email,
            username=username,
            password_hash=hash_password(args.password),
            role=args.role,
            is_active=True,
            data_processing_consent=True,
            data_processing_consent_at=utcnow(),
        )
        db.add(user)
        db.commit()
        print(f"Created user '{username}' with role '{args.role}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
