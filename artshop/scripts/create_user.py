"""
Create an account directly in the database (the only way to create an admin). Run from project root:
  python -m artshop.scripts.create_user USERNAME EMAIL PASSWORD [role] [--question Q --answer A]
Example:
  python -m artshop.scripts.create_user admin admin@example.com your-secure-password admin
"""
import argparse
import logging
import sys

from artshop.core.database import SessionLocal
from artshop.core.security import (
    BCRYPT_MAX_BYTES,
    PASSWORD_MIN_LEN,
    ROLES,
    ROLE_USER,
    SECURITY_QUESTIONS,
    exceeds_bcrypt_limit,
    hash_answer,
    hash_password,
    normalize_answer,
)
from artshop.models import User
from artshop.services.user_store import UserStore, normalize_email

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create an Artshop account.")
    parser.add_argument("username", help="Username (1-255 chars)")
    parser.add_argument("email", help="Login email")
    parser.add_argument("password", help=f"Password (at least {PASSWORD_MIN_LEN} chars)")
    parser.add_argument("role", nargs="?", default=ROLE_USER, choices=list(ROLES))
    parser.add_argument("--question", choices=list(SECURITY_QUESTIONS), help="Recovery question")
    parser.add_argument("--answer", help="Answer to the recovery question")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    username = args.username.strip()
    email = normalize_email(args.email)
    if not username or len(username) > 255:
        logger.error("Invalid username length.")
        return 1
    if not email:
        logger.error("Email must not be empty.")
        return 1
    if len(args.password) < PASSWORD_MIN_LEN:
        logger.error("Password must be at least %s characters.", PASSWORD_MIN_LEN)
        return 1
    if exceeds_bcrypt_limit(args.password):
        logger.error("Password must be at most %s bytes.", BCRYPT_MAX_BYTES)
        return 1
    if bool(args.question) != bool(args.answer and args.answer.strip()):
        logger.error("--question and --answer must be given together.")
        return 1
    if args.answer and exceeds_bcrypt_limit(normalize_answer(args.answer)):
        logger.error("Answer must be at most %s bytes.", BCRYPT_MAX_BYTES)
        return 1

    db = SessionLocal()
    try:
        store = UserStore(db)
        if store.get_by_email(email) is not None:
            logger.error("User with email '%s' already exists.", email)
            return 1
        if store.get_by_username(username) is not None:
            logger.error("User '%s' already exists.", username)
            return 1
        user = User(
            username=username,
            email=email,
            password_hash=hash_password(args.password),
            role=args.role,
            security_question=args.question,
            security_answer=hash_answer(args.answer) if args.question else None,
        )
        store.add(user)
        logger.info("Created user '%s' with role '%s'.", username, args.role)
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
