# backend/scripts/bootstrap_admin.py
"""
Create (or reset the password of) an admin account.

Usage (from repo root):
  python backend/scripts/bootstrap_admin.py --email admin@church.local --password 'changeme123'
  python backend/scripts/bootstrap_admin.py --email admin@church.local --password 'newpass123' --reset

Uses DATABASE_URL (or .env) exactly like the API does.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

HERE = Path(__file__).resolve()
BACKEND_ROOT = HERE.parents[1]  # .../backend

if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

from sqlalchemy import select  # noqa: E402

import church_admin.models  # noqa: E402,F401
from church_admin.db import SessionLocal  # noqa: E402
from church_admin.models.user import User, UserRole  # noqa: E402
from church_admin.services.auth import hash_password  # noqa: E402

logger = logging.getLogger("bootstrap_admin")


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Create or reset a Church Worker Admin account.")
    ap.add_argument("--email", required=True)
    ap.add_argument("--password", required=True)
    ap.add_argument("--first-name", dest="first_name")
    ap.add_argument("--last-name", dest="last_name")
    ap.add_argument("--reset", action="store_true", help="Reset the password if the account exists")
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    if len(args.password) < 8:
        logger.error("password must be at least 8 characters")
        return 2

    email = args.email.strip().lower()
    with SessionLocal() as db:
        user = db.execute(select(User).where(User.email == email)).scalars().first()
        if user and not args.reset:
            logger.error("%s already exists (use --reset to change its password)", email)
            return 1

        if user:
            user.password = hash_password(args.password)
            user.role = UserRole.admin
            action = "reset"
        else:
            user = User(
                email=email,
                password=hash_password(args.password),
                firstname=args.first_name,
                lastname=args.last_name,
                role=UserRole.admin,
            )
            db.add(user)
            action = "created"
        db.commit()
        logger.info("admin %s: %s (id=%s)", action, email, user.id)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
