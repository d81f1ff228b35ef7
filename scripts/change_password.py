"""Change the password of an existing back-office user."""

from __future__ import annotations

import argparse
import getpass
import os
from typing import Iterable, Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import Session

try:  # pragma: no cover - defensive import setup
    from portfolio.models import Base
    from portfolio.security import set_password
except ModuleNotFoundError:  # pragma: no cover - ensure repo root on path
    import sys
    from pathlib import Path

    repo_root = Path(__file__).resolve().parents[1]
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))

    from portfolio.models import Base
    from portfolio.security import set_password


def _session_from_env() -> Session:
    engine = create_engine(os.getenv("DATABASE_URL", "sqlite:///portfolio.db"))
    Base.metadata.create_all(engine)
    return Session(engine)


def main(argv: Optional[Iterable[str]] = None, *, session: Session | None = None) -> int:
    parser = argparse.ArgumentParser(description="Change a back-office user's password")
    parser.add_argument("email")
    parser.add_argument("--password", help="New password (prompted when omitted)")
    args = parser.parse_args(list(argv) if argv is not None else None)

    password = args.password or getpass.getpass("New password: ")

    close = False
    if session is None:
        session = _session_from_env()
        close = True

    try:
        try:
            set_password(session, args.email, password)
        except (LookupError, ValueError) as exc:
            session.rollback()
            print(f"Error: {exc}")
            return 1
        session.commit()
        print(f"Password updated for {args.email}")
        return 0
    finally:
        if close:
            session.close()


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
