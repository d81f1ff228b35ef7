"""Seed a demo admin user, profile, job history and certifications."""

from __future__ import annotations

import argparse
import os
from datetime import datetime
from typing import Iterable, Optional

from sqlalchemy import create_engine, delete
from sqlalchemy.orm import Session

try:  # pragma: no cover - defensive import setup
    from portfolio.models import Base, Certification, JobHistory, Profile, User
    from portfolio.security import create_user, get_user_by_email
except ModuleNotFoundError:  # pragma: no cover - ensure repo root on path
    import sys
    from pathlib import Path

    repo_root = Path(__file__).resolve().parents[1]
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))

    from portfolio.models import Base, Certification, JobHistory, Profile, User
    from portfolio.security import create_user, get_user_by_email


DEMO_EMAIL = "admin@example.com"
DEMO_PASSWORD = "password123"


def _session_from_env() -> Session:
    """Create a session using the ``DATABASE_URL`` environment variable."""

    engine = create_engine(os.getenv("DATABASE_URL", "sqlite:///portfolio.db"))
    Base.metadata.create_all(engine)
    return Session(engine)


def reset_content(session: Session) -> None:
    for model in (Certification, JobHistory, Profile, User):
        session.execute(delete(model))
    session.flush()


def seed_demo_data(session: Session, *, password: str = DEMO_PASSWORD) -> None:
    """Insert demo records that don't exist yet."""

    if get_user_by_email(session, DEMO_EMAIL) is None:
        create_user(session, DEMO_EMAIL, password, name="Admin")

    if session.query(Profile).first() is None:
        session.add(
            Profile(
                name="Jane Doe",
                title="Senior Software Engineer & Tech Lead",
                summary="Software engineer with 8+ years of experience building scalable web applications.",
                bio="Full-stack developer focused on clean code, mentoring and pragmatic architecture.",
                email="jane.doe@example.com",
                phone="+1 (555) 123-4567",
                location="San Francisco, CA",
                linkedin="https://linkedin.com/in/janedoe",
                profile_image="/static/images/profile.jpg",
            )
        )

    jobs = [
        JobHistory(
            company="TechCorp Solutions",
            position="Senior Software Engineer & Tech Lead",
            start_date=datetime(2021, 3, 1),
            current=True,
            description="Led a team of 6 developers building a microservices e-commerce platform.",
            order=1,
        ),
        JobHistory(
            company="Digital Innovation Labs",
            position="Full Stack Developer",
            start_date=datetime(2018, 6, 1),
            end_date=datetime(2021, 2, 28),
            description="Built client-facing web applications, REST APIs and GraphQL endpoints.",
            order=2,
        ),
        JobHistory(
            company="StartupXYZ",
            position="Junior Software Developer",
            start_date=datetime(2016, 1, 15),
            end_date=datetime(2018, 5, 31),
            description="Shipped features for the company's SaaS product.",
            order=3,
        ),
    ]
    for job in jobs:
        exists = session.query(JobHistory).filter_by(company=job.company, position=job.position).first()
        if not exists:
            session.add(job)

    certifications = [
        Certification(
            name="AWS Certified Solutions Architect - Professional",
            issuer="Amazon Web Services",
            issue_date=datetime(2023, 5, 15),
            expiry_date=datetime(2026, 5, 15),
            credential_id="AWS-PSA-12345",
            credential_url="https://aws.amazon.com/verification",
            order=1,
        ),
        Certification(
            name="Certified Kubernetes Administrator (CKA)",
            issuer="Cloud Native Computing Foundation",
            issue_date=datetime(2022, 11, 20),
            expiry_date=datetime(2025, 11, 20),
            credential_id="CKA-2022-456789",
            credential_url="https://www.cncf.io/certification/cka/",
            order=2,
        ),
        Certification(
            name="Professional Scrum Master I (PSM I)",
            issuer="Scrum.org",
            issue_date=datetime(2021, 8, 10),
            credential_id="PSM-2021-789012",
            credential_url="https://www.scrum.org/certificates",
            order=3,
        ),
    ]
    for certification in certifications:
        exists = session.query(Certification).filter_by(name=certification.name).first()
        if not exists:
            session.add(certification)

    session.commit()


def main(argv: Optional[Iterable[str]] = None, *, session: Session | None = None) -> None:
    parser = argparse.ArgumentParser(description="Seed demo portfolio content")
    parser.add_argument("--reset", action="store_true", help="Delete existing content first")
    parser.add_argument("--password", default=DEMO_PASSWORD, help="Password for the demo admin user")
    args = parser.parse_args(list(argv) if argv is not None else None)

    close = False
    if session is None:
        session = _session_from_env()
        close = True

    try:
        if args.reset:
            reset_content(session)
        seed_demo_data(session, password=args.password)
    finally:
        if close:
            session.close()


if __name__ == "__main__":  # pragma: no cover
    main()
