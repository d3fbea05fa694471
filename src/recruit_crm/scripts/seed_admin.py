#!/usr/bin/env python3
"""Seed the database with an organization and its admin profile."""

import argparse
import sys

import structlog

from recruit_crm.auth.utils import create_profile, get_password_hash
from recruit_crm.core.database import db_manager, init_db
from recruit_crm.core.logging import configure_logging
from recruit_crm.models.organization import Organization
from recruit_crm.models.profile import Profile

logger = structlog.get_logger(__name__)


def seed_admin(organization_name: str, email: str, password: str) -> None:
    """Create the organization and admin profile, or reset the admin password."""
    with db_manager.get_session() as session:
        organization = session.query(Organization).filter(Organization.name == organization_name).first()
        if not organization:
            organization = Organization(name=organization_name)
            session.add(organization)
            session.flush()
            print(f"Created organization: {organization.name}")
        else:
            print(f"Organization {organization.name} already exists")

        profile = session.query(Profile).filter(Profile.email == email).first()
        if not profile:
            create_profile(
                session,
                email=email,
                password=password,
                organization_id=organization.id,
                first_name="System",
                last_name="Admin",
                role="admin",
            )
            print(f"Created profile: {email}")
        else:
            print(f"Profile {email} already exists - updating password")
            profile.hashed_password = get_password_hash(password)
            profile.organization_id = profile.organization_id or organization.id


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--organization", default="Acme Recruiting")
    parser.add_argument("--email", default="admin@example.com")
    parser.add_argument("--password", required=True)
    args = parser.parse_args()

    configure_logging()
    try:
        init_db()
        seed_admin(args.organization, args.email, args.password)
    except Exception as e:
        logger.error("Seeding failed", error=str(e))
        print(f"Error seeding database: {e}")
        sys.exit(1)
    finally:
        db_manager.close()


if __name__ == "__main__":
    main()
