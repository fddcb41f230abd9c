#!/usr/bin/env python3
"""
Seed database with demo data.

Usage: poetry run python scripts/seed.py [--force]
Requires: migrations applied (poetry run alembic upgrade head)
"""
import os
import sys

# Ensure givetrack is on path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import sqlalchemy as sa

from givetrack.models.campaign import create_campaign
from givetrack.models.org import create_organization
from givetrack.models.tables import campaigns, donations, organizations
from givetrack.services.donation_service import create_donation, update_donation
from givetrack.utils.db import get_db_connection

DEMO_ORG = "Demo Org"


def seed():
    with get_db_connection() as conn:
        exists = conn.execute(
            sa.select(organizations.c.id).where(organizations.c.name == DEMO_ORG)
        ).first()
    if exists:
        print(f"Already seeded ({DEMO_ORG!r} exists). Use --force to re-seed.")
        return

    org = create_organization(DEMO_ORG, "https://example.com/logo.png")

    school = create_campaign(
        name="Help Build the School",
        description="Classrooms and a library for 300 children",
        target_amount=10000,
        organization_id=org["id"],
    )
    create_campaign(
        name="Community Garden",
        description=None,
        target_amount=5000,
        organization_id=org["id"],
        is_active=False,
    )
    create_campaign(
        name="Emergency Relief Fund",
        description="Food and shelter after the floods",
        target_amount=25000,
        organization_id=org["id"],
    )

    pledges = [
        ("John Smith", "john@example.com", 25, "confirmed"),
        ("Jane Doe", "jane@example.com", 50, "confirmed"),
        ("Bob Johnson", None, 10, "pending"),
        ("Alice Brown", "alice@example.com", 100, "failed"),
    ]
    for name, email, amount, status in pledges:
        d = create_donation(
            {
                "campaign_id": school["id"],
                "donor_name": name,
                "donor_email": email,
                "amount": amount,
                "message": "Good luck!",
            }
        )
        if status != "pending":
            update_donation(d["id"], payment_status=status)

    print("Seeded successfully.")
    print(f"  Organization: {DEMO_ORG} (id={org['id']})")
    print("  Campaigns: 3 (active, inactive, active)")
    print("  Donations: 4 on first campaign (2 confirmed)")


def force_seed():
    """Clear demo data and re-seed. Use with caution."""
    with get_db_connection() as conn:
        org_ids = sa.select(organizations.c.id).where(organizations.c.name == DEMO_ORG)
        camp_ids = sa.select(campaigns.c.id).where(campaigns.c.organization_id.in_(org_ids))
        conn.execute(sa.delete(donations).where(donations.c.campaign_id.in_(camp_ids)))
        conn.execute(sa.delete(campaigns).where(campaigns.c.organization_id.in_(org_ids)))
        conn.execute(sa.delete(organizations).where(organizations.c.name == DEMO_ORG))
    print("Cleared demo data. Seeding...")
    seed()


if __name__ == "__main__":
    if "--force" in sys.argv:
        force_seed()
    else:
        seed()
