"""
Table metadata shared by the model functions, `flask init-db` and the tests.

Production databases are built by the Alembic migrations; keep the two in step.
"""

from datetime import datetime, timezone

import sqlalchemy as sa

PAYMENT_STATUSES = ("pending", "confirmed", "failed")

metadata = sa.MetaData()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


organizations = sa.Table(
    "organizations",
    metadata,
    sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
    sa.Column("name", sa.Text, nullable=False),
    sa.Column("logo_url", sa.Text, nullable=True),
    sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, default=utcnow),
)

campaigns = sa.Table(
    "campaigns",
    metadata,
    sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
    sa.Column("name", sa.Text, nullable=False),
    sa.Column("description", sa.Text, nullable=True),
    sa.Column("target_amount", sa.Numeric(15, 2), nullable=False),
    sa.Column("current_amount", sa.Numeric(15, 2), nullable=False, default=0),
    sa.Column(
        "organization_id",
        sa.Integer,
        sa.ForeignKey("organizations.id"),
        nullable=False,
        index=True,
    ),
    sa.Column("is_active", sa.Boolean, nullable=False, default=True),
    sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, default=utcnow),
    sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, default=utcnow),
    sa.CheckConstraint("target_amount > 0", name="ck_campaigns_target_positive"),
)

donations = sa.Table(
    "donations",
    metadata,
    sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
    sa.Column(
        "campaign_id",
        sa.Integer,
        sa.ForeignKey("campaigns.id"),
        nullable=False,
    ),
    sa.Column("donor_name", sa.Text, nullable=False),
    sa.Column("donor_email", sa.Text, nullable=True),
    sa.Column("donor_phone", sa.Text, nullable=True),
    sa.Column("amount", sa.Numeric(15, 2), nullable=False),
    sa.Column("message", sa.Text, nullable=True),
    sa.Column(
        "payment_status",
        sa.Enum(*PAYMENT_STATUSES, name="payment_status"),
        nullable=False,
        default="pending",
    ),
    sa.Column("payment_proof_url", sa.Text, nullable=True),
    sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, default=utcnow),
    sa.Column("confirmed_at", sa.DateTime(timezone=True), nullable=True),
    sa.Index("idx_donations_campaign", "campaign_id", "created_at"),
    sa.Index("idx_donations_confirmed", "campaign_id", "confirmed_at"),
    sa.CheckConstraint("amount > 0", name="ck_donations_amount_positive"),
    sa.CheckConstraint(
        "(payment_status = 'confirmed') = (confirmed_at IS NOT NULL)",
        name="ck_donations_confirmed_at",
    ),
)
