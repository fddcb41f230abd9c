from typing import Any

import sqlalchemy as sa

from givetrack.models.campaign import campaign_exists, recompute_current_amount
from givetrack.models.tables import donations, utcnow
from givetrack.utils.db import get_db_connection
from givetrack.utils.errors import NotFoundError
from givetrack.utils.money import to_decimal, to_number


def _donation(row) -> dict[str, Any]:
    return {
        "id": row["id"],
        "campaign_id": row["campaign_id"],
        "donor_name": row["donor_name"],
        "donor_email": row["donor_email"],
        "donor_phone": row["donor_phone"],
        "amount": to_number(row["amount"]),
        "message": row["message"],
        "payment_status": row["payment_status"],
        "payment_proof_url": row["payment_proof_url"],
        "created_at": row["created_at"],
        "confirmed_at": row["confirmed_at"],
    }


def create_donation(
    *,
    campaign_id: int,
    donor_name: str,
    amount,
    donor_email: str | None = None,
    donor_phone: str | None = None,
    message: str | None = None,
) -> dict[str, Any]:
    stmt = (
        sa.insert(donations)
        .values(
            campaign_id=campaign_id,
            donor_name=donor_name,
            donor_email=donor_email,
            donor_phone=donor_phone,
            amount=to_decimal(amount),
            message=message,
            payment_status="pending",
            payment_proof_url=None,
            created_at=utcnow(),
            confirmed_at=None,
        )
        .returning(*donations.c)
    )
    with get_db_connection() as conn:
        if not campaign_exists(conn, campaign_id):
            raise NotFoundError(f"Campaign with id {campaign_id} does not exist")
        row = conn.execute(stmt).mappings().one()
    return _donation(row)


def get_donation(donation_id: int) -> dict[str, Any] | None:
    stmt = sa.select(donations).where(donations.c.id == donation_id)
    with get_db_connection() as conn:
        row = conn.execute(stmt).mappings().first()
    return _donation(row) if row else None


def list_donations() -> list[dict[str, Any]]:
    stmt = sa.select(donations).order_by(donations.c.id.asc())
    with get_db_connection() as conn:
        rows = conn.execute(stmt).mappings().all()
    return [_donation(r) for r in rows]


def update_donation(
    donation_id: int, values: dict[str, Any], *, recompute_campaign: bool = False
) -> dict[str, Any]:
    """
    Writes `values` onto one donation. With recompute_campaign the owning
    campaign's current_amount is refreshed inside the same transaction.
    """
    with get_db_connection() as conn:
        if values:
            stmt = (
                sa.update(donations)
                .where(donations.c.id == donation_id)
                .values(**values)
                .returning(*donations.c)
            )
        else:
            stmt = sa.select(donations).where(donations.c.id == donation_id)
        row = conn.execute(stmt).mappings().first()
        if not row:
            raise NotFoundError(f"Donation with id {donation_id} not found")
        if recompute_campaign:
            recompute_current_amount(conn, row["campaign_id"])
    return _donation(row)


def latest_confirmed_for_campaign(campaign_id: int, limit: int = 5) -> list[dict]:
    stmt = (
        sa.select(donations)
        .where(
            donations.c.campaign_id == campaign_id,
            donations.c.payment_status == "confirmed",
            donations.c.confirmed_at.is_not(None),
        )
        .order_by(donations.c.confirmed_at.desc(), donations.c.id.desc())
        .limit(limit)
    )
    with get_db_connection() as conn:
        rows = conn.execute(stmt).mappings().all()
    return [_donation(r) for r in rows]


def _like_escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def search_by_donor_name(query: str, campaign_id: int | None = None) -> list[dict]:
    conds = [donations.c.donor_name.ilike(f"%{_like_escape(query)}%", escape="\\")]
    if campaign_id is not None:
        conds.append(donations.c.campaign_id == campaign_id)
    stmt = sa.select(donations).where(*conds).order_by(donations.c.id.asc())
    with get_db_connection() as conn:
        rows = conn.execute(stmt).mappings().all()
    return [_donation(r) for r in rows]
