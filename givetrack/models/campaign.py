from decimal import Decimal
from typing import Any

import sqlalchemy as sa
from sqlalchemy.exc import IntegrityError

from givetrack.models.org import organization_exists
from givetrack.models.tables import campaigns, donations, organizations, utcnow
from givetrack.utils.db import get_db_connection
from givetrack.utils.errors import NotFoundError, ReferentialIntegrityError
from givetrack.utils.money import to_decimal, to_number

_UNSET: Any = object()


def _campaign(row) -> dict[str, Any]:
    return {
        "id": row["id"],
        "name": row["name"],
        "description": row["description"],
        "target_amount": to_number(row["target_amount"]),
        "current_amount": to_number(row["current_amount"]),
        "organization_id": row["organization_id"],
        "is_active": bool(row["is_active"]),
        "created_at": row["created_at"],
        "updated_at": row["updated_at"],
    }


def create_campaign(
    *,
    name: str,
    target_amount,
    organization_id: int,
    description: str | None = None,
    is_active: bool = True,
) -> dict[str, Any]:
    now = utcnow()
    stmt = (
        sa.insert(campaigns)
        .values(
            name=name,
            description=description,
            target_amount=to_decimal(target_amount),
            current_amount=Decimal("0.00"),
            organization_id=organization_id,
            is_active=is_active,
            created_at=now,
            updated_at=now,
        )
        .returning(*campaigns.c)
    )
    with get_db_connection() as conn:
        # checked up front so callers get a clear error instead of an FK violation
        if not organization_exists(conn, organization_id):
            raise NotFoundError(
                f"Organization with id {organization_id} does not exist"
            )
        row = conn.execute(stmt).mappings().one()
    return _campaign(row)


def get_campaign(campaign_id: int) -> dict[str, Any] | None:
    stmt = sa.select(campaigns).where(campaigns.c.id == campaign_id)
    with get_db_connection() as conn:
        row = conn.execute(stmt).mappings().first()
    return _campaign(row) if row else None


def campaign_exists(conn, campaign_id: int) -> bool:
    stmt = sa.select(campaigns.c.id).where(campaigns.c.id == campaign_id)
    return conn.execute(stmt).first() is not None


def list_campaigns() -> list[dict[str, Any]]:
    stmt = sa.select(campaigns).order_by(campaigns.c.id.asc())
    with get_db_connection() as conn:
        rows = conn.execute(stmt).mappings().all()
    return [_campaign(r) for r in rows]


def update_campaign(
    campaign_id: int,
    *,
    name: str | None = None,
    description: str | None = _UNSET,
    target_amount=None,
    organization_id: int | None = None,
    is_active: bool | None = None,
) -> dict[str, Any]:
    values: dict[str, Any] = {}
    if name is not None:
        values["name"] = name
    if description is not _UNSET:
        values["description"] = description
    if target_amount is not None:
        values["target_amount"] = to_decimal(target_amount)
    if organization_id is not None:
        values["organization_id"] = organization_id
    if is_active is not None:
        values["is_active"] = is_active
    values["updated_at"] = utcnow()

    stmt = (
        sa.update(campaigns)
        .where(campaigns.c.id == campaign_id)
        .values(**values)
        .returning(*campaigns.c)
    )
    with get_db_connection() as conn:
        if organization_id is not None and not organization_exists(
            conn, organization_id
        ):
            raise NotFoundError(
                f"Organization with id {organization_id} does not exist"
            )
        row = conn.execute(stmt).mappings().first()

    if not row:
        raise NotFoundError(f"Campaign with id {campaign_id} not found")
    return _campaign(row)


def delete_campaign(campaign_id: int) -> bool:
    try:
        with get_db_connection() as conn:
            dependents = conn.execute(
                sa.select(sa.func.count())
                .select_from(donations)
                .where(donations.c.campaign_id == campaign_id)
            ).scalar_one()
            if dependents:
                raise ReferentialIntegrityError(
                    f"Campaign with id {campaign_id} still has {dependents} donation(s)"
                )
            res = conn.execute(sa.delete(campaigns).where(campaigns.c.id == campaign_id))
            return res.rowcount > 0
    except IntegrityError as e:
        raise ReferentialIntegrityError(
            f"Campaign with id {campaign_id} is still referenced"
        ) from e


def get_campaign_stats_row(campaign_id: int) -> dict[str, Any] | None:
    """
    Campaign joined with its organization name and the number of donation
    rows pointing at it (every payment status counts).
    """
    donor_count = (
        sa.select(sa.func.count(donations.c.id))
        .where(donations.c.campaign_id == campaigns.c.id)
        .scalar_subquery()
    )
    stmt = (
        sa.select(
            campaigns,
            organizations.c.name.label("organization_name"),
            donor_count.label("total_donors"),
        )
        .join(organizations, campaigns.c.organization_id == organizations.c.id)
        .where(campaigns.c.id == campaign_id)
    )
    with get_db_connection() as conn:
        row = conn.execute(stmt).mappings().first()
    if not row:
        return None
    out = _campaign(row)
    out["organization_name"] = row["organization_name"]
    out["total_donors"] = int(row["total_donors"] or 0)
    return out


def recompute_current_amount(conn, campaign_id: int) -> Decimal:
    """
    Sets campaigns.current_amount to SUM(amount) of its confirmed donations.
    Runs on the caller's connection so it commits with the status change.
    """
    total = conn.execute(
        sa.select(sa.func.coalesce(sa.func.sum(donations.c.amount), 0)).where(
            donations.c.campaign_id == campaign_id,
            donations.c.payment_status == "confirmed",
        )
    ).scalar_one()
    total = to_decimal(total)
    conn.execute(
        sa.update(campaigns)
        .where(campaigns.c.id == campaign_id)
        .values(current_amount=total, updated_at=utcnow())
    )
    return total
