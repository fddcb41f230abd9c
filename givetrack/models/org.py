from typing import Any

import sqlalchemy as sa
from sqlalchemy.exc import IntegrityError

from givetrack.models.tables import campaigns, organizations
from givetrack.utils.db import get_db_connection
from givetrack.utils.errors import NotFoundError, ReferentialIntegrityError

_UNSET: Any = object()


def _org(row) -> dict[str, Any]:
    return {
        "id": row["id"],
        "name": row["name"],
        "logo_url": row["logo_url"],
        "created_at": row["created_at"],
    }


def create_organization(name: str, logo_url: str | None = None) -> dict[str, Any]:
    stmt = (
        sa.insert(organizations)
        .values(name=name, logo_url=logo_url)
        .returning(*organizations.c)
    )
    with get_db_connection() as conn:
        row = conn.execute(stmt).mappings().one()
    return _org(row)


def get_organization(org_id: int) -> dict[str, Any] | None:
    stmt = sa.select(organizations).where(organizations.c.id == org_id)
    with get_db_connection() as conn:
        row = conn.execute(stmt).mappings().first()
    return _org(row) if row else None


def organization_exists(conn, org_id: int) -> bool:
    stmt = sa.select(organizations.c.id).where(organizations.c.id == org_id)
    return conn.execute(stmt).first() is not None


def list_organizations() -> list[dict[str, Any]]:
    stmt = sa.select(organizations).order_by(organizations.c.id.asc())
    with get_db_connection() as conn:
        rows = conn.execute(stmt).mappings().all()
    return [_org(r) for r in rows]


def update_organization(
    org_id: int, *, name: str | None = None, logo_url: str | None = _UNSET
) -> dict[str, Any]:
    """
    Only the given fields change. logo_url=None clears the logo;
    leaving it out keeps whatever is stored.
    """
    values: dict[str, Any] = {}
    if name is not None:
        values["name"] = name
    if logo_url is not _UNSET:
        values["logo_url"] = logo_url

    with get_db_connection() as conn:
        if values:
            stmt = (
                sa.update(organizations)
                .where(organizations.c.id == org_id)
                .values(**values)
                .returning(*organizations.c)
            )
        else:
            stmt = sa.select(organizations).where(organizations.c.id == org_id)
        row = conn.execute(stmt).mappings().first()

    if not row:
        raise NotFoundError(f"Organization with id {org_id} not found")
    return _org(row)


def delete_organization(org_id: int) -> bool:
    try:
        with get_db_connection() as conn:
            dependents = conn.execute(
                sa.select(sa.func.count())
                .select_from(campaigns)
                .where(campaigns.c.organization_id == org_id)
            ).scalar_one()
            if dependents:
                raise ReferentialIntegrityError(
                    f"Organization with id {org_id} still has {dependents} campaign(s)"
                )
            res = conn.execute(
                sa.delete(organizations).where(organizations.c.id == org_id)
            )
            return res.rowcount > 0
    except IntegrityError as e:
        raise ReferentialIntegrityError(
            f"Organization with id {org_id} is still referenced"
        ) from e
