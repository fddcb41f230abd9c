"""
Donation lifecycle.

payment_status moves freely between pending, confirmed and failed; there is
no terminal state. The only rules are about what rides along with a status:

  * entering "confirmed" stamps confirmed_at with the current time,
    even if the donation was already confirmed;
  * "pending" or "failed" clear confirmed_at;
  * any status write recomputes the campaign's current_amount from the
    confirmed donations, so progress follows confirmations.
"""

import logging
from datetime import datetime
from typing import Any

from givetrack.models.donation import (
    create_donation as insert_donation,
    latest_confirmed_for_campaign,
    list_donations,
    search_by_donor_name,
    update_donation as write_donation,
)
from givetrack.models.tables import PAYMENT_STATUSES, utcnow
from givetrack.utils.errors import ValidationError
from givetrack.utils.metrics import DONATIONS_CREATED, PAYMENT_STATUS_CHANGES

logger = logging.getLogger(__name__)

_UNSET: Any = object()


def _now() -> datetime:
    return utcnow()


def status_change_values(status: str, now: datetime) -> dict[str, Any]:
    if status not in PAYMENT_STATUSES:
        raise ValidationError(f"unknown payment status {status!r}")
    return {
        "payment_status": status,
        "confirmed_at": now if status == "confirmed" else None,
    }


def create_donation(data: dict[str, Any]) -> dict[str, Any]:
    donation = insert_donation(**data)
    DONATIONS_CREATED.inc()
    logger.info(
        "donation %s pledged to campaign %s", donation["id"], donation["campaign_id"]
    )
    return donation


def update_donation(
    donation_id: int,
    *,
    payment_status: str | None = None,
    payment_proof_url: str | None = _UNSET,
) -> dict[str, Any]:
    values: dict[str, Any] = {}
    if payment_status is not None:
        values.update(status_change_values(payment_status, _now()))
    if payment_proof_url is not _UNSET:
        values["payment_proof_url"] = payment_proof_url

    donation = write_donation(
        donation_id, values, recompute_campaign=payment_status is not None
    )
    if payment_status is not None:
        PAYMENT_STATUS_CHANGES.labels(status=payment_status).inc()
        logger.info("donation %s marked %s", donation_id, payment_status)
    return donation


def get_latest_donors(campaign_id: int, limit: int = 5) -> list[dict[str, Any]]:
    return latest_confirmed_for_campaign(campaign_id, limit)


def search_donors(query: str, campaign_id: int | None = None) -> list[dict[str, Any]]:
    return search_by_donor_name(query, campaign_id)


def get_all_donations() -> list[dict[str, Any]]:
    return list_donations()
