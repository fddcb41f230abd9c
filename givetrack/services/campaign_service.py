import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Any

from givetrack.models.campaign import (
    create_campaign as insert_campaign,
    delete_campaign as delete_campaign_by_id,
    get_campaign_stats_row,
    list_campaigns,
    update_campaign as update_campaign_data,
)
from givetrack.utils.money import to_decimal

logger = logging.getLogger(__name__)


def progress_percentage(current_amount, target_amount) -> int:
    """
    round(current / target * 100), half-up. Not capped at 100 so overfunded
    campaigns report e.g. 150. A target of zero or below gives 0.
    """
    target = to_decimal(target_amount)
    if target <= 0:
        return 0
    pct = to_decimal(current_amount) / target * 100
    return int(pct.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def create_campaign(data: dict[str, Any]) -> dict[str, Any]:
    camp = insert_campaign(**data)
    logger.info(
        "campaign %s created for organization %s", camp["id"], camp["organization_id"]
    )
    return camp


def get_campaigns() -> list[dict[str, Any]]:
    return list_campaigns()


def get_campaign_with_stats(campaign_id: int) -> dict[str, Any] | None:
    camp = get_campaign_stats_row(campaign_id)
    if camp is None:
        return None
    camp["progress_percentage"] = progress_percentage(
        camp["current_amount"], camp["target_amount"]
    )
    return camp


def update_campaign(campaign_id: int, data: dict[str, Any]) -> dict[str, Any]:
    camp = update_campaign_data(campaign_id, **data)
    logger.info("campaign %s updated (%s)", campaign_id, ", ".join(sorted(data)))
    return camp


def delete_campaign(campaign_id: int) -> bool:
    ok = delete_campaign_by_id(campaign_id)
    if ok:
        logger.info("campaign %s deleted", campaign_id)
    return ok
