import pytest

from givetrack.models.campaign import get_campaign, list_campaigns
from givetrack.services.campaign_service import (
    create_campaign,
    delete_campaign,
    update_campaign,
)
from givetrack.services.donation_service import update_donation
from givetrack.utils.errors import NotFoundError, ReferentialIntegrityError


def test_create_campaign(make_org):
    org = make_org()
    camp = create_campaign(
        {
            "name": "Clean Water",
            "description": "Wells for three villages",
            "target_amount": 5000.5,
            "organization_id": org["id"],
        }
    )
    assert camp["name"] == "Clean Water"
    assert camp["description"] == "Wells for three villages"
    assert camp["target_amount"] == 5000.5
    assert isinstance(camp["target_amount"], float)
    assert camp["current_amount"] == 0
    assert camp["organization_id"] == org["id"]
    assert camp["is_active"] is True
    assert camp["created_at"] is not None
    assert camp["updated_at"] is not None
    assert get_campaign(camp["id"]) == camp


def test_create_inactive_campaign_without_description(make_org):
    org = make_org()
    camp = create_campaign(
        {
            "name": "Later",
            "description": None,
            "target_amount": 10,
            "organization_id": org["id"],
            "is_active": False,
        }
    )
    assert camp["description"] is None
    assert camp["is_active"] is False


def test_create_campaign_for_missing_organization(app):
    with pytest.raises(NotFoundError, match="Organization with id 99999 does not exist"):
        create_campaign({"name": "x", "target_amount": 10, "organization_id": 99999})
    assert list_campaigns() == []


def test_list_campaigns_across_organizations(make_org, make_campaign):
    a, b = make_org(name="A"), make_org(name="B")
    make_campaign(organization_id=a["id"], name="one")
    make_campaign(organization_id=b["id"], name="two")
    make_campaign(organization_id=a["id"], name="three")
    camps = list_campaigns()
    assert [c["name"] for c in camps] == ["one", "two", "three"]
    assert [c["organization_id"] for c in camps] == [a["id"], b["id"], a["id"]]


def test_update_campaign_partial(make_campaign):
    camp = make_campaign(name="Old", description="keep me")
    updated = update_campaign(camp["id"], {"name": "New", "target_amount": 2500})
    assert updated["name"] == "New"
    assert updated["target_amount"] == 2500
    assert updated["description"] == "keep me"
    assert updated["is_active"] is True
    assert updated["updated_at"] >= camp["updated_at"]


def test_update_campaign_description_to_null(make_campaign):
    camp = make_campaign(description="something")
    assert update_campaign(camp["id"], {"description": None})["description"] is None


def test_update_campaign_moves_to_other_organization(make_org, make_campaign):
    camp = make_campaign()
    other = make_org(name="Other")
    moved = update_campaign(camp["id"], {"organization_id": other["id"]})
    assert moved["organization_id"] == other["id"]


def test_update_campaign_to_missing_organization(make_campaign):
    camp = make_campaign()
    with pytest.raises(NotFoundError):
        update_campaign(camp["id"], {"organization_id": 99999})
    assert get_campaign(camp["id"])["organization_id"] == camp["organization_id"]


def test_update_missing_campaign(app):
    with pytest.raises(NotFoundError, match="not found"):
        update_campaign(99999, {"name": "Ghost"})


def test_update_preserves_current_amount(make_campaign, make_donation):
    camp = make_campaign(target_amount=1000)
    d = make_donation(campaign_id=camp["id"], amount=300)
    update_donation(d["id"], payment_status="confirmed")

    updated = update_campaign(camp["id"], {"name": "Renamed", "is_active": False})
    assert updated["current_amount"] == 300
    assert updated["is_active"] is False


def test_delete_campaign(make_campaign):
    keep = make_campaign(name="keep")
    gone = make_campaign(name="gone")
    assert delete_campaign(gone["id"]) is True
    assert get_campaign(gone["id"]) is None
    assert get_campaign(keep["id"]) is not None


def test_delete_missing_campaign_returns_false(app):
    assert delete_campaign(99999) is False


def test_delete_campaign_with_donations_is_blocked(make_campaign, make_donation):
    camp = make_campaign()
    make_donation(campaign_id=camp["id"])
    with pytest.raises(ReferentialIntegrityError):
        delete_campaign(camp["id"])
    assert get_campaign(camp["id"]) is not None
