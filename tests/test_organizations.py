import pytest

from givetrack.models.org import (
    create_organization,
    delete_organization,
    get_organization,
    list_organizations,
    update_organization,
)
from givetrack.utils.errors import NotFoundError, ReferentialIntegrityError


def test_create_organization(app):
    org = create_organization("Red Cross", "https://example.com/logo.png")
    assert org["id"] > 0
    assert org["name"] == "Red Cross"
    assert org["logo_url"] == "https://example.com/logo.png"
    assert org["created_at"] is not None
    assert get_organization(org["id"]) == org


def test_create_organization_without_logo(app):
    org = create_organization("No Logo")
    assert org["logo_url"] is None


def test_list_organizations_in_insertion_order(app):
    assert list_organizations() == []
    names = ["First", "Second", "Third"]
    for n in names:
        create_organization(n)
    assert [o["name"] for o in list_organizations()] == names


def test_update_only_given_fields(make_org):
    org = make_org(name="Old", logo_url="https://example.com/a.png")

    renamed = update_organization(org["id"], name="New")
    assert renamed["name"] == "New"
    assert renamed["logo_url"] == "https://example.com/a.png"

    relogo = update_organization(org["id"], logo_url="https://example.com/b.png")
    assert relogo["name"] == "New"
    assert relogo["logo_url"] == "https://example.com/b.png"


def test_update_can_clear_logo(make_org):
    org = make_org(logo_url="https://example.com/a.png")
    assert update_organization(org["id"], logo_url=None)["logo_url"] is None


def test_update_without_fields_returns_current(make_org):
    org = make_org()
    assert update_organization(org["id"]) == org


def test_update_missing_organization(app):
    with pytest.raises(NotFoundError, match="not found"):
        update_organization(9999, name="Ghost")


def test_delete_organization(make_org):
    org = make_org()
    assert delete_organization(org["id"]) is True
    assert get_organization(org["id"]) is None


def test_delete_missing_organization_returns_false(app):
    assert delete_organization(9999) is False


def test_delete_organization_with_campaigns_is_blocked(make_org, make_campaign):
    org = make_org()
    make_campaign(organization_id=org["id"])
    with pytest.raises(ReferentialIntegrityError):
        delete_organization(org["id"])
    assert get_organization(org["id"]) is not None
