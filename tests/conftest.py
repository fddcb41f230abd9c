"""Shared fixtures: a fresh SQLite database per test, plus small factories."""

from datetime import datetime, timedelta, timezone
from itertools import count

import pytest

from givetrack import create_app
from givetrack.models.campaign import create_campaign
from givetrack.models.org import create_organization
from givetrack.services.donation_service import create_donation
from givetrack.utils import rate_limit
from givetrack.utils.db import get_engine, init_db


@pytest.fixture
def app(tmp_path):
    app = create_app(
        {
            "TESTING": True,
            "DATABASE_URL": f"sqlite:///{tmp_path / 'givetrack.db'}",
            "RATE_LIMIT_ENABLED": False,
            "LOG_LEVEL": "WARNING",
        }
    )
    init_db()
    rate_limit.reset()
    yield app
    get_engine().dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def clock(monkeypatch):
    """Makes confirmation timestamps strictly increasing, one minute apart."""
    start = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
    ticks = count()

    def _now():
        return start + timedelta(minutes=next(ticks))

    monkeypatch.setattr("givetrack.services.donation_service._now", _now)
    return _now


@pytest.fixture
def make_org(app):
    def _make(name="Helping Hands", logo_url=None):
        return create_organization(name, logo_url)

    return _make


@pytest.fixture
def make_campaign(app, make_org):
    def _make(organization_id=None, name="School Build", target_amount=1000, **kw):
        if organization_id is None:
            organization_id = make_org()["id"]
        return create_campaign(
            name=name,
            target_amount=target_amount,
            organization_id=organization_id,
            **kw,
        )

    return _make


@pytest.fixture
def make_donation(app, make_campaign):
    def _make(campaign_id=None, donor_name="John Doe", amount=50, **kw):
        if campaign_id is None:
            campaign_id = make_campaign()["id"]
        return create_donation(
            {"campaign_id": campaign_id, "donor_name": donor_name, "amount": amount, **kw}
        )

    return _make
