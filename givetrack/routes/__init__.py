from .core_routes import core
from .org_routes import orgs
from .campaign_routes import campaigns
from .donation_routes import donations_bp

__all__ = ["core", "orgs", "campaigns", "donations_bp"]
