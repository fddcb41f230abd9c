from flask import Blueprint, Response, jsonify
from prometheus_client import REGISTRY, generate_latest, CONTENT_TYPE_LATEST

from givetrack.models.tables import utcnow

core = Blueprint("core", __name__)


@core.get("/")
def root():
    return jsonify({"service": "givetrack-api", "ok": True})


@core.get("/api/healthcheck")
def healthcheck():
    return jsonify({"status": "ok", "timestamp": utcnow().isoformat()})


@core.get("/api")
def api_index():
    return jsonify(
        {
            "queries": [
                "getOrganizations",
                "getCampaigns",
                "getCampaignWithStats",
                "getLatestDonors",
                "searchDonors",
                "getAllDonations",
            ],
            "mutations": [
                "createOrganization",
                "updateOrganization",
                "deleteOrganization",
                "createCampaign",
                "updateCampaign",
                "deleteCampaign",
                "createDonation",
                "updateDonation",
            ],
        }
    )


@core.get("/admin/metrics")
def metrics():
    """Prometheus metrics endpoint."""
    return Response(generate_latest(REGISTRY), mimetype=CONTENT_TYPE_LATEST)
