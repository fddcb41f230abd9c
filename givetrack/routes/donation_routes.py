from flask import Blueprint, jsonify, request

from givetrack.schemas import (
    DonationCreateRequest,
    DonationModel,
    DonationUpdateRequest,
    LatestDonorsQuery,
    SearchDonorsQuery,
    dump,
    parse,
)
from givetrack.services.donation_service import (
    create_donation,
    get_all_donations,
    get_latest_donors,
    search_donors,
    update_donation,
)
from givetrack.utils.rate_limit import rate_limited

donations_bp = Blueprint("donations", __name__)


# public donation form
@donations_bp.post("/api/createDonation")
@rate_limited("RATE_LIMIT_DONATIONS_PER_MINUTE", 30, key_prefix="donations")
def create():
    body = parse(DonationCreateRequest, request.get_json(silent=True))
    donation = create_donation(body.model_dump())
    return jsonify(dump(DonationModel, donation)), 201


# GET /api/getLatestDonors?campaign_id=...&limit=5
@donations_bp.get("/api/getLatestDonors")
def latest():
    q = parse(LatestDonorsQuery, request.args.to_dict())
    return jsonify(dump(DonationModel, get_latest_donors(q.campaign_id, q.limit))), 200


# GET /api/searchDonors?query=...&campaign_id=...
@donations_bp.get("/api/searchDonors")
def search():
    q = parse(SearchDonorsQuery, request.args.to_dict())
    return jsonify(dump(DonationModel, search_donors(q.query, q.campaign_id))), 200


@donations_bp.get("/api/getAllDonations")
def list_all():
    return jsonify(dump(DonationModel, get_all_donations())), 200


# POST /api/updateDonation  { id, payment_status?, payment_proof_url? }
@donations_bp.post("/api/updateDonation")
def update():
    body = parse(DonationUpdateRequest, request.get_json(silent=True))
    changes = body.model_dump(exclude_unset=True, exclude={"id"})
    donation = update_donation(body.id, **changes)
    return jsonify(dump(DonationModel, donation)), 200
