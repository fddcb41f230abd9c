from flask import Blueprint, jsonify, request

from givetrack.schemas import (
    CampaignCreateRequest,
    CampaignModel,
    CampaignUpdateRequest,
    CampaignWithStatsModel,
    IdRequest,
    dump,
    parse,
)
from givetrack.services.campaign_service import (
    create_campaign,
    delete_campaign,
    get_campaign_with_stats,
    get_campaigns,
    update_campaign,
)

campaigns = Blueprint("campaigns", __name__)


# POST /api/createCampaign  { name, description, target_amount, organization_id, is_active? }
@campaigns.post("/api/createCampaign")
def create():
    body = parse(CampaignCreateRequest, request.get_json(silent=True))
    camp = create_campaign(body.model_dump())
    return jsonify(dump(CampaignModel, camp)), 201


@campaigns.get("/api/getCampaigns")
def list_all():
    return jsonify(dump(CampaignModel, get_campaigns())), 200


# GET /api/getCampaignWithStats?id=...
@campaigns.get("/api/getCampaignWithStats")
def with_stats():
    q = parse(IdRequest, request.args.to_dict())
    camp = get_campaign_with_stats(q.id)
    # a missing campaign is a normal answer here, not a 404
    return jsonify(dump(CampaignWithStatsModel, camp)), 200


# POST /api/updateCampaign  { id, name?, description?, target_amount?, organization_id?, is_active? }
@campaigns.post("/api/updateCampaign")
def update():
    body = parse(CampaignUpdateRequest, request.get_json(silent=True))
    changes = body.model_dump(exclude_unset=True, exclude={"id"})
    camp = update_campaign(body.id, changes)
    return jsonify(dump(CampaignModel, camp)), 200


# POST /api/deleteCampaign  { id }
@campaigns.post("/api/deleteCampaign")
def delete():
    body = parse(IdRequest, request.get_json(silent=True))
    return jsonify({"success": delete_campaign(body.id)}), 200
