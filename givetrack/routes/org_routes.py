from flask import Blueprint, current_app, jsonify, request

from givetrack.models.org import (
    create_organization,
    delete_organization,
    list_organizations,
    update_organization,
)
from givetrack.schemas import (
    IdRequest,
    OrganizationCreateRequest,
    OrganizationModel,
    OrganizationUpdateRequest,
    dump,
    parse,
)

orgs = Blueprint("orgs", __name__)


# POST /api/createOrganization  { name, logo_url }
@orgs.post("/api/createOrganization")
def create():
    body = parse(OrganizationCreateRequest, request.get_json(silent=True))
    org = create_organization(body.name, body.logo_url)
    current_app.logger.info("organization %s created", org["id"])
    return jsonify(dump(OrganizationModel, org)), 201


@orgs.get("/api/getOrganizations")
def list_all():
    return jsonify(dump(OrganizationModel, list_organizations())), 200


# POST /api/updateOrganization  { id, name?, logo_url? }
@orgs.post("/api/updateOrganization")
def update():
    body = parse(OrganizationUpdateRequest, request.get_json(silent=True))
    changes = body.model_dump(exclude_unset=True, exclude={"id"})
    org = update_organization(body.id, **changes)
    return jsonify(dump(OrganizationModel, org)), 200


# POST /api/deleteOrganization  { id }
@orgs.post("/api/deleteOrganization")
def delete():
    body = parse(IdRequest, request.get_json(silent=True))
    ok = delete_organization(body.id)
    if ok:
        current_app.logger.info("organization %s deleted", body.id)
    return jsonify({"success": ok}), 200
