"""Register the standard REST surface for a :class:`lifecycle.Resource`.

Every collection gets the same five handlers::

    GET    /api/<collection>            list, or one row with ?id=
    GET    /api/<collection>/<id>
    POST   /api/<collection>
    PUT    /api/<collection>?id=<n>     and /api/<collection>/<id>
    DELETE /api/<collection>?id=<n>     and /api/<collection>/<id>

Handlers only translate HTTP into calls on the lifecycle layer; the
:class:`AuthContext` built here is passed down explicitly.
"""

from __future__ import annotations

from typing import Optional

from flask import Blueprint, jsonify, request
from flask_jwt_extended import get_jwt, get_jwt_identity, jwt_required

from lifecycle import (
    AuthContext,
    Resource,
    create_entity,
    delete_entity,
    fetch_entity,
    list_entities,
    update_entity,
)
from lifecycle.listing import camel
from models import RoleEnum


def current_auth() -> AuthContext:
    """Build the capability object for the verified JWT of this request."""

    claims = get_jwt()
    try:
        role: Optional[RoleEnum] = RoleEnum(claims.get("role"))
    except (ValueError, TypeError):
        role = None

    identity = get_jwt_identity()
    try:
        user_id = int(identity) if identity is not None else None
    except (TypeError, ValueError):
        user_id = None

    return AuthContext.for_role(
        user_id,
        role,
        ip_address=request.remote_addr,
        user_agent=request.headers.get("User-Agent"),
    )


def authorize(resource: str, action: str) -> AuthContext:
    auth = current_auth()
    auth.require(resource, action)
    return auth


def _row_id(raw_id: Optional[str]) -> Optional[str]:
    return raw_id if raw_id is not None else request.args.get("id")


def register_crud(bp: Blueprint, resource: Resource, *, read_only: bool = False) -> None:
    base = f"/{resource.collection}"
    endpoint = resource.collection.replace("-", "_")
    entity_key = camel(resource.name)

    @jwt_required()
    def list_or_get():
        authorize(resource.permission, "view")
        if "id" in request.args:
            return jsonify(resource.dump(fetch_entity(resource, request.args.get("id"))))
        page = list_entities(resource, request.args)
        return jsonify({"data": resource.schema(many=True).dump(page.items), "meta": page.meta()})

    @jwt_required()
    def get_one(raw_id):
        authorize(resource.permission, "view")
        return jsonify(resource.dump(fetch_entity(resource, raw_id)))

    bp.add_url_rule(base, f"list_{endpoint}", list_or_get, methods=["GET"])
    bp.add_url_rule(f"{base}/<raw_id>", f"get_{endpoint}", get_one, methods=["GET"])

    if read_only:
        return

    @jwt_required()
    def create():
        auth = authorize(resource.permission, "create")
        row = create_entity(resource, request.get_json(silent=True), auth)
        return jsonify(resource.dump(row)), 201

    @jwt_required()
    def update(raw_id=None):
        auth = authorize(resource.permission, "edit")
        row = update_entity(resource, _row_id(raw_id), request.get_json(silent=True), auth)
        return jsonify(resource.dump(row))

    @jwt_required()
    def delete(raw_id=None):
        auth = authorize(resource.permission, "delete")
        old = delete_entity(resource, _row_id(raw_id), auth)
        return jsonify({"message": f"{resource.label} deleted successfully", entity_key: old})

    bp.add_url_rule(base, f"create_{endpoint}", create, methods=["POST"])
    bp.add_url_rule(base, f"update_{endpoint}", update, methods=["PUT"])
    bp.add_url_rule(f"{base}/<raw_id>", f"update_{endpoint}_by_path", update, methods=["PUT"])
    bp.add_url_rule(base, f"delete_{endpoint}", delete, methods=["DELETE"])
    bp.add_url_rule(f"{base}/<raw_id>", f"delete_{endpoint}_by_path", delete, methods=["DELETE"])
