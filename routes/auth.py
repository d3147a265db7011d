from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import create_access_token, jwt_required
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from extensions import db
from lifecycle import ApiError, DuplicateValue, NotFound, ValidationFailed
from models import RoleEnum, User
from routes.crud import authorize, current_auth
from schemas import UserSchema

bp = Blueprint("auth", __name__, url_prefix="/api/auth")

user_schema = UserSchema()


@bp.post("/register")
@jwt_required()  # only admins can register
def register():
    authorize("users", "create")

    data = request.get_json(silent=True) or {}
    email = (data.get("email") or "").strip().lower()
    name = (data.get("name") or "").strip()
    role = data.get("role")
    password = data.get("password") or ""

    for key, value in (("name", name), ("email", email), ("role", role), ("password", password)):
        if not value:
            raise ValidationFailed(f"{key} is required", f"MISSING_{key.upper()}")

    try:
        role_enum = RoleEnum(role)
    except ValueError:
        raise ValidationFailed("Invalid role", "INVALID_ROLE") from None

    if len(password) < 8:
        raise ValidationFailed("Password must be at least 8 characters", "INVALID_PASSWORD")

    u = User(name=name, email=email, role=role_enum, active=True)
    u.set_password(password)
    db.session.add(u)
    try:
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        raise DuplicateValue("A user with this email already exists", "DUPLICATE_EMAIL") from exc

    current_app.logger.info({"event": "user_registered", "id": u.id, "role": role_enum.value})
    return jsonify(user_schema.dump(u)), 201


@bp.post("/login")
def login():
    payload = request.get_json(silent=True)
    if not payload:
        payload = request.form.to_dict() if request.form else {}

    email = (payload.get("email") or "").strip().lower()
    password = payload.get("password") or ""

    if not email or not password:
        raise ValidationFailed("Email and password are required", "MISSING_CREDENTIALS")

    u = User.query.filter(func.lower(User.email) == email).first()
    if not u or not u.check_password(password) or not u.active:
        current_app.logger.warning({"event": "login_failed", "email": email})
        raise ApiError("Invalid email or password", "INVALID_CREDENTIALS", 401)

    token = create_access_token(identity=str(u.id), additional_claims={"role": u.role.value})
    return jsonify(access_token=token, user=user_schema.dump(u))


@bp.get("/me")
@jwt_required()
def me():
    auth = current_auth()
    u = db.session.get(User, auth.user_id) if auth.user_id is not None else None
    if u is None:
        raise NotFound("User not found", "USER_NOT_FOUND")
    return jsonify(user=user_schema.dump(u), permissions=auth.permission_list())
