import logging
import os
from typing import Optional, Tuple

import click
from alembic import command
from alembic.config import Config as AlembicConfig
from alembic.script import ScriptDirectory
from flask import Flask, jsonify
from sqlalchemy import create_engine, func, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import OperationalError, ProgrammingError
from werkzeug.exceptions import HTTPException

from config import Config, current_database_url
from extensions import db, migrate, jwt
from lifecycle import ApiError, AuthContext, DuplicateValue, Unauthorized, create_entity
from models import RoleEnum, User
from routes import auth, crm, finance, hr, inventory, sales, service, workspace


if os.name != "nt":  # pragma: no cover - platform dependent import
    import fcntl  # type: ignore[import-not-found]
else:  # pragma: no cover - Windows fallback
    fcntl = None  # type: ignore[assignment]


_HTTP_CODES = {
    400: "BAD_REQUEST",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    413: "PAYLOAD_TOO_LARGE",
    415: "UNSUPPORTED_MEDIA_TYPE",
}


def _ensure_database_exists(database_url: str | None) -> None:
    if not database_url:
        return

    url = make_url(database_url)
    backend = (url.get_backend_name() or "").lower()

    if backend.startswith("sqlite"):
        database_path = url.database
        if database_path and database_path not in {":memory:", ""}:
            directory = os.path.dirname(os.path.abspath(database_path))
            if directory:
                os.makedirs(directory, exist_ok=True)
        return

    database_name = url.database
    if not database_name:
        return

    engine = create_engine(url)
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        return
    except OperationalError:
        pass
    finally:
        engine.dispose()

    if not backend.startswith("postgresql"):
        return

    admin_url = url.set(database="postgres")
    admin_engine = create_engine(admin_url, isolation_level="AUTOCOMMIT")
    try:
        with admin_engine.connect() as connection:
            exists = connection.execute(
                text("SELECT 1 FROM pg_database WHERE datname = :name"),
                {"name": database_name},
            ).scalar()
            if not exists:
                connection.execute(text(f'CREATE DATABASE "{database_name}"'))
    finally:
        admin_engine.dispose()


def _run_database_migrations(app: Flask) -> None:
    """Apply Alembic migrations if the schema is not up-to-date."""

    database_uri = app.config.get("SQLALCHEMY_DATABASE_URI")
    if not database_uri:
        return

    if database_uri.startswith("sqlite") and ":memory:" in database_uri:
        return

    migrations_dir = os.path.join(app.root_path, "migrations")
    alembic_ini = os.path.join(migrations_dir, "alembic.ini")
    if not os.path.exists(alembic_ini):
        return

    config = AlembicConfig(alembic_ini)
    config.set_main_option("script_location", migrations_dir)
    config.set_main_option("sqlalchemy.url", database_uri)

    script = ScriptDirectory.from_config(config)
    head_revision = script.get_current_head()
    if not head_revision:
        return

    def _current_revision() -> str | None:
        try:
            with db.engine.connect() as connection:
                return connection.execute(text("SELECT version_num FROM alembic_version")).scalar()
        except (OperationalError, ProgrammingError):
            return None

    with app.app_context():
        if _current_revision() == head_revision:
            return

        lock_path = os.path.join(app.instance_path, "alembic.lock")
        os.makedirs(app.instance_path, exist_ok=True)
        lock_file = open(lock_path, "w")
        try:
            if fcntl is not None:
                fcntl.flock(lock_file, fcntl.LOCK_EX)

            if _current_revision() == head_revision:
                return

            app.logger.info("Applying database migrations…")
            try:
                command.upgrade(config, "head")
            except Exception:
                if _current_revision() != head_revision:
                    raise
        finally:
            if fcntl is not None:
                fcntl.flock(lock_file, fcntl.LOCK_UN)
            lock_file.close()


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ApiError)
    def handle_api_error(exc: ApiError):
        return jsonify(exc.to_dict()), exc.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        code = _HTTP_CODES.get(exc.code, "HTTP_ERROR")
        return jsonify({"error": exc.description or exc.name, "code": code}), exc.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(exc: Exception):
        db.session.rollback()
        app.logger.exception({"event": "unhandled_error", "error": type(exc).__name__})
        return jsonify({"error": "Internal server error", "code": "INTERNAL_ERROR"}), 500

    def _unauthorized(reason: str):
        app.logger.info({"event": "unauthorized", "reason": reason})
        error = Unauthorized()
        return jsonify(error.to_dict()), error.status_code

    @jwt.unauthorized_loader
    def missing_token(reason):
        return _unauthorized(reason)

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return _unauthorized(reason)

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        return _unauthorized("Token has expired")


def create_app():
    app = Flask(__name__)
    app.config.from_object(Config)
    app.logger.setLevel(getattr(logging, app.config.get("LOG_LEVEL", "INFO"), logging.INFO))
    app.json.sort_keys = False
    database_url = current_database_url()
    _ensure_database_exists(database_url)
    app.config["SQLALCHEMY_DATABASE_URI"] = database_url
    db.init_app(app)
    migrate.init_app(app, db)
    _run_database_migrations(app)
    jwt.init_app(app)
    _register_error_handlers(app)

    app.register_blueprint(auth.bp)
    app.register_blueprint(sales.bp)
    app.register_blueprint(service.bp)
    app.register_blueprint(inventory.bp)
    app.register_blueprint(finance.bp)
    app.register_blueprint(crm.bp)
    app.register_blueprint(hr.bp)
    app.register_blueprint(workspace.bp)

    @app.get("/api/health")
    def health(): return jsonify({"ok": True})

    return app


app = create_app()


def _normalize_email(value: str) -> str:
    return (value or "").strip().lower()


def _ensure_admin_user(
    flask_app=None,
    *,
    email: Optional[str] = None,
    password: Optional[str] = None,
    name: Optional[str] = None,
    ensure_if_missing: bool = True,
    force_reset: bool = False,
) -> Tuple[str, str]:
    """Ensure a dealer admin exists and optionally reset its password.

    Returns a tuple of (status, normalized_email) where status is one of
    ``{"created", "reset", "updated", "skipped"}``.
    """

    target_app = flask_app or globals().get("app")
    if target_app is None:
        return "skipped", _normalize_email(email)

    normalized_email = _normalize_email(email or os.getenv("ADMIN_EMAIL", "admin@dealerdesk.local"))
    password = password or os.getenv("ADMIN_PASSWORD", "Admin@123")
    provided_name = name if name is not None else os.getenv("ADMIN_NAME")
    target_name = (provided_name or "").strip() or None

    with target_app.app_context():
        try:
            admin = User.query.filter(func.lower(User.email) == normalized_email).first()
        except (OperationalError, ProgrammingError):
            # Tables might not be ready yet (e.g. before migrations run)
            db.session.rollback()
            return "skipped", normalized_email

        if admin:
            status = "skipped"
            if admin.role != RoleEnum.dealer_admin:
                admin.role = RoleEnum.dealer_admin
                status = "updated"
            if target_name and admin.name != target_name:
                admin.name = target_name
                status = "updated"
            if not admin.active:
                admin.active = True
                status = "updated"
            if force_reset:
                admin.set_password(password)
                status = "reset"

            if status != "skipped":
                db.session.commit()
            return status, normalized_email

        if not ensure_if_missing:
            return "skipped", normalized_email

        if not force_reset:
            # Avoid creating duplicate admins when one already exists
            existing_admin = User.query.filter_by(role=RoleEnum.dealer_admin).first()
            if existing_admin:
                return "skipped", normalized_email

        admin = User(
            name=target_name or "Admin",
            email=normalized_email,
            role=RoleEnum.dealer_admin,
            active=True,
        )
        admin.set_password(password)
        db.session.add(admin)
        db.session.commit()
        return "created", normalized_email


def _bootstrap_admin_user(flask_app=None):
    status, normalized_email = _ensure_admin_user(
        flask_app=flask_app,
        force_reset=os.getenv("RUN_SEED_ADMIN") == "1",
    )
    if status == "created":
        flask_app.logger.info({"event": "admin_created", "email": normalized_email})
    elif status == "reset":
        flask_app.logger.info({"event": "admin_password_reset", "email": normalized_email})
    elif status == "updated":
        flask_app.logger.info({"event": "admin_updated", "email": normalized_email})


# Call the hook at startup (idempotent)
_bootstrap_admin_user(flask_app=app)


DEMO_RECORDS = [
    (inventory.VENDORS, [
        {"vendorCode": "VEN-001", "name": "Apex Auto Parts", "contactPerson": "Ravi Kumar",
         "email": "sales@apexparts.example", "phone": "9876543210", "rating": 4},
        {"vendorCode": "VEN-002", "name": "Metro Lubricants", "contactPerson": "Anita Shah",
         "email": "orders@metrolube.example", "phone": "9123456780", "rating": 5},
    ]),
    (hr.EMPLOYEES, [
        {"employeeCode": "EMP001", "name": "Priya Nair", "designation": "Sales Manager",
         "department": "Sales", "dateOfJoining": "2022-04-01", "salary": 85000},
        {"employeeCode": "EMP002", "name": "Arjun Mehta", "designation": "Service Technician",
         "department": "Service", "dateOfJoining": "2023-01-16", "salary": 42000},
    ]),
    (sales.VEHICLES, [
        {"vin": "MA3EWDE1S00123456", "make": "Maruti", "model": "Swift", "year": 2024,
         "category": "hatchback", "color": "Red", "price": 650000, "stock": 4, "reorderPoint": 2},
        {"vin": "MALBB51BLPM654321", "make": "Hyundai", "model": "Creta", "year": 2024,
         "category": "suv", "color": "White", "price": 1450000, "stock": 2, "reorderPoint": 1},
    ]),
    (crm.CUSTOMERS, [
        {"name": "Kavya Iyer", "email": "kavya.iyer@example.com", "phone": "9812345670",
         "city": "Chennai", "state": "Tamil Nadu", "pincode": "600001"},
        {"name": "Rohan Das", "email": "rohan.das@example.com", "phone": "9988776655",
         "city": "Kolkata", "state": "West Bengal", "pincode": "700001"},
    ]),
]


def _seed_demo_records() -> Tuple[int, int]:
    system = AuthContext.for_role(None, RoleEnum.dealer_admin)
    created = skipped = 0
    for resource, records in DEMO_RECORDS:
        for record in records:
            try:
                create_entity(resource, dict(record), system)
            except DuplicateValue:
                skipped += 1
            else:
                created += 1
    return created, skipped


# ---- CLI: seed or reset admin ----
@app.cli.command("seed-admin")
@click.option("--email", default="admin@dealerdesk.local", help="Admin email")
@click.option("--password", default="Admin@123", help="Admin password")
@click.option("--name", default="Admin", help="Admin display name")
def seed_admin(email, password, name):
    """Create or reset the dealer admin user."""
    with app.app_context():
        status, normalized_email = _ensure_admin_user(
            flask_app=app,
            email=email,
            password=password,
            name=name,
            ensure_if_missing=True,
            force_reset=True,
        )

        if status == "created":
            click.echo(f"✅ Admin created: {normalized_email}")
        elif status == "reset":
            click.echo(f"✅ Admin password reset: {normalized_email}")
        elif status == "updated":
            click.echo(f"✅ Admin role updated: {normalized_email}")
        else:
            click.echo(f"ℹ️ Admin already up-to-date: {normalized_email}")


@app.cli.command("seed-demo")
def seed_demo():
    """Populate sample vendors, employees, vehicles and customers."""

    with app.app_context():
        created, skipped = _seed_demo_records()
        click.echo(f"✅ Seeded {created} demo records ({skipped} already present).")


if __name__ == "__main__":
    app.run(debug=True, port=int(os.getenv("PORT", 5000)))
