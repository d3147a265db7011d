import importlib
import os
import sys
import unittest

from models import AuditLog, Employee

SEED_VARS = ("RUN_SEED_ADMIN", "ADMIN_EMAIL", "ADMIN_PASSWORD", "ADMIN_NAME")


class AdminSeedTestCase(unittest.TestCase):
    def setUp(self):
        os.environ["DATABASE_URL"] = "sqlite:///:memory:"
        for var in SEED_VARS:
            os.environ.pop(var, None)

        if "app" in sys.modules:
            self.app_module = importlib.reload(sys.modules["app"])
        else:
            self.app_module = importlib.import_module("app")

        self.app = self.app_module.create_app()
        self.app.testing = True
        self.ctx = self.app.app_context()
        self.ctx.push()
        self.app_module.db.create_all()

    def tearDown(self):
        self.app_module.db.session.remove()
        self.app_module.db.drop_all()
        self.ctx.pop()
        os.environ.pop("DATABASE_URL", None)
        for var in SEED_VARS:
            os.environ.pop(var, None)
        if "app" in sys.modules:
            del sys.modules["app"]

    def test_default_admin_created_and_login_succeeds(self):
        status, email = self.app_module._ensure_admin_user(flask_app=self.app)
        self.assertEqual(status, "created")
        self.assertEqual(email, "admin@dealerdesk.local")

        admin = self.app_module.User.query.filter_by(role=self.app_module.RoleEnum.dealer_admin).one()
        self.assertTrue(admin.check_password("Admin@123"))

        client = self.app.test_client()
        response = client.post(
            "/api/auth/login",
            json={"email": email, "password": "Admin@123"},
        )
        self.assertEqual(response.status_code, 200)
        data = response.get_json()
        self.assertIn("access_token", data)
        self.assertEqual(data["user"]["role"], "dealer_admin")

    def test_force_reset_updates_password(self):
        status, email = self.app_module._ensure_admin_user(flask_app=self.app)
        self.assertEqual(status, "created")

        admin = self.app_module.User.query.filter_by(email=email).one()
        admin.set_password("OldPassword!1")
        self.app_module.db.session.commit()

        status, _ = self.app_module._ensure_admin_user(
            flask_app=self.app,
            password="NewPassword!2",
            force_reset=True,
        )
        self.assertEqual(status, "reset")

        refreshed = self.app_module.db.session.get(self.app_module.User, admin.id)
        self.assertTrue(refreshed.check_password("NewPassword!2"))

    def test_second_admin_is_not_created_without_reset(self):
        status, _ = self.app_module._ensure_admin_user(flask_app=self.app)
        self.assertEqual(status, "created")

        status, email = self.app_module._ensure_admin_user(
            flask_app=self.app, email="other@dealerdesk.local"
        )
        self.assertEqual(status, "skipped")
        self.assertEqual(email, "other@dealerdesk.local")
        self.assertEqual(
            self.app_module.User.query.filter_by(role=self.app_module.RoleEnum.dealer_admin).count(), 1
        )

    def test_existing_user_is_promoted_to_dealer_admin(self):
        User = self.app_module.User
        RoleEnum = self.app_module.RoleEnum
        user = User(name="Clerk", email="clerk@dealerdesk.local", role=RoleEnum.sales_executive)
        user.set_password("Password!1")
        self.app_module.db.session.add(user)
        self.app_module.db.session.commit()

        status, _ = self.app_module._ensure_admin_user(flask_app=self.app, email="clerk@dealerdesk.local")
        self.assertEqual(status, "updated")
        refreshed = User.query.filter_by(email="clerk@dealerdesk.local").one()
        self.assertEqual(refreshed.role, RoleEnum.dealer_admin)

    def test_seed_demo_records_are_idempotent(self):
        created, skipped = self.app_module._seed_demo_records()
        self.assertEqual((created, skipped), (8, 0))

        created, skipped = self.app_module._seed_demo_records()
        self.assertEqual((created, skipped), (0, 8))

        self.assertEqual(AuditLog.query.count(), 8)
        self.assertEqual(Employee.query.count(), 2)
