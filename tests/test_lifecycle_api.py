import importlib
import os
import sys
import unittest

import models as models_module


class LifecycleApiTestCase(unittest.TestCase):
    def setUp(self):
        os.environ["DATABASE_URL"] = "sqlite:///:memory:"
        if "app" in sys.modules:
            self.app_module = importlib.reload(sys.modules["app"])
        else:
            self.app_module = importlib.import_module("app")

        self.app = self.app_module.create_app()
        self.app.testing = True
        self.ctx = self.app.app_context()
        self.ctx.push()
        self.app_module.db.create_all()

        RoleEnum = self.app_module.RoleEnum
        User = self.app_module.User

        self.admin = User(name="Admin", email="admin@example.com", role=RoleEnum.dealer_admin)
        self.admin.set_password("Password!1")
        self.finance = User(name="Finance", email="finance@example.com", role=RoleEnum.finance_manager)
        self.finance.set_password("Password!1")
        self.app_module.db.session.add_all([self.admin, self.finance])
        self.app_module.db.session.commit()

        self.client = self.app.test_client()
        self.admin_token = self._login("admin@example.com")
        self.finance_token = self._login("finance@example.com")

    def tearDown(self):
        self.app_module.db.session.remove()
        self.app_module.db.drop_all()
        self.ctx.pop()
        os.environ.pop("DATABASE_URL", None)
        if "app" in sys.modules:
            del sys.modules["app"]

    def _login(self, email):
        resp = self.client.post("/api/auth/login", json={"email": email, "password": "Password!1"})
        self.assertEqual(resp.status_code, 200, resp.get_data(as_text=True))
        return resp.get_json()["access_token"]

    def _auth(self, token=None):
        return {"Authorization": f"Bearer {token or self.admin_token}"}

    def _post(self, path, payload, status=201):
        resp = self.client.post(path, json=payload, headers=self._auth())
        self.assertEqual(resp.status_code, status, resp.get_data(as_text=True))
        return resp.get_json()

    def _put(self, path, payload, status=200):
        resp = self.client.put(path, json=payload, headers=self._auth())
        self.assertEqual(resp.status_code, status, resp.get_data(as_text=True))
        return resp.get_json()

    def _customer(self, email="kavya@example.com"):
        return self._post("/api/customers", {"name": "Kavya Iyer", "email": email, "phone": "9812345670"})

    def _employee(self, code="EMP100"):
        return self._post(
            "/api/employees",
            {
                "employeeCode": code,
                "name": "A",
                "designation": "Clerk",
                "department": "Admin",
                "dateOfJoining": "2024-01-01",
                "salary": 30000,
            },
        )

    def _vendor(self, code="VEN-001"):
        return self._post("/api/vendors", {"vendorCode": code, "name": "Apex Auto Parts"})

    def _loan_payload(self, customer_id, **overrides):
        payload = {
            "customerId": customer_id,
            "bankName": "HDFC",
            "loanAmount": 100000,
            "interestRate": 12,
            "tenureMonths": 12,
            "appliedDate": "2024-01-10",
        }
        payload.update(overrides)
        return payload

    def test_loan_status_moves_along_the_approval_path(self):
        customer = self._customer()
        loan = self._post("/api/loans", self._loan_payload(customer["id"]))
        self.assertEqual(loan["status"], "pending")
        self.assertEqual(loan["emiAmount"], 8885)
        path = f"/api/loans/{loan['id']}"

        body = self._put(path, {"status": "disbursed"}, status=400)
        self.assertEqual(body["code"], "INVALID_TRANSITION")

        self._put(path, {"status": "approved"})
        self._put(path, {"status": "approved"})
        body = self._put(path, {"status": "rejected"}, status=400)
        self.assertEqual(body["code"], "INVALID_TRANSITION")

        self.assertEqual(self._put(path, {"status": "disbursed"})["status"], "disbursed")

    def test_loan_cannot_start_approved(self):
        customer = self._customer()
        body = self._post("/api/loans", self._loan_payload(customer["id"], status="approved"), status=400)
        self.assertEqual(body["code"], "INVALID_TRANSITION")
        self.assertEqual(models_module.Loan.query.count(), 0)

    def test_loan_emi_follows_updated_terms(self):
        customer = self._customer()
        loan = self._post("/api/loans", self._loan_payload(customer["id"]))

        updated = self._put(f"/api/loans/{loan['id']}", {"loanAmount": 200000, "emiAmount": 1})
        self.assertEqual(updated["emiAmount"], 17770)

    def test_loan_with_unknown_customer_writes_nothing(self):
        body = self._post("/api/loans", self._loan_payload(999999), status=400)
        self.assertEqual(body["code"], "CUSTOMER_NOT_FOUND")
        self.assertEqual(models_module.Loan.query.count(), 0)
        self.assertEqual(models_module.AuditLog.query.count(), 0)

    def test_job_card_cannot_skip_states(self):
        job = self._post("/api/job-cards", {"jobNo": "jc-1"})
        self.assertEqual(job["jobNo"], "JC-1")
        self.assertEqual(job["status"], "open")
        path = f"/api/job-cards/{job['id']}"

        body = self._put(path, {"status": "completed"}, status=400)
        self.assertEqual(body["code"], "INVALID_TRANSITION")

        self._put(path, {"status": "in_progress"})
        self.assertEqual(self._put(path, {"status": "completed"})["status"], "completed")

        body = self._post("/api/job-cards", {"jobNo": "JC-1"}, status=400)
        self.assertEqual(body["code"], "DUPLICATE_JOB_NO")

    def test_delivery_completion_waits_for_clearances(self):
        booking = self._post(
            "/api/bookings", {"customer": "Kavya Iyer", "vehicle": "Swift", "bookingDate": "2024-02-01"}
        )
        other = self._post(
            "/api/bookings", {"customer": "Rohan Das", "vehicle": "Creta", "bookingDate": "2024-02-02"}
        )
        delivery = self._post("/api/deliveries", {"bookingId": booking["id"]})
        self.assertEqual(delivery["status"], "pending")
        self.assertEqual(delivery["rtoStatus"], "pending")
        path = f"/api/deliveries/{delivery['id']}"

        body = self._put(path, {"status": "completed"}, status=400)
        self.assertEqual(body["code"], "INVALID_TRANSITION")

        self._put(path, {"rtoStatus": "completed", "insuranceStatus": "in-progress", "qcStatus": "completed"})
        body = self._put(path, {"status": "completed"}, status=400)
        self.assertEqual(body["code"], "INVALID_TRANSITION")

        done = self._put(path, {"insuranceStatus": "completed", "status": "completed"})
        self.assertEqual(done["status"], "completed")

        body = self._put(path, {"rtoStatus": "pending"}, status=400)
        self.assertEqual(body["code"], "INVALID_TRANSITION")
        stored = self.client.get(path, headers=self._auth()).get_json()
        self.assertEqual(stored["rtoStatus"], "completed")
        self.assertEqual(stored["status"], "completed")

        body = self._put(path, {"bookingId": other["id"]}, status=400)
        self.assertEqual(body["code"], "BOOKING_ID_IMMUTABLE")

        body = self._post("/api/deliveries", {"bookingId": booking["id"]}, status=400)
        self.assertEqual(body["code"], "DUPLICATE_BOOKING_ID")

    def test_leave_days_and_approval_flow(self):
        employee = self._employee()
        payload = {
            "employeeId": employee["id"],
            "leaveType": "casual",
            "startDate": "2024-05-06",
            "endDate": "2024-05-08",
            "reason": "Family function",
        }
        leave = self._post("/api/leave-applications", payload)
        self.assertEqual(leave["daysCount"], 3)
        path = f"/api/leave-applications/{leave['id']}"

        body = self._put(path, {"endDate": "2024-05-01"}, status=400)
        self.assertEqual(body["code"], "INVALID_DATE_RANGE")

        self.assertEqual(self._put(path, {"endDate": "2024-05-10"})["daysCount"], 5)
        self._put(path, {"status": "approved"})
        body = self._put(path, {"status": "rejected"}, status=400)
        self.assertEqual(body["code"], "INVALID_TRANSITION")

    def test_payroll_net_salary_and_period_uniqueness(self):
        employee = self._employee()
        payload = {
            "employeeId": employee["id"],
            "month": 5,
            "year": 2024,
            "basicSalary": 30000,
            "allowances": 5000,
            "deductions": 2000,
            "netSalary": 1,
        }
        payroll = self._post("/api/payroll", payload)
        self.assertEqual(payroll["netSalary"], 33000)

        body = self._put(f"/api/payroll/{payroll['id']}", {"deductions": 40000}, status=400)
        self.assertEqual(body["code"], "INVALID_DEDUCTIONS")

        body = self._post("/api/payroll", payload, status=400)
        self.assertEqual(body["code"], "DUPLICATE_PAYROLL")

    def test_attendance_work_minutes(self):
        employee = self._employee()
        attendance = self._post(
            "/api/attendance",
            {
                "employeeId": employee["id"],
                "date": "2024-05-01",
                "status": "present",
                "checkIn": "09:00",
                "checkOut": "17:30",
            },
        )
        self.assertEqual(attendance["workMinutes"], 510)

        updated = self._put(f"/api/attendance/{attendance['id']}", {"checkOut": "18:00"})
        self.assertEqual(updated["workMinutes"], 540)

        body = self._put(f"/api/attendance/{attendance['id']}", {"checkOut": "08:00"}, status=400)
        self.assertEqual(body["code"], "INVALID_CHECK_OUT")

        body = self._post(
            "/api/attendance",
            {"employeeId": employee["id"], "date": "2024-05-01", "status": "absent"},
            status=400,
        )
        self.assertEqual(body["code"], "DUPLICATE_ATTENDANCE")

    def test_purchase_order_total_and_item_references(self):
        vendor = self._vendor()
        part = self._post(
            "/api/spare-parts",
            {
                "partNumber": "bp-100",
                "name": "Brake pad",
                "category": "brakes",
                "unitPrice": 1500,
                "quantity": 2,
                "reorderPoint": 5,
                "vendorId": vendor["id"],
            },
        )
        self.assertEqual(part["partNumber"], "BP-100")

        order = self._post(
            "/api/purchase-orders",
            {
                "poNumber": "PO-1",
                "vendorId": vendor["id"],
                "items": [
                    {"sparePartId": part["id"], "quantity": 2, "unitPrice": 1500},
                    {"description": "Freight", "quantity": 1, "unitPrice": 500},
                ],
                "totalAmount": 1,
            },
        )
        self.assertEqual(order["totalAmount"], 3500)

        body = self._post(
            "/api/purchase-orders",
            {"poNumber": "PO-2", "vendorId": vendor["id"], "items": [{"sparePartId": 999999, "quantity": 1, "unitPrice": 1}]},
            status=400,
        )
        self.assertEqual(body["code"], "SPARE_PART_NOT_FOUND")

        low = self.client.get("/api/spare-parts?lowStock=true", headers=self._auth()).get_json()
        self.assertEqual([row["id"] for row in low["data"]], [part["id"]])

        resp = self.client.delete(f"/api/vendors/{vendor['id']}", headers=self._auth())
        self.assertEqual(resp.status_code, 409, resp.get_data(as_text=True))
        self.assertEqual(resp.get_json()["code"], "VENDOR_IN_USE")
        self.assertIsNotNone(self.app_module.db.session.get(models_module.Vendor, vendor["id"]))

    def test_service_quotation_total_and_diagnostic_reference(self):
        job = self._post("/api/job-cards", {"jobNo": "JC-7"})
        quotation = self._post(
            "/api/service-quotations",
            {
                "quotationNumber": "sq-1",
                "jobCardId": job["id"],
                "vehicleRegistration": "ka01ab1234",
                "partsCost": 1200,
                "laborCost": 800,
                "taxAmount": 360,
                "totalAmount": 5,
            },
        )
        self.assertEqual(quotation["totalAmount"], 2360)
        self.assertEqual(quotation["vehicleRegistration"], "KA01AB1234")
        self.assertEqual(quotation["items"], [])

        updated = self._put(f"/api/service-quotations/{quotation['id']}", {"laborCost": 1000})
        self.assertEqual(updated["totalAmount"], 2560)

        body = self._post(
            "/api/diagnostics", {"jobCardId": 999999, "issueDescription": "Engine noise"}, status=400
        )
        self.assertEqual(body["code"], "JOB_CARD_NOT_FOUND")

        body = self._post(
            "/api/diagnostics",
            {"jobCardId": job["id"], "issueDescription": "Engine noise", "technicianId": 999999},
            status=400,
        )
        self.assertEqual(body["code"], "TECHNICIAN_NOT_FOUND")

    def test_invoice_total_recomputed_on_amount_change(self):
        invoice = self._post(
            "/api/invoices",
            {"invoiceNumber": "INV-1", "type": "service", "amount": 1000, "taxAmount": 180},
        )
        self.assertEqual(invoice["totalAmount"], 1180)

        updated = self._put(f"/api/invoices/{invoice['id']}", {"amount": 2000})
        self.assertEqual(updated["totalAmount"], 2180)

        body = self._post(
            "/api/invoices",
            {"invoiceNumber": "inv-1", "type": "service", "amount": 10, "taxAmount": 0},
            status=400,
        )
        self.assertEqual(body["code"], "DUPLICATE_INVOICE_NUMBER")

        body = self._post("/api/invoices", {"invoiceNumber": "INV-2", "type": "service", "amount": 1000}, status=400)
        self.assertEqual(body["code"], "MISSING_TAX_AMOUNT")

    def test_ledger_summary(self):
        self._post(
            "/api/ledger-entries",
            {"entryDate": "2024-04-01", "accountType": "Income", "category": "sales", "description": "Car sale", "creditAmount": 2500},
        )
        self._post(
            "/api/ledger-entries",
            {"entryDate": "2024-04-02", "accountType": "expense", "category": "rent", "description": "Rent", "debitAmount": 1000},
        )
        body = self._post(
            "/api/ledger-entries",
            {"entryDate": "2024-04-03", "accountType": "expense", "category": "misc", "description": "Nothing"},
            status=400,
        )
        self.assertEqual(body["code"], "INVALID_AMOUNTS")

        resp = self.client.get("/api/ledger-entries/summary", headers=self._auth(self.finance_token))
        self.assertEqual(resp.status_code, 200, resp.get_data(as_text=True))
        self.assertEqual(
            resp.get_json(), {"totalDebit": 1000, "totalCredit": 2500, "net": 1500, "entries": 2}
        )

        resp = self.client.get("/api/ledger-entries/summary?accountType=expense", headers=self._auth())
        self.assertEqual(resp.get_json()["net"], -1000)

    def test_campaign_and_interaction_dates(self):
        body = self._post(
            "/api/campaigns",
            {"name": "Diwali", "startDate": "2024-11-01", "endDate": "2024-10-01"},
            status=400,
        )
        self.assertEqual(body["code"], "INVALID_DATE_RANGE")

        customer = self._customer()
        body = self._post(
            "/api/customer-interactions",
            {
                "customerId": customer["id"],
                "interactionType": "call",
                "interactionDate": "2024-05-10",
                "followUpDate": "2024-05-01",
            },
            status=400,
        )
        self.assertEqual(body["code"], "INVALID_FOLLOW_UP_DATE")

    def test_customer_email_is_unique_and_phone_checked(self):
        self._customer()
        body = self._post(
            "/api/customers",
            {"name": "Other", "email": "KAVYA@example.com", "phone": "9812345670"},
            status=400,
        )
        self.assertEqual(body["code"], "DUPLICATE_EMAIL")

        body = self._post(
            "/api/customers", {"name": "Other", "email": "o@example.com", "phone": "12345"}, status=400
        )
        self.assertEqual(body["code"], "INVALID_PHONE")

    def test_finance_role_scope(self):
        resp = self.client.get("/api/loans", headers=self._auth(self.finance_token))
        self.assertEqual(resp.status_code, 200)

        resp = self.client.post(
            "/api/customers",
            json={"name": "X", "email": "x@example.com", "phone": "9812345670"},
            headers=self._auth(self.finance_token),
        )
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.get_json()["code"], "FORBIDDEN")


if __name__ == "__main__":
    unittest.main()
