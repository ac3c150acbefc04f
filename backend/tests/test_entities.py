# Overview: Pytest coverage for tenant profile, lease, payment, maintenance and document workflows.

import io

import pytest

from propdesk.extensions import db
from propdesk.models import Lease, MaintenanceRequest, Payment


class TestTenantProfiles:

    def test_manager_creates_profile(self, client, login, portfolio, users):
        resp = client.post("/tenants", json={
            "userId": users.tenant2,
            "propertyId": portfolio.property_a,
            "moveInDate": "2024-06-01",
            "emergencyContactName": "Pat Doe",
        }, headers=login("manager"))
        assert resp.status_code == 201
        body = resp.get_json()
        assert body["status"] == "active"
        assert body["moveInDate"] == "2024-06-01T00:00:00Z"
        assert body["leaseId"] is None

    def test_missing_required_fields(self, client, login, portfolio):
        resp = client.post("/tenants", json={}, headers=login("manager"))
        assert resp.status_code == 400
        fields = {issue["field"] for issue in resp.get_json()["errors"]}
        assert fields == {"userId", "propertyId", "moveInDate"}

    def test_list_by_property(self, client, login, portfolio):
        resp = client.get(f"/tenants/property/{portfolio.property_b}", headers=login("manager"))
        assert [t["id"] for t in resp.get_json()] == [portfolio.profile_b]

    def test_update_and_delete(self, client, login, portfolio):
        headers = login("manager")
        resp = client.put(f"/tenants/{portfolio.profile_a}", json={"status": "inactive"}, headers=headers)
        assert resp.get_json()["status"] == "inactive"

        assert client.delete(f"/tenants/{portfolio.profile_a}", headers=headers).status_code == 204
        # Leases, payments and maintenance hang off the profile
        assert db.session.query(Lease).filter_by(tenant_id=portfolio.profile_a).count() == 0
        assert db.session.query(Payment).filter_by(tenant_id=portfolio.profile_a).count() == 0


class TestLeases:

    def lease_payload(self, portfolio, **overrides):
        payload = {
            "propertyId": portfolio.property_a,
            "tenantId": portfolio.profile_a,
            "startDate": "2025-01-01",
            "endDate": "2025-12-31T00:00:00Z",
            "monthlyRent": 1550,
            "deposit": "3100.00",
            "signedDate": "2024-12-01",
            "terms": "No pets.",
        }
        payload.update(overrides)
        return payload

    def test_create_lease(self, client, login, portfolio):
        resp = client.post("/leases", json=self.lease_payload(portfolio), headers=login("manager"))
        assert resp.status_code == 201
        body = resp.get_json()
        assert body["monthlyRent"] == "1550.00"
        assert body["deposit"] == "3100.00"
        assert body["status"] == "active"
        assert body["endDate"] == "2025-12-31T00:00:00Z"

    def test_bad_dates_and_amounts(self, client, login, portfolio):
        payload = self.lease_payload(portfolio, startDate="next tuesday", monthlyRent="lots", deposit=-1)
        resp = client.post("/leases", json=payload, headers=login("manager"))
        assert resp.status_code == 400
        fields = {issue["field"] for issue in resp.get_json()["errors"]}
        assert fields == {"startDate", "monthlyRent", "deposit"}

    def test_reference_must_exist(self, client, login, portfolio):
        resp = client.post("/leases", json=self.lease_payload(portfolio, tenantId="ghost"), headers=login("manager"))
        assert resp.status_code == 400
        assert resp.get_json()["errors"] == [{"field": "tenantId", "message": "does not exist"}]

    def test_update_status(self, client, login, portfolio):
        resp = client.put(f"/leases/{portfolio.lease_a}", json={"status": "terminated"}, headers=login("manager"))
        assert resp.status_code == 200
        assert resp.get_json()["status"] == "terminated"

    def test_filter_by_property(self, client, login, portfolio):
        resp = client.get(f"/leases?propertyId={portfolio.property_a}", headers=login("manager"))
        assert [lease["id"] for lease in resp.get_json()] == [portfolio.lease_a]


class TestPayments:

    def payment_payload(self, portfolio, suffix="a", **overrides):
        payload = {
            "leaseId": getattr(portfolio, f"lease_{suffix}"),
            "tenantId": getattr(portfolio, f"profile_{suffix}"),
            "propertyId": getattr(portfolio, f"property_{suffix}"),
            "amount": 1500,
            "dueDate": "2024-04-01",
            "type": "rent",
        }
        payload.update(overrides)
        return payload

    def test_tenant_creates_payment_for_own_profile(self, client, login, portfolio):
        resp = client.post("/payments", json=self.payment_payload(portfolio), headers=login("tenant"))
        assert resp.status_code == 201
        body = resp.get_json()
        assert body["amount"] == "1500.00"
        assert body["status"] == "pending"
        assert body["paidDate"] is None

    def test_tenant_cannot_create_for_another_profile(self, client, login, portfolio):
        resp = client.post("/payments", json=self.payment_payload(portfolio, "b"), headers=login("tenant"))
        assert resp.status_code == 403
        assert resp.get_json() == {"message": "Cannot act on behalf of another tenant"}

    def test_tenant_cannot_point_at_another_property(self, client, login, portfolio):
        payload = self.payment_payload(portfolio, propertyId=portfolio.property_b)
        resp = client.post("/payments", json=payload, headers=login("tenant"))
        assert resp.status_code == 400
        assert resp.get_json()["errors"] == [{"field": "propertyId", "message": "does not match the lease"}]

    def test_tenant_cannot_use_another_tenants_lease(self, client, login, portfolio):
        payload = self.payment_payload(portfolio, leaseId=portfolio.lease_b, propertyId=portfolio.property_b)
        resp = client.post("/payments", json=payload, headers=login("tenant"))
        assert resp.status_code == 400
        assert resp.get_json()["errors"] == [{"field": "leaseId", "message": "does not belong to this tenant"}]

    def test_invalid_enum(self, client, login, portfolio):
        resp = client.post("/payments", json=self.payment_payload(portfolio, type="bribe"), headers=login("manager"))
        assert resp.status_code == 400
        assert resp.get_json()["errors"][0]["field"] == "type"

    def test_record_payment_defaults_paid_date(self, client, login, portfolio):
        resp = client.post(f"/payments/{portfolio.pending_a}/record", json={"method": "cash"},
                           headers=login("tenant"))
        assert resp.status_code == 200
        body = resp.get_json()
        assert body["status"] == "paid"
        assert body["method"] == "cash"
        assert body["paidDate"].endswith("Z")

    def test_record_payment_with_explicit_date(self, client, login, portfolio):
        resp = client.post(f"/payments/{portfolio.pending_a}/record", json={
            "paidDate": "2024-03-02T10:30:00+02:00",
            "transactionId": "TX-1001",
        }, headers=login("manager"))
        body = resp.get_json()
        assert body["paidDate"] == "2024-03-02T08:30:00Z"
        assert body["transactionId"] == "TX-1001"

    def test_record_rejects_status_override(self, client, login, portfolio):
        resp = client.post(f"/payments/{portfolio.pending_a}/record", json={"status": "overdue"},
                           headers=login("manager"))
        assert resp.status_code == 400

    def test_manager_updates_and_deletes(self, client, login, portfolio):
        headers = login("manager")
        resp = client.put(f"/payments/{portfolio.pending_b}", json={"status": "overdue"}, headers=headers)
        assert resp.get_json()["status"] == "overdue"
        assert client.delete(f"/payments/{portfolio.pending_b}", headers=headers).status_code == 204
        assert client.get(f"/payments/{portfolio.pending_b}", headers=headers).status_code == 404


class TestMaintenance:

    def request_payload(self, portfolio, **overrides):
        payload = {
            "propertyId": portfolio.property_a,
            "tenantId": portfolio.profile_a,
            "title": "Broken heater",
            "description": "Heater makes a loud noise and no heat",
            "category": "hvac",
        }
        payload.update(overrides)
        return payload

    def test_tenant_opens_request(self, client, login, portfolio):
        resp = client.post("/maintenance", json=self.request_payload(portfolio, priority="high"),
                           headers=login("tenant"))
        assert resp.status_code == 201
        body = resp.get_json()
        assert body["status"] == "pending"
        assert body["priority"] == "high"
        assert body["requestedDate"] is not None

    def test_priority_defaults_to_medium(self, client, login, portfolio):
        resp = client.post("/maintenance", json=self.request_payload(portfolio), headers=login("manager"))
        assert resp.get_json()["priority"] == "medium"

    def test_client_cannot_set_status_on_create(self, client, login, portfolio):
        resp = client.post("/maintenance", json=self.request_payload(portfolio, status="completed"),
                           headers=login("tenant"))
        assert resp.status_code == 400

    def test_description_minimum_length(self, client, login, portfolio):
        resp = client.post("/maintenance", json=self.request_payload(portfolio, description="Broken"),
                           headers=login("tenant"))
        assert resp.status_code == 400
        assert resp.get_json()["errors"] == [
            {"field": "description", "message": "must be at least 10 characters"}
        ]

    def test_tenant_cannot_open_for_another_profile(self, client, login, portfolio):
        payload = self.request_payload(portfolio, tenantId=portfolio.profile_b, propertyId=portfolio.property_b)
        resp = client.post("/maintenance", json=payload, headers=login("tenant"))
        assert resp.status_code == 403

    def test_assign_moves_to_in_progress(self, client, login, portfolio, users):
        resp = client.post(f"/maintenance/{portfolio.maintenance_a}/assign",
                           json={"assignedTo": users.manager}, headers=login("manager"))
        assert resp.status_code == 200
        body = resp.get_json()
        assert body["status"] == "in_progress"
        assert body["assignedTo"] == users.manager

    def test_assign_requires_existing_user(self, client, login, portfolio):
        headers = login("manager")
        resp = client.post(f"/maintenance/{portfolio.maintenance_a}/assign", json={}, headers=headers)
        assert resp.get_json()["errors"] == [{"field": "assignedTo", "message": "is required"}]

        resp = client.post(f"/maintenance/{portfolio.maintenance_a}/assign",
                           json={"assignedTo": "ghost"}, headers=headers)
        assert resp.status_code == 400
        assert resp.get_json()["errors"] == [{"field": "assignedTo", "message": "does not exist"}]

    def test_complete_defaults(self, client, login, portfolio):
        resp = client.post(f"/maintenance/{portfolio.maintenance_a}/complete",
                           json={"actualCost": 310.5, "notes": "Replaced valve"}, headers=login("manager"))
        assert resp.status_code == 200
        body = resp.get_json()
        assert body["status"] == "completed"
        assert body["actualCost"] == "310.50"
        assert body["notes"] == "Replaced valve"
        assert body["completedDate"].endswith("Z")

    def test_complete_without_body(self, client, login, portfolio):
        resp = client.post(f"/maintenance/{portfolio.maintenance_a}/complete", headers=login("manager"))
        assert resp.status_code == 200
        body = resp.get_json()
        assert body["status"] == "completed"
        assert body["actualCost"] == "250.00"

    def test_delete(self, client, login, portfolio):
        resp = client.delete(f"/maintenance/{portfolio.maintenance_a}", headers=login("manager"))
        assert resp.status_code == 204
        assert db.session.query(MaintenanceRequest).filter_by(id=portfolio.maintenance_a).count() == 0


class TestDocuments:

    def test_upload_json(self, client, login, portfolio, users):
        resp = client.post("/documents/upload", json={
            "name": "house-rules.pdf",
            "type": "notice",
            "propertyId": portfolio.property_a,
        }, headers=login("manager"))
        assert resp.status_code == 201
        body = resp.get_json()
        assert body["url"].startswith("/uploads/")
        assert body["url"].endswith("-house-rules.pdf")
        assert body["uploadedBy"] == users.manager
        assert body["tenantId"] is None

    def test_upload_multipart_uses_filename(self, client, login, portfolio):
        resp = client.post(
            "/documents/upload",
            data={"type": "receipt", "tenantId": portfolio.profile_a, "leaseId": "",
                  "file": (io.BytesIO(b"%PDF-1.4"), "receipt-march.pdf")},
            content_type="multipart/form-data",
            headers=login("manager"),
        )
        assert resp.status_code == 201
        body = resp.get_json()
        assert body["name"] == "receipt-march.pdf"
        assert body["leaseId"] is None

    def test_upload_requires_name_and_type(self, client, login, portfolio):
        resp = client.post("/documents/upload", json={}, headers=login("manager"))
        fields = {issue["field"] for issue in resp.get_json()["errors"]}
        assert fields == {"name", "type"}

    def test_filter_by_lease(self, client, login, portfolio):
        resp = client.get(f"/documents?leaseId={portfolio.lease_b}", headers=login("manager"))
        assert [d["id"] for d in resp.get_json()] == [portfolio.document_b]

    def test_delete(self, client, login, portfolio):
        headers = login("manager")
        assert client.delete(f"/documents/{portfolio.document_a}", headers=headers).status_code == 204
        assert client.get(f"/documents/{portfolio.document_a}", headers=headers).status_code == 404

    @pytest.mark.parametrize("method", ["put", "patch"])
    def test_documents_are_immutable(self, client, login, portfolio, method):
        resp = getattr(client, method)(f"/documents/{portfolio.document_a}", json={"name": "x"},
                                       headers=login("manager"))
        assert resp.status_code == 405
