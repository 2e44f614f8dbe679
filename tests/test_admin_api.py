"""
API tests for admin user management and the contractor directory
"""

from hvacpro.models import ContractorStatus, UserRole


class TestAdminUsers:

    def test_list_users(self, client, admin_headers, tenant):
        response = client.get("/api/admin/users", headers=admin_headers)

        assert response.status_code == 200
        assert {u["username"] for u in response.json()} == {"admin", "acme"}

    def test_create_contractor_user(self, client, admin_headers, make_contractor, storage):
        contractor = make_contractor("Arctic Air Pros")

        response = client.post("/api/admin/users", headers=admin_headers, json={
            "username": "arctic",
            "password": "letmein",
            "email": "owner@arcticair.com",
            "role": "contractor",
            "contractorId": contractor.id,
        })

        assert response.status_code == 201
        assert response.json()["contractorId"] == contractor.id
        assert storage.get_user_by_username("arctic").password_hash != "letmein"

    def test_duplicate_username(self, client, admin_headers):
        response = client.post("/api/admin/users", headers=admin_headers, json={
            "username": "admin",
            "password": "x",
            "email": "dup@example.com",
            "role": "admin",
        })

        assert response.status_code == 400
        assert response.json()["detail"] == "Username already exists"

    def test_contractor_user_needs_contractor(self, client, admin_headers):
        response = client.post("/api/admin/users", headers=admin_headers, json={
            "username": "orphan",
            "password": "x",
            "email": "orphan@example.com",
            "role": "employee",
            "contractorId": 404,
        })
        assert response.status_code == 400

    def test_non_admin_refused(self, client, tenant):
        _, headers = tenant
        assert client.get("/api/admin/users", headers=headers).status_code == 403
        assert client.post("/api/admin/users", headers=headers, json={
            "username": "sneaky", "password": "x", "email": "s@example.com", "role": "admin",
        }).status_code == 403


class TestContractors:

    def test_create_generates_unique_slug(self, client, admin_headers, make_contractor):
        make_contractor("Arctic Air Pros")

        response = client.post("/api/contractors", headers=admin_headers, json={
            "name": "Arctic Air Pros",
            "city": "Phoenix",
            "status": "contacted",
        })

        assert response.status_code == 201
        body = response.json()
        assert body["slug"] == "arctic-air-pros-1"
        assert body["status"] == "contacted"
        assert body["createdById"] is not None

    def test_create_spells_out_ampersand(self, client, admin_headers):
        response = client.post("/api/contractors", headers=admin_headers, json={"name": "Acme Heating & Air"})

        assert response.status_code == 201
        assert response.json()["slug"] == "acme-heating-and-air"

    def test_create_with_taken_slug(self, client, admin_headers, make_contractor):
        make_contractor("Arctic Air Pros")

        response = client.post("/api/contractors", headers=admin_headers, json={
            "name": "Other", "slug": "arctic-air-pros",
        })
        assert response.status_code == 400

    def test_list_is_admin_only(self, client, admin_headers, tenant):
        _, headers = tenant
        assert client.get("/api/contractors", headers=headers).status_code == 403
        assert len(client.get("/api/contractors", headers=admin_headers).json()) == 1

    def test_owner_reads_own_contractor(self, client, tenant):
        contractor, headers = tenant
        response = client.get(f"/api/contractors/{contractor.id}", headers=headers)
        assert response.json()["name"] == "Acme Heating & Air"

    def test_other_contractor_forbidden(self, client, tenant, other_tenant):
        _, headers = tenant
        other, _ = other_tenant
        assert client.get(f"/api/contractors/{other.id}", headers=headers).status_code == 403
        assert client.patch(
            f"/api/contractors/{other.id}", headers=headers, json={"phone": "555"}
        ).status_code == 403

    def test_missing_contractor(self, client, admin_headers):
        assert client.get("/api/contractors/999", headers=admin_headers).status_code == 404

    def test_owner_updates_profile(self, client, tenant):
        contractor, headers = tenant

        response = client.patch(f"/api/contractors/{contractor.id}", headers=headers, json={
            "phone": "(602) 555-0100",
            "primaryColor": "#0F766E",
        })

        assert response.status_code == 200
        assert response.json()["phone"] == "(602) 555-0100"
        assert response.json()["primaryColor"] == "#0F766E"
        assert response.json()["updatedAt"] is not None

    def test_owner_cannot_change_pipeline_status(self, client, tenant, storage):
        contractor, headers = tenant

        response = client.patch(f"/api/contractors/{contractor.id}", headers=headers, json={"status": "prospect"})

        assert response.status_code == 403
        assert storage.get_contractor_by_slug(contractor.slug).status == ContractorStatus.CLIENT

    def test_admin_status_change_goes_through_pipeline(self, client, admin_headers, make_contractor):
        contractor = make_contractor("Arctic Air Pros", status=ContractorStatus.PROSPECT)

        response = client.patch(f"/api/contractors/{contractor.id}", headers=admin_headers, json={"status": "demo"})

        assert response.json()["status"] == "demo"
        assert response.json()["lastContactedDate"] is not None

    def test_employee_cannot_edit_company(self, client, tenant, make_user, login):
        contractor, _ = tenant
        make_user("helper", role=UserRole.EMPLOYEE, contractor_id=contractor.id)
        headers = login("helper")

        assert client.get(f"/api/contractors/{contractor.id}", headers=headers).status_code == 200
        assert client.patch(
            f"/api/contractors/{contractor.id}", headers=headers, json={"phone": "555"}
        ).status_code == 403
