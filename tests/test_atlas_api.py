"""
API tests for the Atlas sales pipeline
"""

import pytest
from datetime import datetime

from hvacpro.models import Contractor, ContractorStatus
from hvacpro.schemas.contractor import PipelineStatusUpdate
from hvacpro.services import pipeline
from hvacpro.storage import ContractorQuery


@pytest.fixture
def directory(make_contractor):
    """A small scraped directory across the pipeline"""
    make_contractor("Arctic Air Pros", status=ContractorStatus.PROSPECT, city="Phoenix", state="AZ",
                    email="info@arcticair.com")
    make_contractor("Blue Flame Heating", status=ContractorStatus.PROSPECT, city="Tucson", state="AZ",
                    phone="(520) 555-0134")
    make_contractor("Comfort Zone HVAC", status=ContractorStatus.CONTACTED, city="Mesa", state="AZ")
    make_contractor("Desert Breeze Cooling", status=ContractorStatus.DEMO, city="Phoenix", state="AZ")
    make_contractor("Evergreen Mechanical", status=ContractorStatus.CLIENT, city="Denver", state="CO")


def names(response):
    return [c["name"] for c in response.json()["contractors"]]


class TestContractorList:

    def test_default_page(self, client, admin_headers, directory):
        response = client.get("/api/atlas/contractors", headers=admin_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["pagination"] == {"total": 5, "page": 1, "limit": 20, "pages": 1}
        assert names(response)[0] == "Arctic Air Pros"

    def test_status_filter(self, client, admin_headers, directory):
        response = client.get("/api/atlas/contractors", params={"status": "prospect"}, headers=admin_headers)
        assert names(response) == ["Arctic Air Pros", "Blue Flame Heating"]

    @pytest.mark.parametrize("term, expected", [
        ("phoenix", ["Arctic Air Pros", "Desert Breeze Cooling"]),
        ("ARCTICAIR", ["Arctic Air Pros"]),
        ("555-0134", ["Blue Flame Heating"]),
        ("comfort", ["Comfort Zone HVAC"]),
    ])
    def test_search(self, client, admin_headers, directory, term, expected):
        response = client.get("/api/atlas/contractors", params={"search": term}, headers=admin_headers)
        assert names(response) == expected

    def test_sort_descending(self, client, admin_headers, directory):
        response = client.get(
            "/api/atlas/contractors",
            params={"sortBy": "city", "sortDir": "desc"},
            headers=admin_headers,
        )
        assert names(response)[0] == "Blue Flame Heating"

    def test_pagination(self, client, admin_headers, directory):
        response = client.get("/api/atlas/contractors", params={"page": 2, "limit": 2}, headers=admin_headers)

        body = response.json()
        assert body["pagination"] == {"total": 5, "page": 2, "limit": 2, "pages": 3}
        assert names(response) == ["Comfort Zone HVAC", "Desert Breeze Cooling"]

    def test_unknown_status_rejected(self, client, admin_headers, directory):
        response = client.get("/api/atlas/contractors", params={"status": "lost"}, headers=admin_headers)
        assert response.status_code == 422

    def test_contractor_users_are_refused(self, client, tenant):
        _, headers = tenant
        assert client.get("/api/atlas/contractors", headers=headers).status_code == 403

    def test_requires_login(self, client, db):
        assert client.get("/api/atlas/contractors").status_code == 401


def test_pipeline_summary(client, admin_headers, directory):
    response = client.get("/api/atlas/pipeline-summary", headers=admin_headers)

    assert response.status_code == 200
    summary = response.json()
    assert summary == {"total": 5, "prospect": 2, "contacted": 1, "qualified": 0, "demo": 1, "client": 1}
    assert sum(summary[s.value] for s in ContractorStatus) == summary["total"]


class TestStatusUpdate:

    @pytest.mark.parametrize("target", [s.value for s in ContractorStatus])
    def test_status_persists_and_stamps_contact_date(self, client, admin_headers, make_contractor, target):
        contractor = make_contractor("Arctic Air Pros", status=ContractorStatus.PROSPECT)
        before = datetime.utcnow()

        response = client.patch(
            f"/api/atlas/contractors/{contractor.id}/status",
            json={"status": target},
            headers=admin_headers,
        )

        assert response.status_code == 200
        contacted = datetime.fromisoformat(response.json()["lastContactedDate"])
        assert before <= contacted <= datetime.utcnow()

        fetched = client.get(f"/api/contractors/{contractor.id}", headers=admin_headers).json()
        assert fetched["status"] == target
        assert fetched["lastContactedDate"] == response.json()["lastContactedDate"]

    def test_notes_only_keeps_status(self, client, admin_headers, make_contractor):
        contractor = make_contractor("Arctic Air Pros", status=ContractorStatus.QUALIFIED)

        response = client.patch(
            f"/api/atlas/contractors/{contractor.id}/status",
            json={"notes": "Wants a demo next week", "lastContactedDate": "2025-04-10T15:30:00"},
            headers=admin_headers,
        )

        body = response.json()
        assert body["status"] == "qualified"
        assert body["notes"] == "Wants a demo next week"
        assert body["lastContactedDate"] == "2025-04-10T15:30:00"

    def test_contact_date_offset_stored_as_utc(self, client, admin_headers, make_contractor):
        contractor = make_contractor("Arctic Air Pros", status=ContractorStatus.QUALIFIED)

        response = client.patch(
            f"/api/atlas/contractors/{contractor.id}/status",
            json={"lastContactedDate": "2025-04-10T15:30:00+02:00"},
            headers=admin_headers,
        )

        assert response.json()["lastContactedDate"] == "2025-04-10T13:30:00"
        fetched = client.get(f"/api/contractors/{contractor.id}", headers=admin_headers).json()
        assert fetched["lastContactedDate"] == "2025-04-10T13:30:00"

    def test_contact_dates_sort_after_mixed_input(self, mem):
        early = mem.add(Contractor(name="Early", slug="early"))
        late = mem.add(Contractor(name="Late", slug="late"))
        update = PipelineStatusUpdate.model_validate({"lastContactedDate": "2025-04-10T15:30:00+02:00"})

        pipeline.update_contact_log(mem, early.id, last_contacted_date=update.last_contacted_date)
        pipeline.set_status(mem, late.id, ContractorStatus.CONTACTED)

        rows, _ = mem.search_contractors(ContractorQuery(sort_by="lastContactedDate"))
        assert [c.slug for c in rows] == ["early", "late"]

    def test_invalid_status_rejected(self, client, admin_headers, make_contractor, storage):
        contractor = make_contractor("Arctic Air Pros", status=ContractorStatus.PROSPECT)

        response = client.patch(
            f"/api/atlas/contractors/{contractor.id}/status",
            json={"status": "won"},
            headers=admin_headers,
        )

        assert response.status_code == 422
        assert storage.get_contractor_by_slug("arctic-air-pros").status == ContractorStatus.PROSPECT

    def test_unknown_contractor(self, client, admin_headers):
        response = client.patch("/api/atlas/contractors/999/status", json={"status": "demo"}, headers=admin_headers)
        assert response.status_code == 404

    def test_contractor_users_are_refused(self, client, tenant):
        contractor, headers = tenant
        response = client.patch(
            f"/api/atlas/contractors/{contractor.id}/status",
            json={"status": "prospect"},
            headers=headers,
        )
        assert response.status_code == 403
