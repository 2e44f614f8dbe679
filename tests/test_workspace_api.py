"""
API tests for the contractor workspace: jobs, invoices, reviews,
appointments, messages, activities and stats
"""

import pytest
from datetime import date, datetime, timedelta
from decimal import Decimal


@pytest.fixture
def workspace(client, tenant):
    """Signed-in tenant headers plus one customer contact"""
    _, headers = tenant
    contact = client.post("/api/contacts", headers=headers, json={
        "firstName": "Sam",
        "lastName": "Ortiz",
        "email": "sam@example.com",
        "type": "residential",
    })
    assert contact.status_code == 201
    return headers, contact.json()["id"]


def activity_types(client, headers):
    return [a["type"] for a in client.get("/api/activities", headers=headers).json()]


def create_job(client, headers, contact_id, **fields):
    payload = {"contactId": contact_id, "title": "AC not cooling", "type": "ac_repair", **fields}
    response = client.post("/api/jobs", headers=headers, json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def create_invoice(client, headers, contact_id, **fields):
    payload = {
        "contactId": contact_id,
        "issueDate": date.today().isoformat(),
        "dueDate": (date.today() + timedelta(days=30)).isoformat(),
        "amount": "250.00",
        **fields,
    }
    response = client.post("/api/invoices", headers=headers, json=payload)
    assert response.status_code == 201, response.text
    return response.json()


class TestContacts:

    def test_crud(self, client, workspace):
        headers, contact_id = workspace

        updated = client.patch(f"/api/contacts/{contact_id}", headers=headers, json={"city": "Tempe"})
        assert updated.json()["city"] == "Tempe"
        assert updated.json()["lastName"] == "Ortiz"

        assert client.delete(f"/api/contacts/{contact_id}", headers=headers).status_code == 204
        assert client.get(f"/api/contacts/{contact_id}", headers=headers).status_code == 404

    def test_create_forces_own_contractor(self, client, tenant, other_tenant):
        contractor, headers = tenant
        other, _ = other_tenant

        response = client.post("/api/contacts", headers=headers, json={
            "firstName": "Lee", "lastName": "Kim", "contractorId": other.id,
        })

        assert response.json()["contractorId"] == contractor.id

    def test_validation(self, client, workspace):
        headers, _ = workspace
        response = client.post("/api/contacts", headers=headers, json={"firstName": "NoLastName"})
        assert response.status_code == 422


class TestJobs:

    def test_create_numbers_job_and_logs_activity(self, client, workspace):
        headers, contact_id = workspace

        job = create_job(client, headers, contact_id, totalAmount="189.50")

        assert job["jobNumber"].startswith("JOB")
        assert len(job["jobNumber"]) == 9
        assert job["status"] == "estimate"
        assert Decimal(job["totalAmount"]) == Decimal("189.50")
        assert activity_types(client, headers) == ["job_created"]

    def test_completion_logged_once(self, client, workspace):
        headers, contact_id = workspace
        job = create_job(client, headers, contact_id, status="in_progress")

        for _ in range(2):
            response = client.patch(f"/api/jobs/{job['id']}", headers=headers, json={"status": "completed"})
            assert response.status_code == 200

        assert activity_types(client, headers).count("job_completed") == 1

    def test_recent_limit(self, client, workspace):
        headers, contact_id = workspace
        for _ in range(7):
            create_job(client, headers, contact_id)

        assert len(client.get("/api/jobs/recent", headers=headers).json()) == 5
        assert len(client.get("/api/jobs/recent", params={"limit": 2}, headers=headers).json()) == 2
        assert len(client.get("/api/jobs", headers=headers).json()) == 7

    def test_unknown_status_rejected(self, client, workspace):
        headers, contact_id = workspace
        response = client.post("/api/jobs", headers=headers, json={
            "contactId": contact_id, "title": "x", "type": "ac_repair", "status": "paused",
        })
        assert response.status_code == 422

    def test_delete(self, client, workspace):
        headers, contact_id = workspace
        job = create_job(client, headers, contact_id)

        assert client.delete(f"/api/jobs/{job['id']}", headers=headers).status_code == 204
        assert client.get(f"/api/jobs/{job['id']}", headers=headers).status_code == 404


class TestInvoices:

    def test_draft_is_silent(self, client, workspace):
        headers, contact_id = workspace
        invoice = create_invoice(client, headers, contact_id)

        assert invoice["invoiceNumber"].startswith("INV")
        assert invoice["status"] == "draft"
        assert activity_types(client, headers) == []

    def test_sent_and_paid_are_logged(self, client, workspace):
        headers, contact_id = workspace
        invoice = create_invoice(client, headers, contact_id, status="sent")

        client.patch(
            f"/api/invoices/{invoice['id']}",
            headers=headers,
            json={"status": "paid", "paymentMethod": "card", "paymentDate": date.today().isoformat()},
        )

        assert sorted(activity_types(client, headers)) == ["invoice_created", "invoice_paid"]

    def test_negative_amount_rejected(self, client, workspace):
        headers, contact_id = workspace
        response = client.post("/api/invoices", headers=headers, json={
            "contactId": contact_id,
            "issueDate": "2025-04-01",
            "dueDate": "2025-05-01",
            "amount": "-5",
        })
        assert response.status_code == 422


class TestReviews:

    def test_review_logged_and_recent_defaults_to_three(self, client, workspace):
        headers, contact_id = workspace
        for rating in (5, 4, 5, 3):
            response = client.post("/api/reviews", headers=headers, json={
                "contactId": contact_id, "rating": rating, "comment": "Fast and friendly",
            })
            assert response.status_code == 201

        assert len(client.get("/api/reviews/recent", headers=headers).json()) == 3
        assert activity_types(client, headers).count("review_received") == 4

    def test_rating_bounds(self, client, workspace):
        headers, contact_id = workspace
        response = client.post("/api/reviews", headers=headers, json={"contactId": contact_id, "rating": 6})
        assert response.status_code == 422

    def test_owner_response(self, client, workspace):
        headers, contact_id = workspace
        review = client.post("/api/reviews", headers=headers, json={"contactId": contact_id, "rating": 4}).json()

        response = client.patch(
            f"/api/reviews/{review['id']}", headers=headers, json={"response": "Thanks, Sam!"}
        )
        assert response.json()["response"] == "Thanks, Sam!"


class TestAppointments:

    def test_today_and_date_views(self, client, workspace):
        headers, contact_id = workspace
        now = datetime.utcnow().replace(hour=12, minute=0, second=0, microsecond=0)
        tomorrow = now + timedelta(days=1)

        for start, title in ((now + timedelta(hours=2), "Afternoon"), (now, "Noon"), (tomorrow, "Tomorrow")):
            response = client.post("/api/appointments", headers=headers, json={
                "contactId": contact_id,
                "title": title,
                "startTime": start.isoformat(),
                "endTime": (start + timedelta(hours=1)).isoformat(),
            })
            assert response.status_code == 201, response.text

        today = client.get("/api/appointments/today", headers=headers).json()
        assert [a["title"] for a in today] == ["Noon", "Afternoon"]

        on_date = client.get(f"/api/appointments/date/{tomorrow.date().isoformat()}", headers=headers).json()
        assert [a["title"] for a in on_date] == ["Tomorrow"]

    def test_end_before_start_rejected(self, client, workspace):
        headers, contact_id = workspace
        response = client.post("/api/appointments", headers=headers, json={
            "contactId": contact_id,
            "title": "Backwards",
            "startTime": "2025-04-10T10:00:00",
            "endTime": "2025-04-10T09:00:00",
        })
        assert response.status_code == 400

    def test_bad_date_rejected(self, client, workspace):
        headers, _ = workspace
        assert client.get("/api/appointments/date/not-a-date", headers=headers).status_code == 422


class TestMessages:

    def test_unread_count_and_mark_read(self, client, workspace):
        headers, contact_id = workspace
        ids = [
            client.post("/api/messages", headers=headers, json={"content": text, "contactId": contact_id}).json()["id"]
            for text in ("Running 10 minutes late", "Parts arrived")
        ]

        assert client.get("/api/messages/unread-count", headers=headers).json() == {"count": 2}

        response = client.patch(f"/api/messages/{ids[0]}", headers=headers, json={"isRead": True})
        assert response.json()["isRead"] is True
        assert client.get("/api/messages/unread-count", headers=headers).json() == {"count": 1}

    def test_author_is_current_user(self, client, workspace):
        headers, _ = workspace
        me = client.get("/api/user", headers=headers).json()

        message = client.post("/api/messages", headers=headers, json={"content": "Hello team"}).json()

        assert message["userId"] == me["id"]


def test_stats(client, workspace):
    headers, contact_id = workspace
    create_job(client, headers, contact_id, status="scheduled")
    create_job(client, headers, contact_id, status="in_progress")
    create_job(client, headers, contact_id, status="completed")
    create_invoice(client, headers, contact_id, status="sent", amount="100.00")
    create_invoice(client, headers, contact_id, status="overdue", amount="50.50")
    create_invoice(client, headers, contact_id, status="paid", amount="999.00")
    for rating in (5, 4):
        client.post("/api/reviews", headers=headers, json={"contactId": contact_id, "rating": rating})
    start = datetime.utcnow().replace(hour=9, minute=0, second=0, microsecond=0)
    client.post("/api/appointments", headers=headers, json={
        "contactId": contact_id,
        "title": "Tune-up",
        "startTime": start.isoformat(),
        "endTime": (start + timedelta(hours=1)).isoformat(),
    })

    stats = client.get("/api/stats", headers=headers).json()

    assert stats == {
        "activeJobs": 2,
        "scheduledToday": 1,
        "pendingInvoicesAmount": 150.5,
        "pendingInvoicesCount": 2,
        "averageRating": 4.5,
        "reviewCount": 2,
    }


def test_recent_activities_newest_first(client, workspace):
    headers, contact_id = workspace
    create_job(client, headers, contact_id)
    client.post("/api/reviews", headers=headers, json={"contactId": contact_id, "rating": 5})

    recent = client.get("/api/activities/recent", params={"limit": 1}, headers=headers).json()

    assert [a["type"] for a in recent] == ["review_received"]
