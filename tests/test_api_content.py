from portfolio.services.cache import page_cache

from tests.helpers import login


def test_profile_is_null_until_created(client):
    response = client.get("/api/profile")
    assert response.status_code == 200
    assert response.get_json() is None


def test_mutations_require_session(client):
    assert client.put("/api/profile", json={"name": "x"}).status_code == 401
    assert client.post("/api/job-history", json={}).status_code == 401
    assert client.put("/api/job-history/1", json={}).status_code == 401
    assert client.delete("/api/certifications/1").status_code == 401
    response = client.post("/api/blog", json={"title": "x"})
    assert response.status_code == 401
    assert response.get_json() == {"error": "Unauthorized"}


def test_profile_upsert_marks_pages_stale(client):
    login(client)
    page_cache.set("/", "<html>old</html>")
    page_cache.set("/admin/profile", {"profile": None})
    page_cache.set("/blog", "<html>blog</html>")

    response = client.put(
        "/api/profile",
        json={"name": "Jane Doe", "title": "Engineer", "linkedin": "https://linkedin.com/in/jane"},
    )
    assert response.status_code == 200
    body = response.get_json()
    assert body["name"] == "Jane Doe"
    assert body["linkedin"] == "https://linkedin.com/in/jane"

    assert not page_cache.is_cached("/")
    assert not page_cache.is_cached("/admin/profile")
    assert page_cache.is_cached("/blog")

    fetched = client.get("/api/profile").get_json()
    assert fetched["id"] == body["id"]
    assert fetched["title"] == "Engineer"


def test_profile_create_requires_name_and_title(client):
    login(client)
    response = client.put("/api/profile", json={"summary": "no name"})
    assert response.status_code == 400
    body = response.get_json()
    assert body["error"] == "name is required"
    assert "title is required" in body["errors"]


def test_profile_rejects_oversized_image(client):
    login(client)
    response = client.put(
        "/api/profile",
        json={
            "name": "Jane",
            "title": "Engineer",
            "profileImageMeta": {"contentType": "image/png", "size": 6 * 1024 * 1024},
        },
    )
    assert response.status_code == 400
    assert response.get_json()["error"] == "profile image must be at most 5MB"


def test_job_history_crud(client):
    login(client)
    created = client.post(
        "/api/job-history",
        json={
            "company": "Acme",
            "position": "Engineer",
            "startDate": "2020-01-01",
            "current": True,
            "order": 1,
        },
    )
    assert created.status_code == 201
    job = created.get_json()
    assert job["company"] == "Acme"
    assert job["current"] is True

    page_cache.set("/", "<html>old</html>")
    updated = client.put(f"/api/job-history/{job['id']}", json={"position": "Lead Engineer"})
    assert updated.status_code == 200
    assert updated.get_json()["position"] == "Lead Engineer"
    assert not page_cache.is_cached("/")

    listing = client.get("/api/job-history").get_json()
    assert [item["position"] for item in listing] == ["Lead Engineer"]

    deleted = client.delete(f"/api/job-history/{job['id']}")
    assert deleted.status_code == 200
    assert deleted.get_json() == {"message": "Job history deleted"}
    assert client.get("/api/job-history").get_json() == []


def test_job_history_validation_and_missing(client):
    login(client)
    response = client.post("/api/job-history", json={"company": "Acme"})
    assert response.status_code == 400
    assert "position is required" in response.get_json()["errors"]

    assert client.put("/api/job-history/999", json={"company": "x"}).status_code == 404
    assert client.delete("/api/job-history/999").status_code == 404


def test_certification_crud(client):
    login(client)
    created = client.post(
        "/api/certifications",
        json={
            "name": "CKA",
            "issuer": "CNCF",
            "issueDate": "2022-11-20",
            "credentialUrl": "https://www.cncf.io/certification/cka/",
        },
    )
    assert created.status_code == 201
    certification = created.get_json()
    assert certification["credentialUrl"] == "https://www.cncf.io/certification/cka/"
    assert certification["expiryDate"] is None

    updated = client.put(
        f"/api/certifications/{certification['id']}", json={"expiryDate": "2025-11-20"}
    )
    assert updated.status_code == 200
    assert updated.get_json()["expiryDate"].startswith("2025-11-20")

    deleted = client.delete(f"/api/certifications/{certification['id']}")
    assert deleted.status_code == 200
    assert deleted.get_json() == {"message": "Certification deleted"}


def test_admin_screens_are_cached_until_mutation(client):
    login(client)
    first = client.get("/admin/job-history").get_json()
    assert first == {"jobs": []}
    assert page_cache.is_cached("/admin/job-history")

    client.post(
        "/api/job-history",
        json={"company": "Acme", "position": "Dev", "startDate": "2021-01-01"},
    )
    second = client.get("/admin/job-history").get_json()
    assert [job["company"] for job in second["jobs"]] == ["Acme"]
