from tests.helpers import ADMIN, login


def test_json_login_and_dashboard(client):
    login(client)
    response = client.get("/admin")
    assert response.status_code == 200
    body = response.get_json()
    assert body["status"] == "admin ok"
    assert body["profile"] is False
    assert body["counts"] == {"jobs": 0, "certifications": 0, "posts": 0, "published_posts": 0}


def test_login_is_case_insensitive_on_email(client):
    login(client, {"email": "ADMIN@Example.com", "password": ADMIN["password"]})


def test_invalid_credentials_are_rejected(client):
    response = client.post("/auth/login", json={"email": ADMIN["email"], "password": "nope"})
    assert response.status_code == 401
    assert response.get_json() == {"error": "invalid credentials"}

    response = client.post("/auth/login", data={"email": ADMIN["email"], "password": "nope"})
    assert response.status_code == 401
    assert "Invalid email or password." in response.get_data(as_text=True)


def test_form_login_redirects_to_safe_next(client):
    response = client.post(
        "/auth/login",
        data={"email": ADMIN["email"], "password": ADMIN["password"], "next": "/admin/blog"},
    )
    assert response.status_code == 302
    assert response.headers["Location"].endswith("/admin/blog")

    client.post("/auth/logout")
    response = client.post(
        "/auth/login",
        data={"email": ADMIN["email"], "password": ADMIN["password"], "next": "https://evil.example"},
    )
    assert response.status_code == 302
    assert response.headers["Location"].endswith("/admin")


def test_login_page_renders(client):
    response = client.get("/auth/login?next=/admin")
    assert response.status_code == 200
    assert 'name="password"' in response.get_data(as_text=True)


def test_logout_ends_session(client):
    login(client)
    response = client.post("/auth/logout", json={})
    assert response.status_code == 200
    assert response.get_json() == {"status": "logged_out"}
    assert client.get("/admin/profile").status_code == 302
