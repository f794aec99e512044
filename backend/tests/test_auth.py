import pytest
from fastapi.testclient import TestClient

from jakarta_insight.auth import authenticate, is_protected
from jakarta_insight.main import app


@pytest.fixture
def client():
    return TestClient(app)


def test_authenticate_demo_credential():
    user = authenticate("demo", "demomenyala24")
    assert user is not None
    assert user.as_dict() == {"username": "demo", "role": "admin"}


@pytest.mark.parametrize(
    "username, password",
    [("demo", "wrong"), ("admin", "demomenyala24"), ("", ""), ("Demo", "demomenyala24")],
)
def test_authenticate_rejects_other_pairs(username, password):
    assert authenticate(username, password) is None


def test_credential_comes_from_settings(monkeypatch):
    monkeypatch.setenv("AUTH_USERNAME", "analyst")
    monkeypatch.setenv("AUTH_PASSWORD", "s3cret")
    assert authenticate("analyst", "s3cret").username == "analyst"
    assert authenticate("demo", "demomenyala24") is None


def test_login_sets_cookies(client):
    response = client.post("/api/auth/login", json={"username": "demo", "password": "demomenyala24"})

    assert response.status_code == 200
    assert response.json() == {"username": "demo", "role": "admin"}
    assert client.cookies.get("isAuthenticated") == "true"
    set_cookie = response.headers.get_list("set-cookie")
    assert any("isAuthenticated=true" in c and "Max-Age=604800" in c for c in set_cookie)

    me = client.get("/api/auth/me")
    assert me.status_code == 200
    assert me.json()["username"] == "demo"


def test_failed_login_has_no_side_effects(client):
    response = client.post("/api/auth/login", json={"username": "demo", "password": "nope"})

    assert response.status_code == 401
    assert "set-cookie" not in response.headers
    assert client.cookies.get("isAuthenticated") is None
    assert client.get("/api/auth/me").status_code == 401


def test_logout_clears_cookies(client):
    client.post("/api/auth/login", json={"username": "demo", "password": "demomenyala24"})
    response = client.post("/api/auth/logout")

    assert response.status_code == 200
    assert client.cookies.get("isAuthenticated") is None
    assert client.get("/api/auth/me").status_code == 401


@pytest.mark.parametrize(
    "path",
    ["/dashboard", "/analytics", "/analytics/network", "/citizen-engagement"],
)
def test_protected_pages_redirect_to_login(client, path):
    response = client.get(path, follow_redirects=False)
    assert response.status_code == 307
    assert response.headers["location"] == "/login"


def test_authenticated_user_reaches_pages(client):
    client.cookies.set("isAuthenticated", "true")
    response = client.get("/dashboard", follow_redirects=False)
    assert response.status_code == 200
    assert response.json() == {"page": "/dashboard"}


def test_authenticated_user_is_sent_away_from_login(client):
    client.cookies.set("isAuthenticated", "true")
    response = client.get("/login", follow_redirects=False)
    assert response.status_code == 307
    assert response.headers["location"] == "/dashboard"


def test_login_page_and_api_are_open(client):
    assert client.get("/login", follow_redirects=False).status_code == 200
    assert client.get("/health").json()["status"] == "ok"


def test_pages_serve_built_frontend(client, tmp_path, monkeypatch):
    (tmp_path / "index.html").write_text("<html>jakarta insight</html>")
    monkeypatch.setenv("FRONTEND_DIR", str(tmp_path))
    client.cookies.set("isAuthenticated", "true")

    response = client.get("/citizen-engagement")
    assert response.status_code == 200
    assert "jakarta insight" in response.text


@pytest.mark.parametrize(
    "path, protected",
    [
        ("/dashboard", True),
        ("/dashboard/", True),
        ("/analytics/network", True),
        ("/citizen-engagement/logs/today", True),
        ("/dashboardx", False),
        ("/analytics-archive", False),
        ("/api/dashboard", False),
        ("/", False),
    ],
)
def test_protected_paths_match_whole_segments(path, protected):
    assert is_protected(path) is protected


def test_lookalike_paths_are_not_gated(client):
    response = client.get("/dashboardx", follow_redirects=False)
    assert response.status_code == 404


def test_only_the_login_page_redirects_signed_in_users(client):
    client.cookies.set("isAuthenticated", "true")
    response = client.get("/login-help", follow_redirects=False)
    assert response.status_code == 404
