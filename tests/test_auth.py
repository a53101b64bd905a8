"""Tests for registration, login and logout routes."""

from datetime import UTC, datetime, timedelta

from fastapi import status
from sqlalchemy import func, select

from tech_news.core.settings import settings
from tech_news.models import User
from tech_news.services.session_codec import decode_token, issue_token


def _user_count(db_session) -> int:
    return db_session.execute(select(func.count()).select_from(User)).scalar_one()


def _session_cookie(response) -> str:
    return response.cookies.get(settings.session_cookie_name)


class TestRegister:
    """Test POST /register."""

    def test_register_success(self, client, db_session):
        """A valid registration redirects home with a session cookie."""
        response = client.post(
            "/register",
            data={"username": "bob1", "password": "secret12"},
            follow_redirects=False,
        )

        assert response.status_code == status.HTTP_302_FOUND
        assert response.headers["location"] == "/"

        token = _session_cookie(response)
        claim = decode_token(token)
        assert claim is not None
        assert claim.username == "bob1"

        user = db_session.execute(select(User).where(User.username == "bob1")).scalar_one()
        assert claim.user_id == user.id
        assert user.password_hash != "secret12"

    def test_session_cookie_attributes(self, client):
        response = client.post(
            "/register",
            data={"username": "bob1", "password": "secret12"},
            follow_redirects=False,
        )

        set_cookie = response.headers["set-cookie"].lower()
        assert set_cookie.startswith(settings.session_cookie_name.lower() + "=")
        assert "httponly" in set_cookie
        assert "samesite=strict" in set_cookie
        assert "secure" in set_cookie
        assert f"max-age={settings.session_ttl_seconds}" in set_cookie

    def test_register_duplicate(self, client, db_session):
        """Registering a taken username shows an error and adds no row."""
        client.post("/register", data={"username": "bob1", "password": "secret12"}, follow_redirects=False)
        client.cookies.clear()

        response = client.post(
            "/register",
            data={"username": "bob1", "password": "another99"},
            follow_redirects=False,
        )

        assert response.status_code == status.HTTP_200_OK
        assert "username already taken." in response.text
        assert settings.session_cookie_name not in response.cookies
        assert _user_count(db_session) == 1

    def test_register_shows_every_error(self, client, db_session):
        response = client.post("/register", data={"username": "a!", "password": "123"})

        assert response.status_code == status.HTTP_200_OK
        assert "Username must be at least 3 characters." in response.text
        assert "Username can only contain letters and numbers." in response.text
        assert "Password must be at least 7 characters." in response.text
        assert _user_count(db_session) == 0

    def test_register_missing_fields(self, client):
        response = client.post("/register", data={})

        assert "You must provide a username." in response.text
        assert "You must provide a password." in response.text

    def test_register_accepts_json(self, client, db_session):
        response = client.post(
            "/register",
            json={"username": "json1", "password": "secret12"},
            follow_redirects=False,
        )

        assert response.status_code == status.HTTP_302_FOUND
        assert _user_count(db_session) == 1

    def test_register_non_string_json_fields(self, client, db_session):
        response = client.post("/register", json={"username": 12345, "password": ["secret12"]})

        assert response.status_code == status.HTTP_200_OK
        assert "You must provide a username." in response.text
        assert "You must provide a password." in response.text
        assert _user_count(db_session) == 0

    def test_register_json_array_body(self, client):
        response = client.post("/register", json=["bob1", "secret12"])

        assert response.status_code == status.HTTP_200_OK
        assert "You must provide a username." in response.text

    def test_register_then_dashboard(self, client):
        """The cookie set at registration authenticates later requests."""
        client.post("/register", data={"username": "bob1", "password": "secret12"})

        response = client.get("/")
        assert "Your posts" in response.text
        assert "Hello, bob1" in response.text


class TestLogin:
    """Test GET and POST /login."""

    def test_login_page(self, client):
        response = client.get("/login")
        assert response.status_code == status.HTTP_200_OK
        assert 'action="/login"' in response.text

    def test_login_success(self, client, test_user):
        response = client.post(
            "/login",
            data={"username": "alice1", "password": "secret12"},
            follow_redirects=False,
        )

        assert response.status_code == status.HTTP_302_FOUND
        assert response.headers["location"] == "/"
        claim = decode_token(_session_cookie(response))
        assert claim is not None
        assert claim.user_id == test_user.id

    def test_unknown_user_and_wrong_password_look_the_same(self, client, test_user):
        unknown = client.post("/login", data={"username": "ghost", "password": "secret12"})
        wrong = client.post("/login", data={"username": "alice1", "password": "nope-nope"})

        for response in (unknown, wrong):
            assert response.status_code == status.HTTP_200_OK
            assert "Invalid username/password" in response.text
            assert settings.session_cookie_name not in response.cookies

    def test_login_blank_fields(self, client, test_user):
        response = client.post("/login", data={"username": "   ", "password": ""})
        assert "Invalid username/password" in response.text

    def test_login_non_string_input(self, client, test_user):
        response = client.post("/login", json={"username": 123, "password": None})
        assert "Invalid username/password" in response.text

    def test_login_json(self, client, test_user):
        response = client.post(
            "/login",
            json={"username": "alice1", "password": "secret12"},
            follow_redirects=False,
        )
        assert response.status_code == status.HTTP_302_FOUND


class TestLogout:

    def test_logout_clears_cookie(self, client, test_user, login_as):
        login_as(test_user)

        response = client.get("/logout", follow_redirects=False)

        assert response.status_code == status.HTTP_302_FOUND
        assert response.headers["location"] == "/"
        set_cookie = response.headers["set-cookie"].lower()
        assert set_cookie.startswith(settings.session_cookie_name.lower() + '=""')
        assert "max-age=0" in set_cookie

    def test_logout_when_anonymous(self, client):
        response = client.get("/logout", follow_redirects=False)
        assert response.status_code == status.HTTP_302_FOUND


def test_expired_cookie_is_anonymous(client, test_user):
    issued = datetime.now(UTC) - timedelta(seconds=settings.session_ttl_seconds + 5)
    client.cookies.set(settings.session_cookie_name, issue_token(test_user.id, test_user.username, now=issued))

    response = client.get("/")
    assert 'action="/register"' in response.text


def test_tampered_cookie_is_anonymous(client, test_user):
    token = issue_token(test_user.id, test_user.username)
    client.cookies.set(settings.session_cookie_name, token[:-2] + ("AA" if token[-2:] != "AA" else "BB"))

    response = client.get("/")
    assert response.status_code == status.HTTP_200_OK
    assert 'action="/register"' in response.text
