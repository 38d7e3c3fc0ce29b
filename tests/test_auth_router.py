from types import SimpleNamespace

import search_portal.routers.auth as auth_mod


def _user(*, user_id="u1", username="jdoe", role="viewer", is_active=True, password_hash="hashed"):
    return SimpleNamespace(
        id=user_id,
        username=username,
        email=None,
        role=role,
        is_active=is_active,
        password_hash=password_hash,
    )


def test_login_unknown_user(monkeypatch, client):
    monkeypatch.setattr(auth_mod, "get_by_username", lambda db, username: None)
    resp = client.post("/auth/login", json={"username": "nobody", "password": "bad"})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid username or password"


def test_login_wrong_password_same_message(monkeypatch, client):
    monkeypatch.setattr(auth_mod, "get_by_username", lambda db, username: _user())
    monkeypatch.setattr(auth_mod, "verify_password", lambda plain, hashed: False)
    resp = client.post("/auth/login", json={"username": "jdoe", "password": "bad"})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid username or password"


def test_login_disabled_user(monkeypatch, client):
    monkeypatch.setattr(auth_mod, "get_by_username", lambda db, username: _user(is_active=False))
    monkeypatch.setattr(auth_mod, "verify_password", lambda plain, hashed: True)
    resp = client.post("/auth/login", json={"username": "jdoe", "password": "right"})
    assert resp.status_code == 403


def test_login_success_embeds_role(monkeypatch, client):
    captured = {}
    monkeypatch.setattr(auth_mod, "get_by_username", lambda db, username: _user(role="admin") if username == "jdoe" else None)
    monkeypatch.setattr(auth_mod, "verify_password", lambda plain, hashed: True)

    def _token(subject, role=None):
        captured.update(subject=subject, role=role)
        return "token-1"

    monkeypatch.setattr(auth_mod, "create_access_token", _token)
    resp = client.post("/auth/login", json={"username": "  jdoe ", "password": "right"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["access_token"] == "token-1"
    assert body["user"]["is_admin"] is True
    assert captured == {"subject": "u1", "role": "admin"}


def test_login_unexpected_error_sanitized(monkeypatch, client):
    monkeypatch.setattr(auth_mod, "get_by_username", lambda db, username: (_ for _ in ()).throw(RuntimeError("db")))
    resp = client.post("/auth/login", json={"username": "jdoe", "password": "x"})
    assert resp.status_code == 500
    assert resp.json()["detail"] == "Login failed"


def test_me_returns_current_user(client, stub_user):
    resp = client.get("/auth/me")
    assert resp.status_code == 200
    assert resp.json()["username"] == stub_user.username
    assert resp.json()["is_admin"] is False


def test_change_password_wrong_current(monkeypatch, client):
    monkeypatch.setattr(auth_mod, "verify_password", lambda plain, hashed: False)
    resp = client.patch(
        "/auth/me/password",
        json={"current_password": "x", "new_password": "newpassword", "confirm_new_password": "newpassword"},
    )
    assert resp.status_code == 401


def test_change_password_mismatch_rejected(client):
    resp = client.patch(
        "/auth/me/password",
        json={"current_password": "x", "new_password": "newpassword", "confirm_new_password": "different1"},
    )
    assert resp.status_code == 422


def test_change_password_success(monkeypatch, client, stub_user):
    captured = {}
    monkeypatch.setattr(auth_mod, "verify_password", lambda plain, hashed: True)
    monkeypatch.setattr(auth_mod, "hash_password", lambda pw: f"hashed:{pw}")

    def _update(db, user_id, **kwargs):
        captured.update(user_id=user_id, **kwargs)
        return _user(user_id=user_id, username=stub_user.username)

    monkeypatch.setattr(auth_mod, "update_user", _update)
    resp = client.patch(
        "/auth/me/password",
        json={"current_password": "old", "new_password": "newpassword", "confirm_new_password": "newpassword"},
    )
    assert resp.status_code == 200
    assert captured == {"user_id": stub_user.id, "password_hash": "hashed:newpassword"}
