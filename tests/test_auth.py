from conftest import PASSWORD, auth_headers

from linkhub.core.security import create_refresh_token, get_password_hash, verify_password

API = "/api/v1"


def test_password_hash_roundtrip():
    hashed = get_password_hash("s3cret")

    assert verify_password("s3cret", hashed)
    assert not verify_password("wrong", hashed)
    assert not verify_password("s3cret", "not-a-bcrypt-hash")


def test_login_returns_usable_tokens(client, users):
    response = client.post(f"{API}/auth/login", json={"username": "Alice", "password": PASSWORD})

    assert response.status_code == 200
    tokens = response.json()
    assert tokens["token_type"] == "bearer"

    me = client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {tokens['access_token']}"})
    assert me.status_code == 200
    assert me.json()["username"] == "alice"
    assert me.json()["is_super_admin"] is False


def test_login_rejects_bad_password(client, users):
    response = client.post(f"{API}/auth/login", json={"username": "alice", "password": "nope"})

    assert response.status_code == 401


def test_refresh_token_cannot_be_used_as_access_token(client, users):
    refresh = create_refresh_token(users["alice"].id)

    response = client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {refresh}"})
    assert response.status_code == 401

    response = client.post(f"{API}/auth/refresh", json={"refresh_token": refresh})
    assert response.status_code == 200
    access = response.json()["access_token"]
    me = client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {access}"})
    assert me.json()["id"] == users["alice"].id


def test_inactive_user_is_rejected(client, session, users):
    headers = auth_headers(users["bob"])
    users["bob"].is_active = False
    session.add(users["bob"])
    session.commit()

    assert client.get(f"{API}/auth/me", headers=headers).status_code == 401


def test_me_reports_super_admin(client, users):
    me = client.get(f"{API}/auth/me", headers=auth_headers(users["root"])).json()

    assert me["role"] == "superadmin"
    assert me["is_super_admin"] is True


def test_refresh_rejects_inactive_or_missing_user(client, session, users):
    refresh = create_refresh_token(users["bob"].id)
    users["bob"].is_active = False
    session.add(users["bob"])
    session.commit()

    response = client.post(f"{API}/auth/refresh", json={"refresh_token": refresh})
    assert response.status_code == 401

    response = client.post(
        f"{API}/auth/refresh", json={"refresh_token": create_refresh_token(9999)}
    )
    assert response.status_code == 401
