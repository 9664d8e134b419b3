from datetime import timedelta

import pytest
from fastapi import HTTPException

from gallery_admin.utils.auth import CurrentUser, ensure_artwork_access, user_from_claims
from gallery_admin.utils.jwt_auth import TOKEN_COOKIE_NAME, create_access_token, verify_token


def test_missing_token_is_unauthorized(client):
    res = client.get("/api/admin/sorting/artworks")
    assert res.status_code == 401
    assert res.json()["error"] == "Missing token"


def test_bearer_admin_token_is_accepted(client):
    token = create_access_token({"sub": "user-1", "role": "super_admin"})
    res = client.get("/api/admin/sorting/artworks", headers={"Authorization": f"Bearer {token}"})
    assert res.status_code == 200
    assert res.json() == []


def test_cookie_token_is_preferred(client):
    admin = create_access_token({"sub": "user-1", "role": "admin"})
    client.cookies.set(TOKEN_COOKIE_NAME, admin)
    res = client.get("/api/admin/sorting/artworks", headers={"Authorization": "Bearer not-a-token"})
    assert res.status_code == 200


def test_artist_token_is_forbidden_on_admin_routes(client):
    token = create_access_token({"sub": "user-2", "role": "artist", "artist_id": 4})
    res = client.get("/api/admin/stats", headers={"Authorization": f"Bearer {token}"})
    assert res.status_code == 403


def test_expired_token_is_rejected():
    token = create_access_token({"sub": "user-1"}, expires_delta=timedelta(minutes=-5))
    with pytest.raises(HTTPException) as exc_info:
        verify_token(token)
    assert exc_info.value.status_code == 401


def test_claims_default_to_artist_role():
    user = user_from_claims({"sub": "abc", "artist_id": "12", "email": "ana@example.com"})
    assert user == CurrentUser(user_id="abc", role="artist", artist_id=12, display_name="ana@example.com")
    assert not user.is_admin


def test_non_numeric_artist_id_is_ignored():
    assert user_from_claims({"sub": "abc", "artist_id": "x"}).artist_id is None


def test_artwork_access_rules():
    admin = CurrentUser(user_id="a", role="admin")
    owner = CurrentUser(user_id="b", role="artist", artist_id=3)

    ensure_artwork_access(admin, 99)
    ensure_artwork_access(owner, 3)
    with pytest.raises(HTTPException) as exc_info:
        ensure_artwork_access(owner, 4)
    assert exc_info.value.status_code == 403
