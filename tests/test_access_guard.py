from datetime import timedelta
from unittest.mock import MagicMock

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from school_auth.application.access_guard import AccessGuard, extract_token
from school_auth.domain.entities import User
from school_auth.domain.errors import AuthError, AuthenticationError, AuthorizationError
from school_auth.infrastructure.db import get_db
from school_auth.infrastructure.security import JoseTokenSigner
from school_auth.interfaces.http.authz import authorize, protect
from school_auth.main import app, auth_error_handler

STUDENT = User(id="u-1", name="A", email="a@b.com", role="student", tenant_id="S1")


@pytest.fixture
def signer():
    return JoseTokenSigner("test-secret")


@pytest.fixture
def repo():
    r = MagicMock()
    r.get_by_id.return_value = STUDENT
    return r


def _token(signer, user_id="u-1", ttl=timedelta(minutes=5)):
    return signer.sign({"id": user_id, "name": "A", "role": "student", "tenantId": "S1"}, ttl)


def test_extract_token_prefers_bearer_header():
    """Header beats cookie"""
    assert extract_token("Bearer header-token", "cookie-token") == "header-token"


def test_extract_token_falls_back_to_cookie():
    assert extract_token(None, "cookie-token") == "cookie-token"
    assert extract_token("Basic abc", "cookie-token") == "cookie-token"


def test_extract_token_empty_bearer_does_not_use_cookie():
    """A Bearer header without a token does not fall through to the cookie"""
    assert extract_token("Bearer", "cookie-token") is None


def test_extract_token_nothing():
    assert extract_token(None, None) is None
    assert extract_token("", "") is None


def test_resolve_without_token_never_touches_store(repo):
    """Missing token fails with 401 before any store access"""
    signer = MagicMock()
    guard = AccessGuard(repo, signer)
    with pytest.raises(AuthenticationError) as exc:
        guard.resolve(None, None)
    assert exc.value.status_code == 401
    assert exc.value.message == "Not authorized to access this route"
    repo.get_by_id.assert_not_called()
    signer.verify.assert_not_called()


def test_resolve_valid_bearer(repo, signer):
    guard = AccessGuard(repo, signer)
    assert guard.resolve(f"Bearer {_token(signer)}", None) == STUDENT
    repo.get_by_id.assert_called_once_with("u-1")


def test_resolve_valid_cookie(repo, signer):
    guard = AccessGuard(repo, signer)
    assert guard.resolve(None, _token(signer)) == STUDENT


def test_resolve_bad_header_ignores_good_cookie(repo, signer):
    """The header wins even when it is the broken one"""
    guard = AccessGuard(repo, signer)
    with pytest.raises(AuthenticationError):
        guard.resolve("Bearer garbage", _token(signer))


@pytest.mark.parametrize("token_factory", [
    lambda s: "not-a-jwt",
    lambda s: "none",
    lambda s: _token(s, ttl=timedelta(seconds=-30)),
    lambda s: _token(JoseTokenSigner("other-secret")),
])
def test_resolve_rejects_unverifiable_tokens(repo, signer, token_factory):
    """Malformed, expired and foreign-signed tokens share one 401"""
    guard = AccessGuard(repo, signer)
    with pytest.raises(AuthenticationError) as exc:
        guard.resolve(f"Bearer {token_factory(signer)}", None)
    assert exc.value.message == "Not authorized to access this route"
    repo.get_by_id.assert_not_called()


def test_resolve_stale_identity(repo, signer):
    """A valid token for a user that no longer exists is rejected"""
    repo.get_by_id.return_value = None
    guard = AccessGuard(repo, signer)
    with pytest.raises(AuthenticationError) as exc:
        guard.resolve(f"Bearer {_token(signer, 'gone')}", None)
    assert exc.value.status_code == 401


def test_authorize_allows_listed_role(repo, signer):
    guard = AccessGuard(repo, signer)
    assert guard.authorize(STUDENT, ("teacher", "student")) == STUDENT


def test_authorize_rejects_other_role_without_side_effects(repo, signer):
    """authorize('admin') on a student is a 403 and touches nothing"""
    guard = AccessGuard(repo, signer)
    with pytest.raises(AuthorizationError) as exc:
        guard.authorize(STUDENT, ("admin",))
    assert exc.value.status_code == 403
    assert exc.value.message == "User role student is not authorized to access this route"
    assert repo.mock_calls == []


# --- Dependencies mounted on a throwaway app

guarded = FastAPI()
guarded.add_exception_handler(AuthError, auth_error_handler)


@pytest.fixture
def guarded_client(client):
    """Client for the throwaway app, sharing the test database"""
    guarded.dependency_overrides[get_db] = app.dependency_overrides[get_db]
    yield TestClient(guarded)
    guarded.dependency_overrides.clear()


@guarded.get("/admin-only")
def admin_only(user: User = Depends(authorize("admin", "super-admin"))):
    return {"role": user.role}


@guarded.get("/whoami")
def whoami(user: User = Depends(protect)):
    return {"id": user.id}


def _register(client, payload):
    return client.post("/api/v1/auth/register", json=payload).json()["token"]


def test_authorize_dependency(client, guarded_client, register_payload):
    """Role gate on a real route: student blocked, super-admin let through"""
    student_token = _register(client, register_payload)
    admin_token = _register(client, {**register_payload, "email": "boss@b.com", "role": "super-admin"})

    g = guarded_client
    denied = g.get("/admin-only", headers={"Authorization": f"Bearer {student_token}"})
    assert denied.status_code == 403
    assert denied.json() == {
        "success": False,
        "error": "User role student is not authorized to access this route",
    }

    allowed = g.get("/admin-only", headers={"Authorization": f"Bearer {admin_token}"})
    assert allowed.status_code == 200
    assert allowed.json() == {"role": "super-admin"}


def test_protect_dependency_reads_cookie(client, guarded_client, register_payload):
    token = _register(client, register_payload)
    g = guarded_client
    assert g.get("/whoami", headers={"Cookie": f"token={token}"}).status_code == 200
    assert g.get("/whoami").status_code == 401
