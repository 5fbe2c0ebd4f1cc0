import pytest
from fastapi import HTTPException

from storefront.core.auth import require_admin
from storefront.core.config import Settings
from storefront.repositories.user_repo import UserRepository
from storefront.schemas.user import LoginRequest, RegisterRequest
from storefront.services.auth_service import (
    DUPLICATE_ACCOUNT,
    INVALID_CREDENTIALS,
    AuthService,
)


@pytest.fixture
def auth():
    return AuthService(UserRepository(), Settings())


def _register(auth, storage, email="Alice@Example.com", password="secret"):
    return auth.register(
        storage,
        RegisterRequest(name="Alice", email=email, password=password),
    )


def test_register_creates_customer_session(auth, storage):
    session = _register(auth, storage)

    assert session.role == "customer"
    assert session.name == "Alice"
    assert "ui-avatars.com" in session.avatar
    assert auth.current_session(storage) == session
    assert "password" not in session.model_dump()


def test_register_rejects_email_differing_only_in_case(auth, storage):
    _register(auth, storage, email="alice@example.com")

    with pytest.raises(HTTPException) as exc:
        _register(auth, storage, email="ALICE@example.com")

    assert exc.value.status_code == 400
    assert exc.value.detail == DUPLICATE_ACCOUNT
    assert len(UserRepository().list(storage)) == 1


def test_admin_credentials_grant_admin_role(auth, storage):
    session = auth.login(
        storage,
        LoginRequest(email="admin@geezshirts.com", password="admin123"),
    )

    assert session.role == "admin"
    assert isinstance(require_admin(session).email, str)


def test_unknown_credentials_give_generic_error(auth, storage):
    with pytest.raises(HTTPException) as exc:
        auth.login(storage, LoginRequest(email="nobody@example.com", password="x"))

    assert exc.value.status_code == 401
    assert exc.value.detail == INVALID_CREDENTIALS
    assert auth.current_session(storage) is None


def test_wrong_password_gives_same_error_as_unknown_email(auth, storage):
    _register(auth, storage, email="alice@example.com", password="right")
    auth.logout(storage)

    with pytest.raises(HTTPException) as exc:
        auth.login(storage, LoginRequest(email="alice@example.com", password="wrong"))

    assert exc.value.detail == INVALID_CREDENTIALS


def test_login_matches_email_case_insensitively(auth, storage):
    _register(auth, storage, email="alice@example.com", password="right")
    auth.logout(storage)

    session = auth.login(storage, LoginRequest(email="Alice@Example.COM", password="right"))

    assert session.email == "alice@example.com"


def test_login_replaces_session_and_logout_clears_it(auth, storage):
    _register(auth, storage)
    auth.login(storage, LoginRequest(email="admin@geezshirts.com", password="admin123"))
    assert auth.current_session(storage).role == "admin"

    auth.logout(storage)
    assert auth.current_session(storage) is None


def test_require_admin_rejects_customer(auth, storage):
    session = _register(auth, storage)
    with pytest.raises(HTTPException) as exc:
        require_admin(session)
    assert exc.value.status_code == 403
