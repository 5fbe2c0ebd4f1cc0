from fastapi import APIRouter, Depends, status

from storefront.core.auth import get_current_session, require_session
from storefront.core.config import get_settings
from storefront.core.storage import KeyValueStorage
from storefront.database import get_storage
from storefront.models.user import SessionUser
from storefront.repositories.user_repo import UserRepository
from storefront.schemas.user import LoginRequest, RegisterRequest, SessionRead
from storefront.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])

repo = UserRepository()
service = AuthService(repo, get_settings())


@router.post(
    "/register",
    response_model=SessionRead,
    status_code=status.HTTP_201_CREATED,
)
def register(
    payload: RegisterRequest,
    storage: KeyValueStorage = Depends(get_storage),
):
    """
    Create a customer account and log it in.

    400 if an account already uses this email (any letter case).
    """
    return service.register(storage, payload)


@router.post("/login", response_model=SessionRead)
def login(
    payload: LoginRequest,
    storage: KeyValueStorage = Depends(get_storage),
):
    """
    Log in, replacing any current session.

    401 "Invalid email or password." on any mismatch.
    """
    return service.login(storage, payload)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(storage: KeyValueStorage = Depends(get_storage)):
    service.logout(storage)
    return None


@router.get("/session", response_model=SessionRead | None)
def read_session(session: SessionUser | None = Depends(get_current_session)):
    """
    Current session, or null for guests.
    """
    return session


@router.get("/me", response_model=SessionRead)
def read_me(session: SessionUser = Depends(require_session)):
    """
    Current session; 401 for guests.
    """
    return session
