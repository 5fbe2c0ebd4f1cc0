from fastapi import Depends, HTTPException, status

from storefront.core.storage import KeyValueStorage
from storefront.database import get_storage
from storefront.models.user import SessionUser
from storefront.repositories.user_repo import UserRepository

user_repo = UserRepository()


class AdminCapability:
    """
    Proof that the current session carries the "admin" role.

    ADVISORY ONLY: the role comes from the client-controlled session
    record (hardcoded admin pair or a stored account whose role field is
    "admin"). It gates routes for the demo; it is not an authorization
    boundary.
    """

    def __init__(self, session: SessionUser):
        self.session = session

    @property
    def email(self) -> str:
        return self.session.email


def get_current_session(
    storage: KeyValueStorage = Depends(get_storage),
) -> SessionUser | None:
    """
    Resolve the single current session.

    Returns:
        SessionUser if someone is logged in, else None (guest).
    """
    return user_repo.get_session(storage)


def require_session(
    session: SessionUser | None = Depends(get_current_session),
) -> SessionUser:
    """
    Enforce a logged-in session.

    Raises:
        HTTPException(401): if nobody is logged in.
    """
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return session


def require_admin(session: SessionUser = Depends(require_session)) -> AdminCapability:
    """
    Enforce the admin role flag.

    Raises:
        HTTPException(403): if the session role is not admin.
    """
    if session.role != "admin":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return AdminCapability(session)
