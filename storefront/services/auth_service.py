from urllib.parse import quote

from fastapi import HTTPException, status

from storefront.core.config import Settings
from storefront.core.storage import KeyValueStorage
from storefront.models.user import SessionUser, StoredUser
from storefront.repositories.user_repo import UserRepository
from storefront.schemas.user import LoginRequest, RegisterRequest

INVALID_CREDENTIALS = "Invalid email or password."
DUPLICATE_ACCOUNT = "Account with this email already exists."


def avatar_url(name: str, background: str = "random", color: str = "fff") -> str:
    return (
        f"https://ui-avatars.com/api/?name={quote(name, safe='')}"
        f"&background={background}&color={color}"
    )


class AuthService:
    """
    Business logic for the demo auth store.

    Responsibilities:
      - register accounts (case-insensitive unique email)
      - log in against the configured admin pair, then stored accounts
      - keep the single current session

    NOTE:
      - Passwords are plaintext and the admin pair is a hardcoded
        placeholder. Nothing here is a security boundary.
      - Login failures never say whether the email exists.
    """

    def __init__(self, repo: UserRepository, settings: Settings):
        self.repo = repo
        self.settings = settings

    def register(
        self,
        storage: KeyValueStorage,
        payload: RegisterRequest,
    ) -> SessionUser:
        """
        Create a customer account and log it in.

        Raises:
            HTTPException(400): if the email is already registered
            (compared case-insensitively).
        """
        if self.repo.get_by_email(storage, payload.email):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=DUPLICATE_ACCOUNT,
            )

        user = StoredUser(
            name=payload.name,
            email=payload.email,
            password=payload.password,
            role="customer",
            avatar=avatar_url(payload.name),
        )
        self.repo.create(storage, user)
        return self.repo.set_session(storage, user.to_session())

    def login(self, storage: KeyValueStorage, payload: LoginRequest) -> SessionUser:
        """
        Establish a session.

        Order of checks:
          1. hardcoded admin pair (exact match)
          2. stored accounts: case-insensitive email, exact password

        Raises:
            HTTPException(401): generic invalid-credentials error.
        """
        if (
            payload.email == self.settings.ADMIN_EMAIL
            and payload.password == self.settings.ADMIN_PASSWORD
        ):
            admin = SessionUser(
                name=self.settings.ADMIN_NAME,
                email=self.settings.ADMIN_EMAIL,
                role="admin",
                avatar=avatar_url("Admin", background="1c1917"),
            )
            return self.repo.set_session(storage, admin)

        user = self.repo.get_by_email(storage, payload.email)
        if user is None or user.password != payload.password:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=INVALID_CREDENTIALS,
            )
        return self.repo.set_session(storage, user.to_session())

    def logout(self, storage: KeyValueStorage) -> None:
        self.repo.clear_session(storage)

    def current_session(self, storage: KeyValueStorage) -> SessionUser | None:
        return self.repo.get_session(storage)
