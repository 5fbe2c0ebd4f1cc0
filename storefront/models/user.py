from typing import Literal

from sqlmodel import SQLModel

# Application role. Guests are represented by the absence of a session.
Role = Literal["customer", "admin"]


class SessionUser(SQLModel):
    """
    Identity of the current session.

    Stored under '<prefix>_user' as a denormalized copy of one user,
    without the password. Only one session exists at a time.
    """

    name: str
    email: str
    role: Role = "customer"
    avatar: str | None = None


class StoredUser(SessionUser):
    """
    Registered account as kept in the '<prefix>_users' list.

    NOTE:
      - the password is stored and compared in plaintext; this is a demo
        store inherited as-is and must be replaced by a real credential
        service before any non-demo use
      - a stored record whose role is "admin" grants admin rights
    """

    password: str

    def to_session(self) -> SessionUser:
        return SessionUser(
            name=self.name,
            email=self.email,
            role=self.role,
            avatar=self.avatar,
        )
