from fastapi import Depends
from sqlmodel import SQLModel, create_engine, Session

from storefront.core.config import get_settings
from storefront.core.storage import KeyValueStorage, SqlKeyValueStorage

settings = get_settings()

# ---------------------------------------------------------
# Key/value store connection
#
# - SQLite by default (single file next to the process)
# - check_same_thread=False: FastAPI runs sync dependencies in a
#   threadpool, so the connection is used from worker threads
# - pool_pre_ping=True: validate connections before using them
#   (matters for a server database such as Postgres)
# ---------------------------------------------------------

db_url = settings.STORAGE_URL

connect_args: dict = {}
if db_url.startswith("sqlite"):
    connect_args["check_same_thread"] = False

engine = create_engine(
    db_url,
    echo=False,        # set to True if you want to debug SQL queries
    pool_pre_ping=True,
    connect_args=connect_args,
)


def create_db_and_tables() -> None:
    """
    Create all tables defined in SQLModel metadata if they do not exist.

    This is called once on application startup.
    """
    SQLModel.metadata.create_all(engine)


def get_session():
    """
    FastAPI dependency that yields a SQLModel Session.
    """
    with Session(engine) as session:
        yield session


def get_storage(session: Session = Depends(get_session)) -> KeyValueStorage:
    """
    FastAPI dependency returning the persistence port.

    Usage:

        @router.get("/example")
        def example_endpoint(storage: KeyValueStorage = Depends(get_storage)):
            ...

    Tests override this with an InMemoryStorage.
    """
    return SqlKeyValueStorage(session)
