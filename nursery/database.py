# nursery/database.py
from sqlalchemy.engine import make_url
from sqlmodel import SQLModel, create_engine, Session

from nursery.core.config import get_settings

settings = get_settings()

# ---------------------------------------------------------
# Database connection
#
# - PostgreSQL: sslmode=require is appended when missing, and the
#   pool is kept small (pool_size=1, max_overflow=0) so several
#   workers do not exhaust a hosted pooler's client limit.
# - SQLite: default pool, check_same_thread disabled because FastAPI
#   runs sync endpoints in a threadpool.
# ---------------------------------------------------------


def _engine_kwargs(db_url: str) -> tuple[str, dict]:
    backend = make_url(db_url).get_backend_name()

    if backend == "sqlite":
        return db_url, {"connect_args": {"check_same_thread": False}}

    if backend == "postgresql" and "sslmode=" not in db_url:
        if "?" in db_url:
            db_url = db_url + "&sslmode=require"
        else:
            db_url = db_url + "?sslmode=require"

    return db_url, {"pool_size": 1, "max_overflow": 0}


db_url, engine_kwargs = _engine_kwargs(settings.DATABASE_URL)

engine = create_engine(
    db_url,
    echo=settings.DATABASE_ECHO,
    pool_pre_ping=True,
    **engine_kwargs,
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

    Usage:

        from fastapi import Depends

        @router.get("/example")
        def example_endpoint(session: Session = Depends(get_session)):
            ...
    """
    with Session(engine) as session:
        yield session
