import os
from urllib.parse import quote_plus

from dotenv import load_dotenv
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

load_dotenv()

_engine: Engine | None = None


def database_url() -> str:
    """
    Uses DATABASE_URL if set (e.g. for AWS RDS);
    otherwise builds a psycopg2 URL from DB_HOST, DB_NAME, DB_USER, DB_PASSWORD, DB_PORT.
    """
    url = os.getenv("DATABASE_URL")
    if url:
        # Heroku/RDS style URLs still say postgres://
        if url.startswith("postgres://"):
            url = "postgresql+psycopg2://" + url[len("postgres://") :]
        return url
    user = os.getenv("DB_USER", "dev")
    pwd = quote_plus(os.getenv("DB_PASSWORD", "dev"))
    host = os.getenv("DB_HOST", "127.0.0.1")
    port = os.getenv("DB_PORT", "65432")
    name = os.getenv("DB_NAME", "donations_dev")
    return f"postgresql+psycopg2://{user}:{pwd}@{host}:{port}/{name}"


def _build_engine(url: str) -> Engine:
    engine = create_engine(url, pool_pre_ping=True)
    if engine.dialect.name == "sqlite":
        # sqlite ignores REFERENCES unless asked per connection
        @event.listens_for(engine, "connect")
        def _fk_on(dbapi_conn, _record):
            cur = dbapi_conn.cursor()
            cur.execute("PRAGMA foreign_keys=ON")
            cur.close()

    return engine


def init_engine(url: str | None = None) -> Engine:
    global _engine
    if _engine is not None:
        _engine.dispose()
    _engine = _build_engine(url or database_url())
    return _engine


def get_engine() -> Engine:
    if _engine is None:
        return init_engine()
    return _engine


def get_db_connection():
    """One transaction per call: commits on exit, rolls back on error."""
    return get_engine().begin()


def init_db() -> None:
    from givetrack.models.tables import metadata

    metadata.create_all(get_engine())


def drop_db() -> None:
    from givetrack.models.tables import metadata

    metadata.drop_all(get_engine())
