import os
import contextlib
from typing import Any, Dict

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker, Session

from core.config_loader import load_config

_config = load_config()

DATABASE_URL = os.environ.get("DATABASE_URL", _config.database.url)


def engine_options(url: str, pool_timeout_seconds: int, statement_timeout_ms: int) -> Dict[str, Any]:
    """Pool and statement timeouts for the given backend."""
    backend = make_url(url).get_backend_name()
    if backend == "postgresql":
        return {
            "pool_pre_ping": True,
            "pool_timeout": pool_timeout_seconds,
            "connect_args": {
                "connect_timeout": pool_timeout_seconds,
                "options": f"-c statement_timeout={statement_timeout_ms}",
            },
        }
    if backend == "sqlite":
        return {"connect_args": {"check_same_thread": False, "timeout": pool_timeout_seconds}}
    return {"pool_pre_ping": True}


engine = create_engine(
    DATABASE_URL,
    **engine_options(
        DATABASE_URL,
        _config.database.pool_timeout_seconds,
        _config.database.statement_timeout_ms,
    )
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@contextlib.contextmanager
def db_session_scope():
    """Provide a transactional scope around a series of operations."""
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
