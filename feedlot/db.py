from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.orm.exc import StaleDataError

from feedlot.core.config import settings
from feedlot.core.errors import InvariantViolation
from feedlot.models.base import Base

__all__ = ["Base", "engine", "SessionLocal", "get_db", "make_engine", "make_session_factory", "atomic"]


def make_engine(url: str, **kwargs):
    # SQLite + FastAPI: la sesión puede usarse desde otro hilo del pool
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    return create_engine(url, **kwargs)


def make_session_factory(bind) -> sessionmaker:
    return sessionmaker(bind=bind, autoflush=False, expire_on_commit=False)


engine = make_engine(settings.DATABASE_URL)

SessionLocal = make_session_factory(engine)


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def atomic(db: Session) -> Iterator[Session]:
    """
    Una escritura del ledger = una transacción: el evento y la mutación del
    corral se confirman juntos o no se confirma ninguno.

    Si otro escritor confirmó antes sobre el mismo corral, la versión leída ya
    no coincide: se deshace todo y se lanza InvariantViolation.
    """
    try:
        yield db
        db.commit()
    except StaleDataError as exc:
        db.rollback()
        raise InvariantViolation(
            "Pen was modified by a concurrent write, retry the operation"
        ) from exc
    except Exception:
        db.rollback()
        raise
