"""Session factories and unit-of-work scoping.

One session is one unit of work: it is committed when the block exits
cleanly and rolled back otherwise.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import Engine
from sqlalchemy.orm import Session, sessionmaker


def create_sessionmaker(engine: Engine) -> sessionmaker[Session]:
    """Create a session factory bound to the engine.

    Objects stay usable after commit so callers can keep returned
    aggregates around for the rest of the request.
    """
    return sessionmaker(engine, expire_on_commit=False)


@contextmanager
def session_scope(factory: sessionmaker[Session]) -> Iterator[Session]:
    """Provide a transactional scope around a series of operations.

    Example:
        >>> with session_scope(factory) as session:
        ...     store = RelationshipStore(session=session, ...)
    """
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
