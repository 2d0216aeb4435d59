from contextlib import contextmanager
from sqlalchemy.exc import SQLAlchemyError
from siteedit.extensions import db
from siteedit.errors import PersistenceError

@contextmanager
def transactional():
    """Context manager for database transactions."""
    try:
        yield
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        raise PersistenceError("Failed to save changes") from exc
    except Exception:
        db.session.rollback()
        raise
