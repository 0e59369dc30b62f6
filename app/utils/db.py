from contextlib import contextmanager
import logging
from models import db
from app.services.errors import ServiceError

logger = logging.getLogger(__name__)


@contextmanager
def transactional(message="DB transaction failed"):
    """Commit the session on success; roll back and re-raise on any error.

    ``ServiceError`` is an expected outcome (bad input, illegal transition)
    and is logged at warning level without a traceback.
    """
    try:
        yield
        db.session.commit()
    except ServiceError as e:
        db.session.rollback()
        logger.warning("%s: %s", message, e)
        raise
    except Exception as e:
        logger.error(f"{message}: %s", e, exc_info=True)
        db.session.rollback()
        raise
