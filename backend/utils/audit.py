import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.log import Log

logger = logging.getLogger(__name__)


def write_log(db: Session, *, action, resource, status="SUCCESS", ip=None, meta=None) -> bool:
    """Append an audit row. Runs after the mutation has committed, so a failure
    here is logged and swallowed instead of turning a success into a 500."""
    entry = Log(action=action, resource=resource, status=status, ip=ip, meta=meta or {})
    try:
        db.add(entry)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to write audit log for %s on %s: %s", action, resource, e)
        return False
    return True
