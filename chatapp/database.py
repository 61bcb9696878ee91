# Database connection bootstrap

import logging

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from chatapp.extensions import db

logger = logging.getLogger(__name__)


def connect_to_database():
    """Create missing tables and check the database answers a round trip.

    Must run inside an application context. A failure is logged and
    reported through the return value so the server keeps starting, the
    same way the HTTP side stays up while the database is unreachable.
    """
    import chatapp.models  # noqa: F401  (registers tables on db.metadata)

    url = db.engine.url.render_as_string(hide_password=True)
    try:
        db.create_all()
        with db.engine.connect() as conn:
            conn.execute(text('SELECT 1'))
    except SQLAlchemyError as e:
        logger.error("Error connecting to database %s: %s", url, e)
        return False

    logger.info("Connected to database %s", url)
    return True
