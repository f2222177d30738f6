import logging

from fitsquad.db.base import Base
from fitsquad.db.session import engine
import fitsquad.models.user
import fitsquad.models.client
import fitsquad.models.program
import fitsquad.models.training_session
import fitsquad.models.progress

logger = logging.getLogger(__name__)


def init_db(bind=None):
    """Create all tables. Safe to call on every startup."""
    target = bind if bind is not None else engine
    Base.metadata.create_all(bind=target)
    logger.info('Database tables ensured on %s', target.url.render_as_string(hide_password=True))
