# backend/app/init_db.py
"""Create every table registered on ``Base.metadata``."""

import logging

from sqlalchemy.engine import Engine

from . import models  # noqa: F401  registers the tables
from .database import Base, engine

logger = logging.getLogger(__name__)


def init_db(bind: Engine = engine) -> None:
    Base.metadata.create_all(bind=bind)
    logger.info("Database tables ready")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
