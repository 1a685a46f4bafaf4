from __future__ import annotations

import logging

from focusflow.infrastructure.db.engine import Base, get_engine
from focusflow.infrastructure.db.models import focus  # noqa: F401
from focusflow.shared.config import get_settings


logger = logging.getLogger(__name__)


def init_db(engine) -> None:
    Base.metadata.create_all(engine)


def main() -> None:
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)
    if not settings.postgres_dsn:
        raise SystemExit("POSTGRES_DSN is required.")
    init_db(get_engine(settings.postgres_dsn))
    logger.info("init_db: tables_created tables=%s", ",".join(sorted(Base.metadata.tables)))


if __name__ == "__main__":
    main()
