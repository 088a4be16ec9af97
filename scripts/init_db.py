# scripts/init_db.py
"""
Create the schema in the configured database (BLOMSTERLAN_DATABASE_URL).

    python -m scripts.init_db          # create missing tables
    python -m scripts.init_db --reset  # drop everything first
"""

import argparse
import logging

from blomsterlan.config import get_settings
from blomsterlan.db.engine import get_engine
from blomsterlan.db.schema import metadata
from blomsterlan.logging_config import setup_logging

logger = logging.getLogger(__name__)


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--reset", action="store_true", help="drop all tables before creating them")
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logging(settings.log_level)

    engine = get_engine()
    if args.reset:
        metadata.drop_all(engine)
        logger.warning("Dropped all tables on %s", settings.database_url)
    metadata.create_all(engine)
    logger.info("DB schema created on %s", settings.database_url)


if __name__ == "__main__":
    main()
