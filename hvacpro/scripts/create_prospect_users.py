"""
Create demo logins for every prospect contractor

Each prospect gets a contractor user whose username and password are both
its slug, the same account a first visit to its public URL would create.
"""

import sys

import structlog
from sqlmodel import Session

from hvacpro.core.database import engine, init_db
from hvacpro.core.logging import configure_logging
from hvacpro.services.provisioning import provision_all_prospects
from hvacpro.storage import DatabaseStorage

logger = structlog.get_logger(__name__)


def main():
    """Main entry point for prospect provisioning"""
    configure_logging()
    logger.info("Starting prospect user provisioning")

    try:
        init_db()
        with Session(engine) as session:
            results = provision_all_prospects(DatabaseStorage(session))

        logger.info("Prospect user provisioning complete")
        logger.info(f"Results: {results}")

    except Exception as e:
        logger.error(f"Fatal error in prospect provisioning: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
