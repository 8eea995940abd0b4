"""Database initialization script.

    python -m src.catalog.runtime.init_db [--seed]
"""

import argparse

from src.catalog.api.utils.app_startup import configure_logging
from src.catalog.core.services import DbManageService, DbSessionService


def init_db(seed: bool = False) -> None:
    """Create all database tables, optionally loading the sample catalog."""
    db_manage_service = DbManageService(DbSessionService().engine)
    db_manage_service.create_all()
    if seed:
        db_manage_service.seed()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Create the catalog database tables.")
    parser.add_argument(
        "--seed", action="store_true", help="load the sample catalog into an empty database"
    )
    args = parser.parse_args(argv)
    configure_logging()
    init_db(seed=args.seed)


if __name__ == "__main__":
    main()
