"""
Applique les migrations sans démarrer le serveur (CI, déploiement) :

    python -m scripts.migrate            # applique ce qui est en attente
    python -m scripts.migrate --status   # affiche la version courante et les migrations en attente
"""

import argparse
import sys

from pydantic import ValidationError

from todo_api.core.config import Settings
from todo_api.core.logging import configure_logging, get_logger
from todo_api.db.migrator import MigrationError, Migrator, run_migrations
from todo_api.db.session import build_engine

logger = get_logger("scripts.migrate")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Apply pending SQL migrations")
    parser.add_argument("--status", action="store_true", help="show current version and pending migrations")
    args = parser.parse_args(argv)

    try:
        settings = Settings()
    except ValidationError as exc:
        configure_logging()
        logger.critical("Invalid configuration: %s", exc)
        return 1

    configure_logging(settings.LOG_LEVEL)
    engine = build_engine(settings)
    try:
        if args.status:
            migrator = Migrator(engine, settings.MIGRATIONS_DIR)
            version, dirty = migrator.current_version()
            print(f"version: {version} dirty: {dirty}")
            for m in migrator.pending():
                print(f"pending: {m.version}_{m.name}")
        else:
            run_migrations(engine, settings.MIGRATIONS_DIR)
    except MigrationError as exc:
        logger.critical("%s", exc)
        return 1
    finally:
        engine.dispose()
    return 0


if __name__ == "__main__":
    sys.exit(main())
