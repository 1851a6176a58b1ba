"""
➡️ But : Appliquer les migrations SQL versionnées au démarrage, avant de servir la moindre requête.

Les scripts vivent dans db/migrations/<dialecte>/ et sont nommés <version>_<nom>.up.sql
(ex : 000001_create_todo_table.up.sql). Les fichiers .down.sql sont ignorés : migrations "forward only".

L'état est stocké dans la table schema_migrations (une seule ligne : version, dirty),
même convention que golang-migrate :
- avant un script : (version, dirty=True) est commité ;
- le script et (version, dirty=False) partent dans la même transaction ;
- si le script échoue, la base reste "dirty" et le prochain démarrage refuse de continuer.

🔹 Avantages :

Redémarrer sans nouvelle migration = no-op (liste vide), pas une erreur.

Toute autre situation lève MigrationError, que le point d'entrée traite comme fatale.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple, Union

from sqlalchemy import BigInteger, Boolean, Column, MetaData, Table, delete, insert, select
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from todo_api.core.logging import get_logger

logger = get_logger(__name__)

MIGRATION_FILE_RE = re.compile(r"^(?P<version>\d+)_(?P<name>.+)\.up\.sql$")

_metadata = MetaData()

schema_migrations = Table(
    "schema_migrations",
    _metadata,
    Column("version", BigInteger, primary_key=True, autoincrement=False),
    Column("dirty", Boolean, nullable=False),
)


class MigrationError(Exception):
    pass


class DirtyDatabaseError(MigrationError):
    def __init__(self, version: Optional[int]):
        super().__init__(f"Dirty database version {version}. Fix and force version.")
        self.version = version


@dataclass(frozen=True)
class Migration:
    version: int
    name: str
    path: Path

    def read_sql(self) -> str:
        return self.path.read_text(encoding="utf-8")


def resolve_migrations_dir(base: Path, dialect: str) -> Path:
    """Préfère base/<dialecte>/ s'il existe (ex: migrations/postgresql), sinon base."""
    candidate = base / dialect
    return candidate if candidate.is_dir() else base


def discover_migrations(directory: Path) -> List[Migration]:
    """Liste les scripts *.up.sql du dossier, triés par version croissante."""
    if not directory.is_dir():
        raise MigrationError(f"Migrations directory not found: {directory}")

    found = {}
    for path in directory.iterdir():
        match = MIGRATION_FILE_RE.match(path.name)
        if not match or not path.is_file():
            continue
        version = int(match.group("version"))
        if version in found:
            raise MigrationError(
                f"Duplicate migration version {version}: {found[version].path.name} and {path.name}"
            )
        found[version] = Migration(version=version, name=match.group("name"), path=path)

    return [found[v] for v in sorted(found)]


def split_statements(sql: str) -> List[str]:
    """
    Découpe un script en instructions, pour les drivers qui n'exécutent
    qu'une requête par appel (sqlite3). Les lignes de commentaire "--" sont retirées.
    """
    lines = [line for line in sql.splitlines() if not line.strip().startswith("--")]
    return [stmt.strip() for stmt in "\n".join(lines).split(";") if stmt.strip()]


class Migrator:
    def __init__(self, engine: Engine, directory: Union[str, Path]):
        self.engine = engine
        self.directory = resolve_migrations_dir(Path(directory), engine.dialect.name)

    # ---------- STATE ----------

    def current_version(self) -> Tuple[Optional[int], bool]:
        """Retourne (version, dirty) ; (None, False) si aucune migration n'a encore tourné."""
        _metadata.create_all(self.engine)
        with self.engine.connect() as conn:
            row = conn.execute(select(schema_migrations.c.version, schema_migrations.c.dirty)).first()
        if row is None:
            return None, False
        return row.version, bool(row.dirty)

    def pending(self) -> List[Migration]:
        migrations = discover_migrations(self.directory)
        version, dirty = self.current_version()
        if dirty:
            raise DirtyDatabaseError(version)
        if version is None:
            return migrations
        return [m for m in migrations if m.version > version]

    # ---------- APPLY ----------

    def up(self) -> List[Migration]:
        """Applique toutes les migrations en attente, dans l'ordre. Liste vide = rien à faire."""
        pending = self.pending()
        for migration in pending:
            self._apply(migration)
        return pending

    def _apply(self, migration: Migration) -> None:
        logger.info("Applying migration %s_%s", migration.version, migration.name)
        sql = migration.read_sql()
        try:
            with self.engine.begin() as conn:
                self._set_version(conn, migration.version, dirty=True)
            with self.engine.begin() as conn:
                self._execute_script(conn, sql)
                self._set_version(conn, migration.version, dirty=False)
        except SQLAlchemyError as exc:
            raise MigrationError(
                f"Migration {migration.version}_{migration.name} failed: {exc}"
            ) from exc

    def _execute_script(self, conn: Connection, sql: str) -> None:
        if self.engine.dialect.name == "postgresql":
            # psycopg2 accepte plusieurs instructions dans un seul execute
            conn.exec_driver_sql(sql)
            return
        for statement in split_statements(sql):
            conn.exec_driver_sql(statement)

    @staticmethod
    def _set_version(conn: Connection, version: int, *, dirty: bool) -> None:
        conn.execute(delete(schema_migrations))
        conn.execute(insert(schema_migrations).values(version=version, dirty=dirty))


def run_migrations(engine: Engine, directory: Union[str, Path]) -> List[Migration]:
    """Point d'entrée du démarrage : applique les migrations et journalise le résultat."""
    migrator = Migrator(engine, directory)
    logger.info("Migrations source: %s", migrator.directory)
    applied = migrator.up()
    if applied:
        logger.info("Migrations applied successfully (now at version %s)", applied[-1].version)
    else:
        logger.info("No pending migrations, schema is up to date")
    return applied
