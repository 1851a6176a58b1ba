"""
➡️ But : assembler toutes les pièces du puzzle.

create_app(settings) crée l'instance FastAPI et configure :

CORS (autorisations de qui peut appeler ces API)

titre, version, tags

schéma OpenAPI personnalisé

handlers d'erreurs (enveloppe {data, status, message} partout)

Inclut le router /todo.

Au démarrage (lifespan) : connexion à la base puis migrations, AVANT de servir la moindre requête.

main() est le seul endroit qui décide d'arrêter le process : configuration invalide,
base injoignable ou migration en échec → log critique et exit(1).

🔹 Avantages :

Point unique d'exécution : todo-api (ou uvicorn todo_api.main:create_app --factory).
"""

import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from todo_api.api.routers import todos
from todo_api.core.config import Settings
from todo_api.core.errors import StartupError, register_exception_handlers
from todo_api.core.logging import configure_logging, get_logger
from todo_api.core.openapi import custom_openapi
from todo_api.db.migrator import MigrationError, run_migrations
from todo_api.db.session import build_engine, check_connection

logger = get_logger(__name__)


def bootstrap(settings: Settings) -> Engine:
    """Ouvre la base et applique les migrations ; lève StartupError si l'une des étapes échoue."""
    engine = build_engine(settings)
    try:
        check_connection(engine)
    except SQLAlchemyError as exc:
        engine.dispose()
        raise StartupError(f"Database connection failed: {exc}") from exc

    try:
        run_migrations(engine, settings.MIGRATIONS_DIR)
    except (MigrationError, SQLAlchemyError) as exc:
        engine.dispose()
        raise StartupError(f"Migrations failed: {exc}") from exc
    return engine


@asynccontextmanager
async def lifespan(app: FastAPI):
    # main() a déjà fait le bootstrap ; sinon (uvicorn --factory, tests) on le fait ici
    if app.state.engine is None:
        app.state.engine = bootstrap(app.state.settings)
    try:
        yield
    finally:
        app.state.engine.dispose()


def create_app(settings: Optional[Settings] = None, engine: Optional[Engine] = None) -> FastAPI:
    settings = settings or Settings()

    app = FastAPI(
        title=settings.APP_NAME,
        version="0.0.1",
        openapi_tags=[
            {"name": "todo", "description": "Opérations CRUD sur les todos"},
        ],
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine

    # CORS (ajustez selon vos besoins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS, allow_credentials=True,
        allow_methods=["*"], allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Routers
    app.include_router(todos.router)

    # Génération du schéma OpenAPI custom
    app.openapi = lambda: custom_openapi(app)
    return app


def main() -> None:
    try:
        settings = Settings()
    except ValidationError as exc:
        configure_logging()
        logger.critical("Invalid configuration: %s", exc)
        sys.exit(1)

    configure_logging(settings.LOG_LEVEL)
    try:
        engine = bootstrap(settings)
    except StartupError as exc:
        logger.critical("%s", exc)
        sys.exit(1)

    app = create_app(settings, engine=engine)
    logger.info("Server listening on %s:%s...", settings.HOST, settings.PORT)
    # uvicorn sort du process si le port ne peut pas être ouvert
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
