"""
➡️ But : Configurer la connexion à la base et gérer les sessions de base de données.

build_engine() : crée l'engine SQLAlchemy (pool de connexions) depuis Settings.DATABASE_URL.

check_connection() : ouvre une connexion au démarrage pour échouer tôt si la base est injoignable.

get_session() : dépendance FastAPI qui ouvre une session sur l'engine de l'app, la fournit aux routes, puis la ferme proprement.

🔹 Avantages :

Pas d'engine global : il est créé au démarrage et rangé dans app.state.engine.

Réutilisable par injection (Depends(get_session)).
"""

from typing import Any, Dict

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlmodel import Session, create_engine

from todo_api.core.config import Settings


def build_engine(settings: Settings) -> Engine:
    url = settings.DATABASE_URL
    assert url, "DATABASE_URL must be set"

    is_sqlite = url.startswith("sqlite:")

    connect_args: Dict[str, Any] = {}
    if is_sqlite:
        # Requis pour SQLite quand utilisé dans un app serveur (multi-threads)
        connect_args["check_same_thread"] = False

    # echo seulement en dev pour ne pas polluer les logs en prod
    engine = create_engine(
        url,
        echo=(settings.ENV == "dev"),
        connect_args=connect_args,
        pool_pre_ping=not is_sqlite,  # ping utile pour Postgres ; inutile pour SQLite
    )
    return engine


def check_connection(engine: Engine) -> None:
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))


def get_session(request: Request):
    """
    Dépendance FastAPI : fournit une session par requête.
    Utilisation :
        def route(..., session: Session = Depends(get_session)):
            ...
    """
    with Session(request.app.state.engine) as session:
        yield session
