"""
➡️ But : Centraliser tous les paramètres configurables (base PostgreSQL, port d'écoute, migrations...)

Utilise pydantic-settings pour charger automatiquement les variables d'environnement (.env, variables système…).

Le point d'entrée construit un objet Settings et le passe à create_app() :

settings = Settings()
app = create_app(settings)


🔹 Avantages :

Plus propre que des os.getenv éparpillés dans le code.

Une variable invalide (ex: DB_PORT=abc) lève une ValidationError au démarrage, avant toute connexion.
"""

from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL

# Migrations livrées avec le package : todo_api/db/migrations/<dialecte>/
DEFAULT_MIGRATIONS_DIR = Path(__file__).resolve().parent.parent / "db" / "migrations"


class Settings(BaseSettings):
    # -----------------------------
    # App
    # -----------------------------
    APP_NAME: str = "Todo-API"
    ENV: str = "dev"  # dev | prod | test
    LOG_LEVEL: str = "INFO"

    # -----------------------------
    # HTTP
    # -----------------------------
    HOST: str = "0.0.0.0"
    PORT: int = 8080
    CORS_ORIGINS: List[str] = ["*"]

    # -----------------------------
    # DB (PostgreSQL)
    # -----------------------------
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_USER: str = "postgres"
    DB_PASSWORD: str = ""
    DB_NAME: str = "todo"
    DB_SSLMODE: str = "disable"
    # Si tu veux forcer une URL différente (ex: SQLite), définis DATABASE_URL dans l'env.
    DATABASE_URL: Optional[str] = None

    # -----------------------------
    # Migrations
    # -----------------------------
    MIGRATIONS_DIR: Optional[str] = None

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }

    # -----------------------------
    # Post-process values
    # -----------------------------
    def model_post_init(self, __context):  # appelée automatiquement
        # DATABASE_URL par défaut depuis DB_* si non fourni
        if not self.DATABASE_URL:
            url = URL.create(
                "postgresql+psycopg2",
                username=self.DB_USER,
                password=self.DB_PASSWORD or None,
                host=self.DB_HOST,
                port=self.DB_PORT,
                database=self.DB_NAME,
                query={"sslmode": self.DB_SSLMODE},
            )
            object.__setattr__(self, "DATABASE_URL", url.render_as_string(hide_password=False))

        if not self.MIGRATIONS_DIR:
            object.__setattr__(self, "MIGRATIONS_DIR", str(DEFAULT_MIGRATIONS_DIR))
