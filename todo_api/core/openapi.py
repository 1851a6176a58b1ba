"""
➡️ But : Personnaliser la documentation Swagger/OpenAPI.

custom_openapi(app) complète le schéma généré par FastAPI avec une description
des conventions de l'API (enveloppe de réponse, codes d'erreur).
"""

from fastapi.openapi.utils import get_openapi


def custom_openapi(app):
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=(
            "API CRUD de todos (FastAPI + PostgreSQL).\n\n"
            "### Conventions\n"
            "- Toute réponse est une enveloppe `{data, status, message}`.\n"
            "- `message` vaut `Success` ou `Failed`, `status` reprend le code HTTP.\n"
            "- Pas de pagination : `GET /todo` renvoie toutes les lignes.\n"
        ),
        routes=app.routes,
    )
    app.openapi_schema = openapi_schema
    return app.openapi_schema
