"""
➡️ But : Centraliser les erreurs de l'API et leur rendu HTTP.

ApiError (et ses sous-classes) sont levées par les services : NotFoundError → 404, InternalError → 500.

register_exception_handlers(app) branche des handlers FastAPI qui transforment ces exceptions
(et celles de Starlette / SQLAlchemy) en enveloppe {data, status, message}.

StartupError : erreur fatale de démarrage (connexion DB, migrations), remontée jusqu'au point d'entrée.
"""

from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from todo_api.core.logging import get_logger
from todo_api.core.responses import MESSAGE_FAILED, build_response

logger = get_logger(__name__)


class ApiError(Exception):
    """Erreur métier rendue dans l'enveloppe ; data peut porter la charge utile soumise."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str = "", *, data: Optional[Any] = None):
        super().__init__(detail)
        self.detail = detail
        self.data = data


class NotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND


class InternalError(ApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class StartupError(Exception):
    pass


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ApiError)
    async def _api_error(request: Request, exc: ApiError):
        return build_response(exc.data, exc.status_code, MESSAGE_FAILED)

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException):
        # routes inconnues (404), méthode non supportée (405)...
        return build_response(None, exc.status_code, MESSAGE_FAILED, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError):
        # seul cas possible : {id} non entier dans le chemin, rendu comme une erreur DB (500)
        logger.error("Invalid path parameter on %s %s", request.method, request.url.path)
        return build_response(None, status.HTTP_500_INTERNAL_SERVER_ERROR, MESSAGE_FAILED)

    @app.exception_handler(SQLAlchemyError)
    async def _db_error(request: Request, exc: SQLAlchemyError):
        logger.error("Unhandled database error on %s %s: %s", request.method, request.url.path, exc)
        return build_response(None, status.HTTP_500_INTERNAL_SERVER_ERROR, MESSAGE_FAILED)
