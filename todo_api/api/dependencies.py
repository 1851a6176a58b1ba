"""
➡️ But : Centraliser les dépendances réutilisables des routes.

get_todo_service() : crée un TodoService à partir d'une session DB.

read_create_payload() / read_update_payload() : décodent le corps JSON sans jamais le rejeter.
Un corps absent ou illisible donne des champs vides, comme si le client avait envoyé {}.

🔹 Avantages :

Routes plus propres (pas de code dupliqué).

Facile à injecter dans plusieurs endpoints (Depends()).
"""

from typing import Any

from fastapi import Depends, Request
from sqlmodel import Session

from todo_api.db.repositories.todos import TodoRepository
from todo_api.db.session import get_session
from todo_api.features.todos.schemas import TodoCreateIn, TodoUpdateIn
from todo_api.features.todos.services import TodoService


# -----------------------------
# Todo service
# -----------------------------
def get_todo_repository(session: Session = Depends(get_session)) -> TodoRepository:
    return TodoRepository(session)


def get_todo_service(
    repo: TodoRepository = Depends(get_todo_repository),
) -> TodoService:
    return TodoService(repo)


# -----------------------------
# Request bodies
# -----------------------------
async def _read_json(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError:  # JSONDecodeError, UnicodeDecodeError
        return {}


async def read_create_payload(request: Request) -> TodoCreateIn:
    return TodoCreateIn.from_raw(await _read_json(request))


async def read_update_payload(request: Request) -> TodoUpdateIn:
    return TodoUpdateIn.from_raw(await _read_json(request))
