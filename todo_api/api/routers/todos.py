"""
➡️ But : Définir les endpoints de l'API todo.

C'est la couche la plus proche du web :

Réceptionne les requêtes HTTP (GET, POST, PUT, DELETE)

Appelle le service correspondant

Retourne l'enveloppe {data, status, message} ; les erreurs (404, 500) sont levées par le service
et rendues par les handlers de core/errors.py.

🔹 Avantages :

Automatiquement documentée dans Swagger (summary, response_model).

Isolation totale du reste du code : les routes ne contiennent ni SQL ni logique métier.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from todo_api.api.dependencies import get_todo_service, read_create_payload, read_update_payload
from todo_api.core.responses import MESSAGE_SUCCESS, Envelope, build_response
from todo_api.features.todos.schemas import (
    TodoCreateIn,
    TodoDeletedOut,
    TodoOut,
    TodoSummaryOut,
    TodoUpdateIn,
)
from todo_api.features.todos.services import TodoService

router = APIRouter(
    prefix="/todo",
    tags=["todo"],
    responses={
        404: {"model": Envelope[None], "description": "Not Found"},
        500: {"model": Envelope[None], "description": "Database error"},
    },
)


@router.get(
    "",
    summary="Lister les todos",
    description="Retourne toutes les tâches (id, title, is_done), sans description.",
    response_model=Envelope[List[TodoSummaryOut]],
)
def list_todos(svc: TodoService = Depends(get_todo_service)):
    return build_response(svc.list(), status.HTTP_200_OK, MESSAGE_SUCCESS)


@router.get(
    "/{todo_id}",
    summary="Récupérer un todo",
    response_model=Envelope[TodoOut],
)
def get_todo(todo_id: int, svc: TodoService = Depends(get_todo_service)):
    return build_response(svc.get(todo_id), status.HTTP_200_OK, MESSAGE_SUCCESS)


@router.post(
    "",
    summary="Créer un todo",
    status_code=status.HTTP_201_CREATED,
    response_model=Envelope[TodoOut],
    openapi_extra={
        "requestBody": {
            "content": {"application/json": {"schema": TodoCreateIn.model_json_schema()}}
        }
    },
)
def create_todo(
    payload: TodoCreateIn = Depends(read_create_payload),
    svc: TodoService = Depends(get_todo_service),
):
    return build_response(svc.create(payload), status.HTTP_201_CREATED, MESSAGE_SUCCESS)


@router.put(
    "/{todo_id}",
    summary="Remplacer un todo",
    description="Remplace title, description et is_done ; les champs absents sont remis à vide / false.",
    response_model=Envelope[TodoOut],
    openapi_extra={
        "requestBody": {
            "content": {"application/json": {"schema": TodoUpdateIn.model_json_schema()}}
        }
    },
)
def update_todo(
    todo_id: int,
    payload: TodoUpdateIn = Depends(read_update_payload),
    svc: TodoService = Depends(get_todo_service),
):
    return build_response(svc.update(todo_id, payload), status.HTTP_200_OK, MESSAGE_SUCCESS)


@router.delete(
    "/{todo_id}",
    summary="Supprimer un todo",
    response_model=Envelope[TodoDeletedOut],
)
def delete_todo(todo_id: int, svc: TodoService = Depends(get_todo_service)):
    return build_response(svc.delete(todo_id), status.HTTP_200_OK, MESSAGE_SUCCESS)
