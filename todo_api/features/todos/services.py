"""
➡️ But : Contenir la logique de l'API todo : orchestrer le repository et traduire ses résultats.

TodoService :
- "aucune ligne" → NotFoundError (404)
- toute erreur SQLAlchemy → InternalError (500), journalisée

Update et delete font une lecture puis une écriture, sans transaction commune :
une suppression concurrente entre les deux n'est pas protégée.

🔹 Avantages :

Code métier découplé du web.

Test unitaire possible sans passer par FastAPI.
"""

from typing import List

from sqlalchemy.exc import SQLAlchemyError

from todo_api.core.errors import InternalError, NotFoundError
from todo_api.core.logging import get_logger
from todo_api.db.repositories.todos import TodoRepository
from todo_api.features.todos.schemas import (
    TodoCreateIn,
    TodoDeletedOut,
    TodoOut,
    TodoSummaryOut,
    TodoUpdateIn,
)

logger = get_logger(__name__)


class TodoService:
    def __init__(self, repo: TodoRepository):
        self.repo = repo

    def list(self) -> List[TodoSummaryOut]:
        try:
            rows = self.repo.list()
        except SQLAlchemyError as exc:
            logger.error("Listing todos failed: %s", exc)
            raise InternalError("Listing todos failed") from exc
        return [TodoSummaryOut(**dict(r._mapping)) for r in rows]

    def get(self, todo_id: int) -> TodoOut:
        try:
            row = self.repo.get(todo_id)
        except SQLAlchemyError as exc:
            logger.error("Reading todo %s failed: %s", todo_id, exc)
            raise InternalError("Reading todo failed") from exc
        if row is None:
            raise NotFoundError("Todo not found")
        return TodoOut(**dict(row._mapping))

    def create(self, payload: TodoCreateIn) -> TodoOut:
        # l'id généré n'est pas relu : on renvoie ce qui a été soumis
        submitted = TodoOut(title=payload.title, description=payload.description)
        try:
            self.repo.create(title=payload.title, description=payload.description)
        except SQLAlchemyError as exc:
            logger.error("Creating todo failed: %s", exc)
            raise InternalError("Creating todo failed", data=submitted) from exc
        return submitted

    def update(self, todo_id: int, payload: TodoUpdateIn) -> TodoOut:
        submitted = TodoOut(**payload.model_dump())
        try:
            found = self.repo.exists(todo_id)
        except SQLAlchemyError as exc:
            logger.error("Looking up todo %s failed: %s", todo_id, exc)
            raise InternalError("Looking up todo failed") from exc
        if not found:
            raise NotFoundError("Todo not found")

        # remplacement complet : aucun champ n'est fusionné avec l'existant
        try:
            self.repo.update(
                todo_id,
                title=payload.title,
                description=payload.description,
                is_done=payload.is_done,
            )
        except SQLAlchemyError as exc:
            logger.error("Updating todo %s failed: %s", todo_id, exc)
            raise InternalError("Updating todo failed", data=submitted) from exc
        return submitted

    def delete(self, todo_id: int) -> TodoDeletedOut:
        try:
            row = self.repo.get_for_delete(todo_id)
            if row is None:
                raise NotFoundError("Todo not found")
            deleted = TodoDeletedOut(**dict(row._mapping))
            self.repo.delete(todo_id)
        except SQLAlchemyError as exc:
            logger.error("Deleting todo %s failed: %s", todo_id, exc)
            raise InternalError("Deleting todo failed") from exc
        return deleted
