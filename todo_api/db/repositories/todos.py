"""
➡️ But : Encapsuler toutes les opérations de base de données sur la table todo.

TodoRepository : une instruction SQL par méthode, commit immédiat après chaque écriture.

Ne contient aucune logique métier, juste de la persistance : les erreurs SQLAlchemy remontent telles quelles.

Update et delete sont des instructions UPDATE / DELETE ... WHERE id directes (pas de unit-of-work ORM) :
une ligne supprimée entre la vérification et l'écriture touche simplement 0 ligne.
"""

from typing import Optional, Sequence

from sqlalchemy import delete as sa_delete, update as sa_update
from sqlalchemy.engine import Row
from sqlmodel import Session, select

from todo_api.db.models.todos import Todo


class TodoRepository:
    def __init__(self, session: Session):
        self.session = session

    # ---------- READ ----------

    def list(self) -> Sequence[Row]:
        """SELECT id, title, is_done (description jamais renvoyée)."""
        stmt = select(Todo.id, Todo.title, Todo.is_done).order_by(Todo.id)
        return self.session.exec(stmt).all()

    def get(self, todo_id: int) -> Optional[Row]:
        """SELECT title, description, is_done WHERE id ; None si absent."""
        stmt = select(Todo.title, Todo.description, Todo.is_done).where(Todo.id == todo_id)
        return self.session.exec(stmt).first()

    def exists(self, todo_id: int) -> bool:
        """SELECT id WHERE id (vérification avant update)."""
        stmt = select(Todo.id).where(Todo.id == todo_id)
        return self.session.exec(stmt).first() is not None

    def get_for_delete(self, todo_id: int) -> Optional[Row]:
        """SELECT title, description WHERE id (photo de la ligne avant delete)."""
        stmt = select(Todo.title, Todo.description).where(Todo.id == todo_id)
        return self.session.exec(stmt).first()

    # ---------- CREATE ----------

    def create(self, *, title: str, description: str) -> None:
        # id généré par la base, is_done prend la valeur par défaut
        self.session.add(Todo(title=title, description=description))
        self.session.commit()

    # ---------- UPDATE ----------

    def update(self, todo_id: int, *, title: str, description: str, is_done: bool) -> int:
        """UPDATE des trois colonnes, toujours envoyé ; retourne le nombre de lignes touchées."""
        stmt = (
            sa_update(Todo)
            .where(Todo.id == todo_id)
            .values(title=title, description=description, is_done=is_done)
        )
        result = self.session.connection().execute(stmt)
        self.session.commit()
        return result.rowcount

    # ---------- DELETE ----------

    def delete(self, todo_id: int) -> int:
        result = self.session.connection().execute(sa_delete(Todo).where(Todo.id == todo_id))
        self.session.commit()
        return result.rowcount
