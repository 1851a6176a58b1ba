"""
➡️ But : Décrire la table todo côté ORM.

La table elle-même est créée par les migrations SQL (db/migrations), pas par SQLModel.metadata.create_all :
ce modèle doit donc rester aligné sur 000001_create_todo_table.up.sql.
"""

from typing import Optional
from sqlmodel import SQLModel, Field


class Todo(SQLModel, table=True):
    __tablename__ = "todo"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = ""
    description: str = ""
    is_done: bool = False
