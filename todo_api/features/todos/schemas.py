"""
➡️ But : Définir les formats d'entrée/sortie de l'API todo.

Entrées (corps JSON) :

TodoCreateIn → POST /todo   {title, description}

TodoUpdateIn → PUT /todo/{id} {title, description, is_done}

Les entrées sont permissives : un champ absent, null ou du mauvais type prend sa valeur zéro
("" ou False) au lieu de provoquer une 422. Aucune validation n'est ajoutée au-delà de la base.
Les clés sont comparées sans tenir compte de la casse : {"Title": "x"} renseigne title.

Sorties :

TodoSummaryOut → éléments de GET /todo (sans description)

TodoOut → détail, et écho des créations / mises à jour

TodoDeletedOut → ligne supprimée
"""

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator


# ---------- IN ----------

class _LenientIn(BaseModel):
    model_config = ConfigDict(strict=True, extra="ignore")

    @field_validator("*", mode="wrap")
    @classmethod
    def _zero_on_invalid(cls, value: Any, handler, info: ValidationInfo) -> Any:
        try:
            return handler(value)
        except ValidationError:
            return cls.model_fields[info.field_name].get_default()

    @classmethod
    def from_raw(cls, raw: Any):
        """Construit le modèle depuis un JSON déjà décodé ; tout ce qui n'est pas un objet vaut {}."""
        if not isinstance(raw, Mapping):
            raw = {}
        # clés insensibles à la casse ("Title" → title), la dernière occurrence gagne
        names = {name.lower(): name for name in cls.model_fields}
        data = {}
        for key, value in raw.items():
            name = names.get(key.lower()) if isinstance(key, str) else None
            if name is not None:
                data[name] = value
        return cls.model_validate(data)


class TodoCreateIn(_LenientIn):
    title: str = Field("", examples=["Buy milk"])
    description: str = Field("", examples=["2%"])


class TodoUpdateIn(_LenientIn):
    title: str = Field("", examples=["Buy milk"])
    description: str = Field("", examples=["2%"])
    is_done: bool = Field(False, examples=[True])


# ---------- OUT ----------

class TodoSummaryOut(BaseModel):
    id: int
    title: str
    is_done: bool


class TodoOut(BaseModel):
    title: str
    description: str
    is_done: bool = False


class TodoDeletedOut(BaseModel):
    title: str
    description: str
