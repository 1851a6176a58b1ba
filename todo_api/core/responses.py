"""
➡️ But : Définir l'enveloppe de réponse commune à toutes les routes.

Chaque réponse HTTP (succès ou erreur) a exactement la même forme :

{"data": ..., "status": 200, "message": "Success"}

status reprend toujours le code HTTP réellement renvoyé, message vaut "Success" ou "Failed".

🔹 Avantages :

Le front n'a qu'un seul format à parser.

Les erreurs passent par le même chemin que les succès (voir core/errors.py).
"""

from typing import Any, Generic, Mapping, Optional, TypeVar

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel

MESSAGE_SUCCESS = "Success"
MESSAGE_FAILED = "Failed"

DataT = TypeVar("DataT")


class Envelope(BaseModel, Generic[DataT]):
    data: Optional[DataT] = None
    status: int
    message: str


def build_response(
    data: Any,
    status_code: int,
    message: str,
    headers: Optional[Mapping[str, str]] = None,
) -> JSONResponse:
    """Sérialise l'enveloppe {data, status, message} en application/json (headers : ex. Allow sur 405)."""
    envelope = Envelope[Any](data=data, status=status_code, message=message)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(envelope), headers=headers)
