"""Conversión de ids (str) a ObjectId."""
from typing import Optional

from bson import ObjectId
from bson.errors import InvalidId


def parse_object_id(value: object) -> Optional[ObjectId]:
    """Devuelve el ObjectId para `value` o None si no es un id válido."""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None
