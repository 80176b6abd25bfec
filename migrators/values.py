"""
Normalización de documentos MongoDB al formato aceptado por Firestore.

Firestore no conoce los tipos BSON, así que cada valor se clasifica primero
en un ValueKind y luego se transforma con una única función recursiva:

    REFERENCE (ObjectId) → str(ObjectId)
    SEQUENCE             → lista, ObjectId de primer nivel → str
    TIMESTAMP (datetime) → sin cambios (Firestore los guarda nativamente)
    MAPPING              → se normaliza recursivamente
    resto                → sin cambios

El _id del documento NO viaja en el cuerpo: se usa como ID del documento en
Firestore (ver get_document_id). Así, re-ejecutar la migración sobrescribe
en lugar de duplicar.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from bson import ObjectId

from .errors import ValidationError

ID_FIELD = "_id"
MAX_DOC_ID_BYTES = 1500
RESERVED_ID_PATTERN = re.compile(r"__.*__")


class ValueKind(Enum):
    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    TIMESTAMP = "timestamp"
    REFERENCE = "reference"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    OTHER = "other"


@dataclass
class TargetRecord:
    """Documento listo para Firestore: ID destino + cuerpo normalizado."""

    doc_id: str
    data: dict = field(default_factory=dict)


def classify_value(value) -> ValueKind:
    """
    Clasifica un valor BSON en su ValueKind.

    bool se evalúa antes que int porque en Python bool es subclase de int.
    """
    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, datetime):
        return ValueKind.TIMESTAMP
    if isinstance(value, ObjectId):
        return ValueKind.REFERENCE
    if isinstance(value, (list, tuple)):
        return ValueKind.SEQUENCE
    if isinstance(value, Mapping):
        return ValueKind.MAPPING
    return ValueKind.OTHER


def _normalize_element(item):
    # Dentro de arrays solo se convierten ObjectId (sin recursión)
    if classify_value(item) is ValueKind.REFERENCE:
        return str(item)
    return item


def normalize_value(value):
    """
    Aplica las reglas de normalización a un valor según su ValueKind.

    Args:
        value: Valor tal como lo devuelve pymongo

    Returns:
        Valor compatible con Firestore
    """
    kind = classify_value(value)

    if kind is ValueKind.REFERENCE:
        return str(value)
    if kind is ValueKind.SEQUENCE:
        return [_normalize_element(item) for item in value]
    if kind is ValueKind.MAPPING:
        return normalize_mapping(value)
    # NULL, BOOL, NUMBER, STRING, TIMESTAMP, OTHER
    return value


def normalize_mapping(mapping) -> dict:
    """Normaliza cada valor de un mapping preservando el orden de las keys."""
    return {key: normalize_value(value) for key, value in mapping.items()}


def get_document_id(doc) -> str:
    """
    Extrae el ID destino (str del _id) de un documento MongoDB.

    Raises:
        ValidationError: Si el documento no tiene _id o tiene una forma
                         que no se puede usar como ID de Firestore
    """
    if ID_FIELD not in doc or doc[ID_FIELD] is None:
        raise ValidationError(f"Documento sin campo '{ID_FIELD}'")

    _id = doc[ID_FIELD]
    kind = classify_value(_id)
    if kind not in (ValueKind.REFERENCE, ValueKind.STRING, ValueKind.NUMBER):
        raise ValidationError(
            f"Campo '{ID_FIELD}' con tipo no soportado: {type(_id).__name__}"
        )

    doc_id = str(_id)
    if not doc_id:
        raise ValidationError(f"Campo '{ID_FIELD}' vacío")

    # Restricciones de Firestore para IDs de documento
    if "/" in doc_id:
        raise ValidationError(f"ID '{doc_id}' contiene '/', no válido en Firestore")
    if doc_id in (".", "..") or RESERVED_ID_PATTERN.fullmatch(doc_id):
        raise ValidationError(f"ID '{doc_id}' reservado en Firestore")
    if len(doc_id.encode("utf-8")) > MAX_DOC_ID_BYTES:
        raise ValidationError(f"ID de más de {MAX_DOC_ID_BYTES} bytes")
    return doc_id


def normalize_document(doc) -> TargetRecord:
    """
    Convierte un documento MongoDB en un TargetRecord.

    El _id de primer nivel se elimina del cuerpo y pasa a ser doc_id.
    Los _id de subdocumentos se conservan (solo se convierten a string).
    El documento original no se modifica.

    Ejemplo:
        >>> oid = ObjectId('65f1a2b3c4d5e6f7a8b9c0d1')
        >>> rec = normalize_document({'_id': oid, 'user': oid, 'tags': ['a']})
        >>> rec.doc_id, rec.data
        ('65f1a2b3c4d5e6f7a8b9c0d1', {'user': '65f1a2b3c4d5e6f7a8b9c0d1', 'tags': ['a']})
    """
    doc_id = get_document_id(doc)
    data = {
        key: normalize_value(value) for key, value in doc.items() if key != ID_FIELD
    }
    return TargetRecord(doc_id=doc_id, data=data)
