"""
Operaciones básicas sobre Firestore (destino de la migración).

Funciones planas que reciben el cliente de Firestore de forma explícita.
Todas retornan diccionarios con la key 'id' más los campos del documento.

Uso:
    doc = get_document(connections.firestore, 'todos', '65f1a2b3c4d5e6f7a8b9c0d1')
    if doc is None:
        print('No existe')
"""

import sys

from google.cloud.firestore_v1.base_query import FieldFilter

from migrators.errors import StoreConnectionError


def _require_client(firestore_client):
    if firestore_client is None:
        raise StoreConnectionError("Firestore no inicializado")
    return firestore_client


def _snapshot_to_dict(snapshot):
    return {"id": snapshot.id, **(snapshot.to_dict() or {})}


def get_collection(firestore_client, collection_name):
    """Retorna todos los documentos de una colección (lista vacía si no hay)."""
    client = _require_client(firestore_client)
    try:
        return [
            _snapshot_to_dict(snapshot)
            for snapshot in client.collection(collection_name).stream()
        ]
    except Exception as e:
        print(f"❌ Error leyendo colección {collection_name}: {e}", file=sys.stderr)
        raise


def get_document(firestore_client, collection_name, doc_id):
    """
    Lee un documento por ID.

    Returns:
        dict | None: Documento con 'id', o None si no existe
    """
    client = _require_client(firestore_client)
    try:
        snapshot = client.collection(collection_name).document(doc_id).get()
    except Exception as e:
        print(
            f"❌ Error leyendo documento {collection_name}/{doc_id}: {e}",
            file=sys.stderr,
        )
        raise

    if not snapshot.exists:
        return None
    return _snapshot_to_dict(snapshot)


def add_document(firestore_client, collection_name, data):
    """Crea un documento con ID autogenerado y retorna el ID."""
    client = _require_client(firestore_client)
    try:
        _, doc_ref = client.collection(collection_name).add(data)
    except Exception as e:
        print(f"❌ Error agregando documento a {collection_name}: {e}", file=sys.stderr)
        raise
    return doc_ref.id


def update_document(firestore_client, collection_name, doc_id, data):
    """
    Actualiza campos de un documento existente (merge parcial).

    Raises:
        StoreConnectionError: Si el cliente no está inicializado
        google.api_core.exceptions.NotFound: Si el documento no existe
    """
    client = _require_client(firestore_client)
    try:
        client.collection(collection_name).document(doc_id).update(data)
    except Exception as e:
        print(
            f"❌ Error actualizando documento {collection_name}/{doc_id}: {e}",
            file=sys.stderr,
        )
        raise


def delete_document(firestore_client, collection_name, doc_id):
    """Elimina un documento por ID (no falla si ya no existe)."""
    client = _require_client(firestore_client)
    try:
        client.collection(collection_name).document(doc_id).delete()
    except Exception as e:
        print(
            f"❌ Error eliminando documento {collection_name}/{doc_id}: {e}",
            file=sys.stderr,
        )
        raise


def query_collection(firestore_client, collection_name, field, operator, value):
    """
    Filtra una colección por un campo.

    Args:
        operator: Operador de Firestore ('==', '<', 'array-contains', ...)
    """
    client = _require_client(firestore_client)
    try:
        query = client.collection(collection_name).where(
            filter=FieldFilter(field, operator, value)
        )
        return [_snapshot_to_dict(snapshot) for snapshot in query.stream()]
    except Exception as e:
        print(f"❌ Error consultando colección {collection_name}: {e}", file=sys.stderr)
        raise
