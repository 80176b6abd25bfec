"""
Funciones helper y dobles en memoria compartidos por todos los tests.

Proporciona fakes mínimos de pymongo (Database/Collection) y del cliente de
Firestore (collection/document/batch) para ejecutar migraciones completas sin
servicios externos.
"""

import sys
import os

# Agregar directorio raíz al path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from bson import ObjectId
from pymongo.errors import OperationFailure

from connections import Connections


# =============================================================================
# MONGODB
# =============================================================================


class FakeCursor(list):
    def limit(self, n):
        return FakeCursor(self[:n])


class FakeMongoCollection:
    def __init__(self, docs, fail=False):
        self.docs = docs
        self.fail = fail

    def find(self, filter=None, projection=None):
        if self.fail:
            raise OperationFailure("find falló")
        if projection:
            keys = [key for key, include in projection.items() if include]
            return FakeCursor({k: d[k] for k in keys if k in d} for d in self.docs)
        return FakeCursor(dict(d) for d in self.docs)

    def count_documents(self, filter):
        return len(self.docs)


class FakeMongoDB:
    """Database de pymongo: db['coleccion'] → FakeMongoCollection."""

    def __init__(self, collections=None, failing=()):
        self.collections = collections or {}
        self.failing = set(failing)

    def __getitem__(self, name):
        return FakeMongoCollection(
            self.collections.get(name, []), fail=name in self.failing
        )


class FakeMongoClient:
    def __init__(self):
        self.closed = False

    def close(self):
        self.closed = True


# =============================================================================
# FIRESTORE
# =============================================================================


class FakeSnapshot:
    def __init__(self, doc_id, data):
        self.id = doc_id
        self._data = data

    @property
    def exists(self):
        return self._data is not None

    def to_dict(self):
        return None if self._data is None else dict(self._data)


class FakeDocumentRef:
    def __init__(self, client, collection, doc_id):
        self.client = client
        self.collection = collection
        self.id = doc_id

    def get(self):
        data = self.client.store.get(self.collection, {}).get(self.id)
        return FakeSnapshot(self.id, data)

    def set(self, data):
        self.client.store.setdefault(self.collection, {})[self.id] = dict(data)

    def update(self, data):
        docs = self.client.store.get(self.collection, {})
        if self.id not in docs:
            raise KeyError(f"No existe {self.collection}/{self.id}")
        docs[self.id].update(data)

    def delete(self):
        self.client.store.get(self.collection, {}).pop(self.id, None)


class FakeQuery:
    def __init__(self, snapshots):
        self._snapshots = snapshots

    def stream(self):
        return iter(self._snapshots)


class FakeCollectionRef:
    def __init__(self, client, name):
        self.client = client
        self.name = name

    def document(self, doc_id):
        # Igual que el cliente real: un ID con '/' es una ruta, no un documento
        if "/" in doc_id:
            raise ValueError(
                "A document must have an even number of path elements"
            )
        return FakeDocumentRef(self.client, self.name, doc_id)

    def stream(self):
        docs = self.client.store.get(self.name, {})
        return iter([FakeSnapshot(k, v) for k, v in docs.items()])

    def add(self, data):
        self.client.auto_id += 1
        ref = self.document(f"auto{self.client.auto_id}")
        ref.set(data)
        return None, ref

    def where(self, filter=None):
        # Solo '==' es necesario para los tests
        matches = [
            snapshot
            for snapshot in self.stream()
            if snapshot.to_dict().get(filter.field_path) == filter.value
        ]
        return FakeQuery(matches)


class FakeBatch:
    def __init__(self, client):
        self.client = client
        self.writes = []
        self.committed = False

    def set(self, ref, data):
        assert not self.committed, "Batch reutilizado después de commit"
        self.writes.append((ref, data))

    def commit(self):
        index = len(self.client.committed_sizes)
        if index in self.client.fail_on_commits:
            raise RuntimeError(f"commit #{index} rechazado")
        for ref, data in self.writes:
            ref.set(data)
        self.committed = True
        self.client.committed_sizes.append(len(self.writes))


class FakeFirestore:
    """
    Cliente de Firestore en memoria.

    Attributes:
        store: {coleccion: {doc_id: data}}
        committed_sizes: Tamaño de cada batch confirmado, en orden
        fail_on_commits: Índices de commit (0-based) que deben fallar
    """

    def __init__(self, fail_on_commits=()):
        self.store = {}
        self.committed_sizes = []
        self.fail_on_commits = set(fail_on_commits)
        self.auto_id = 0

    def collection(self, name):
        return FakeCollectionRef(self, name)

    def batch(self):
        return FakeBatch(self)


# =============================================================================
# DATOS DE PRUEBA
# =============================================================================


def make_docs(count, **extra):
    """Genera `count` documentos con ObjectId y un campo 'n'."""
    return [{"_id": ObjectId(), "n": i, **extra} for i in range(count)]


def make_connections(collections=None, firestore=None, failing=()):
    return Connections(
        mongo_client=FakeMongoClient(),
        mongo_db=FakeMongoDB(collections, failing=failing),
        firestore=firestore,
    )
