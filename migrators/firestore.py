"""
Migrador genérico MongoDB → Firestore.

Implementa la interfaz BaseMigrator para copiar una colección completa:

1. read_documents: find({}) sobre la colección origen (sin filtros ni límite)
2. normalize_documents: normalize_document() de migrators.values
3. write_documents: batches de hasta 500 writes con commit por batch

DECISIONES DE DISEÑO:
- El _id de MongoDB es el ID del documento en Firestore: re-ejecutar
  sobrescribe en lugar de duplicar
- createdAt/updatedAt se completan con la hora actual SOLO si faltan
- Sin reintentos ni rollback: si falla el batch N, los batches 1..N-1
  quedan confirmados en Firestore

Uso (desde mongomigra.py):
    migrator = FirestoreMigrator(connections.mongo_db, connections.firestore)

    docs = migrator.read('todos').value
    records = migrator.normalize(docs).value
    total = migrator.write('todos', records).value
"""

from datetime import datetime, timezone

from pymongo.errors import PyMongoError

import config
from .base import BaseMigrator
from .errors import ReadError, StoreConnectionError, ValidationError, WriteError
from .values import normalize_document

TIMESTAMP_FIELDS = ("createdAt", "updatedAt")


def utc_now():
    return datetime.now(timezone.utc)


class FirestoreMigrator(BaseMigrator):
    """
    Migrador de colecciones MongoDB hacia Firestore.

    Attributes:
        source_db: Database de pymongo (None si no hay conexión)
        target_db: Cliente de Firestore (None si Firebase no se inicializó)
        batch_size (int): Writes por batch, entre 1 y FIRESTORE_BATCH_LIMIT
        clock: Callable sin argumentos que retorna la hora actual
    """

    def __init__(self, source_db, target_db, batch_size=None, clock=None):
        if batch_size is None:
            batch_size = config.BATCH_SIZE
        if not 1 <= batch_size <= config.FIRESTORE_BATCH_LIMIT:
            raise ValueError(
                f"batch_size debe estar entre 1 y {config.FIRESTORE_BATCH_LIMIT}, "
                f"recibido: {batch_size}"
            )
        self.source_db = source_db
        self.target_db = target_db
        self.batch_size = batch_size
        self.clock = clock or utc_now

    # =========================================================================
    # LECTURA
    # =========================================================================

    def read_documents(self, collection_name):
        if self.source_db is None:
            raise StoreConnectionError(
                "Conexión a MongoDB no establecida", collection_name
            )

        try:
            docs = list(self.source_db[collection_name].find({}))
        except PyMongoError as e:
            raise ReadError(
                f"Error leyendo colección '{collection_name}': {e}", collection_name
            ) from e

        print(f"   📥 Obtenidos {len(docs):,} documentos de '{collection_name}'")
        return docs

    # =========================================================================
    # NORMALIZACIÓN
    # =========================================================================

    def normalize_documents(self, docs):
        records = []
        for position, doc in enumerate(docs):
            try:
                records.append(normalize_document(doc))
            except ValidationError as e:
                raise ValidationError(f"Documento #{position}: {e}") from e
        return records

    # =========================================================================
    # ESCRITURA
    # =========================================================================

    def write_documents(self, collection_name, records):
        if self.target_db is None:
            raise StoreConnectionError("Firestore no inicializado", collection_name)

        total = len(records)
        print(
            f"   💾 Escribiendo {total:,} documentos en Firestore '{collection_name}'..."
        )

        collection_ref = self.target_db.collection(collection_name)
        batch = self.target_db.batch()
        batch_count = 0
        total_written = 0

        for i, record in enumerate(records):
            data = self._with_timestamps(record.data)
            try:
                batch.set(collection_ref.document(record.doc_id), data)
            except (ValueError, TypeError) as e:
                raise WriteError(
                    f"Documento '{record.doc_id}' rechazado por Firestore: {e}",
                    collection_name,
                    committed=total_written,
                ) from e
            batch_count += 1

            # Commit al llenar el batch o con el último documento
            if batch_count >= self.batch_size or i == total - 1:
                try:
                    batch.commit()
                except Exception as e:
                    raise WriteError(
                        f"Error en commit de batch ({total_written:,}/{total:,} "
                        f"ya escritos): {e}",
                        collection_name,
                        committed=total_written,
                    ) from e

                total_written += batch_count
                print(
                    f"   ✅ Batch confirmado: {total_written:,}/{total:,} documentos escritos"
                )
                batch = self.target_db.batch()
                batch_count = 0

        return total_written

    def _with_timestamps(self, data):
        """
        Retorna una copia de data con createdAt/updatedAt completados.

        Solo se rellenan los campos ausentes o None, usando el mismo instante
        para ambos. Los valores existentes nunca se sobrescriben.
        """
        result = dict(data)
        missing = [name for name in TIMESTAMP_FIELDS if result.get(name) is None]
        if missing:
            now = self.clock()
            for name in missing:
                result[name] = now
        return result
