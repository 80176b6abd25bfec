"""
Migradores para copiar colecciones MongoDB a Firestore.

Cada migrador implementa la interfaz BaseMigrator y es instanciado por
mongomigra.py con las conexiones ya abiertas.

Estructura:
    base.py: Clase abstracta BaseMigrator y PhaseResult
    errors.py: Excepciones tipadas por fase
    values.py: Normalización de valores BSON → Firestore
    firestore.py: FirestoreMigrator (lectura, normalización, escritura en batches)

Interfaz requerida (ver BaseMigrator):
    - read_documents(collection_name)
    - normalize_documents(docs)
    - write_documents(collection_name, records)
"""
