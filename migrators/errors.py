"""
Excepciones tipadas del proceso de migración.

Cada fase (lectura, normalización, escritura) lanza su propio tipo para que
el orquestador pueda reportar qué falló y en qué colección.

Jerarquía:
    MigrationError
    ├── StoreConnectionError  (también es ConnectionError)
    ├── ReadError
    ├── WriteError
    └── ValidationError
"""


class MigrationError(Exception):
    """
    Error base de la migración.

    Attributes:
        collection (str|None): Colección que se estaba procesando
    """

    def __init__(self, message, collection=None):
        super().__init__(message)
        self.collection = collection


class StoreConnectionError(MigrationError, ConnectionError):
    """El handle de MongoDB o de Firestore no está disponible."""


class ReadError(MigrationError):
    """Falló la lectura de la colección origen."""


class WriteError(MigrationError):
    """
    Falló el commit de un batch en Firestore.

    Attributes:
        committed (int): Documentos ya confirmados antes del fallo
    """

    def __init__(self, message, collection=None, committed=0):
        super().__init__(message, collection)
        self.committed = committed


class ValidationError(MigrationError):
    """Documento con forma inesperada (ej: sin _id)."""
