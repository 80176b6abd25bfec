"""
Módulo base para migradores de colecciones MongoDB → Firestore.

Define la interfaz común (contrato) que todo migrador debe implementar. Esto
permite que mongomigra.py orqueste cualquier migrador sin conocer sus
detalles internos.

Patrón de diseño: Strategy Pattern + Template Method
- mongomigra.py = Contexto (orquestador)
- BaseMigrator = Estrategia abstracta
- FirestoreMigrator = Estrategia concreta

Cada fase tiene dos caras:
- read_documents() / normalize_documents() / write_documents():
  implementadas por la subclase, lanzan MigrationError
- read() / normalize() / write():
  frontera de fase, NUNCA lanzan MigrationError; retornan PhaseResult

Flujo de uso:
    result = migrator.read('todos')
    if not result.ok:
        ...  # result.error tiene la excepción original
    docs = result.value
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

from .errors import MigrationError


@dataclass
class PhaseResult:
    """
    Resultado de una fase de la migración.

    Attributes:
        phase (str): 'read', 'normalize' o 'write'
        ok (bool): True si la fase terminó sin errores
        value: Valor producido por la fase (documentos, records o total)
        error: Excepción de la fase si ok es False
    """

    phase: str
    ok: bool
    value: Any = None
    error: Optional[MigrationError] = None

    @classmethod
    def success(cls, phase, value):
        return cls(phase=phase, ok=True, value=value)

    @classmethod
    def failure(cls, phase, error):
        return cls(phase=phase, ok=False, error=error)


class BaseMigrator(ABC):
    """
    Clase abstracta que define la interfaz para migradores de colecciones.
    """

    @abstractmethod
    def read_documents(self, collection_name: str) -> list:
        """
        Lee TODOS los documentos de la colección origen.

        Args:
            collection_name: Nombre de la colección en MongoDB

        Returns:
            list: Documentos en orden natural de la colección

        Raises:
            StoreConnectionError: Si la conexión origen no está inicializada
            ReadError: Si la lectura falla
        """
        pass

    @abstractmethod
    def normalize_documents(self, docs: list) -> list:
        """
        Transforma documentos origen en TargetRecord (mismo orden).

        Raises:
            ValidationError: Si algún documento no tiene un _id utilizable
        """
        pass

    @abstractmethod
    def write_documents(self, collection_name: str, records: list) -> int:
        """
        Escribe los records en la colección destino.

        Returns:
            int: Total de documentos escritos

        Raises:
            StoreConnectionError: Si la conexión destino no está inicializada
            WriteError: Si falla el commit de algún batch
        """
        pass

    # =========================================================================
    # FRONTERAS DE FASE
    # =========================================================================

    def read(self, collection_name):
        try:
            return PhaseResult.success("read", self.read_documents(collection_name))
        except MigrationError as e:
            e.collection = e.collection or collection_name
            return PhaseResult.failure("read", e)

    def normalize(self, docs, collection_name=None):
        try:
            return PhaseResult.success("normalize", self.normalize_documents(docs))
        except MigrationError as e:
            e.collection = e.collection or collection_name
            return PhaseResult.failure("normalize", e)

    def write(self, collection_name, records):
        try:
            return PhaseResult.success(
                "write", self.write_documents(collection_name, records)
            )
        except MigrationError as e:
            e.collection = e.collection or collection_name
            return PhaseResult.failure("write", e)
