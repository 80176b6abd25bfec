"""
verify_migration.py - Verifica colecciones ya migradas a Firestore

Compara la cantidad de documentos en MongoDB y Firestore y revisa que una
muestra de IDs origen exista en destino con get_document().

Uso:
    python verify_migration.py [colección ...] [--sample N]

Ejemplo:
    python verify_migration.py todos --sample 20
"""

import sys
from dataclasses import dataclass, field

import config
from connections import open_connections
from firestore_service import get_collection, get_document
from migrators.values import get_document_id

DEFAULT_SAMPLE_SIZE = 5


@dataclass
class VerificationReport:
    source_collection: str
    target_collection: str
    source_count: int = 0
    target_count: int = 0
    checked_ids: list = field(default_factory=list)
    missing_ids: list = field(default_factory=list)

    @property
    def ok(self):
        return self.source_count == self.target_count and not self.missing_ids


def verify_collection(connections, source_collection, target_collection=None,
                      sample_size=DEFAULT_SAMPLE_SIZE):
    """
    Verifica una colección migrada.

    Args:
        connections: Connections abiertas
        source_collection: Colección en MongoDB
        target_collection: Colección en Firestore (por defecto la configurada)
        sample_size: Cantidad de IDs origen a revisar uno por uno

    Returns:
        VerificationReport
    """
    # limit(0) en pymongo significa "sin límite"
    if sample_size < 1:
        raise ValueError(f"sample_size debe ser al menos 1, recibido: {sample_size}")

    target_collection = target_collection or config.get_target_collection(
        source_collection
    )
    report = VerificationReport(source_collection, target_collection)

    source = connections.mongo_db[source_collection]
    report.source_count = source.count_documents({})
    report.target_count = len(get_collection(connections.firestore, target_collection))

    for doc in source.find({}, {"_id": 1}).limit(sample_size):
        doc_id = get_document_id(doc)
        report.checked_ids.append(doc_id)
        if get_document(connections.firestore, target_collection, doc_id) is None:
            report.missing_ids.append(doc_id)

    return report


def print_report(report):
    status = "✅" if report.ok else "❌"
    print(f"\n{status} {report.source_collection} → {report.target_collection}")
    print(f"   └─ MongoDB: {report.source_count:,} | Firestore: {report.target_count:,}")
    print(f"   └─ Muestra revisada: {len(report.checked_ids)} IDs")
    for doc_id in report.missing_ids:
        print(f"      ❌ Falta en Firestore: {doc_id}")


def parse_args(argv):
    """Separa nombres de colección y --sample N."""
    collections = []
    sample_size = DEFAULT_SAMPLE_SIZE
    args = list(argv)
    while args:
        arg = args.pop(0)
        if arg == "--sample":
            if not args:
                raise ValueError("--sample requiere un número")
            sample_size = int(args.pop(0))
            if sample_size < 1:
                raise ValueError("--sample debe ser al menos 1")
        else:
            collections.append(arg)
    return collections or list(config.MIGRATION_ORDER), sample_size


def main(argv=None):
    try:
        collections, sample_size = parse_args(sys.argv[1:] if argv is None else argv)
    except ValueError as e:
        print(f"❌ {e}", file=sys.stderr)
        print("Uso: python verify_migration.py [colección ...] [--sample N]")
        return 1

    print("=" * 70)
    print("🔍 VERIFICACIÓN DE MIGRACIÓN MONGODB → FIRESTORE")
    print("=" * 70)

    connections = None
    try:
        connections = open_connections()
        reports = [
            verify_collection(connections, name, sample_size=sample_size)
            for name in collections
        ]
    except Exception as e:
        print(f"\n❌ Error durante la verificación: {e}", file=sys.stderr)
        return 1
    finally:
        if connections is not None:
            connections.close()

    for report in reports:
        print_report(report)

    print("\n" + "=" * 70)
    if all(report.ok for report in reports):
        print("✅ TODAS LAS COLECCIONES COINCIDEN")
        return 0
    print("❌ HAY COLECCIONES CON DIFERENCIAS")
    return 1


if __name__ == "__main__":
    sys.exit(main())
