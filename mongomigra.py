r"""
Script principal de migración de colecciones MongoDB a Firestore.

Arquitectura:
- mongomigra.py: Orquestación (fases, aislamiento de fallos, resumen)
- connections.py: Conexiones explícitas a MongoDB y Firestore
- migrators/*.py: Lectura, normalización y escritura (implementan BaseMigrator)
- config.py: Configuración centralizada de colecciones

Flujo de ejecución:
1. Abrir conexiones (si MongoDB falla → exit code 1)
2. Para cada colección de config.MIGRATION_ORDER:
   a. Leer todos los documentos
   b. Normalizar (ObjectId → string, _id → ID del documento)
   c. Escribir en batches de 500 con commit por batch
3. Un fallo en una colección se reporta y se continúa con la siguiente
4. Cerrar conexiones

Uso:
    python mongomigra.py                # Migra todas las colecciones
    python mongomigra.py users todos    # Solo las indicadas
"""

import sys
import traceback

import config
from connections import open_connections
from migrators.firestore import FirestoreMigrator


def migrate_collection(connections, source_collection, target_collection=None,
                       migrator=None):
    """
    Migra una colección de MongoDB a Firestore.

    Las fases se ejecutan estrictamente en secuencia. Cada una retorna un
    PhaseResult; si alguna falla se informa con el nombre de la colección y
    se relanza la excepción original.

    Args:
        connections: Connections abiertas por open_connections()
        source_collection: Nombre de la colección en MongoDB
        target_collection: Nombre en Firestore (por defecto el mismo)
        migrator: BaseMigrator a usar (por defecto FirestoreMigrator)

    Returns:
        int: Documentos migrados (0 si la colección origen está vacía)

    Raises:
        MigrationError: Si falla la lectura, normalización o escritura
    """
    target_collection = target_collection or source_collection
    if migrator is None:
        migrator = FirestoreMigrator(connections.mongo_db, connections.firestore)

    print(
        f"\n🚚 Iniciando migración de MongoDB '{source_collection}' "
        f"→ Firestore '{target_collection}'..."
    )

    result = migrator.read(source_collection)
    if not result.ok:
        _report_failure(source_collection, result)
        raise result.error

    docs = result.value
    if not docs:
        print(
            f"⚠️  No se encontraron documentos en '{source_collection}'. "
            "Se omite la migración."
        )
        return 0

    result = migrator.normalize(docs, source_collection)
    if not result.ok:
        _report_failure(source_collection, result)
        raise result.error

    result = migrator.write(target_collection, result.value)
    if not result.ok:
        _report_failure(source_collection, result)
        raise result.error

    print(
        f"✅ Migración de '{source_collection}' completada: "
        f"{result.value:,} documentos"
    )
    return result.value


def _report_failure(collection_name, result):
    print(
        f"❌ Falló la fase '{result.phase}' de '{collection_name}': {result.error}",
        file=sys.stderr,
    )


def run_migration(connections, collections=None):
    """
    Migra una lista de colecciones, aislando los fallos por colección.

    Args:
        connections: Connections abiertas
        collections: Nombres a migrar (por defecto config.MIGRATION_ORDER)

    Returns:
        dict: {colección: int migrados | Exception}, en orden de ejecución
    """
    if collections is None:
        collections = config.MIGRATION_ORDER
    results = {}

    for collection_name in collections:
        target = config.get_target_collection(collection_name)
        try:
            results[collection_name] = migrate_collection(
                connections, collection_name, target
            )
        except Exception as e:
            print(
                f"❌ Migración fallida para '{collection_name}': {e}", file=sys.stderr
            )
            results[collection_name] = e

    print_summary(results)
    return results


def print_summary(results):
    """Imprime el resumen de resultados por colección."""
    print("\n" + "=" * 70)
    print("📊 RESUMEN DE MIGRACIÓN")
    print("=" * 70)

    for collection_name, outcome in results.items():
        if isinstance(outcome, Exception):
            print(f"   ❌ FAIL  {collection_name}: {type(outcome).__name__}")
        else:
            print(f"   ✅ OK    {collection_name}: {outcome:,} documentos")

    print("=" * 70)


def main(argv=None):
    """
    Función principal que coordina el flujo completo de migración.

    Exit Codes:
        0: Proceso completado (los fallos por colección se informan en el resumen)
        1: Error de conexión o error no controlado
    """
    argv = sys.argv[1:] if argv is None else argv
    collections = list(argv) or config.MIGRATION_ORDER

    print("=" * 70)
    print("🚀 SISTEMA DE MIGRACIÓN MONGODB → FIRESTORE")
    print("=" * 70)
    print(f"📍 Colecciones: {', '.join(collections)}")

    connections = None
    try:
        connections = open_connections()
        run_migration(connections, collections)

        print("\n" + "=" * 70)
        print("✅ TODAS LAS MIGRACIONES FINALIZADAS")
        print("=" * 70)
        return 0

    except Exception as e:
        print(f"\n❌ Proceso de migración fallido: {e}", file=sys.stderr)
        traceback.print_exc()
        return 1

    finally:
        if connections is not None:
            print("\n🔒 Cerrando conexiones...")
            connections.close()
            print("✅ Conexiones cerradas correctamente")


if __name__ == "__main__":
    sys.exit(main())
