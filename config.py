"""
Configuración centralizada para el sistema de migración MongoDB → Firestore.

ARQUITECTURA:
Cada colección de MongoDB se copia tal cual a una colección de Firestore:
- users: Usuarios de la API (email, password hasheado, timestamps)
- todos: Tareas del usuario autenticado
- tasks: Tareas genéricas (colección heredada)

FLUJO DE MIGRACIÓN:
1. Leer la colección completa desde MongoDB
2. Normalizar cada documento (ObjectId → string, _id → ID del documento)
3. Escribir en Firestore en batches de como máximo 500 documentos

USO DE LAS FUNCIONES HELPER:
    # Obtener configuración de colección
    cfg = get_collection_config('todos')
    destino = cfg['target_collection']  # 'todos'

    # Destino con fallback al mismo nombre
    destino = get_target_collection('coleccion_nueva')  # 'coleccion_nueva'
"""

import os
from dotenv import load_dotenv

# Carga las variables del archivo .env en las variables de entorno del sistema
load_dotenv(override=True)

# --- Configuración de MongoDB (Origen) ---
MONGO_URI = os.getenv("MONGO_URI") or "mongodb://localhost:27017/todos"
# Si queda vacío se usa la base de datos indicada en MONGO_URI
MONGO_DATABASE_NAME = os.getenv("MONGO_DATABASE_NAME") or None
MONGO_TIMEOUT_MS = 5000

# --- Configuración de Firebase (Destino) ---
FIREBASE_PROJECT_ID = os.getenv("FIREBASE_PROJECT_ID") or ""
FIREBASE_CLIENT_EMAIL = os.getenv("FIREBASE_CLIENT_EMAIL") or ""
# Los .env suelen traer la clave con '\n' literales
FIREBASE_PRIVATE_KEY = (os.getenv("FIREBASE_PRIVATE_KEY") or "").replace("\\n", "\n")

# --- Configuración de Migración ---
FIRESTORE_BATCH_LIMIT = 500  # Límite duro de writes por batch atómico en Firestore
BATCH_SIZE = FIRESTORE_BATCH_LIMIT  # Documentos por commit

# --- Configuración Multi-Colección ---
# Cada colección MongoDB define:
# - target_collection: Nombre de la colección destino en Firestore
# - description: Descripción de negocio de la colección

COLLECTIONS = {
    "users": {
        "target_collection": "users",
        "description": "Usuarios registrados (credenciales y timestamps)",
    },
    "todos": {
        "target_collection": "todos",
        "description": "Todos de cada usuario (referencian users vía ObjectId)",
    },
    "tasks": {
        "target_collection": "tasks",
        "description": "Tareas genéricas de la versión anterior de la API",
    },
}

# --- Orden de Migración ---
MIGRATION_ORDER = [
    "users",
    "todos",
    "tasks",
]


# --- Funciones Helper ---


def get_collection_config(collection_name: str) -> dict:
    """
    Obtiene la configuración de una colección por nombre.

    Args:
        collection_name: Nombre de la colección MongoDB (ej: 'todos')

    Returns:
        dict: Configuración de la colección con keys:
              - target_collection: Nombre de la colección en Firestore
              - description: Descripción de negocio

    Raises:
        KeyError: Si la colección no está configurada

    Ejemplo:
        >>> get_collection_config('users')['target_collection']
        'users'
    """
    if collection_name not in COLLECTIONS:
        available = ", ".join(COLLECTIONS.keys())
        raise KeyError(
            f"Colección '{collection_name}' no está configurada.\n"
            f"Colecciones disponibles: {available}"
        )
    return COLLECTIONS[collection_name]


def get_target_collection(collection_name: str) -> str:
    """
    Obtiene el nombre de la colección destino en Firestore.

    Las colecciones no configuradas se migran con el mismo nombre.
    """
    cfg = COLLECTIONS.get(collection_name, {})
    return cfg.get("target_collection") or collection_name


def is_firebase_configured() -> bool:
    """True si hay credenciales suficientes para inicializar Firebase."""
    return bool(FIREBASE_PROJECT_ID)
