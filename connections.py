"""
Conexiones a MongoDB (origen) y Firestore (destino).

Las conexiones se abren UNA vez en mongomigra.main() y se pasan de forma
explícita al orquestador y a los migradores. No hay clientes globales.
"""

import sys
from dataclasses import dataclass
from typing import Any, Optional

import firebase_admin
from firebase_admin import credentials, firestore
from pymongo import MongoClient
from pymongo.errors import ConfigurationError, ConnectionFailure

import config
from migrators.errors import StoreConnectionError

FIREBASE_APP_NAME = "mongomigra"


@dataclass
class Connections:
    """
    Handles compartidos durante toda la ejecución.

    Attributes:
        mongo_client: MongoClient de pymongo
        mongo_db: Database de pymongo (origen)
        firestore: Cliente de Firestore (None si Firebase no está configurado)
    """

    mongo_client: Any
    mongo_db: Any
    firestore: Optional[Any] = None

    def close(self):
        if self.mongo_client is not None:
            self.mongo_client.close()


def connect_to_mongo():
    """
    Establece conexión a MongoDB usando credenciales de config.py.

    Returns:
        tuple: (client, database) de pymongo

    Raises:
        StoreConnectionError: Si no puede conectar
    """
    print("🔌 Conectando a MongoDB...")
    try:
        client = MongoClient(
            config.MONGO_URI, serverSelectionTimeoutMS=config.MONGO_TIMEOUT_MS
        )
        client.admin.command("ping")
        db = client.get_default_database(config.MONGO_DATABASE_NAME)
    except (ConnectionFailure, ConfigurationError) as e:
        raise StoreConnectionError(f"Error de conexión a MongoDB: {e}") from e

    print(f"✅ Conexión a MongoDB exitosa ({db.name})")
    return client, db


def connect_to_firestore():
    """
    Inicializa Firebase Admin y retorna el cliente de Firestore.

    Si Firebase no está configurado o la inicialización falla, se informa y
    se retorna None: la migración sigue y cada escritura reportará
    StoreConnectionError.

    Returns:
        google.cloud.firestore.Client | None
    """
    if not config.is_firebase_configured():
        print("⚠️  FIREBASE_PROJECT_ID no configurado, Firestore no disponible")
        return None

    print("🔌 Inicializando Firebase...")
    try:
        try:
            app = firebase_admin.get_app(FIREBASE_APP_NAME)
        except ValueError:
            cred = credentials.Certificate(
                {
                    "type": "service_account",
                    "project_id": config.FIREBASE_PROJECT_ID,
                    "private_key": config.FIREBASE_PRIVATE_KEY,
                    "client_email": config.FIREBASE_CLIENT_EMAIL,
                    "token_uri": "https://oauth2.googleapis.com/token",
                }
            )
            app = firebase_admin.initialize_app(cred, name=FIREBASE_APP_NAME)
        client = firestore.client(app)
    except (ValueError, IOError) as e:
        print(f"❌ Error inicializando Firebase", file=sys.stderr)
        print(f"   Detalle: {e}", file=sys.stderr)
        return None

    print(f"✅ Firebase inicializado ({config.FIREBASE_PROJECT_ID})")
    return client


def open_connections():
    """
    Abre ambas conexiones.

    Raises:
        StoreConnectionError: Si MongoDB no está disponible
    """
    mongo_client, mongo_db = connect_to_mongo()
    return Connections(
        mongo_client=mongo_client,
        mongo_db=mongo_db,
        firestore=connect_to_firestore(),
    )
