"""
Suite de tests para sistema de migración MongoDB → Firestore.

Los tests NO se conectan a servicios reales, solo validan:
- Sintaxis de código Python
- Configuración de colecciones
- Normalización de documentos
- Escritura en batches y orquestación con dobles en memoria
"""
