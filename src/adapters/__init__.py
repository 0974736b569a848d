"""Adaptadores de I/O.

Por qué un paquete:
- Todo lo que toca HTTP o archivos vive aquí (webhook, envío, solución).
- Cada adaptador implementa un contrato de `core.interfaces`.
"""
