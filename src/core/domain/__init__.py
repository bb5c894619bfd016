"""Modelos y entidades del dominio.

Qué vive aquí:
- Las estructuras del import (request por modo, respuesta del registry,
  agrupaciones por modelo) en Pydantic v2 / dataclasses.
- La jerarquía de errores que la CLI traduce a mensajes para el usuario.

El dominio no conoce HTTP, CLI ni el filesystem.
"""
