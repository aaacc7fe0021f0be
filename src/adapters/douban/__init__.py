"""Adaptador Douban.

Por qué un paquete:
- Separa construcción de URLs, normalización de respuestas y selección de
  transporte; cada pieza se prueba por separado.
"""

from adapters.douban.client import DoubanClient

__all__ = ["DoubanClient"]
