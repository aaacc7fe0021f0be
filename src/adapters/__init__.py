"""Adaptadores de I/O (HTTP hacia Douban y el servidor local, exportación)."""
