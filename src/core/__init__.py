"""Core del catálogo: configuración, dominio, errores y contratos.

No conoce HTTP ni la CLI.
"""
