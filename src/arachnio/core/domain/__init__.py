"""Modelos y entidades del dominio.

Estructuras de datos puras (Pydantic v2): peticiones y respuestas de la API.
El dominio no conoce HTTP ni la consola.
"""
