"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras y estrictas (Pydantic v2).
- El dominio no conoce httpx, settings ni CLI: solo descriptores de request
  y los valores que acepta la API de filtros.
"""
