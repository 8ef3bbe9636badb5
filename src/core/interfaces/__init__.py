"""Interfaces/abstracciones del Core.

Por qué:
- Define el contrato (Protocol) del transporte que ejecuta las requests.
- El `FilterClient` depende de la abstracción, nunca de httpx.
"""
