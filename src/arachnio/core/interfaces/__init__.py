"""Interfaces/abstracciones del Core.

Contratos (Protocol) que implementan los adaptadores concretos.
"""

from arachnio.core.interfaces.client import ArachnioClient

__all__ = ["ArachnioClient"]
