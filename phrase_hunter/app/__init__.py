"""Application layer: settings, services and the command line."""

from .config import SolverSettings
from .services import SolverReport, SolverService

__all__ = ["SolverReport", "SolverService", "SolverSettings"]
