"""Service layer for Phrase Hunter."""

from .solver_service import SolverReport, SolverService

__all__ = ["SolverReport", "SolverService"]
