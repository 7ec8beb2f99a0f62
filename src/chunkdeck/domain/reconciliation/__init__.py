"""Reconciliation of class documents against the shared chunk library."""

from __future__ import annotations

from .engine import ReconciliationEngine, ReconciliationResult

__all__ = ["ReconciliationEngine", "ReconciliationResult"]
