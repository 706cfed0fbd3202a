# -*- coding: utf-8 -*-
"""
analytics/modules/normalization/results.py

Resultados explícitos de la normalización (en lugar de tragar excepciones):

- NormalizationResult: resultado de un evento (APPLIED / SKIPPED / FAILED).
- ReplaySummary: contadores agregados de un replay por lotes.

Autor: Equipo Analytics
Fecha: 2025-11-05
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Optional

from analytics.modules.normalization.classifier import EventKind


class NormalizationOutcome(StrEnum):
    APPLIED = "applied"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class NormalizationResult:
    event_id: Any
    kind: Optional[EventKind]
    outcome: NormalizationOutcome
    reason: Optional[str] = None
    error: Optional[BaseException] = None

    @classmethod
    def ok(cls, event_id: Any, kind: EventKind) -> "NormalizationResult":
        return cls(event_id=event_id, kind=kind, outcome=NormalizationOutcome.APPLIED)

    @classmethod
    def skipped(cls, event_id: Any, kind: Optional[EventKind], reason: str) -> "NormalizationResult":
        return cls(event_id=event_id, kind=kind, outcome=NormalizationOutcome.SKIPPED, reason=reason)

    @classmethod
    def failed(cls, event_id: Any, kind: Optional[EventKind], error: BaseException) -> "NormalizationResult":
        return cls(
            event_id=event_id,
            kind=kind,
            outcome=NormalizationOutcome.FAILED,
            reason=f"{type(error).__name__}: {error}",
            error=error,
        )

    @property
    def is_failure(self) -> bool:
        return self.outcome is NormalizationOutcome.FAILED


@dataclass
class ReplaySummary:
    """
    Contadores de un replay.

    processed cuenta todo evento que no falló (aplicado u omitido);
    skipped es el subconjunto informativo de omitidos.
    """

    total: int = 0
    processed: int = 0
    errors: int = 0
    skipped: int = 0

    def record(self, result: NormalizationResult) -> None:
        if result.is_failure:
            self.errors += 1
            return
        self.processed += 1
        if result.outcome is NormalizationOutcome.SKIPPED:
            self.skipped += 1

    def as_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "processed": self.processed,
            "errors": self.errors,
            "skipped": self.skipped,
        }


__all__ = ["NormalizationOutcome", "NormalizationResult", "ReplaySummary"]

# Fin del archivo analytics/modules/normalization/results.py
