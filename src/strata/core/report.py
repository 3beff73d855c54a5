# src/strata/core/report.py
"""
Relatório de build — Event Log estruturado da montagem da configuração.

O relatório registra, em ordem, o que aconteceu durante um build:
quais fontes foram carregadas, quais foram ignoradas (opcionais
ausentes), qual falhou e qual foi a identidade (hash) da árvore final.

Eventos canônicos:
    - build_started
    - source_loaded
    - source_skipped
    - source_failed
    - build_finished

Princípios fundamentais:
    - Logs não são strings livres, mas eventos estruturados
    - A ordem do Event Log reflete a ordem de chamada
    - Timestamps são sempre UTC timezone-aware (ISO 8601)

Limites explícitos:
    - Não persiste o relatório
    - Não decide políticas de carregamento
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


def _ensure_tzaware_utc(dt: datetime) -> datetime:
    """Timestamps timezone-naive são assumidos como UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


@dataclass
class BuildReport:
    """
    Event Log de um build de configuração.

    Campos:
    - events: lista ordenada de eventos explícitos
    """

    events: List[Dict[str, Any]] = field(default_factory=list)

    def of_type(self, event_type: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e["event_type"] == event_type]

    def to_dict(self) -> Dict[str, Any]:
        return {"events": [dict(e) for e in self.events]}


def add_event(
    report: BuildReport,
    *,
    event_type: str,
    ts: Optional[datetime] = None,
    source: Optional[str] = None,
    payload: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Adiciona um evento explícito ao Event Log do relatório.

    Args:
        report (BuildReport): Relatório a ser atualizado.
        event_type (str): Tipo semântico do evento (ex.: source_loaded).
        ts (Optional[datetime]): Timestamp do evento; agora (UTC) se omitido.
        source (Optional[str]): Fonte associada, se aplicável.
        payload (Optional[Dict[str, Any]]): Dados adicionais do evento.

    Returns:
        Dict[str, Any]: O evento registrado.
    """
    ts = _ensure_tzaware_utc(ts or datetime.now(timezone.utc))

    ev: Dict[str, Any] = {"event_type": event_type, "timestamp": ts.isoformat()}
    if source is not None:
        ev["source"] = source
    if payload is not None:
        ev["payload"] = payload

    report.events.append(ev)
    return ev
