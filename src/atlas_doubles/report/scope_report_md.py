"""
src/atlas_doubles/report/scope_report_md.py

Gerador canônico de relatório Markdown de um Scope (v1).

Regras:
- O relatório é derivado EXCLUSIVAMENTE do ScopeTrace (dict).
- Não infere nem recalcula nada que não esteja registrado no trace.
- Mesmo trace => mesmo Markdown (determinismo por ordenação estável).

Estrutura mínima obrigatória:
# Scope Report
## Summary
## Doubles
## Events
## Limitations
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Tuple

REQUIRED_SECTIONS: List[str] = [
    "# Scope Report",
    "## Summary",
    "## Doubles",
    "## Events",
    "## Limitations",
]


def _sorted_items(d: Any) -> List[Tuple[str, Any]]:
    if not isinstance(d, dict):
        return []
    return sorted(d.items(), key=lambda kv: kv[0])


def _as_compact_json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, sort_keys=True)


def _require_trace(trace: Dict[str, Any]) -> Dict[str, Any]:
    if not isinstance(trace, dict) or not trace:
        raise ValueError("ScopeTrace is required to generate the scope report")
    return trace


def generate_scope_report_md(trace: Dict[str, Any]) -> str:
    """Gera o conteúdo completo do relatório a partir do ScopeTrace (dict)."""
    trace = _require_trace(trace)

    scope = trace.get("scope") if isinstance(trace.get("scope"), dict) else {}
    inputs = trace.get("inputs") if isinstance(trace.get("inputs"), dict) else {}
    doubles = trace.get("doubles") if isinstance(trace.get("doubles"), dict) else {}
    events = trace.get("events") if isinstance(trace.get("events"), list) else []

    lines: List[str] = []

    lines.append("# Scope Report\n")

    lines.append("## Summary")
    lines.append(f"- **Scope ID**: `{scope.get('scope_id', '<unknown>')}`")
    if scope.get("name"):
        lines.append(f"- **Name**: `{scope.get('name')}`")
    lines.append(f"- **Opened At (UTC)**: `{scope.get('opened_at', '<unknown>')}`")
    lines.append(f"- **Closed At (UTC)**: `{scope.get('closed_at') or '<open>'}`")
    lines.append(f"- **Outcome**: `{scope.get('outcome', '<unknown>')}`")
    lines.append(f"- **Config Hash**: `{inputs.get('config_hash', '<unknown>')}`")
    lines.append("")

    lines.append("## Doubles")
    if doubles:
        lines.append("| target | kind | status | calls | programmed |")
        lines.append("|---|---|---|---|---|")
        for name, state in _sorted_items(doubles):
            if not isinstance(state, dict):
                continue
            programmed = state.get("programmed")
            lines.append(
                f"| `{name}` | {state.get('kind', 'unknown')} | {state.get('status', 'unknown')} "
                f"| {state.get('calls', 0)} | {'-' if programmed is None else programmed} |"
            )
        failures = [(n, s["last_error"]) for n, s in _sorted_items(doubles) if isinstance(s, dict) and s.get("last_error")]
        for name, error in failures:
            lines.append(f"\n### `{name}` last error")
            lines.append(f"- **type**: `{error.get('type')}`")
            lines.append(f"- **message**: {error.get('message')}")
    else:
        lines.append("No doubles recorded in the trace.")
    lines.append("")

    lines.append("## Events")
    if events:
        for i, ev in enumerate(events, start=1):
            if not isinstance(ev, dict):
                continue
            target = f" `{ev['target']}`" if ev.get("target") else ""
            payload = f" {_as_compact_json(ev['payload'])}" if "payload" in ev else ""
            lines.append(f"{i}. `{ev.get('event_type')}`{target}{payload}")
    else:
        lines.append("No events recorded in the trace.")
    lines.append("")

    lines.append("## Limitations")
    lines.append("- Call arguments appear as `repr` strings; object identity is not preserved.")
    lines.append("- Disabled traces (`trace.enabled: false`) produce no report.\n")

    return "\n".join(lines)
