"""
Relatórios derivados de um Scope.

- call_log        → call log em `pandas.DataFrame`
- scope_report_md → relatório Markdown a partir do ScopeTrace
"""

from .call_log import CALL_LOG_COLUMNS, call_counts, calls_frame
from .scope_report_md import REQUIRED_SECTIONS, generate_scope_report_md

__all__ = [
    "CALL_LOG_COLUMNS",
    "REQUIRED_SECTIONS",
    "call_counts",
    "calls_frame",
    "generate_scope_report_md",
]
