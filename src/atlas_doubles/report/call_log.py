"""
Call log de um Scope como `pandas.DataFrame`.

Uma linha por chamada registrada, ordenada pelo registro do double e, em
seguida, pelo ordinal da chamada. Útil para asserções tabulares quando a
unidade sob teste chama várias dependências muitas vezes.

Colunas (v1):
    target, kind, ordinal, args, kwargs, returned
"""

from __future__ import annotations

from typing import Any, Dict, List

import pandas as pd

from atlas_doubles.core.doubles.scope import Scope
from atlas_doubles.core.doubles.types import Raise

CALL_LOG_COLUMNS: List[str] = ["target", "kind", "ordinal", "args", "kwargs", "returned"]


def calls_frame(scope: Scope) -> pd.DataFrame:
    """Gera o DataFrame do call log de todos os doubles do Scope."""
    rows: List[Dict[str, Any]] = []
    for double in scope.doubles:
        for record in double.calls:
            returned = double.programmed_value(record.ordinal)
            rows.append(
                {
                    "target": double.target.name,
                    "kind": double.kind.value,
                    "ordinal": record.ordinal,
                    "args": record.args,
                    "kwargs": dict(record.kwargs),
                    "returned": None if isinstance(returned, Raise) else returned,
                }
            )

    df = pd.DataFrame(rows, columns=CALL_LOG_COLUMNS)
    if not df.empty:
        df["ordinal"] = df["ordinal"].astype("int64")
    return df


def call_counts(scope: Scope) -> pd.Series:
    """Quantidade de chamadas por alvo (inclui doubles nunca chamados)."""
    counts = {double.target.name: double.call_count for double in scope.doubles}
    return pd.Series(counts, name="calls", dtype="int64")
