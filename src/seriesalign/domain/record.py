from __future__ import annotations

from typing import Any, Mapping

# A flat query-result row: column name -> str | int | float | bool | None.
Record = Mapping[str, Any]
