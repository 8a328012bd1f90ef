from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)
T0_MS = 1_704_067_200_000


def fixed_clock(when: datetime = T0):
    return lambda: when


def make_row(t: Any, value: Any, group: Any = None, **extra: Any) -> dict[str, Any]:
    row = {"t": t, "v": value}
    if group is not None:
        row["g"] = group
    row.update(extra)
    return row


def assert_columnar_shape(result) -> None:
    assert len(result.data) == len(result.series) + 1
    timeline = result.data[0]
    assert all(len(column) == len(timeline) for column in result.data)
    assert None not in timeline
    assert all(a < b for a, b in zip(timeline, timeline[1:]))
