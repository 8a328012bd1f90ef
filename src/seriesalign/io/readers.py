import json
import logging
from pathlib import Path
from typing import Any, Iterable, Iterator, Optional

logger = logging.getLogger(__name__)


def _decode_line(line: str, lineno: int) -> Optional[dict]:
    s = line.strip()
    if not s:
        return None
    try:
        rec = json.loads(s)
    except json.JSONDecodeError as exc:
        logger.warning("skipping malformed NDJSON line %d: %s", lineno, exc)
        return None
    if not isinstance(rec, dict):
        logger.warning(
            "skipping NDJSON line %d: expected an object, got %s",
            lineno,
            type(rec).__name__,
        )
        return None
    return rec


def iter_ndjson_lines(lines: Iterable[str]) -> Iterator[dict]:
    """Yield one record per JSON object line; bad lines are logged and skipped."""
    for lineno, line in enumerate(lines, start=1):
        rec = _decode_line(line, lineno)
        if rec is not None:
            yield rec


def parse_ndjson(text: Any) -> list[dict]:
    if not isinstance(text, str) or not text:
        return []
    return list(iter_ndjson_lines(text.splitlines()))


def iter_ndjson(path: Path) -> Iterator[dict]:
    with Path(path).open("r", encoding="utf-8") as f:
        yield from iter_ndjson_lines(f)
