"""JSON and YAML strategy files.

Both formats hold a list of flat strategy records (see ``records``).  A JSON
export is pretty-printed with two-space indentation.
"""

from __future__ import annotations

import json
import logging
from io import TextIOBase
from pathlib import Path
from typing import Any, Sequence, Union

import yaml

from wear_tco.config.strategy import Strategy
from wear_tco.interchange.records import (
    StrategyImportError,
    strategies_from_records,
    strategy_to_record,
)

logger = logging.getLogger(__name__)

# A str is document text, never a file name.
Source = Union[str, Path, TextIOBase]


def _read_text(source: Source) -> str:
    """``Path`` → file contents, text stream → its contents, ``str`` → itself."""
    if isinstance(source, TextIOBase):
        return source.read()
    if isinstance(source, Path):
        try:
            return source.read_text(encoding="utf-8")
        except OSError as exc:
            raise StrategyImportError(f"cannot read {source}: {exc}") from exc
    return source


def load_strategies_json(source: Source) -> list[Strategy]:
    """Parse a JSON list of strategy records."""
    text = _read_text(source)
    try:
        data: Any = json.loads(text)
    except json.JSONDecodeError as exc:
        raise StrategyImportError(f"invalid JSON: {exc}") from exc
    strategies = strategies_from_records(data)
    logger.info("Loaded %d strategies from JSON", len(strategies))
    return strategies


def dump_strategies_json(strategies: Sequence[Strategy], path: str | Path | None = None) -> str:
    """Serialize strategies as a JSON list; also write it to ``path`` if given."""
    text = json.dumps([strategy_to_record(s) for s in strategies], indent=2)
    if path is not None:
        Path(path).write_text(text, encoding="utf-8")
        logger.info("Wrote %d strategies to %s", len(strategies), path)
    return text


def load_strategies_yaml(source: Source) -> list[Strategy]:
    """Parse a YAML list of strategy records (``yaml.safe_load``)."""
    text = _read_text(source)
    try:
        data: Any = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise StrategyImportError(f"invalid YAML: {exc}") from exc
    strategies = strategies_from_records(data)
    logger.info("Loaded %d strategies from YAML", len(strategies))
    return strategies
