"""Excel workbook import / export.

Layout per strategy (two sheets sharing a prefix)::

    <prefix>_Overview        Parameter | Value           (one row per input)
    <prefix>_Interventions   15 fixed columns, one row per intervention

Worksheet names are limited to 31 characters and may not contain
``[ ] : * ? / \\``.  The prefix is sanitized and cut to 17 characters so the
longer ``_Interventions`` suffix always fits; clashing prefixes get a
``~n`` suffix.

Import reads every ``*_Overview`` sheet that has a matching
``*_Interventions`` sheet; incomplete pairs are skipped with a warning.
Overview rows that are missing fall back to the model defaults, so a
hand-made workbook only needs the rows it wants to change.
"""

from __future__ import annotations

import logging
import re
import zipfile
from pathlib import Path
from typing import IO, Any, Sequence, Union

import numpy as np
import pandas as pd
from openpyxl.utils.exceptions import InvalidFileException

from wear_tco.config.costs import CostStructure
from wear_tco.config.defaults import intervention_at
from wear_tco.config.layers import Layer, STAGES
from wear_tco.config.strategy import Strategy
from wear_tco.config.wear import WearRates
from wear_tco.interchange.records import (
    StrategyImportError,
    strategy_from_record,
    strategy_to_record,
)

logger = logging.getLogger(__name__)

# A str is a file name here (workbooks are binary).
Target = Union[str, Path, IO[bytes]]

OVERVIEW_SUFFIX = "_Overview"
INTERVENTIONS_SUFFIX = "_Interventions"
MAX_SHEET_NAME = 31
MAX_PREFIX = MAX_SHEET_NAME - len(INTERVENTIONS_SUFFIX)
_ILLEGAL_SHEET_CHARS = re.compile(r"[\[\]:*?/\\]")

YES = "Yes"
NO = "No"


# ═══════════════════════════════════════════════════════════════════════════
# Sheet layouts
# ═══════════════════════════════════════════════════════════════════════════

# (label, section, record key).  Section None = top-level strategy field;
# label None = blank spacer row; key None = section heading.
_OVERVIEW_ROWS: list[tuple[str | None, str | None, str | None]] = [
    ("Strategy ID", None, "id"),
    ("Strategy Name", None, "name"),
    ("Operating Hours per Period", None, "operatingHoursPerPeriod"),
    ("Total Hours", None, "totalHours"),
    ("Initial Floor Thickness (mm)", None, "initialFloorThickness"),
    ("Floor Minimum Thickness (mm)", None, "floorMinThickness"),
    (None, None, None),
    ("Wear Rates (mm/1000hrs)", "wearRates", None),
    ("Floor", "wearRates", "floor"),
    *[(layer.label, "wearRates", layer.value) for layer in STAGES],
    (None, None, None),
    ("Cost Structure", "costs", None),
    ("Labor Rate ($/hr)", "costs", "laborRate"),
    *[
        row
        for layer in reversed(STAGES)
        for row in (
            (f"{layer.label} 20mm Cost", "costs", f"{layer.value}_20mm"),
            (f"{layer.label} 25mm Cost", "costs", f"{layer.value}_25mm"),
        )
    ],
    *[(f"{layer.label} Quantity", "costs", f"{layer.value}Qty") for layer in reversed(STAGES)],
    ("Sidewall Quantity", "costs", "sidewallQty"),
    ("Frontwall Quantity", "costs", "frontwallQty"),
    ("Rebuild Quantity", "costs", "rebuildQty"),
    ("Sidewall Cost", "costs", "sidewallCost"),
    ("Frontwall Cost", "costs", "frontwallCost"),
    ("Rebuild Cost", "costs", "rebuildCost"),
    ("Labor per 20mm Plate (min)", "costs", "laborWP20mm"),
    ("Labor per 25mm Plate (min)", "costs", "laborWP25mm"),
    ("Sidewall Labor (hrs)", "costs", "laborSidewall"),
    ("Frontwall Labor (hrs)", "costs", "laborFrontwall"),
    ("Rebuild Labor (hrs)", "costs", "laborRebuild"),
]

# (column header, record key).  Blank cells take the model default.
_INTERVENTION_COLUMNS: list[tuple[str, str]] = [
    ("Operating Hours", "operatingHours"),
    ("Floor Min Thickness", "floorMinThickness"),
    *[
        col
        for layer in STAGES
        for col in (
            (f"{layer.label} Thickness", f"{layer.value}Thickness"),
            (f"{layer.label} Min Thickness", f"{layer.value}MinThickness"),
        )
    ],
    ("Sidewall Replacement", "sidewallReplacement"),
    ("Frontwall Replacement", "frontwallReplacement"),
    ("Rebuild", "rebuild"),
]
_FLAG_KEYS = {"sidewallReplacement", "frontwallReplacement", "rebuild"}

INTERVENTION_HEADERS = [header for header, _ in _INTERVENTION_COLUMNS]


# ═══════════════════════════════════════════════════════════════════════════
# Sheet names
# ═══════════════════════════════════════════════════════════════════════════

def sheet_prefix(name: str, taken: set[str] | None = None) -> str:
    """Worksheet-safe prefix for a strategy name, unique within ``taken``."""
    base = _ILLEGAL_SHEET_CHARS.sub("_", name).strip(" '")[:MAX_PREFIX].rstrip(" '") or "Strategy"
    taken = taken or set()
    prefix = base
    n = 2
    while prefix in taken:
        suffix = f"~{n}"
        prefix = base[:MAX_PREFIX - len(suffix)] + suffix
        n += 1
    return prefix


# ═══════════════════════════════════════════════════════════════════════════
# Strategy → frames
# ═══════════════════════════════════════════════════════════════════════════

def _overview_frame(strategy: Strategy) -> pd.DataFrame:
    record = strategy_to_record(strategy)
    rows = []
    for label, section, key in _OVERVIEW_ROWS:
        if label is None:
            rows.append((None, None))
        elif key is None:
            rows.append((label, None))
        else:
            source = record if section is None else record[section]
            rows.append((label, source[key]))
    return pd.DataFrame(rows, columns=["Parameter", "Value"])


def _interventions_frame(strategy: Strategy) -> pd.DataFrame:
    rows = []
    for event in strategy_to_record(strategy)["interventions"]:
        rows.append([
            (YES if event[key] else NO) if key in _FLAG_KEYS else event[key]
            for _, key in _INTERVENTION_COLUMNS
        ])
    return pd.DataFrame(rows, columns=INTERVENTION_HEADERS)


def export_strategies_xlsx(strategies: Sequence[Strategy], target: Target) -> list[str]:
    """Write one overview/interventions sheet pair per strategy.

    Returns the sheet prefixes used, in strategy order.
    """
    prefixes: list[str] = []
    with pd.ExcelWriter(target, engine="openpyxl") as writer:
        for strategy in strategies:
            prefix = sheet_prefix(strategy.name, set(prefixes))
            prefixes.append(prefix)
            _overview_frame(strategy).to_excel(writer, sheet_name=prefix + OVERVIEW_SUFFIX, index=False)
            _interventions_frame(strategy).to_excel(
                writer, sheet_name=prefix + INTERVENTIONS_SUFFIX, index=False,
            )
    logger.info("Exported %d strategies to workbook", len(prefixes))
    return prefixes


# ═══════════════════════════════════════════════════════════════════════════
# Template
# ═══════════════════════════════════════════════════════════════════════════

TEMPLATE_NAME = "My TCO Strategy"

_INSTRUCTIONS = [
    "Wear-Plate TCO - Excel Template Instructions",
    "",
    "How to use this template:",
    "1. Fill in the Overview sheet with your strategy parameters",
    "2. Define your maintenance interventions in the Interventions sheet",
    "3. Save the file and import it",
    "",
    "Sheet Naming Convention:",
    f'- Overview sheets must end with "{OVERVIEW_SUFFIX}"',
    f'- Interventions sheets must end with "{INTERVENTIONS_SUFFIX}"',
    "- Both sheets must have the same prefix (strategy name)",
    f"- The prefix may be at most {MAX_PREFIX} characters",
    "",
    "Tips:",
    "- You can create multiple strategies by duplicating the sheets",
    "- Rows left out of an Overview sheet take their default values",
    f'- Use "{YES}"/"{NO}" for the replacement flags in interventions',
    "- A thickness of 0 means the stage is not replaced at that intervention",
    "- All thickness values are in millimeters",
    "- All hours are operating hours, not calendar hours",
]

_DESCRIPTIONS = {
    "Strategy Name": "Name of your strategy",
    "Operating Hours per Period": "Operating hours per maintenance period",
    "Total Hours": "Total operating hours for analysis",
    "Initial Floor Thickness (mm)": "Starting floor thickness",
    "Floor Minimum Thickness (mm)": "Minimum allowable floor thickness",
    "Wear Rates (mm/1000hrs)": "Wear rates for each component",
    "Cost Structure": "Cost parameters",
    "Labor Rate ($/hr)": "Hourly labor rate",
}


def _template_strategy() -> Strategy:
    return Strategy(
        id="template",
        name=TEMPLATE_NAME,
        interventions=[
            intervention_at(0, {Layer.STAGE1: (25, 2)}),
            intervention_at(24_000, {Layer.STAGE2: (25, 0)}),
            intervention_at(36_000, {Layer.STAGE3: (25, 0)}),
        ],
        wear_rates=WearRates(),
        costs=CostStructure(),
    )


def write_template_workbook(target: Target) -> None:
    """Write a fill-in workbook: one example strategy plus an Instructions sheet."""
    strategy = _template_strategy()
    overview = _overview_frame(strategy)
    # The id row is for round-trips; a template strategy gets a fresh id on import.
    overview = overview[overview["Parameter"] != "Strategy ID"].reset_index(drop=True)
    overview["Description"] = overview["Parameter"].map(_DESCRIPTIONS)

    with pd.ExcelWriter(target, engine="openpyxl") as writer:
        overview.to_excel(writer, sheet_name=TEMPLATE_NAME + OVERVIEW_SUFFIX, index=False)
        _interventions_frame(strategy).to_excel(
            writer, sheet_name=TEMPLATE_NAME + INTERVENTIONS_SUFFIX, index=False,
        )
        pd.DataFrame({"Instructions": _INSTRUCTIONS}).to_excel(
            writer, sheet_name="Instructions", index=False, header=False,
        )


# ═══════════════════════════════════════════════════════════════════════════
# Frames → strategy
# ═══════════════════════════════════════════════════════════════════════════

def _cell(value: Any) -> Any:
    """Blank → None; numpy scalars → Python scalars; strings trimmed."""
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        return value or None
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and np.isnan(value):
        return None
    return value


def _flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("yes", "true")
    return value is True


def _overview_record(frame: pd.DataFrame, prefix: str) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for row in frame.itertuples(index=False):
        if len(row) < 2:
            continue
        label, value = _cell(row[0]), _cell(row[1])
        if isinstance(label, str) and value is not None:
            values[label] = value

    record: dict[str, Any] = {"wearRates": {}, "costs": {}}
    for label, section, key in _OVERVIEW_ROWS:
        if label is None or key is None or label not in values:
            continue
        (record if section is None else record[section])[key] = values[label]
    if "name" in record:
        record["name"] = str(record["name"])
    else:
        record["name"] = prefix
    if "id" in record:
        record["id"] = str(record["id"])
    if not record["wearRates"]:
        del record["wearRates"]
    return record


def _intervention_records(frame: pd.DataFrame) -> list[dict[str, Any]]:
    events = []
    for row in frame.itertuples(index=False):
        cells = [_cell(v) for v in row]
        if not cells or cells[0] is None:
            continue
        event: dict[str, Any] = {}
        for (_, key), value in zip(_INTERVENTION_COLUMNS, cells):
            if key in _FLAG_KEYS:
                event[key] = _flag(value)
            elif value is not None:
                event[key] = value
        events.append(event)
    return events


def import_strategies_xlsx(source: Target) -> list[Strategy]:
    """Read every complete sheet pair of a workbook.

    Raises ``StrategyImportError`` if the file cannot be read, a sheet holds
    values of the wrong type, or no sheet pair is found.
    """
    try:
        sheets: dict[str, pd.DataFrame] = pd.read_excel(source, sheet_name=None, header=0, engine="openpyxl")
    except (ValueError, OSError, KeyError, zipfile.BadZipFile, InvalidFileException) as exc:
        raise StrategyImportError(f"failed to read workbook: {exc}") from exc

    strategies: list[Strategy] = []
    for sheet_name, overview in sheets.items():
        if not sheet_name.endswith(OVERVIEW_SUFFIX):
            continue
        prefix = sheet_name[: -len(OVERVIEW_SUFFIX)]
        interventions = sheets.get(prefix + INTERVENTIONS_SUFFIX)
        if interventions is None:
            logger.warning("Missing interventions sheet for strategy: %s", prefix)
            continue

        record = _overview_record(overview, prefix)
        record["interventions"] = _intervention_records(interventions)
        strategies.append(strategy_from_record(record))

    if not strategies:
        raise StrategyImportError("workbook contains no strategy sheet pairs")
    logger.info("Imported %d strategies from workbook", len(strategies))
    return strategies
