"""Strategy interchange: JSON, YAML and Excel workbooks."""

from wear_tco.interchange.records import (
    StrategyImportError,
    strategies_from_records,
    strategy_from_record,
    strategy_to_record,
)
from wear_tco.interchange.files import (
    dump_strategies_json,
    load_strategies_json,
    load_strategies_yaml,
)
from wear_tco.interchange.spreadsheet import (
    export_strategies_xlsx,
    import_strategies_xlsx,
    sheet_prefix,
    write_template_workbook,
)

__all__ = [
    "StrategyImportError",
    "strategies_from_records",
    "strategy_from_record",
    "strategy_to_record",
    "dump_strategies_json",
    "load_strategies_json",
    "load_strategies_yaml",
    "export_strategies_xlsx",
    "import_strategies_xlsx",
    "sheet_prefix",
    "write_template_workbook",
]
