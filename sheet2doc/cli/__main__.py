from __future__ import annotations

import argparse
import os
import sys
from dataclasses import replace
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import ConfigError, load_config
from ..excel.reader import ExcelSheet, read_headers, read_selected_row
from ..excel.selection import A1Selection, SelectionSyntaxError, parse_a1
from ..logging.init import enable_debug, log_summary, setup_logging
from ..models.config_models import ExportConfig
from ..models.run_result import RunStatus
from ..models.stage_result import Failure
from ..services.normalizer import normalize_value
from ..services.orchestrator import ExportServices, run_export
from ..services.selection import validate_selection
from ..services.summary import render_summary_line
from ..store.docx_store import DocxDocumentStore
from ..store.local_folders import LocalFolderStore
from ..ui.console import ConsolePrompt, ConsoleUI, PresetPrompt

"""CLI entrypoint.

Flow:
- Load .env, then the YAML config
- Build console/file-system collaborators around the spreadsheet
- Run the export and print the SUMMARY line
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_CANCELLED = 2

CONFIG_ENV_VAR = "SHEET2DOC_CONFIG"


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env; values there win over the existing environment."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="sheet2doc", description="Write one spreadsheet row into a new .docx document"
    )
    p.add_argument("spreadsheet", type=Path, help="Path to the .xlsx workbook")
    p.add_argument("--sheet", help="Worksheet name (default: config or first sheet)")
    sel = p.add_mutually_exclusive_group()
    sel.add_argument("--row", type=int, help="Row number to export (same as --select N:N)")
    sel.add_argument("--select", help="Selection in A1 notation, e.g. A5:D5")
    p.add_argument("--name", help="Document name (skips the interactive prompt)")
    p.add_argument("--config", type=Path, help="Config file (default: config/sheet2doc.yml)")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument(
        "--inspect-data", action="store_true", help="Print header/value pairs of the row then exit"
    )
    return p.parse_args(argv)


def _selection_notation(args: argparse.Namespace) -> str | None:
    if args.row is not None:
        return f"{args.row}:{args.row}"
    return args.select


def _inspect_data(sheet: ExcelSheet, selection_source: A1Selection, cfg: ExportConfig) -> int:
    selection = validate_selection(selection_source.get_active_selection())
    if isinstance(selection, Failure):
        print(f"inspect: {selection.message}")
        return EXIT_FATAL
    entries = read_selected_row(sheet, selection.data)
    headers = read_headers(sheet, cfg.header_row)
    for result in (entries, headers):
        if isinstance(result, Failure):
            print(f"inspect: {result.message}")
            return EXIT_FATAL
    print(f"ROW: {selection.data.start_row} columns={len(headers.data)}")
    for header, value in zip(headers.data, entries.data):
        print(f"  {normalize_value(header, cfg.timezone)} = {normalize_value(value, cfg.timezone)}")
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # [] from tests must not fall back to sys.argv
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    if args.debug:
        enable_debug()

    config_path = args.config
    if config_path is None and os.getenv(CONFIG_ENV_VAR):
        config_path = Path(os.environ[CONFIG_ENV_VAR])
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL
    if args.sheet:
        cfg = replace(cfg, sheet=args.sheet)

    spreadsheet: Path = args.spreadsheet
    if not spreadsheet.is_file():
        logger.error(f"spreadsheet not found: {spreadsheet}")
        return EXIT_FATAL

    notation = _selection_notation(args)
    if notation is not None:
        try:
            parse_a1(notation, 0)
        except SelectionSyntaxError as e:
            logger.error(f"selection: {e}")
            return EXIT_FATAL

    sheet = ExcelSheet(spreadsheet, cfg.sheet)
    selection_source = A1Selection(notation, sheet)
    logger.info(f"Reading {spreadsheet} (sheet={sheet.sheet_name or 'first'})")

    if args.inspect_data:
        return _inspect_data(sheet, selection_source, cfg)

    drafts_dir = Path(cfg.drafts_directory) if cfg.drafts_directory else spreadsheet.resolve().parent
    ui = ConsoleUI()
    services = ExportServices(
        selection=selection_source,
        sheet=sheet,
        prompt=PresetPrompt(args.name) if args.name is not None else ConsolePrompt(),
        alerts=ui,
        folders=LocalFolderStore(),
        documents=DocxDocumentStore(drafts_dir, heading_level=cfg.heading_level),
        display=ui,
    )
    result = run_export(services, str(spreadsheet.resolve()), cfg)

    # log_summary adds the "SUMMARY " prefix itself
    log_summary(render_summary_line(result)[len("SUMMARY "):])

    if result.status is RunStatus.SUCCESS:
        return EXIT_SUCCESS
    if result.status is RunStatus.CANCELLED:
        return EXIT_CANCELLED
    return EXIT_FATAL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
