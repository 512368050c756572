from __future__ import annotations

from dataclasses import dataclass

"""Configuration dataclass for sheet2doc.

Built by ``sheet2doc.config.loader.load_config`` after schema validation, or
with ``ExportConfig()`` defaults when no config file is present.
"""

DEFAULT_FOLDER_NAME = "Sheet to Doc"


@dataclass(frozen=True)
class ExportConfig:
    """Root configuration for one export run."""
    folder_name: str = DEFAULT_FOLDER_NAME  # target folder under the spreadsheet's parent
    header_row: int = 1  # row holding the field labels
    heading_level: int = 2  # heading style used for header blocks
    timezone: str = "UTC"  # zone applied to naive date/time cells
    sheet: str | None = None  # worksheet name, None = first sheet
    drafts_directory: str | None = None  # where new documents start, None = next to the spreadsheet
    logs_directory: str | None = "./logs"  # error log location, None disables it
