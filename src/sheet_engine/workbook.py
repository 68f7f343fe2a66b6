"""
Workbook

Owns the sheets of one output document and persists them on close.
"""
from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Iterator, Optional

from sheet_engine.errors import WorkbookStateError
from sheet_engine.settings import WorkbookSettings
from sheet_engine.sheet import SheetTab
from sheet_io.readers import read_template_sheets
from sheet_io.writers import save_workbook


logger = logging.getLogger(__name__)


class Workbook:
    """
    A multi-sheet document built incrementally in memory.

    Sheets are looked up by exact name. Only sheets that received data (or
    came from a template) are part of the sheet directory and get written on
    ``close()``. The sheet cache and directory are guarded by a lock owned by
    this instance; writes to a single sheet must be serialized by the caller.
    """

    def __init__(
        self,
        path: str | Path,
        settings: Optional[WorkbookSettings] = None,
        template: Optional[str | Path] = None,
    ):
        self.path = Path(path)
        self.settings = settings or WorkbookSettings()
        self.template = Path(template) if template is not None else None
        self._lock = threading.RLock()
        self._cache: dict[str, SheetTab] = {}
        self._directory: list[SheetTab] = []
        self._closed = False

        if self.template is not None:
            self._load_template(self.template)

        self.summary_sheet = self.get_or_create_sheet(self.settings.summary_sheet_name)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def create(cls, path: str | Path, settings: Optional[WorkbookSettings] = None) -> "Workbook":
        """Start a new, empty workbook that will be written to ``path``."""
        return cls(path, settings=settings)

    @classmethod
    def from_template(
        cls,
        path: str | Path,
        template: str | Path,
        settings: Optional[WorkbookSettings] = None,
    ) -> "Workbook":
        """Start from an existing file; its sheets are included up front."""
        return cls(path, settings=settings, template=template)

    def _load_template(self, template: Path) -> None:
        allow_new = self.settings.template_allow_new_columns
        for info in read_template_sheets(template):
            sheet = SheetTab(
                self,
                info.name,
                allow_new_columns=allow_new,
                header=info.header,
                last_row=info.last_row,
            )
            self._cache[info.name] = sheet
            self._include(sheet)
        logger.info("Loaded %d sheet(s) from template %s", len(self._directory), template)

    # ------------------------------------------------------------------
    # Sheets
    # ------------------------------------------------------------------

    def get_or_create_sheet(
        self,
        name: str,
        never_include: bool = False,
        allow_new_columns: Optional[bool] = None,
    ) -> SheetTab:
        """
        Return the sheet called ``name``, creating a pending one if needed.

        Flags only apply when the sheet is created; a cached sheet is returned
        unchanged.
        """
        with self._lock:
            self._check_open()
            sheet = self._cache.get(name)
            if sheet is not None:
                if never_include != sheet.never_include or (
                    allow_new_columns is not None and allow_new_columns != sheet.allow_new_columns
                ):
                    logger.debug("Sheet %r already exists, ignoring conflicting flags", name)
                return sheet
            sheet = SheetTab(
                self,
                name,
                never_include=never_include,
                allow_new_columns=True if allow_new_columns is None else allow_new_columns,
            )
            self._cache[name] = sheet
            return sheet

    def _include(self, sheet: SheetTab) -> None:
        with self._lock:
            if sheet.included:
                return
            sheet.sheet_id = max((s.sheet_id for s in self._directory), default=0) + 1
            self._directory.append(sheet)
            logger.info("Included sheet %r (id %d)", sheet.name, sheet.sheet_id)

    @property
    def sheets(self) -> list[SheetTab]:
        """Included sheets in directory order."""
        with self._lock:
            return list(self._directory)

    @property
    def sheet_names(self) -> list[str]:
        return [s.name for s in self.sheets]

    @property
    def is_empty(self) -> bool:
        with self._lock:
            return not self._directory

    @property
    def closed(self) -> bool:
        return self._closed

    def __contains__(self, name: object) -> bool:
        return name in self.sheet_names

    def __getitem__(self, name: str) -> SheetTab:
        for sheet in self.sheets:
            if sheet.name == name:
                return sheet
        raise KeyError(name)

    def __iter__(self) -> Iterator[SheetTab]:
        return iter(self.sheets)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _check_open(self) -> None:
        if self._closed:
            raise WorkbookStateError(f"Workbook {self.path} is already closed")

    def close(self) -> Path:
        """
        Write all included sheets to ``path``. Must be called exactly once.

        Raises:
            PersistFailure: If the file cannot be written
            WorkbookStateError: If the workbook was already closed
        """
        with self._lock:
            self._check_open()
            self._closed = True
            return save_workbook(self, self.path)

    def __enter__(self) -> "Workbook":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None and not self._closed:
            self.close()
