"""
Result Recorder

Routes published result tables of a test run into workbook sheets.
"""
from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from sheet_engine.sheet import SheetTab
from sheet_engine.workbook import Workbook
from sheet_io.naming import sanitize_sheet_name


logger = logging.getLogger(__name__)

STEP_NAME_COLUMN = "Step Name"
STEP_VERDICT_COLUMN = "Step Verdict"
PENDING_VERDICT = "Pending"


class ResultRecorder:
    """
    Collects results for one workbook.

    With ``arrange_by_step_type`` every result type gets its own sheet shared
    by all steps of the same type; otherwise each step gets its own sheet.
    Calls may arrive from several threads and are serialized by a lock owned
    by this recorder.
    """

    def __init__(self, workbook: Workbook, arrange_by_step_type: bool = True):
        self.workbook = workbook
        self.arrange_by_step_type = arrange_by_step_type
        self._lock = threading.Lock()
        self._sheet_names: dict[str, str] = {}
        # step name -> (sheet, row indexes) still showing the pending verdict
        self._pending: dict[str, list[tuple[SheetTab, list[int]]]] = {}

    def _sheet_for(self, key: str, display_name: str) -> SheetTab:
        name = self._sheet_names.get(key)
        if name is None:
            taken = set(self._sheet_names.values())
            taken.add(self.workbook.summary_sheet.name)
            name = sanitize_sheet_name(display_name, taken)
            self._sheet_names[key] = name
            logger.debug("Result key %r mapped to sheet %r", key, name)
        return self.workbook.get_or_create_sheet(name)

    def record(
        self,
        step_name: str,
        step_type: str,
        result_name: str,
        parameters: Mapping[str, Any],
        columns: Mapping[str, Sequence[Any]],
        verdict: Optional[str] = None,
    ) -> list[int]:
        """
        Write one result table.

        Args:
            step_name: Name of the step that published the results
            step_type: Type name of that step
            result_name: Name of the result table
            parameters: Step parameters, repeated on every row
            columns: Result columns, one value per row
            verdict: Step verdict; "Pending" until ``step_completed`` when not given

        Returns:
            Row indexes written
        """
        if self.arrange_by_step_type:
            key, display = f"{step_type}/{result_name}", result_name
        else:
            key, display = step_name, step_name

        scalars = {
            STEP_NAME_COLUMN: step_name,
            STEP_VERDICT_COLUMN: PENDING_VERDICT if verdict is None else verdict,
        }
        for name, value in parameters.items():
            if name in scalars:
                logger.debug("Parameter %r of step %r shadows a recorder column, ignored", name, step_name)
                continue
            scalars[name] = value

        with self._lock:
            sheet = self._sheet_for(key, display)
            written = sheet.add_rows(scalars, dict(columns))
            if verdict is None and written:
                self._pending.setdefault(step_name, []).append((sheet, written))
            return written

    def step_completed(
        self,
        step_name: str,
        step_type: str,
        verdict: str,
        duration: Optional[float] = None,
    ) -> list[int]:
        """
        Record the final verdict of a step.

        Result rows the step wrote with a pending verdict get the final one,
        and a row is added to the summary sheet.
        """
        fields: dict[str, Any] = {
            STEP_NAME_COLUMN: step_name,
            "Step Type": step_type,
            STEP_VERDICT_COLUMN: verdict,
        }
        if duration is not None:
            fields["Duration (s)"] = round(duration, 6)
        with self._lock:
            for sheet, written in self._pending.pop(step_name, []):
                for row_index in written:
                    sheet.set_cell(row_index, STEP_VERDICT_COLUMN, verdict)
            return self.workbook.summary_sheet.add_rows(fields, {})

    def close(self) -> Path:
        with self._lock:
            if self.workbook.is_empty:
                logger.info("No results were recorded for %s", self.workbook.path)
            return self.workbook.close()
