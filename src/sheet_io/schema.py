"""
Batch Input Schema

Pydantic models for row batches supplied through input files.
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from sheet_engine.settings import WorkbookSettings


class RowBatch(BaseModel):
    """One ``add_rows`` call: target sheet, scalar parameters and result arrays."""
    sheet: str = Field(..., min_length=1, description="Target sheet name")
    parameters: dict[str, Any] = Field(default_factory=dict, description="Values repeated on every row")
    results: dict[str, list[Any]] = Field(default_factory=dict, description="One value per produced row")
    never_include: bool = Field(False, description="Create the sheet without ever adding it to the workbook")

    @field_validator("parameters", "results", mode="before")
    @classmethod
    def none_as_empty(cls, v: Any) -> Any:
        return {} if v is None else v


class BatchFile(BaseModel):
    """Contents of a batch input file."""
    settings: Optional[WorkbookSettings] = Field(None, description="Workbook settings embedded in the file")
    batches: list[RowBatch] = Field(default_factory=list)
