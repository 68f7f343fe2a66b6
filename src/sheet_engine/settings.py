"""
Workbook Settings

Pydantic model for workbook construction and persistence options.
"""
from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class WorkbookSettings(BaseModel):
    """Options controlling how a workbook is built and saved."""
    summary_sheet_name: str = Field("Summary", min_length=1, max_length=31, description="Name of the eagerly created summary sheet")
    template_allow_new_columns: bool = Field(False, description="Allow new columns on sheets loaded from a template")
    auto_fit: bool = Field(True, description="Size columns from observed value widths on save")
    max_column_width: int = Field(40, ge=1, le=255, description="Upper bound for auto-fitted column widths")
    style_header: bool = Field(True, description="Apply bold/filled styling to header rows")
    date_format: str = Field("yyyy-mm-dd hh:mm:ss", description="Number format for date/time cells")
    overwrite: bool = Field(True, description="Replace an existing file at the destination path")

    model_config = {"extra": "forbid"}

    @field_validator("summary_sheet_name")
    @classmethod
    def validate_summary_sheet_name(cls, v: str) -> str:
        bad = [c for c in "/\\?*:[]" if c in v]
        if bad:
            raise ValueError(f"Summary sheet name contains invalid characters: {''.join(bad)}")
        return v
