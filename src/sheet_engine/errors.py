"""
Sheet Engine Errors

Exceptions raised by the spreadsheet construction engine.
"""
from __future__ import annotations


class SheetEngineError(Exception):
    """Base class for all engine errors."""
    pass


class AddressRangeExceeded(SheetEngineError, IndexError):
    """Raised when a column or row index falls outside the addressable range."""
    pass


class AddressDecodeError(SheetEngineError, ValueError):
    """Raised when a cell reference cannot be parsed."""
    pass


class TemplateError(SheetEngineError):
    """Raised when a template workbook cannot be opened or read."""
    pass


class PersistFailure(SheetEngineError):
    """Raised when the workbook cannot be written to its target path."""
    pass


class WorkbookStateError(SheetEngineError, RuntimeError):
    """Raised on use of a workbook after it has been closed."""
    pass
