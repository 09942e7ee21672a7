"""
Errors raised while turning a CORNEA export into a point cloud.
"""

from typing import Optional


class CorneaExportError(ValueError):
    """Base class for export parsing/transform errors."""

    code = "cornea_export_error"


class MalformedLineError(CorneaExportError):
    """A line does not match the `Seg: <n> y= <r> x= <d>` pattern."""

    code = "malformed_line"

    def __init__(self, line_number: int, line: str, message: Optional[str] = None):
        self.line_number = line_number
        self.line = line
        super().__init__(message or f"Line {line_number} is not a segment record: {line!r}")


class NonNumericFieldError(MalformedLineError):
    """A line matches the pattern but a captured token is not a valid number."""

    code = "non_numeric_field"

    def __init__(self, line_number: int, line: str, field: str, token: str):
        self.field = field
        self.token = token
        super().__init__(
            line_number,
            line,
            f"Line {line_number}: field '{field}' has non-numeric value {token!r}",
        )


class EmptyInputError(CorneaExportError):
    """No segment records to transform."""

    code = "empty_input"


class UnsupportedExportError(CorneaExportError):
    """File does not look like a CORNEA export (.OD / .OS)."""

    code = "unsupported_export"


class InvalidLinePolicyError(CorneaExportError):
    """Line policy is neither 'skip' nor 'fail'."""

    code = "invalid_line_policy"
