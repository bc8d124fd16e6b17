"""Parse error and read result models for the trade CSV reader."""

from pydantic import BaseModel, Field

from fifocalc.models.trade import Trade


class TradeReadError(BaseModel):
    """An issue found while reading one input row or field.

    A line number of 0 marks a file-level error.
    """

    line_number: int = Field(..., ge=0, description="Source line number")
    raw_line: str = Field(default="", description="Raw line text")
    message: str = Field(..., description="Human-readable message")
    field_name: str = Field(default="", description="Offending field")

    model_config = {"frozen": True}

    def format(self) -> str:
        """Render the error the way it is shown to the user."""
        if self.line_number <= 0:
            return self.message
        if self.field_name:
            return f"Line {self.line_number}: {self.message} (Field: {self.field_name})"
        return f"Line {self.line_number}: {self.message}"


class TradeReadResult(BaseModel):
    """Outcome of loading a trade file.

    ``fatal`` is set when the whole load was aborted (missing file, empty
    file, missing columns), as opposed to individual rows being rejected.
    """

    trades: list[Trade] = Field(default_factory=list)
    errors: list[TradeReadError] = Field(default_factory=list)
    clients: list[str] = Field(default_factory=list)
    fatal: bool = False

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def is_success(self) -> bool:
        return not self.fatal and not self.errors
