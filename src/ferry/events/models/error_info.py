"""Serialisable description of an exception."""

import traceback as tb

from pydantic import BaseModel, ConfigDict, Field


class ErrorInfo(BaseModel):
    """Exception details safe to put in an event payload."""

    model_config = ConfigDict(frozen=True)

    exc_type: str = Field(description="Fully qualified exception class name")
    message: str = Field(description="str() of the exception")
    traceback: str | None = Field(default=None, description="Formatted traceback")

    @classmethod
    def from_exception(
        cls, exc: BaseException, include_traceback: bool = False
    ) -> "ErrorInfo":
        exc_class = type(exc)
        return cls(
            exc_type=f"{exc_class.__module__}.{exc_class.__qualname__}",
            message=str(exc),
            traceback=(
                "".join(tb.format_exception(exc_class, exc, exc.__traceback__))
                if include_traceback
                else None
            ),
        )
