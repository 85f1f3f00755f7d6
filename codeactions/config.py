"""Configuration models for code-actions-diff."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

OffsetEncoding = Literal["utf-8", "utf-16", "utf-32"]
FileFormat = Literal["unix", "dos", "mac"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class DiffOptions(BaseModel):
    context_lines: int = Field(default=3, ge=0)


class CodeActionsConfig(BaseModel):
    root: str = "."
    offset_encoding: OffsetEncoding = "utf-16"
    fileformat: Optional[FileFormat] = None
    color: bool = False
    log_level: LogLevel = "INFO"
    diff: DiffOptions = Field(default_factory=DiffOptions)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: object) -> object:
        return v.upper() if isinstance(v, str) else v


__all__ = ["CodeActionsConfig", "DiffOptions", "FileFormat", "LogLevel", "OffsetEncoding"]
