from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class SplitMode(str, Enum):
    TAB_OR_SINGLE_FIELD = "tab"
    WHITESPACE = "whitespace"
    CUSTOM_DELIMITER = "delimiter"


class RunConfig(BaseModel):
    """Settings fixed for one run: how lines split and what to execute."""

    model_config = ConfigDict(frozen=True)

    split_mode: SplitMode = SplitMode.TAB_OR_SINGLE_FIELD
    delimiter: Optional[str] = Field(default=None, examples=[","])
    command: List[str] = Field(default_factory=list, examples=[["echo", "$1"]])

    @field_validator("delimiter")
    @classmethod
    def single_character(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and len(v) != 1:
            raise ValueError("delimiter must be a single character")
        return v

    @model_validator(mode="after")
    def delimiter_matches_mode(self) -> "RunConfig":
        if self.split_mode is SplitMode.CUSTOM_DELIMITER and self.delimiter is None:
            raise ValueError("custom delimiter mode needs a delimiter")
        return self


@dataclass(frozen=True)
class LineContext:
    """One input line. `raw` may hold surrogate escapes for undecodable bytes."""

    raw: str
    text: str
    line_no: int
    fields: List[str]
