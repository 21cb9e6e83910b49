from pydantic import BaseModel, ConfigDict, Field, field_validator

from xmltv_stream.config import settings
from xmltv_stream.utils.timestamps import TimeFormatError, compile_time_format


class ParserOptions(BaseModel):
    """Per-parser options; unset values fall back to environment settings"""
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="forbid")

    time_fmt: str = Field(
        default_factory=lambda: settings.time_fmt,
        alias="timeFmt",
        description="Timestamp format pattern (e.g., 'YYYYMMDDHHmmss Z')",
    )
    strict_time: bool = Field(
        default_factory=lambda: settings.strict_time,
        alias="strictTime",
        description="Require timestamps to match the format exactly",
    )

    @field_validator("time_fmt")
    @classmethod
    def validate_time_fmt(cls, v: str) -> str:
        """Validate the format compiles using the timestamp resolver"""
        try:
            compile_time_format(v)
            return v
        except TimeFormatError as e:
            raise ValueError(f"Invalid time format: {v}. {e}")
