from pydantic import BaseModel, Field, field_validator
from typing import Literal, Optional
import logging, yaml, pathlib

class RunConfig(BaseModel):
    before_each_failure: Literal["per_case", "once"] = Field(
        "per_case",
        description="per_case re-runs a failing beforeEach hook for every case it guards; "
                    "once records it a single time and leaves later guarded cases pending")
    show_traceback: bool = Field(False, description="Print captured tracebacks in the failure recap")
    log_level: str = Field("WARNING", description="Level for the describekit logger")

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {v!r}")
        return level

def load_config(path: Optional[str]) -> RunConfig:
    if path is None:
        return RunConfig()
    data = yaml.safe_load(pathlib.Path(path).read_text()) or {}
    return RunConfig.model_validate(data)
