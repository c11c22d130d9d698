"""CSV export schemas."""
from typing import Literal, Optional
from pydantic import BaseModel, Field, model_validator


ExportRange = Literal["all_time", "this_year", "this_month", "last_month", "last_30_days"]


class ExportFilters(BaseModel):
    profession: Optional[str] = None
    min_age: Optional[int] = Field(None, ge=0)
    max_age: Optional[int] = Field(None, ge=0)
    min_hours: Optional[float] = Field(None, ge=0)
    max_hours: Optional[float] = Field(None, ge=0)
    min_bags: Optional[int] = Field(None, ge=0)
    max_bags: Optional[int] = Field(None, ge=0)
    date_range: ExportRange = "all_time"

    @model_validator(mode="after")
    def check_bounds(self):
        for low, high in (("min_age", "max_age"), ("min_hours", "max_hours"), ("min_bags", "max_bags")):
            lo, hi = getattr(self, low), getattr(self, high)
            if lo is not None and hi is not None and lo > hi:
                raise ValueError(f"{low} cannot be greater than {high}")
        return self


class ExportResult(BaseModel):
    filename: str
    content: str
    exported: int
    failed: int
