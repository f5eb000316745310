"""Filter engine: compound AND predicate over AccessRecord sequences."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .grammar import STATUS_MAX, STATUS_MIN
from .models import AccessRecord

MatchMode = Literal["exact", "contains"]


class FilterCriteria(BaseModel):
    """Independently optional filter options; unset options match everything."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    start_date: date | None = Field(
        default=None, description="Inclusive lower bound on the request date (YYYY-MM-DD)."
    )
    end_date: date | None = Field(
        default=None, description="Inclusive upper bound on the request date (YYYY-MM-DD)."
    )
    status: int | None = Field(
        default=None, ge=STATUS_MIN, le=STATUS_MAX, description="Exact HTTP status code."
    )
    referer: str | None = Field(default=None, description="Referer to match.")
    path: str | None = Field(default=None, description="Requested path to match.")
    match_mode: MatchMode = Field(
        default="exact",
        description="How referer and path are compared: exact equality or substring.",
    )

    @model_validator(mode="after")
    def _check_date_order(self) -> FilterCriteria:
        if (
            self.start_date is not None
            and self.end_date is not None
            and self.start_date > self.end_date
        ):
            raise ValueError("start_date must be on or before end_date")
        return self

    @property
    def is_empty(self) -> bool:
        """True when no option constrains the result."""
        return (
            self.start_date is None
            and self.end_date is None
            and self.status is None
            and self.referer is None
            and self.path is None
        )


def _text_matches(value: str, expected: str, mode: MatchMode) -> bool:
    if mode == "contains":
        return expected in value
    return value == expected


def matches(record: AccessRecord, criteria: FilterCriteria) -> bool:
    """Return True when ``record`` satisfies every option set in ``criteria``."""
    if criteria.start_date is not None or criteria.end_date is not None:
        day = record.day
        if criteria.start_date is not None and day < criteria.start_date:
            return False
        if criteria.end_date is not None and day > criteria.end_date:
            return False
    if criteria.status is not None and record.status != criteria.status:
        return False
    if criteria.referer is not None and not _text_matches(
        record.referer, criteria.referer, criteria.match_mode
    ):
        return False
    if criteria.path is not None and not _text_matches(
        record.path, criteria.path, criteria.match_mode
    ):
        return False
    return True


def filter_records(
    records: Iterable[AccessRecord],
    criteria: FilterCriteria | None = None,
) -> list[AccessRecord]:
    """Return a new list of the records matching ``criteria``, in input order."""
    if criteria is None or criteria.is_empty:
        return list(records)
    return [r for r in records if matches(r, criteria)]
