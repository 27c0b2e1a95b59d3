from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Optional, List
from datetime import datetime


class Ticket(BaseModel):
    """A security issue as stored in the `tickets` collection."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = ""
    title: str = ""
    content: str = ""
    creation_time: Optional[int] = Field(None, alias="creationTime")  # epoch ms
    user_email: str = Field("", alias="userEmail")
    labels: List[str] = Field(default_factory=list)

    @field_validator("id", "title", "content", "user_email", mode="before")
    @classmethod
    def _text_or_empty(cls, value):
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)

    @field_validator("creation_time", mode="before")
    @classmethod
    def _epoch_ms_or_none(cls, value):
        # Unreadable timestamps are treated as missing.
        if value is None or isinstance(value, bool):
            return None
        try:
            return int(value)
        except (TypeError, ValueError, OverflowError):
            return None

    @field_validator("labels", mode="before")
    @classmethod
    def _string_labels(cls, value):
        if not isinstance(value, (list, tuple)):
            return []
        return [label for label in value if isinstance(label, str)]


class PageMeta(BaseModel):
    total: int
    per_page: int
    current_page: int
    last_page: int


class TicketPage(BaseModel):
    data: List[Ticket]
    meta: PageMeta


class SearchFilter(BaseModel):
    """Structured form of a search box query.

    `search_value` is matched as a substring; an empty string means no
    free-text filter. Only one qualifier field can be set at a time.
    """
    search_value: str = ""
    before_date: Optional[datetime] = None
    after_date: Optional[datetime] = None
    reporter_email: Optional[str] = None

    @model_validator(mode="after")
    def _single_qualifier(self):
        qualifiers = [self.before_date, self.after_date, self.reporter_email]
        if sum(q is not None for q in qualifiers) > 1:
            raise ValueError("only one of before_date, after_date, reporter_email may be set")
        return self

    @property
    def is_empty(self) -> bool:
        return not self.search_value and (
            self.before_date is None
            and self.after_date is None
            and self.reporter_email is None
        )


class LabelCount(BaseModel):
    label: str
    count: int


class MonthCount(BaseModel):
    month: str  # YYYY-MM
    count: int


class ReporterCount(BaseModel):
    email: str
    count: int


class DashboardStats(BaseModel):
    total_tickets: int
    unique_reporters: int
    most_common_label: str
    avg_tickets_per_day: float


class Analytics(BaseModel):
    label_counts: List[LabelCount]
    timeline: List[MonthCount]
    top_reporters: List[ReporterCount]
    recent_tickets: List[Ticket]
    stats: DashboardStats
