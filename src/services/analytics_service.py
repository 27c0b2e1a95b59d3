import math
from collections import Counter
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Union

from src.core.config import settings
from src.core.logging import logger
from src.db.models import (
    Analytics,
    DashboardStats,
    LabelCount,
    MonthCount,
    ReporterCount,
    Ticket,
)
from src.services.filter_parser import parse_search
from src.services.ticket_service import TicketService

NO_LABEL = "None"
MS_PER_DAY = 1000 * 60 * 60 * 24


def month_key(creation_time: int) -> Optional[str]:
    """Local calendar month of an epoch-ms timestamp, as YYYY-MM.

    Returns None for timestamps outside the platform's datetime range.
    """
    try:
        created = datetime.fromtimestamp(creation_time / 1000)
    except (ValueError, OverflowError, OSError):
        return None
    return f"{created.year:04d}-{created.month:02d}"


def round_half_up(value: float, digits: int = 1) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


class AnalyticsService:
    def __init__(self):
        self.ticket_service = TicketService()

    @staticmethod
    def aggregate(
        tickets: Iterable[Union[Ticket, dict]],
        now: Optional[datetime] = None,
        top_reporters_limit: Optional[int] = None,
    ) -> Analytics:
        """
        Summarize a ticket set for the dashboard.

        Each aggregation is an independent key -> count pass. Counter keeps
        first-seen order and most_common() sorts stably, so ties stay in the
        order they were first encountered.
        """
        tickets: List[Ticket] = [
            t if isinstance(t, Ticket) else Ticket.model_validate(t) for t in tickets
        ]
        limit = top_reporters_limit or settings.TOP_REPORTERS_LIMIT

        label_counts = Counter(label for t in tickets for label in t.labels)
        months_seen = (month_key(t.creation_time) for t in tickets if t.creation_time is not None)
        timeline = Counter(key for key in months_seen if key is not None)
        reporter_counts = Counter(t.user_email for t in tickets)

        labels = [LabelCount(label=k, count=v) for k, v in label_counts.most_common()]
        months = [MonthCount(month=k, count=timeline[k]) for k in sorted(timeline)]
        reporters = [
            ReporterCount(email=k, count=v) for k, v in reporter_counts.most_common(limit)
        ]
        dated = [t for t in tickets if t.creation_time is not None]
        recent = sorted(dated, key=lambda t: t.creation_time, reverse=True)[:settings.RECENT_TICKETS_LIMIT]

        total = len(tickets)
        avg_per_day = 0.0
        if dated:
            now = now or datetime.now(timezone.utc)
            days = (now.timestamp() * 1000 - min(t.creation_time for t in dated)) / MS_PER_DAY
            avg_per_day = round_half_up(total / max(1, days))

        return Analytics(
            label_counts=labels,
            timeline=months,
            top_reporters=reporters,
            recent_tickets=recent,
            stats=DashboardStats(
                total_tickets=total,
                unique_reporters=len(reporter_counts),
                most_common_label=labels[0].label if labels else NO_LABEL,
                avg_tickets_per_day=avg_per_day,
            ),
        )

    async def get_dashboard_analytics(self, search: Optional[str] = None) -> Analytics:
        """
        Load the dashboard ticket set and aggregate it in memory.
        A search string narrows the set the same way it narrows the listing.
        """
        search_filter = parse_search(search) if search else None
        tickets = await self.ticket_service.load_dashboard_tickets(search_filter)
        if len(tickets) >= settings.DASHBOARD_MAX_TICKETS:
            logger.warning(
                f"Dashboard ticket set truncated at {settings.DASHBOARD_MAX_TICKETS} tickets"
            )
        return self.aggregate(tickets)
