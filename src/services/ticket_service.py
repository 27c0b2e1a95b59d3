import math
import re
from typing import List, Optional

import pymongo

from src.core.config import settings
from src.db.models import PageMeta, SearchFilter, Ticket, TicketPage
from src.db.mongo import get_db
from src.services.filter_parser import parse_search

TEXT_FIELDS = ("title", "content", "userEmail")
PROJECTION = {"_id": 0}


def to_epoch_ms(value) -> int:
    return int(value.timestamp() * 1000)


def build_query(search_filter: Optional[SearchFilter]) -> dict:
    """
    Translate a SearchFilter into a MongoDB filter document.
    """
    query: dict = {}
    if search_filter is None:
        return query

    if search_filter.search_value:
        pattern = re.escape(search_filter.search_value)
        query["$or"] = [
            {field: {"$regex": pattern, "$options": "i"}} for field in TEXT_FIELDS
        ]
    if search_filter.before_date is not None:
        query["creationTime"] = {"$lt": to_epoch_ms(search_filter.before_date)}
    if search_filter.after_date is not None:
        query["creationTime"] = {"$gt": to_epoch_ms(search_filter.after_date)}
    if search_filter.reporter_email:
        query["userEmail"] = {
            "$regex": f"^{re.escape(search_filter.reporter_email)}$",
            "$options": "i",
        }
    return query


class TicketService:
    async def list_tickets(
        self,
        search: str = "",
        page: int = 1,
        page_size: Optional[int] = None,
    ) -> TicketPage:
        """
        Return one page of tickets matching the search box query,
        newest first.
        """
        db = await get_db()
        per_page = page_size or settings.PAGE_SIZE
        query = build_query(parse_search(search))

        total = await db.tickets.count_documents(query)
        cursor = (
            db.tickets.find(query, PROJECTION)
            .sort("creationTime", pymongo.DESCENDING)
            .skip((page - 1) * per_page)
            .limit(per_page)
        )
        docs = await cursor.to_list(length=per_page)

        return TicketPage(
            data=[Ticket.model_validate(doc) for doc in docs],
            meta=PageMeta(
                total=total,
                per_page=per_page,
                current_page=page,
                last_page=max(1, math.ceil(total / per_page)),
            ),
        )

    async def load_dashboard_tickets(
        self,
        search_filter: Optional[SearchFilter] = None,
        limit: Optional[int] = None,
    ) -> List[Ticket]:
        db = await get_db()
        limit = limit or settings.DASHBOARD_MAX_TICKETS
        cursor = (
            db.tickets.find(build_query(search_filter), PROJECTION)
            .sort("creationTime", pymongo.DESCENDING)
            .limit(limit)
        )
        docs = await cursor.to_list(length=limit)
        return [Ticket.model_validate(doc) for doc in docs]
