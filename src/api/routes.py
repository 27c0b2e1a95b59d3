from fastapi import APIRouter, Depends, Query
from src.core.config import settings
from src.db.models import Analytics, SearchFilter, TicketPage
from src.services.analytics_service import AnalyticsService
from src.services.filter_parser import parse_search
from src.services.ticket_service import TicketService

router = APIRouter()


# ============================================================
# Ticket APIs
# ============================================================

@router.get("/tickets", response_model=TicketPage)
async def list_tickets(
    search: str = "",
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    ticket_service: TicketService = Depends()
):
    """
    List tickets newest first, filtered by the search box query.

    Supports one qualifier per query: `before:dd/MM/yyyy`,
    `after:dd/MM/yyyy` or `reporter:<email>`, followed by free text.
    """
    return await ticket_service.list_tickets(search.strip(), page, page_size)


@router.get("/search/parse", response_model=SearchFilter)
async def parse_search_query(q: str = ""):
    """Show how a search box query is interpreted."""
    return parse_search(q)


# ============================================================
# Dashboard API
# ============================================================

@router.get("/analytics", response_model=Analytics)
async def get_analytics(
    search: str = "",
    analytics_service: AnalyticsService = Depends()
):
    """
    Dashboard summary: label histogram, monthly timeline, top reporters
    and headline stats.
    """
    return await analytics_service.get_dashboard_analytics(search.strip() or None)


# ============================================================
# Health Check API
# ============================================================

@router.get("/health")
async def health_check():
    return {"status": "ok"}
