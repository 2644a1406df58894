"""
Server-rendered pages. Tables and forms are driven by static/app.js against
the JSON API; only the dashboard counters are rendered on the server.
"""

from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.db.session import get_db
from app.models.booking import BOOKING_TYPES
from app.services.stats_service import get_dashboard_stats

settings = get_settings()
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parents[2] / "templates"))
templates.env.globals["app_name"] = settings.APP_NAME

router = APIRouter(tags=["Pages"], include_in_schema=False)

# path -> (template, nav label)
PAGES = {
    "users": ("users.html", "Users"),
    "trips": ("trips.html", "Trips"),
    "organizers": ("organizers.html", "Organizers"),
    "bookings": ("bookings.html", "Bookings"),
}


@router.get("/", response_class=HTMLResponse)
async def dashboard_page(request: Request, db: AsyncSession = Depends(get_db)):
    stats = await get_dashboard_stats(db)
    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {"stats": stats, "active": "dashboard", "pages": PAGES},
    )


def _register_page(slug: str, template: str) -> None:
    async def page(request: Request):
        return templates.TemplateResponse(
            request,
            template,
            {"active": slug, "pages": PAGES, "booking_types": BOOKING_TYPES},
        )

    page.__name__ = f"{slug}_page"
    router.add_api_route(f"/{slug}", page, methods=["GET"], response_class=HTMLResponse)


for _slug, (_template, _label) in PAGES.items():
    _register_page(_slug, _template)
