from pathlib import Path

from fastapi import Request
from fastapi.templating import Jinja2Templates

from .core.i18n import translate_ui
from .middleware.locale import get_request_context

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def render(request: Request, name: str, context: dict | None = None, status_code: int = 200):
    """Render a page with the request's culture and a ``t()`` string lookup."""
    culture = get_request_context(request).culture
    page_context = {
        "culture": culture,
        "t": lambda key: translate_ui(key, culture),
    }
    page_context.update(context or {})
    return templates.TemplateResponse(request, name, page_context, status_code=status_code)
