from pathlib import Path

from fastapi import Request
from fastapi.templating import Jinja2Templates

from ecotrack.auth.dependencies import AuthContext

PACKAGE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = PACKAGE_DIR / "templates"
STATIC_DIR = PACKAGE_DIR / "static"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def render(
    request: Request,
    name: str,
    title: str,
    auth: AuthContext | None = None,
    status_code: int = 200,
    **context,
):
    context.update({"title": title, "user": auth})
    return templates.TemplateResponse(request, name, context, status_code=status_code)
