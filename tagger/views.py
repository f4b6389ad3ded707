"""
HTML rendering for the tagging page
"""
from pathlib import Path
from urllib.parse import quote

from fastapi.responses import HTMLResponse
from jinja2 import Environment, FileSystemLoader, select_autoescape

from .services.session_service import SessionView

TEMPLATES_DIR = Path(__file__).parent / "templates"

# Jinja env
jinja_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html", "xml"]),
)


def image_url(name: str) -> str:
    """URL under which the catalog serves a file"""
    return "/images/" + quote(name)


def render(name: str, status_code: int = 200, **ctx) -> HTMLResponse:
    template = jinja_env.get_template(name)
    ctx.setdefault("title", "Image Tagger")
    return HTMLResponse(template.render(**ctx), status_code=status_code)


def render_session(view: SessionView) -> HTMLResponse:
    """Full page for the current file: image, next button, new-tag input and tag checkboxes"""
    return render(
        "index.html",
        title=view.image.name,
        view=view,
        image_src=image_url(view.image.name),
    )
