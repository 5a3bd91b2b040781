"""
Template rendering utilities
"""
from pathlib import Path
from jinja2 import Environment, FileSystemLoader, select_autoescape
from fastapi.templating import Jinja2Templates

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

# Plain environment for HTML fragments rendered outside a request
jinja_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html", "xml"]),
)

# FastAPI templates instance for full pages
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def render_fragment(template_name: str, **context) -> str:
    """Render a fragment template to a string"""
    return jinja_env.get_template(template_name).render(**context).strip()
