"""
The single Jinja2Templates instance shared by every page.
"""

from pathlib import Path

from fastapi.templating import Jinja2Templates

from blog.utils.template_filters import register_filters

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
register_filters(templates)
