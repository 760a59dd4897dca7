from pathlib import Path

from fastapi.templating import Jinja2Templates


TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def render_email_body() -> str:
    template = templates.get_template("email_template.html")
    return template.render()
