"""
Page rendering.

Templates are rendered fully before anything is sent, so a broken template
turns into a clean 500 instead of half a page.
"""
from flask import Response, render_template
from jinja2 import TemplateError

from portfolio.infra.log import get_logger

logger = get_logger(__name__)


def render_page(template: str, page_name: str, status_code: int = 200, **context) -> Response:
    """Render ``template`` as an HTML response, logging and hiding render failures."""
    try:
        body = render_template(template, page=page_name, **context)
    except TemplateError as e:
        logger.error(
            "template render error",
            page=page_name,
            error=str(e),
        )
        return Response("Internal Server Error\n", status=500, mimetype="text/plain")
    return Response(body, status=status_code, mimetype="text/html")
