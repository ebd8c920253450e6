"""
Error handlers.

Client errors answer with a short plain-text message. Server errors are
logged with context and answer with a generic message; internal detail
never reaches the client.
"""
from flask import Response
from werkzeug.exceptions import HTTPException, MethodNotAllowed, NotFound

from portfolio.exceptions import PortfolioError
from portfolio.infra.log import get_logger
from portfolio.rendering import render_page

logger = get_logger(__name__)

GENERIC_ERROR = "Internal Server Error"


def text_response(message: str, status_code: int) -> Response:
    return Response(message + "\n", status=status_code, mimetype="text/plain")


def portfolio_error_response(error: PortfolioError) -> Response:
    """Turn a domain error into its client-facing response, logging server faults."""
    if error.status_code >= 500:
        logger.error(
            error.public_message,
            error_type=type(error).__name__,
            error=error.detail,
        )
    return text_response(error.public_message, error.status_code)


def register_error_handlers(app):
    """Register error handlers on the app."""

    @app.errorhandler(PortfolioError)
    def handle_portfolio_error(e):
        return portfolio_error_response(e)

    @app.errorhandler(NotFound)
    def handle_not_found(e):
        return render_page("404.html", "404", status_code=404)

    @app.errorhandler(MethodNotAllowed)
    def handle_method_not_allowed(e):
        response = text_response("Method not allowed", 405)
        response.headers["Allow"] = ", ".join(e.valid_methods or [])
        return response

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        return e

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        logger.exception("Unhandled error", error_type=type(e).__name__)
        return text_response(GENERIC_ERROR, 500)
