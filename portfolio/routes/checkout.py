"""
Checkout routes.

POST /checkout sends the visitor to Stripe; Stripe sends them back to
/compress/success, where the payment is verified and the API key is shown.
"""
from flask import Blueprint, redirect, request
from werkzeug.exceptions import MethodNotAllowed

from portfolio.config import get_config
from portfolio.infra.db import db
from portfolio.rendering import render_page
from portfolio.services.checkout_service import complete_checkout, create_checkout_session

checkout_bp = Blueprint("checkout", __name__)


@checkout_bp.route("/checkout", methods=["POST"])
def checkout():
    """Create a Stripe Checkout session for the selected tier and redirect to it."""
    tier = (request.form.get("tier") or "").strip()
    checkout_url = create_checkout_session(tier, get_config())
    return redirect(checkout_url, code=303)


@checkout_bp.route("/compress/success", methods=["GET"])
def success():
    """Verify the returning session and show the new API key, once."""
    # HEAD would mint a key and drop the body that carries it
    if request.method == "HEAD":
        raise MethodNotAllowed(valid_methods=["GET"])

    session_id = (request.args.get("session_id") or "").strip()
    issued = complete_checkout(db.session, session_id, get_config())

    response = render_page(
        "success.html",
        "success",
        api_key=issued.api_key,
        tier=issued.tier,
        credits=issued.credits,
        email=issued.email,
    )
    # The page carries a secret
    response.headers["Cache-Control"] = "no-store"
    return response
