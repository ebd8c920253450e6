# -*- coding: utf-8 -*-
"""
Contact form.

GET renders the form. POST validates it: violations re-render the form
with a 400, a clean submission is logged and redirected back with a
confirmation flag. Oversized bodies never get here (SizeLimitMiddleware).
"""
from flask import Blueprint, redirect, request, url_for

from portfolio.infra.log import get_logger
from portfolio.rendering import render_page
from portfolio.services.contact_validation import ContactFormData, validate_contact_form

contact_bp = Blueprint("contact", __name__)

logger = get_logger(__name__)


@contact_bp.route("/contact", methods=["GET"])
def contact():
    sent = request.args.get("sent") == "1"
    return render_page("contact.html", "contact", form=ContactFormData(), errors={}, sent=sent)


@contact_bp.route("/contact", methods=["POST"])
def submit_contact():
    data = ContactFormData.from_form(request.form)
    violations = validate_contact_form(data)

    if violations:
        errors = {v.field: v.message for v in violations}
        return render_page(
            "contact.html", "contact", status_code=400, form=data, errors=errors, sent=False
        )

    logger.info(
        "contact form submitted",
        contact_name=data.name,
        contact_email=data.email,
        message_length=len(data.message),
    )
    return redirect(url_for("contact.contact", sent=1), code=303)
