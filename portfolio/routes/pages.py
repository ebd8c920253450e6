# -*- coding: utf-8 -*-
"""Content pages."""
from flask import Blueprint

from portfolio.rendering import render_page
from portfolio.services.pricing import AMOUNT_ALLOWANCES

pages_bp = Blueprint("pages", __name__)

OWNER_NAME = "Chris"
OWNER_TAGLINE = "Backend developer building with Go"


def _pricing_cards():
    """Tier cards for the pricing table, in display order."""
    slugs = {"Starter": "starter", "Growth": "growth", "Professional": "professional"}
    return [
        {
            "slug": slugs[allowance.tier],
            "label": allowance.tier,
            "price_dollars": amount // 100,
            "credits": allowance.credits,
        }
        for amount, allowance in sorted(AMOUNT_ALLOWANCES.items())
    ]


@pages_bp.route("/", methods=["GET"])
def home():
    return render_page("home.html", "home", name=OWNER_NAME, tagline=OWNER_TAGLINE)


@pages_bp.route("/about", methods=["GET"])
def about():
    return render_page("about.html", "about", name=OWNER_NAME)


@pages_bp.route("/compress", methods=["GET"])
def compress():
    return render_page("compress.html", "compress", tiers=_pricing_cards())


@pages_bp.route("/compress/docs", methods=["GET"])
def docs():
    return render_page("docs.html", "docs", tiers=_pricing_cards())
