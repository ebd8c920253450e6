"""
Static assets under /static.

Stylesheets, scripts and images are cached by browsers for a day; other
files get no cache directive. Missing files end up on the 404 page.
"""
import os

from flask import Blueprint, current_app, send_from_directory

static_bp = Blueprint("assets", __name__)

CACHEABLE_EXTENSIONS = (".css", ".js", ".png", ".jpg", ".ico")
ASSET_CACHE_CONTROL = "public, max-age=86400"  # 24 hours


@static_bp.route("/static/<path:filename>", methods=["GET", "HEAD"])
def serve_static(filename):
    static_dir = os.path.join(current_app.root_path, "static")
    response = send_from_directory(static_dir, filename)
    if filename.lower().endswith(CACHEABLE_EXTENSIONS):
        response.headers["Cache-Control"] = ASSET_CACHE_CONTROL
    return response
