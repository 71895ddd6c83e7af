"""
Admin and static-file endpoints:
- GET  /admin/metrics   -> HTML page with the fileserver hit count
- POST /admin/reset     -> zero the counter and wipe users (PLATFORM=dev only)
- GET  /app/<path>      -> static files from FILESERVER_ROOT, counted
"""
from flask import Blueprint, abort, current_app, send_from_directory

from models import storage

bp = Blueprint("admin", __name__)
files_bp = Blueprint("fileserver", __name__)

METRICS_HTML = """<html>
  <body>
    <h1>Welcome, Chirpy Admin</h1>
    <p>Chirpy has been visited {hits} times!</p>
  </body>
</html>"""


def _hits():
    return current_app.extensions["chirpy_hits"]


@bp.get("/metrics")
def metrics():
    """
    Fileserver hit count
    ---
    tags:
      - Admin
    produces:
      - text/html
    responses:
      200:
        description: HTML page
    """
    html = METRICS_HTML.format(hits=_hits().value)
    return html, 200, {"Content-Type": "text/html; charset=utf-8"}


@bp.post("/reset")
def reset():
    """
    Reset hit counter and delete all users (dev platform only)
    ---
    tags:
      - Admin
    responses:
      200:
        description: Reset done
      403:
        description: Not allowed outside the dev platform
    """
    if current_app.config.get("PLATFORM") != "dev":
        abort(403, description="Reset is only allowed in dev environment")

    _hits().reset()
    deleted = storage.delete_all_users()
    current_app.logger.warning("admin reset: removed %d users", deleted)
    return "", 200


@files_bp.get("/", defaults={"path": "index.html"})
@files_bp.get("/<path:path>")
def serve(path):
    _hits().increment()
    return send_from_directory(current_app.config["FILESERVER_ROOT"], path)
