from __future__ import annotations

import io
import mimetypes

from flask import Flask, abort, send_file

from ..container import Container
from ..web.decorators import login_required


def register(app: Flask, container: Container) -> None:
    base_url = str(app.config.get("STORAGE_BASE_URL", "/files")).rstrip("/")

    # Only local storage is served by the app itself.
    read = getattr(container.storage, "read", None)
    if read is None or not base_url.startswith("/"):
        return

    @app.route(f"{base_url}/<path:path>", endpoint="stored_file")
    @login_required
    def stored_file(path: str):
        try:
            data = read(path)
        except (OSError, ValueError):
            abort(404)
        mimetype = mimetypes.guess_type(path)[0] or "application/octet-stream"
        return send_file(io.BytesIO(data), mimetype=mimetype)
