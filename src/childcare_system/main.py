from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .settings import get_settings_module

from .database.bootstrap import apply_schema, list_tables
from .database.seed import ensure_demo_data

from .core.constants import DEFAULT_MAX_ROSTER_SESSIONS, DEFAULT_ROSTER_IDLE_SECONDS
from .container import Container, build_container, build_store
from .children.controller import register as register_children
from .comments.controller import register as register_comments
from .departments.controller import register as register_departments
from .events.controller import register as register_events
from .guest_links.controller import register as register_guest_links
from .images.controller import register as register_images
from .roster.controller import register as register_roster
from .users.controller import register as register_users


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["STORAGE_BASE_URL"] = getattr(settings, "STORAGE_BASE_URL", "/files")

    logging.basicConfig(
        level=logging.DEBUG if app.config["DEBUG"] else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    backend = str(getattr(settings, "STORE_BACKEND", "memory"))
    db_config = getattr(settings, "DB_CONFIG", {})

    if app.config["DEBUG"]:
        print(
            "[childcare-system] settings=", settings_module,
            " store=", backend,
            " db=", f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
            if backend == "mysql" else "-",
        )

    if container is None:
        store, conn = build_store(backend=backend, db_config=db_config)

        if conn is not None and bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[2] / "database" / "schema.sql"
            apply_schema(conn, schema_path=schema_path)
            if app.config["DEBUG"]:
                print(f"[childcare-system] schema ready (tables={len(list_tables(conn))})")

        container = build_container(
            store=store,
            conn=conn,
            storage_root=getattr(settings, "STORAGE_ROOT", "var/storage"),
            storage_base_url=app.config["STORAGE_BASE_URL"],
            max_write_workers=int(getattr(settings, "MAX_WRITE_WORKERS", 4)),
            default_vacation_days=int(getattr(settings, "DEFAULT_VACATION_DAYS", 7)),
            roster_idle_seconds=float(getattr(settings, "ROSTER_IDLE_SECONDS", DEFAULT_ROSTER_IDLE_SECONDS)),
            max_roster_sessions=int(getattr(settings, "MAX_ROSTER_SESSIONS", DEFAULT_MAX_ROSTER_SESSIONS)),
        )

        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_demo_data(container)
            if app.config["DEBUG"]:
                print("[childcare-system] demo seed ready")

    app.extensions["childcare_container"] = container

    register_users(app, container)
    register_roster(app, container)
    register_children(app, container)
    register_images(app, container)
    register_events(app, container)
    register_comments(app, container)
    register_guest_links(app, container)
    register_departments(app, container)

    return app
