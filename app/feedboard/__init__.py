import logging
from datetime import timedelta

from dotenv import load_dotenv
from flask import Flask, g, jsonify, render_template, request
from sqlalchemy.exc import OperationalError
from werkzeug.exceptions import HTTPException

from app.feedboard.auth import assign_request_id
from app.feedboard.config import is_production, load_config
from app.feedboard.db import init_db, teardown_db_session
from app.feedboard.errors import DatabaseUnavailable, FeedboardError
from app.feedboard.routes import bp as routes_bp
from app.feedboard.modules.boards.views import bp as boards_bp
from app.feedboard.modules.posts.api import bp as posts_bp
from app.feedboard.modules.votes.api import bp as votes_bp


def _wants_json() -> bool:
    return request.path.startswith("/api/")


def create_app() -> Flask:
    load_dotenv()
    app = Flask(__name__, template_folder="templates", static_folder="static")
    app.config.from_mapping(load_config())
    app.config["PERMANENT_SESSION_LIFETIME"] = timedelta(days=30)

    logging.getLogger("app.feedboard").setLevel(app.config["LOG_LEVEL"])
    app.logger.setLevel(app.config["LOG_LEVEL"])

    # Production guardrails (fail fast with clear logs)
    if is_production(app.config.get("ENV")):
        if not app.config.get("DATABASE_URL") or str(app.config["DATABASE_URL"]).strip() == "":
            raise RuntimeError("DATABASE_URL is required in production.")
        if str(app.config["DATABASE_URL"]).startswith("sqlite"):
            raise RuntimeError("DATABASE_URL must be Postgres in production (not sqlite).")
        if not app.config.get("SECRET_KEY") or str(app.config["SECRET_KEY"]) in ("", "change-me"):
            raise RuntimeError("SECRET_KEY must be set to a strong value in production (not default).")

    init_db(app)

    def _dispose_engine_on_fork() -> None:
        import os
        if hasattr(os, "register_at_fork"):
            def _after_fork_child():
                engine = app.extensions.get("sqlalchemy_engine")
                if engine:
                    engine.dispose()
                    app.extensions["sqlalchemy_connected"] = False
                    app.logger.info("Disposed DB engine after fork (pid=%s)", os.getpid())

            os.register_at_fork(after_in_child=_after_fork_child)

    _dispose_engine_on_fork()

    app.register_blueprint(routes_bp)
    app.register_blueprint(boards_bp)
    app.register_blueprint(posts_bp, url_prefix="/api")
    app.register_blueprint(votes_bp, url_prefix="/api")

    app.before_request(assign_request_id)
    app.teardown_appcontext(teardown_db_session)

    @app.errorhandler(FeedboardError)
    def _err_feedboard(e: FeedboardError):  # type: ignore[no-redef]
        if e.status_code >= 500:
            app.logger.error("%s (request_id=%s): %s", type(e).__name__, getattr(g, "request_id", None), e.__cause__ or e)
        if _wants_json():
            return jsonify({"error": e.message}), e.status_code
        return render_template("errors/500.html", message=e.message), e.status_code

    @app.errorhandler(Exception)
    def _err_unhandled(e: Exception):  # type: ignore[no-redef]
        if isinstance(e, HTTPException):
            if _wants_json() and e.code is not None:
                return jsonify({"error": e.name}), e.code
            return e
        if isinstance(e, OperationalError):
            # connection lost after the startup check; verify again on the next request
            app.extensions["sqlalchemy_connected"] = False
            err = DatabaseUnavailable()
            err.__cause__ = e
            return _err_feedboard(err)
        # Details stay in the logs; callers only get a generic message.
        app.logger.exception("Unhandled error on %s %s (request_id=%s)", request.method, request.path, getattr(g, "request_id", None))
        if _wants_json():
            return jsonify({"error": "Internal server error"}), 500
        return render_template("errors/500.html"), 500

    logging.getLogger(__name__).info("create_app() complete; app ready to serve")

    return app
