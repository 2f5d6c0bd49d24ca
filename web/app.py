"""
SparkDeck - Web Server

A small Flask server that hosts the showcase UI and a read-only ideas API
backed by the static catalog JSON file. Nothing is persisted: submissions
and newsletter sign-ups are validated and echoed back.

Run with: python -m web.app
Or: python main.py --serve
"""

import sys
import uuid
from datetime import datetime, timezone
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from flask import Flask, render_template, request, jsonify
from werkzeug.exceptions import HTTPException

from sparkdeck.config import (
    APP_ENV,
    DEBUG,
    HOST,
    PORT,
    SAMPLE_IDEAS_PATH,
    is_development,
)
from sparkdeck.logging import bind_contextvars, clear_contextvars, configure_logging, get_logger
from sparkdeck.models import CATEGORY_ALL, SORT_KEYS, VIEWS, complexity_label, compute_stats, idea_from_submission
from sparkdeck.render import Renderer, format_date
from sparkdeck.services.catalog import load_catalog
from sparkdeck.showcase import EMAIL_PATTERN
from sparkdeck.store import DataStore, filter_ideas, sort_ideas

app = Flask(__name__)
app.config["SAMPLE_IDEAS_PATH"] = SAMPLE_IDEAS_PATH

logger = get_logger(__name__)

_renderer = Renderer()

# Applied to every response by add_security_headers
CONTENT_SECURITY_POLICY = "; ".join([
    "default-src 'self'",
    "style-src 'self' 'unsafe-inline' https://fonts.googleapis.com",
    "script-src 'self' 'unsafe-inline'",
    "font-src 'self' https://fonts.gstatic.com",
    "img-src 'self' data: https:",
    "connect-src 'self'",
])


# =============================================================================
# Helpers
# =============================================================================

def get_catalog():
    """Load the catalog for this request (no state is shared between requests)."""
    return load_catalog(app.config["SAMPLE_IDEAS_PATH"])


def catalog_last_updated() -> str:
    """Modification time of the catalog file, ISO formatted."""
    path = Path(app.config["SAMPLE_IDEAS_PATH"])
    mtime = datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)
    return mtime.isoformat()


def build_store(args) -> DataStore:
    """
    Build a Data Store for the page from query parameters.

    Unknown sort keys and views fall back to the defaults; out-of-range
    indexes are ignored.
    """
    store = DataStore(get_catalog())

    sort_key = args.get("sort", "newest")
    store.set_sort(sort_key if sort_key in SORT_KEYS else "newest")
    store.set_category(args.get("category", CATEGORY_ALL))

    view = args.get("view", "carousel")
    store.set_view(view if view in VIEWS else "carousel")

    index = args.get("index", type=int)
    if index is not None:
        store.go_to(index)

    idea_id = args.get("idea", type=int)
    if idea_id is not None:
        position = store.index_of(idea_id)
        if position is not None:
            store.open_detail(position)

    return store


def render_index(store: DataStore, toast=None, status: int = 200):
    view = _renderer.render(store)
    return render_template(
        "index.html",
        view=view,
        state=store.state,
        categories=store.categories(),
        sort_keys=SORT_KEYS,
        toast=toast,
    ), status


def api_error(message: str, status: int):
    return jsonify({"error": message}), status


# =============================================================================
# Request Hooks
# =============================================================================

@app.before_request
def bind_request_context():
    bind_contextvars(request_id=uuid.uuid4().hex[:8], path=request.path)


@app.after_request
def add_security_headers(response):
    response.headers["Content-Security-Policy"] = CONTENT_SECURITY_POLICY
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["Access-Control-Allow-Origin"] = "*"
    return response


@app.teardown_request
def clear_request_context(exc):
    clear_contextvars()


# =============================================================================
# Pages
# =============================================================================

@app.route("/")
def index():
    """Main showcase page."""
    return render_index(build_store(request.args))


@app.route("/submit", methods=["POST"])
def submit_form():
    """Submission form (server-rendered). Validated, never stored."""
    store = build_store(request.args)
    try:
        idea = idea_from_submission(request.form.to_dict())
    except ValueError as e:
        store.open_submit()
        return render_index(store, toast={"level": "error", "message": str(e)}, status=400)

    logger.info("idea_submitted", title=idea.title, category=idea.category)
    return render_index(store, toast={
        "level": "success",
        "message": "Idea submitted successfully! It will be reviewed soon.",
    })


@app.route("/subscribe", methods=["POST"])
def subscribe_form():
    """Newsletter form (server-rendered)."""
    store = build_store(request.args)
    email = (request.form.get("email") or "").strip()
    if not EMAIL_PATTERN.match(email):
        return render_index(store, toast={"level": "error", "message": "Please enter a valid email address."}, status=400)

    logger.info("newsletter_subscribed")
    return render_index(store, toast={"level": "success", "message": "Successfully subscribed to newsletter!"})


# =============================================================================
# API Endpoints
# =============================================================================

@app.route("/api/ideas")
def api_ideas():
    """All ideas, optionally filtered by ?category= and ordered by ?sort=."""
    # An empty ?category= means "all", as it does for the UI page
    category = request.args.get("category") or CATEGORY_ALL
    sort_key = request.args.get("sort")

    if sort_key is not None and sort_key not in SORT_KEYS:
        return api_error(f"Unknown sort key: {sort_key}", 400)

    ideas = filter_ideas(get_catalog(), category)
    # Without an explicit sort the catalog keeps its file order
    if sort_key is not None:
        ideas = sort_ideas(ideas, sort_key)
    return jsonify([idea.to_dict() for idea in ideas])


@app.route("/api/ideas/<int:idea_id>")
def api_idea(idea_id):
    """A single idea."""
    for idea in get_catalog():
        if idea.id == idea_id:
            return jsonify(idea.to_dict())
    return api_error(f"Idea not found: {idea_id}", 404)


@app.route("/api/stats")
def api_stats():
    """Platform statistics computed from the catalog."""
    stats = compute_stats(get_catalog())
    return jsonify({
        "totalIdeas": stats.total_ideas,
        "totalCategories": stats.total_categories,
        "avgRating": stats.avg_rating,
        "lastUpdated": catalog_last_updated(),
    })


@app.route("/api/ideas/submit", methods=["POST"])
def api_submit_idea():
    """Validate a submitted idea and echo it back as pending (not persisted)."""
    data = request.get_json(silent=True)

    if not data or not isinstance(data, dict):
        return api_error("No data provided", 400)

    try:
        idea = idea_from_submission(data)
    except ValueError as e:
        return api_error(str(e), 400)

    next_id = max((i.id or 0 for i in get_catalog()), default=0) + 1
    record = idea.to_dict()
    record["id"] = next_id

    logger.info("idea_submitted", id=next_id, category=idea.category)
    return jsonify(record), 201


@app.route("/api/newsletter/subscribe", methods=["POST"])
def api_subscribe():
    """Validate a newsletter sign-up (not persisted)."""
    data = request.get_json(silent=True) or {}
    email = str(data.get("email") or "").strip()

    if not EMAIL_PATTERN.match(email):
        return api_error("A valid email is required", 400)

    logger.info("newsletter_subscribed")
    return jsonify({"success": True, "email": email, "message": "Subscribed"})


@app.route("/health")
def health():
    """Health check endpoint."""
    return jsonify({
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": "SparkDeck",
    })


@app.route("/api/<path:path>")
def api_not_found(path):
    return api_error(f"Not found: /api/{path}", 404)


@app.route("/<path:path>")
def spa_catch_all(path):
    """Any other path serves the showcase page."""
    return render_index(build_store(request.args))


# =============================================================================
# Error Handling
# =============================================================================

@app.errorhandler(Exception)
def handle_error(error):
    """JSON 500 for unhandled errors; HTTP errors pass through."""
    if isinstance(error, HTTPException):
        return error

    logger.exception("unhandled_error", error=str(error))
    body = {"error": "Something went wrong!"}
    if is_development():
        body["message"] = str(error)
    return jsonify(body), 500


# =============================================================================
# Template Filters
# =============================================================================

app.add_template_filter(format_date, "format_date")
app.add_template_filter(complexity_label, "complexity_label")


if __name__ == "__main__":
    configure_logging()
    print("=" * 50)
    print("🚀 SparkDeck")
    print("=" * 50)
    print(f"Environment: {APP_ENV}")
    print(f"Open http://localhost:{PORT} in your browser")
    print("Press Ctrl+C to stop")
    print("=" * 50)
    app.run(host=HOST, debug=DEBUG, port=PORT)
