"""
Quart application serving the news, quotes and studio endpoints.
"""
import logging
import math
import platform
import secrets
import time
from functools import wraps
from typing import Optional

from quart import Blueprint, Quart, Response, current_app, jsonify, request
from quart_cors import cors

from services.config import CacheWindow, Config, load_config
from services.container import Services, build_services
from services.llm import SpeechUnavailableError
from services.quotes import HYDERABAD_LAT, HYDERABAD_LON
from services.telegram_inbox import SECRET_HEADER
from processing.transliteration import to_roman_hindi

logger = logging.getLogger(__name__)

TRANSLATE_TARGETS = ("hi", "ur", "te", "romhi")

api = Blueprint("api", __name__)


def get_services() -> Services:
    return current_app.config["SERVICES"]


def cached(response: Response, window: CacheWindow) -> Response:
    """Attach shared-cache hints."""
    seconds, swr = window.max_age, window.stale_while_revalidate
    response.headers["Cache-Control"] = f"public, s-maxage={seconds}, stale-while-revalidate={swr}"
    response.headers["CDN-Cache-Control"] = f"max-age={seconds}, stale-while-revalidate={swr}"
    response.headers["Vary"] = "Accept-Encoding"
    return response


def _float_arg(name: str, default: float) -> float:
    try:
        value = float(request.args.get(name, ""))
    except ValueError:
        return default
    return value if math.isfinite(value) else default


# ==================== Decorators ====================

def admin_key_required(f):
    """Decorator to require the X-Admin-Key shared secret."""
    @wraps(f)
    async def decorated_function(*args, **kwargs):
        expected = get_services().config.ADMIN_KEY
        provided = request.headers.get("X-Admin-Key", "")
        if not expected or not secrets.compare_digest(provided, expected):
            return jsonify({"error": "unauthorized"}), 401
        return await f(*args, **kwargs)
    return decorated_function


# ==================== News ====================

@api.route("/api/health")
async def health():
    services = get_services()
    return jsonify({
        "ok": True,
        "python": platform.python_version(),
        "time": int(time.time() * 1000),
        "llm": await services.text_service.health_check(),
    })


@api.route("/api/feed")
async def feed():
    services = get_services()
    category, items = await services.feed.run(request.args.get("category"))

    response = jsonify({
        "category": category,
        "items": [item.to_dict() for item in items],
    })
    return cached(response, services.config.cache.feed)


@api.route("/api/breaking")
async def breaking():
    services = get_services()
    items = await services.breaking.run()

    response = jsonify({"items": [item.to_dict() for item in items]})
    return cached(response, services.config.cache.breaking)


# ==================== Language ====================

@api.route("/api/translate", methods=["POST"])
async def translate():
    body = await request.get_json(silent=True) or {}
    text, target = body.get("text"), body.get("target")

    if not text or not target:
        return jsonify({"error": "text and target required"}), 400
    if target not in TRANSLATE_TARGETS:
        return jsonify({"error": "unsupported_target", "supported": list(TRANSLATE_TARGETS)}), 400

    out = await get_services().text_service.translate(text, "hi" if target == "romhi" else target)
    if target == "romhi":
        out = to_roman_hindi(out)

    return jsonify({"text": out})


@api.route("/api/tts", methods=["POST"])
async def tts():
    body = await request.get_json(silent=True) or {}
    text = body.get("text")
    if not text:
        return jsonify({"error": "text required"}), 400

    try:
        audio = await get_services().text_service.speak(text)
    except SpeechUnavailableError as e:
        logger.error(f"TTS requested but unavailable: {e}")
        return jsonify({"error": "tts_unavailable"}), 503

    return Response(audio, mimetype="audio/mpeg")


@api.route("/api/verify-screenshot", methods=["POST"])
async def verify_screenshot():
    files = await request.files
    image = files.get("image")
    if image is None:
        return jsonify({"error": "image_required"}), 400

    data = image.read()
    if not data:
        return jsonify({"error": "image_required"}), 400

    verdict = await get_services().text_service.verify_receipt(data, image.mimetype or "image/png")
    return jsonify(verdict)


# ==================== Quotes ====================

@api.route("/api/weather")
async def weather():
    services = get_services()
    snapshot = await services.quotes.weather(
        _float_arg("lat", HYDERABAD_LAT),
        _float_arg("lon", HYDERABAD_LON),
    )
    if snapshot is None:
        return jsonify({"error": "unavailable"})

    return cached(jsonify(snapshot.to_dict()), services.config.cache.quotes)


@api.route("/api/gold")
async def gold():
    services = get_services()
    quote = await services.quotes.gold_rate()
    if quote is None:
        return jsonify({"error": "unavailable"})

    return cached(jsonify(quote.to_dict()), services.config.cache.quotes)


# ==================== Telegram / Studio ====================

@api.route("/telegram/webhook", methods=["POST"])
async def telegram_webhook():
    """
    Always acknowledges with 200 so Telegram never retries a delivery,
    including deliveries rejected for a wrong secret token.
    """
    services = get_services()

    if not services.inbox.is_authorized(request.headers.get(SECRET_HEADER)):
        logger.warning("Dropped webhook delivery with a missing or wrong secret token")
        return "OK", 200

    try:
        payload = await request.get_json(force=True, silent=True)
        post = services.inbox.parse_update(payload or {})
        if post is not None:
            services.buffer.push(post)
            logger.info(f"Studio post {post.id} ({post.kind.value}) buffered")
    except Exception as e:
        logger.error(f"Webhook delivery failed, acknowledging anyway: {e!r}")

    return "OK", 200


@api.route("/tg/file/<file_id>")
async def telegram_file(file_id: str):
    result = await get_services().inbox.fetch_file(file_id)
    if result is None:
        return jsonify({"error": "not_found"}), 404

    content, content_type = result
    return Response(content, content_type=content_type)


@api.route("/api/azad-studio")
async def azad_studio():
    services = get_services()
    response = jsonify({"items": services.buffer.snapshot()})
    return cached(response, services.config.cache.studio)


@api.route("/api/notify/breaking", methods=["POST"])
@admin_key_required
async def notify_breaking():
    services = get_services()
    if not services.deliveries:
        return jsonify({"ok": True, "delivered": 0})

    items = await services.breaking.run()
    if not items:
        return jsonify({"ok": True, "delivered": 0})

    delivered = 0
    for delivery in services.deliveries:
        try:
            await delivery.deliver(headline="Breaking news", entries=items)
            delivered += 1
            logger.info(f"Delivered {len(items)} breaking items via {delivery.name}")
        except Exception as e:
            logger.error(f"Delivery failed: channel={delivery.name}, error={e}")

    return jsonify({"ok": True, "delivered": delivered})


# ==================== Application ====================

def create_app(config: Optional[Config] = None, services: Optional[Services] = None) -> Quart:
    """Build the application around an explicitly owned set of services."""
    if services is None:
        services = build_services(config or load_config())
    config = services.config

    app = Quart(__name__)
    app.config["SERVICES"] = services
    app.config["MAX_CONTENT_LENGTH"] = config.MAX_UPLOAD_BYTES
    app.register_blueprint(api)

    @app.after_request
    async def security_headers(response: Response) -> Response:
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "SAMEORIGIN")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        return response

    @app.errorhandler(404)
    async def not_found(error):
        return jsonify({"error": "not_found", "path": request.path}), 404

    @app.errorhandler(413)
    async def too_large(error):
        return jsonify({"error": "payload_too_large"}), 413

    @app.errorhandler(500)
    async def server_error(error):
        logger.error(f"Unhandled error on {request.path}: {error!r}")
        return jsonify({"error": "server_error"}), 500

    return cors(
        app,
        allow_origin=config.CORS_ORIGIN,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    )
