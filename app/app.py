"""
Nexiplay Admin - catalog back-office API
Application factory and initialization
"""
import os
import sys
import logging

import flask.cli
flask.cli.show_server_banner = lambda *args: None

# Core Flask imports
from flask import Flask
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# Local imports
from constants import BUILD_VERSION, NEXIPLAY_DB
from settings import reload_conf
from db import db, init_db
from exceptions import register_exception_handlers
from metrics import init_metrics
from storage import build_object_store
from utils import ColoredFormatter, FilterRemoveDateFromWerkzeugLogs, get_or_create_secret_key
import structlog

# Routes
from routes.ads import ads_bp
from routes.chatbot import chatbot_bp
from routes.content import content_bp
from routes.dead_links import dead_links_bp
from routes.inbox import inbox_bp
from routes.notices import notices_bp
from routes.platform import platform_bp
from routes.seasons import seasons_bp
from routes.system import system_bp

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["2000 per day", "300 per hour"],
    storage_uri="memory://",
)

# Logging configuration
formatter = ColoredFormatter(
    '[%(asctime)s.%(msecs)03d] %(levelname)s (%(module)s) %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
)
handler = logging.StreamHandler(sys.stdout)
handler.setFormatter(formatter)

logging.basicConfig(
    level=logging.INFO,
    handlers=[handler]
)

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer() if os.environ.get('LOG_FORMAT') == 'json' else structlog.dev.ConsoleRenderer()
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger('main')

# Apply filter to hide date from http access logs
logging.getLogger('werkzeug').addFilter(FilterRemoveDateFromWerkzeugLogs())

BLUEPRINTS = [
    content_bp,
    seasons_bp,
    dead_links_bp,
    ads_bp,
    notices_bp,
    chatbot_bp,
    inbox_bp,
    platform_bp,
    system_bp,
]


def create_app(config=None, object_store=None):
    """Application factory

    `config` overrides Flask settings (tests pass an in-memory database);
    `object_store` replaces the store built from the storage settings.
    """
    settings = reload_conf()

    app = Flask(__name__)
    app.config["SQLALCHEMY_DATABASE_URI"] = NEXIPLAY_DB
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['SECRET_KEY'] = get_or_create_secret_key()
    app.config['ADMIN_API_TOKEN'] = settings["admin"].get("api_token") or None
    app.config['RATELIMIT_ENABLED'] = True
    if config:
        app.config.update(config)

    if not app.config['ADMIN_API_TOKEN']:
        logger.warning("No admin token configured, the API is open")

    # Initialize components
    db.init_app(app)
    limiter.init_app(app)

    # One object store per app; services get it from app.extensions
    if object_store is None:
        object_store = build_object_store(settings["storage"])
    app.extensions["object_store"] = object_store

    # Register exception handlers
    register_exception_handlers(app)

    # Register blueprints
    for blueprint in BLUEPRINTS:
        app.register_blueprint(blueprint)

    # Initialize metrics
    init_metrics(app)

    # Initialize database
    init_db(app)

    logger.info("Application created", version=BUILD_VERSION, storage=type(object_store).__name__)
    return app


if __name__ == '__main__':
    app = create_app()
    logger.info(f'Build Version: {BUILD_VERSION}')
    logger.info('Starting server on port 8466...')
    app.run(debug=False, use_reloader=False, host="0.0.0.0", port=8466)
