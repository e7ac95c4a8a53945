import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask
from flask_cors import CORS

from .config import RelayConfig
from .routes import clip_bp, health_bp
from .twitch_client import TwitchClient

logger = logging.getLogger(__name__)


def create_app(config: Optional[RelayConfig] = None,
               twitch_client: Optional[TwitchClient] = None) -> Flask:
    """Application factory for the clip relay.

    Without an explicit config the environment (and a ``.env`` file, if any)
    is read here, once, and the result is shared read-only by all requests.
    """
    if config is None:
        load_dotenv()
        config = RelayConfig.from_env()

    logging.basicConfig(level=getattr(logging, config.log_level, logging.INFO))

    app = Flask(__name__)
    app.config['RELAY_CONFIG'] = config
    app.config['TWITCH_CLIENT'] = twitch_client or TwitchClient.from_config(config)
    app.json.ensure_ascii = False

    # Enable CORS
    CORS(app)

    for blueprint in (health_bp, clip_bp):
        app.register_blueprint(blueprint)
        logger.info(f"Registered blueprint: {blueprint.name}")

    missing = config.missing_credentials()
    if missing:
        logger.warning(f"Missing environment variables: {', '.join(missing)}; /clip will refuse requests")
    if config.auth_mode == 'legacy':
        logger.info("Clip authorization mode: legacy (only owner accounts with an allowed role are rejected)")

    return app


def main():
    app = create_app()
    port = app.config['RELAY_CONFIG'].port
    logger.info(f"Starting clip relay on port {port}")
    app.run(host='0.0.0.0', port=port, threaded=True)


if __name__ == '__main__':
    main()
