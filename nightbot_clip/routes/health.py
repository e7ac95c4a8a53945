from flask import Blueprint, current_app, jsonify
import logging

from ..errors import TwitchAPIError

logger = logging.getLogger(__name__)

health_bp = Blueprint('health', __name__)


@health_bp.route('/', methods=['GET'])
def index():
    """Service banner and route map"""
    return jsonify({
        'status': '✅ Server is running',
        'message': 'Twitch Clip API for Nightbot',
        'endpoints': {
            'clip': '/clip',
            'status': '/status',
            'test': '/test'
        }
    })


@health_bp.route('/status', methods=['GET'])
def status():
    """Check that credentials are configured and accepted by Twitch"""
    config = current_app.config['RELAY_CONFIG']

    if not config.has_credentials:
        logger.error(f"Status check: missing {', '.join(config.missing_credentials())}")
        return jsonify({
            'error': 'Missing environment variables',
            'hasClientId': bool(config.client_id),
            'hasAccessToken': bool(config.access_token),
            'hasBroadcasterId': bool(config.broadcaster_id)
        }), 500

    try:
        current_app.config['TWITCH_CLIENT'].get_users()
    except TwitchAPIError as e:
        logger.error(f"Status check error: {e.payload or e}")
        return jsonify({
            'error': 'Status check failed',
            'details': e.payload or str(e)
        }), 500
    except Exception as e:
        logger.error(f"Status check error: {e}")
        return jsonify({
            'error': 'Status check failed',
            'details': str(e)
        }), 500

    return jsonify({
        'status': '✅ All systems operational',
        'channel': config.channel_name,
        'twitchApi': '✅ Connected',
        'broadcasterId': config.broadcaster_id
    })
