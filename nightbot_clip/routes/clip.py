import logging
from flask import Blueprint, Response, current_app, jsonify, request

from ..models.clips import ClipRequest, ClipResult
from ..orchestrator import ClipOrchestrator

logger = logging.getLogger(__name__)

clip_bp = Blueprint('clip', __name__)


def render_result(result: ClipResult, response_format: str):
    """Format a ClipResult the way the configured bot integration expects it"""
    if response_format == 'json':
        return jsonify(result.to_dict()), result.http_status
    return Response(result.message, status=result.http_status, mimetype='text/plain')


@clip_bp.route('/clip', methods=['GET'])
def create_clip():
    """Create a clip of the live stream for a chat command"""
    config = current_app.config['RELAY_CONFIG']
    clip_request = ClipRequest.from_args(request.args)

    orchestrator = ClipOrchestrator(config, client=current_app.config['TWITCH_CLIENT'])
    result = orchestrator.create_clip(clip_request)
    return render_result(result, config.response_format)


@clip_bp.route('/test', methods=['GET'])
def test_bot():
    """Echo endpoint for checking the bot command wiring"""
    return jsonify({
        'message': '✅ Twitch Clip Bot is working!',
        'user': request.args.get('user') or 'unknown',
        'role': request.args.get('role') or 'unknown'
    })
