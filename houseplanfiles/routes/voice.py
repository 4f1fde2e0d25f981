"""Voice navigation: resolve a spoken transcript into a storefront intent."""

from flask import Blueprint, current_app, jsonify

from houseplanfiles.extensions import limiter
from houseplanfiles.forms import VoiceCommandForm
from houseplanfiles.routes.common import validation_error
from houseplanfiles.services.voice import resolve_command
from houseplanfiles.services.voice.gemini import GeminiClient
from houseplanfiles.utils.ttl_cache import TTLCache


voice_bp = Blueprint('voice', __name__)

def _cache():
    cache = current_app.extensions.get('voice_cache')
    if cache is None:
        cache = TTLCache(ttl_seconds=current_app.config['VOICE_CACHE_TTL_SECONDS'], max_items=512)
        current_app.extensions['voice_cache'] = cache
    return cache


@voice_bp.route('/resolve', methods=['POST'])
@limiter.limit(lambda: current_app.config['VOICE_RATE_LIMIT'])
def resolve():
    form = VoiceCommandForm()
    if not form.validate():
        return validation_error(form)

    intent = resolve_command(
        form.transcript.data or '',
        pathname=form.pathname.data or None,
        client=GeminiClient.from_config(current_app.config),
        min_confidence=current_app.config['VOICE_MIN_CONFIDENCE'],
        cache=_cache(),
    )
    current_app.logger.debug('Voice command %r -> %s (%s)', form.transcript.data, intent.intent, intent.source)
    return jsonify(intent.to_dict())
