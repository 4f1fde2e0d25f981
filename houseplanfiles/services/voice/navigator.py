"""Resolve a spoken transcript into a storefront intent.

The hosted model is asked first when configured. Its answer is used only
above the confidence threshold and only for intents the storefront can act
on; anything else falls through to the static keyword map.
"""

from __future__ import annotations

import logging
import re
from dataclasses import asdict, dataclass, replace
from typing import Optional
from urllib.parse import quote

from houseplanfiles.services.voice.commands import (
    COMMAND_MAP,
    FILLER_WORDS,
    FOOTER_WORDS,
    REGISTER_FLOW_PHRASES,
    SORTED_COMMANDS,
)
from houseplanfiles.services.voice.gemini import GeminiClient, GeminiError
from houseplanfiles.utils.ttl_cache import TTLCache


logger = logging.getLogger(__name__)

DEFAULT_MIN_CONFIDENCE = 0.6
NOT_UNDERSTOOD = "I am sorry, I couldn't understand that command."

_FILLERS = re.compile('|'.join(re.escape(w) for w in FILLER_WORDS))


@dataclass(frozen=True)
class VoiceIntent:
    intent: str            # NAVIGATE, ACTION, FILL, FLOW, SEARCH, CLICK, UNKNOWN
    action: str            # navigate, scroll, fill, flow, click, none
    target: Optional[str] = None
    value: Optional[str] = None
    path: Optional[str] = None
    confidence: float = 0.0
    source: str = 'keywords'
    speech: str = ''

    def to_dict(self) -> dict:
        return asdict(self)


def _register_flow(source: str, confidence: float, speech: str) -> VoiceIntent:
    return VoiceIntent(
        intent='FLOW', action='flow', target='register', path='/register',
        confidence=confidence, source=source, speech=speech,
    )


def _footer(source: str, confidence: float, speech: str) -> VoiceIntent:
    return VoiceIntent(
        intent='ACTION', action='scroll', target='footer',
        confidence=confidence, source=source, speech=speech,
    )


def interpret_model_reply(data: Optional[dict], min_confidence: float = DEFAULT_MIN_CONFIDENCE) -> Optional[VoiceIntent]:
    """Map a parsed model reply onto an intent, or None to use keywords."""
    if not data:
        return None
    try:
        confidence = float(data.get('confidence') or 0)
    except (TypeError, ValueError):
        return None
    if confidence <= min_confidence:
        return None

    intent = str(data.get('intent') or '').upper()
    target = str(data.get('target') or '').strip()
    value = data.get('value')

    if intent == 'SEARCH' and target:
        return VoiceIntent(
            intent='SEARCH', action='navigate', target=target,
            path=f"/products?search={quote(target)}",
            confidence=confidence, source='ai', speech=f"Searching for {target} plans.",
        )
    if intent == 'FLOW' and target == 'register':
        return _register_flow('ai', confidence, 'Sure, starting the registration flow.')
    if intent == 'NAVIGATE' and target:
        path = target if target.startswith('/') else f"/{target}"
        return VoiceIntent(
            intent='NAVIGATE', action='navigate', target=target, path=path,
            confidence=confidence, source='ai',
            speech=f"Navigating to {path.replace('/', '', 1) or 'home'}",
        )
    if intent == 'ACTION' and target == 'footer':
        return _footer('ai', confidence, 'Scrolling to the bottom of the page.')
    if intent == 'FILL' and target:
        return VoiceIntent(
            intent='FILL', action='fill', target=target,
            value=None if value is None else str(value),
            confidence=confidence, source='ai', speech=f"Filling {target}.",
        )
    return None


def clean_transcript(transcript: str) -> str:
    return _FILLERS.sub('', transcript).strip()


def match_keywords(transcript: str) -> VoiceIntent:
    """Keyword fallback over the static command map."""
    transcript = (transcript or '').strip().lower()
    if not transcript:
        return VoiceIntent(intent='UNKNOWN', action='none', speech=NOT_UNDERSTOOD)

    clean = clean_transcript(transcript)

    if any(word in transcript for word in FOOTER_WORDS):
        return _footer('keywords', 1.0, 'Scrolling to footer.')

    if any(phrase in transcript for phrase in REGISTER_FLOW_PHRASES):
        return _register_flow('keywords', 1.0, 'Starting registration process.')

    for command in SORTED_COMMANDS:
        if clean == command or command in transcript:
            return VoiceIntent(
                intent='NAVIGATE', action='navigate', target=command, path=COMMAND_MAP[command],
                confidence=1.0, source='keywords', speech=f"Opening {command}",
            )

    if clean:
        # The client clicks the first control whose text contains ``target``.
        return VoiceIntent(
            intent='CLICK', action='click', target=clean,
            confidence=0.0, source='keywords', speech=NOT_UNDERSTOOD,
        )
    return VoiceIntent(intent='UNKNOWN', action='none', speech=NOT_UNDERSTOOD)


def resolve_command(
    transcript: str,
    pathname: Optional[str] = None,
    client: Optional[GeminiClient] = None,
    min_confidence: float = DEFAULT_MIN_CONFIDENCE,
    cache: Optional[TTLCache] = None,
) -> VoiceIntent:
    """Resolve ``transcript``; ``pathname`` is the page the user is on."""
    transcript = (transcript or '').strip().lower()

    resolved = cache.get(transcript) if cache is not None and transcript else None
    if resolved is None:
        resolved, cacheable = _resolve(transcript, client, min_confidence)
        if cache is not None and transcript and cacheable:
            cache.set(transcript, resolved)

    # Already on the registration page: start filling without navigating.
    if resolved.intent == 'FLOW' and pathname and pathname.rstrip('/') == resolved.path:
        return replace(resolved, path=None)
    return resolved


def _resolve(transcript: str, client: Optional[GeminiClient], min_confidence: float) -> tuple[VoiceIntent, bool]:
    """Return the intent and whether it may be cached.

    A keyword fallback taken because the model call failed is not cached,
    so the next request for the same transcript asks the model again.
    """
    if transcript and client is not None:
        try:
            resolved = interpret_model_reply(client.parse_command(transcript), min_confidence)
        except (GeminiError, TypeError, ValueError) as exc:
            logger.warning('AI voice parse failed, falling back to keywords: %s', exc)
            return match_keywords(transcript), False
        if resolved is not None:
            return resolved, True
    return match_keywords(transcript), True
