"""Voice navigation: spoken transcript -> storefront intent."""

from houseplanfiles.services.voice.navigator import VoiceIntent, resolve_command

__all__ = ['VoiceIntent', 'resolve_command']
