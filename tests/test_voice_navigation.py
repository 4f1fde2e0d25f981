import json

import pytest
import requests

from houseplanfiles.services.voice import navigator
from houseplanfiles.services.voice.gemini import GeminiClient, extract_json
from houseplanfiles.utils.ttl_cache import TTLCache


class _FakeResponse:
    def __init__(self, payload, status=200):
        self._payload = payload
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f'{self.status_code} error')

    def json(self):
        return self._payload


def _gemini_reply(data):
    return {'candidates': [{'content': {'parts': [{'text': json.dumps(data)}]}}]}


def _client():
    return GeminiClient(api_key='k', model='gemini-test', api_base='https://gemini.test/v1beta')


def test_keywords_prefer_the_longest_phrase():
    intent = navigator.match_keywords('show me floor plans')
    assert intent.intent == 'NAVIGATE'
    assert intent.path == '/floor-plans'
    assert intent.target == 'floor plans'
    assert intent.speech == 'Opening floor plans'


def test_keywords_strip_filler_words():
    intent = navigator.match_keywords('Please go to gallery')
    assert intent.path == '/gallery'


def test_footer_and_register_flow():
    assert navigator.match_keywords('scroll to bottom').action == 'scroll'
    flow = navigator.match_keywords('register a user')
    assert flow.intent == 'FLOW'
    assert flow.path == '/register'


def test_unmatched_text_becomes_a_click_with_apology():
    intent = navigator.match_keywords('xyzzy')
    assert intent.intent == 'CLICK'
    assert intent.target == 'xyzzy'
    assert intent.speech == navigator.NOT_UNDERSTOOD


def test_empty_transcript_is_not_understood():
    intent = navigator.resolve_command('   ')
    assert intent.intent == 'UNKNOWN'
    assert intent.speech == navigator.NOT_UNDERSTOOD


def test_model_search_intent(monkeypatch):
    calls = []

    def fake_post(url, params=None, json=None, timeout=None):
        calls.append(url)
        return _FakeResponse(_gemini_reply({'intent': 'SEARCH', 'target': '40x50', 'confidence': 0.9}))

    monkeypatch.setattr(requests, 'post', fake_post)
    intent = navigator.resolve_command('40 by 50 readymade house plan', client=_client())
    assert intent.source == 'ai'
    assert intent.path == '/products?search=40x50'
    assert intent.speech == 'Searching for 40x50 plans.'
    assert calls == ['https://gemini.test/v1beta/models/gemini-test:generateContent']


def test_low_confidence_falls_back_to_keywords(monkeypatch):
    monkeypatch.setattr(
        requests, 'post',
        lambda *a, **kw: _FakeResponse(_gemini_reply({'intent': 'NAVIGATE', 'target': '/admin', 'confidence': 0.6})),
    )
    intent = navigator.resolve_command('open cart', client=_client())
    assert intent.source == 'keywords'
    assert intent.path == '/cart'


def test_transport_failure_falls_back_to_keywords(monkeypatch):
    def boom(*args, **kwargs):
        raise requests.ConnectionError('offline')

    monkeypatch.setattr(requests, 'post', boom)
    intent = navigator.resolve_command('open contact', client=_client())
    assert intent.source == 'keywords'
    assert intent.path == '/contact'


def test_register_flow_on_register_page_does_not_navigate():
    intent = navigator.resolve_command('register user', pathname='/register/')
    assert intent.intent == 'FLOW'
    assert intent.path is None


def test_resolutions_are_cached():
    cache = TTLCache(ttl_seconds=60)
    first = navigator.resolve_command('Open Cart', cache=cache)
    assert cache.get('open cart') == first


def test_fallback_after_model_failure_is_not_cached(monkeypatch):
    calls = []

    def flaky_post(*args, **kwargs):
        calls.append(1)
        if len(calls) == 1:
            raise requests.Timeout('slow')
        return _FakeResponse(_gemini_reply({'intent': 'SEARCH', 'target': '30x40', 'confidence': 0.9}))

    monkeypatch.setattr(requests, 'post', flaky_post)
    cache = TTLCache(ttl_seconds=60)

    first = navigator.resolve_command('show me 30x40 plans', client=_client(), cache=cache)
    assert first.source == 'keywords'
    assert cache.get('show me 30x40 plans') is None

    second = navigator.resolve_command('show me 30x40 plans', client=_client(), cache=cache)
    assert second.source == 'ai'
    assert second.path == '/products?search=30x40'
    assert len(calls) == 2
    assert cache.get('show me 30x40 plans') == second


def test_malformed_model_reply_falls_back_to_keywords(monkeypatch):
    reply = {'candidates': [{'content': {'parts': [{'text': {'intent': 'NAVIGATE'}}]}}]}
    monkeypatch.setattr(requests, 'post', lambda *a, **kw: _FakeResponse(reply))
    intent = navigator.resolve_command('open cart', client=_client())
    assert intent.source == 'keywords'
    assert intent.path == '/cart'


@pytest.mark.parametrize('text, expected', [
    ('```json\n{"intent": "FLOW", "target": "register"}\n```', {'intent': 'FLOW', 'target': 'register'}),
    ('no json here', None),
    ('{broken', None),
])
def test_extract_json(text, expected):
    assert extract_json(text) == expected


def test_voice_endpoint_uses_keywords_without_api_key(client):
    resp = client.post('/api/voice/resolve', json={'transcript': 'open marketplace', 'pathname': '/'})
    assert resp.status_code == 200
    data = resp.get_json()
    assert data['intent'] == 'NAVIGATE'
    assert data['path'] == '/marketplace'
    assert data['source'] == 'keywords'
