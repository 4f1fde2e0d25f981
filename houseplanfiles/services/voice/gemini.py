"""Minimal client for the Gemini ``generateContent`` REST endpoint."""

from __future__ import annotations

import json
import logging
import re
from typing import Optional

import requests


logger = logging.getLogger(__name__)

_JSON_OBJECT = re.compile(r'\{.*\}', re.DOTALL)


class GeminiError(RuntimeError):
    """Transport failure or an unusable model reply."""


PROMPT_TEMPLATE = """
You are a website navigation assistant. Parse the following voice command from a user.
User said: "{transcript}"

Return ONLY a JSON object in this format:
{{
    "intent": "NAVIGATE" | "ACTION" | "FILL" | "FLOW" | "SEARCH",
    "target": "route_path" | "element_name" | "field_name" | "search_term",
    "value": "data_to_fill_if_any",
    "confidence": 0-1
}}

Rules:
1. If it's a register request like "register a user" or "ek user register kar do", use intent "FLOW" and target "register".
2. If it's navigation, target should be the route path.
3. Common paths: /products, /register, /login, /dashboard, /cart, /admin, /footer.
4. If it's "scroll to footer" or just "footer", intent "ACTION" and target "footer".
5. If the user is asking for specific plans by size, dimensions, or name (e.g., "25x50 plans", "modern home designs", "40 by 50 readymade house plan"), use intent "SEARCH" and target should be the search term (e.g., "40x50", "25x50").
6. "Readymade house plans" refers to the /products page.
7. Confidence must be high for a match.

JSON Output:
"""


def build_prompt(transcript: str) -> str:
    return PROMPT_TEMPLATE.format(transcript=transcript.replace('"', "'"))


def extract_json(text: str) -> Optional[dict]:
    """First ``{...}`` span of the reply; models sometimes wrap it in fences."""
    match = _JSON_OBJECT.search(text or '')
    if not match:
        return None
    try:
        data = json.loads(match.group(0))
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


class GeminiClient:
    def __init__(self, api_key: str, model: str, api_base: str, timeout: float = 8.0):
        self.api_key = api_key
        self.model = model
        self.api_base = api_base.rstrip('/')
        self.timeout = timeout

    @classmethod
    def from_config(cls, config) -> Optional['GeminiClient']:
        api_key = config.get('GEMINI_API_KEY')
        if not api_key:
            return None
        return cls(
            api_key=api_key,
            model=config.get('GEMINI_MODEL', 'gemini-1.5-flash'),
            api_base=config.get('GEMINI_API_BASE', 'https://generativelanguage.googleapis.com/v1beta'),
            timeout=float(config.get('GEMINI_TIMEOUT', 8)),
        )

    def generate(self, prompt: str) -> str:
        url = f"{self.api_base}/models/{self.model}:generateContent"
        payload = {
            'contents': [{'role': 'user', 'parts': [{'text': prompt}]}],
            'generationConfig': {
                'temperature': 0.1,
                'maxOutputTokens': 256,
                'responseMimeType': 'application/json',
            },
        }
        try:
            resp = requests.post(url, params={'key': self.api_key}, json=payload, timeout=self.timeout)
            resp.raise_for_status()
            body = resp.json()
        except (requests.RequestException, ValueError) as exc:
            raise GeminiError(f'Gemini request failed: {exc}') from exc

        try:
            return body['candidates'][0]['content']['parts'][0]['text']
        except (KeyError, IndexError, TypeError) as exc:
            raise GeminiError('Gemini reply had no text candidate') from exc

    def parse_command(self, transcript: str) -> Optional[dict]:
        return extract_json(self.generate(build_prompt(transcript)))
