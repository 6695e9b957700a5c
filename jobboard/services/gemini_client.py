"""
Gemini API Client

The parsing endpoint speaks the OpenAI legacy completions protocol
(POST /completions, {"choices": [{"text": ...}]}), so we use the openai
library for transport, auth, timeout and retry/backoff.

The raw HTTP body is inspected instead of the SDK's parsed object so that a
response with the wrong shape is reported as such rather than surfacing as an
attribute error somewhere downstream.

AI is used ONLY for turning resume text into the six profile fields.
Nothing is cached: every upload is parsed fresh.
"""
import json
from typing import Optional

import httpx
import openai
from openai import OpenAI
from pydantic import ValidationError

from jobboard.core.config import Settings, get_settings
from jobboard.core.errors import (
    NoTextExtracted, TransportError, NonSuccessStatus, MalformedEnvelope, MalformedPayload
)
from jobboard.schemas.schemas import ParsedFields
from jobboard.utils.logger import get_logger

logger = get_logger(__name__)

# Sampling parameters sent with every parse request
MAX_TOKENS = 500
TEMPERATURE = 0.3
TOP_P = 1.0
FREQUENCY_PENALTY = 0.0
PRESENCE_PENALTY = 0.0

RESUME_PROMPT_TEMPLATE = """
Extract the following information from the resume text below:

- Name
- Email
- Phone
- Education
- Experience
- Skills

Return ONLY a JSON object with exactly these fields, all strings, and no other text:

{{
  "name": "",
  "email": "",
  "phone": "",
  "education": "",
  "experience": "",
  "skills": ""
}}

Resume Text:
{resume_text}
"""


def build_resume_prompt(resume_text: str) -> str:
    """Embed resume text into the fixed extraction prompt."""
    return RESUME_PROMPT_TEMPLATE.format(resume_text=resume_text)


def strip_code_fences(text: str) -> str:
    """
    Remove markdown code fences a model may wrap its JSON in.
    """
    text = text.strip()
    if text.startswith("```json"):
        text = text[7:]
    if text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]
    return text.strip()


def parse_completion_envelope(body: str) -> ParsedFields:
    """
    Unwrap {"choices": [{"text": "<json>"}]} into ParsedFields.

    Only the first choice is read.
    """
    try:
        envelope = json.loads(body)
    except ValueError as e:
        raise MalformedEnvelope(f"Parser response is not valid JSON: {e}") from e

    if not isinstance(envelope, dict):
        raise MalformedEnvelope("Parser response is not a JSON object")

    choices = envelope.get("choices")
    if not isinstance(choices, list) or not choices:
        raise MalformedEnvelope("Parser response has no choices")

    choice = choices[0]
    if not isinstance(choice, dict) or not isinstance(choice.get("text"), str):
        raise MalformedEnvelope("Parser response choice does not contain text")

    try:
        payload = json.loads(strip_code_fences(choice["text"]))
    except ValueError as e:
        raise MalformedPayload(f"Parsed resume is not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise MalformedPayload("Parsed resume is not a JSON object")

    try:
        return ParsedFields.model_validate(payload)
    except ValidationError as e:
        raise MalformedPayload(f"Parsed resume has invalid fields: {e}") from e


class GeminiClient:
    """
    Wrapper around the Gemini completions endpoint for resume parsing.
    """

    def __init__(self, settings: Optional[Settings] = None, http_client: Optional[httpx.Client] = None):
        self.settings = settings or get_settings()
        self.client = OpenAI(
            api_key=self.settings.gemini_api_key,
            base_url=self.settings.gemini_base_url,
            timeout=self.settings.gemini_timeout_seconds,
            max_retries=self.settings.gemini_max_retries,
            http_client=http_client
        )
        self.model = self.settings.gemini_model

    def _call_api(self, prompt: str, max_tokens: int = MAX_TOKENS) -> str:
        """
        POST the prompt to /completions and return the raw response body.
        """
        try:
            response = self.client.completions.with_raw_response.create(
                model=self.model,
                prompt=prompt,
                max_tokens=max_tokens,
                temperature=TEMPERATURE,
                top_p=TOP_P,
                frequency_penalty=FREQUENCY_PENALTY,
                presence_penalty=PRESENCE_PENALTY
            )
        except openai.APIStatusError as e:
            body = e.response.text
            logger.error("Gemini API returned status %s: %s", e.status_code, body)
            raise NonSuccessStatus(f"Gemini API error: {body}", remote_status=e.status_code, body=body) from e
        except openai.APIConnectionError as e:
            logger.error("Error sending request to Gemini API: %s", e)
            raise TransportError(f"Could not reach Gemini API: {e}") from e
        return response.text

    def parse_resume(self, resume_text: str) -> ParsedFields:
        """
        Parse resume text into ParsedFields.

        Raises NoTextExtracted for empty text without calling the API.
        """
        if not resume_text or not resume_text.strip():
            raise NoTextExtracted("No text extracted from file")

        body = self._call_api(build_resume_prompt(resume_text))
        return parse_completion_envelope(body)

    def test_connection(self) -> bool:
        """Test if the Gemini API is reachable"""
        try:
            body = self._call_api("Reply with exactly: OK", max_tokens=10)
            return "OK" in body.upper()
        except (TransportError, NonSuccessStatus) as e:
            logger.warning("Gemini connection failed: %s", e)
            return False


# Singleton instance
_gemini_client: GeminiClient = None


def get_gemini_client() -> GeminiClient:
    """Get or create Gemini client (singleton pattern)"""
    global _gemini_client
    if _gemini_client is None:
        _gemini_client = GeminiClient()
    return _gemini_client
