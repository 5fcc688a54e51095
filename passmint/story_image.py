"""Story image passthrough to the OpenAI Images API.

The caller sends a short scene description (never the credential itself) and
gets back either a base64 image or a URL.  Upstream failures are surfaced as
opaque diagnostic text; nothing is retried.
"""

import logging
import os

import requests

logger = logging.getLogger(__name__)

IMAGES_URL = "https://api.openai.com/v1/images/generations"
IMAGE_MODEL = "gpt-image-1"
IMAGE_SIZE = "512x512"
MIN_PROMPT_LENGTH = 5
API_KEY_ENV = "OPENAI_API_KEY"


class StoryImageError(Exception):
    status = 500


class InvalidPromptError(StoryImageError, ValueError):
    status = 400


class MissingCredentialError(StoryImageError):
    status = 500


class UpstreamError(StoryImageError):
    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message)
        self.detail = detail


def _check_prompt(prompt) -> None:
    if not isinstance(prompt, str) or len(prompt) < MIN_PROMPT_LENGTH:
        raise InvalidPromptError("Missing/invalid prompt")


def _api_key(api_key: str | None) -> str:
    key = api_key or os.environ.get(API_KEY_ENV)
    if not key:
        raise MissingCredentialError(f"Server missing {API_KEY_ENV}")
    return key


def request_story_image(prompt: str, *, api_key: str | None = None, timeout: float = 60) -> dict:
    """Request an image for *prompt*.

    Returns ``{"b64": ...}`` or ``{"url": ...}``.  The prompt is checked
    before anything is sent.
    """
    _check_prompt(prompt)
    key = _api_key(api_key)

    resp = requests.post(
        IMAGES_URL,
        headers={"Authorization": f"Bearer {key}"},
        json={"model": IMAGE_MODEL, "prompt": prompt, "size": IMAGE_SIZE},
        timeout=timeout,
    )
    if not resp.ok:
        logger.warning("Image API returned HTTP %s", resp.status_code)
        raise UpstreamError("OpenAI error", detail=resp.text)

    data = resp.json()
    items = data.get("data") or [{}]
    item = items[0] or {}

    if item.get("b64_json"):
        return {"b64": item["b64_json"]}
    if item.get("url"):
        return {"url": item["url"]}
    raise UpstreamError("Unexpected image response format")


def handle_story_image(method: str, body: dict | None, *, api_key: str | None = None) -> tuple[int, dict]:
    """Serverless-style handler: return ``(status, json_body)``.

    405 for non-POST, 500 for a missing key, 400 for a bad prompt, 500 with
    ``detail`` for upstream failures, 200 with the image payload otherwise.
    """
    if method.upper() != "POST":
        return 405, {"error": "Method not allowed"}

    try:
        key = _api_key(api_key)
        prompt = (body or {}).get("prompt")
        _check_prompt(prompt)
        return 200, request_story_image(prompt, api_key=key)
    except UpstreamError as exc:
        payload = {"error": str(exc)}
        if exc.detail is not None:
            payload["detail"] = exc.detail
        return exc.status, payload
    except StoryImageError as exc:
        return exc.status, {"error": str(exc)}
    except Exception as exc:
        logger.exception("Story image request failed")
        return 500, {"error": "Server error", "detail": str(exc)}
