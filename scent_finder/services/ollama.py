"""
Purpose:
- Minimal client for a local Ollama server (/api/generate, non-streaming).
- Transport and envelope problems are raised as ModelCallError; the reply text is returned as-is.
"""

from __future__ import annotations
import logging
from typing import Optional
import httpx

from ..core.errors import ModelCallError
from ..core.settings import settings

logger = logging.getLogger(__name__)


def generate(
    prompt: str,
    *,
    temperature: Optional[float] = None,
    num_predict: Optional[int] = None,
    timeout: Optional[float] = None,
) -> str:
    """Single completion from settings.ollama_model. Returns the raw (untrimmed) response text."""
    body = {
        "model": settings.ollama_model,
        "prompt": prompt,
        "stream": False,
        "options": {
            "temperature": settings.ollama_temperature if temperature is None else temperature,
            "num_predict": settings.ollama_num_predict if num_predict is None else num_predict,
        },
    }
    url = f"{settings.ollama_base_url.rstrip('/')}/api/generate"
    try:
        r = httpx.post(url, json=body, timeout=settings.ollama_timeout if timeout is None else timeout)
        r.raise_for_status()
        data = r.json()
    except httpx.HTTPStatusError as e:
        raise ModelCallError(f"model call failed: HTTP {e.response.status_code} from {url}") from e
    except (httpx.HTTPError, ValueError) as e:
        raise ModelCallError(f"model call failed: {e}") from e

    if not isinstance(data, dict):
        raise ModelCallError("model call failed: unexpected response envelope")
    text = data.get("response") or ""
    logger.debug(f"ollama model={settings.ollama_model} reply_chars={len(text)}")
    return text
