"""
Pull a JSON object out of free-form model output.

Free-tier models rarely return bare JSON. Typical decorations handled here:

  * markdown fences (```json ... ```)
  * the prompt echoed back, followed by an end-of-sequence marker
  * a <think>...</think> reasoning block before the answer
  * prose before the first brace or after the last one
  * output cut off mid-object by the token limit

``extract`` is pure and synchronous; it either returns JSON text that
``json.loads`` accepts or raises ``NoJsonObjectFound`` / ``UnparsableJson``.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

try:
    from .errors import NoJsonObjectFound, UnparsableJson
except ImportError:
    from errors import NoJsonObjectFound, UnparsableJson  # type: ignore

logger = logging.getLogger(__name__)

_OPEN_FENCE = re.compile(r"^```[a-zA-Z]*\s*")
_CLOSE_FENCE = re.compile(r"\s*```\s*$")
_END_MARKERS = re.compile(r"</s>|</think>|<\|im_end\|>|<\|eot_id\|>|<\|end\|>|\[/INST\]")
_TRAILING_COMMA = re.compile(r",(\s*[}\]])")
_DECODER = json.JSONDecoder()


def _strip_fences(text: str) -> str:
    if text.startswith("```"):
        text = _OPEN_FENCE.sub("", text)
        text = _CLOSE_FENCE.sub("", text)
    return text


def _after_last_marker(text: str) -> str:
    """Keep what follows the last end marker (falling back to the last non-blank part)."""
    parts = _END_MARKERS.split(text)
    if len(parts) == 1:
        return text
    for part in reversed(parts):
        if part.strip():
            return part
    return ""


def _close_open_brackets(text: str) -> str:
    """Append the closers for any ``{``/``[`` left open, ignoring string contents."""
    stack: list[str] = []
    in_string = False
    escaped = False
    for ch in text:
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch in "{[":
            stack.append("}" if ch == "{" else "]")
        elif ch in "}]" and stack:
            stack.pop()
    return text + "".join(reversed(stack))


def _salvage(candidate: str) -> str | None:
    """Cut back to the last ``}`` and repair what truncation typically breaks."""
    end = candidate.rfind("}")
    if end == -1:
        return None
    salvaged = _TRAILING_COMMA.sub(r"\1", candidate[: end + 1])
    return _close_open_brackets(salvaged)


def extract(raw_text: str) -> str:
    """Return the JSON object text embedded in *raw_text*."""
    if not raw_text or not raw_text.strip():
        raise NoJsonObjectFound("empty model output")

    text = _strip_fences(raw_text.strip())
    text = _after_last_marker(text).strip()
    text = _strip_fences(text)

    brace = text.find("{")
    if brace == -1:
        raise NoJsonObjectFound("no '{' in model output")
    candidate = text[brace:].strip()

    try:
        json.loads(candidate)
        return candidate
    except json.JSONDecodeError as exc:
        first_error = exc
    except RecursionError:
        raise UnparsableJson("JSON nested too deeply")

    # A complete object followed by chatter (which may itself contain braces)
    try:
        _, end = _DECODER.raw_decode(candidate)
        return candidate[:end]
    except json.JSONDecodeError:
        pass
    except RecursionError:
        raise UnparsableJson("JSON nested too deeply")

    salvaged = _salvage(candidate)
    if salvaged is not None:
        try:
            json.loads(salvaged)
            logger.warning("Salvaged malformed JSON (%s)", first_error)
            return salvaged
        except json.JSONDecodeError:
            pass
        except RecursionError:
            raise UnparsableJson("JSON nested too deeply")

    logger.debug("Unparsable JSON candidate: %s", candidate[:500])
    raise UnparsableJson(f"could not parse JSON: {first_error}")


def extract_json(raw_text: str) -> dict[str, Any]:
    """``extract`` followed by ``json.loads``."""
    return json.loads(extract(raw_text))
