"""Public API helpers for one-shot highlighting."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from .colors import ColorAssignor
from .extractor import NounExtractor
from .session import highlight


LOGGER = logging.getLogger(__name__)


def _text_entry(position: int, entry: Any) -> Tuple[str, str]:
    if isinstance(entry, str):
        return str(position), entry
    if isinstance(entry, Mapping) and isinstance(entry.get("text"), str):
        return str(entry.get("id", position)), entry["text"]
    raise ValueError(
        f"Entry {position} of 'texts' must be a string or a mapping with a string 'text'."
    )


def _payload_texts(payload: Mapping[str, Any]) -> Iterator[Tuple[str, str]]:
    """Yield ``(id, text)`` pairs from a ``text`` or ``texts`` payload."""

    if isinstance(payload.get("text"), str) and "texts" not in payload:
        yield "0", payload["text"]
        return

    entries = payload.get("texts")
    if entries is None:
        raise ValueError("Payload needs a string 'text' or a 'texts' list.")
    if isinstance(entries, (str, bytes)) or not hasattr(entries, "__iter__"):
        raise ValueError("'texts' must be a list of strings or objects.")
    for position, entry in enumerate(entries):
        yield _text_entry(position, entry)


def highlight_text(
    text: str,
    bionic_reading: bool = False,
    extractor: Optional[NounExtractor] = None,
) -> str:
    """Return sanitized markup for ``text`` with its repeated nouns colored."""

    result = highlight(text, extractor or NounExtractor(), ColorAssignor(), bionic_reading)
    return result.html


def highlight_payload_to_dict(
    payload: Mapping[str, Any],
    extractor: Optional[NounExtractor] = None,
) -> Dict[str, Any]:
    """Highlight every text of a JSON-like payload.

    All texts share one color assignment, so a noun repeated in several texts
    has the same color everywhere. Invalid payloads raise ``ValueError``
    before any text is processed.
    """

    if not isinstance(payload, Mapping):
        raise ValueError("Input payload must be a mapping/dict.")
    bionic_reading = payload.get("bionic_reading", False)
    if not isinstance(bionic_reading, bool):
        raise ValueError("'bionic_reading' must be a boolean.")
    entries = list(_payload_texts(payload))

    LOGGER.info("event=highlight_payload status=starting texts=%d", len(entries))
    extractor = extractor or NounExtractor()
    assignor = ColorAssignor()

    inputs: List[Dict[str, Any]] = []
    for entry_id, text in entries:
        result = highlight(text, extractor, assignor, bionic_reading=bionic_reading)
        inputs.append(
            {
                "id": entry_id,
                "text": text,
                "html": result.html,
                "repeated_nouns": result.repeated_nouns,
                "colors": result.colors,
            }
        )

    LOGGER.info("event=highlight_payload status=finished colors=%d", len(assignor))
    return {
        "model": extractor.model_name,
        "processed_at": datetime.now(timezone.utc).isoformat(),
        "bionic_reading": bionic_reading,
        "inputs": inputs,
        "colors": {noun: str(color) for noun, color in assignor.colors.items()},
    }


def highlight_payload_to_json(
    payload: Mapping[str, Any],
    extractor: Optional[NounExtractor] = None,
) -> str:
    """Same as ``highlight_payload_to_dict``, serialized as indented JSON."""

    return json.dumps(highlight_payload_to_dict(payload, extractor), ensure_ascii=False, indent=2)
