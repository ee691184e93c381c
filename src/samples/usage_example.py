"""Example usage of the noun_highlighter package.

Run with: python src/samples/usage_example.py
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, Dict


def build_example_payload() -> Dict[str, Any]:
    """Build a minimal example payload to highlight.

    Returns
    -------
    Dict[str, Any]
        A payload following the documented input schema.
    """

    return {
        "texts": [
            {"id": "note-1", "text": "The cat sat on the mat. The cat ran."},
            "A garden needs water.\tThe garden\nstill needs water.",
        ]
    }


def main() -> None:
    """Run the example using the public API and a session."""

    # Make package importable when running from project root
    sys.path.append("src")

    from noun_highlighter import (  # pylint: disable=C0415
        HighlightSession,
        JsonFileStore,
        highlight_payload_to_json,
    )

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    logger = logging.getLogger("usage_example")

    payload = build_example_payload()
    logger.info("highlighting payload with %d texts", len(payload.get("texts", [])))
    result_json = highlight_payload_to_json(payload)
    logger.info("json output preview: %s", result_json[:200].replace("\n", " ") + " …")

    session = HighlightSession(storage=JsonFileStore("highlighter_state.json"))
    result = session.text_changed("The dog's bowl. The dog's bed. A bowl of rice.")
    logger.info("repeated nouns: %s", json.dumps(result.colors, ensure_ascii=False))

    item = session.save()
    logger.info("saved item dated %s", item.date)

    result = session.toggle_bionic_reading()
    logger.info("bionic markup: %s", result.html)


if __name__ == "__main__":
    main()
