"""JSON-file persistence for the user-set display text."""

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class DisplayTextStore:
    def __init__(self, path: str | Path):
        self._path = Path(path)

    def load(self) -> str:
        """Stored text, or an empty string when the file is missing or unreadable."""
        if not self._path.exists():
            return ""
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Could not read display text from %s: %s", self._path, e)
            return ""

        text = data.get("text") if isinstance(data, dict) else None
        if not isinstance(text, str):
            logger.warning("Ignoring malformed display text file %s", self._path)
            return ""
        return text

    def save(self, text: str) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps({"text": text}), encoding="utf-8")
        except OSError:
            logger.exception("Failed to persist display text to %s", self._path)
