import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from floyd.fd_model import LANGUAGES

logger = logging.getLogger(__name__)

SCHEMA = "floyd_cycle_visualizer"
VERSION = 1

DEFAULT_PATH = Path(__file__).resolve().parents[1] / "save_file" / "preferences.json"

DEFAULTS: Dict[str, Any] = {
    "language": "python",
    "speed": 1.0,
    "last_input": "[1,3,4,2,2]",
}


def _acceptable(key: str, value: Any) -> bool:
    """Known keys must keep the type of their default; unknown keys pass through."""
    if key not in DEFAULTS:
        return True
    if key == "speed":
        # bool 是 int 的子类
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if key == "language":
        return value in LANGUAGES
    return isinstance(value, type(DEFAULTS[key]))


class PreferenceStore:
    """
    Small key-value store for user settings, written as a JSON document
    with the same schema/version envelope the save files use.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else DEFAULT_PATH
        self._values: Dict[str, Any] = dict(DEFAULTS)
        self.dirty = False

    def load(self) -> Dict[str, Any]:
        self._values = dict(DEFAULTS)
        self.dirty = False
        if not self.path.exists():
            return dict(self._values)

        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                payload = json.load(fh)
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("could not read preferences %s: %s", self.path, exc)
            return dict(self._values)

        if not isinstance(payload, dict) or payload.get("schema") != SCHEMA:
            logger.warning("ignoring preferences with unknown schema in %s", self.path)
            return dict(self._values)

        settings = payload.get("settings")
        if isinstance(settings, dict):
            for key, value in settings.items():
                if _acceptable(key, value):
                    self._values[key] = value
                else:
                    logger.warning("dropping invalid preference %s=%r in %s", key, value, self.path)
        return dict(self._values)

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, DEFAULTS.get(key, default))

    def set(self, key: str, value: Any):
        if self.get(key) != value:
            self._values[key] = value
            self.dirty = True

    def save(self):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "schema": SCHEMA,
            "version": VERSION,
            "settings": self._values,
        }
        with open(self.path, "w", encoding="utf-8") as fh:
            json.dump(payload, fh, ensure_ascii=False, indent=2)
        self.dirty = False
