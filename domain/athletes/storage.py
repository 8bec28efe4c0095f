import json
import logging
from typing import Iterable, List

from pydantic import ValidationError as PydanticValidationError

from .errors import StorageReadError, StorageWriteError, ValidationError
from .models import Athlete
from .seed import seed_athletes

logger = logging.getLogger(__name__)

ATHLETES_KEY = "khelbharatAthletes"
THEME_KEY = "khelbharatTheme"
THEMES = ("dark", "light")
DEFAULT_THEME = "light"


class AthleteStorage:
    """
    Persist the roster as a JSON array in one slot of a key-value store.

    Neither ``load`` nor ``save`` raises: a slot that cannot be read or
    parsed as a JSON array falls back to the seed data, single records that
    cannot be repaired are skipped, and a roster that cannot be written stays
    authoritative in memory for the rest of the session.
    """

    def __init__(self, store, key=ATHLETES_KEY):
        self.store = store
        self.key = key

    def load(self) -> List[Athlete]:
        try:
            raw = self.store.get_item(self.key)
        except StorageReadError as e:
            logger.warning(f"Failed to load athletes from storage: {e}")
            return seed_athletes()

        if raw is None:
            logger.info(f"No stored roster under '{self.key}', using seed data")
            return seed_athletes()

        try:
            parsed = json.loads(raw)
            if not isinstance(parsed, list):
                raise TypeError(f"expected a JSON array, got {type(parsed).__name__}")
        except (ValueError, TypeError) as e:
            # json.JSONDecodeError is a ValueError
            logger.warning(f"Failed to load athletes from storage: {e}")
            return seed_athletes()

        athletes = []
        for index, record in enumerate(parsed):
            try:
                athletes.append(Athlete.from_stored(record))
            except (TypeError, PydanticValidationError) as e:
                logger.warning(f"Skipping stored athlete #{index} in '{self.key}': {e}")

        logger.debug(f"Loaded {len(athletes)} of {len(parsed)} athletes from '{self.key}'")
        return athletes

    def save(self, athletes: Iterable[Athlete]) -> bool:
        payload = json.dumps([a.to_stored() for a in athletes])
        try:
            self.store.set_item(self.key, payload)
        except StorageWriteError as e:
            logger.warning(f"Failed to save athletes to storage: {e}")
            return False
        return True


class ThemeStorage:
    """``"dark"`` or ``"light"`` in its own slot; ``current`` outlives a failed write."""

    def __init__(self, store, key=THEME_KEY):
        self.store = store
        self.key = key
        self.current = None

    def load(self) -> str:
        try:
            theme = self.store.get_item(self.key)
        except StorageReadError as e:
            logger.warning(f"Failed to load theme from storage: {e}")
            theme = None
        self.current = theme if theme in THEMES else DEFAULT_THEME
        return self.current

    def save(self, theme: str) -> bool:
        if theme not in THEMES:
            raise ValidationError(f"Unknown theme '{theme}'", fields=["theme"])
        self.current = theme
        try:
            self.store.set_item(self.key, theme)
        except StorageWriteError as e:
            logger.warning(f"Failed to save theme to storage: {e}")
            return False
        return True

    def toggle(self) -> str:
        theme = "light" if (self.current or self.load()) == "dark" else "dark"
        self.save(theme)
        return theme
