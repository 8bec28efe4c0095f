import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, Optional

from sqlalchemy.exc import SQLAlchemyError

from domain.athletes.errors import StorageReadError, StorageWriteError

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """String slots addressed by key, in the manner of browser local storage."""

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Stored string, or None when the slot is empty."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        ...


class InMemoryKeyValueStore(KeyValueStore):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.slots: Dict[str, str] = dict(initial or {})

    def get_item(self, key):
        return self.slots.get(key)

    def set_item(self, key, value):
        self.slots[key] = value


class SQLAlchemyKeyValueStore(KeyValueStore):
    """One ``storage_slots`` row per key, written through the Flask-SQLAlchemy session."""

    def __init__(self, db):
        self.db = db

    def get_item(self, key):
        from khelbharat.models import StorageSlot

        try:
            slot = self.db.session.get(StorageSlot, key)
        except SQLAlchemyError as e:
            self.db.session.rollback()
            raise StorageReadError(f"Could not read slot '{key}': {e}") from e
        return slot.value if slot is not None else None

    def set_item(self, key, value):
        from khelbharat.models import StorageSlot

        try:
            slot = self.db.session.get(StorageSlot, key)
            if slot is None:
                slot = StorageSlot(key=key)
                self.db.session.add(slot)
            slot.value = value
            slot.updated_at = datetime.now(tz=timezone.utc)
            self.db.session.commit()
        except SQLAlchemyError as e:
            self.db.session.rollback()
            raise StorageWriteError(f"Could not write slot '{key}': {e}") from e
        logger.debug(f"Wrote {len(value)} chars to slot '{key}'")
