from datetime import datetime, timezone
from khelbharat.extensions import db


class StorageSlot(db.Model):
    __tablename__ = "storage_slots"

    key = db.Column(db.String(100), primary_key=True)  # e.g. khelbharatAthletes
    value = db.Column(db.Text, nullable=False, default="")
    updated_at = db.Column(db.DateTime, default=lambda: datetime.now(tz=timezone.utc))
