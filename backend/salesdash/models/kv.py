from __future__ import annotations

from ..extensions import db
from salesdash.time_utils import to_utc_z, utcnow


class KeyValueEntry(db.Model):
    """
    One persisted collection, stored as a JSON snapshot under a fixed key.

    WHY: The dashboard keeps whole collections (users, sales, session) and
    rewrites them on every mutation. A single key/value table mirrors that
    without per-record tables.
    """
    __tablename__ = "kv_entries"

    key = db.Column(db.String(128), primary_key=True)
    value_json = db.Column(db.Text, nullable=False)
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    def __repr__(self) -> str:
        return f"<KeyValueEntry key={self.key!r}>"

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "size": len(self.value_json or ""),
            "updated_at": to_utc_z(self.updated_at),
        }
