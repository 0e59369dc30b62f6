from models import db
from datetime import datetime


class KeyValueEntry(db.Model):
    """One JSON blob of a device's local state, e.g. its cart."""
    __tablename__ = "kv_entry"

    namespace = db.Column(db.String(100), primary_key=True)
    key = db.Column(db.String(100), primary_key=True)
    value = db.Column(db.Text, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<KeyValueEntry {self.namespace}:{self.key}>"
