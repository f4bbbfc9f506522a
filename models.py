"""Shared SQLAlchemy models."""

from datetime import datetime

from extensions import db


class StateBlob(db.Model):
    """One persisted collection of the shop state, stored as a JSON array."""

    __tablename__ = "state_blobs"

    key = db.Column(db.String(64), primary_key=True)  # workOrders, inventory, ...
    payload = db.Column(db.Text, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<StateBlob {self.key}: {len(self.payload or '')} bytes>"
