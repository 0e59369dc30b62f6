# --- models/user.py ---
from models import db, BIGINT
from datetime import datetime


class User(db.Model):
    """Customer account created on first OAuth sign-in."""
    __tablename__ = "user"
    __table_args__ = (
        db.UniqueConstraint("provider", "provider_id", name="uq_user_provider"),
    )

    id = db.Column(BIGINT, primary_key=True)
    email = db.Column(db.String(255), nullable=True)
    name = db.Column(db.String(100), nullable=True)
    picture = db.Column(db.String(255), nullable=True)
    provider = db.Column(db.String(20), nullable=False)       # google, facebook
    provider_id = db.Column(db.String(100), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "picture": self.picture,
            "provider": self.provider,
        }

    def __repr__(self):
        return f"<User id={self.id} provider={self.provider}>"
