# hypertrophy/models/profile.py
# Per-user profile blob for the cloud side (private metadata of the identity provider).

from datetime import datetime, timezone

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


class Profile(db.Model):
    __tablename__ = "profiles"

    user_id = db.Column(db.String(255), primary_key=True)
    private_metadata = db.Column(db.JSON, nullable=False, default=dict)
    updated_at = db.Column(
        db.DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def __repr__(self):
        return f"<Profile {self.user_id}>"
