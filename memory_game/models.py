from datetime import datetime, timezone

from memory_game import db


def _utcnow():
    return datetime.now(timezone.utc)


class StoredResult(db.Model):
    """A finished game. Rows are append-only: never updated or deleted."""
    __tablename__ = 'game_results'
    __table_args__ = {'sqlite_autoincrement': True}
    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    player_name = db.Column(db.String(64), nullable=False)
    score = db.Column(db.Integer, nullable=False)
    tries = db.Column(db.Integer, nullable=False)
    matches = db.Column(db.Integer, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow, index=True)

    def to_dict(self):
        created_at = self.created_at
        # SQLite hands back naive datetimes; they were written as UTC
        if created_at is not None and created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return {
            'id': self.id,
            'player_name': self.player_name,
            'score': self.score,
            'tries': self.tries,
            'matches': self.matches,
            'created_at': created_at.isoformat() if created_at else None,
        }
