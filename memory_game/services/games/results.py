import threading
from typing import Any, Dict, List

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from memory_game import db
from memory_game.errors import StorageUnavailable, ValidationError
from memory_game.models import StoredResult
from .board import GameResult, MAX_PLAYER_NAME_LENGTH

REQUIRED_FIELDS = ('player_name', 'score', 'tries', 'matches')
# Largest counter the INTEGER columns accept on every backend
MAX_COUNTER = 2**31 - 1

# Serializes inserts within the process; the autoincrement key covers other writers.
_write_lock = threading.Lock()


def parse_result_payload(data: Any) -> Dict[str, Any]:
    """Validate a POSTed result body and return the normalized fields."""
    if not isinstance(data, dict):
        raise ValidationError('Missing required fields')
    name = data.get('player_name')
    if name is None or (isinstance(name, str) and not name.strip()):
        raise ValidationError('Missing required fields')
    if any(data.get(field) is None for field in REQUIRED_FIELDS):
        raise ValidationError('Missing required fields')

    if not isinstance(name, str):
        raise ValidationError('Invalid value for player_name')
    name = name.strip()
    if len(name) > MAX_PLAYER_NAME_LENGTH:
        raise ValidationError('Invalid value for player_name')
    fields = {'player_name': name}
    for field in ('score', 'tries', 'matches'):
        value = data[field]
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= MAX_COUNTER:
            raise ValidationError(f'Invalid value for {field}')
        fields[field] = value
    return fields


class ResultStore:
    """Append-only store of finished games.

    Also acts as the local result sink for hosts running inside the app
    (``save``), next to ``memory_game.client.HttpResultsClient`` for remote ones.
    """

    def __init__(self, matches_offset: int = 0):
        self.matches_offset = matches_offset

    def insert(self, data: Any) -> StoredResult:
        fields = parse_result_payload(data)
        with _write_lock:
            row = StoredResult(**fields)
            try:
                db.session.add(row)
                db.session.commit()
            except SQLAlchemyError as exc:
                db.session.rollback()
                current_app.logger.error(f"[storage-error] insert failed: {exc}")
                raise StorageUnavailable(str(exc)) from exc
        current_app.logger.info(
            f"[result-saved] id={row.id} player={row.player_name} score={row.score} tries={row.tries}"
        )
        return row

    def list_recent(self, limit: int = 50) -> List[StoredResult]:
        return self._query(
            StoredResult.query.order_by(StoredResult.created_at.desc(), StoredResult.id.desc()),
            limit,
        )

    def leaderboard(self, top_n: int = 10) -> List[StoredResult]:
        return self._query(
            StoredResult.query.order_by(
                StoredResult.score.desc(), StoredResult.tries.asc(), StoredResult.id.asc()
            ),
            top_n,
        )

    def save(self, result: GameResult) -> Dict[str, Any]:
        return self.insert(result.to_payload(self.matches_offset)).to_dict()

    def _query(self, query, limit: int) -> List[StoredResult]:
        try:
            return query.limit(limit).all()
        except SQLAlchemyError as exc:
            db.session.rollback()
            current_app.logger.error(f"[storage-error] read failed: {exc}")
            raise StorageUnavailable(str(exc)) from exc
