from flask import Blueprint, jsonify, request, current_app
from memory_game import socketio
from memory_game.errors import StorageUnavailable, ValidationError
from memory_game.services.games.results import ResultStore


results = Blueprint('results', __name__)


def _limit_arg(config_key: str, default: int) -> int:
    cap = int(current_app.config.get(config_key, default))
    limit = request.args.get('limit', type=int)
    if limit is None:
        return cap
    return max(1, min(limit, cap))


@results.route('/results', methods=['GET'])
def list_results():
    limit = _limit_arg('RECENT_RESULTS_LIMIT', 50)
    try:
        rows = ResultStore().list_recent(limit)
    except StorageUnavailable as exc:
        return jsonify({'error': str(exc)}), 500
    return jsonify([r.to_dict() for r in rows])


@results.route('/results', methods=['POST'])
def save_result():
    data = request.get_json(silent=True)
    try:
        row = ResultStore().insert(data)
    except ValidationError as exc:
        return jsonify({'error': str(exc)}), 400
    except StorageUnavailable as exc:
        return jsonify({'error': str(exc)}), 500

    payload = row.to_dict()
    # Push to live leaderboard views
    socketio.emit('results_updated', dict(payload), to='leaderboard', namespace='/ws')
    payload['message'] = 'Result saved successfully'
    return jsonify(payload)


@results.route('/leaderboard', methods=['GET'])
def leaderboard():
    top_n = _limit_arg('LEADERBOARD_SIZE', 10)
    try:
        rows = ResultStore().leaderboard(top_n)
    except StorageUnavailable as exc:
        return jsonify({'error': str(exc)}), 500
    return jsonify([r.to_dict() for r in rows])
