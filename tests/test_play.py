import random
from unittest.mock import MagicMock

import requests

from memory_game.errors import StorageUnavailable
from memory_game.models import StoredResult
from memory_game.services.games.board import new_game
from memory_game.services.games.deck import DEFAULT_CATALOGUE
from memory_game.services.games.results import ResultStore


def _moves(seed, pairs, mismatch=True):
    """Card picks that solve the board `flask play --seed` deals, optionally after one mismatch."""
    board = new_game(pairs, DEFAULT_CATALOGUE, rng=random.Random(seed))
    moves = []
    if mismatch:
        first = board.cards[0]
        other = next(c for c in board.cards if c.symbol_id != first.symbol_id)
        moves = [first.id, other.id]
    for symbol in dict.fromkeys(c.symbol_id for c in board.cards):
        moves.extend(c.id for c in board.cards if c.symbol_id == symbol)
    return moves


def test_play_saves_result(runner):
    moves = _moves(7, 2)
    user_input = '\n'.join(str(m) for m in moves) + '\nAsh\n'
    result = runner.invoke(args=['play', '--pairs', '2', '--seed', '7'], input=user_input)
    assert result.exit_code == 0, result.output
    assert 'No match.' in result.output
    assert 'Result saved successfully!' in result.output

    row = StoredResult.query.one()
    assert (row.player_name, row.score, row.tries, row.matches) == ('Ash', 20, 3, 2)


def test_play_ignores_unknown_cards(runner):
    moves = _moves(3, 1, mismatch=False)
    user_input = '99\n' + '\n'.join(str(m) for m in moves) + '\n'
    result = runner.invoke(args=['play', '--pairs', '1', '--seed', '3', '--name', 'Misty'], input=user_input)
    assert result.exit_code == 0, result.output
    assert 'Unknown card id' in result.output
    assert StoredResult.query.one().player_name == 'Misty'


def test_play_rejects_bad_pair_count(runner):
    result = runner.invoke(args=['play', '--pairs', '20'])
    assert result.exit_code != 0
    assert 'exceeds catalogue size' in result.output


def test_play_rejects_zero_pairs(runner):
    result = runner.invoke(args=['play', '--pairs', '0'])
    assert result.exit_code != 0
    assert 'pair_count must be at least 1' in result.output


def _flaky_insert(monkeypatch, failures=1):
    calls = {'n': 0}
    real_insert = ResultStore.insert

    def insert(self, data):
        calls['n'] += 1
        if calls['n'] <= failures:
            raise StorageUnavailable('disk gone')
        return real_insert(self, data)

    monkeypatch.setattr(ResultStore, 'insert', insert)
    return calls


def test_play_retries_after_storage_failure(runner, monkeypatch):
    calls = _flaky_insert(monkeypatch)
    moves = _moves(3, 1, mismatch=False)
    user_input = '\n'.join(str(m) for m in moves) + '\ny\n'
    result = runner.invoke(args=['play', '--pairs', '1', '--seed', '3', '--name', 'Ash'], input=user_input)
    assert result.exit_code == 0, result.output
    assert 'Error saving result: disk gone' in result.output
    assert 'Try again?' in result.output
    assert 'Result saved successfully!' in result.output
    assert calls['n'] == 2
    assert StoredResult.query.one().player_name == 'Ash'


def test_play_gives_up_when_retry_declined(runner, monkeypatch):
    _flaky_insert(monkeypatch)
    moves = _moves(3, 1, mismatch=False)
    user_input = '\n'.join(str(m) for m in moves) + '\nn\n'
    result = runner.invoke(args=['play', '--pairs', '1', '--seed', '3', '--name', 'Ash'], input=user_input)
    assert result.exit_code == 0, result.output
    assert 'Error saving result: disk gone' in result.output
    assert 'Result saved successfully!' not in result.output
    assert StoredResult.query.count() == 0


def test_play_saves_through_api_url(runner, monkeypatch):
    sent = []

    def request(self, method, url, **kwargs):
        sent.append((method, url, kwargs.get('json')))
        res = MagicMock()
        res.status_code = 200
        res.json.return_value = {'id': 5, 'message': 'Result saved successfully'}
        return res

    monkeypatch.setattr(requests.Session, 'request', request)
    moves = _moves(3, 1, mismatch=False)
    user_input = '\n'.join(str(m) for m in moves) + '\n'
    result = runner.invoke(
        args=['play', '--pairs', '1', '--seed', '3', '--name', 'Brock', '--api-url', 'http://game.local'],
        input=user_input,
    )
    assert result.exit_code == 0, result.output
    assert 'Result saved successfully! (#5)' in result.output
    assert sent == [(
        'POST', 'http://game.local/api/results',
        {'player_name': 'Brock', 'score': 10, 'tries': 1, 'matches': 1},
    )]
    assert StoredResult.query.count() == 0


def test_db_reset_empties_results(runner):
    ResultStore().insert({'player_name': 'Ash', 'score': 10, 'tries': 1, 'matches': 1})
    result = runner.invoke(args=['db-reset'])
    assert result.exit_code == 0, result.output
    assert 'Database has been reset!' in result.output
    assert StoredResult.query.count() == 0
