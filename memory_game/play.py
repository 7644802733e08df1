"""`flask play`: a terminal host for the board engine."""

import math
import random
import time

import click
from flask import current_app
from flask.cli import with_appcontext

from memory_game.client import HttpResultsClient
from memory_game.errors import ConfigurationError, StorageUnavailable, ValidationError
from memory_game.services.games.board import HIDDEN, MATCHED, Board
from memory_game.services.games.results import ResultStore
from memory_game.services.games.session import GameSession


def render_board(board: Board) -> str:
    cols = math.ceil(math.sqrt(len(board.cards)))
    cells = []
    for card in board.cards:
        if card.state == HIDDEN:
            cells.append(f"[{card.id:>3}]")
        elif card.state == MATCHED:
            cells.append(f" {str(card.symbol_id):>3}*")
        else:
            cells.append(f" {str(card.symbol_id):>3} ")
    rows = [' '.join(cells[i:i + cols]) for i in range(0, len(cells), cols)]
    rows.append(
        f"Score: {board.score}  Tries: {board.attempt_count}  "
        f"Matches: {board.matched_count}/{board.pair_count}"
    )
    return '\n'.join(rows)


@click.command('play')
@click.option('--pairs', type=int, default=None, help='Number of pairs (defaults to PAIR_COUNT).')
@click.option('--seed', type=int, default=None, help='Seed for a reproducible deal.')
@click.option('--name', default=None, help='Player name to save the result under.')
@click.option('--api-url', default=None, help='Save through a remote server instead of the local database.')
@with_appcontext
def play_command(pairs, seed, name, api_url):
    """Play a memory game in the terminal and save the result."""
    cfg = current_app.config
    offset = int(cfg.get('MATCHES_WIRE_OFFSET', 0))
    if api_url:
        sink = HttpResultsClient(api_url, matches_offset=offset)
    else:
        sink = ResultStore(matches_offset=offset)
    if pairs is None:
        pairs = int(cfg.get('PAIR_COUNT', 8))
    try:
        session = GameSession(sink, pair_count=pairs, rng=random.Random(seed))
    except ConfigurationError as exc:
        raise click.UsageError(str(exc))
    delay = int(cfg.get('MISMATCH_DELAY_MS', 1000)) / 1000.0

    while not session.board.is_complete:
        click.echo(render_board(session.board))
        card_id = click.prompt('Card', type=int)
        try:
            board = session.reveal(card_id)
        except ValidationError as exc:
            click.echo(str(exc))
            continue
        if board.awaiting_flip_back:
            click.echo(render_board(board))
            click.echo('No match.')
            if delay:
                time.sleep(delay)
            session.flip_back()

    click.echo(render_board(session.board))
    click.echo(f"Congratulations! You completed the game in {session.board.attempt_count} tries!")

    while True:
        player_name = name or click.prompt('Enter your name')
        try:
            saved = session.save(player_name)
        except ValidationError as exc:
            click.echo(str(exc))
            name = None
            continue
        except StorageUnavailable as exc:
            click.echo(f"Error saving result: {exc}")
            if click.confirm('Try again?', default=True):
                continue
            return
        click.echo(f"Result saved successfully! (#{saved.get('id')})")
        return
