"""Memory board state machine.

A ``Board`` is an immutable value; every operation takes the current board
and returns the next one. The engine owns no timer: after a mismatch the two
cards stay revealed until the host calls ``resolve_pending_mismatch``, which
lets the host pick the flip-back delay.

Per card:   hidden -> revealed -> matched (terminal)
            revealed -> hidden (mismatch, once resolved)
Per board:  in_progress -> complete (terminal)
"""

import random
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from memory_game.errors import ConfigurationError, NotCompleteError, ValidationError
from .deck import face_for as default_face_for

HIDDEN = 'hidden'
REVEALED = 'revealed'
MATCHED = 'matched'

IN_PROGRESS = 'in_progress'
COMPLETE = 'complete'

MATCH_REWARD = 10
MAX_PLAYER_NAME_LENGTH = 64


@dataclass(frozen=True)
class Card:
    id: int
    symbol_id: Any
    face: str
    state: str = HIDDEN


@dataclass(frozen=True)
class Board:
    cards: Tuple[Card, ...]
    pair_count: int
    pending: Tuple[int, ...] = ()
    matched_count: int = 0
    attempt_count: int = 0
    score: int = 0
    status: str = IN_PROGRESS

    def card(self, card_id: int) -> Card:
        if isinstance(card_id, bool) or not isinstance(card_id, int) or not 0 <= card_id < len(self.cards):
            raise ValidationError(f'Unknown card id: {card_id!r}')
        return self.cards[card_id]

    @property
    def is_complete(self) -> bool:
        return self.status == COMPLETE

    @property
    def awaiting_flip_back(self) -> bool:
        """True while two mismatched cards are revealed and block further reveals."""
        return len(self.pending) == 2


@dataclass(frozen=True)
class GameResult:
    """Snapshot of a completed board, ready to hand to a result sink."""
    player_name: str
    score: int
    attempt_count: int
    matched_count: int

    def to_payload(self, matches_offset: int = 0) -> Dict[str, Any]:
        # Legacy clients sent matched_count + 1; callers opt into that via matches_offset.
        return {
            'player_name': self.player_name,
            'score': self.score,
            'tries': self.attempt_count,
            'matches': self.matched_count + matches_offset,
        }


def new_game(
    pair_count: int,
    catalogue: Sequence[Any],
    rng: Optional[random.Random] = None,
    face_for: Callable[[Any], str] = default_face_for,
) -> Board:
    """Deal a fresh, shuffled board of ``2 * pair_count`` hidden cards.

    When the catalogue holds more symbols than needed, a random sample is
    used. Card ids are the final positions, so they stay stable for the game.
    """
    if isinstance(pair_count, bool) or not isinstance(pair_count, int):
        raise ConfigurationError(f'pair_count must be an integer, got {pair_count!r}')
    if pair_count < 1:
        raise ConfigurationError('pair_count must be at least 1')
    symbols = list(catalogue)
    if len(set(symbols)) != len(symbols):
        raise ConfigurationError('symbol catalogue contains duplicates')
    if pair_count > len(symbols):
        raise ConfigurationError(
            f'pair_count {pair_count} exceeds catalogue size {len(symbols)}'
        )

    rng = rng or random.Random()
    chosen = rng.sample(symbols, pair_count) if pair_count < len(symbols) else symbols
    deck = chosen * 2
    rng.shuffle(deck)
    cards = tuple(
        Card(id=position, symbol_id=symbol, face=face_for(symbol))
        for position, symbol in enumerate(deck)
    )
    return Board(cards=cards, pair_count=pair_count)


def reveal(board: Board, card_id: int) -> Board:
    """Turn a card face up, resolving the pair when it is the second one.

    Stale clicks are silent no-ops: a complete board, a card that is already
    revealed or matched, or a click while two cards are still pending.
    """
    if board.is_complete:
        return board
    card = board.card(card_id)
    if card.state != HIDDEN:
        return board
    if len(board.pending) >= 2:
        return board

    cards = list(board.cards)
    cards[card_id] = replace(card, state=REVEALED)
    pending = board.pending + (card_id,)
    if len(pending) == 1:
        return replace(board, cards=tuple(cards), pending=pending)

    first, second = (cards[i] for i in pending)
    attempt_count = board.attempt_count + 1
    if first.symbol_id != second.symbol_id:
        return replace(board, cards=tuple(cards), pending=pending, attempt_count=attempt_count)

    for i in pending:
        cards[i] = replace(cards[i], state=MATCHED)
    matched_count = board.matched_count + 1
    return replace(
        board,
        cards=tuple(cards),
        pending=(),
        matched_count=matched_count,
        attempt_count=attempt_count,
        score=board.score + MATCH_REWARD,
        status=COMPLETE if matched_count == board.pair_count else IN_PROGRESS,
    )


def resolve_pending_mismatch(board: Board) -> Board:
    """Flip a pending mismatched pair back to hidden."""
    if not board.awaiting_flip_back:
        return board
    cards = list(board.cards)
    for i in board.pending:
        cards[i] = replace(cards[i], state=HIDDEN)
    return replace(board, cards=tuple(cards), pending=())


def finish(board: Board, player_name: str) -> GameResult:
    if not board.is_complete:
        raise NotCompleteError('The game is not complete yet')
    name = player_name.strip() if isinstance(player_name, str) else ''
    if not name:
        raise ValidationError('Please enter your name')
    if len(name) > MAX_PLAYER_NAME_LENGTH:
        raise ValidationError(f'Name must be at most {MAX_PLAYER_NAME_LENGTH} characters')
    return GameResult(
        player_name=name,
        score=board.score,
        attempt_count=board.attempt_count,
        matched_count=board.matched_count,
    )
