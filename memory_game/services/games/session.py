import random
from typing import Any, Dict, Optional, Protocol, Sequence

from .board import Board, GameResult, finish, new_game, resolve_pending_mismatch, reveal
from .deck import DEFAULT_CATALOGUE


class ResultSink(Protocol):
    def save(self, result: GameResult) -> Dict[str, Any]:
        ...


class GameSession:
    """Holds the one current board for a host (terminal, UI, ...).

    The session never waits: after a mismatch the host chooses when to call
    ``flip_back``.
    """

    def __init__(
        self,
        sink: ResultSink,
        pair_count: int = len(DEFAULT_CATALOGUE),
        catalogue: Sequence[Any] = DEFAULT_CATALOGUE,
        rng: Optional[random.Random] = None,
    ):
        self.sink = sink
        self.pair_count = pair_count
        self.catalogue = catalogue
        self.rng = rng or random.Random()
        self.board = new_game(pair_count, catalogue, rng=self.rng)
        self.saved: Optional[Dict[str, Any]] = None

    def restart(self) -> Board:
        self.board = new_game(self.pair_count, self.catalogue, rng=self.rng)
        self.saved = None
        return self.board

    def reveal(self, card_id: int) -> Board:
        self.board = reveal(self.board, card_id)
        return self.board

    def flip_back(self) -> Board:
        self.board = resolve_pending_mismatch(self.board)
        return self.board

    def save(self, player_name: str) -> Dict[str, Any]:
        """Submit the finished game; errors from the sink propagate unchanged."""
        result = finish(self.board, player_name)
        self.saved = self.sink.save(result)
        return self.saved
