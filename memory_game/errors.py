class MemoryGameError(Exception):
    """Base class for errors raised by the game engine and the result store."""


class ConfigurationError(MemoryGameError):
    """Invalid game setup, e.g. more pairs requested than the catalogue holds."""


class ValidationError(MemoryGameError):
    """Malformed client input. Reported to HTTP callers as a 400."""


class NotCompleteError(MemoryGameError):
    """A finished-game record was requested before the board was complete."""


class StorageUnavailable(MemoryGameError):
    """The persistence layer failed. Reported to HTTP callers as a 500."""
