"""Game domain services: the board engine, the result store and the host session.

This package contains pure(ish) domain logic that should be imported by
HTTP routes, socket handlers and the CLI, keeping transport concerns separated
from core game mechanics.
"""
