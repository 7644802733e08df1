import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///memory_game.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Front-end origins allowed by CORS and Socket.IO (comma separated)
    CORS_ORIGINS = [o.strip() for o in os.environ.get(
        'CORS_ORIGINS', 'http://localhost:3000,http://127.0.0.1:3000'
    ).split(',') if o.strip()]
    # Read projections
    RECENT_RESULTS_LIMIT = int(os.environ.get('RECENT_RESULTS_LIMIT', '50'))
    LEADERBOARD_SIZE = int(os.environ.get('LEADERBOARD_SIZE', '10'))
    # Board size for `flask play` (4x4 grid = 8 pairs)
    PAIR_COUNT = int(os.environ.get('PAIR_COUNT', '8'))
    # How long a mismatched pair stays face up before the host flips it back (ms)
    MISMATCH_DELAY_MS = int(os.environ.get('MISMATCH_DELAY_MS', '1000'))
    # Added to the true matched-pair count on the wire. Set to 1 to stay comparable
    # with rows written by the legacy client, which sent matched pairs + 1.
    MATCHES_WIRE_OFFSET = int(os.environ.get('MATCHES_WIRE_OFFSET', '0'))
