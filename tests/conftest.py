"""
Process-wide test setup.

Settings are read once at import, so overrides must be in the environment
before anything from fintrack is imported.
"""

import os

os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("AI_MAX_RETRIES", "1")
os.environ.setdefault("LOG_FORMAT", "console")
