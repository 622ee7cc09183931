"""
Runtime configuration for the bank orchestrator.

Values come from the environment (or a .env file found by python-dotenv).
"""

import os

from dotenv import load_dotenv, find_dotenv

load_dotenv(find_dotenv(), override=False)

LEDGER_BASE_URL = os.getenv("LEDGER_BASE_URL", "http://localhost:8080/api")
LEDGER_REQUEST_TIMEOUT = float(os.getenv("LEDGER_REQUEST_TIMEOUT", "30"))

# Number of entries kept in the merged recent-activity feed
FEED_LIMIT = int(os.getenv("FEED_LIMIT", "10"))

# Where the navigator is sent when the ledger rejects the session
LOGIN_PATH = os.getenv("LOGIN_PATH", "/login")
