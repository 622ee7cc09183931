import os
import sys
from typing import Callable, List

import httpx
import pytest
import pytest_asyncio

# Ensure project root is on sys.path so `bank_orchestrator` resolves without an install
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from bank_orchestrator.clients.ledger_client import LedgerClient  # noqa: E402
from bank_orchestrator.context.session import MemoryTokenProvider, RecordingNavigator  # noqa: E402
from fake_ledger import VALID_TOKEN, LedgerState, build_app  # noqa: E402

BASE_URL = "http://ledger.test/api"


@pytest.fixture
def token_provider():
    return MemoryTokenProvider(VALID_TOKEN)


@pytest.fixture
def navigator():
    return RecordingNavigator()


class RecordingHandler:
    """
    httpx.MockTransport handler that records requests and delegates to `respond`.
    """

    def __init__(self, respond: Callable[[httpx.Request], httpx.Response]):
        self.respond = respond
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.respond(request)


@pytest_asyncio.fixture
async def make_client(token_provider, navigator):
    """
    Build a LedgerClient whose HTTP traffic goes to a MockTransport handler.
    """
    opened = []

    def _make(respond: Callable[[httpx.Request], httpx.Response]):
        handler = RecordingHandler(respond)
        http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        opened.append(http)
        client = LedgerClient(token_provider, navigator, base_url=BASE_URL, http=http)
        return client, handler

    yield _make
    for http in opened:
        await http.aclose()


@pytest.fixture
def ledger_state():
    state = LedgerState()
    state.add_account("SB1001", "SAVINGS", "5000.00", name="Household")
    state.add_account("CA2002", "CURRENT", "1200.50")
    state.add_account("FD3003", "FIXED_DEPOSIT", "10000.00")
    state.record("DEPOSIT", 5000.0, to_acc="SB1001", description="Opening deposit")
    state.record("TRANSFER", 250.0, from_acc="SB1001", to_acc="CA2002", description="Rent share")
    state.record("DEPOSIT", 10000.0, to_acc="FD3003")
    return state


@pytest_asyncio.fixture
async def ledger_http(ledger_state):
    http = httpx.AsyncClient(transport=httpx.ASGITransport(app=build_app(ledger_state)))
    yield http
    await http.aclose()
