"""
Ledger Client
Async HTTP client for the remote ledger service.

Every call attaches the bearer credential from the TokenProvider and maps
transport/HTTP outcomes onto the LedgerError taxonomy:
  - no credential          -> Unauthenticated (no request issued)
  - no response            -> NetworkError
  - 401                    -> AuthExpired (+ clear credential, redirect to login)
  - other non-2xx          -> ServerError(status, message)
  - undecodable 2xx body   -> MalformedResponse

Environment:
  LEDGER_BASE_URL         (default: http://localhost:8080/api)
  LEDGER_REQUEST_TIMEOUT  (default: 30)
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional, Union
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from bank_orchestrator.config import LEDGER_BASE_URL, LEDGER_REQUEST_TIMEOUT, LOGIN_PATH
from bank_orchestrator.context.session import Navigator, TokenProvider
from bank_orchestrator.errors import (
    AuthExpired,
    MalformedResponse,
    NetworkError,
    ParseError,
    ServerError,
    Unauthenticated,
)
from bank_orchestrator.guards.parsing import parse_number
from bank_orchestrator.logging_config import get_logger
from bank_orchestrator.schemas.ledger_models import (
    Account,
    AccountType,
    Transaction,
    TransferRequest,
    UserProfile,
)

logger = get_logger("bank_orchestrator.ledger_client")


def _error_message(resp: httpx.Response) -> str:
    """
    Pull the `error` / `message` field out of a JSON error body, else use the raw text.
    """
    text = resp.text
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("error", "message"):
            if body.get(key):
                return str(body[key])
    return text or resp.reason_phrase


class LedgerClient:
    """
    HTTP client for the ledger API
    """

    def __init__(
        self,
        token_provider: TokenProvider,
        navigator: Optional[Navigator] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        http: Optional[httpx.AsyncClient] = None,
        login_path: str = LOGIN_PATH,
    ):
        self.token_provider = token_provider
        self.navigator = navigator
        self.base_url = (base_url or LEDGER_BASE_URL).rstrip("/")
        self.login_path = login_path
        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(timeout=timeout or LEDGER_REQUEST_TIMEOUT)

    async def __aenter__(self) -> "LedgerClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    # ------------------------------------------------------------------
    # Core helpers
    # ------------------------------------------------------------------
    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _expire_session(self) -> None:
        logger.warning("Ledger rejected credential; clearing session and redirecting to %s", self.login_path)
        self.token_provider.clear()
        if self.navigator is not None:
            self.navigator.go_to(self.login_path)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        expire_session: bool = True,
    ) -> httpx.Response:
        token = self.token_provider.get()
        if not token:
            logger.info("Refusing %s %s: no credential", method, path)
            raise Unauthenticated()

        url = self._url(path)
        headers = {"Authorization": f"Bearer {token}"}
        if json is not None:
            headers["Content-Type"] = "application/json"
        try:
            resp = await self._http.request(method, url, json=json, params=params, headers=headers)
        except httpx.RequestError as e:
            logger.error("Ledger %s %s failed: %s", method, url, e)
            raise NetworkError(e) from e

        logger.info("Ledger %s %s -> %s", method, url, resp.status_code)

        if resp.status_code == 401:
            if expire_session:
                self._expire_session()
            raise AuthExpired()
        if not resp.is_success:
            message = _error_message(resp)
            logger.error("Ledger %s %s error status=%s detail=%s", method, url, resp.status_code, message)
            raise ServerError(resp.status_code, message)
        return resp

    @staticmethod
    def _json(resp: httpx.Response) -> Any:
        try:
            return resp.json()
        except ValueError as e:
            raise MalformedResponse(f"non-JSON body from {resp.request.url}: {resp.text[:200]!r}") from e

    def _json_list(self, resp: httpx.Response) -> List[Any]:
        data = self._json(resp)
        if not isinstance(data, list):
            raise MalformedResponse(f"expected a JSON array from {resp.request.url}, got {type(data).__name__}")
        return data

    def _json_object(self, resp: httpx.Response) -> Dict[str, Any]:
        data = self._json(resp)
        if not isinstance(data, dict):
            raise MalformedResponse(f"expected a JSON object from {resp.request.url}, got {type(data).__name__}")
        return data

    @staticmethod
    def _decode(model, payload: Any):
        try:
            return model.model_validate(payload)
        except ValidationError as e:
            raise MalformedResponse(f"invalid {model.__name__}: {e}") from e

    # ------------------------------------------------------------------
    # Accounts
    # ------------------------------------------------------------------
    async def get_accounts(self) -> List[Account]:
        """
        Fetch the signed-in user's accounts.
        """
        resp = await self._request("GET", "/accounts")
        return [self._decode(Account, item) for item in self._json_list(resp)]

    async def get_account(self, account_number: str) -> Account:
        resp = await self._request("GET", f"/accounts/{quote(account_number, safe='')}")
        return self._decode(Account, self._json_object(resp))

    async def get_balance(self, account_number: str) -> Decimal:
        resp = await self._request("GET", f"/accounts/{quote(account_number, safe='')}/balance")
        data = self._json_object(resp)
        try:
            return parse_number(data.get("balance"), "balance", thousands=True)
        except ParseError as e:
            raise MalformedResponse(str(e)) from e

    async def create_account(
        self,
        account_type: Union[AccountType, str],
        account_name: Optional[str] = None,
    ) -> Account:
        """
        Open a new account. Unknown account types are rejected locally with ValueError.
        """
        kind = account_type if isinstance(account_type, AccountType) else AccountType(str(account_type).strip().upper())
        params = {"accountType": kind.value}
        if account_name and account_name.strip():
            params["accountName"] = account_name.strip()
        resp = await self._request("POST", "/accounts", params=params)
        return self._decode(Account, self._json_object(resp))

    async def get_current_user(self) -> UserProfile:
        resp = await self._request("GET", "/auth/me")
        return self._decode(UserProfile, self._json_object(resp))

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------
    async def get_transactions(self, account_number: str, *, expire_session: bool = True) -> List[Transaction]:
        """
        Fetch one account's transaction history.

        expire_session=False keeps a 401 local to this call (AuthExpired is still
        raised, but the credential is not cleared and no redirect happens).
        """
        resp = await self._request(
            "GET",
            f"/transactions/{quote(account_number, safe='')}",
            expire_session=expire_session,
        )
        return [self._decode(Transaction, item) for item in self._json_list(resp)]

    async def get_transactions_between(
        self,
        account_number: str,
        start: datetime,
        end: datetime,
        *,
        expire_session: bool = True,
    ) -> List[Transaction]:
        if start > end:
            raise ValueError("start must not be after end")
        resp = await self._request(
            "GET",
            f"/transactions/{quote(account_number, safe='')}/history",
            params={"startDate": start.isoformat(), "endDate": end.isoformat()},
            expire_session=expire_session,
        )
        return [self._decode(Transaction, item) for item in self._json_list(resp)]

    async def post_deposit(
        self,
        account_number: str,
        amount: Decimal,
        description: Optional[str] = None,
    ) -> Transaction:
        payload = {
            "accountNumber": account_number,
            "amount": float(amount),
            "description": description or None,
        }
        resp = await self._request("POST", "/transactions/deposit", json=payload)
        return self._decode(Transaction, self._json_object(resp))

    async def post_transfer(self, request: TransferRequest) -> Transaction:
        resp = await self._request("POST", "/transactions/transfer", json=request.to_wire())
        return self._decode(Transaction, self._json_object(resp))
