"""
In-memory ledger service used by the integration tests.

Serves the same routes as the real ledger under /api and requires
`Authorization: Bearer <VALID_TOKEN>`.
"""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any, Dict, List, Optional
from uuid import uuid4

from fastapi import APIRouter, FastAPI, Header, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

VALID_TOKEN = "good-token"


class TransferIn(BaseModel):
    fromAccountNumber: str
    toAccountNumber: str
    amount: float
    description: Optional[str] = None
    ifscCode: Optional[str] = None


class DepositIn(BaseModel):
    accountNumber: str
    amount: float
    description: Optional[str] = None


class LedgerState:
    def __init__(self):
        self.accounts: Dict[str, Dict[str, Any]] = {}
        self.transactions: List[Dict[str, Any]] = []
        self.clock = datetime(2024, 1, 1, 9, 0, 0)
        self.broken_accounts: set = set()

    def tick(self) -> str:
        self.clock += timedelta(minutes=1)
        return self.clock.isoformat()

    def add_account(self, number: str, account_type: str, balance: str, name: Optional[str] = None) -> None:
        self.accounts[number] = {
            "accountNumber": number,
            "accountType": account_type,
            "balance": balance,
            "ifscCode": "BANK0001234",
            "accountName": name,
        }

    def record(self, tx_type: str, amount: float, from_acc=None, to_acc=None, external=None, description=None):
        tx = {
            "id": len(self.transactions) + 1,
            "transactionId": f"TXN{uuid4().hex[:8].upper()}",
            "transactionType": tx_type,
            "fromAccount": {"accountNumber": from_acc} if from_acc else None,
            "toAccount": {"accountNumber": to_acc} if to_acc else None,
            "externalAccountNumber": external,
            "amount": amount,
            "status": "COMPLETED",
            "transactionDate": self.tick(),
            "description": description,
        }
        self.transactions.append(tx)
        return tx


def build_app(state: LedgerState) -> FastAPI:
    router = APIRouter(prefix="/api")

    def _check(authorization: Optional[str]) -> None:
        if authorization != f"Bearer {VALID_TOKEN}":
            raise HTTPException(status_code=401, detail="Unauthorized")

    def _error(message: str) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": message})

    @router.get("/accounts")
    async def list_accounts(authorization: Optional[str] = Header(None)):
        _check(authorization)
        return list(state.accounts.values())

    @router.get("/auth/me")
    async def me(authorization: Optional[str] = Header(None)):
        _check(authorization)
        return {"username": "asha", "email": "asha@example.com", "firstName": "Asha"}

    @router.get("/transactions/{account_number}")
    async def history(account_number: str, authorization: Optional[str] = Header(None)):
        _check(authorization)
        if account_number in state.broken_accounts:
            return JSONResponse(status_code=500, content={"message": "history unavailable"})
        if account_number not in state.accounts:
            return _error("Account not found or access denied")
        rows = [
            t for t in state.transactions
            if account_number in (
                (t["fromAccount"] or {}).get("accountNumber"),
                (t["toAccount"] or {}).get("accountNumber"),
            )
        ]
        return list(reversed(rows))

    @router.post("/transactions/transfer")
    async def transfer(payload: TransferIn, authorization: Optional[str] = Header(None)):
        _check(authorization)
        source = state.accounts.get(payload.fromAccountNumber)
        if source is None:
            return _error("Account not found or access denied")
        amount = Decimal(str(payload.amount))
        if Decimal(source["balance"]) < amount:
            return _error("Insufficient balance")
        source["balance"] = str(Decimal(source["balance"]) - amount)
        if payload.ifscCode:
            tx = state.record("TRANSFER", payload.amount, from_acc=payload.fromAccountNumber,
                              external=payload.toAccountNumber, description=payload.description)
        else:
            target = state.accounts.get(payload.toAccountNumber)
            if target is None:
                return _error("Destination account not found")
            target["balance"] = str(Decimal(target["balance"]) + amount)
            tx = state.record("TRANSFER", payload.amount, from_acc=payload.fromAccountNumber,
                              to_acc=payload.toAccountNumber, description=payload.description)
        return tx

    @router.post("/transactions/deposit")
    async def deposit(payload: DepositIn, authorization: Optional[str] = Header(None)):
        _check(authorization)
        account = state.accounts.get(payload.accountNumber)
        if account is None:
            return _error("Account not found or access denied")
        account["balance"] = str(Decimal(account["balance"]) + Decimal(str(payload.amount)))
        return state.record("DEPOSIT", payload.amount, to_acc=payload.accountNumber,
                            description=payload.description)

    app = FastAPI(title="Fake Ledger")
    app.include_router(router)

    @app.exception_handler(HTTPException)
    async def http_error(request: Request, exc: HTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    return app
