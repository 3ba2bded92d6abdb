"""FastAPI application factory for the SavingsFlow HTTP API."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Literal, Optional

from fastapi import Depends, FastAPI, File, Request, UploadFile
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field, field_validator

from ..core.csv_codec import import_csv, serialize_transactions
from ..core.models import is_storable_amount
from ..logging_setup import configure_logging, get_logger
from ..persistence import DeserializationError, TransactionStore
from ..services.json_serializer import (
    serialize_balance_point,
    serialize_summary,
    serialize_transaction,
    serialize_transactions as serialize_transaction_dicts,
)
from ..services.summary import running_balance, summarize
from ..services.transactions import export_filename, sort_by_date
from .dependencies import get_store

logger = get_logger(__name__)


class TransactionCreate(BaseModel):
    """Request body for recording a transaction."""

    amount: Decimal = Field(..., ge=0)
    type: Literal["savings", "spend"]
    description: Optional[str] = None
    date: Optional[datetime] = None

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v: Decimal) -> Decimal:
        if not is_storable_amount(v):
            raise ValueError("amount has more precision than can be stored")
        return v


def create_app() -> FastAPI:
    """Construct and return the FastAPI application."""
    configure_logging()
    app = FastAPI(title="SavingsFlow API")

    @app.exception_handler(DeserializationError)
    async def deserialization_error_handler(
        request: Request, exc: DeserializationError
    ) -> JSONResponse:
        logger.error("Stored transactions could not be read: %s", exc)
        return JSONResponse(status_code=500, content={"detail": str(exc)})

    @app.get("/health", tags=["health"])
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/api/transactions", tags=["api"])
    def list_transactions_api(
        store: TransactionStore = Depends(get_store),
    ) -> dict[str, object]:
        """Stored transactions in storage order."""
        return {"transactions": serialize_transaction_dicts(store.list())}

    @app.post("/api/transactions", status_code=201, tags=["api"])
    def create_transaction_api(
        body: TransactionCreate,
        store: TransactionStore = Depends(get_store),
    ) -> dict[str, object]:
        transaction = store.append(
            body.amount, body.type, description=body.description, date=body.date
        )
        return serialize_transaction(transaction)

    @app.delete("/api/transactions", status_code=204, tags=["api"])
    def clear_transactions_api(store: TransactionStore = Depends(get_store)) -> Response:
        store.clear()
        return Response(status_code=204)

    @app.get("/api/summary", tags=["api"])
    def summary_api(store: TransactionStore = Depends(get_store)) -> dict[str, object]:
        """Totals plus the running balance used for charting."""
        transactions = store.list()
        payload: dict[str, object] = serialize_summary(summarize(transactions))
        payload["history"] = [
            serialize_balance_point(point) for point in running_balance(transactions)
        ]
        return payload

    @app.get("/export.csv", tags=["csv"])
    def export_csv_api(store: TransactionStore = Depends(get_store)) -> Response:
        content = serialize_transactions(sort_by_date(store.list()))
        return Response(
            content=content,
            media_type="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{export_filename()}"'},
        )

    @app.post("/import", tags=["csv"])
    async def import_csv_api(
        csv_file: UploadFile = File(...),
        store: TransactionStore = Depends(get_store),
    ) -> JSONResponse:
        raw = await csv_file.read()
        try:
            text = raw.decode("utf-8-sig")
        except UnicodeDecodeError:
            return JSONResponse(
                status_code=400,
                content={
                    "ok": False,
                    "message": "Error importing CSV: file is not valid UTF-8",
                    "imported_count": 0,
                    "failure": "unexpected_failure",
                },
            )
        result = import_csv(text, store)
        return JSONResponse(status_code=200 if result.ok else 400, content=result.to_dict())

    return app
