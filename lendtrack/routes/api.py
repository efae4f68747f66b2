#!/usr/bin/env python

"""
    API routes for LendTrack,
    the snapshot read endpoint and the action endpoint.

    :copyright: (c) 2025 by AUTHORS
    :license: see LICENSE for more details
"""

import logging
from typing import Optional
from fastapi import APIRouter, Body, Depends, Header, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from lendtrack import configs
from lendtrack.core import auth
from lendtrack.core.actions import ActionDispatcher
from lendtrack.core.db import get_db
from lendtrack.core.loans import loan_history
from lendtrack.core.snapshot import get_snapshot
from lendtrack.core.exceptions import LendTrackAPIError, RecordNotFoundError
from lendtrack.routes.schemas import ActionRequest
from lendtrack.schemas.snapshot import Loan as LoanSchema

logger = logging.getLogger(__name__)

router = APIRouter()

def fail(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"ok": False, "message": message})

def missing_token_config() -> Optional[JSONResponse]:
    if not configs.AUTH_TOKEN:
        logger.error("LENDTRACK_AUTH_TOKEN is not set. Please configure your environment.")
        return fail(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Server configuration error: Authentication token not set."
        )
    return None

@router.get("/actions")
def read_snapshot(db_session: Session = Depends(get_db)):
    if error := missing_token_config():
        return error
    return {"ok": True, "snapshot": get_snapshot(db_session).to_json()}

@router.post("/actions")
def run_action(
        body: Optional[ActionRequest] = Body(None),
        authorization: Optional[str] = Header(None),
        db_session: Session = Depends(get_db)):
    if error := missing_token_config():
        return error

    if not auth.verify_bearer_token(authorization, configs.AUTH_TOKEN):
        return fail(status.HTTP_401_UNAUTHORIZED, "Unauthorized: Invalid or missing token.")

    if body is None or not body.action or body.payload is None:
        return fail(status.HTTP_400_BAD_REQUEST, "Action and payload are required.")

    try:
        snapshot = ActionDispatcher.execute(body.action, body.payload, db_session=db_session)
    except RecordNotFoundError as e:
        return fail(status.HTTP_404_NOT_FOUND, str(e))
    except LendTrackAPIError as e:
        return fail(status.HTTP_400_BAD_REQUEST, str(e))
    except Exception:
        logger.exception(f"Action {body.action!r} failed unexpectedly")
        return fail(status.HTTP_500_INTERNAL_SERVER_ERROR, "Unexpected error")
    return {"ok": True, "snapshot": snapshot.to_json()}

@router.api_route("/actions", methods=["PUT", "PATCH", "DELETE"])
def action_method_not_allowed():
    return fail(status.HTTP_405_METHOD_NOT_ALLOWED, "Method not allowed")

@router.get("/items/{item_id}/loans")
def read_loan_history(item_id: int, db_session: Session = Depends(get_db)):
    """Every loan of an item, oldest first."""
    if error := missing_token_config():
        return error
    try:
        loans = loan_history(item_id, db_session=db_session)
    except RecordNotFoundError as e:
        return fail(status.HTTP_404_NOT_FOUND, str(e))
    return {
        "ok": True,
        "loans": [LoanSchema.model_validate(loan).model_dump(mode="json", by_alias=True) for loan in loans]
    }
