"""
Ledger API Endpoints.

The ledger never accepts value outside of a purchase. This endpoint exists so
that a direct transfer attempt gets an explicit refusal instead of a 404.
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from api.dependencies import get_caller, get_ledger
from api.models import DirectTransferRequest, ErrorResponse
from services.ledger_service import ItemLedger

router = APIRouter()


@router.post(
    "/ledger/transfers",
    responses={403: {"model": ErrorResponse}},
    summary="Direct Transfer (rejected)",
    description="Always refused. Funds are only accepted as payment for a purchase.",
)
def direct_transfer(
    request: DirectTransferRequest,
    caller: UUID = Depends(get_caller),
    ledger: ItemLedger = Depends(get_ledger),
):
    ledger.receive_direct_transfer(caller, request.amount)
