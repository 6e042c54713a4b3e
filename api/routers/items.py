"""
Items API Endpoints.

Endpoints for listing, purchasing, shipping and confirming receipt of items.

Caller identity comes from the `X-Caller-Id` header and attached payment from
the `X-Payment-Amount` header. Ledger rejections are turned into error
responses by the handler registered in `api.main`.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from api.dependencies import get_caller, get_ledger, get_payment
from api.models import ErrorResponse, ItemResponse, ListItemRequest, ListItemResponse
from services.ledger_service import ItemLedger

router = APIRouter()

_ERRORS = {
    400: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
}


@router.post(
    "/items",
    response_model=ListItemResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
    summary="List Item",
    description="List a new item for sale. The caller becomes the seller.",
)
def list_item(
    request: ListItemRequest,
    caller: UUID = Depends(get_caller),
    ledger: ItemLedger = Depends(get_ledger),
):
    """
    List an item for sale.

    **Example request:**
    ```json
    {"name": "Widget", "price": 100}
    ```

    **Response:**
    ```json
    {"item_id": 0}
    ```
    """
    item_id = ledger.list_item(request.name, request.price, caller)
    return ListItemResponse(item_id=item_id)


@router.post(
    "/items/{item_id}/purchase",
    response_model=ItemResponse,
    responses={**_ERRORS, 402: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
    summary="Purchase Item",
    description="Buy an item. Any amount paid above the price is refunded to the caller.",
)
def purchase_item(
    item_id: int,
    caller: UUID = Depends(get_caller),
    paid_amount: int = Depends(get_payment),
    ledger: ItemLedger = Depends(get_ledger),
):
    """
    Purchase an item.

    **Process:**
    1. Item must be for sale and payment must cover the price
    2. Caller is recorded as buyer; item moves to Sold
    3. Seller is paid the price; the excess is refunded to the caller

    If a payout fails, the purchase is rolled back and 502 is returned.
    """
    item = ledger.purchase(item_id, caller, paid_amount)
    return ItemResponse.from_item(item)


@router.post(
    "/items/{item_id}/ship",
    response_model=ItemResponse,
    responses=_ERRORS,
    summary="Ship Item",
    description="Mark a sold item as shipped. Only the seller may do this.",
)
def ship_item(
    item_id: int,
    caller: UUID = Depends(get_caller),
    ledger: ItemLedger = Depends(get_ledger),
):
    item = ledger.ship(item_id, caller)
    return ItemResponse.from_item(item)


@router.post(
    "/items/{item_id}/confirm-receipt",
    response_model=ItemResponse,
    responses=_ERRORS,
    summary="Confirm Receipt",
    description="Confirm a shipped item arrived. Only the buyer may do this.",
)
def confirm_item_receipt(
    item_id: int,
    caller: UUID = Depends(get_caller),
    ledger: ItemLedger = Depends(get_ledger),
):
    item = ledger.confirm_receipt(item_id, caller)
    return ItemResponse.from_item(item)


@router.get(
    "/items/{item_id}",
    response_model=ItemResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Fetch Item",
    description="Return every field of an item. State is reported as its ordinal.",
)
def fetch_item(item_id: int, ledger: ItemLedger = Depends(get_ledger)):
    item = ledger.fetch(item_id)
    return ItemResponse.from_item(item)
