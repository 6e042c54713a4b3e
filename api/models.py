"""
API Request and Response Models.

Pydantic models for validating API requests and serializing responses.
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from domain.item import Item


# ============================================================================
# Item Models
# ============================================================================

class ListItemRequest(BaseModel):
    """Request to list a new item for sale."""
    name: str = Field(..., description="Item description")
    price: int = Field(..., description="Price in the smallest currency unit")

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Widget",
                "price": 100
            }
        }


class ListItemResponse(BaseModel):
    """Response after listing an item."""
    item_id: int

    class Config:
        json_schema_extra = {
            "example": {
                "item_id": 0
            }
        }


class ItemResponse(BaseModel):
    """Full item snapshot."""
    name: str
    item_id: int
    price: int
    state: int  # 0=ForSale, 1=Sold, 2=Shipped, 3=Received
    state_name: str
    seller: UUID
    buyer: Optional[UUID] = None

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Widget",
                "item_id": 0,
                "price": 100,
                "state": 1,
                "state_name": "Sold",
                "seller": "123e4567-e89b-12d3-a456-426614174000",
                "buyer": "123e4567-e89b-12d3-a456-426614174001"
            }
        }

    @classmethod
    def from_item(cls, item: Item) -> "ItemResponse":
        return cls(
            name=item.name,
            item_id=item.item_id,
            price=item.price,
            state=int(item.state),
            state_name=item.state.label,
            seller=item.seller,
            buyer=item.buyer,
        )


# ============================================================================
# Ledger Models
# ============================================================================

class DirectTransferRequest(BaseModel):
    """Unsolicited funds sent straight to the ledger (always refused)."""
    amount: int


# ============================================================================
# Error Models
# ============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    detail: Optional[str] = None
    status_code: int

    class Config:
        json_schema_extra = {
            "example": {
                "error": "NotForSale",
                "detail": "item 0 is not for sale (state: Sold)",
                "status_code": 409
            }
        }
