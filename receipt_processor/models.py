from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field
from .errors import Violation


class RawItem(BaseModel):
    short_description: Optional[str] = Field(default=None, alias="shortDescription")
    price: Optional[str] = None

    model_config = {"populate_by_name": True}


class RawReceiptRequest(BaseModel):
    retailer: Optional[str] = None
    purchase_date: Optional[str] = Field(default=None, alias="purchaseDate")
    purchase_time: Optional[str] = Field(default=None, alias="purchaseTime")
    items: Optional[List[RawItem]] = None
    total: Optional[str] = None

    model_config = {"populate_by_name": True}


class Item(BaseModel):
    short_description: str
    price_cents: int = Field(ge=0)


class Receipt(BaseModel):
    id: str
    retailer: str
    items: List[Item] = Field(default_factory=list)
    purchased_at: datetime
    total_cents: int = Field(ge=0)
    points: int = Field(default=0, ge=0)


class ProcessResponse(BaseModel):
    id: str


class PointsResponse(BaseModel):
    points: int


class ErrorResponse(BaseModel):
    detail: str
    errors: List[Violation] = Field(default_factory=list)
