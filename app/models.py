# app/models.py
from pydantic import BaseModel, Field, StrictBool, StrictInt, StrictStr
from typing import Annotated, Dict, List, Optional, Union

PositivePrice = Union[
    Annotated[StrictInt, Field(gt=0)],
    Annotated[float, Field(strict=True, gt=0, allow_inf_nan=False)],
]

class ProductIn(BaseModel):
    # unknown keys (including "id") are ignored
    name: StrictStr = Field(min_length=1)
    price: PositivePrice
    category: StrictStr = Field(min_length=1)
    description: Optional[StrictStr] = None
    inStock: Optional[StrictBool] = None

class Product(BaseModel):
    id: str
    name: str
    description: str = ""
    price: Union[int, float]
    category: str
    inStock: bool = True

class Page(BaseModel):
    data: List[Product]
    currentPage: int
    totalPages: int
    totalItems: int

class Stats(BaseModel):
    totalProducts: int
    byCategory: Dict[str, int]
    inStock: int
    outOfStock: int
