# app/models.py
from typing import Union

from pydantic import BaseModel, ConfigDict, Field, FiniteFloat, StrictInt


class ProductIn(BaseModel):
    # strict: "10" is not a price, 1 is not a bool
    model_config = ConfigDict(strict=True)

    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    price: Union[StrictInt, FiniteFloat]
    category: str = Field(min_length=1)
    in_stock: bool = Field(alias="inStock")


class Product(ProductIn):
    id: str


def make_product(product_id: str, p: ProductIn) -> Product:
    return Product(id=product_id, **p.model_dump(by_alias=True))
