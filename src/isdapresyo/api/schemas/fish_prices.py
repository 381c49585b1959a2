from datetime import date

from pydantic import BaseModel


class FishPriceResponse(BaseModel):
    id: int
    fish_type: str
    min_price: float
    max_price: float
    avg_price: float
    date_updated: date

    model_config = {"from_attributes": True}


class OkResponse(BaseModel):
    ok: bool = True
