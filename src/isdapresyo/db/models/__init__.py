from isdapresyo.db.models.admin import Admin
from isdapresyo.db.models.fish_price import FishPrice

__all__ = ["Admin", "FishPrice"]
