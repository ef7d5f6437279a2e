from .user import User
from .weight_entry import WeightEntry

__all__ = ['User', 'WeightEntry']
