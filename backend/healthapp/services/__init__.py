# Services package
from .user_service import UserService
from .weight_entry_service import WeightEntryService

__all__ = ['UserService', 'WeightEntryService']
