from .height_schemas import HeightInputSchema
from .user_schemas import UserCreateSchema, UserPatchSchema
from .weight_schemas import WeightCreateSchema, WeightUpdateSchema

__all__ = ['HeightInputSchema', 'UserCreateSchema', 'UserPatchSchema', 'WeightCreateSchema', 'WeightUpdateSchema']
