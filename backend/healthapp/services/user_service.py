import logging
from typing import Dict, Any, Optional
from flask import current_app
from sqlalchemy import or_
from healthapp.models.user import User
from healthapp.utils.unit_conversion import to_centimeters
from healthapp.utils.pagination import normalize_pagination, paginate_query, paginated_response
from healthapp import db

logger = logging.getLogger(__name__)

# Profile columns copied straight from validated request data
PROFILE_FIELDS = (
    'first_name', 'last_name', 'phone_number', 'date_of_birth', 'gender',
    'activity_level', 'daily_calorie_intake_target', 'daily_calorie_burn_target', 'weight_kg'
)


class UserService:

    @staticmethod
    def _apply_height(user: User, data: Dict[str, Any]) -> None:
        measurement = data.get('height')
        if measurement is not None:
            user.height_cm = to_centimeters(measurement.value, measurement.unit)

    @staticmethod
    def create_user(data: Dict[str, Any]) -> User:
        """Create a user from data loaded through UserCreateSchema."""
        try:
            username = data['username']
            email = data['email']

            if User.query.filter_by(username=username).first():
                logger.warning("Username already exists: %s", username)
                raise ValueError("Username already exists")

            if User.query.filter_by(email=email).first():
                logger.warning("Email already exists: %s", email)
                raise ValueError("Email already exists")

            user = User(
                username=username,
                email=email,
                role=data.get('role', 'USER')
            )
            user.set_password(data['password'])

            for field_name in PROFILE_FIELDS:
                if field_name in data:
                    setattr(user, field_name, data[field_name])
            UserService._apply_height(user, data)

            db.session.add(user)
            db.session.commit()
            logger.info("User created with ID: %s", user.id)
            return user

        except ValueError:
            db.session.rollback()
            raise
        except Exception:
            db.session.rollback()
            logger.error("User creation failed", exc_info=True)
            raise

    @staticmethod
    def get_user(user_id: int) -> Optional[User]:
        user = db.session.get(User, user_id)
        if user is None or user.is_deleted:
            return None
        return user

    @staticmethod
    def patch_user(user_id: int, data: Dict[str, Any]) -> User:
        """Apply a partial update loaded through UserPatchSchema."""
        try:
            user = UserService.get_user(user_id)
            if not user:
                raise ValueError("User not found")

            if 'email' in data and data['email'] != user.email:
                taken = User.query.filter(User.email == data['email'], User.id != user.id).first()
                if taken:
                    logger.warning("Email already exists: %s", data['email'])
                    raise ValueError("Email already exists")
                user.email = data['email']

            for field_name in PROFILE_FIELDS:
                if field_name in data:
                    setattr(user, field_name, data[field_name])
            UserService._apply_height(user, data)

            if data.get('password'):
                user.set_password(data['password'])

            if 'account_status' in data:
                user.account_status = data['account_status']

            db.session.commit()
            logger.info("User patched successfully for ID: %s", user_id)
            return user

        except ValueError:
            db.session.rollback()
            raise
        except Exception:
            db.session.rollback()
            logger.error("Error patching user %s", user_id, exc_info=True)
            raise

    @staticmethod
    def delete_user(user_id: int) -> None:
        """Soft delete: the row stays, marked DELETED."""
        try:
            user = db.session.get(User, user_id)
            if not user:
                logger.warning("Attempted to delete non-existent user with ID: %s", user_id)
                raise ValueError("User not found")

            if user.is_deleted:
                logger.warning("Attempted to delete already deleted user with ID: %s", user_id)
                raise ValueError("User is already deleted")

            user.account_status = 'DELETED'
            db.session.commit()
            logger.info("User soft deleted with ID: %s", user_id)

        except ValueError:
            db.session.rollback()
            raise
        except Exception:
            db.session.rollback()
            logger.error("Error deleting user %s", user_id, exc_info=True)
            raise

    @staticmethod
    def list_users(page: int = 1, limit: int = None, search: str = None,
                   status: str = None) -> Dict[str, Any]:
        page, limit = normalize_pagination(
            page, limit,
            max_limit=current_app.config['PAGINATION_MAX_LIMIT'],
            default_limit=current_app.config['PAGINATION_DEFAULT_LIMIT']
        )

        query = User.query
        if status:
            query = query.filter(User.account_status == status)
        else:
            query = query.filter(User.account_status != 'DELETED')

        if search:
            pattern = f"%{search.strip()}%"
            query = query.filter(or_(User.first_name.ilike(pattern), User.last_name.ilike(pattern)))

        pagination = paginate_query(query.order_by(User.created_at.desc(), User.id.desc()), page, limit)
        return paginated_response(pagination, lambda user: user.to_dict())
