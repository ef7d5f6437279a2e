import logging
from datetime import datetime, timedelta
from typing import Dict, Any, Optional
from flask import current_app
from healthapp.models.user import User
from healthapp.models.weight_entry import WeightEntry
from healthapp.utils.pagination import normalize_pagination, paginate_query, paginated_response
from healthapp.utils.timestamps import utcnow, to_naive_utc
from healthapp import db

logger = logging.getLogger(__name__)

MAX_FUTURE_SKEW = timedelta(minutes=10)
DUPLICATE_WINDOW = timedelta(minutes=5)


class WeightEntryService:

    @staticmethod
    def _validate_not_in_future(logged_at: datetime) -> None:
        if logged_at > utcnow() + MAX_FUTURE_SKEW:
            raise ValueError("Logged at time cannot be more than 10 minutes in the future")

    @staticmethod
    def _active_entries_query(user_id: Optional[int] = None):
        query = WeightEntry.query.filter(WeightEntry.status == 'ACTIVE')
        if user_id is not None:
            query = query.filter(WeightEntry.user_id == user_id)
        return query

    @staticmethod
    def _find_active_entry(entry_id: int, user_id: Optional[int] = None) -> WeightEntry:
        entry = WeightEntryService._active_entries_query(user_id).filter(WeightEntry.id == entry_id).first()
        if not entry:
            raise ValueError("Weight entry not found")
        return entry

    @staticmethod
    def _sync_user_latest_weight(user_id: int) -> None:
        """Mirror the most recent active entry onto the user's profile weight."""
        user = db.session.get(User, user_id)
        if user is None:
            raise ValueError("User not found")

        latest = (
            WeightEntryService._active_entries_query(user_id)
            .order_by(WeightEntry.logged_at.desc(), WeightEntry.id.desc())
            .first()
        )
        user.weight_kg = latest.weight if latest else None

    @staticmethod
    def create_weight_entry(data: Dict[str, Any]) -> WeightEntry:
        """Create an entry from data loaded through WeightCreateSchema."""
        try:
            user_id = data['user_id']
            logged_at = data['logged_at']

            WeightEntryService._validate_not_in_future(logged_at)

            duplicate = WeightEntryService._active_entries_query(user_id).filter(
                WeightEntry.logged_at.between(logged_at - DUPLICATE_WINDOW, logged_at + DUPLICATE_WINDOW)
            ).first()
            if duplicate:
                logger.warning("Duplicate weight entry for user %s near %s", user_id, logged_at)
                raise ValueError("A weight entry already exists within 5 minutes of this time")

            user = db.session.get(User, user_id)
            if not user or user.is_deleted:
                raise ValueError("User not found")

            entry = WeightEntry(
                user_id=user_id,
                logged_at=logged_at,
                weight=data['weight'],
                note=data.get('note')
            )
            db.session.add(entry)
            db.session.flush()

            WeightEntryService._sync_user_latest_weight(user_id)
            db.session.commit()
            logger.info("Weight entry %s created for user %s", entry.id, user_id)
            return entry

        except ValueError:
            db.session.rollback()
            raise
        except Exception:
            db.session.rollback()
            logger.error("Error creating weight entry", exc_info=True)
            raise

    @staticmethod
    def get_weight_entry(entry_id: int, user_id: Optional[int] = None) -> Optional[WeightEntry]:
        return WeightEntryService._active_entries_query(user_id).filter(WeightEntry.id == entry_id).first()

    @staticmethod
    def list_weight_entries(user_id: Optional[int] = None, date_from: datetime = None, date_to: datetime = None,
                            page: int = 1, limit: int = None, sort_dir: str = 'desc') -> Dict[str, Any]:
        config = current_app.config
        page, limit = normalize_pagination(
            page, limit,
            max_limit=config['PAGINATION_MAX_LIMIT'],
            default_limit=config['PAGINATION_DEFAULT_LIMIT']
        )

        # Bounds are compared against naive UTC columns
        date_from = to_naive_utc(date_from)
        date_to = to_naive_utc(date_to)

        if date_to is None:
            date_to = utcnow()
        if date_from is None:
            date_from = date_to - timedelta(days=config['WEIGHT_DEFAULT_RANGE_DAYS'])

        if date_from > date_to:
            raise ValueError("From date cannot be after to date")

        query = WeightEntryService._active_entries_query(user_id).filter(
            WeightEntry.logged_at.between(date_from, date_to)
        )

        if (sort_dir or 'desc').lower() == 'asc':
            ordering = (WeightEntry.logged_at.asc(), WeightEntry.id.asc())
        else:
            ordering = (WeightEntry.logged_at.desc(), WeightEntry.id.desc())

        pagination = paginate_query(query.order_by(*ordering), page, limit)
        return paginated_response(pagination, lambda entry: entry.to_dict())

    @staticmethod
    def update_weight_entry(entry_id: int, data: Dict[str, Any], user_id: Optional[int] = None) -> WeightEntry:
        """Apply a partial update loaded through WeightUpdateSchema."""
        try:
            entry = WeightEntryService._find_active_entry(entry_id, user_id)

            needs_sync = False
            if data.get('logged_at') is not None:
                WeightEntryService._validate_not_in_future(data['logged_at'])
                entry.logged_at = data['logged_at']
                needs_sync = True

            if data.get('weight') is not None:
                entry.weight = data['weight']
                needs_sync = True

            if data.get('note') is not None:
                entry.note = data['note']

            db.session.flush()
            if needs_sync:
                WeightEntryService._sync_user_latest_weight(entry.user_id)

            db.session.commit()
            logger.info("Weight entry %s updated", entry_id)
            return entry

        except ValueError:
            db.session.rollback()
            raise
        except Exception:
            db.session.rollback()
            logger.error("Error updating weight entry %s", entry_id, exc_info=True)
            raise

    @staticmethod
    def delete_weight_entry(entry_id: int, user_id: Optional[int] = None) -> None:
        """Soft delete, then resync the owner's profile weight."""
        try:
            entry = WeightEntryService._find_active_entry(entry_id, user_id)
            entry.status = 'DELETED'
            db.session.flush()

            WeightEntryService._sync_user_latest_weight(entry.user_id)
            db.session.commit()
            logger.info("Weight entry %s deleted", entry_id)

        except ValueError:
            db.session.rollback()
            raise
        except Exception:
            db.session.rollback()
            logger.error("Error deleting weight entry %s", entry_id, exc_info=True)
            raise
