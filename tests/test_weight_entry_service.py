import logging
from datetime import timedelta, timezone

import pytest

from healthapp.models.weight_entry import WeightEntry
from healthapp.services.weight_entry_service import WeightEntryService
from healthapp.utils.timestamps import utcnow


@pytest.fixture
def user(make_user):
    return make_user()


def _log(user, hours_ago, weight, note=None):
    return WeightEntryService.create_weight_entry({
        'user_id': user.id,
        'logged_at': utcnow() - timedelta(hours=hours_ago),
        'weight': weight,
        'note': note,
    })


def test_create_weight_entry_syncs_user_weight(user):
    entry = _log(user, 1, 70.5, note='Morning weight')

    assert entry.id is not None
    assert entry.status == 'ACTIVE'
    assert entry.to_dict()['status'] == 'active'
    assert user.weight_kg == 70.5


def test_older_entry_does_not_replace_latest_weight(user):
    _log(user, 1, 70.5)
    _log(user, 48, 72.0)

    assert user.weight_kg == 70.5


def test_create_rejects_future_timestamp(user):
    with pytest.raises(ValueError, match="more than 10 minutes in the future"):
        WeightEntryService.create_weight_entry({
            'user_id': user.id,
            'logged_at': utcnow() + timedelta(minutes=30),
            'weight': 70.0,
        })

    # Small clock skew is tolerated
    entry = WeightEntryService.create_weight_entry({
        'user_id': user.id,
        'logged_at': utcnow() + timedelta(minutes=5),
        'weight': 70.0,
    })
    assert entry.id is not None


def test_create_rejects_entry_within_five_minutes(user, caplog):
    first = _log(user, 2, 70.0)

    with caplog.at_level(logging.WARNING, logger='healthapp.services.weight_entry_service'):
        with pytest.raises(ValueError, match="within 5 minutes"):
            WeightEntryService.create_weight_entry({
                'user_id': user.id,
                'logged_at': first.logged_at + timedelta(minutes=3),
                'weight': 71.0,
            })
    assert "Duplicate weight entry" in caplog.text

    assert WeightEntry.query.count() == 1


def test_create_rejects_unknown_user(app):
    with pytest.raises(ValueError, match="User not found"):
        WeightEntryService.create_weight_entry({'user_id': 42, 'logged_at': utcnow(), 'weight': 70.0})


def test_get_weight_entry_scoped_to_user(user, make_user):
    entry = _log(user, 1, 70.0)
    other = make_user('someone_else')

    assert WeightEntryService.get_weight_entry(entry.id) is entry
    assert WeightEntryService.get_weight_entry(entry.id, user_id=user.id) is entry
    assert WeightEntryService.get_weight_entry(entry.id, user_id=other.id) is None


def test_list_defaults_to_last_30_days(user):
    _log(user, 24, 70.0)
    _log(user, 24 * 10, 71.0)
    _log(user, 24 * 40, 72.0)

    response = WeightEntryService.list_weight_entries(user_id=user.id)

    assert response['total'] == 2
    assert [item['weight'] for item in response['items']] == [70.0, 71.0]


def test_list_paginates_and_sorts(user):
    for day in range(1, 6):
        _log(user, 24 * day, 70.0 + day)

    response = WeightEntryService.list_weight_entries(user_id=user.id, page=2, limit=2, sort_dir='asc')

    assert response['page'] == 2
    assert response['limit'] == 2
    assert response['total'] == 5
    assert response['total_pages'] == 3
    assert [item['weight'] for item in response['items']] == [73.0, 72.0]


def test_list_rejects_inverted_range(user):
    now = utcnow()
    with pytest.raises(ValueError, match="From date cannot be after to date"):
        WeightEntryService.list_weight_entries(user_id=user.id, date_from=now, date_to=now - timedelta(days=1))


def test_update_weight_entry_resyncs(user):
    latest = _log(user, 1, 70.0)
    older = _log(user, 24, 72.0)

    WeightEntryService.update_weight_entry(older.id, {'logged_at': utcnow() - timedelta(minutes=30)})
    assert user.weight_kg == 72.0

    WeightEntryService.update_weight_entry(latest.id, {'note': 'after run'})
    assert latest.note == 'after run'

    with pytest.raises(ValueError, match="more than 10 minutes in the future"):
        WeightEntryService.update_weight_entry(latest.id, {'logged_at': utcnow() + timedelta(hours=1)})


def test_update_missing_entry(user):
    with pytest.raises(ValueError, match="Weight entry not found"):
        WeightEntryService.update_weight_entry(999, {'weight': 70.0})


def test_delete_weight_entry_falls_back_to_previous(user):
    latest = _log(user, 1, 70.0)
    _log(user, 24, 72.0)

    WeightEntryService.delete_weight_entry(latest.id)
    assert latest.status == 'DELETED'
    assert user.weight_kg == 72.0
    assert WeightEntryService.get_weight_entry(latest.id) is None

    with pytest.raises(ValueError, match="Weight entry not found"):
        WeightEntryService.delete_weight_entry(latest.id)


def test_deleting_last_entry_clears_user_weight(user):
    only = _log(user, 1, 70.0)
    WeightEntryService.delete_weight_entry(only.id)

    assert user.weight_kg is None


def test_list_accepts_timezone_aware_bounds(user):
    _log(user, 24, 70.0)
    _log(user, 24 * 5, 71.0)

    date_from = (utcnow() - timedelta(days=2)).replace(tzinfo=timezone.utc)
    response = WeightEntryService.list_weight_entries(user_id=user.id, date_from=date_from)

    assert [item['weight'] for item in response['items']] == [70.0]

    date_to = (utcnow() + timedelta(hours=2)).astimezone(timezone(timedelta(hours=2)))
    response = WeightEntryService.list_weight_entries(user_id=user.id, date_to=date_to)

    assert response['total'] == 2


def test_weight_only_update_resyncs_user_weight(user):
    latest = _log(user, 1, 70.0)
    _log(user, 24, 72.0)

    WeightEntryService.update_weight_entry(latest.id, {'weight': 75.0})

    assert user.weight_kg == 75.0


def test_deleted_entry_is_not_a_duplicate(user):
    first = _log(user, 2, 70.0)
    WeightEntryService.delete_weight_entry(first.id)

    relogged = WeightEntryService.create_weight_entry({
        'user_id': user.id,
        'logged_at': first.logged_at,
        'weight': 70.4,
    })

    assert relogged.id != first.id
    assert user.weight_kg == 70.4
