import pytest

from healthapp.models.user import User
from healthapp.utils.pagination import normalize_pagination, paginate_query, paginated_response


@pytest.mark.parametrize("page, limit, expected", [
    (None, None, (1, 20)),
    (0, 10, (1, 10)),
    (-3, 10, (1, 10)),
    (2, 0, (2, 1)),
    (3, 500, (3, 100)),
    ("4", "25", (4, 25)),
])
def test_normalize_pagination(page, limit, expected):
    assert normalize_pagination(page, limit) == expected


def test_normalize_pagination_custom_limits():
    assert normalize_pagination(1, 80, max_limit=50) == (1, 50)
    assert normalize_pagination(1, None, default_limit=5) == (1, 5)


def test_paginated_response_from_query(make_user):
    for index in range(5):
        make_user(f"user{index}")

    pagination = paginate_query(User.query.order_by(User.id.asc()), page=2, limit=2)
    response = paginated_response(pagination, lambda user: user.username)

    assert response == {
        'items': ['user2', 'user3'],
        'page': 2,
        'limit': 2,
        'total': 5,
        'total_pages': 3
    }


def test_page_past_the_end_is_empty(make_user):
    make_user()

    pagination = paginate_query(User.query, page=4, limit=10)
    response = paginated_response(pagination, lambda user: user.username)

    assert response['items'] == []
    assert response['total'] == 1
    assert response['total_pages'] == 1


def test_empty_query(app):
    response = paginated_response(paginate_query(User.query, page=1, limit=10), lambda user: user.id)

    assert response['items'] == []
    assert response['total'] == 0
    assert response['total_pages'] == 0
