import pytest

from app.core.pagination import normalize_pagination, page_count


@pytest.mark.parametrize(
    "page, limit, expected",
    [
        (None, None, (1, 10)),
        (0, 0, (1, 10)),
        (-3, -1, (1, 10)),
        (2, 25, (2, 25)),
        (1, 1000, (1, 100)),
    ],
)
def test_normalize_pagination(page, limit, expected):
    params = normalize_pagination(page, limit)
    assert (params.page, params.limit) == expected


@pytest.mark.parametrize("total, limit, pages", [(0, 10, 0), (25, 10, 3), (30, 10, 3), (1, 10, 1)])
def test_page_count(total, limit, pages):
    assert page_count(total, limit) == pages
