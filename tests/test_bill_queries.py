"""Bill listing filters, pagination, sorting and statistics."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from finmind.domain.bills import Pagination, StatisticsWindow


def _list(client, headers, **params):
    response = client.get("/api/v1/bills", query_string=params, headers=headers)
    assert response.status_code == 200, response.get_json()
    return response.get_json()


def test_pagination_metadata(client, alice, bill_factory):
    start = datetime(2024, 1, 1, 9, 0)
    for index in range(45):
        bill_factory(alice["user"]["id"], amount=index + 1, bill_time=start + timedelta(hours=index))

    first = _list(client, alice["headers"], page=1, limit=20)
    last = _list(client, alice["headers"], page=3, limit=20)

    assert first["pagination"] == {"page": 1, "limit": 20, "total": 45, "total_pages": 3}
    assert len(first["bills"]) == 20
    assert first["bills"][0]["amount"] == 45.0
    assert len(last["bills"]) == 5


def test_default_listing_is_newest_first(client, alice, bill_factory):
    user_id = alice["user"]["id"]
    bill_factory(user_id, merchant="Old", bill_time=datetime(2024, 1, 1))
    bill_factory(user_id, merchant="New", bill_time=datetime(2024, 6, 1))

    body = _list(client, alice["headers"])

    assert [bill["merchant"] for bill in body["bills"]] == ["New", "Old"]
    assert body["pagination"] == {"page": 1, "limit": 20, "total": 2, "total_pages": 1}


def test_empty_listing_has_zero_pages(client, alice):
    body = _list(client, alice["headers"])

    assert body == {"bills": [], "pagination": {"page": 1, "limit": 20, "total": 0, "total_pages": 0}}


def test_listing_only_shows_own_bills(client, alice, bob, bill_factory):
    bill_factory(alice["user"]["id"], merchant="Alice Shop")
    bill_factory(bob["user"]["id"], merchant="Bob Shop")

    body = _list(client, alice["headers"])

    assert [bill["merchant"] for bill in body["bills"]] == ["Alice Shop"]


def test_date_range_includes_whole_end_day(client, alice, bill_factory):
    user_id = alice["user"]["id"]
    bill_factory(user_id, merchant="Before", bill_time=datetime(2023, 12, 31, 23, 59, 59))
    bill_factory(user_id, merchant="First", bill_time=datetime(2024, 1, 1, 0, 0))
    bill_factory(user_id, merchant="Last", bill_time=datetime(2024, 1, 31, 23, 59, 59))
    bill_factory(user_id, merchant="After", bill_time=datetime(2024, 2, 1, 0, 0))

    body = _list(
        client, alice["headers"], start_date="2024-01-01", end_date="2024-01-31", sort_order="asc"
    )

    assert [bill["merchant"] for bill in body["bills"]] == ["First", "Last"]


def test_filter_by_type_and_category(client, alice, bill_factory, default_category):
    user_id = alice["user"]["id"]
    transport = default_category("Transport")
    bill_factory(user_id, merchant="Bus", category_id=transport.id)
    bill_factory(user_id, merchant="Cafe")
    bill_factory(user_id, merchant="Employer", bill_type="income", amount=500)

    by_type = _list(client, alice["headers"], type="income")
    by_category = _list(client, alice["headers"], category_id=transport.id)

    assert [bill["merchant"] for bill in by_type["bills"]] == ["Employer"]
    assert [bill["merchant"] for bill in by_category["bills"]] == ["Bus"]


def test_search_matches_merchant_or_description_case_insensitively(client, alice, bill_factory):
    user_id = alice["user"]["id"]
    bill_factory(user_id, merchant="STARBUCKS Downtown")
    bill_factory(user_id, merchant="Bakery", description="coffee with starbucks beans")
    bill_factory(user_id, merchant="Hardware", description="nails")

    body = _list(client, alice["headers"], search="starbucks")

    assert sorted(bill["merchant"] for bill in body["bills"]) == ["Bakery", "STARBUCKS Downtown"]


def test_search_treats_wildcards_literally(client, alice, bill_factory):
    user_id = alice["user"]["id"]
    bill_factory(user_id, merchant="100% Juice")
    bill_factory(user_id, merchant="Plain Water")

    body = _list(client, alice["headers"], search="%")

    assert [bill["merchant"] for bill in body["bills"]] == ["100% Juice"]


def test_sort_by_amount_ascending(client, alice, bill_factory):
    user_id = alice["user"]["id"]
    for amount in (30, 10, 20):
        bill_factory(user_id, amount=amount)

    body = _list(client, alice["headers"], sort_by="amount", sort_order="asc")

    assert [bill["amount"] for bill in body["bills"]] == [10.0, 20.0, 30.0]


@pytest.mark.parametrize(
    "params",
    [
        {"page": "0"},
        {"page": "abc"},
        {"limit": "101"},
        {"sort_by": "password"},
        {"sort_order": "sideways"},
        {"type": "transfer"},
        {"start_date": "01/02/2024"},
        {"start_date": "2024-02-01", "end_date": "2024-01-01"},
    ],
)
def test_invalid_list_parameters_are_rejected(client, alice, params):
    response = client.get("/api/v1/bills", query_string=params, headers=alice["headers"])

    assert response.status_code == 400
    assert "details" in response.get_json()


# Statistics ------------------------------------------------------------------


def test_monthly_statistics(client, alice, bill_factory, default_category):
    user_id = alice["user"]["id"]
    bill_factory(user_id, bill_type="income", amount=100, bill_time=datetime(2024, 1, 5))
    bill_factory(user_id, amount=40, bill_time=datetime(2024, 1, 31, 23, 59, 59))
    bill_factory(user_id, amount=999, bill_time=datetime(2024, 2, 1, 0, 0))

    response = client.get(
        "/api/v1/bills/statistics",
        query_string={"period": "month", "year": 2024, "month": 1},
        headers=alice["headers"],
    )

    assert response.status_code == 200
    body = response.get_json()
    assert body["period"] == "month"
    assert body["start_date"] == "2024-01-01"
    assert body["end_date"] == "2024-01-31"
    assert body["summary"] == [
        {"type": "income", "total": 100.0, "count": 1},
        {"type": "expense", "total": 40.0, "count": 1},
    ]
    assert body["categories"] == [
        {
            "category_id": default_category("Salary", "income").id,
            "category_name": "Salary",
            "type": "income",
            "total": 100.0,
            "count": 1,
        },
        {
            "category_id": default_category("Food").id,
            "category_name": "Food",
            "type": "expense",
            "total": 40.0,
            "count": 1,
        },
    ]


def test_yearly_statistics_groups_by_category(client, alice, bill_factory, default_category):
    user_id = alice["user"]["id"]
    transport = default_category("Transport")
    bill_factory(user_id, amount=15, bill_time=datetime(2024, 3, 1))
    bill_factory(user_id, amount=25, bill_time=datetime(2024, 11, 1))
    bill_factory(user_id, amount=60, category_id=transport.id, bill_time=datetime(2024, 12, 31, 18))
    bill_factory(user_id, amount=70, bill_time=datetime(2025, 1, 1))

    body = client.get(
        "/api/v1/bills/statistics",
        query_string={"period": "year", "year": 2024},
        headers=alice["headers"],
    ).get_json()

    assert body["start_date"] == "2024-01-01"
    assert body["end_date"] == "2024-12-31"
    assert body["summary"] == [{"type": "expense", "total": 100.0, "count": 3}]
    assert [(item["category_name"], item["total"], item["count"]) for item in body["categories"]] == [
        ("Transport", 60.0, 1),
        ("Food", 40.0, 2),
    ]


def test_statistics_for_empty_period(client, alice):
    body = client.get(
        "/api/v1/bills/statistics",
        query_string={"year": 2020, "month": 2},
        headers=alice["headers"],
    ).get_json()

    assert body["summary"] == []
    assert body["categories"] == []
    assert body["end_date"] == "2020-02-29"


def test_statistics_ignore_deleted_and_foreign_bills(ledger, alice, bob, bill_factory):
    alice_id = alice["user"]["id"]
    kept = bill_factory(alice_id, amount=5)
    removed = bill_factory(alice_id, amount=50)
    bill_factory(bob["user"]["id"], amount=500)
    ledger.delete(alice_id, removed.id)

    stats = ledger.statistics(alice_id, period="month", year=2024, month=1)

    assert [(item.type, item.total, item.count) for item in stats.summary] == [("expense", 5.0, 1)]
    assert kept.amount == 5.0


def test_statistics_default_to_current_month(ledger, alice, bill_factory):
    today = datetime(2024, 1, 20)
    bill_factory(alice["user"]["id"], amount=8)

    stats = ledger.statistics(alice["user"]["id"], today=today)

    assert stats.window.start == datetime(2024, 1, 1)
    assert stats.summary[0].total == 8.0


@pytest.mark.parametrize(
    "params",
    [{"period": "week"}, {"month": "13"}, {"month": "0"}, {"year": "twenty"}],
)
def test_invalid_statistics_parameters_are_rejected(client, alice, params):
    response = client.get("/api/v1/bills/statistics", query_string=params, headers=alice["headers"])

    assert response.status_code == 400


# Value objects ---------------------------------------------------------------


@pytest.mark.parametrize(
    ("total", "limit", "pages"),
    [(0, 20, 0), (1, 20, 1), (20, 20, 1), (21, 20, 2), (45, 20, 3)],
)
def test_total_pages(total, limit, pages):
    assert Pagination(page=1, limit=limit, total=total).total_pages == pages


def test_december_window_rolls_into_next_year():
    window = StatisticsWindow.for_period("month", 2023, 12)

    assert window.start == datetime(2023, 12, 1)
    assert window.end == datetime(2024, 1, 1)
    assert window.last_day.isoformat() == "2023-12-31"


def test_search_folds_non_ascii_case(client, alice, bill_factory):
    user_id = alice["user"]["id"]
    bill_factory(user_id, merchant="Café Élan")
    bill_factory(user_id, merchant="Cafe Elan")

    body = _list(client, alice["headers"], search="élan")

    assert [bill["merchant"] for bill in body["bills"]] == ["Café Élan"]


def test_listing_accepts_trailing_slash(client, alice, bill_factory):
    bill_factory(alice["user"]["id"])

    response = client.get("/api/v1/bills/", headers=alice["headers"])

    assert response.status_code == 200
    assert response.get_json()["pagination"]["total"] == 1


@pytest.mark.parametrize(
    "params",
    [
        {"page": str(10**19)},
        {"page": str(2**63 // 100 + 1)},
        {"category_id": str(10**19)},
    ],
)
def test_out_of_range_integers_are_rejected(client, alice, params):
    response = client.get("/api/v1/bills", query_string=params, headers=alice["headers"])

    assert response.status_code == 400
    assert set(response.get_json()["details"]) == set(params)


def test_last_addressable_page_is_empty(client, alice, bill_factory):
    bill_factory(alice["user"]["id"])

    body = _list(client, alice["headers"], page=2**63 // 100, limit=100)

    assert body["bills"] == []
    assert body["pagination"]["total"] == 1
