import pytest
from pydantic import ValidationError

from agents.bulk_pricing import BulkPriceUpdater, percent_change, select_for_update
from models.enums import DemandTrend
from models.pricing import PriceSuggestion, PriceUpdate, PriceUpdateRequest


def _suggestion(book_id, current, suggested):
    return PriceSuggestion(
        book_id=book_id,
        current_price=current,
        suggested_price=suggested,
        percent_change=percent_change(current, suggested),
        demand_trend=DemandTrend.STABLE,
    )


def test_percent_change_rounds_to_one_decimal():
    assert percent_change(10.0, 12.0) == 20.0
    assert percent_change(30.0, 20.0) == -33.3


def test_apply_skips_unknown_books(catalog, book_data):
    book = catalog.create_book(book_data(price=10.0))
    updater = BulkPriceUpdater(catalog)

    result = updater.apply(
        [
            PriceUpdate(book_id=book.id, old_price=10.0, new_price=12.0),
            PriceUpdate(book_id=999, old_price=5.0, new_price=6.0),
        ]
    )

    assert result.count == 1
    assert result.skipped == [999]
    applied = result.updated[0]
    assert applied.id == book.id
    assert applied.percent_change == 20.0
    assert catalog.get_book(book.id).price == 12.0


def test_apply_uses_current_price_when_old_price_missing(catalog, book_data):
    book = catalog.create_book(book_data(price=25.0))
    result = BulkPriceUpdater(catalog).apply([PriceUpdate(book_id=book.id, new_price=20.0)])
    assert result.updated[0].old_price == 25.0
    assert result.updated[0].percent_change == -20.0


def test_duplicate_updates_last_one_wins(catalog, book_data):
    book = catalog.create_book(book_data(price=10.0))
    result = BulkPriceUpdater(catalog).apply(
        [
            PriceUpdate(book_id=book.id, new_price=11.0),
            PriceUpdate(book_id=book.id, new_price=13.0),
        ]
    )
    assert result.count == 1
    assert catalog.get_book(book.id).price == 13.0


def test_raising_above_list_price_clears_discount(catalog, book_data):
    book = catalog.create_book(book_data(price=10.0, original_price=12.0))
    BulkPriceUpdater(catalog).apply([PriceUpdate(book_id=book.id, new_price=15.0)])
    updated = catalog.get_book(book.id)
    assert updated.price == 15.0
    assert updated.original_price is None


def test_failure_on_one_book_does_not_stop_others(catalog, book_data, monkeypatch):
    bad = catalog.create_book(book_data(title="Bad"))
    good = catalog.create_book(book_data(title="Good"))
    original_update = catalog.update_book

    def flaky_update(book_id, changes):
        if book_id == bad.id:
            raise ValueError("write failed")
        return original_update(book_id, changes)

    monkeypatch.setattr(catalog, "update_book", flaky_update)
    result = BulkPriceUpdater(catalog).apply(
        [
            PriceUpdate(book_id=bad.id, new_price=30.0),
            PriceUpdate(book_id=good.id, new_price=30.0),
        ]
    )

    assert [u.id for u in result.updated] == [good.id]
    assert result.skipped == [bad.id]


def test_update_request_accepts_id_alias():
    request = PriceUpdateRequest.model_validate(
        {"priceUpdates": [{"id": 1, "oldPrice": 10, "newPrice": 12}, {"bookId": 2, "newPrice": 5}]}
    )
    assert [u.book_id for u in request.price_updates] == [1, 2]


@pytest.mark.parametrize("new_price", [0, -1])
def test_update_rejects_non_positive_price(new_price):
    with pytest.raises(ValidationError):
        PriceUpdate(book_id=1, new_price=new_price)


def test_select_for_update_filters_and_orders():
    suggestions = [
        _suggestion(1, 20.0, 20.5),  # 2.5%
        _suggestion(2, 10.0, 11.0),  # 10%, delta 1.0
        _suggestion(3, 40.0, 34.0),  # -15%, delta 6.0
    ]
    updates = select_for_update(suggestions, min_percent_change=5.0)
    assert [u.book_id for u in updates] == [3, 2]
    assert updates[0].old_price == 40.0
    assert updates[0].new_price == 34.0
