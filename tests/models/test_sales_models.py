from datetime import datetime

from models.sales import SaleRecord, SalesHistory


def _record(record_id, book_id, quantity, day):
    return SaleRecord(
        id=record_id,
        book_id=book_id,
        quantity=quantity,
        total_amount=quantity * 10.0,
        date=datetime(2026, 2, day, 10),
    )


def test_history_from_records_ignores_other_books():
    records = [_record(1, 1, 2, 1), _record(2, 2, 8, 1), _record(3, 1, 1, 3)]
    history = SalesHistory.from_records(1, records)
    assert history.daily_quantities == [2, 1]
    assert history.average_daily_sales() == 1.5


def test_history_sorts_days():
    records = [_record(1, 1, 4, 9), _record(2, 1, 1, 2)]
    assert SalesHistory.from_records(1, records).daily_quantities == [1, 4]


def test_history_zero_points():
    records = [_record(1, 1, 4, 9)]
    assert SalesHistory.from_records(1, records, max_points=0).daily_quantities == []


def test_sale_record_serializes_camel_case():
    dumped = _record(1, 3, 2, 5).model_dump(by_alias=True)
    assert dumped["bookId"] == 3
    assert dumped["totalAmount"] == 20.0
