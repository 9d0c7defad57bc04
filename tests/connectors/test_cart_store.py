import pytest

from models.errors import CartItemNotFoundError


def test_add_item_merges_same_book(carts):
    first = carts.add_item("s1", book_id=1, quantity=1)
    merged = carts.add_item("s1", book_id=1, quantity=2)
    assert merged.id == first.id
    assert merged.quantity == 3
    assert len(carts.get_items("s1")) == 1


def test_sessions_are_isolated(carts):
    carts.add_item("s1", 1)
    carts.add_item("s2", 1)
    assert len(carts.get_items("s1")) == 1
    assert carts.get_items("s3") == []


def test_update_quantity(carts):
    item = carts.add_item("s1", 4)
    assert carts.update_quantity(item.id, 6).quantity == 6
    assert carts.get_item(item.id).quantity == 6


def test_update_quantity_to_zero_removes_line(carts):
    item = carts.add_item("s1", 4)
    assert carts.update_quantity(item.id, 0) is None
    assert carts.get_item(item.id) is None


def test_update_unknown_item_raises(carts):
    with pytest.raises(CartItemNotFoundError):
        carts.update_quantity(123, 1)


def test_remove_and_clear(carts):
    keep = carts.add_item("s2", 1)
    item = carts.add_item("s1", 1)
    carts.add_item("s1", 2)

    assert carts.remove_item(item.id) is True
    assert carts.remove_item(item.id) is False
    assert carts.clear("s1") == 1
    assert carts.get_items("s1") == []
    assert carts.get_item(keep.id) is not None
