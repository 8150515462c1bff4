import re
from datetime import datetime

import pytest

from gastronomy import (
    Cart,
    ErrorKind,
    Food,
    History,
    HistoryFileError,
    Meal,
    NullReferenceError,
    OrderRecord,
    Restaurant,
    ValidationError,
    seed_sample_menu,
)

LOG_LINE = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2} \| (.+?) \| (.*)$")


# cart
def test_cart_total_counts_duplicates(pizza_meal):
    salad_meal = Meal("Salad Meal", [Food("Tomato Salad", 5)])
    cart = Cart()
    for meal in (pizza_meal, salad_meal, pizza_meal):
        cart.add(meal)
    assert cart.total() == 35
    assert len(cart) == 3


def test_cart_rejects_missing_meal():
    cart = Cart()
    with pytest.raises(NullReferenceError):
        cart.add(None)
    assert len(cart) == 0


def test_cart_clear(pizza_meal, capsys):
    cart = Cart()
    cart.add(pizza_meal)
    cart.clear()
    assert cart.items == ()
    assert cart.total() == 0
    assert "cart cleared." in capsys.readouterr().out


def test_cart_show_empty(capsys):
    Cart().show()
    assert "cart empty." in capsys.readouterr().out


def test_cart_show_lists_meals(pizza_meal, capsys):
    cart = Cart()
    cart.add(pizza_meal)
    cart.add(pizza_meal)
    capsys.readouterr()
    cart.show()
    out = capsys.readouterr().out
    assert "1. Pizza Meal - " in out
    assert "2. Pizza Meal - " in out
    assert "30 AZN" in out


# history
def test_add_order_appends_without_touching_previous(pizza_meal):
    history = History()
    first = history.add_order([pizza_meal], 15)
    snapshot = (first.meals, first.total_price, first.timestamp)
    second = history.add_order([pizza_meal, pizza_meal], 30)
    assert len(history) == 2
    records = list(history)
    assert records[0] is first
    assert (records[0].meals, records[0].total_price, records[0].timestamp) == snapshot
    assert second.timestamp >= first.timestamp


def test_order_record_is_immutable(pizza_meal):
    record = OrderRecord((pizza_meal,), 15)
    with pytest.raises(AttributeError):
        record.total_price = 1


def test_order_record_copies_cart_contents(pizza_meal):
    cart = Cart()
    cart.add(pizza_meal)
    history = History()
    history.add_order(cart.items, cart.total())
    cart.clear()
    assert [m.name for m in next(iter(history)).meals] == ["Pizza Meal"]


def test_order_record_log_line(pizza_meal):
    record = OrderRecord((pizza_meal, pizza_meal), 30, datetime(2024, 1, 2, 3, 4, 5))
    assert record.to_line() == "2024-01-02 03:04:05 | 30 AZN | Pizza Meal Pizza Meal \n"


def test_order_record_log_line_keeps_fraction(pizza_meal):
    record = OrderRecord((pizza_meal,), 7.5, datetime(2024, 1, 2, 3, 4, 5))
    assert " | 7.5 AZN | " in record.to_line()


def test_history_lines_empty():
    assert list(History().lines()) == ["no orders yet."]


def test_history_lines_are_restartable(pizza_meal):
    history = History()
    history.add_order([pizza_meal, pizza_meal], 30)
    history.add_order([pizza_meal], 15)
    first = list(history.lines())
    assert first == list(history.lines())
    assert first[0] == "===== order history ====="
    assert first[1].startswith("order #1 - ")
    assert first[2] == "total price: 30 AZN"
    assert first[3:6] == ["items:", "  Pizza Meal", "  Pizza Meal"]
    assert any(line.startswith("order #2 - ") for line in first)


def test_show_all_orders_prints(pizza_meal, capsys):
    history = History()
    history.add_order([pizza_meal], 15)
    history.show_all_orders()
    out = capsys.readouterr().out
    assert "order #1" in out
    assert "total price: 15 AZN" in out


def test_save_to_file_appends(pizza_meal, history_path):
    history = History()
    history.add_order([pizza_meal, pizza_meal], 30)
    history.save_to_file(history_path)
    history.save_to_file(history_path)
    with open(history_path, encoding="utf-8") as f:
        lines = f.read().splitlines()
    assert len(lines) == 2
    for line in lines:
        m = LOG_LINE.match(line)
        assert m is not None
        assert m.group(1) == "30 AZN"
        assert m.group(2) == "Pizza Meal Pizza Meal "


def test_save_to_file_unwritable_path(pizza_meal, tmp_path):
    history = History()
    history.add_order([pizza_meal], 15)
    with pytest.raises(HistoryFileError) as exc:
        history.save_to_file(str(tmp_path))
    assert exc.value.kind is ErrorKind.IO


# restaurant
def test_restaurant_budget():
    restaurant = Restaurant()
    restaurant.add_budget(30)
    restaurant.add_budget(0)
    assert restaurant.budget == 30
    with pytest.raises(ValidationError):
        restaurant.add_budget(-1)
    assert restaurant.budget == 30


@pytest.mark.parametrize("amount", [float("nan"), float("inf")])
def test_restaurant_budget_rejects_non_finite(amount):
    restaurant = Restaurant()
    restaurant.add_budget(10)
    with pytest.raises(ValidationError):
        restaurant.add_budget(amount)
    assert restaurant.budget == 10


def test_restaurant_rejects_missing_references():
    restaurant = Restaurant()
    with pytest.raises(NullReferenceError):
        restaurant.add_meal(None)
    with pytest.raises(NullReferenceError):
        restaurant.add_ingredient(None)
    assert restaurant.meals == [] and restaurant.ingredients == []


def test_seed_sample_menu():
    restaurant = Restaurant()
    seed_sample_menu(restaurant)
    assert [m.name for m in restaurant.meals] == ["Salad Meal", "Pizza Meal", "Chicken Meal"]
    assert [m.total_price for m in restaurant.meals] == [5, 15, 20]
    assert [i.name for i in restaurant.ingredients] == ["Tomato", "Cheese", "Chicken"]
    assert [i.stock for i in restaurant.ingredients] == [10, 5, 8]


def test_lookup_by_number():
    restaurant = Restaurant()
    seed_sample_menu(restaurant)
    assert restaurant.meal_at(2).name == "Pizza Meal"
    assert restaurant.meal_at(0) is None
    assert restaurant.meal_at(4) is None
    assert restaurant.ingredient_at(3).name == "Chicken"
    assert restaurant.ingredient_at(9) is None


def test_show_meals(capsys):
    restaurant = Restaurant()
    seed_sample_menu(restaurant)
    restaurant.show_meals()
    out = capsys.readouterr().out
    assert "1. Salad Meal - " in out
    assert "2. Pizza Meal - " in out
    assert "15 AZN" in out
