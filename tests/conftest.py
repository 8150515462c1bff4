import builtins

import pytest

import gastronomy
from gastronomy import Food, Ingredient, Meal


@pytest.fixture(autouse=True)
def no_pause(monkeypatch):
    """skip the pacing sleep in the menu loop"""
    monkeypatch.setattr(gastronomy, "LOOP_PAUSE", 0)


@pytest.fixture
def feed_input(monkeypatch):
    """script console input; EOFError once the script runs out"""
    def _feed(*answers: str):
        remaining = iter(answers)

        def fake_input(prompt=""):
            try:
                return next(remaining)
            except StopIteration:
                raise EOFError from None

        monkeypatch.setattr(builtins, "input", fake_input)
    return _feed


@pytest.fixture
def cheese():
    return Ingredient("Cheese", 25, 400, 30, 5, stock=5, price_per_kg=10)


@pytest.fixture
def pizza(cheese):
    food = Food("Cheese Pizza", 15, "Extra cheese pizza")
    food.add_ingredient(cheese, 0.1)
    return food


@pytest.fixture
def pizza_meal(pizza):
    return Meal("Pizza Meal", [pizza])


@pytest.fixture
def history_path(tmp_path):
    return str(tmp_path / "order_history.txt")
