#!/usr/bin/env python3.13

# gastronomy 🍽
# restaurant ordering console: ingredients -> foods -> meals -> cart -> history
#
# note: everything lives in memory except the order log, which is appended
# to order_history.txt on every checkout

import math
import signal
import sys
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Callable, Iterator, Sequence

from termcolor import cprint, colored
from colorama import just_fix_windows_console as enable_windows_ansi_interpretation

# fix windows terminal misinterpreting ansi escape sequences
enable_windows_ansi_interpretation()

# constants
CURRENCY = "AZN"
HISTORY_FILE = "order_history.txt"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
LOOP_PAUSE = 0.1
ROLE_PROMPT = "1. Admin 2. User: "

# helpers
def safe_int(value: str, minimum: int | None = None):
    """return int value or none if invalid / below minimum"""
    try:
        v = int(value)
        if minimum is not None and v < minimum:
            return None
        return v
    except ValueError:
        return None

def safe_float(value: str):
    """return finite float value or none if invalid"""
    try:
        v = float(value)
    except ValueError:
        return None
    return v if math.isfinite(v) else None

def format_money(amount: float) -> str:
    """plain price string, e.g. 15 AZN / 7.5 AZN"""
    return f"{amount:g} {CURRENCY}"

def color_money(amount: float) -> str:
    """format amount as green money string"""
    return colored(format_money(amount), "green")

def parse_boolean_input(prompt: str, handle_invalid: bool = False) -> bool:
    """parse y/n style input; optionally warn on invalid"""
    p = prompt.lower().strip()
    if p in ("y", "yes"):
        return True
    if p in ("n", "no"):
        return False
    if handle_invalid:
        cprint("invalid input, please try again.", "red")
    return False

def log_error(message: str):
    """write a red error line to stderr"""
    cprint(message, "red", file=sys.stderr)

# errors
class ErrorKind(Enum):
    """what went wrong, so callers can decide whether to continue"""
    VALIDATION = "validation"
    STOCK = "stock"
    NULL_REFERENCE = "null reference"
    INVALID_ROLE = "invalid role"
    IO = "io"

class GastronomyError(Exception):
    """base for every error raised by the domain model"""
    kind: ErrorKind

class ValidationError(GastronomyError):
    """empty name, negative field or non-positive amount"""
    kind = ErrorKind.VALIDATION

class StockError(GastronomyError):
    """not enough stock to reduce by the requested amount"""
    kind = ErrorKind.STOCK

class NullReferenceError(GastronomyError):
    """missing (or wrongly typed) meal / food / ingredient"""
    kind = ErrorKind.NULL_REFERENCE

class InvalidRoleError(GastronomyError):
    """role selector is neither admin nor user"""
    kind = ErrorKind.INVALID_ROLE

class HistoryFileError(GastronomyError):
    """order log could not be opened for append"""
    kind = ErrorKind.IO

def _require_name(value: str, what: str) -> str:
    if not isinstance(value, str) or not value:
        raise ValidationError(f"{what} name cannot be empty")
    return value

def _require_non_negative(value: float, what: str) -> float:
    if not math.isfinite(value) or value < 0:
        raise ValidationError(f"{what} must be a non-negative number")
    return value

def _require_positive(value: float, what: str) -> float:
    if not math.isfinite(value) or value <= 0:
        raise ValidationError(f"{what} must be a positive number")
    return value

def _require_instance(obj, cls: type, what: str):
    if not isinstance(obj, cls):
        raise NullReferenceError(f"{what} cannot be null")
    return obj

# domain models
class Ingredient:
    """stock item with nutrition per kg, stock on hand (kg) and price per kg"""
    def __init__(self, name: str, protein: float = 0, calories: float = 0, fat: float = 0,
                 carb: float = 0, vitamin: str | None = None, mineral: str | None = None,
                 stock: float = 0, price_per_kg: float = 0):
        self.name = name
        self.protein = protein
        self.calories = calories
        self.fat = fat
        self.carb = carb
        self.vitamin = vitamin
        self.mineral = mineral
        self.stock = stock
        self.price_per_kg = price_per_kg

    def __repr__(self):
        return f"Ingredient({self.name!r}, stock={self.stock:g})"

    @property
    def name(self) -> str: return self._name
    @name.setter
    def name(self, value: str): self._name = _require_name(value, "ingredient")

    @property
    def protein(self) -> float: return self._protein
    @protein.setter
    def protein(self, value: float): self._protein = _require_non_negative(value, "protein")

    @property
    def calories(self) -> float: return self._calories
    @calories.setter
    def calories(self, value: float): self._calories = _require_non_negative(value, "calories")

    @property
    def fat(self) -> float: return self._fat
    @fat.setter
    def fat(self, value: float): self._fat = _require_non_negative(value, "fat")

    @property
    def carb(self) -> float: return self._carb
    @carb.setter
    def carb(self, value: float): self._carb = _require_non_negative(value, "carb")

    @property
    def stock(self) -> float: return self._stock
    @stock.setter
    def stock(self, value: float): self._stock = _require_non_negative(value, "stock")

    @property
    def price_per_kg(self) -> float: return self._price_per_kg
    @price_per_kg.setter
    def price_per_kg(self, value: float): self._price_per_kg = _require_non_negative(value, "price")

    def add_stock(self, amount: float):
        """increase stock; amount must be positive"""
        self._stock += _require_positive(amount, "stock to add")

    def reduce_stock(self, amount: float):
        """decrease stock; fails (stock untouched) if amount <= 0 or more than on hand"""
        _require_positive(amount, "stock to reduce")
        if amount > self._stock:
            raise StockError(f"not enough {self.name} in stock ({self._stock:g} < {amount:g})")
        self._stock -= amount

class MeasureType(Enum):
    """how a food portion is measured"""
    COUNT = 1
    WEIGHT = 2
    VOLUME = 3

class Food:
    """sellable dish made from ingredient quantities"""
    def __init__(self, name: str, sale_price: float, description: str = "",
                 measure_type: MeasureType = MeasureType.COUNT, amount: float = 1):
        self.name = name
        self.sale_price = sale_price
        self.description = description
        self.measure_type = measure_type
        self.amount = amount
        self._ingredients: dict[Ingredient, float] = {}

    def __repr__(self):
        return f"Food({self.name!r}, {self.sale_price:g})"

    @property
    def name(self) -> str: return self._name
    @name.setter
    def name(self, value: str): self._name = _require_name(value, "food")

    @property
    def sale_price(self) -> float: return self._sale_price
    @sale_price.setter
    def sale_price(self, value: float): self._sale_price = _require_non_negative(value, "food price")

    @property
    def measure_type(self) -> MeasureType: return self._measure_type
    @measure_type.setter
    def measure_type(self, value):
        try:
            self._measure_type = MeasureType(value)
        except ValueError:
            raise ValidationError(f"unknown measure type {value!r}") from None

    @property
    def amount(self) -> float: return self._amount
    @amount.setter
    def amount(self, value: float): self._amount = _require_positive(value, "food amount")

    @property
    def ingredients(self):
        """read-only view of ingredient -> required quantity"""
        return MappingProxyType(self._ingredients)

    def add_ingredient(self, ingredient: Ingredient, quantity: float):
        """set required quantity of an ingredient (replaces any previous quantity)"""
        _require_instance(ingredient, Ingredient, "ingredient")
        _require_positive(quantity, "ingredient quantity")
        self._ingredients[ingredient] = quantity

class Meal:
    """named bundle of foods, priced as the sum of its foods"""
    def __init__(self, name: str, foods: Sequence[Food] = ()):
        self.name = name
        self._foods: list[Food] = []
        for f in foods:
            self.add_food(f)

    def __repr__(self):
        return f"Meal({self.name!r}, {[f.name for f in self._foods]})"

    @property
    def name(self) -> str: return self._name
    @name.setter
    def name(self, value: str): self._name = _require_name(value, "meal")

    @property
    def foods(self) -> tuple[Food, ...]:
        return tuple(self._foods)

    def add_food(self, food: Food):
        """append a food (duplicates count twice)"""
        self._foods.append(_require_instance(food, Food, "food"))

    @property
    def total_price(self) -> float:
        """current sum of food sale prices (not cached)"""
        return sum(f.sale_price for f in self._foods)

# order history
@dataclass(frozen=True)
class OrderRecord:
    """one completed checkout"""
    meals: tuple[Meal, ...]
    total_price: float
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def local_time(self) -> str:
        return self.timestamp.strftime(TIMESTAMP_FORMAT)

    def to_line(self) -> str:
        """order log line: time | total AZN | meal meal ..."""
        names = "".join(f"{m.name} " for m in self.meals)
        return f"{self.local_time} | {format_money(self.total_price)} | {names}\n"

class History:
    """append-only list of a user's orders"""
    def __init__(self):
        self._orders: list[OrderRecord] = []

    def __len__(self):
        return len(self._orders)

    def __iter__(self) -> Iterator[OrderRecord]:
        return iter(tuple(self._orders))

    def add_order(self, meals: Sequence[Meal], total_price: float) -> OrderRecord:
        """record an order with the current time"""
        record = OrderRecord(tuple(meals), total_price)
        self._orders.append(record)
        return record

    def lines(self) -> Iterator[str]:
        """lazily render all orders, oldest first (fresh generator per call)"""
        if not self._orders:
            yield "no orders yet."
            return
        yield "===== order history ====="
        for i, order in enumerate(self._orders, start=1):
            yield f"order #{i} - {order.local_time}"
            yield f"total price: {format_money(order.total_price)}"
            yield "items:"
            for meal in order.meals:
                yield f"  {meal.name}"
            yield "------------------------"

    def show_all_orders(self):
        """print every order"""
        for line in self.lines():
            print(line)

    def save_to_file(self, path: str = HISTORY_FILE):
        """append one line per order to path (file created if missing)"""
        try:
            with open(path, "a", encoding="utf-8") as f:
                for order in self._orders:
                    f.write(order.to_line())
        except OSError as e:
            raise HistoryFileError(f"cannot open {path} for writing: {e}") from e

# accounts
class Role(Enum):
    """account roles; values match the login/register prompt numbers"""
    ADMIN = 1
    USER = 2

    @property
    def label(self) -> str:
        return self.name.capitalize()

def parse_role(selector) -> Role:
    """turn a Role / 1 / 2 / '1' / '2' into a Role or raise InvalidRoleError"""
    if isinstance(selector, Role):
        return selector
    value = safe_int(str(selector).strip())
    try:
        return Role(value)
    except ValueError:
        raise InvalidRoleError("invalid role selected") from None

@dataclass
class Person(ABC):
    """abstract account identity"""
    first_name: str
    last_name: str
    email: str
    password: str  # plain text, compared as-is

    @property
    @abstractmethod
    def role(self) -> Role: ...

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def matches(self, email: str, password: str) -> bool:
        """exact, case-sensitive credential check"""
        return email == self.email and password == self.password

@dataclass
class Admin(Person):
    """restaurant admin"""
    @property
    def role(self) -> Role: return Role.ADMIN

@dataclass
class User(Person):
    """customer with an order history"""
    history: History = field(default_factory=History, repr=False, compare=False)

    @property
    def role(self) -> Role: return Role.USER

    def add_order(self, meals: Sequence[Meal], total_price: float) -> OrderRecord:
        return self.history.add_order(meals, total_price)

    def show_history(self):
        self.history.show_all_orders()

    def save_history_to_file(self, path: str = HISTORY_FILE):
        self.history.save_to_file(path)

class AuthSystem:
    """one admin slot, one user slot and the role currently logged in"""
    def __init__(self):
        self.admin: Admin | None = None
        self.user: User | None = None
        self.current_role: Role | None = None

    @property
    def logged_in(self) -> bool:
        return self.current_role is not None

    def is_admin(self) -> bool:
        """true if current session is the admin"""
        return self.current_role is Role.ADMIN

    def require_admin(self) -> bool:
        """guard for admin-only actions"""
        if not self.logged_in:
            cprint("please login first", "red"); return False
        if not self.is_admin():
            cprint("admin privileges required", "red"); return False
        return True

    def account_for(self, role: Role) -> Person | None:
        match role:
            case Role.ADMIN:
                return self.admin
            case Role.USER:
                return self.user

    def register(self, role=None, first_name: str | None = None, last_name: str | None = None,
                 email: str | None = None, password: str | None = None) -> Person:
        """create (or replace) the account for a role; does not log in"""
        if role is None:
            role = input(colored(ROLE_PROMPT, "magenta")).strip()
        if first_name is None:
            first_name = input(colored("first: ", "magenta")).strip()
        if last_name is None:
            last_name = input(colored("last: ", "magenta")).strip()
        if email is None:
            email = input(colored("email: ", "magenta")).strip()
        if password is None:
            password = input(colored("password: ", "magenta")).strip()
        role = parse_role(role)
        match role:
            case Role.ADMIN:
                account = self.admin = Admin(first_name, last_name, email, password)
            case Role.USER:
                account = self.user = User(first_name, last_name, email, password)
        cprint("registered!", "green")
        return account

    def login(self, role=None, email: str | None = None, password: str | None = None) -> bool:
        """log in if role, email and password match the registered account"""
        if role is None:
            role = input(colored(ROLE_PROMPT, "magenta")).strip()
        role = parse_role(role)
        if email is None:
            email = input(colored("email: ", "magenta")).strip()
        if password is None:
            password = input(colored("password: ", "magenta")).strip()
        account = self.account_for(role)
        if account is None or not account.matches(email, password):
            cprint("wrong credentials", "red")
            return False
        self.current_role = role
        prefix = "admin: " if role is Role.ADMIN else ""
        cprint(f"logged in as {prefix}{colored(account.full_name or account.email, 'yellow', attrs=['bold'])}", "green")
        return True

    def logout(self):
        """back to logged out"""
        self.current_role = None
        cprint("logged out.", "green")

# cart / restaurant
class Cart:
    """meals picked by the user before checkout"""
    def __init__(self):
        self._items: list[Meal] = []

    def __len__(self):
        return len(self._items)

    @property
    def items(self) -> tuple[Meal, ...]:
        return tuple(self._items)

    def add(self, meal: Meal):
        self._items.append(_require_instance(meal, Meal, "meal"))
        cprint("added to cart.", "green")

    def clear(self):
        self._items.clear()
        cprint("cart cleared.", "green")

    def total(self) -> float:
        return sum(m.total_price for m in self._items)

    def show(self):
        """print cart contents and total"""
        if not self._items:
            cprint("cart empty.", "yellow"); return
        cprint("===== cart =====", None, attrs=["bold"])
        for i, meal in enumerate(self._items, start=1):
            print(f"{i}. {meal.name} - {color_money(meal.total_price)}")
        print(f"total: {color_money(self.total())}")

class Restaurant:
    """owns every meal and ingredient, and the running budget"""
    def __init__(self):
        self.meals: list[Meal] = []
        self.ingredients: list[Ingredient] = []
        self.budget: float = 0.0

    def add_meal(self, meal: Meal):
        self.meals.append(_require_instance(meal, Meal, "meal"))

    def add_ingredient(self, ingredient: Ingredient):
        self.ingredients.append(_require_instance(ingredient, Ingredient, "ingredient"))

    def add_budget(self, amount: float):
        """credit revenue; negative amounts rejected"""
        self.budget += _require_non_negative(amount, "budget")

    def meal_at(self, number: int) -> Meal | None:
        """meal by 1-based menu number, or none"""
        if 1 <= number <= len(self.meals):
            return self.meals[number - 1]
        return None

    def ingredient_at(self, number: int) -> Ingredient | None:
        """ingredient by 1-based number, or none"""
        if 1 <= number <= len(self.ingredients):
            return self.ingredients[number - 1]
        return None

    def show_meals(self):
        cprint("===== menu =====", None, attrs=["bold"])
        if not self.meals:
            cprint("menu empty", "red"); return
        for i, meal in enumerate(self.meals, start=1):
            print(f"{i}. {meal.name} - {color_money(meal.total_price)}")

    def show_ingredients(self):
        cprint("===== ingredients =====", None, attrs=["bold"])
        if not self.ingredients:
            cprint("no ingredients", "red"); return
        for i, ing in enumerate(self.ingredients, start=1):
            print(f"{i}. {ing.name} - stock {ing.stock:g} kg @ {color_money(ing.price_per_kg)}/kg")

def seed_sample_menu(restaurant: Restaurant):
    """load the default ingredients, foods and meals"""
    tomato = Ingredient("Tomato", 1, 20, 0, 4, stock=10, price_per_kg=2)
    cheese = Ingredient("Cheese", 25, 400, 30, 5, stock=5, price_per_kg=10)
    chicken = Ingredient("Chicken", 20, 200, 10, 0, stock=8, price_per_kg=7)

    salad = Food("Tomato Salad", 5, "Fresh tomato salad")
    salad.add_ingredient(tomato, 0.2)
    pizza = Food("Cheese Pizza", 15, "Extra cheese pizza")
    pizza.add_ingredient(cheese, 0.1)
    grilled = Food("Grilled Chicken", 20, "Grilled chicken")
    grilled.add_ingredient(chicken, 0.5)

    for ing in (tomato, cheese, chicken):
        restaurant.add_ingredient(ing)
    restaurant.add_meal(Meal("Salad Meal", [salad]))
    restaurant.add_meal(Meal("Pizza Meal", [pizza]))
    restaurant.add_meal(Meal("Chicken Meal", [grilled]))

# order management
class OrderManager:
    """cart, checkout, history and admin stock actions for the logged-in role"""
    def __init__(self, restaurant: Restaurant, auth: AuthSystem, cart: Cart | None = None,
                 history_path: str = HISTORY_FILE):
        self.restaurant = restaurant
        self.auth = auth
        self.cart = cart if cart is not None else Cart()
        self.history_path = history_path

    def show_meals(self):
        self.restaurant.show_meals()

    def add_to_cart(self, number: str | None = None):
        """add a meal to the cart by menu number"""
        if number is None:
            number = input("meal number: ").strip()
        n = safe_int(number, minimum=1)
        meal = self.restaurant.meal_at(n) if n is not None else None
        if meal is None:
            cprint("invalid meal number", "red"); return
        self.cart.add(meal)

    def show_cart(self):
        self.cart.show()

    def clear_cart(self):
        self.cart.clear()

    def checkout(self, confirm: str | None = None) -> bool:
        """confirm and place the cart as an order for the logged-in user"""
        user = self.auth.user
        if self.auth.current_role is not Role.USER or user is None:
            cprint("please login as a user first", "red"); return False
        if not len(self.cart):
            cprint("cart empty, nothing to checkout", "yellow"); return False
        total = self.cart.total()
        if confirm is None:
            confirm = input(f"total {color_money(total)}. confirm? (y/N): ")
        if not parse_boolean_input(confirm):
            cprint("checkout cancelled", "yellow"); return False
        # stock is not drawn down for the foods sold, only the budget moves
        user.add_order(self.cart.items, total)
        self.restaurant.add_budget(total)
        self.cart.clear()
        # order, budget and cart are settled before the log is touched
        user.save_history_to_file(self.history_path)
        cprint("order placed!", "green")
        return True

    def show_history(self):
        if self.auth.user is None:
            cprint("no user registered", "red"); return
        self.auth.user.show_history()

    # admin
    def show_budget(self):
        if not self.auth.require_admin():
            return
        print(f"budget: {color_money(self.restaurant.budget)}")

    def show_ingredients(self):
        if not self.auth.require_admin():
            return
        self.restaurant.show_ingredients()

    def restock(self, number: str | None = None, amount: str | None = None):
        """add stock to an ingredient picked by number"""
        if not self.auth.require_admin():
            return
        if number is None:
            self.restaurant.show_ingredients()
            number = input("ingredient number: ").strip()
        n = safe_int(number, minimum=1)
        ingredient = self.restaurant.ingredient_at(n) if n is not None else None
        if ingredient is None:
            cprint("invalid ingredient number", "red"); return
        if amount is None:
            amount = input("amount (kg): ").strip()
        qty = safe_float(amount)
        if qty is None:
            cprint("invalid amount", "red"); return
        ingredient.add_stock(qty)
        cprint(f"{ingredient.name} stock is now {ingredient.stock:g} kg", "green")

# menu infrastructure
class Command:
    """bind a numbered menu entry to a function"""
    def __init__(self, name: str, function: Callable):
        self.name = name
        self._fn = function

    def execute(self):
        return self._fn()

class Menu:
    """numbered menu, e.g. '1.Login 2.Register 3.Exit: '"""
    def __init__(self, commands: list[Command]):
        self.commands = commands

    @property
    def prompt(self) -> str:
        return " ".join(f"{i}.{c.name}" for i, c in enumerate(self.commands, start=1)) + ": "

    def choose(self, raw: str):
        """run the command for a 1-based choice"""
        idx = safe_int(raw.strip(), minimum=1)
        if idx is None or idx > len(self.commands):
            cprint("invalid option", "red"); return None
        return self.commands[idx - 1].execute()

# application wiring
class Application:
    """bootstrap objects & run the menu loop"""
    def __init__(self, history_path: str = HISTORY_FILE, seed: bool = True):
        self.restaurant = Restaurant()
        if seed:
            seed_sample_menu(self.restaurant)
        self.auth = AuthSystem()
        self.order_manager = OrderManager(self.restaurant, self.auth, history_path=history_path)
        self.running = True

        self.guest_menu = Menu([
            Command("Login", self.auth.login),
            Command("Register", self.auth.register),
            Command("Exit", self.exit),
        ])
        self.admin_menu = Menu([
            Command("View Meals", self.order_manager.show_meals),
            Command("View Budget", self.order_manager.show_budget),
            Command("View Ingredients", self.order_manager.show_ingredients),
            Command("Restock Ingredient", self.order_manager.restock),
            Command("Logout", self.auth.logout),
        ])
        self.user_menu = Menu([
            Command("View Meals", self.order_manager.show_meals),
            Command("Add to Cart", self.order_manager.add_to_cart),
            Command("View Cart", self.order_manager.show_cart),
            Command("Clear Cart", self.order_manager.clear_cart),
            Command("Checkout", self.order_manager.checkout),
            Command("Order History", self.order_manager.show_history),
            Command("Logout", self.auth.logout),
        ])

    def current_menu(self) -> Menu:
        match self.auth.current_role:
            case Role.ADMIN:
                return self.admin_menu
            case Role.USER:
                return self.user_menu
            case _:
                return self.guest_menu

    def exit(self):
        cprint("okay, see ya!", "green")
        self.running = False

    def step(self):
        """show the menu for the current role and run one choice"""
        menu = self.current_menu()
        raw = input(colored(menu.prompt, "blue"))
        menu.choose(raw)

    def run(self) -> int:
        """main loop; returns exit status"""
        cprint("welcome to gastronomy! 🍽", "green", attrs=["bold"])
        while self.running:
            try:
                self.step()
            except EOFError:
                print()
                break
            except GastronomyError as e:
                log_error(f"main loop error: {e}")
            time.sleep(LOOP_PAUSE)
        return 0

# signal handler
class SignalHandler:
    """custom ctrl+c handler"""
    @staticmethod
    def sigint(_, __):
        """handle ctrl+c"""
        cprint("\nnext time, use exit!", "yellow")
        sys.exit(0)

# entry point
def main() -> int:
    """entrypoint wrapper; always exits 0"""
    signal.signal(signal.SIGINT, SignalHandler.sigint)
    try:
        return Application().run()
    except Exception as e:
        log_error(f"fatal error: {e}")
        return 0

if __name__ == "__main__":
    sys.exit(main())
