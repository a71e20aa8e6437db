"""Tests for the menu catalog."""

import json

import pytest

from littletreat.errors import InitializationError
from littletreat.menu import MenuItem, load_menu, unit_display, visible_items


class TestMenuItem:
    def test_from_dict(self):
        item = MenuItem.from_dict({
            "id": "biryani",
            "name": "Chicken Biryani",
            "price": 100,
            "unit": "plate",
            "display": 1,
            "originalPrice": 120,
        })
        assert item.id == "biryani"
        assert item.price == 100.0
        assert item.unit == "plate"
        assert item.display is True
        assert item.original_price == 120.0
        assert item.emoji == ""

    def test_hidden_item(self):
        item = MenuItem.from_dict({"id": "x", "name": "X", "price": 1, "display": 0})
        assert item.display is False

    def test_missing_price(self):
        with pytest.raises(InitializationError, match="Invalid menu item"):
            MenuItem.from_dict({"id": "x", "name": "X"})

    def test_negative_price(self):
        with pytest.raises(InitializationError, match="negative"):
            MenuItem.from_dict({"id": "x", "name": "X", "price": -1})

    def test_frozen(self, menu_items):
        with pytest.raises(AttributeError):
            menu_items[0].price = 0


class TestLoadMenu:
    def test_load(self, menu_file):
        items = load_menu(menu_file)
        assert [i.id for i in items] == ["samosa", "biryani", "laddu"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(InitializationError):
            load_menu(tmp_path / "menu.json")

    def test_missing_menu_items_key(self, tmp_path):
        path = tmp_path / "menu.json"
        path.write_text(json.dumps({"items": []}))
        with pytest.raises(InitializationError, match="menuItems"):
            load_menu(path)

    def test_duplicate_ids(self, tmp_path):
        path = tmp_path / "menu.json"
        path.write_text(json.dumps({"menuItems": [
            {"id": "a", "name": "A", "price": 1},
            {"id": "a", "name": "A again", "price": 2},
        ]}))
        with pytest.raises(InitializationError, match="Duplicate"):
            load_menu(path)


def test_visible_items(menu_items):
    assert [i.id for i in visible_items(menu_items)] == ["samosa", "biryani"]


class TestUnitDisplay:
    @pytest.mark.parametrize(
        "unit,quantity,expected",
        [
            ("piece", 1, "pc"),
            ("piece", 3, "pcs"),
            ("kg", 1, "Kg"),
            ("kg", 2, "Kg"),
            ("plate", 1, "plate"),
            ("plate", 2, "plates"),
            ("dozen", 1, "dozen"),
            ("dozen", 4, "dozen"),
            ("PIECE", 2, "pcs"),
        ],
    )
    def test_known_units(self, unit, quantity, expected):
        assert unit_display(unit, quantity) == expected

    def test_unknown_unit_passes_through(self):
        assert unit_display("box", 3) == "box"
