"""Shared fixtures."""

import json

import pytest

from littletreat.menu import MenuItem

MENU_DOC = {
    "menuItems": [
        {
            "id": "samosa",
            "name": "Samosa",
            "description": "Crispy potato samosa",
            "price": 20,
            "unit": "piece",
            "display": 1,
            "emoji": "🥟",
        },
        {
            "id": "biryani",
            "name": "Chicken Biryani",
            "description": "Serves one",
            "price": 100,
            "unit": "plate",
            "display": 1,
            "emoji": "🍛",
            "originalPrice": 120,
        },
        {
            "id": "laddu",
            "name": "Besan Laddu",
            "description": "",
            "price": 50,
            "unit": "kg",
            "display": 0,
        },
    ]
}


@pytest.fixture
def menu_items():
    return [MenuItem.from_dict(entry) for entry in MENU_DOC["menuItems"]]


@pytest.fixture
def menu_file(tmp_path):
    path = tmp_path / "menu.json"
    path.write_text(json.dumps(MENU_DOC), encoding="utf-8")
    return path


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "deliveryDate": {"date": "25 Oct 2025", "dayName": "Saturday"},
        "deliveryTime": {"startTime": "18:00", "endTime": "20:00", "intervalMinutes": 30},
        "googleSheets": {
            "enabled": True,
            "method": "appsScript",
            "webAppUrl": "https://script.example/exec",
        },
    }), encoding="utf-8")
    return path
