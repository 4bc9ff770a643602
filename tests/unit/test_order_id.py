import re
from datetime import datetime
from decimal import Decimal

from checkout.payments import generate_order_id
from checkout.payments.order_id import random_suffix


NOW = datetime(2024, 3, 7, 9, 45)


def test_order_id_structure():
    order_id = generate_order_id("My Great Plan!!", Decimal("85.00"), NOW)
    prefix, rest = order_id.split("-", 1)
    # Espaces retirés, 10 caractères max, casse conservée
    assert prefix == "MyGreatPla"
    assert rest.startswith("07-03-2024-09-85-")
    assert "85" in order_id
    assert re.fullmatch(r"[0-9a-z]{6}", order_id.rsplit("-", 1)[1])


def test_order_id_strips_dots_and_whitespace():
    order_id = generate_order_id("Plan v2.0\tPro", Decimal("10"), NOW)
    assert order_id.startswith("Planv20Pro-")


def test_order_id_floors_amount():
    order_id = generate_order_id("Basic", Decimal("49.99"), NOW)
    assert order_id.split("-")[5] == "49"


def test_order_id_short_plan_name_not_padded():
    order_id = generate_order_id("Go", Decimal("5.50"), NOW)
    assert order_id.startswith("Go-07-03-2024-09-5-")


def test_order_ids_differ_between_calls():
    ids = {generate_order_id("Basic", Decimal("10"), NOW) for _ in range(50)}
    assert len(ids) > 1


def test_random_suffix_alphabet_and_length():
    for _ in range(100):
        assert re.fullmatch(r"[0-9a-z]{6}", random_suffix())
