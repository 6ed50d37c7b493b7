import pytest
from werkzeug.datastructures import ImmutableMultiDict

from pharma.business.errors import InvalidOrderInput
from pharma.business.ordering import OrderLineRequest, items_from_form, normalize_order_items
from pharma.business.ordering.order_items import coerce_int


def test_single_object_becomes_one_line():
    assert normalize_order_items({'medicine_id': 4, 'quantity': 2}) == [OrderLineRequest(4, 2)]


def test_list_and_camel_case_key():
    lines = normalize_order_items([
        {'medicine_id': '1', 'quantity': '3'},
        {'medicineId': 2, 'quantity': 1},
    ])
    assert lines == [OrderLineRequest(1, 3), OrderLineRequest(2, 1)]


def test_non_actionable_lines_are_kept_but_flagged():
    lines = normalize_order_items([
        {'medicine_id': 1, 'quantity': 2},
        {'medicine_id': 1, 'quantity': -4},
        {'quantity': 3},
    ])
    assert [line.is_actionable for line in lines] == [True, False, False]


@pytest.mark.parametrize('payload', [None, '', [], 'aspirin', 12])
def test_missing_or_malformed_payload(payload):
    with pytest.raises(InvalidOrderInput):
        normalize_order_items(payload)


def test_item_that_is_not_an_object():
    with pytest.raises(InvalidOrderInput) as excinfo:
        normalize_order_items([{'medicine_id': 1, 'quantity': 1}, 'oops'])
    assert 'item 2' in str(excinfo.value)


def test_all_lines_skippable_is_invalid():
    with pytest.raises(InvalidOrderInput):
        normalize_order_items([{'medicine_id': 1, 'quantity': 0}, {'medicine_id': None, 'quantity': 5}])


@pytest.mark.parametrize('value, expected', [
    ('7', 7),
    (' 8 ', 8),
    ('2.9', 2),
    (3.7, 3),
    ('abc', 0),
    (None, 0),
    (True, 0),
    ('inf', 0),
    ('1e400', 0),
    (float('inf'), 0),
    (float('nan'), 0),
    (str(10 ** 30), 0),
    (10 ** 30, 0),
    (-(10 ** 30), 0),
    ('2147483647', 2147483647),
])
def test_coerce_int(value, expected):
    assert coerce_int(value) == expected


def test_items_from_form_pairs_rows():
    form = ImmutableMultiDict([
        ('medicine_id', '3'), ('quantity', '2'),
        ('medicine_id', ''), ('quantity', '0'),
        ('medicine_id', '5'), ('quantity', '1'),
    ])
    assert items_from_form(form) == [
        {'medicine_id': '3', 'quantity': '2'},
        {'medicine_id': '', 'quantity': '0'},
        {'medicine_id': '5', 'quantity': '1'},
    ]


@pytest.mark.parametrize('payload', [
    {'medicine_id': 1, 'quantity': 'inf'},
    {'medicine_id': 1, 'quantity': float('inf')},
    {'medicine_id': 1, 'quantity': '1e400'},
    {'medicine_id': str(10 ** 30), 'quantity': 1},
])
def test_out_of_range_numbers_make_a_line_non_actionable(payload):
    with pytest.raises(InvalidOrderInput):
        normalize_order_items(payload)
