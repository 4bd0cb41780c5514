"""
Name: Address Parsing Tests

Responsibilities:
  - Free-text recipient lists split on ',' and ';'
  - Syntax validation via EmailStr
"""

import pytest

from mail_scheduler.crosscutting.exceptions import ValidationError
from mail_scheduler.domain.value_objects import (
    is_valid_address,
    split_addresses,
    validate_address,
    validate_address_list,
)

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, []),
        ("", []),
        ("a@x.com", ["a@x.com"]),
        ("a@x.com, b@y.com; c@z.com", ["a@x.com", "b@y.com", "c@z.com"]),
        (" a@x.com ;; ,b@y.com ", ["a@x.com", "b@y.com"]),
        (["a@x.com", " b@y.com", ""], ["a@x.com", "b@y.com"]),
        (["a@x.com; b@y.com"], ["a@x.com", "b@y.com"]),
    ],
)
def test_split_addresses(raw, expected):
    assert split_addresses(raw) == expected


def test_order_is_preserved():
    assert split_addresses("z@x.com,a@x.com,m@x.com") == [
        "z@x.com",
        "a@x.com",
        "m@x.com",
    ]


@pytest.mark.parametrize("address", ["a@x.com", "first.last+tag@example.co.uk"])
def test_valid_addresses(address):
    assert is_valid_address(address)


@pytest.mark.parametrize("address", ["", "plainaddress", "a@", "@x.com", "a b@x.com"])
def test_invalid_addresses(address):
    assert not is_valid_address(address)


def test_validate_address_strips():
    assert validate_address("  a@x.com ", field="sender") == "a@x.com"


def test_validate_address_reports_field():
    with pytest.raises(ValidationError) as exc_info:
        validate_address("nope", field="sender")
    assert exc_info.value.field == "sender"


def test_required_list_cannot_be_empty():
    with pytest.raises(ValidationError, match="At least one recipient"):
        validate_address_list(" ; , ", field="recipients", required=True)


def test_optional_list_may_be_empty():
    assert validate_address_list(None, field="cc", required=False) == []


def test_any_invalid_entry_fails_the_list():
    with pytest.raises(ValidationError) as exc_info:
        validate_address_list("a@x.com; broken", field="recipients", required=True)
    assert exc_info.value.field == "recipients"
