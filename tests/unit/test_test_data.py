"""
Unit tests for booking test data domain model (src/domain/test_data.py)
"""

import pytest

from src.domain.test_data import AddOn, BookingTestData, CardDetails, GuestDetails, Room

RAW = {
    "rooms": {
        "deluxe_king": {"room_item_id": "deluxe-king", "name": "Deluxe King Room"},
        "standard_twin": {"room_item_id": "standard-twin"},
    },
    "add_ons": {"bed_and_breakfast": {"name": "Bed and Breakfast"}},
    "guest_details": {
        "first_name": "Test",
        "last_name": "Guest",
        "email": "test.guest@example.com",
        "phone": "+44 20 7946 0958",
        "address": "10 Downing Street",
    },
    "card_details": {
        "card_number": "4242 4242 4242 4242",
        "expiry": "12/30",
        "cvc": "123",
        "cardholder_name": "Test Guest",
    },
    "locale": "en-US",
}


def test_from_dict_builds_nested_models():
    data = BookingTestData.from_dict(RAW)

    assert data.deluxe_king == Room(room_item_id="deluxe-king", name="Deluxe King Room")
    assert data.rooms["standard_twin"].name == ""
    assert data.bed_and_breakfast == AddOn(name="Bed and Breakfast")
    assert isinstance(data.guest_details, GuestDetails)
    assert data.guest_details.address == "10 Downing Street"
    assert isinstance(data.card_details, CardDetails)


def test_from_dict_keeps_unknown_top_level_keys():
    data = BookingTestData.from_dict(RAW)
    assert data.extra_fields == {"locale": "en-US"}


def test_missing_fixture_room_raises_key_error():
    raw = dict(RAW, rooms={"standard_twin": {"room_item_id": "standard-twin"}})
    data = BookingTestData.from_dict(raw)

    with pytest.raises(KeyError):
        data.deluxe_king


def test_repr_masks_sensitive_values():
    data = BookingTestData.from_dict(RAW)

    card_repr = repr(data.card_details)
    guest_repr = repr(data.guest_details)

    assert "4242 4242 4242 4242" not in card_repr
    assert "**** **** **** 4242" in card_repr
    assert "123" not in card_repr
    assert "test.guest@example.com" not in guest_repr
    assert "t***@example.com" in guest_repr


def test_sensitive_values():
    card = BookingTestData.from_dict(RAW).card_details
    assert card.sensitive_values() == {"card_number": "4242 4242 4242 4242", "cvc": "123"}
