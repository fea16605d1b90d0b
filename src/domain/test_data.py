"""
Booking test data domain model.

Fixed fixture values the booking scenario types into the UI: room and add-on
identifiers, guest details and payment card details.
"""

from dataclasses import dataclass, field
from typing import Any, Dict

from src.utils.logger import mask_card_number, mask_email


@dataclass(frozen=True)
class Room:
    """Bookable room as exposed by the room list (``room_item_id`` drives selectors)."""

    room_item_id: str
    name: str = ""


@dataclass(frozen=True)
class AddOn:
    """Rate-plan add-on, matched by its visible name."""

    name: str


@dataclass(frozen=True)
class GuestDetails:
    """
    Guest details entered on the checkout page.

    Attributes:
        first_name: Guest first name
        last_name: Guest last name
        email: Contact email
        phone: Contact phone number
        address: Free-text query typed into the address autocomplete
    """

    first_name: str
    last_name: str
    email: str
    phone: str
    address: str

    def __repr__(self) -> str:
        return (
            f"GuestDetails(first_name={self.first_name!r}, last_name={self.last_name!r}, "
            f"email={mask_email(self.email)!r})"
        )


@dataclass(frozen=True)
class CardDetails:
    """Payment card entered in the payment form."""

    card_number: str
    expiry: str
    cvc: str
    cardholder_name: str

    def __repr__(self) -> str:
        return (
            f"CardDetails(card_number={mask_card_number(self.card_number)!r}, "
            f"cardholder_name={self.cardholder_name!r})"
        )

    def sensitive_values(self) -> Dict[str, str]:
        """Values that must never reach the logs."""
        return {"card_number": self.card_number, "cvc": self.cvc}


@dataclass(frozen=True)
class BookingTestData:
    """
    Full set of fixture values for the booking scenario.

    Rooms and add-ons are keyed by a stable fixture name ("deluxe_king",
    "bed_and_breakfast") so tests do not depend on UI identifiers directly.
    """

    rooms: Dict[str, Room]
    add_ons: Dict[str, AddOn]
    guest_details: GuestDetails
    card_details: CardDetails
    extra_fields: Dict[str, Any] = field(default_factory=dict)

    @property
    def deluxe_king(self) -> Room:
        return self.rooms["deluxe_king"]

    @property
    def bed_and_breakfast(self) -> AddOn:
        return self.add_ons["bed_and_breakfast"]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BookingTestData":
        """
        Create BookingTestData from a parsed (already schema-validated) dictionary.

        Unknown top-level keys are kept in ``extra_fields``.

        Args:
            data: Dictionary with test data

        Returns:
            BookingTestData instance
        """
        core_fields = {"rooms", "add_ons", "guest_details", "card_details"}

        rooms = {key: Room(**value) for key, value in data["rooms"].items()}
        add_ons = {key: AddOn(**value) for key, value in data["add_ons"].items()}

        return cls(
            rooms=rooms,
            add_ons=add_ons,
            guest_details=GuestDetails(**data["guest_details"]),
            card_details=CardDetails(**data["card_details"]),
            extra_fields={k: v for k, v in data.items() if k not in core_fields},
        )
