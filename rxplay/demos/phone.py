from typing import Iterable, Optional

from rxplay.publisher import Publisher

CONTACTS = {
    "603-555-1234": "Florent",
    "408-555-4321": "Marin",
    "217-555-1212": "Scott",
    "212-555-3434": "Shai",
}

KEYPAD = {
    "abc": 2,
    "def": 3,
    "ghi": 4,
    "jkl": 5,
    "mno": 6,
    "pqrs": 7,
    "tuv": 8,
    "wxyz": 9,
}


def convert(phone_number: str) -> Optional[int]:
    """Single keypress to a digit: a digit itself or a letter on the keypad."""
    try:
        number = int(phone_number)
    except ValueError:
        pass
    else:
        if 0 <= number < 10:
            return number
    if not phone_number:
        return None
    key = phone_number.lower()
    for letters, digit in KEYPAD.items():
        if key in letters:
            return digit
    return None


def format_digits(digits: Iterable[int]) -> str:
    phone = "".join(str(digit) for digit in digits)
    return f"{phone[:3]}-{phone[3:6]}-{phone[6:]}"


def dial(phone_number: str) -> str:
    contact = CONTACTS.get(phone_number)
    if contact is None:
        return f"Contact not found for {phone_number}"
    return f"Dialing {contact} ({phone_number})..."


def lookup(keypresses: Publisher) -> Publisher:
    """
    Turn a stream of keypresses into dial attempts, one per ten keys.

    Keys that are neither digits nor keypad letters count as ``0``.
    """
    return (
        keypresses.map(convert)
        .replace_nil(0)
        .collect(10)
        .map(format_digits)
        .map(dial)
    )
