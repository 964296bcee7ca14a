"""
Airdrop record helpers for validating input entries and building output entries.
"""

from typing import Dict, Mapping, NamedTuple

from utils.conversion_utils import InvalidFormat


class AmountRecord(NamedTuple):
    """Input entry: recipient address and human-readable amount."""
    address: str
    value: object


class ConvertedRecord(NamedTuple):
    """Output entry: recipient address and amount in smallest unit."""
    address: str
    value: str

    def to_dict(self) -> Dict[str, str]:
        return {'address': self.address, 'value': self.value}


def parse_amount_record(entry) -> AmountRecord:
    """
    Validate one raw input entry.

    Args:
        entry: Dictionary with 'address' and 'value' fields

    Returns:
        AmountRecord with the address kept verbatim

    Raises:
        InvalidFormat: entry is not a mapping, a field is missing,
            or the address is not a string
    """
    if not isinstance(entry, Mapping):
        raise InvalidFormat(f"Airdrop entry must be an object, got {type(entry).__name__}", value=entry)
    if 'address' not in entry:
        raise InvalidFormat("Airdrop entry is missing 'address'", value=entry.get('value'))
    if 'value' not in entry:
        raise InvalidFormat("Airdrop entry is missing 'value'", address=entry['address'])

    address = entry['address']
    if not isinstance(address, str):
        raise InvalidFormat("Airdrop entry 'address' must be a string", value=entry['value'])
    return AmountRecord(address=address, value=entry['value'])
