"""
Airdrop Data Script - Converts human-readable airdrop amounts to token base units.

Reads [{"address": ..., "value": "100.0"}, ...] and writes
[{"address": ..., "value": "100000000000000000000"}, ...] with the exact total
printed first. A single bad record aborts the run and nothing is written.
"""

import sys
from typing import Iterable, List, NamedTuple, Optional

import config
from utils.conversion_utils import AmountConversionError, ConversionContext
from utils.file_utils import load_json_document, write_json_document
from utils.record_utils import ConvertedRecord, parse_amount_record


class AirdropBatch(NamedTuple):
    """Result of converting one airdrop list."""
    records: List[ConvertedRecord]
    total_smallest: str
    total: str

    def to_json(self) -> List[dict]:
        return [record.to_dict() for record in self.records]


def convert_airdrop_records(entries: Iterable, context: ConversionContext) -> AirdropBatch:
    """
    Convert every entry to smallest units, preserving input order.

    Args:
        entries: Raw entries with 'address' and human-readable 'value'
        context: Token decimals to convert with

    Returns:
        AirdropBatch with converted records and the exact total

    Raises:
        AmountConversionError: on the first invalid entry, tagged with its
            index, address and raw value
    """
    records = []
    running_total = 0

    for index, entry in enumerate(entries):
        try:
            record = parse_amount_record(entry)
            value = context.to_smallest_unit(record.value)
        except AmountConversionError as e:
            address = entry.get('address') if isinstance(entry, dict) else None
            raise e.with_record(address, index) from e

        running_total += int(value)
        records.append(ConvertedRecord(address=record.address, value=value))

    total_smallest = str(running_total)
    return AirdropBatch(
        records=records,
        total_smallest=total_smallest,
        total=context.from_smallest_unit(total_smallest)
    )


def run_create_airdrop_data(
    input_path: Optional[str] = None,
    output_path: Optional[str] = None,
    decimals: Optional[int] = None,
    token_symbol: Optional[str] = None
) -> AirdropBatch:
    """
    Convert the raw airdrop JSON file and write the base-unit airdrop data.

    Args:
        input_path: Raw JSON path (config.airdrop_input_path if None)
        output_path: Output JSON path (config.airdrop_output_path if None)
        decimals: Token decimals (config.token_decimals if None)
        token_symbol: Symbol used in the summary line (config.token_symbol if None)

    Returns:
        The converted AirdropBatch
    """
    input_path = input_path or config.airdrop_input_path
    output_path = output_path or config.airdrop_output_path
    if decimals is None:
        decimals = config.token_decimals
    token_symbol = token_symbol or config.token_symbol

    entries = load_json_document(input_path)
    if not isinstance(entries, list):
        raise ValueError(f"{input_path} must contain a JSON list of airdrop entries")

    batch = convert_airdrop_records(entries, ConversionContext(decimals=decimals))

    print(f"Total {token_symbol} to be airdropped: {batch.total}")

    write_json_document(output_path, batch.to_json())

    print(f"Airdrop data created and saved to {output_path}")
    return batch


if __name__ == '__main__':
    try:
        run_create_airdrop_data()
    except Exception as e:
        print(f"ERROR: {str(e)}")
        sys.exit(1)
