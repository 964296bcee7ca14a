"""
Utility modules for airdrop data preparation.
"""

from .conversion_utils import (
    AmountConversionError,
    InvalidFormat,
    PrecisionOverflow,
    ConversionContext,
    convert_amount_to_smallest_unit,
    convert_amount_from_smallest_unit,
    parse_smallest_unit,
    sum_smallest_units,
)
from .record_utils import AmountRecord, ConvertedRecord, parse_amount_record
from .file_utils import load_json_document, write_json_document
from .merkle_utils import AirdropMerkleTree, hash_airdrop_leaf, verify_proof, build_airdrop_proofs

__all__ = [
    'AmountConversionError',
    'InvalidFormat',
    'PrecisionOverflow',
    'ConversionContext',
    'convert_amount_to_smallest_unit',
    'convert_amount_from_smallest_unit',
    'parse_smallest_unit',
    'sum_smallest_units',
    'AmountRecord',
    'ConvertedRecord',
    'parse_amount_record',
    'load_json_document',
    'write_json_document',
    'AirdropMerkleTree',
    'hash_airdrop_leaf',
    'verify_proof',
    'build_airdrop_proofs',
]
