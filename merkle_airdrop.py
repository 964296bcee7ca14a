"""
Merkle Airdrop Script - Builds the airdrop Merkle root and per-recipient proofs.

Reads the base-unit airdrop data written by airdrop_data.py and writes
[{"address": ..., "value": ..., "proof": [...]}, ...]. The root is printed so it
can be set on the airdrop contract.
"""

import sys
from typing import Optional

import config
from utils.file_utils import load_json_document, write_json_document
from utils.merkle_utils import build_airdrop_proofs


def run_create_merkle_proofs(
    input_path: Optional[str] = None,
    proofs_path: Optional[str] = None
) -> str:
    """
    Build the Merkle tree for the airdrop data and write the proofs file.

    Args:
        input_path: Airdrop data path (config.airdrop_output_path if None)
        proofs_path: Proofs output path (config.airdrop_proofs_path if None)

    Returns:
        Merkle root as a hex string
    """
    input_path = input_path or config.airdrop_output_path
    proofs_path = proofs_path or config.airdrop_proofs_path

    entries = load_json_document(input_path)
    if not isinstance(entries, list):
        raise ValueError(f"{input_path} must contain a JSON list of airdrop entries")
    if not entries:
        print(f"WARNING: {input_path} has no entries, Merkle root will be empty")

    result = build_airdrop_proofs(entries)
    write_json_document(proofs_path, result['proofs'])

    print(f"Merkle Root: {result['root']}")
    print(f"Proofs written to {proofs_path}")
    return result['root']


if __name__ == '__main__':
    try:
        run_create_merkle_proofs()
    except Exception as e:
        print(f"ERROR: {str(e)}")
        sys.exit(1)
