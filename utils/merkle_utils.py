"""
Merkle tree utilities for airdrop claim proofs.

Leaves are keccak256(abi.encodePacked(address, uint256 amount)). Pairs are
sorted before hashing, so a proof is a plain list of sibling hashes.
"""

from typing import Dict, List, Sequence, Union

from eth_utils import is_address, keccak, to_checksum_address
from web3 import Web3

from utils.conversion_utils import AmountConversionError, InvalidFormat, parse_smallest_unit
from utils.record_utils import parse_amount_record


def hash_airdrop_leaf(address: str, amount: Union[str, int]) -> bytes:
    """
    Hash an airdrop entry the way the airdrop contract does.

    Args:
        address: Recipient address (lowercase, uppercase or checksummed)
        amount: Amount in smallest unit, at most uint256 max

    Returns:
        32-byte leaf hash

    Raises:
        InvalidFormat: address is invalid or amount is not a uint256
    """
    if not isinstance(address, str) or not is_address(address):
        raise InvalidFormat("Recipient is not a valid address", value=amount, address=address)
    try:
        amount_int = parse_smallest_unit(amount)
    except AmountConversionError as e:
        raise e.with_record(address) from e
    checksum_address = to_checksum_address(address)
    return bytes(Web3.solidity_keccak(['address', 'uint256'], [checksum_address, amount_int]))


def hash_pair(left: bytes, right: bytes) -> bytes:
    """Hash two nodes in sorted order."""
    if right < left:
        left, right = right, left
    return keccak(left + right)


def _to_bytes(value: Union[str, bytes]) -> bytes:
    if isinstance(value, str):
        return bytes.fromhex(value[2:] if value.startswith('0x') else value)
    return bytes(value)


def _to_hex(value: bytes) -> str:
    return '0x' + value.hex()


class AirdropMerkleTree:
    """Sorted-pair keccak Merkle tree over pre-hashed leaves."""

    def __init__(self, leaves: Sequence[bytes]):
        """
        Build all layers of the tree.

        Args:
            leaves: Leaf hashes in airdrop order
        """
        self.leaves = [bytes(leaf) for leaf in leaves]
        self.layers: List[List[bytes]] = [self.leaves]

        layer = self.leaves
        while len(layer) > 1:
            next_layer = []
            for i in range(0, len(layer), 2):
                if i + 1 < len(layer):
                    next_layer.append(hash_pair(layer[i], layer[i + 1]))
                else:
                    # Odd node moves up unchanged
                    next_layer.append(layer[i])
            self.layers.append(next_layer)
            layer = next_layer

    @property
    def root(self) -> bytes:
        if not self.leaves:
            return b''
        return self.layers[-1][0]

    def get_hex_root(self) -> str:
        return _to_hex(self.root)

    def get_proof(self, leaf: Union[str, bytes]) -> List[bytes]:
        """
        Get sibling hashes from a leaf up to the root.

        Args:
            leaf: Leaf hash (bytes or hex string)

        Returns:
            Proof as a list of 32-byte hashes
        """
        leaf = _to_bytes(leaf)
        try:
            index = self.leaves.index(leaf)
        except ValueError:
            raise ValueError(f"Leaf {_to_hex(leaf)} is not in the tree")

        proof = []
        for layer in self.layers[:-1]:
            sibling_index = index - 1 if index % 2 else index + 1
            if sibling_index < len(layer):
                proof.append(layer[sibling_index])
            index //= 2
        return proof

    def get_hex_proof(self, leaf: Union[str, bytes]) -> List[str]:
        return [_to_hex(node) for node in self.get_proof(leaf)]


def verify_proof(proof: Sequence[Union[str, bytes]], leaf: Union[str, bytes], root: Union[str, bytes]) -> bool:
    """
    Check a proof the way OpenZeppelin's MerkleProof.verify does.

    Args:
        proof: Sibling hashes from get_proof
        leaf: Leaf hash
        root: Expected root

    Returns:
        True if the proof leads from leaf to root
    """
    computed = _to_bytes(leaf)
    for node in proof:
        computed = hash_pair(computed, _to_bytes(node))
    return computed == _to_bytes(root)


def build_airdrop_proofs(entries: Sequence[Dict]) -> Dict:
    """
    Build the Merkle root and per-recipient proofs for converted airdrop data.

    Args:
        entries: Converted entries with 'address' and smallest-unit 'value'

    Returns:
        Dictionary with 'root' (hex) and 'proofs' (list of address/value/proof)

    Raises:
        AmountConversionError: an entry is invalid, tagged with its index
        ValueError: a generated proof does not verify against the root
    """
    records = []
    leaves = []
    for index, entry in enumerate(entries):
        try:
            record = parse_amount_record(entry)
            leaves.append(hash_airdrop_leaf(record.address, record.value))
        except AmountConversionError as e:
            address = entry.get('address') if isinstance(entry, dict) else None
            raise e.with_record(address, index) from e
        records.append(record)

    tree = AirdropMerkleTree(leaves)
    root = tree.get_hex_root()

    proofs = []
    for index, (record, leaf) in enumerate(zip(records, leaves)):
        proof = tree.get_hex_proof(leaf)
        if not verify_proof(proof, leaf, root):
            raise ValueError(f"Proof for record #{index} ({record.address}) does not verify against root {root}")
        proofs.append({
            'address': record.address,
            'value': record.value,
            'proof': proof,
        })

    return {'root': root, 'proofs': proofs}
