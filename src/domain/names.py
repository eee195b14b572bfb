"""
Name and address helpers shared by the domain services.

Implements ENS namehash/labelhash, label normalization, address
validation and the commit-reveal commitment derivation.
"""

from ens.exceptions import InvalidName
from ens.utils import normalize_name
from eth_abi.packed import encode_packed
from eth_utils import is_checksum_address, is_hex_address, keccak, to_bytes, to_checksum_address

from .exceptions import InvalidLabel

ZERO_ADDRESS = "0x" + "0" * 40


def labelhash(label: str) -> bytes:
    """keccak-256 of a single label."""
    return keccak(text=label)


def namehash(name: str) -> bytes:
    """Computes the ENS namehash for a dotted name."""
    node = b"\x00" * 32
    if name:
        for label in reversed(name.split(".")):
            node = keccak(node + labelhash(label))
    return node


def token_id(label: str) -> int:
    """Registrar token id: the label hash read as uint256."""
    return int.from_bytes(labelhash(label), "big")


def normalize_label(name: str, tld: str) -> str:
    """
    Normalize a caller-supplied name to a bare label.

    Applies: strip whitespace + ENSIP-15 normalization (case folding and
    Unicode mapping) + drop a trailing ".<tld>"

    Raises:
        InvalidLabel: If the name contains characters ENS disallows
    """
    try:
        label = normalize_name(name.strip())
    except InvalidName as exc:
        raise InvalidLabel(name) from exc
    suffix = f".{tld}"
    if label.endswith(suffix):
        label = label[: -len(suffix)]
    return label


def full_name(label: str, tld: str) -> str:
    return f"{label}.{tld}"


def is_valid_address(value: str) -> bool:
    """
    True for 0x-prefixed 20-byte hex.

    All-lowercase and all-uppercase digits carry no checksum; mixed case
    must match the EIP-55 checksum exactly.
    """
    if not (isinstance(value, str) and value.startswith("0x") and is_hex_address(value)):
        return False
    digits = value[2:]
    return digits == digits.lower() or digits == digits.upper() or is_checksum_address(value)


def is_zero_address(value: str | None) -> bool:
    return not value or int(value, 16) == 0


def same_address(a: str | None, b: str | None) -> bool:
    if a is None or b is None:
        return False
    return a.lower() == b.lower()


def commitment_hash(name: str, owner: str, salt: str, resolver: str, addr: str) -> bytes:
    """
    Derive the commit-reveal commitment for a registration.

    Mirrors the controller's pure makeCommitmentWithConfig: the short form
    (label, owner, secret) is used only when both resolver and addr are unset.
    """
    label = labelhash(name)
    secret = to_bytes(hexstr=salt)
    owner = to_checksum_address(owner)
    if is_zero_address(resolver) and is_zero_address(addr):
        packed = encode_packed(["bytes32", "address", "bytes32"], [label, owner, secret])
    else:
        packed = encode_packed(
            ["bytes32", "address", "address", "address", "bytes32"],
            [label, owner, to_checksum_address(resolver), to_checksum_address(addr), secret],
        )
    return keccak(packed)
