"""
Block Module

A block holds one encoded payload plus the fields that place it in the
chain:
- body: hex of the payload's canonical JSON
- height, timestamp, previous_hash: assigned when the chain seals it
- hash: SHA-256 over (height, timestamp, previous_hash, body)

Blocks are created unsealed and sealed exactly once. After the hash is
assigned the block rejects every attribute assignment, the same way a
frozen dataclass does.
"""

import hashlib
import json
from dataclasses import dataclass, InitVar, FrozenInstanceError
from typing import Any, Callable, Dict, Optional

from .exceptions import AppendError, DecodeError


HashFunction = Callable[[bytes], str]


def sha256_hex(data: bytes) -> str:
    """Default hash primitive: lowercase hex SHA-256."""
    return hashlib.sha256(data).hexdigest()


def _canonical_json(value: Any) -> bytes:
    """Deterministic JSON encoding (sorted keys, no whitespace)."""
    return json.dumps(
        value,
        sort_keys=True,
        separators=(',', ':'),
        ensure_ascii=False,
        allow_nan=False,
    ).encode('utf-8')


def encode_payload(payload: Any) -> str:
    """
    Encode a payload into its stored form.

    Raises:
        AppendError: If the payload is not JSON-encodable
    """
    try:
        return _canonical_json(payload).hex()
    except (TypeError, ValueError) as e:
        raise AppendError(f"Payload could not be encoded: {e}") from e


def _header_bytes(height: int, timestamp: int, previous_hash: str, body: str) -> bytes:
    # The stored hash is never part of its own input
    return _canonical_json({
        'height': height,
        'timestamp': timestamp,
        'previous_hash': previous_hash,
        'body': body,
    })


@dataclass
class Block:
    """
    One hash-identified unit of the ledger.

    Example:
        >>> block = Block({'star': {'story': 'Orion'}})
        >>> block.is_sealed
        False
    """
    payload: InitVar[Any] = None
    body: Optional[str] = None
    height: Optional[int] = None
    timestamp: Optional[int] = None
    previous_hash: Optional[str] = None
    hash: Optional[str] = None  # Must stay the last field: assigning it seals the block

    def __post_init__(self, payload: Any) -> None:
        if self.hash is None:
            self._pending_payload = payload

    def __setattr__(self, name: str, value: Any) -> None:
        if getattr(self, 'hash', None) is not None:
            raise FrozenInstanceError(f"cannot assign to field '{name}' of a sealed block")
        super().__setattr__(name, value)

    @property
    def is_sealed(self) -> bool:
        return self.hash is not None

    @property
    def is_genesis(self) -> bool:
        return self.height == 0

    def seal(
        self,
        height: int,
        previous_hash: str,
        timestamp: int,
        hash_fn: HashFunction = sha256_hex
    ) -> 'Block':
        """
        Assign position and linkage, then compute the block hash.

        Args:
            height: Position in the chain
            previous_hash: Hash of the preceding block (or the genesis sentinel)
            timestamp: Seconds since epoch
            hash_fn: Hash primitive

        Returns:
            This block, now sealed

        Raises:
            AppendError: If the block is already sealed or its payload
                cannot be encoded
        """
        if self.is_sealed:
            raise AppendError(f"Block #{self.height} is already sealed")

        body = self.body if self.body is not None else encode_payload(self._pending_payload)
        digest = hash_fn(_header_bytes(height, timestamp, previous_hash, body))

        self.body = body
        self.height = height
        self.timestamp = timestamp
        self.previous_hash = previous_hash
        self._pending_payload = None
        self.hash = digest
        return self

    def compute_hash(self, hash_fn: HashFunction = sha256_hex) -> str:
        """Recompute the digest over the current fields."""
        return hash_fn(_header_bytes(self.height, self.timestamp, self.previous_hash, self.body))

    def validate(self, hash_fn: HashFunction = sha256_hex) -> bool:
        """Check that the stored hash matches the block's contents."""
        if not self.is_sealed:
            return False
        return self.compute_hash(hash_fn) == self.hash

    def decode_payload(self) -> Any:
        """
        Decode the stored body back into structured data.

        Raises:
            DecodeError: If the block is unsealed or the body is not
                hex-encoded UTF-8 JSON
        """
        if self.body is None:
            raise DecodeError("Block has no encoded body")
        try:
            return json.loads(bytes.fromhex(self.body).decode('utf-8'))
        except (TypeError, ValueError) as e:
            # UnicodeDecodeError and JSONDecodeError are both ValueErrors
            raise DecodeError(f"Block #{self.height} body is not valid: {e}") from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert block to dictionary for serialization."""
        return {
            'height': self.height,
            'timestamp': self.timestamp,
            'previous_hash': self.previous_hash,
            'hash': self.hash,
            'body': self.body,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Block':
        """Create a sealed block from its dictionary form."""
        return cls(
            body=data['body'],
            height=data['height'],
            timestamp=data['timestamp'],
            previous_hash=data['previous_hash'],
            hash=data['hash'],
        )

    def __str__(self) -> str:
        if not self.is_sealed:
            return "Block (unsealed)"
        return (
            f"Block #{self.height}\n"
            f"  Hash: {self.hash[:16]}...\n"
            f"  Prev: {self.previous_hash[:16]}...\n"
            f"  Time: {self.timestamp}"
        )
