"""
Star Registry Ledger Module

Implements a private, in-memory blockchain with:
- Genesis block created at construction
- A single append path that links, timestamps and seals blocks
- Full chain validation that reports every finding in one pass
- The star ownership handshake:
    1. request_message_ownership_verification(address)
    2. the wallet signs the message
    3. submit_star(address, message, signature, star)

Submission gates (first failure wins):
- Format: "<address>:<timestamp>:starRegistry"
- Freshness: signed message younger than the validation window (300s)
- Signature: wallet signature over the message

Mutations hold the chain lock for the whole read-link-seal-push sequence.
"""

import json
import logging
import threading
import time
from typing import Any, Callable, Dict, List, Optional

from ..config import GENESIS_PREV_HASH, MAX_TIMESTAMP_DIGITS, MESSAGE_SEPARATOR, load_config
from ..wallet.signing import verify_message
from .block import Block, HashFunction, sha256_hex
from .exceptions import SubmissionError, SubmissionFailure


logger = logging.getLogger(__name__)

Clock = Callable[[], int]
Verifier = Callable[[str, str, str], bool]


def current_time() -> int:
    """Seconds since epoch."""
    return int(time.time())


class Blockchain:
    """
    Append-only chain of sealed blocks.

    Example:
        >>> chain = Blockchain()
        >>> chain.get_chain_height()
        0
        >>> message = chain.request_message_ownership_verification(wallet.address)
        >>> block = chain.submit_star(wallet.address, message,
        ...                           wallet.sign_message(message), {'story': 'Orion'})
    """

    def __init__(
        self,
        clock: Optional[Clock] = None,
        hash_fn: HashFunction = sha256_hex,
        verifier: Optional[Verifier] = None,
        **config
    ):
        """
        Initialize a new chain with its genesis block.

        Args:
            clock: Returns the current time in seconds (default: system clock)
            hash_fn: Hash primitive used to seal and validate blocks
            verifier: Wallet signature check (default: secp256k1 recovery)
            **config: Overrides for REGISTRY_CONFIG

        Raises:
            ValueError: On invalid configuration
        """
        self._config = load_config(**config)
        self._clock = clock or current_time
        self._hash_fn = hash_fn
        self._verifier = verifier or verify_message
        self._lock = threading.RLock()
        self._chain: List[Block] = []
        self._height = -1
        self.last_validation_errors: List[str] = []

        self.initialize_chain()

    def initialize_chain(self) -> None:
        """Create the genesis block if the chain is empty."""
        with self._lock:
            if self._height == -1:
                genesis = self.add_block(Block(self._config['genesis_payload']))
                logger.info("Genesis block created: %s", genesis.hash)

    @property
    def chain(self) -> List[Block]:
        """Get the blocks (read-only view)."""
        with self._lock:
            return list(self._chain)

    @property
    def length(self) -> int:
        with self._lock:
            return len(self._chain)

    @property
    def last_block(self) -> Block:
        with self._lock:
            return self._chain[-1]

    @property
    def validation_window(self) -> int:
        return self._config['validation_window']

    def get_chain_height(self) -> int:
        """Height of the tip, or -1 before genesis."""
        with self._lock:
            return self._height

    def add_block(self, block: Block) -> Block:
        """
        Link, seal and store a block.

        The chain is re-validated after the push. Findings are kept on
        `last_validation_errors` and never roll the append back.

        Args:
            block: An unsealed block

        Returns:
            The sealed block

        Raises:
            AppendError: If the block cannot be sealed
        """
        with self._lock:
            previous_hash = self._chain[-1].hash if self._chain else GENESIS_PREV_HASH
            height = len(self._chain)

            block.seal(height, previous_hash, self._clock(), self._hash_fn)

            self._chain.append(block)
            self._height += 1
            logger.debug("Sealed block #%d %s", block.height, block.hash)

            errors = self.validate_chain()
            self.last_validation_errors = errors

        for error in errors:
            logger.warning("Chain validation after block #%d: %s", block.height, error)
        return block

    def request_message_ownership_verification(self, address: str) -> str:
        """
        Build the message a wallet must sign before submitting a star.

        Returns:
            "<address>:<timestamp>:starRegistry"
        """
        return MESSAGE_SEPARATOR.join(
            [address, str(self._clock()), self._config['ownership_tag']]
        )

    def _parse_message_time(self, address: str, message: str) -> int:
        """Check the ownership message format and return its timestamp."""
        if not isinstance(message, str):
            raise SubmissionError(SubmissionFailure.MALFORMED_MESSAGE, "Message must be a string")

        parts = message.split(MESSAGE_SEPARATOR)
        if len(parts) != 3:
            raise SubmissionError(
                SubmissionFailure.MALFORMED_MESSAGE,
                f"Expected 3 fields in message, got {len(parts)}"
            )

        message_address, raw_time, tag = parts
        if tag != self._config['ownership_tag']:
            raise SubmissionError(SubmissionFailure.MALFORMED_MESSAGE, f"Unknown message tag: {tag}")
        if message_address != address:
            raise SubmissionError(
                SubmissionFailure.MALFORMED_MESSAGE,
                "Message was issued for a different address"
            )
        # ASCII digits only; isdigit() alone also accepts superscripts
        if not (raw_time.isascii() and raw_time.isdigit()) or len(raw_time) > MAX_TIMESTAMP_DIGITS:
            raise SubmissionError(SubmissionFailure.MALFORMED_MESSAGE, f"Invalid timestamp: {raw_time[:32]}")

        return int(raw_time)

    def submit_star(self, address: str, message: str, signature: str, star: Any) -> Block:
        """
        Register a star for a wallet that proved ownership of its address.

        Args:
            address: Wallet address
            message: Message from request_message_ownership_verification
            signature: Wallet signature over the message
            star: Star data to record

        Returns:
            The sealed star block

        Raises:
            SubmissionError: If the message is malformed, from the future,
                expired, or the signature does not match the address
            AppendError: If the star cannot be encoded
        """
        try:
            message_time = self._parse_message_time(address, message)

            elapsed = self._clock() - message_time
            if elapsed < 0:
                raise SubmissionError(
                    SubmissionFailure.FUTURE_TIMESTAMP,
                    f"Message timestamp is {-elapsed}s in the future"
                )
            if elapsed >= self.validation_window:
                raise SubmissionError(
                    SubmissionFailure.EXPIRED,
                    f"Message expired {elapsed}s after issue (window {self.validation_window}s)"
                )

            if not self._verifier(message, address, signature):
                raise SubmissionError(SubmissionFailure.INVALID_SIGNATURE, "Signature verification failed")
        except SubmissionError as e:
            logger.warning("Rejected star from %s: %s", address, e)
            raise

        block = self.add_block(Block({
            'address': address,
            'signature': signature,
            'message': message,
            'star': star,
        }))
        logger.info("Star registered for %s at height %d (sig %.16s...)",
                    address, block.height, str(signature))
        return block

    def get_block_by_hash(self, block_hash: str) -> Optional[Block]:
        """Find a block by its hash, or None if absent."""
        return next((b for b in self.chain if b.hash == block_hash), None)

    def get_block_by_height(self, height: int) -> Optional[Block]:
        """Find a block by its height field, or None if absent."""
        return next((b for b in self.chain if b.height == height), None)

    def get_stars_by_wallet_address(self, address: str) -> List[Dict[str, Any]]:
        """
        Collect the decoded star payloads owned by an address, in chain order.

        Blocks owned by other addresses (and the genesis block) are skipped.

        Raises:
            DecodeError: If a block body cannot be decoded
        """
        stars = []
        for block in self.chain:
            data = block.decode_payload()
            if isinstance(data, dict) and data.get('address') == address:
                stars.append(data)
        return stars

    def validate_chain(self) -> List[str]:
        """
        Validate every block and every link.

        Returns:
            Human-readable findings; an empty list means the chain is sound
        """
        chain = self.chain
        errors = []

        for index, block in enumerate(chain):
            if not block.validate(self._hash_fn):
                errors.append(f"Block at height {block.height} failed self-validation.")

            if block.height != index:
                errors.append(f"Block at height {block.height} is out of sequence (expected {index}).")

            expected_prev = chain[index - 1].hash if index > 0 else GENESIS_PREV_HASH
            if block.previous_hash != expected_prev:
                errors.append(f"Block at height {block.height} has a broken link to its predecessor.")

        return errors

    def to_json(self) -> str:
        """Export the chain as JSON block records."""
        return json.dumps({
            'height': self.get_chain_height(),
            'chain': [block.to_dict() for block in self.chain],
        }, indent=2)
