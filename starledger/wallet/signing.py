"""
Wallet Signing Module

Wallet keys and message signatures for the ownership handshake:
- secp256k1 key pairs (cryptography)
- ECDSA-SHA256 signatures, base64 DER on the wire
- Addresses derived from the compressed public key
- Verification by public-key recovery (ecdsa), so a verifier needs only
  the message, the claimed address and the signature

Address format:
    "0x" + first 40 hex chars of SHA-256(compressed public key)
"""

import base64
import hashlib
import logging
from dataclasses import dataclass
from typing import Optional

from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.backends import default_backend
from ecdsa import SECP256k1, VerifyingKey
from ecdsa.util import sigdecode_der


logger = logging.getLogger(__name__)

CURVE = ec.SECP256K1()
ADDRESS_PREFIX = "0x"
ADDRESS_HEX_CHARS = 40


def address_from_public_bytes(public_bytes: bytes) -> str:
    """
    Derive a wallet address from a compressed public key.

    Args:
        public_bytes: 33-byte compressed SEC1 point

    Returns:
        Address string
    """
    digest = hashlib.sha256(public_bytes).hexdigest()
    return ADDRESS_PREFIX + digest[:ADDRESS_HEX_CHARS]


@dataclass
class WalletKey:
    """secp256k1 wallet key pair."""
    private_key: Optional[ec.EllipticCurvePrivateKey]
    public_key: ec.EllipticCurvePublicKey

    @classmethod
    def generate(cls) -> 'WalletKey':
        """Generate a new secp256k1 key pair."""
        private_key = ec.generate_private_key(CURVE, default_backend())
        return cls(private_key, private_key.public_key())

    def public_bytes(self) -> bytes:
        """Get public key as a compressed point."""
        return self.public_key.public_bytes(
            encoding=serialization.Encoding.X962,
            format=serialization.PublicFormat.CompressedPoint
        )

    @property
    def address(self) -> str:
        return address_from_public_bytes(self.public_bytes())

    def sign_message(self, message: str) -> str:
        """
        Sign an ownership message.

        Args:
            message: Text to sign (UTF-8 encoded before signing)

        Returns:
            Base64 DER-encoded ECDSA-SHA256 signature
        """
        if self.private_key is None:
            raise ValueError("Private key required for signing")

        signature = self.private_key.sign(
            message.encode('utf-8'),
            ec.ECDSA(hashes.SHA256())
        )
        return base64.b64encode(signature).decode('ascii')


def verify_message(message: str, address: str, signature: str) -> bool:
    """
    Check that `signature` over `message` was made by the key behind `address`.

    Args:
        message: The signed text
        address: Claimed wallet address
        signature: Base64 DER signature from WalletKey.sign_message

    Returns:
        True if a key recovered from the signature maps to the address
    """
    try:
        der = base64.b64decode(signature, validate=True)
        candidates = VerifyingKey.from_public_key_recovery(
            der,
            message.encode('utf-8'),
            SECP256k1,
            hashfunc=hashlib.sha256,
            sigdecode=sigdecode_der,
        )
    except Exception as e:
        logger.debug("Signature for %s could not be decoded: %s", address, e)
        return False

    return any(
        address_from_public_bytes(key.to_string("compressed")) == address
        for key in candidates
    )
