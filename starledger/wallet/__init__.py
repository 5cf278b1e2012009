# Wallet Module
"""
Wallet keys and ownership-message signatures:
- secp256k1 key generation and signing
- Address derivation
- Signature verification by public-key recovery
"""

from .signing import (
    WalletKey,
    address_from_public_bytes,
    verify_message,
)

__all__ = [
    'WalletKey',
    'address_from_public_bytes',
    'verify_message',
]
