# StarLedger
"""
StarLedger - a local, hash-linked star registry.

Modules:
- blockchain: blocks, chain validation and the star submission handshake
- wallet: secp256k1 wallet keys and message signature checks
- config: registry defaults
"""

__version__ = "1.0.0"
