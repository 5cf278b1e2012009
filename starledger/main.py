"""
StarLedger - Main Entry Point
Walks through the star ownership handshake on a fresh chain.
"""

import logging

from .blockchain.ledger import Blockchain
from .wallet.signing import WalletKey


def print_header(title):
    """Print a formatted section header"""
    print("\n" + "=" * 60)
    print(f"  {title}")
    print("=" * 60)


def main():
    """Register one star and print the resulting chain."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print_header("STARLEDGER")
    chain = Blockchain()
    wallet = WalletKey.generate()
    print(f"  Chain height: {chain.get_chain_height()}")
    print(f"  Wallet address: {wallet.address}")

    print_header("OWNERSHIP HANDSHAKE")
    message = chain.request_message_ownership_verification(wallet.address)
    signature = wallet.sign_message(message)
    print(f"  [1] Message:   {message}")
    print(f"  [2] Signature: {signature[:32]}...")

    block = chain.submit_star(wallet.address, message, signature, {
        'dec': "68° 52' 56.9",
        'ra': "16h 29m 1.0s",
        'story': "Orion",
    })
    print(f"  [3] Star sealed in block #{block.height}")

    print_header("CHAIN")
    for sealed in chain.chain:
        print(sealed)
    errors = chain.validate_chain()
    print(f"\n  Validation findings: {len(errors)}")
    print(f"  Stars owned by wallet: {len(chain.get_stars_by_wallet_address(wallet.address))}")
    return 0 if not errors else 1


if __name__ == "__main__":
    raise SystemExit(main())
