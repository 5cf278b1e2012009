# Blockchain Module
"""
Star registry ledger including:
- Block sealing and self-validation (SHA-256 over canonical JSON)
- Hash-linked chain with full validation
- Ownership handshake for star submissions

Security features:
- Sealed blocks reject modification
- Validation reports every finding, not just the first
- Time-boxed, wallet-signed submissions
"""

_EXPORTS = {
    'Block': 'block',
    'sha256_hex': 'block',
    'encode_payload': 'block',
    'Blockchain': 'ledger',
    'current_time': 'ledger',
    'LedgerError': 'exceptions',
    'DecodeError': 'exceptions',
    'AppendError': 'exceptions',
    'SubmissionError': 'exceptions',
    'SubmissionFailure': 'exceptions',
}


# Lazy imports to avoid RuntimeWarning when running modules directly
def __getattr__(name):
    """Resolve public names from their submodule on first access."""
    if name not in _EXPORTS:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    from importlib import import_module
    module = import_module(f".{_EXPORTS[name]}", __name__)
    return getattr(module, name)


__all__ = list(_EXPORTS)
