"""
Registry Configuration

Default values for the star registry. A Blockchain takes the same keys as
keyword overrides, so tests and callers can shorten the validation window
or swap the genesis payload without touching module state.
"""

from typing import Any, Dict


# Genesis block
GENESIS_PREV_HASH = "0" * 64  # Sentinel previous_hash (64 hex zeros)
GENESIS_PAYLOAD = {'data': 'Genesis Block'}

# Ownership message format: "<address>:<timestamp>:starRegistry"
OWNERSHIP_TAG = "starRegistry"
MESSAGE_SEPARATOR = ":"
MAX_TIMESTAMP_DIGITS = 12  # Seconds since epoch fit in 11 digits until year 5138

# Signed messages older than this are rejected
VALIDATION_WINDOW_SECONDS = 300  # 5 minutes

REGISTRY_CONFIG = {
    'genesis_payload': GENESIS_PAYLOAD,
    'ownership_tag': OWNERSHIP_TAG,
    'validation_window': VALIDATION_WINDOW_SECONDS,
}


def load_config(**overrides) -> Dict[str, Any]:
    """
    Build a registry configuration from the defaults.

    Args:
        **overrides: Values replacing entries of REGISTRY_CONFIG

    Returns:
        A new configuration dict

    Raises:
        ValueError: On unknown keys or a non-positive validation window
    """
    unknown = set(overrides) - set(REGISTRY_CONFIG)
    if unknown:
        raise ValueError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

    config = dict(REGISTRY_CONFIG)
    config.update(overrides)

    window = config['validation_window']
    if isinstance(window, bool) or not isinstance(window, int) or window <= 0:
        raise ValueError("validation_window must be a positive integer")
    if not config['ownership_tag'] or MESSAGE_SEPARATOR in config['ownership_tag']:
        raise ValueError(f"ownership_tag must be non-empty and not contain '{MESSAGE_SEPARATOR}'")

    return config
