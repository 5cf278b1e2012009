"""Test doubles for the ledger's injected collaborators."""


T0 = 1_700_000_000


class FakeClock:
    """Settable clock returning whole seconds."""

    def __init__(self, now: int = T0):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += seconds


class RecordingVerifier:
    """Signature check stub that records its calls."""

    def __init__(self, result: bool = True):
        self.result = result
        self.calls = []

    def __call__(self, message, address, signature) -> bool:
        self.calls.append((message, address, signature))
        return self.result
