"""Shared fixtures for the StarLedger tests."""

import pytest

from starledger.blockchain.ledger import Blockchain

from .helpers import FakeClock, RecordingVerifier


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def verifier():
    return RecordingVerifier()


@pytest.fixture
def chain(clock, verifier):
    return Blockchain(clock=clock, verifier=verifier)
