# StarLedger Test Suite
"""
Test suite including:
- Unit tests (blocks, chain, wallet signatures, configuration)
- Integration tests (ownership handshake end to end)
- Tamper and invalid-input scenarios

Run with: pytest
Coverage: coverage run -m pytest && coverage report
"""
