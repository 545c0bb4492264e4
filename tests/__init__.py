"""
Attest Test Suite
=================

Test organization:
- tests/unit/          - Unit tests (mock chain capabilities only)
- tests/services/      - HTTP service tests

Run tests:
    pytest                          # All tests
    pytest tests/unit               # Unit tests only
    pytest --cov=attest             # With coverage
"""
