"""
Test suite for the design token system

Contains:
- tests/unit/ : Unit tests for domain models, contracts, integrity checks,
                merge engine and catalog queries
"""
