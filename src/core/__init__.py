"""
Core domain models and document contracts.

This module contains the foundational building blocks of the token system:
immutable domain models (src.core.domain) and the admission gate that turns
raw JSON documents into them (src.core.contracts).
"""
