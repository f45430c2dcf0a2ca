"""
Core domain models, money primitives, and contracts.

This module contains the foundational building blocks of the cart engine that
are independent of external systems (catalog, settings, transaction service).
"""
