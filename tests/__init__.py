"""
Test suite for the POS cart engine

Contains:
- tests/unit/          : Unit tests for individual modules
"""
