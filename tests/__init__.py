"""
Test suite for platefees

Contains:
- tests/unit/          : Unit tests for individual modules
"""
