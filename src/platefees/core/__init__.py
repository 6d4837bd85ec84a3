"""
Core domain models, mathematical primitives, and contracts.

This module contains the fee model building blocks that are independent
of external systems (payment processor, database, UI).
"""
