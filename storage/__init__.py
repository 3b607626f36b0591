"""
Storage Package

Handles persistence of maker wealth snapshots.

Current implementation:
- SQLite repository (append-only maker_wealth table)

The WealthRepository interface allows swapping the backend without touching the aggregator.
"""
