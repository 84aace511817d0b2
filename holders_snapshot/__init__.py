"""Sui Token Holders Snapshot.

Enumerates every live coin object of a given type through the Sui GraphQL
indexer, aggregates balances by owner and optionally computes a
proportional airdrop allocation.
"""

__version__ = "0.1.0"
