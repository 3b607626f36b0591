"""
Core Package

Contains the chain-agnostic core logic including:
- BalanceAdapter: Abstract base class defining the contract for all chain-family adapters
- AdapterManager: Registry routing chain IDs to adapters
- Chains: Static chain ID -> chain family index
- Schemas: Pydantic models for maker entries, balance requests and persisted rows

This layer keeps the aggregator independent of any chain's wire protocol.
"""
