"""
Chain Balance Adapters Package

This package contains one balance adapter per chain family.
Each family has its own subfolder with:
- api_client.py (or rpc_client.py): HTTP / JSON-RPC logic
- __init__.py: Adapter class implementing BalanceAdapter

base_client.py holds the shared aiohttp session handling and retry loop.
Adding a chain family means adding a subfolder and registering it in AdapterManager.
"""
