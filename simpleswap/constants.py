"""Protocol constants for the SimpleSwap pool engine.

Centralizes well-known identities and numeric bounds.
"""

# The null identity. Recipients and assets may never be this address.
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Fixed-point unit for spot prices (assets use 18 decimals)
PRICE_SCALE = 10**18

# Largest amount an asset ledger can represent
UINT256_MAX = 2**256 - 1
