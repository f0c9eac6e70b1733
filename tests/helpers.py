"""Constants shared by the test modules."""

# Fixed "now" for relative dates: 2025-10-09 08:53:20 UTC
NOW = 1_760_000_000

USDC = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"
USDT = "0xdAC17F958D2ee523a2206206994597C13D831ec7"
DAI = "0x6B175474E89094C44Da98b954EedeAC495271d0F"
VITALIK = "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045"

ABSOLUTE_DATE_PATTERN = r"^[A-Z][a-z]{2} \d{1,2}, \d{4}, \d{2}:\d{2} (AM|PM)$"

# Unlimited ERC-20 approval
MAX_UINT256 = 2**256 - 1
