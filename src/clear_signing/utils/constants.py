"""Shared constants for descriptor formatting."""

# Checksummed token addresses with a display name
KNOWN_ADDRESSES = {
    "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48": "USDC Token",  # Ethereum mainnet
    "0xdAC17F958D2ee523a2206206994597C13D831ec7": "USDT Token",  # Ethereum mainnet
    "0x6B175474E89094C44Da98b954EedeAC495271d0F": "DAI Token",   # Ethereum mainnet
    "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2": "WETH Token",  # Ethereum mainnet
}

ZERO_ADDRESS = "0x" + "0" * 40

DEFAULT_DESCRIPTOR_PATH = "descriptors/DemoRouter.json"
DEFAULT_FETCH_TIMEOUT = 10

NOT_AVAILABLE = "N/A"

# Amount decimal auto-detection: values with at most this many digits are 6-decimal tokens
SHORT_AMOUNT_DIGITS = 12
SHORT_AMOUNT_DECIMALS = 6
LONG_AMOUNT_DECIMALS = 18

# Dates closer than this (in the future) are shown relative to now
RELATIVE_DATE_WINDOW_MINUTES = 7 * 24 * 60

# Plausible Unix timestamps for the heuristic formatter (Sep 2020 - May 2033)
MIN_PLAUSIBLE_TIMESTAMP = 1_600_000_000
MAX_PLAUSIBLE_TIMESTAMP = 2_000_000_000

# Parameter name fragments that mark an integer as a point in time
TIME_NAME_HINTS = ("deadline", "time", "expir", "until")

# Descriptor field formats understood without a named format definition
AMOUNT_FORMATS = {"tokenAmount", "amount"}
ADDRESS_FORMATS = {"tokenAddress", "recipientAddress", "addressName", "address"}
DATE_FORMATS = {"timestamp", "date"}
