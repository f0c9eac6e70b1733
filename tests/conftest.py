import copy
import json
from pathlib import Path

import pytest
from eth_utils import keccak
from web3 import Web3

from clear_signing import Descriptor, ERC7730Formatter, ValueFormatter
from helpers import NOW, USDC, USDT, VITALIK

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture(name="descriptor_path")
def fixture_descriptor_path() -> Path:
    return FIXTURES / "DemoRouter.json"


@pytest.fixture(name="descriptor_data")
def fixture_descriptor_data(descriptor_path):
    with open(descriptor_path, "r") as f:
        return copy.deepcopy(json.load(f))


@pytest.fixture(name="descriptor")
def fixture_descriptor(descriptor_data) -> Descriptor:
    return Descriptor.model_validate(descriptor_data)


@pytest.fixture(name="clock")
def fixture_clock():
    return lambda: NOW


@pytest.fixture(name="values")
def fixture_values(clock) -> ValueFormatter:
    return ValueFormatter(clock=clock)


@pytest.fixture(name="formatter")
def fixture_formatter(descriptor, clock) -> ERC7730Formatter:
    return ERC7730Formatter(descriptor, clock=clock)


@pytest.fixture(name="encode_call")
def fixture_encode_call():
    codec = Web3().codec

    def _encode_call(name: str, types: list, values: list) -> str:
        selector = keccak(text=f"{name}({','.join(types)})")[:4]
        return "0x" + (selector + codec.encode(types, values)).hex()

    return _encode_call


@pytest.fixture(name="swap_args")
def fixture_swap_args():
    return [{
        "tokenIn": USDC,
        "tokenOut": USDT,
        "amountIn": 1_000_000_000,
        "minAmountOut": 990_000_000,
        "recipient": VITALIK,
        "deadline": NOW + 1800,
    }]
