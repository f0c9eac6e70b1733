import pytest
from eth_utils import keccak
from web3 import Web3

from clear_signing import CalldataDecoder, CalldataDecodingError, DecodedArguments
from clear_signing.utils.abi import ABI
from helpers import DAI, NOW, USDC, USDT, VITALIK

SWAP_TYPES = ["(address,address,uint256,uint256,address,uint256)"]


@pytest.fixture(name="decoder")
def fixture_decoder(descriptor):
    return CalldataDecoder(descriptor.abi)


def test_selector_lookup(descriptor):
    abi = ABI(descriptor.abi)
    data = abi.find_function_by_selector("0x" + "00" * 4)
    assert data is None

    selector = ABI._function_signature_to_selector("simpleTransfer(address,address,uint256)")
    data = abi.find_function_by_selector(selector)
    assert data["name"] == "simpleTransfer"
    assert data["param_names"] == ["token", "recipient", "amount"]
    assert data["stateMutability"] == "nonpayable"


def test_tuple_signature(descriptor):
    abi = ABI(descriptor.abi)
    swap = next(item for item in abi.functions() if item["name"] == "swapExactTokensForTokens")
    assert abi.signature(swap) == "swapExactTokensForTokens((address,address,uint256,uint256,address,uint256))"
    assert abi._param_abi_type_to_str({
        "type": "tuple[2][]",
        "components": [{"type": "address"}, {"type": "uint8"}],
    }) == "(address,uint8)[2][]"


def test_decode_struct_call(decoder, encode_call):
    calldata = encode_call(
        "swapExactTokensForTokens",
        SWAP_TYPES,
        [(USDC, USDT, 1_000_000_000, 990_000_000, VITALIK, NOW + 1800)],
    )
    call = decoder.decode(calldata)

    assert call.function_name == "swapExactTokensForTokens"
    assert call.selector == calldata[:10]
    assert isinstance(call.args, DecodedArguments)
    assert call.args[0] == {
        "tokenIn": USDC,
        "tokenOut": USDT,
        "amountIn": 1_000_000_000,
        "minAmountOut": 990_000_000,
        "recipient": VITALIK,
        "deadline": NOW + 1800,
    }
    assert call.args.names == ["params"]


def test_decode_positional_call(decoder, encode_call):
    calldata = encode_call("simpleTransfer", ["address", "address", "uint256"], [DAI, VITALIK, 5])
    call = decoder.decode(calldata[2:])

    assert call.signature == "simpleTransfer(address,address,uint256)"
    assert list(call.args) == [DAI, VITALIK, 5]
    assert call.args.by_name("amount") == 5
    assert call.function_abi["name"] == "simpleTransfer"


def test_decode_converts_bytes_and_struct_arrays():
    abi = [{
        "type": "function",
        "name": "multicall",
        "inputs": [
            {"name": "data", "type": "bytes[]"},
            {"name": "orders", "type": "tuple[]", "components": [
                {"name": "maker", "type": "address"},
                {"name": "salt", "type": "bytes32"},
            ]},
        ],
    }]
    types = ["bytes[]", "(address,bytes32)[]"]
    payload = Web3().codec.encode(types, [[b"\x01\x02"], [(VITALIK, b"\x00" * 32)]])
    calldata = "0x" + (keccak(text="multicall(bytes[],(address,bytes32)[])")[:4] + payload).hex()

    call = CalldataDecoder(abi).decode(calldata)
    assert call.args[0] == ["0x0102"]
    assert call.args[1] == [{"maker": VITALIK, "salt": "0x" + "00" * 32}]


@pytest.mark.parametrize(
    "calldata, message",
    [
        ("", "empty"),
        ("0x" + "ab" * 32, "transaction hash"),
        ("0x1234", "too short"),
        ("0xzzzzzzzz", "not valid hex"),
        ("0xdeadbeef", "No function"),
    ],
)
def test_decode_rejects_bad_calldata(decoder, calldata, message):
    with pytest.raises(CalldataDecodingError, match=message):
        decoder.decode(calldata)


def test_decode_rejects_truncated_arguments(decoder, encode_call):
    calldata = encode_call("simpleTransfer", ["address", "address", "uint256"], [DAI, VITALIK, 5])
    with pytest.raises(CalldataDecodingError, match="Failed to parse calldata"):
        decoder.decode(calldata[:-64])


def test_decoded_addresses_are_checksummed(decoder):
    converted = decoder._convert_decoded_value(
        [USDC.lower(), DAI.lower()],
        {"type": "address[]"},
    )
    assert converted == [USDC, DAI]

    struct = decoder._convert_decoded_value(
        (VITALIK.lower(), 5),
        {"type": "tuple", "components": [{"name": "to", "type": "address"}, {"name": "value", "type": "uint256"}]},
    )
    assert struct == {"to": VITALIK, "value": 5}


def test_decode_address_array_call():
    abi = [{
        "type": "function",
        "name": "batch",
        "inputs": [{"name": "tokens", "type": "address[]"}],
    }]
    payload = Web3().codec.encode(["address[]"], [[USDC.lower(), USDT.lower()]])
    calldata = "0x" + (keccak(text="batch(address[])")[:4] + payload).hex()

    call = CalldataDecoder(abi).decode(calldata)
    assert call.args[0] == [USDC, USDT]
    assert call.args.by_name("tokens") == [USDC, USDT]
