"""Calldata decoding against a contract ABI."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List

from eth_utils import is_hex, to_checksum_address
from web3 import Web3

from .abi import ABI
from .core.paths import DecodedArguments
from .exceptions import CalldataDecodingError

logger = logging.getLogger(__name__)

# "0x" + 32 bytes
TX_HASH_LENGTH = 66
# "0x" + 4-byte selector
MIN_CALLDATA_LENGTH = 10


@dataclass(frozen=True)
class DecodedCall:
    """A decoded function call."""
    function_name: str
    signature: str
    selector: str
    args: DecodedArguments
    function_abi: Dict[str, Any]


class CalldataDecoder:
    def __init__(self, abi: List[Dict[str, Any]]):
        """
        Args:
            abi: Contract ABI as a list of dictionaries
        """
        self.abi_helper = ABI(abi)
        self.w3 = Web3()

    def _convert_decoded_value(self, value, type_info):
        """
        Recursively convert decoded ABI values to display-friendly Python types.

        Handles:
        - bytes → hex strings
        - addresses → checksummed strings
        - tuples (structs) → dicts with component names
        - tuple[] (array of structs) → list of dicts
        - Nested structs and arrays

        Args:
            value: Raw decoded value from web3
            type_info: ABI type information dict with 'type' and optional 'components'

        Returns:
            Converted value
        """
        type_str = type_info.get('type', '')

        # Array of structs or array of arrays: peel one array dimension
        if type_str.endswith(']'):
            element_info = dict(type_info, type=type_str[:type_str.rindex('[')])
            return [self._convert_decoded_value(item, element_info) for item in value]

        if type_str == 'tuple':
            components = type_info.get('components', [])
            struct_dict = {}

            for idx, component in enumerate(components):
                comp_name = component.get('name') or f'field_{idx}'
                comp_value = value[idx] if idx < len(value) else None
                struct_dict[comp_name] = self._convert_decoded_value(comp_value, component)

            return struct_dict

        if type_str == 'address' and isinstance(value, str):
            return to_checksum_address(value)

        if isinstance(value, (bytes, bytearray)):
            return '0x' + bytes(value).hex()

        # Primitives (int, str, bool)
        return value

    def decode(self, calldata: str) -> DecodedCall:
        """
        Decode transaction calldata into a function name and its arguments.

        Args:
            calldata: Transaction input data (hex string, "0x" prefix optional)

        Returns:
            DecodedCall with arguments in ABI order

        Raises:
            CalldataDecodingError: If the calldata is malformed or matches no ABI function
        """
        calldata = (calldata or '').strip()
        if not calldata:
            raise CalldataDecodingError("Calldata is empty")
        if not calldata.startswith('0x'):
            calldata = f"0x{calldata}"

        if len(calldata) == TX_HASH_LENGTH:
            raise CalldataDecodingError(
                "This looks like a transaction hash. Provide the transaction calldata (input data) instead."
            )
        if len(calldata) < MIN_CALLDATA_LENGTH:
            raise CalldataDecodingError(
                "Calldata is too short. It should include at least the function selector (4 bytes)."
            )
        if not is_hex(calldata) or len(calldata) % 2:
            raise CalldataDecodingError("Calldata is not valid hex")

        selector = calldata[:MIN_CALLDATA_LENGTH].lower()
        function_data = self.abi_helper.find_function_by_selector(selector)
        if function_data is None:
            logger.warning(f"No function found for selector {selector}")
            raise CalldataDecodingError(f"No function in the contract ABI matches selector {selector}")

        function_abi = function_data['abi']
        inputs = function_abi.get('inputs', [])

        try:
            decoded_values = self.w3.codec.decode(
                self.abi_helper.input_types(function_abi),
                bytes.fromhex(calldata[MIN_CALLDATA_LENGTH:]),
            )
        except Exception as e:
            logger.error(f"Failed to decode calldata for {function_data['signature']}: {e}")
            raise CalldataDecodingError(f"Failed to parse calldata for {function_data['signature']}: {e}") from e

        args = DecodedArguments(
            (self._convert_decoded_value(value, input_def) for value, input_def in zip(decoded_values, inputs)),
            names=function_data['param_names'],
        )

        logger.debug(f"Decoded {function_data['signature']}: {list(args)}")
        return DecodedCall(
            function_name=function_data['name'],
            signature=function_data['signature'],
            selector=selector,
            args=args,
            function_abi=function_abi,
        )
