"""
ABI handling for the clear signing formatter.

This module provides function signature and selector utilities over a
contract ABI.
"""

from typing import Any, Dict, Iterator, List, Optional

from eth_utils import keccak


class ABI:
    """
    Class to interact with contract ABI.
    Handles function selector calculation and ABI lookups.
    """

    def __init__(self, abi: List[Dict[str, Any]]):
        """
        Initialize with an ABI.

        Args:
            abi: Contract ABI as a list of dictionaries
        """
        self.abi = abi

    @staticmethod
    def _function_signature_to_selector(signature: str) -> str:
        """
        Convert a function signature to a function selector.

        Args:
            signature: Function signature (e.g., "transfer(address,uint256)")

        Returns:
            Function selector as hex string (e.g., "0xa9059cbb")
        """
        return "0x" + keccak(text=signature).hex()[:8]

    def _param_abi_type_to_str(self, param: Dict[str, Any]) -> str:
        """
        Recursively convert ABI input types into signature strings.

        Args:
            param: Parameter definition from ABI

        Returns:
            Type string for signature (e.g., "address", "(uint256,address)[]")
        """
        type_str = param["type"]
        if type_str.startswith("tuple"):
            inner = ",".join(
                self._param_abi_type_to_str(p) for p in param.get("components", [])
            )
            # Keep any array suffix: tuple[] -> (..)[], tuple[2][] -> (..)[2][]
            return f"({inner})" + type_str[5:]
        return type_str

    def functions(self) -> Iterator[Dict[str, Any]]:
        for item in self.abi:
            if item.get("type") == "function":
                yield item

    def signature(self, item: Dict[str, Any]) -> str:
        native_types = ",".join(self._param_abi_type_to_str(p) for p in item.get("inputs", []))
        return f"{item['name']}({native_types})"

    def input_types(self, item: Dict[str, Any]) -> List[str]:
        return [self._param_abi_type_to_str(p) for p in item.get("inputs", [])]

    def find_function_by_selector(self, selector: str) -> Optional[Dict[str, Any]]:
        """
        Find function by selector in ABI.

        The selector is the first 4 bytes of the keccak256 hash of the function signature,
        e.g., keccak256("transfer(address,uint256)") = '0xa9059cbb'.

        Args:
            selector: Function selector as hex string

        Returns:
            Dictionary with function metadata, or None if no function matches:
            - name: Function name
            - param_names: List of parameter names
            - signature: Full function signature
            - selector: Function selector
            - stateMutability: Function state mutability (payable, nonpayable, view, pure)
            - abi: The ABI entry itself
        """
        for item in self.functions():
            signature = self.signature(item)
            computed_selector = self._function_signature_to_selector(signature)
            if computed_selector == selector.lower():
                inputs = item.get("inputs", [])
                return {
                    "name": item["name"],
                    "param_names": [inp.get("name") for inp in inputs],
                    "signature": signature,
                    "selector": computed_selector,
                    "stateMutability": item.get("stateMutability", "nonpayable"),
                    "abi": item,
                }
        return None
