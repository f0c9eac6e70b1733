import json

import pytest

from clear_signing.main import main
from helpers import USDC, USDT, VITALIK

SWAP_CALLDATA_TYPES = ["(address,address,uint256,uint256,address,uint256)"]


@pytest.fixture(autouse=True)
def fixture_clean_env(monkeypatch):
    for name in ("ERC7730_FILE", "DESCRIPTOR_URL", "CALLDATA", "DESCRIPTOR_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(name="swap_calldata")
def fixture_swap_calldata(encode_call):
    return encode_call(
        "swapExactTokensForTokens",
        SWAP_CALLDATA_TYPES,
        [(USDC, USDT, 1_000_000_000, 990_000_000, VITALIK, 1_900_000_000)],
    )


def test_preview_markdown(descriptor_path, swap_calldata, capsys):
    code = main(["--erc7730_file", str(descriptor_path), "--calldata", swap_calldata])
    out = capsys.readouterr().out

    assert code == 0
    assert out.startswith("## Swap tokens")
    assert "**Function:** `swapExactTokensForTokens`" in out
    assert "| Amount In | 1.00K |" in out
    assert "| Token In | USDC Token |" in out


def test_preview_json(descriptor_path, swap_calldata, capsys):
    code = main(["--erc7730_file", str(descriptor_path), "--calldata", swap_calldata, "--json"])
    payload = json.loads(capsys.readouterr().out)

    assert code == 0
    assert payload["intent"] == "Swap tokens"
    assert payload["functionName"] == "swapExactTokensForTokens"
    assert payload["fields"][2]["rawValue"] == 1_000_000_000


def test_environment_supplies_arguments(monkeypatch, descriptor_path, swap_calldata, capsys):
    monkeypatch.setenv("ERC7730_FILE", str(descriptor_path))
    monkeypatch.setenv("CALLDATA", swap_calldata)

    assert main([]) == 0
    assert "## Swap tokens" in capsys.readouterr().out


def test_preview_error_exit_code(descriptor_path, capsys):
    code = main(["--erc7730_file", str(descriptor_path), "--calldata", "0xdeadbeef"])
    captured = capsys.readouterr()

    assert code == 1
    assert captured.err.startswith("Error: No function in the contract ABI matches selector 0xdeadbeef")


def test_missing_descriptor_exit_code(tmp_path, capsys):
    code = main(["--erc7730_file", str(tmp_path / "nope.json"), "--calldata", "0xdeadbeef"])
    assert code == 1
    assert "Failed to load ERC-7730 descriptor" in capsys.readouterr().err


def test_descriptor_is_required():
    with pytest.raises(SystemExit):
        main(["--calldata", "0xdeadbeef"])


def test_calldata_is_required(descriptor_path):
    with pytest.raises(SystemExit):
        main(["--erc7730_file", str(descriptor_path)])


def test_validate(descriptor_path, capsys):
    code = main(["--erc7730_file", str(descriptor_path), "--validate"])
    out = capsys.readouterr().out

    assert code == 0
    assert "**Valid:** ✅ Yes" in out
    assert "Function 'emergencyWithdraw' has no display format defined" in out


def test_validate_invalid_descriptor(tmp_path, capsys):
    path = tmp_path / "empty.json"
    path.write_text("{}")

    assert main(["--erc7730_file", str(path), "--validate"]) == 1
    assert "Missing 'context' field" in capsys.readouterr().out


def test_generate_from_artifact(tmp_path, descriptor, capsys):
    artifact = tmp_path / "DemoRouter.artifact.json"
    artifact.write_text(json.dumps({"contractName": "DemoRouter", "abi": descriptor.abi}))
    output = tmp_path / "generated.json"

    code = main(["--generate-from-abi", str(artifact), "--output", str(output)])
    generated = json.loads(output.read_text())

    assert code == 0
    assert capsys.readouterr().out == ""
    assert "swapExactTokensForTokens" in generated["messages"]
    assert "quote" not in generated["messages"]


def test_generate_to_stdout(tmp_path, descriptor, capsys):
    abi_file = tmp_path / "abi.json"
    abi_file.write_text(json.dumps(descriptor.abi))

    assert main(["--generate-from-abi", str(abi_file)]) == 0
    assert json.loads(capsys.readouterr().out)["messages"]["simpleTransfer"]["intent"] == "Execute simpleTransfer"


def test_invalid_timeout_from_environment(monkeypatch, descriptor_path, capsys):
    monkeypatch.setenv("DESCRIPTOR_TIMEOUT", "soon")

    code = main(["--erc7730_file", str(descriptor_path), "--validate"])

    assert code == 1
    assert "Error: Invalid timeout 'soon'" in capsys.readouterr().err


def test_timeout_must_be_positive(descriptor_path, capsys):
    assert main(["--erc7730_file", str(descriptor_path), "--validate", "--timeout", "0"]) == 1
    assert "must be positive" in capsys.readouterr().err


def test_generate_missing_abi_file(tmp_path, capsys):
    assert main(["--generate-from-abi", str(tmp_path / "missing.json")]) == 1
    assert capsys.readouterr().err.startswith("Error: ")


@pytest.mark.parametrize("content", ["{not json", "42"])
def test_generate_unreadable_abi(tmp_path, capsys, content):
    abi_file = tmp_path / "abi.json"
    abi_file.write_text(content)

    assert main(["--generate-from-abi", str(abi_file)]) == 1
    assert capsys.readouterr().err.startswith("Error: ")
