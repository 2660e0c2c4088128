import json

import pytest
from eth_utils import to_checksum_address

from merkle_airdrop import build, format_hash
from merkle_airdrop.cli import EXIT_RUNTIME_ERROR, EXIT_SUCCESS, EXIT_VERIFICATION_FAILED, main, read_whitelist

from conftest import OUTSIDER, USER1, USER2, USER3, WHITELIST


@pytest.fixture
def whitelist_file(tmp_path):
    path = tmp_path / "whitelist.txt"
    path.write_text(f"# airdrop round 1\n{USER1}\n\n{to_checksum_address(USER2)}  # team\n{USER3}\n")
    return path


def test_read_whitelist_text(whitelist_file):
    assert read_whitelist(whitelist_file) == [USER1, to_checksum_address(USER2), USER3]


def test_read_whitelist_json(tmp_path):
    path = tmp_path / "whitelist.json"
    path.write_text(json.dumps(WHITELIST))
    assert read_whitelist(path) == WHITELIST


def test_build_writes_dump(whitelist_file, tmp_path, capsys):
    out = tmp_path / "merkle.json"
    assert main(["build", str(whitelist_file), "--out", str(out), "--solidity"]) == EXIT_SUCCESS

    data = json.loads(out.read_text())
    root = format_hash(build(WHITELIST).root)
    assert data["root"] == root

    printed = capsys.readouterr().out
    assert f"Merkle Root: {root}" in printed
    assert "new bytes32[]" in printed


def test_proof_and_verify_round_trip(whitelist_file, tmp_path, capsys):
    out = tmp_path / "merkle.json"
    main(["build", str(whitelist_file), "--out", str(out)])
    capsys.readouterr()

    assert main(["proof", str(out), USER2, "--json"]) == EXIT_SUCCESS
    payload = json.loads(capsys.readouterr().out)
    assert payload["address"] == to_checksum_address(USER2)

    root = json.loads(out.read_text())["root"]
    assert main(["verify", root, USER2] + payload["proof"]) == EXIT_SUCCESS
    assert "is whitelisted: True" in capsys.readouterr().out

    assert main(["verify", root, OUTSIDER] + payload["proof"]) == EXIT_VERIFICATION_FAILED


def test_proof_for_outsider(whitelist_file, tmp_path, capsys):
    out = tmp_path / "merkle.json"
    main(["build", str(whitelist_file), "--out", str(out)])
    assert main(["proof", str(out), OUTSIDER]) == EXIT_VERIFICATION_FAILED
    assert "NOT in the whitelist" in capsys.readouterr().out


def test_errors_map_to_runtime_exit(tmp_path, capsys):
    empty = tmp_path / "empty.txt"
    empty.write_text("# nothing here\n")
    assert main(["build", str(empty), "--out", str(tmp_path / "x.json")]) == EXIT_RUNTIME_ERROR
    assert main(["verify", "0x1234", USER1]) == EXIT_RUNTIME_ERROR
    assert main(["proof", str(tmp_path / "missing.json"), USER1]) == EXIT_RUNTIME_ERROR
    assert "[ERROR]" in capsys.readouterr().err


def test_malformed_dump_is_reported(tmp_path, capsys):
    dump = tmp_path / "broken.json"
    dump.write_text(json.dumps({"format": "merkle-airdrop-v1", "root": "0x" + "00" * 32}))
    assert main(["proof", str(dump), USER1]) == EXIT_RUNTIME_ERROR
    assert "[ERROR] Malformed merkle dump" in capsys.readouterr().err
