"""Unit tests for the command-line entry point."""

import json
from pathlib import Path

import pytest

from magicdrop import main as main_module
from magicdrop.modules.exceptions import DeploymentFailedError, OperationCancelled, SetupLockedAbort


def test_missing_collection_exits_non_zero(tmp_path: Path):
    assert main_module.main(["--collections-dir", str(tmp_path), "deploy", "missing"]) == 1


def test_invalid_config_exits_non_zero(collections_dir: Path, monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("should not reach the chain")

    monkeypatch.setattr(main_module, "build_contract_manager", fail)

    code = main_module.main([
        "--collections-dir", str(collections_dir), "deploy", "foo", "--setup-contract", "yes",
    ])

    assert code == 1


def test_unknown_chain_name(collections_dir: Path):
    assert main_module.main(["--collections-dir", str(collections_dir), "deploy", "foo", "-c", "solana"]) == 1


@pytest.mark.parametrize("error, code", [
    (SetupLockedAbort("already set up"), 1),
    (OperationCancelled("cancelled"), 0),
])
def test_terminal_errors_map_to_exit_codes(monkeypatch, error, code):
    async def fake_run(args):
        raise error

    monkeypatch.setattr(main_module, "run", fake_run)

    assert main_module.main(["setup", "foo", "--contract", "0x" + "00" * 20]) == code


def test_deploy_dispatch(collections_dir: Path, monkeypatch, cm):
    calls = {}

    async def fake_build(args, config):
        return cm

    async def fake_deploy(manager, config, config_file, option, total_tokens):
        calls.update(config=config, option=option, total_tokens=total_tokens)
        return "0x" + "ab" * 20

    monkeypatch.setattr(main_module, "build_contract_manager", fake_build)
    monkeypatch.setattr(main_module, "deploy_contract", fake_deploy)

    code = main_module.main([
        "--collections-dir", str(collections_dir), "deploy", "foo", "--chain", "base", "-s", "no",
    ])

    assert code == 0
    assert calls["config"]["chainId"] == 8453
    assert calls["option"] == "no"
    assert calls["total_tokens"] is None


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        main_module.build_parser().parse_args([])


@pytest.mark.parametrize("amount", ["abc", "NaN", "Infinity", "0", "-1", "0.0000000000000000001"])
def test_transfer_rejects_bad_amount(collections_dir: Path, monkeypatch, amount):
    def fail(*args, **kwargs):
        raise AssertionError("should not reach the chain")

    monkeypatch.setattr(main_module, "build_contract_manager", fail)

    with pytest.raises(SystemExit) as excinfo:
        main_module.main([
            "--collections-dir", str(collections_dir), "transfer", "foo",
            "--to", "0x" + "22" * 20, "--amount", amount,
        ])
    assert excinfo.value.code == 2


def test_transfer_sends_amount_in_wei(collections_dir: Path, monkeypatch, cm, fake_signer):
    async def fake_build(args, config):
        return cm

    monkeypatch.setattr(main_module, "build_contract_manager", fake_build)

    code = main_module.main([
        "--collections-dir", str(collections_dir), "transfer", "foo",
        "--to", "0x" + "22" * 20, "--amount", "0.05",
    ])

    assert code == 0
    transaction = fake_signer.send_transaction.call_args.args[1]
    assert transaction.value == 5 * 10 ** 16
    assert transaction.gas_limit == 21000


def test_deployment_failure_exits_non_zero(monkeypatch):
    async def fake_run(args):
        raise DeploymentFailedError("Failed to deploy contract: not mined")

    monkeypatch.setattr(main_module, "run", fake_run)

    assert main_module.main(["balance", "foo"]) == 1


class TestSetupCommand:
    """Tests for the setup subcommand."""

    @pytest.fixture
    def setup_calls(self, monkeypatch, cm):
        calls = {}

        async def fake_build(args, config):
            return cm

        async def fake_setup(manager, contract, token_standard, **kwargs):
            calls.update(kwargs, contract=contract, token_standard=token_standard)
            return "0x" + "cd" * 32

        monkeypatch.setattr(main_module, "build_contract_manager", fake_build)
        monkeypatch.setattr(main_module, "setup_contract", fake_setup)
        return calls

    def test_forwards_stages_from_collection_file(self, collections_dir: Path, setup_calls):
        stages = [{"price": "0.1", "startDate": 1, "endDate": 2}]
        config_path = collections_dir / "projects" / "foo" / "project.json"
        config = json.loads(config_path.read_text())
        config["stages"] = stages
        config_path.write_text(json.dumps(config))

        code = main_module.main([
            "--collections-dir", str(collections_dir), "setup", "foo", "--contract", "0x" + "ab" * 20,
        ])

        assert code == 0
        assert json.loads(setup_calls["stages_json"]) == stages
        assert setup_calls["stages_file"] is None

    def test_stages_file_takes_precedence(self, collections_dir: Path, setup_calls, tmp_path: Path):
        config_path = collections_dir / "projects" / "foo" / "project.json"
        config = json.loads(config_path.read_text())
        config["stages"] = [{"price": "0.1", "startDate": 1, "endDate": 2}]
        config_path.write_text(json.dumps(config))

        main_module.main([
            "--collections-dir", str(collections_dir), "setup", "foo",
            "--contract", "0x" + "ab" * 20, "--stages-file", str(tmp_path / "stages.json"),
        ])

        assert setup_calls["stages_file"] == str(tmp_path / "stages.json")
        assert setup_calls["stages_json"] is None

    def test_without_stages_leaves_source_to_prompt(self, collections_dir: Path, setup_calls):
        main_module.main([
            "--collections-dir", str(collections_dir), "setup", "foo", "--contract", "0x" + "ab" * 20,
        ])

        assert setup_calls["stages_json"] is None
        assert setup_calls["stages_file"] is None
