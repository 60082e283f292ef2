from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from erc7730_kg.contracts.errors import GeneratorFailure, ValidationFailure
from erc7730_kg.contracts.identity import ContractIdentity
from erc7730_kg.core.generator.invoker import (
    GeneratorInvoker,
    create_invoker,
    load_descriptor,
    output_path_for,
)
from erc7730_kg.core.generator.process import SubprocessGenerator
from tests.helpers.fakes import FakeGenerator

IDENTITY = ContractIdentity(
    chain_id="11155111",
    contract_address="0x5FbDB2315678afecb367f032d93F642f64180aa3",
    contract_name="Token",
    artifact_path="artifacts/contracts/Token.sol/Token.json",
    source_path="contracts/Token.sol",
)


class TestOutputPath:
    def test_under_deployment_artifacts(self, tmp_path: Path):
        (tmp_path / "chain-1").mkdir()
        identity = ContractIdentity(contract_name="Token", deployment_id="chain-1")

        path = output_path_for(identity, deployments_dir=tmp_path, cwd=tmp_path / "cwd")

        assert path == tmp_path / "chain-1" / "artifacts" / "Token-erc7730.json"

    def test_working_directory_without_deployment(self, tmp_path: Path):
        path = output_path_for(IDENTITY, deployments_dir=tmp_path / "d", cwd=tmp_path)

        assert path == tmp_path / "Token-erc7730.json"

    def test_unknown_deployment_uses_working_directory(self, tmp_path: Path):
        identity = ContractIdentity(contract_name="Token", deployment_id="missing")

        path = output_path_for(identity, deployments_dir=tmp_path, cwd=tmp_path / "cwd")

        assert path == tmp_path / "cwd" / "Token-erc7730.json"

    def test_generic_fallback_name(self, tmp_path: Path):
        path = output_path_for(ContractIdentity(), deployments_dir=tmp_path, cwd=tmp_path)

        assert path.name == "contract-erc7730.json"


class TestGeneratorInvoker:
    @pytest.mark.asyncio
    async def test_generate_passes_typed_config(self, tmp_path: Path):
        adapter = FakeGenerator()
        invoker = GeneratorInvoker(adapter, deployments_dir=tmp_path, cwd=tmp_path)

        output = await invoker.generate(IDENTITY)

        assert output.stdout == "generated\n"
        config = adapter.configs[0]
        assert config.chain_id == "11155111"
        assert config.contract_address == IDENTITY.contract_address
        assert config.artifact_path == IDENTITY.artifact_path
        assert config.source_path == "contracts/Token.sol"
        assert config.output_path == tmp_path / "Token-erc7730.json"
        assert config.output_path.exists()

    @pytest.mark.asyncio
    async def test_missing_identity_fails_before_running(self, tmp_path: Path):
        adapter = FakeGenerator()
        invoker = GeneratorInvoker(adapter, deployments_dir=tmp_path, cwd=tmp_path)

        with pytest.raises(ValidationFailure):
            await invoker.generate(ContractIdentity(chain_id="1", contract_name="Token"))

        assert adapter.configs == []

    @pytest.mark.asyncio
    async def test_non_zero_exit_raises_with_stderr(self, tmp_path: Path):
        adapter = FakeGenerator(returncode=2, stderr="abi not found")
        invoker = GeneratorInvoker(adapter, deployments_dir=tmp_path, cwd=tmp_path)

        with pytest.raises(GeneratorFailure) as info:
            await invoker.generate(IDENTITY)

        assert info.value.returncode == 2
        assert info.value.stderr == "abi not found"

    @pytest.mark.asyncio
    async def test_missing_output_file_only_warns(self, tmp_path: Path, caplog):
        invoker = GeneratorInvoker(
            FakeGenerator(write=False), deployments_dir=tmp_path, cwd=tmp_path
        )

        with caplog.at_level(logging.WARNING):
            output = await invoker.generate(IDENTITY)

        assert output.ok
        assert "was not written" in caplog.text

    @pytest.mark.asyncio
    async def test_explicit_output_path_directory_created(self, tmp_path: Path):
        adapter = FakeGenerator()
        invoker = GeneratorInvoker(adapter, deployments_dir=tmp_path, cwd=tmp_path)
        target = tmp_path / "out" / "nested" / "descriptor.json"

        await invoker.generate(IDENTITY, target)

        assert target.exists()


def test_create_invoker_injects_command(tmp_path: Path):
    invoker = create_invoker(
        adapter_path="erc7730_kg.core.generator.process:SubprocessGenerator",
        command=["my-tool", "--flag"],
        deployments_dir=tmp_path,
    )

    assert isinstance(invoker._adapter, SubprocessGenerator)
    assert invoker._adapter._command == ["my-tool", "--flag"]


def test_create_invoker_rejects_non_adapter(tmp_path: Path):
    with pytest.raises(TypeError):
        create_invoker(
            adapter_path="pathlib:PurePath",
            command=[],
            deployments_dir=tmp_path,
        )


class TestLoadDescriptor:
    def test_reads_json(self, tmp_path: Path):
        path = tmp_path / "d.json"
        path.write_text(json.dumps({"context": {"$id": "Token"}}), encoding="utf-8")

        assert load_descriptor(path) == {"context": {"$id": "Token"}}

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ValidationFailure, match="not found"):
            load_descriptor(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path: Path):
        path = tmp_path / "d.json"
        path.write_text("{", encoding="utf-8")

        with pytest.raises(ValidationFailure, match="not valid JSON"):
            load_descriptor(path)
