from __future__ import annotations

from pathlib import Path

import pytest

from erc7730_kg.contracts.errors import ValidationFailure
from erc7730_kg.contracts.identity import ContractIdentity
from erc7730_kg.core.resolver.chain import chain_id_from_deployment_id
from erc7730_kg.core.resolver.resolver import IdentityResolver, require_identity
from tests.helpers.hardhat import journal_with_chain, make_artifact, make_deployment

ADDRESS = "0x5FbDB2315678afecb367f032d93F642f64180aa3"


@pytest.fixture
def project(tmp_path: Path) -> Path:
    (tmp_path / "ignition" / "deployments").mkdir(parents=True)
    return tmp_path


@pytest.fixture
def resolver(project: Path) -> IdentityResolver:
    return IdentityResolver(
        deployments_dir=project / "ignition" / "deployments",
        artifacts_dir=project / "artifacts",
        default_chain_id="31337",
    )


@pytest.mark.parametrize(
    "deployment_id, expected",
    [
        ("chain-11155111", "11155111"),
        ("ChainModule#Token-chain-11155111", "11155111"),
        ("my-deployment", None),
        ("chain-", None),
        (None, None),
    ],
)
def test_chain_id_from_deployment_id(deployment_id, expected):
    assert chain_id_from_deployment_id(deployment_id) == expected


class TestIdentityResolver:
    @pytest.mark.asyncio
    async def test_resolves_from_deployment(self, project: Path, resolver: IdentityResolver):
        make_deployment(
            project / "ignition" / "deployments",
            "chain-11155111",
            addresses={"CounterModule#ComplexCounter": ADDRESS},
            journal=journal_with_chain(1),
            artifacts={
                "CounterModule#ComplexCounter.json": {
                    "contractName": "ComplexCounter",
                    "sourceName": "contracts/ComplexCounter.sol",
                }
            },
        )

        resolution = await resolver.resolve("chain-11155111")
        identity = resolution.identity

        assert identity.contract_address == ADDRESS
        assert identity.contract_name == "ComplexCounter"
        assert identity.source_path == "contracts/ComplexCounter.sol"
        assert identity.deployment_id == "chain-11155111"
        # deployment id token wins over the journal
        assert identity.chain_id == "11155111"
        assert resolution.diagnostics == []

    @pytest.mark.asyncio
    async def test_chain_from_journal_without_token(self, project: Path, resolver: IdentityResolver):
        make_deployment(
            project / "ignition" / "deployments",
            "sepolia-release",
            addresses={"M#Token": ADDRESS},
            journal=journal_with_chain(11155111),
        )

        resolution = await resolver.resolve("sepolia-release")

        assert resolution.identity.chain_id == "11155111"

    @pytest.mark.asyncio
    async def test_chain_token_without_journal(self, resolver: IdentityResolver):
        resolution = await resolver.resolve("ChainModule#Token-chain-11155111")

        assert resolution.identity.chain_id == "11155111"
        assert any("not found" in d.message for d in resolution.diagnostics)

    @pytest.mark.asyncio
    async def test_explicit_chain_wins(self, resolver: IdentityResolver):
        resolution = await resolver.resolve("chain-11155111", chain_id="8453")

        assert resolution.identity.chain_id == "8453"

    @pytest.mark.asyncio
    async def test_default_chain_when_nothing_matches(self, resolver: IdentityResolver):
        resolution = await resolver.resolve()

        assert resolution.identity.chain_id == "31337"
        assert any("local default" in d.message for d in resolution.diagnostics)

    @pytest.mark.asyncio
    async def test_falls_back_to_artifact_scan(self, project: Path, resolver: IdentityResolver):
        make_artifact(project / "artifacts", "Token.sol", "Token")

        resolution = await resolver.resolve()
        identity = resolution.identity

        assert identity.contract_name == "Token"
        assert identity.artifact_path.endswith("Token.sol/Token.json")
        assert identity.contract_address == ""
        assert any("contract_address" in d.message for d in resolution.diagnostics)

    @pytest.mark.asyncio
    async def test_empty_deployment_falls_back_to_scan(self, project: Path, resolver: IdentityResolver):
        make_deployment(project / "ignition" / "deployments", "chain-10")
        make_artifact(project / "artifacts", "Token.sol", "Token")

        resolution = await resolver.resolve("chain-10")

        assert resolution.identity.contract_name == "Token"
        assert resolution.identity.chain_id == "10"
        assert {d.source for d in resolution.diagnostics} >= {"deployment", "resolver"}

    @pytest.mark.asyncio
    async def test_explicit_values_override(self, project: Path, resolver: IdentityResolver):
        make_artifact(project / "artifacts", "Token.sol", "Token")

        resolution = await resolver.resolve(
            contract_address=ADDRESS, contract_name="MyToken", chain_id="1"
        )

        assert resolution.identity.contract_address == ADDRESS
        assert resolution.identity.contract_name == "MyToken"
        assert resolution.identity.artifact_path.endswith("Token.json")
        assert resolution.identity.missing() == []

    @pytest.mark.asyncio
    async def test_only_test_artifacts_leaves_identity_empty(self, project: Path, resolver: IdentityResolver):
        make_artifact(project / "artifacts", "Token.t.sol", "TokenTest")

        resolution = await resolver.resolve()

        assert resolution.identity.contract_name == ""
        assert resolution.identity.artifact_path is None


class TestRequireIdentity:
    def test_passes_complete_identity(self):
        identity = ContractIdentity(chain_id="1", contract_address=ADDRESS, contract_name="T")
        assert require_identity(identity) is identity

    def test_lists_every_missing_field(self):
        with pytest.raises(ValidationFailure) as info:
            require_identity(ContractIdentity(chain_id="1"))

        assert info.value.missing == ["contract_address", "contract_name"]
        assert "contract_address" in str(info.value)
