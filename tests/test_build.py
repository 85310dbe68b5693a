"""Tests for project compilation."""

import json

import pytest
import solcx

from cape_build.compiler.build import MAX_CONTRACT_SIZE, artifact_path, compile_project, discover_sources
from cape_build.compiler.models import NativeCompilerBuild
from cape_build.exceptions import CompilationError
from cape_build.runtime.tasks import TASK_COMPILE, TASK_COMPILE_SOLIDITY_GET_SOLC_BUILD

NATIVE = NativeCompilerBuild("/usr/bin/solc", "0.8.0", "0.8.0-dummy-long-version")


@pytest.fixture
def sources(project_config):
    contracts = project_config.paths.sources_dir
    (contracts / "token").mkdir(parents=True)
    (contracts / "CAPE.sol").write_text("pragma solidity ^0.8.0; contract CAPE {}")
    (contracts / "token" / "Token.sol").write_text("pragma solidity ^0.8.0; interface IToken {}")
    return contracts


@pytest.fixture
def build_requests(registry):
    """Record every solc build request and answer with a native build."""
    requests = []

    def handler(args, runtime, run_super):
        requests.append(args["version"])
        return NATIVE

    registry.register(TASK_COMPILE_SOLIDITY_GET_SOLC_BUILD, handler)
    return requests


@pytest.fixture
def fake_compile(monkeypatch, sources):
    calls = []

    def compile_files(source_files, **kwargs):
        calls.append((source_files, kwargs))
        cape = str(sources / "CAPE.sol")
        token = str(sources / "token" / "Token.sol")
        return {
            f"{cape}:CAPE": {"abi": [{"type": "constructor"}], "bin": "6080604052", "bin-runtime": "6080"},
            f"{token}:IToken": {"abi": [], "bin": "", "bin-runtime": ""},
        }

    monkeypatch.setattr(solcx, "compile_files", compile_files)
    return calls


def test_discover_sources(sources):
    found = discover_sources(sources)

    assert [p.name for p in found] == ["CAPE.sol", "Token.sol"]


def test_discover_sources_missing_dir(tmp_path):
    assert discover_sources(tmp_path / "nope") == []


def test_compile_resolves_each_version_once(runtime, build_requests, fake_compile):
    report = compile_project(runtime)

    assert build_requests == ["0.8.0"]
    assert report.builds == {"0.8.0": NATIVE}
    assert len(fake_compile) == 1
    source_files, kwargs = fake_compile[0]
    assert len(source_files) == 2
    assert kwargs["solc_binary"] == "/usr/bin/solc"
    assert kwargs["optimize"] is True
    assert kwargs["optimize_runs"] == 200


def test_compile_writes_artifacts(runtime, build_requests, fake_compile):
    report = compile_project(runtime)

    artifacts_dir = runtime.config.paths.artifacts_dir
    assert sorted(p.name for p in report.artifacts) == ["CAPE.json", "IToken.json"]

    artifact = json.loads((artifacts_dir / "CAPE.sol" / "CAPE.json").read_text())
    assert artifact["contractName"] == "CAPE"
    assert artifact["bytecode"] == "0x6080604052"
    assert artifact["deployedBytecode"] == "0x6080"
    assert artifact["solcBuild"]["compilerPath"] == "/usr/bin/solc"
    assert artifact["solcBuild"]["isSolcJs"] is False


def test_compile_sizes_skip_interfaces(runtime, build_requests, fake_compile):
    report = compile_project(runtime)

    assert [c.name for c in report.contracts] == ["CAPE"]
    assert report.contracts[0].deployed_size == 2
    assert report.contracts[0].initcode_size == 5
    assert report.oversized == []


def test_compile_flags_oversized_contracts(runtime, build_requests, monkeypatch, sources):
    big = "00" * (MAX_CONTRACT_SIZE + 1)
    monkeypatch.setattr(
        solcx,
        "compile_files",
        lambda files, **kw: {f"{files[0]}:Big": {"abi": [], "bin": big, "bin-runtime": big}},
    )

    report = compile_project(runtime)

    assert [c.name for c in report.oversized] == ["Big"]


def test_compile_with_no_sources(runtime, build_requests):
    report = compile_project(runtime)

    assert report.contracts == []
    assert build_requests == []


def test_compile_wraps_solc_errors(runtime, build_requests, monkeypatch, sources):
    def compile_files(source_files, **kwargs):
        raise solcx.exceptions.SolcError(
            message="solc returned non-zero exit status",
            command=["solc", "--combined-json"],
            return_code=1,
            stdin_data="",
            stdout_data="",
            stderr_data="ParserError: Expected ';'",
        )

    monkeypatch.setattr(solcx, "compile_files", compile_files)

    with pytest.raises(CompilationError, match="0.8.0"):
        compile_project(runtime)


def test_compile_task_dispatch(runtime, build_requests, fake_compile, sources):
    report = runtime.run(TASK_COMPILE, sources=[sources / "CAPE.sol"])

    assert len(fake_compile[0][0]) == 1
    assert report.builds["0.8.0"] is NATIVE


def test_artifacts_mirror_source_layout(runtime, build_requests, monkeypatch, project_config):
    """Same-named contracts in different files get separate artifacts."""
    contracts = project_config.paths.sources_dir
    for sub in ("a", "b"):
        (contracts / sub).mkdir(parents=True)
        (contracts / sub / "Token.sol").write_text("pragma solidity ^0.8.0; contract Token {}")

    def compile_files(source_files, **kwargs):
        return {
            f"{path}:Token": {"abi": [], "bin": "6080", "bin-runtime": "60"}
            for path in source_files
        }

    monkeypatch.setattr(solcx, "compile_files", compile_files)

    report = compile_project(runtime)

    artifacts_dir = runtime.config.paths.artifacts_dir
    assert report.artifacts == [
        artifacts_dir / "a" / "Token.sol" / "Token.json",
        artifacts_dir / "b" / "Token.sol" / "Token.json",
    ]
    assert all(p.exists() for p in report.artifacts)
    first = json.loads(report.artifacts[0].read_text())
    assert first["sourceName"].endswith("a/Token.sol")


def test_artifact_path_outside_sources_uses_file_name(tmp_path):
    path = artifact_path(tmp_path / "artifacts", tmp_path / "contracts", "/elsewhere/Lib.sol", "Lib")

    assert path == tmp_path / "artifacts" / "Lib.sol" / "Lib.json"


def test_native_build_without_path_fails(runtime, registry, fake_compile):
    """A matching SOLC_VERSION with no SOLC_PATH must not fall back to another solc."""
    registry.register(
        TASK_COMPILE_SOLIDITY_GET_SOLC_BUILD,
        lambda args, rt, run_super: NativeCompilerBuild(None, "0.8.0", "0.8.0-dummy-long-version"),
    )

    with pytest.raises(CompilationError, match="SOLC_PATH"):
        compile_project(runtime)

    assert fake_compile == []
    assert not runtime.config.paths.artifacts_dir.exists()
