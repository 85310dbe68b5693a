"""
Project compilation.

Sources are grouped by compiler version, a solc build is resolved once
per distinct version through the ``compile:solidity:get-solc-build``
extension point, and one JSON artifact is written per contract.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import solcx

from cape_build.exceptions import CompilationError
from cape_build.runtime.tasks import TASK_COMPILE_SOLIDITY_GET_SOLC_BUILD

logger = logging.getLogger(__name__)

# EIP-170 runtime bytecode limit
MAX_CONTRACT_SIZE = 24_576

OUTPUT_VALUES = ["abi", "bin", "bin-runtime"]


@dataclass(frozen=True)
class ContractSize:
    name: str
    source: str
    deployed_size: int
    initcode_size: int

    @property
    def over_limit(self) -> bool:
        return self.deployed_size > MAX_CONTRACT_SIZE


@dataclass
class CompileReport:
    builds: dict[str, Any] = field(default_factory=dict)
    contracts: list[ContractSize] = field(default_factory=list)
    artifacts: list[Path] = field(default_factory=list)

    @property
    def oversized(self) -> list[ContractSize]:
        return [c for c in self.contracts if c.over_limit]


def discover_sources(sources_dir: Path) -> list[Path]:
    """Find all .sol files under ``sources_dir``, recursively."""
    if not sources_dir.exists():
        return []
    return sorted(f for f in sources_dir.rglob("*.sol") if f.is_file())


def group_by_version(sources: list[Path], version: str) -> dict[str, list[Path]]:
    # Every source currently compiles with the single configured version.
    return {version: list(sources)} if sources else {}


def _hex_size(code: str) -> int:
    return len(bytes.fromhex(code)) if code else 0


def artifact_path(out_dir: Path, sources_dir: Path, source_name: str, name: str) -> Path:
    """Mirror the source layout: contracts/a/Token.sol -> artifacts/a/Token.sol/Token.json."""
    source = Path(source_name)
    try:
        relative = source.resolve().relative_to(sources_dir.resolve())
    except ValueError:
        relative = Path(source.name)
    return out_dir / relative / f"{name}.json"


def _write_artifact(out_dir: Path, sources_dir: Path, key: str, data: dict[str, Any], build: Any) -> Path:
    source_name, _, name = key.rpartition(":")
    artifact = {
        "contractName": name,
        "sourceName": source_name,
        "abi": data.get("abi", []),
        "bytecode": "0x" + data.get("bin", ""),
        "deployedBytecode": "0x" + data.get("bin-runtime", ""),
        "solcBuild": build.to_dict(),
    }
    path = artifact_path(out_dir, sources_dir, source_name, name)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(artifact, indent=2))
    return path


def compile_sources(runtime: Any, version: str, sources: list[Path], report: CompileReport) -> None:
    build = runtime.run(TASK_COMPILE_SOLIDITY_GET_SOLC_BUILD, version=version)
    report.builds[version] = build

    # Without a path py-solc-x would silently pick whatever solc it finds
    if not build.compiler_path:
        raise CompilationError(
            f"solc {version} build has no compiler path (is SOLC_PATH set?)"
        )

    solidity = runtime.config.solidity
    paths = runtime.config.paths
    logger.info("Compiling %d file(s) with solc %s", len(sources), build.long_version)

    try:
        compiled = solcx.compile_files(
            [str(f) for f in sources],
            output_values=OUTPUT_VALUES,
            solc_binary=build.compiler_path,
            optimize=solidity.optimizer_enabled,
            optimize_runs=solidity.optimizer_runs if solidity.optimizer_enabled else None,
            allow_paths=[str(paths.sources_dir)],
        )
    except solcx.exceptions.SolcError as e:
        raise CompilationError(f"solc {version} failed:\n{e}") from e

    out_dir = paths.artifacts_dir
    out_dir.mkdir(parents=True, exist_ok=True)

    for key, data in compiled.items():
        report.artifacts.append(_write_artifact(out_dir, paths.sources_dir, key, data, build))

        runtime_code = data.get("bin-runtime", "")
        creation_code = data.get("bin", "")
        # Interfaces and abstract contracts have no bytecode
        if not runtime_code and not creation_code:
            continue
        size = ContractSize(
            name=key.rpartition(":")[2],
            source=key.rpartition(":")[0],
            deployed_size=_hex_size(runtime_code),
            initcode_size=_hex_size(creation_code),
        )
        if size.over_limit:
            logger.warning(
                "%s is %d bytes, above the EIP-170 limit of %d bytes",
                size.name, size.deployed_size, MAX_CONTRACT_SIZE,
            )
        report.contracts.append(size)


def compile_project(runtime: Any, sources: list[Path] | None = None) -> CompileReport:
    """Compile the project's sources and return a report of builds, sizes and artifacts."""
    if sources is None:
        sources = discover_sources(runtime.config.paths.sources_dir)

    report = CompileReport()
    if not sources:
        logger.warning("No Solidity sources found in %s", runtime.config.paths.sources_dir)
        return report

    for version, files in group_by_version(sources, runtime.config.solidity.version).items():
        compile_sources(runtime, version, files, report)

    logger.info(
        "Compiled %d contract(s) into %s", len(report.contracts), runtime.config.paths.artifacts_dir
    )
    return report
