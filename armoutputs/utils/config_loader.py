"""
Config loader for tfvars -> typed ClusterConfiguration.

Functional, pure helpers that parse a minimal subset of .tfvars syntax
for the variables used by this repo. No external dependencies.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional, Tuple, Type, TypeVar

from armoutputs.iac_types import (
    Addon,
    AgentPoolProfile,
    AvailabilityProfile,
    ClusterConfiguration,
    IdentityMode,
    MasterProfile,
    OrchestratorSettings,
    StorageProfile,
)

DEFAULT_TFVARS_FILE = "vars/dev.tfvars"

E = TypeVar("E", bound=Enum)


def _strip_quotes(value: str) -> str:
    if value.startswith('"') and value.endswith('"'):
        return value[1:-1]
    if value.startswith("'") and value.endswith("'"):
        return value[1:-1]
    return value


def _parse_tfvars(content: str) -> Dict[str, str]:
    """Very small tfvars parser for simple key = value pairs.

    Supports strings, integers, booleans on single lines.
    Lines starting with '#' are ignored.
    """
    vars_map: Dict[str, str] = {}
    for raw in content.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, val = line.split("=", 1)
        key = key.strip()
        val = val.strip()
        # Remove potential trailing comments
        if " #" in val:
            val = val.split(" #", 1)[0].strip()
        vars_map[key] = _strip_quotes(val)
    return vars_map


def _to_bool(value: str) -> bool:
    if value.lower() in ("true", "1"):
        return True
    if value.lower() in ("false", "0"):
        return False
    raise ValueError(f"Invalid boolean value: {value}")


def _to_int(value: str) -> int:
    try:
        return int(value)
    except ValueError as ex:
        raise ValueError(f"Invalid int value: {value}") from ex


def _to_enum(enum_type: Type[E], value: str) -> E:
    try:
        return enum_type(value)
    except ValueError as ex:
        allowed = ", ".join(str(m.value) for m in enum_type)
        raise ValueError(
            f"Invalid {enum_type.__name__} value: {value} (expected one of: {allowed})"
        ) from ex


def _required(vars_map: Dict[str, str], key: str) -> str:
    if key not in vars_map:
        raise KeyError(f"Missing required var: {key}")
    return vars_map[key]


def _split_list(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _parse_agent_pool(entry: str) -> AgentPoolProfile:
    """Parse `name:AvailabilityProfile[:StorageProfile]`."""
    parts = [p.strip() for p in entry.split(":")]
    if len(parts) not in (2, 3) or not parts[0]:
        raise ValueError(
            f"Invalid agent pool entry: {entry} "
            "(expected name:AvailabilityProfile[:StorageProfile])"
        )
    storage = (
        _to_enum(StorageProfile, parts[2]) if len(parts) == 3 else StorageProfile.MANAGED_DISKS
    )
    return AgentPoolProfile(
        name=parts[0],
        availability_profile=_to_enum(AvailabilityProfile, parts[1]),
        storage_profile=storage,
    )


def _build_agent_pools(vars_map: Dict[str, str]) -> List[AgentPoolProfile]:
    return [_parse_agent_pool(e) for e in _split_list(_required(vars_map, "agent_pools"))]


def _build_master_profile(vars_map: Dict[str, str]) -> MasterProfile:
    hosted = _to_bool(vars_map.get("master_hosted", "false"))
    # Hosted control planes have no master VMs of their own to count.
    count_raw = vars_map.get("master_count", "1") if hosted else _required(vars_map, "master_count")
    return MasterProfile(
        count=_to_int(count_raw),
        availability_profile=_to_enum(
            AvailabilityProfile,
            vars_map.get("master_availability_profile", AvailabilityProfile.AVAILABILITY_SET.value),
        ),
        is_hosted=hosted,
        is_private=_to_bool(vars_map.get("master_private", "false")),
    )


def _build_orchestrator_settings(vars_map: Dict[str, str]) -> OrchestratorSettings:
    addons: FrozenSet[Addon] = frozenset(
        _to_enum(Addon, a) for a in _split_list(vars_map.get("addons", ""))
    )
    return OrchestratorSettings(
        identity_mode=_to_enum(
            IdentityMode,
            vars_map.get("identity_mode", IdentityMode.SERVICE_PRINCIPAL.value),
        ),
        enabled_addons=addons,
    )


def parse_cluster_config(content: str) -> ClusterConfiguration:
    vars_map = _parse_tfvars(content)
    return ClusterConfiguration(
        agent_pool_profiles=_build_agent_pools(vars_map),
        master_profile=_build_master_profile(vars_map),
        orchestrator_settings=_build_orchestrator_settings(vars_map),
    )


def resolve_tfvars_path(*, repo_root: Path, tfvars_file: Optional[str] = None) -> Path:
    # Use default if env var is missing or empty
    if not tfvars_file:
        tfvars_file_env = os.getenv("TFVARS_FILE")
        tfvars_file = (
            tfvars_file_env
            if (tfvars_file_env and tfvars_file_env.strip())
            else DEFAULT_TFVARS_FILE
        )
    vars_path = (repo_root / tfvars_file).resolve()
    if not vars_path.exists():
        raise FileNotFoundError(f"tfvars file not found: {vars_path}")
    return vars_path


def load_deployment_target(
    *, repo_root: Path, tfvars_file: Optional[str] = None
) -> Tuple[str, str, Path]:
    """Return (resource_group_name, deployment_name, base_template_path) for the CDKTF stack.

    The base template holds the resources and variables the outputs refer to;
    a relative path is resolved against repo_root.
    """
    vars_path = resolve_tfvars_path(repo_root=repo_root, tfvars_file=tfvars_file)
    vars_map = _parse_tfvars(vars_path.read_text(encoding="utf-8"))
    return (
        _required(vars_map, "resource_group_name"),
        _required(vars_map, "deployment_name"),
        (repo_root / _required(vars_map, "base_template")).resolve(),
    )


def load_tfvars_config(
    *, repo_root: Path, tfvars_file: Optional[str] = None
) -> ClusterConfiguration:
    vars_path = resolve_tfvars_path(repo_root=repo_root, tfvars_file=tfvars_file)
    return parse_cluster_config(vars_path.read_text(encoding="utf-8"))
