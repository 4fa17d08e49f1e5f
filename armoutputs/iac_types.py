from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Iterator, List, Optional, Set, Tuple


class AvailabilityProfile(str, Enum):
    AVAILABILITY_SET = "AvailabilitySet"
    VIRTUAL_MACHINE_SCALE_SETS = "VirtualMachineScaleSets"


class StorageProfile(str, Enum):
    STORAGE_ACCOUNT = "StorageAccount"
    MANAGED_DISKS = "ManagedDisks"


class IdentityMode(str, Enum):
    SYSTEM_ASSIGNED = "system-assigned"
    USER_ASSIGNED = "user-assigned"
    SERVICE_PRINCIPAL = "service-principal"


class Addon(str, Enum):
    """Add-ons that contribute template outputs when enabled."""

    APP_GW_INGRESS = "appgw-ingress"


class OutputKind(str, Enum):
    STRING = "string"
    ARRAY = "array"
    INT = "int"


@dataclass(frozen=True)
class AgentPoolProfile:
    name: str
    availability_profile: AvailabilityProfile
    storage_profile: StorageProfile = StorageProfile.MANAGED_DISKS

    @property
    def uses_availability_set(self) -> bool:
        return self.availability_profile is AvailabilityProfile.AVAILABILITY_SET

    @property
    def uses_scale_set(self) -> bool:
        return self.availability_profile is AvailabilityProfile.VIRTUAL_MACHINE_SCALE_SETS

    @property
    def uses_storage_account(self) -> bool:
        return self.storage_profile is StorageProfile.STORAGE_ACCOUNT


@dataclass(frozen=True)
class MasterProfile:
    count: int
    availability_profile: AvailabilityProfile = AvailabilityProfile.AVAILABILITY_SET
    is_hosted: bool = False  # control plane managed by the platform
    is_private: bool = False

    @property
    def uses_availability_set(self) -> bool:
        return self.availability_profile is AvailabilityProfile.AVAILABILITY_SET


@dataclass(frozen=True)
class OrchestratorSettings:
    identity_mode: IdentityMode = IdentityMode.SERVICE_PRINCIPAL
    enabled_addons: FrozenSet[Addon] = frozenset()

    def is_addon_enabled(self, addon: Addon) -> bool:
        return addon in self.enabled_addons

    @property
    def system_assigned_identity_enabled(self) -> bool:
        return self.identity_mode is IdentityMode.SYSTEM_ASSIGNED


@dataclass(frozen=True)
class ClusterConfiguration:
    agent_pool_profiles: List[AgentPoolProfile]
    master_profile: Optional[MasterProfile]
    orchestrator_settings: OrchestratorSettings = field(
        default_factory=OrchestratorSettings
    )

    def has_storage_account_availability_set_pool(self) -> bool:
        return any(
            p.uses_availability_set and p.uses_storage_account
            for p in self.agent_pool_profiles
        )

    def scale_set_pools(self) -> List[AgentPoolProfile]:
        return [p for p in self.agent_pool_profiles if p.uses_scale_set]


@dataclass(frozen=True)
class OutputDescriptor:
    kind: OutputKind
    expression: str

    def to_template(self) -> Dict[str, str]:
        return {"type": self.kind.value, "value": self.expression}


class DuplicateOutputError(ValueError):
    pass


@dataclass(frozen=True)
class OutputSet:
    """Ordered, uniquely named template outputs.

    Instances come from OutputSetBuilder.build() and are never mutated.
    """

    entries: Tuple[Tuple[str, OutputDescriptor], ...] = ()

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __contains__(self, name: object) -> bool:
        return any(n == name for n, _ in self.entries)

    def __getitem__(self, name: str) -> OutputDescriptor:
        for n, descriptor in self.entries:
            if n == name:
                return descriptor
        raise KeyError(name)

    def names(self) -> List[str]:
        return [n for n, _ in self.entries]

    def items(self) -> List[Tuple[str, OutputDescriptor]]:
        return list(self.entries)

    def to_template_outputs(self) -> Dict[str, Dict[str, str]]:
        return {n: d.to_template() for n, d in self.entries}


class OutputSetBuilder:
    def __init__(self) -> None:
        self._entries: List[Tuple[str, OutputDescriptor]] = []
        self._names: Set[str] = set()

    def add(self, name: str, kind: OutputKind, expression: str) -> None:
        if name in self._names:
            raise DuplicateOutputError(f"Duplicate output name: {name}")
        self._names.add(name)
        self._entries.append((name, OutputDescriptor(kind=kind, expression=expression)))

    def build(self) -> OutputSet:
        return OutputSet(entries=tuple(self._entries))
