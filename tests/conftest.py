from typing import Iterable, Optional

import pytest

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


def vmas_pool(name: str, storage_account: bool = True) -> AgentPoolProfile:
    return AgentPoolProfile(
        name=name,
        availability_profile=AvailabilityProfile.AVAILABILITY_SET,
        storage_profile=StorageProfile.STORAGE_ACCOUNT if storage_account else StorageProfile.MANAGED_DISKS,
    )


def vmss_pool(name: str) -> AgentPoolProfile:
    return AgentPoolProfile(
        name=name,
        availability_profile=AvailabilityProfile.VIRTUAL_MACHINE_SCALE_SETS,
    )


def make_config(
    pools: Iterable[AgentPoolProfile] = (),
    master: Optional[MasterProfile] = None,
    identity: IdentityMode = IdentityMode.SERVICE_PRINCIPAL,
    addons: Iterable[Addon] = (),
) -> ClusterConfiguration:
    return ClusterConfiguration(
        agent_pool_profiles=list(pools),
        master_profile=master if master is not None else MasterProfile(count=1),
        orchestrator_settings=OrchestratorSettings(
            identity_mode=identity, enabled_addons=frozenset(addons)
        ),
    )


@pytest.fixture
def private_system_assigned_config() -> ClusterConfiguration:
    return make_config(
        pools=[vmas_pool("pool1")],
        master=MasterProfile(count=3, is_private=True),
        identity=IdentityMode.SYSTEM_ASSIGNED,
    )
