from __future__ import annotations

from armoutputs.iac_types import AgentPoolProfile, ClusterConfiguration, OutputKind, OutputSetBuilder
from armoutputs.modules.expressions.expressions import variable_ref


def add_agent_pool_outputs(outputs: OutputSetBuilder, pool: AgentPoolProfile) -> None:
    """Storage account and subnet outputs of one availability-set pool."""
    if not (pool.uses_availability_set and pool.uses_storage_account):
        return
    name = pool.name
    outputs.add(
        f"{name}StorageAccountOffset",
        OutputKind.INT,
        variable_ref(f"{name}StorageAccountOffset"),
    )
    # Note the plural in the template variable name.
    outputs.add(
        f"{name}StorageAccountCount",
        OutputKind.INT,
        variable_ref(f"{name}StorageAccountsCount"),
    )
    outputs.add(f"{name}SubnetName", OutputKind.STRING, variable_ref(f"{name}SubnetName"))


def add_all_agent_pool_outputs(outputs: OutputSetBuilder, cfg: ClusterConfiguration) -> None:
    for pool in cfg.agent_pool_profiles:
        add_agent_pool_outputs(outputs, pool)
