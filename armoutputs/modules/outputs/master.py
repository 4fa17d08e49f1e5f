"""
Master outputs.

Only used for clusters whose control plane is deployed by the template
itself; hosted masters expose none of these.
"""

from __future__ import annotations

from armoutputs.iac_types import ClusterConfiguration, MasterProfile, OutputKind, OutputSetBuilder
from armoutputs.modules.expressions.expressions import (
    bracket,
    concat,
    quote,
    reference,
    variable_ref,
    variables,
)


def master_fqdn(master: MasterProfile) -> str:
    """FQDN expression of the master public IP, empty for private clusters."""
    if master.is_private:
        return ""
    public_ip = concat(
        quote("Microsoft.Network/publicIPAddresses/"),
        variables("masterPublicIPAddressName"),
    )
    return bracket(reference(public_ip) + ".dnsSettings.fqdn")


def add_master_outputs(
    outputs: OutputSetBuilder, cfg: ClusterConfiguration, master: MasterProfile
) -> None:
    outputs.add("masterFQDN", OutputKind.STRING, master_fqdn(master))

    if cfg.has_storage_account_availability_set_pool():
        outputs.add(
            "agentStorageAccountSuffix",
            OutputKind.STRING,
            variable_ref("storageAccountBaseName"),
        )
        outputs.add(
            "agentStorageAccountPrefixes",
            OutputKind.ARRAY,
            variable_ref("storageAccountPrefixes"),
        )
