"""
Base outputs present in every cluster template.
"""

from __future__ import annotations

from typing import List, Tuple

from armoutputs.iac_types import OutputKind, OutputSetBuilder
from armoutputs.modules.expressions.expressions import variable_ref

# (output name, template variable)
BASE_OUTPUT_VARIABLES: List[Tuple[str, str]] = [
    ("resourceGroup", "resourceGroup"),
    ("vnetResourceGroup", "virtualNetworkResourceGroupName"),
    ("subnetName", "subnetName"),
    ("securityGroupName", "nsgName"),
    ("virtualNetworkName", "virtualNetworkName"),
    ("routeTableName", "routeTableName"),
    ("primaryAvailabilitySetName", "primaryAvailabilitySetName"),
    ("primaryScaleSetName", "primaryScaleSetName"),
]


def add_base_outputs(outputs: OutputSetBuilder) -> None:
    for name, variable in BASE_OUTPUT_VARIABLES:
        outputs.add(name, OutputKind.STRING, variable_ref(variable))
