"""
Add-on outputs, gated on the orchestrator's enabled add-on flags.
"""

from __future__ import annotations

from armoutputs.iac_types import Addon, OrchestratorSettings, OutputKind, OutputSetBuilder
from armoutputs.modules.expressions.expressions import (
    bracket,
    reference,
    variable_ref,
    variables,
)


def add_app_gw_ingress_outputs(outputs: OutputSetBuilder) -> None:
    outputs.add("applicationGatewayName", OutputKind.STRING, variable_ref("appGwName"))
    outputs.add(
        "appGwIdentityResourceId", OutputKind.STRING, variable_ref("appGwICIdentityId")
    )
    client_id = reference(
        variables("appGwICIdentityId"), variables("apiVersionManagedIdentity")
    )
    outputs.add("appGwIdentityClientId", OutputKind.STRING, bracket(client_id + ".clientId"))


def add_addon_outputs(outputs: OutputSetBuilder, settings: OrchestratorSettings) -> None:
    if settings.is_addon_enabled(Addon.APP_GW_INGRESS):
        add_app_gw_ingress_outputs(outputs)
