"""
Role assignment outputs for clusters using system-assigned identities.

The single `roleAssignmentNames` output concatenates, in this order:

1. the statically known role assignment names held in a template variable;
2. one role assignment per (agent pool, master index) pair, granting each
   master VM identity access to the pool's virtual network, when masters
   run in an availability set;
3. the system role assignment of every scale-set pool.

Consumers rely on this order. Terms that would be empty are left out.
"""

from __future__ import annotations

import logging
from typing import List

from armoutputs.iac_types import ClusterConfiguration, MasterProfile, OutputKind, OutputSetBuilder
from armoutputs.modules.expressions.expressions import (
    ConcatExpression,
    master_role_assignment_id,
    variables,
)
from armoutputs.utils.validation import require_master_profile

logger = logging.getLogger(__name__)

# TODO: rename to "ids" once deployments reading roleAssignmentNames are migrated.
ROLE_ASSIGNMENT_OUTPUT = "roleAssignmentNames"


def master_role_assignments(cfg: ClusterConfiguration, master: MasterProfile) -> List[str]:
    """Pools outer, master indices inner."""
    return [
        master_role_assignment_id(pool.name, index)
        for pool in cfg.agent_pool_profiles
        for index in range(master.count)
    ]


def scale_set_role_assignments(cfg: ClusterConfiguration) -> List[str]:
    return [
        variables(f"{pool.name}VMSSSysRoleAssignmentName")
        for pool in cfg.scale_set_pools()
    ]


def role_assignment_names(cfg: ClusterConfiguration) -> str:
    master = require_master_profile(cfg)
    expression = ConcatExpression(variables("vmasRoleAssignmentNames"))
    if master.uses_availability_set:
        expression.append_array(master_role_assignments(cfg, master))
    expression.append_array(scale_set_role_assignments(cfg))
    logger.debug("roleAssignmentNames has %d term(s)", len(expression.terms))
    return expression.render()


def add_role_assignment_outputs(outputs: OutputSetBuilder, cfg: ClusterConfiguration) -> None:
    if not cfg.orchestrator_settings.system_assigned_identity_enabled:
        return
    outputs.add(ROLE_ASSIGNMENT_OUTPUT, OutputKind.ARRAY, role_assignment_names(cfg))
