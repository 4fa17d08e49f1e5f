"""
Outputs stack.

Builds the ordered output set of a cluster template from the typed
ClusterConfiguration and renders it into the ARM template document.
"""

from __future__ import annotations

import copy
import json
import logging
import re
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, List, Optional, Set

from armoutputs.iac_types import ClusterConfiguration, OutputSet, OutputSetBuilder
from armoutputs.modules.outputs.addons import add_addon_outputs
from armoutputs.modules.outputs.agent_pools import add_all_agent_pool_outputs
from armoutputs.modules.outputs.base import add_base_outputs
from armoutputs.modules.outputs.master import add_master_outputs
from armoutputs.modules.outputs.role_assignments import add_role_assignment_outputs
from armoutputs.utils.validation import PreconditionError, require_master_profile

logger = logging.getLogger(__name__)

DEPLOYMENT_TEMPLATE_SCHEMA = (
    "https://schema.management.azure.com/schemas/2015-01-01/deploymentTemplate.json#"
)

VARIABLE_REFERENCE = re.compile(r"variables\('([^']+)'\)")


def build_outputs(cfg: ClusterConfiguration) -> OutputSet:
    """Return the outputs of the cluster template, in a stable order.

    Raises PreconditionError when the configuration lacks something the
    assembly dereferences, and DuplicateOutputError when two outputs share
    a name (for example two pools with the same name).
    """
    outputs = OutputSetBuilder()

    add_base_outputs(outputs)

    master = require_master_profile(cfg)
    if not master.is_hosted:
        add_master_outputs(outputs, cfg, master)

    add_all_agent_pool_outputs(outputs, cfg)
    add_addon_outputs(outputs, cfg.orchestrator_settings)
    add_role_assignment_outputs(outputs, cfg)

    result = outputs.build()
    logger.debug("Built %d template outputs", len(result))
    return result


def render_outputs_section(outputs: OutputSet) -> Dict[str, Dict[str, str]]:
    return outputs.to_template_outputs()


def render_template(
    outputs: OutputSet, base_template: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """Merge the outputs section into base_template.

    base_template is the template the resources/variables generator
    produced; without one an otherwise empty skeleton is used, which is
    only useful for inspection since it declares no variables.
    """
    template: Dict[str, Any] = {
        "$schema": DEPLOYMENT_TEMPLATE_SCHEMA,
        "contentVersion": "1.0.0.0",
        "parameters": {},
        "variables": {},
        "resources": [],
    }
    if base_template is not None:
        template.update(copy.deepcopy(base_template))
    template["outputs"] = render_outputs_section(outputs)
    return template


def undeclared_variables(template: Dict[str, Any]) -> List[str]:
    declared = template.get("variables") or {}
    names: Set[str] = set()
    for output in (template.get("outputs") or {}).values():
        names.update(VARIABLE_REFERENCE.findall(output.get("value", "")))
    return sorted(n for n in names if n not in declared)


def render_deployable_template(
    outputs: OutputSet, base_template: Dict[str, Any]
) -> Dict[str, Any]:
    """Like render_template, but raise if an output refers to an undeclared variable."""
    template = render_template(outputs, base_template)
    missing = undeclared_variables(template)
    if missing:
        raise PreconditionError(
            "Base template does not declare variables used by outputs: " + ", ".join(missing)
        )
    return template


def template_json(
    outputs: OutputSet,
    section_only: bool = False,
    base_template: Optional[Dict[str, Any]] = None,
) -> str:
    if section_only:
        doc = render_outputs_section(outputs)
    elif base_template is not None:
        doc = render_deployable_template(outputs, base_template)
    else:
        doc = render_template(outputs)
    return json.dumps(doc, indent=2)


def load_base_template(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Base template not found: {path}")
    return json.loads(path.read_text(encoding="utf-8"))


def synth_config_json(config: ClusterConfiguration) -> Dict[str, Any]:
    """Convert the configuration to a plain dict for diagnostics or outputs."""
    data = asdict(config)
    settings = data["orchestrator_settings"]
    settings["enabled_addons"] = sorted(a.value for a in config.orchestrator_settings.enabled_addons)
    return json.loads(json.dumps(data, default=str))
