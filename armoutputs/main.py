"""
CDKTF entrypoint that deploys the cluster template outputs.

The outputs section is merged into the base template produced by the
resources/variables generator and checked for undeclared variable
references before it is handed to azurerm's resource group template
deployment. The deployment's evaluated outputs are surfaced as Terraform
outputs.
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from typing import Any, Dict

from constructs import Construct
from cdktf import App, TerraformOutput, TerraformStack

from cdktf_cdktf_provider_azurerm.provider import AzurermProvider
from cdktf_cdktf_provider_azurerm.resource_group_template_deployment import (
    ResourceGroupTemplateDeployment,
)

from armoutputs.iac_types import ClusterConfiguration
from armoutputs.stacks.outputs_stack import (
    build_outputs,
    load_base_template,
    synth_config_json,
    template_json,
)
from armoutputs.utils.config_loader import load_deployment_target, load_tfvars_config
from armoutputs.utils.logger import setup_logger
from armoutputs.utils.validation import format_missing_env_message, missing_env

logger = setup_logger("armoutputs")


class ClusterOutputsStack(TerraformStack):
    """TerraformStack that deploys the template built from typed config."""

    def __init__(
        self,
        scope: Construct,
        id: str,
        config: ClusterConfiguration,
        resource_group_name: str,
        deployment_name: str,
        base_template: Dict[str, Any],
    ) -> None:
        super().__init__(scope, id)

        AzurermProvider(self, "azurerm", features=[{}])

        outputs = build_outputs(config)
        logger.info("Rendering template with %d outputs", len(outputs))

        deployment = ResourceGroupTemplateDeployment(
            self,
            "clusterTemplate",
            name=deployment_name,
            resource_group_name=resource_group_name,
            deployment_mode="Incremental",
            template_content=template_json(outputs, base_template=base_template),
        )

        TerraformOutput(self, "template_outputs", value=deployment.output_content)
        TerraformOutput(self, "output_names", value=outputs.names())


def main() -> None:
    repo_root = Path(__file__).resolve().parents[1]

    # Preflight: ensure required env vars are present before synthesizing
    required_env = ["ARM_SUBSCRIPTION_ID"]
    missing = missing_env(env=os.environ, keys=required_env)
    if missing:
        logger.error(format_missing_env_message(missing))
        sys.exit(2)

    try:
        cfg = load_tfvars_config(repo_root=repo_root)
        resource_group_name, deployment_name, base_template_path = load_deployment_target(
            repo_root=repo_root
        )
        base_template = load_base_template(base_template_path)
    except (FileNotFoundError, KeyError, ValueError) as ex:
        logger.error("Invalid configuration: %s", ex)
        sys.exit(1)

    app = App()
    try:
        ClusterOutputsStack(
            app,
            "cluster-outputs",
            cfg,
            resource_group_name,
            deployment_name,
            base_template,
        )
    except ValueError as ex:
        # Surface a concise, friendly message instead of a long traceback
        logger.error("Error: %s", ex)
        sys.exit(1)

    # Surface a copy of the config used for traceability
    TerraformOutput(
        app.node.try_find_child("cluster-outputs"),
        "config_json",
        value=json.dumps(synth_config_json(cfg)),
    )

    try:
        app.synth()
    except Exception as ex:  # noqa: BLE001 - present actionable error
        logger.error("Synthesis failed: %s", ex)
        sys.exit(1)


if __name__ == "__main__":
    main()
