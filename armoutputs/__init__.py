"""Outputs section of ARM deployment templates for Kubernetes clusters."""

from armoutputs.stacks.outputs_stack import build_outputs, render_outputs_section, render_template

__all__ = ["build_outputs", "render_outputs_section", "render_template"]
