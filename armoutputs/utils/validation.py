"""
Preflight and precondition helpers.

Pure, minimal functions to validate required environment variables,
format actionable error messages, and fail fast on configurations the
output assemblers cannot handle.
"""

from __future__ import annotations

from typing import List, Mapping

from armoutputs.iac_types import ClusterConfiguration, MasterProfile


class PreconditionError(ValueError):
    pass


def require_master_profile(cfg: ClusterConfiguration) -> MasterProfile:
    """Return the master profile, raising if it is absent or has no VMs."""
    master = cfg.master_profile
    if master is None:
        raise PreconditionError("Cluster configuration has no master profile")
    if master.count < 1:
        raise PreconditionError(f"Master count must be at least 1, got {master.count}")
    return master


def missing_env(env: Mapping[str, str], keys: List[str]) -> List[str]:
    """Return the list of keys missing in the provided environment mapping."""
    return [k for k in keys if not env.get(k)]


def format_missing_env_message(missing: List[str]) -> str:
    """Format a friendly, actionable message for missing env vars."""
    if not missing:
        return ""
    lines: List[str] = []
    lines.append("Preflight check failed: missing environment variables")
    lines.append("")
    lines.append("Missing:")
    for k in missing:
        lines.append(f"  - {k}")
    lines.append("")
    lines.append("How to set them (current shell session):")
    for k in missing:
        lines.append(f"  export {k}=\"<value>\"")
    lines.append("")
    lines.append("Then re-run: python -m armoutputs.scripts.cli infra-deploy")
    return "\n".join(lines)
