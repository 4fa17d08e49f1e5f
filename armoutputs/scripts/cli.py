from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from armoutputs.stacks.outputs_stack import build_outputs, load_base_template, template_json
from armoutputs.utils.config_loader import load_tfvars_config
from armoutputs.utils.logger import setup_logger

from .utils import CmdError, cdktf

logger = setup_logger("armoutputs")


def _load_outputs(args: argparse.Namespace):
    cfg = load_tfvars_config(repo_root=Path.cwd(), tfvars_file=args.tfvars)
    return build_outputs(cfg)


def render(args: argparse.Namespace) -> None:
    base_template = load_base_template(Path(args.base_template)) if args.base_template else None
    text = template_json(
        _load_outputs(args), section_only=args.section_only, base_template=base_template
    )
    if args.out:
        out = Path(args.out)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(text + "\n", encoding="utf-8")
        logger.info("Wrote %s", out)
    else:
        print(text)


def list_outputs(args: argparse.Namespace) -> None:
    for name, descriptor in _load_outputs(args).items():
        print(f"{name}\t{descriptor.kind.value}")


def infra_deploy(args: argparse.Namespace) -> None:
    project = Path(args.project_dir)
    if not project.exists():
        raise CmdError(f"Project directory not found: {project}")
    logger.info("Synthesizing CDKTF...")
    cdktf(project, ["get"])  # ensure providers
    cdktf(project, ["synth"])  # generate JSON tf
    logger.info("Deploying CDKTF...")
    cdktf(project, ["deploy", "--auto-approve"])
    logger.info("CDKTF deploy completed.")


def infra_destroy(args: argparse.Namespace) -> None:
    project = Path(args.project_dir)
    if not project.exists():
        raise CmdError(f"Project directory not found: {project}")
    logger.info("Destroying CDKTF-managed deployment...")
    cdktf(project, ["destroy", "--auto-approve"])
    logger.info("Destroy completed.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="armoutputs", description="Cluster ARM template outputs CLI"
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    r = sub.add_parser("render", help="Render the template (or its outputs section) as JSON")
    r.add_argument("--tfvars", help="tfvars file (defaults to $TFVARS_FILE or vars/dev.tfvars)")
    r.add_argument("--out", help="Write to this file instead of stdout")
    r.add_argument("--section-only", action="store_true", help="Emit only the outputs section")
    r.add_argument(
        "--base-template",
        help="Merge into this template and fail on variables it does not declare",
    )
    r.set_defaults(func=render)

    ls = sub.add_parser("list", help="List output names and types")
    ls.add_argument("--tfvars")
    ls.set_defaults(func=list_outputs)

    idep = sub.add_parser("infra-deploy", help="Deploy the template via CDKTF")
    idep.add_argument("--project-dir", default=".")
    idep.set_defaults(func=infra_deploy)

    ides = sub.add_parser("infra-destroy", help="Destroy the CDKTF-managed deployment")
    ides.add_argument("--project-dir", default=".")
    ides.set_defaults(func=infra_destroy)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        args.func(args)
    except (FileNotFoundError, KeyError, ValueError, CmdError) as ex:
        logger.error("Error: %s", ex)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
