import json
from pathlib import Path

import pytest

from armoutputs.scripts import cli
from armoutputs.scripts.utils import CmdError, run

REPO_ROOT = Path(__file__).resolve().parents[1]

TFVARS = """
master_count = 1
identity_mode = "system-assigned"
agent_pools = "pool1:AvailabilitySet:StorageAccount"
"""


@pytest.fixture
def tfvars(tmp_path: Path) -> Path:
    path = tmp_path / "cluster.tfvars"
    path.write_text(TFVARS, encoding="utf-8")
    return path


class TestRender:
    def test_render_template_to_stdout(self, tfvars, capsys):
        assert cli.main(["render", "--tfvars", str(tfvars)]) == 0
        template = json.loads(capsys.readouterr().out)
        assert template["outputs"]["pool1SubnetName"] == {
            "type": "string",
            "value": "[variables('pool1SubnetName')]",
        }
        assert template["outputs"]["roleAssignmentNames"]["type"] == "array"

    def test_render_section_to_file(self, tfvars, tmp_path):
        out = tmp_path / "out" / "outputs.json"
        assert cli.main(["render", "--tfvars", str(tfvars), "--section-only", "--out", str(out)]) == 0
        section = json.loads(out.read_text(encoding="utf-8"))
        assert "masterFQDN" in section
        assert "$schema" not in section

    def test_list(self, tfvars, capsys):
        assert cli.main(["list", "--tfvars", str(tfvars)]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "resourceGroup\tstring"
        assert "pool1StorageAccountOffset\tint" in lines

    def test_render_with_base_template_missing_variables(self, tfvars, tmp_path):
        base = tmp_path / "base.json"
        base.write_text(json.dumps({"variables": {"resourceGroup": "rg"}}), encoding="utf-8")
        assert cli.main(["render", "--tfvars", str(tfvars), "--base-template", str(base)]) == 1

    def test_render_with_sample_base_template(self, capsys):
        assert cli.main(
            [
                "render",
                "--tfvars",
                str(REPO_ROOT / "vars" / "dev.tfvars"),
                "--base-template",
                str(REPO_ROOT / "templates" / "base.json"),
            ]
        ) == 0
        template = json.loads(capsys.readouterr().out)
        assert "masterVMNamePrefix" in template["variables"]
        assert "roleAssignmentNames" in template["outputs"]

    def test_missing_tfvars_returns_error(self, tmp_path):
        assert cli.main(["render", "--tfvars", str(tmp_path / "nope.tfvars")]) == 1

    def test_invalid_config_returns_error(self, tmp_path):
        bad = tmp_path / "bad.tfvars"
        bad.write_text('master_count = 0\nagent_pools = "a:AvailabilitySet"\n', encoding="utf-8")
        assert cli.main(["render", "--tfvars", str(bad)]) == 1


class TestInfraCommands:
    def test_infra_deploy_missing_project(self, tmp_path):
        assert cli.main(["infra-deploy", "--project-dir", str(tmp_path / "missing")]) == 1

    def test_infra_deploy_runs_cdktf_steps(self, tmp_path, monkeypatch):
        calls = []
        monkeypatch.setattr(cli, "cdktf", lambda project, args: calls.append(args) or "")
        assert cli.main(["infra-deploy", "--project-dir", str(tmp_path)]) == 0
        assert calls == [["get"], ["synth"], ["deploy", "--auto-approve"]]

    def test_infra_destroy(self, tmp_path, monkeypatch):
        calls = []
        monkeypatch.setattr(cli, "cdktf", lambda project, args: calls.append(args) or "")
        assert cli.main(["infra-destroy", "--project-dir", str(tmp_path)]) == 0
        assert calls == [["destroy", "--auto-approve"]]


class TestRun:
    def test_missing_executable(self):
        with pytest.raises(CmdError):
            run(["definitely-not-a-real-command-xyz"], cwd=None)
