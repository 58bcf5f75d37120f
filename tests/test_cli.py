"""Tests for the command-line entry point."""

import json

import pytest

from machinistmate.__main__ import main


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    return tmp_path


class TestCli:
    def test_pocket_to_file(self, tmp_path, capsys):
        out = tmp_path / "pocket.nc"
        assert main(["pocket", "-o", str(out)]) == 0

        text = out.read_text()
        assert "(Circular Interpolation G-Code)" in text
        assert "G43 H01 Z0.1000" in text
        assert text.endswith("M30\n")
        assert "Wrote" in capsys.readouterr().err

    def test_drill_to_stdout(self, capsys):
        assert main(["drill"]) == 0
        captured = capsys.readouterr()
        assert "G83 Z-0.5000 Q0.1000 R0.1000 F10." in captured.out
        assert "T2 M06" in captured.out
        assert "Planned" in captured.err

    def test_expanded_pecks(self, capsys):
        assert main(["drill", "--expand-pecks"]) == 0
        assert "G83" not in capsys.readouterr().out

    def test_thread_reports_offset_warning(self, capsys):
        assert main(["thread", "--passes", "2"]) == 0
        captured = capsys.readouterr()
        assert "G91" in captured.out
        assert "Warning" in captured.err

    def test_cutter_fills_circle(self, capsys):
        code = main(["pocket", "--cutter-diameter", "3", "--circle-diameter", "3"])
        assert code == 1
        assert "Error: Cutter diameter" in capsys.readouterr().err

    def test_invalid_field(self, capsys):
        code = main(["thread", "--major-diameter", "0.4", "--minor-diameter", "0.45"])
        assert code == 2
        assert "major_diameter" in capsys.readouterr().err

    def test_rpm_over_machine_limit(self, capsys):
        code = main(["pocket", "--machine", "tm1", "--speed", "6000"])
        assert code == 1
        assert "VALIDATION ERRORS" in capsys.readouterr().err

    def test_skip_validate(self, capsys):
        code = main(["pocket", "--machine", "tm1", "--speed", "6000", "--skip-validate"])
        assert code == 0
        assert "M03 S6000" in capsys.readouterr().out

    def test_eob_and_metric(self, capsys):
        assert main(["drill", "--eob", "--units", "mm"]) == 0
        out = capsys.readouterr().out
        assert "G90 G17 G21 G40 G80;" in out
        assert "M30;" in out


class TestCliMetric:
    def test_metric_pocket_validates(self, capsys):
        code = main(["pocket", "--units", "mm", "--cutter-diameter", "12",
                     "--circle-diameter", "100", "--depth", "5", "--stepover", "5"])
        captured = capsys.readouterr()
        assert code == 0, captured.err
        assert "G43 H01 Z2.5400" in captured.out
        assert "G00 Z25.4000" in captured.out

    def test_metric_defaults_are_converted(self, capsys):
        assert main(["drill", "--units", "mm"]) == 0
        assert "G83 Z-12.7000 Q2.5400 R2.5400 F" in capsys.readouterr().out


class TestCliExplicitValues:
    @pytest.mark.parametrize("argv, field", [
        (["pocket", "--speed", "0"], "speed"),
        (["pocket", "--feed", "0"], "feed"),
        (["pocket", "--cutter-diameter", "0"], "cutter_diameter"),
        (["thread", "--tool-diameter", "0"], "tool_diameter"),
        (["drill", "--tool-number", "0"], "tool_number"),
    ])
    def test_zero_reaches_form(self, argv, field, capsys):
        assert main(argv) == 2
        assert f"{field}:" in capsys.readouterr().err

    def test_unknown_tool_number(self, capsys):
        assert main(["pocket", "--tool-number", "99"]) == 2
        assert "Tool 99 is not in the tool library." in capsys.readouterr().err


class TestCliToolFile:
    def test_init_and_list(self, tmp_path, capsys):
        path = tmp_path / "tools.json"
        assert main(["tools", "--tool-file", str(path), "--init"]) == 0
        assert path.exists()

        assert main(["tools", "--tool-file", str(path)]) == 0
        out = capsys.readouterr().out
        assert out.splitlines()[0].startswith("T1 ")
        assert "thread_mill" in out

    def test_operation_uses_tool_file(self, tmp_path, capsys):
        path = tmp_path / "tools.json"
        path.write_text(json.dumps([{
            "number": 5, "name": "3/8 endmill", "tool_type": "flat_endmill",
            "diameter": 0.375, "default_rpm": 4500, "default_feed": 25.0,
        }]))
        assert main(["pocket", "--tool-file", str(path)]) == 0
        out = capsys.readouterr().out
        assert "T5 M06 (SELECT TOOL 5)" in out
        assert "M03 S4500" in out
        assert "Cutter Dia: 0.375" in out

    def test_missing_tool_file(self, tmp_path, capsys):
        assert main(["drill", "--tool-file", str(tmp_path / "none.json")]) == 2
        assert "not found" in capsys.readouterr().err
