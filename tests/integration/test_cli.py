"""
Интеграционные тесты CLI layout-wizard.

Полный путь: файл / пресет -> импорт -> вывод row/col -> JSON / KLE.
"""

import json

import pytest

from layout_wizard.cli import build_parser, main

DTS_TEXT = """
/ {
    physical_layout0: physical_layout_0 {
        compatible = "zmk,physical-layout";
        display-name = "Macro";
        keys
            = <&key_physical_attrs 100 100   0   0 0 0 0>
            , <&key_physical_attrs 100 100 100   0 0 0 0>
            , <&key_physical_attrs 100 100   0 100 0 0 0>
            , <&key_physical_attrs 100 100 100 100 0 0 0>
            ;
    };
};
"""


@pytest.fixture(autouse=True)
def keep_log_sinks(monkeypatch):
    """CLI перенастраивает loguru на sys.stderr; в тестах оставляем sink по умолчанию."""
    monkeypatch.setattr("layout_wizard.cli.configure_logging", lambda verbose=False: None)


@pytest.fixture
def dts_file(tmp_path):
    path = tmp_path / "macro.dtsi"
    path.write_text(DTS_TEXT, encoding="utf-8")
    return path


class TestCli:

    def test_file_to_stdout(self, dts_file, capsys):
        assert main([str(dts_file)]) == 0

        captured = capsys.readouterr()
        data = json.loads(captured.out)
        assert [(k["row"], k["col"]) for k in data["keys"]] == [(0, 0), (0, 1), (1, 0), (1, 1)]
        assert set(data["keys"][0]) == {"id", "part", "row", "col", "w", "h", "x", "y", "r", "rx", "ry"}
        assert "[PROCESSING]" in captured.err

    def test_output_file(self, dts_file, tmp_path, capsys):
        output = tmp_path / "out" / "layout.json"
        assert main([str(dts_file), "--output", str(output)]) == 0

        data = json.loads(output.read_text(encoding="utf-8"))
        assert len(data["keys"]) == 4
        assert "[SAVED]" in capsys.readouterr().err

    def test_preset_split_kle(self, capsys):
        assert main(["--preset", "Split 3x5+2", "--split", "--kle"]) == 0

        rows = json.loads(capsys.readouterr().out)
        labels = [item for row in rows for item in row if isinstance(item, str)]
        assert len(labels) == 34
        assert labels[0] == "0,0"

    def test_split_file(self, dts_file, capsys):
        assert main([str(dts_file), "--split"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert [k["part"] for k in data["keys"]] == [0, 1, 0, 1]

    def test_explicit_format(self, dts_file, capsys):
        assert main([str(dts_file), "--format", "kle"]) == 1
        assert "[ERROR]" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing.dtsi")]) == 1
        assert "[ERROR]" in capsys.readouterr().err

    def test_unknown_preset(self, capsys):
        assert main(["--preset", "Nope"]) == 1
        assert "[ERROR]" in capsys.readouterr().err

    def test_invalid_tolerance(self, dts_file, capsys):
        assert main([str(dts_file), "--tolerance", "0"]) == 1
        assert "[ERROR]" in capsys.readouterr().err

    def test_tolerance_option(self, tmp_path, capsys):
        path = tmp_path / "pair.json"
        path.write_text(json.dumps([["a", {"y": 0.3}, "b"]]), encoding="utf-8")

        assert main([str(path), "--tolerance", "0.2"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert [k["row"] for k in data["keys"]] == [0, 1]

    def test_source_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_path_and_preset_exclusive(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["file.dtsi", "--preset", "Numpad 17"])

    def test_invalid_configuration(self, dts_file, monkeypatch, capsys):
        def broken():
            raise ValueError("Файл пресетов не найден")

        monkeypatch.setattr("layout_wizard.cli.validate_config", broken)
        assert main([str(dts_file)]) == 1
        assert "Файл пресетов не найден" in capsys.readouterr().err

    def test_format_with_preset_rejected(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--preset", "Numpad 17", "--format", "kle"])
        assert exc_info.value.code == 2
        assert "--format" in capsys.readouterr().err

    def test_kle_output_file(self, dts_file, tmp_path, capsys):
        output = tmp_path / "kle.json"
        assert main([str(dts_file), "--kle", "--output", str(output)]) == 0

        rows = json.loads(output.read_text(encoding="utf-8"))
        assert rows == [["0,0", "0,1"], ["1,0", "1,1"]]
        assert "[SAVED]" in capsys.readouterr().err
