"""
Tests for the either-trait command line
"""

import json
from pathlib import Path

import pytest
from either_trait.cli import generate_file, main
from either_trait.core.config import GeneratorOptions

EXAMPLES_DIR = Path(__file__).resolve().parent.parent / "examples"

MIXED = '''
from either_trait import either_trait


@either_trait
class Good:
    def get(self) -> int: ...


@either_trait
class Bad:
    LIMIT = 1

    def get(self) -> int: ...
'''


def write(tmp_path, name: str, content: str) -> str:
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return str(path)


def test_generate_file_writes_module(tmp_path):
    """Test a module is expanded into the output directory"""
    source = (EXAMPLES_DIR / "example_trait.py").read_text(encoding="utf-8")
    path = write(tmp_path, "shapes.py", source)
    options = GeneratorOptions(output_dir=str(tmp_path / "out"))

    summary = generate_file(path, options)

    assert summary.total == 1
    assert summary.generated == 1
    assert summary.rejected == 0
    assert summary.output_file == str(tmp_path / "out" / "shapes_either.py")

    output = Path(summary.output_file).read_text(encoding="utf-8")
    assert "class ExampleEither[L: Example, R: Example](Either[L, R], Example):" in output
    assert "from either_trait.either import Either, Left, Right" in output


def test_generate_file_explicit_output(tmp_path):
    """Test -o style explicit output paths win over the directory"""
    path = write(tmp_path, "mixed.py", MIXED)
    target = tmp_path / "nested" / "result.py"

    summary = generate_file(path, GeneratorOptions(), output_path=str(target))

    assert summary.output_file == str(target)
    assert "class GoodEither" in target.read_text(encoding="utf-8")


def test_generate_file_reports_in_source_order(tmp_path):
    """Test mixed results are listed by line with reasons"""
    path = write(tmp_path, "mixed.py", MIXED)

    summary = generate_file(path, GeneratorOptions(output_dir=str(tmp_path)))

    assert [(r.name, r.generated) for r in summary.results] == [("Good", True), ("Bad", False)]
    assert "AssociatedItemNotSupported" in summary.results[1].reason
    assert summary.results[0].class_name == "GoodEither"


def test_generate_file_json_report(tmp_path):
    """Test the JSON report records both outcomes"""
    path = write(tmp_path, "mixed.py", MIXED)
    report = tmp_path / "report.json"

    generate_file(path, GeneratorOptions(output_dir=str(tmp_path)), json_output=str(report))

    data = json.loads(report.read_text(encoding="utf-8"))
    assert data["schema_version"] == "1.0.0"
    assert data["summary"] == {"total_interfaces": 2, "generated": 1, "rejected": 1}
    assert data["metadata"]["allow_generic_methods"] is True
    assert data["metadata"]["output_hash"] is not None

    good, bad = data["results"]
    assert good["generation"]["class_name"] == "GoodEither"
    assert good["generation"]["methods"] == ["get"]
    assert len(good["artifacts"]["combined_hash"]) == 64
    assert bad["generation"]["status"] == "rejected"
    assert bad["generation"]["error"]["kind"] == "AssociatedItemNotSupported"
    assert bad["generation"]["error"]["stage"] == "validate"


def test_generate_file_from_description(tmp_path):
    """Test JSON descriptions are generated into a full module"""
    path = write(tmp_path, "example.json",
                 (EXAMPLES_DIR / "example_trait.json").read_text(encoding="utf-8"))

    summary = generate_file(path, GeneratorOptions(output_dir=str(tmp_path / "out")))

    assert summary.generated == 1
    output = Path(summary.output_file).read_text(encoding="utf-8")
    assert output.startswith("from typing import Protocol\n")
    assert "class ExampleEither" in output


def test_generate_file_invalid_module(tmp_path):
    """Test a module with a syntax error is a single rejection"""
    path = write(tmp_path, "broken.py", "class Broken(:\n")

    summary = generate_file(path, GeneratorOptions(output_dir=str(tmp_path / "out")))

    assert [r.name for r in summary.results] == ["<module>"]
    assert summary.output_file is None
    assert not (tmp_path / "out").exists()


def test_generate_file_without_interfaces(tmp_path):
    """Test a module without interfaces writes nothing"""
    path = write(tmp_path, "plain.py", "x = 1\n")

    summary = generate_file(path, GeneratorOptions(output_dir=str(tmp_path / "out")))

    assert summary.total == 0
    assert summary.output_file is None


def test_main_exit_codes(tmp_path, capsys):
    """Test the exit status reflects rejections"""
    good = write(tmp_path, "good.py", "@either_trait\nclass Good:\n    def get(self) -> int: ...\n")
    mixed = write(tmp_path, "mixed.py", MIXED)
    out = str(tmp_path / "out")

    with pytest.raises(SystemExit) as info:
        main([good, "--output-dir", out])
    assert info.value.code == 0
    assert "Generated: 1" in capsys.readouterr().out

    with pytest.raises(SystemExit) as info:
        main([mixed, "--output-dir", out])
    assert info.value.code == 1

    with pytest.raises(SystemExit) as info:
        main([str(tmp_path / "missing.py")])
    assert info.value.code == 1
    assert "File not found" in capsys.readouterr().out


def test_main_no_generic_methods(tmp_path):
    """Test --no-generic-methods rejects generic methods"""
    path = write(tmp_path, "example.py",
                 (EXAMPLES_DIR / "example_trait.py").read_text(encoding="utf-8"))
    report = tmp_path / "report.json"

    with pytest.raises(SystemExit) as info:
        main([path, "--no-generic-methods", "--json", str(report),
              "--output-dir", str(tmp_path / "out")])
    assert info.value.code == 1

    data = json.loads(report.read_text(encoding="utf-8"))
    assert data["results"][0]["generation"]["error"]["kind"] == "GenericMethodNotSupported"


def test_options_from_env(monkeypatch):
    """Test environment configuration"""
    monkeypatch.setenv("EITHER_TRAIT_ALLOW_GENERIC_METHODS", "false")
    monkeypatch.setenv("EITHER_TRAIT_OUTPUT_DIR", "/tmp/generated")

    options = GeneratorOptions.from_env()
    assert options.allow_generic_methods is False
    assert options.output_dir == "/tmp/generated"

    monkeypatch.delenv("EITHER_TRAIT_ALLOW_GENERIC_METHODS")
    assert GeneratorOptions.from_env().allow_generic_methods is True
