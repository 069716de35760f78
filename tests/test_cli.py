"""CLI integration tests."""

import json

import yaml
from click.testing import CliRunner

from biocoref.cli import main
from conftest import document_data

PROTEIN_DOCUMENT = json.dumps(document_data(
    {"tokens": "protein/NN X/NN binds/VBZ ./.", "phrases": [(0, 2)]},
    "researchers/NNS studied/VBD ./.",
    "it/PRP binds/VBZ ./.",
    entities=[(0, 0, 2, "PROTEIN", ["aapp"], [], "T1")],
    doc_id="PMID3",
))


class TestCLIBasicOperation:
    """Tests for basic CLI functionality."""

    def test_resolves_document_from_stdin(self):
        runner = CliRunner()

        result = runner.invoke(main, input=PROTEIN_DOCUMENT)

        assert result.exit_code == 0, f"CLI failed: {result.output}"
        output = json.loads(result.stdout)
        assert output["document"] == "PMID3"
        assert len(output["chains"]) == 1
        assert output["links"][0]["referents"][0]["text"] == "protein X"

    def test_handles_empty_input(self):
        """CLI errors with a helpful message on empty input."""
        runner = CliRunner()

        result = runner.invoke(main, input="")

        assert result.exit_code != 0
        assert "No document supplied" in result.output

    def test_invalid_json(self):
        runner = CliRunner()

        result = runner.invoke(main, input="{not json")

        assert result.exit_code != 0
        assert "not valid JSON" in result.output

    def test_invalid_document(self):
        runner = CliRunner()

        result = runner.invoke(main, input=json.dumps({"id": "d1"}))

        assert result.exit_code != 0
        assert "Invalid document" in result.output


class TestCLIOptions:
    """Tests for CLI option handling."""

    def test_input_and_output_files(self, tmp_path):
        runner = CliRunner()
        source = tmp_path / "doc.json"
        target = tmp_path / "chains.json"
        source.write_text(PROTEIN_DOCUMENT)

        result = runner.invoke(main, ["-i", str(source), "-o", str(target)])

        assert result.exit_code == 0, result.output
        output = json.loads(target.read_text())
        assert output["stats"]["links"]["Anaphora"] == {"processed": 1, "resolved": 1}

    def test_builtin_strategy_set(self):
        """The i2b2 set has no cataphora strategies."""
        runner = CliRunner()

        result = runner.invoke(main, ["--strategies", "i2b2"], input=PROTEIN_DOCUMENT)

        assert result.exit_code == 0, result.output
        output = json.loads(result.stdout)
        assert "Cataphora" not in output["stats"]["links"]

    def test_unknown_strategy_set(self):
        runner = CliRunner()

        result = runner.invoke(main, ["--strategies", "muc"], input=PROTEIN_DOCUMENT)

        assert result.exit_code != 0

    def test_config_file(self, tmp_path):
        runner = CliRunner()
        config = tmp_path / "config.yaml"
        config.write_text(yaml.safe_dump({"resolution": {"strategies": "generic"}}))

        result = runner.invoke(main, ["-c", str(config)], input=PROTEIN_DOCUMENT)

        assert result.exit_code == 0, result.output
        output = json.loads(result.stdout)
        assert "Appositive" in output["stats"]["links"]
