"""
Conversion pipeline tests.
"""

import json

import pytest

from core.services import ConversionPipeline, PipelineState, PipelineStats
from formats.sdf import SDFModel, SDFParseError
from formats.wot import ThingDescription, ThingModel
from shared.errors import DocumentLoadError, UnsupportedConversionError


@pytest.fixture
def pipeline():
    return ConversionPipeline()


@pytest.mark.unit
class TestDirections:
    """Supported and rejected directions."""

    def test_supported_conversions(self, pipeline):
        assert set(pipeline.supported_conversions) == {("sdf", "tm"), ("sdf", "td"), ("tm", "sdf")}

    @pytest.mark.parametrize("source,target", [
        ("td", "sdf"),
        ("td", "tm"),
        ("tm", "td"),
        ("sdf", "sdf"),
    ])
    def test_unsupported_direction(self, pipeline, source, target):
        with pytest.raises(UnsupportedConversionError) as exc_info:
            pipeline.check_supported(source, target)

        assert exc_info.value.source_format == source
        assert exc_info.value.target_format == target

    def test_td_rejected_before_loading(self, pipeline, tmp_path):
        missing = str(tmp_path / "missing.td.json")

        with pytest.raises(UnsupportedConversionError):
            pipeline.run(missing, "td", "sdf")

    def test_convert_document(self, pipeline, sdf_parser, switch_sdf):
        model = sdf_parser.parse(switch_sdf)

        assert isinstance(pipeline.convert_document(model, "sdf", "tm"), ThingModel)
        assert isinstance(pipeline.convert_document(model, "sdf", "td"), ThingDescription)


@pytest.mark.unit
class TestRun:
    """ConversionPipeline.run."""

    def test_sdf_to_thing_model(self, pipeline, temp_sdf_file):
        result = pipeline.run(temp_sdf_file, "sdf", "tm")

        assert isinstance(result.document, ThingModel)
        assert result.direction == "sdf→tm"
        assert result.source_path == temp_sdf_file
        assert result.output_path is None
        assert result.affordance_count == 5

    def test_thing_model_to_sdf(self, pipeline, temp_tm_file):
        result = pipeline.run(temp_tm_file, "tm", "sdf")

        assert isinstance(result.document, SDFModel)
        assert result.affordance_count == 5

    def test_inline_source(self, pipeline):
        result = pipeline.run('{"sdfAction": {"reset": {}}}', "sdf", "td")

        assert result.source_path is None
        assert json.loads(pipeline.serialize(result))["actions"] == {"reset": {}}

    def test_writes_output(self, pipeline, temp_sdf_file, tmp_path):
        output = tmp_path / "out" / "switch.tm.json"

        result = pipeline.run(temp_sdf_file, "sdf", "tm", output_path=str(output))

        assert result.output_path == str(output)
        written = json.loads(output.read_text(encoding="utf-8"))
        assert written == result.document.to_dict()
        assert pipeline.state == PipelineState.COMPLETED

    def test_state_and_stats_on_failure(self, pipeline, tmp_path):
        missing = str(tmp_path / "missing.sdf.json")

        with pytest.raises(DocumentLoadError):
            pipeline.run(missing, "sdf", "tm")

        assert pipeline.state == PipelineState.FAILED
        assert pipeline.stats.documents_failed == 1
        assert pipeline.stats.failures[0][0] == missing

    def test_inline_failure_label(self, pipeline):
        with pytest.raises(SDFParseError):
            pipeline.run('{"sdfProperty": []}', "sdf", "tm")

        assert pipeline.stats.failures[0][0] == "<inline>"

    def test_stats_accumulate(self, pipeline, temp_sdf_file, temp_tm_file):
        pipeline.run(temp_sdf_file, "sdf", "tm")
        pipeline.run(temp_tm_file, "tm", "sdf")

        assert pipeline.stats.documents_converted == 2
        assert pipeline.stats.affordances == 10
        assert pipeline.stats.documents_total == 2


@pytest.mark.unit
class TestPipelineStats:
    """PipelineStats summary."""

    def test_summary_without_failures(self):
        summary = PipelineStats(documents_converted=3, affordances=7).get_summary()

        assert "✓ Converted: 3" in summary
        assert "✓ Affordances: 7" in summary
        assert "Failed" not in summary

    def test_summary_truncates_failures(self):
        stats = PipelineStats(
            documents_failed=7,
            failures=[(f"doc{i}.sdf.json", "boom") for i in range(7)],
        )

        summary = stats.get_summary()

        assert "✗ Failed: 7" in summary
        assert "doc4.sdf.json: boom" in summary
        assert "doc5.sdf.json" not in summary
        assert "... and 2 more" in summary
