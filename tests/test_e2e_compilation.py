"""
End-to-end compilation tests

Tests the full pipeline: summary/analysis documents → Compiler → HTML report

Validates that complete reports compile correctly and produce expected HTML
structures, and that the CLI pipeline stages report errors by exiting.
"""

import json
from argparse import Namespace
from decimal import Decimal
from pathlib import Path
from types import SimpleNamespace

import pytest
from loguru import logger

from ledgerdown.__main__ import env_check, source_parse, html_compile, results_report
from ledgerdown.config import AppSettings
from ledgerdown.lib.compiler import Compiler
from ledgerdown.lib.log import state_connectToLogger
from ledgerdown.lib.theme import Theme, ThemeError, themes_listAvailable, theme_validate
from ledgerdown.models import AIAnalysis, CategorySummary, MonthlySummary, ProgramState, pipeline


NBSP = "\u00a0"
ASSETS_DIR = Path(__file__).parent.parent / "src" / "assets"

ANALYSIS_TEXT = """## Podsumowanie

W marcu **wydatki** spadły o *12%*.
- Jedzenie: 1234,50 zł
- Transport
# Rekomendacje
1. Ogranicz _restauracje_
"""


@pytest.fixture
def summary():
    return MonthlySummary(
        month="2024-03",
        total_income=Decimal("5000.00"),
        total_expenses=Decimal("1234.50"),
        balance=Decimal("3765.50"),
        categories=[
            CategorySummary(
                category_id="c2",
                category_name="Jedzenie & napoje",
                income=Decimal("0.00"),
                expenses=Decimal("1234.50"),
                balance=Decimal("-1234.50"),
                transaction_count=7,
            ),
        ],
    )


def compiler_make(tmp_path, summary, analysis=None, **kwargs) -> Compiler:
    return Compiler(
        summary=summary,
        analysis=analysis,
        output_dir=str(tmp_path / "out"),
        assets_dir=str(ASSETS_DIR),
        **kwargs,
    )


class TestReportCompilation:
    """Test complete report compilation"""

    def test_summary_only(self, tmp_path, summary):
        """Compile a report without analysis"""
        result = compiler_make(tmp_path, summary).compile()

        assert result['status'] is True
        assert result['block_count'] == 0
        assert result['category_count'] == 1

        output_file = Path(result['output_file'])
        assert output_file == tmp_path / "out" / "index.html"
        html = output_file.read_text(encoding="utf-8")

        assert html.startswith("<!DOCTYPE html>")
        assert "<title>Podsumowanie miesiąca 2024-03</title>" in html
        assert f"5000,00{NBSP}zł" in html
        assert f"3765,50{NBSP}zł" in html
        assert 'class="summary-card balance tone-positive"' in html
        assert "Analiza AI" not in html

    def test_category_row(self, tmp_path, summary):
        result = compiler_make(tmp_path, summary).compile()
        html = Path(result['output_file']).read_text(encoding="utf-8")

        assert 'href="/app/transactions?month=2024-03&amp;category_id=c2"' in html
        assert "Jedzenie &amp; napoje" in html
        assert "7 transakcji" in html
        assert f"-1234,50{NBSP}zł" in html
        assert 'class="category-balance tone-negative"' in html

    def test_empty_month(self, tmp_path):
        result = compiler_make(tmp_path, MonthlySummary(month="2024-02")).compile()
        html = Path(result['output_file']).read_text(encoding="utf-8")

        assert "Brak transakcji w miesiącu 2024-02" in html
        assert "category-row" not in html
        assert 'class="summary-card balance tone-neutral"' in html

    def test_logging_follows_connected_state(self, tmp_path, summary):
        """Compiler output is gated by the verbosity of the connected state"""
        messages = []
        sink = logger.add(messages.append, format="{message}")
        state_connectToLogger(SimpleNamespace(verbosity=3))
        try:
            compiler_make(tmp_path, summary, AIAnalysis(analysis="- a", month="2024-03")).compile()
            state_connectToLogger(SimpleNamespace(verbosity=1))
            compiler_make(tmp_path, summary).compile()
        finally:
            state_connectToLogger(None)
            logger.remove(sink)

        assert sum("Formatted analysis into 1 blocks" in m for m in messages) == 1
        assert sum("Loaded theme" in m for m in messages) == 1

    def test_with_analysis(self, tmp_path, summary):
        analysis = AIAnalysis(analysis=ANALYSIS_TEXT, month="2024-03")
        result = compiler_make(tmp_path, summary, analysis).compile()
        html = Path(result['output_file']).read_text(encoding="utf-8")

        # heading, paragraph, list, heading, list
        assert result['block_count'] == 5
        assert '<h2 class="analysis-title">Analiza AI</h2>' in html
        assert '<h3 class="analysis-heading analysis-heading-2">Podsumowanie</h3>' in html
        assert '<strong class="font-semibold">wydatki</strong>' in html
        assert '<em class="italic">12%</em>' in html
        assert '<ul class="list-disc">' in html
        assert '<h2 class="analysis-heading analysis-heading-1">Rekomendacje</h2>' in html
        assert '<ol class="list-decimal">' in html
        assert html.index('<ul class="list-disc">') < html.index('Rekomendacje</h2>')

    def test_blank_analysis_skipped(self, tmp_path, summary):
        analysis = AIAnalysis(analysis="  \n", month="2024-03")
        result = compiler_make(tmp_path, summary, analysis).compile()
        html = Path(result['output_file']).read_text(encoding="utf-8")
        assert "Analiza AI" not in html

    def test_assets_copied(self, tmp_path, summary):
        compiler_make(tmp_path, summary).compile()
        assert (tmp_path / "out" / "css" / "ledgerdown.css").exists()
        assert (tmp_path / "out" / "css" / "theme.css").exists()

    def test_analysis_compile_fragment(self, tmp_path, summary):
        compiler = compiler_make(tmp_path, summary)
        fragment = compiler.analysis_compile("# A\n- b")
        assert fragment == (
            '<h2 class="analysis-heading analysis-heading-1">A</h2>\n'
            '<ul class="list-disc">\n'
            '    <li class="analysis-item">b</li>\n'
            '</ul>'
        )


class TestThemes:
    """Theme loading"""

    def test_default_theme_available(self):
        assert "default" in themes_listAvailable()
        assert theme_validate("default") == (True, "Theme 'default' is valid")

    def test_missing_theme(self, tmp_path, summary):
        with pytest.raises(ThemeError):
            compiler_make(tmp_path, summary, theme_name="nonexistent")

    def test_custom_theme(self, tmp_path, summary):
        theme_dir = tmp_path / "themes" / "plain"
        theme_dir.mkdir(parents=True)
        (theme_dir / "theme.yaml").write_text(
            "analysis:\n"
            "  heading_offset: 0\n"
            "  classes:\n"
            "    heading1: big\n"
            "labels:\n"
            "  analysis: Analysis\n",
            encoding="utf-8",
        )
        compiler = compiler_make(tmp_path, summary, theme_name="plain", themes_dir=str(tmp_path / "themes"))
        assert compiler.analysis_compile("# Title") == '<h1 class="big">Title</h1>'

        analysis = AIAnalysis(analysis="text", month="2024-03")
        compiler.analysis = analysis
        html = Path(compiler.compile()['output_file']).read_text(encoding="utf-8")
        assert '<h2 class="analysis-title">Analysis</h2>' in html
        assert not (tmp_path / "out" / "css" / "theme.css").exists()

    def test_invalid_theme_yaml(self, tmp_path):
        theme_dir = tmp_path / "broken"
        theme_dir.mkdir()
        (theme_dir / "theme.yaml").write_text("- just\n- a list\n", encoding="utf-8")
        with pytest.raises(ThemeError, match="must be a mapping"):
            Theme("broken", tmp_path)

    def test_config_get_nested(self):
        theme = Theme("default")
        assert theme.config_get("analysis.heading_offset") == 1
        assert theme.config_get("analysis.missing.key", "fallback") == "fallback"


class TestPipeline:
    """CLI pipeline stages"""

    def state_make(self, inputdir: Path, outputdir: Path, **options) -> ProgramState:
        namespace = Namespace(
            summaryFile="summary.json",
            analysisFile=None,
            theme=None,
            assetsDir=None,
            outputSubdir=".",
            verbosity=0,
            unrelated="ignored",
        )
        for key, value in options.items():
            setattr(namespace, key, value)
        return ProgramState.state_createFromNamespace(namespace, inputdir, outputdir)

    def test_full_pipeline(self, tmp_path):
        inputdir = tmp_path / "in"
        inputdir.mkdir()
        (inputdir / "summary.json").write_text(
            json.dumps({"month": "2024-03", "total_income": "10.00", "categories": []}),
            encoding="utf-8",
        )
        (inputdir / "analysis.md").write_text("# Tytuł\n- punkt", encoding="utf-8")

        state = self.state_make(inputdir, tmp_path / "out", analysisFile="analysis.md")
        final = pipeline(state, env_check, source_parse, html_compile, results_report)

        assert final.envOK is True
        assert final.analysis.month == "2024-03"
        assert final.compileResult['block_count'] == 2
        assert (tmp_path / "out" / "index.html").exists()

    def test_missing_summary_exits(self, tmp_path):
        state = self.state_make(tmp_path, tmp_path / "out")
        with pytest.raises(SystemExit) as excinfo:
            env_check(state)
        assert excinfo.value.code == 1

    def test_invalid_summary_exits(self, tmp_path):
        (tmp_path / "summary.json").write_text("[]", encoding="utf-8")
        state = env_check(self.state_make(tmp_path, tmp_path / "out"))
        with pytest.raises(SystemExit):
            source_parse(state)

    def test_month_mismatch_exits(self, tmp_path):
        (tmp_path / "summary.json").write_text(json.dumps({"month": "2024-03"}), encoding="utf-8")
        (tmp_path / "analysis.json").write_text(
            json.dumps({"analysis": "x", "month": "2024-04"}), encoding="utf-8"
        )
        state = env_check(self.state_make(tmp_path, tmp_path / "out", analysisFile="analysis.json"))
        with pytest.raises(SystemExit):
            source_parse(state)

    def test_copy_is_independent(self, tmp_path):
        state = self.state_make(tmp_path, tmp_path / "out")
        copied = state.copy()
        copied.envOK = True
        assert state.envOK is False

    def test_strict_mode_requires_analysis(self, tmp_path, monkeypatch):
        monkeypatch.setattr("ledgerdown.__main__.appsettings", AppSettings(strict_mode=True))
        (tmp_path / "summary.json").write_text(json.dumps({"month": "2024-03"}), encoding="utf-8")
        with pytest.raises(SystemExit) as excinfo:
            env_check(self.state_make(tmp_path, tmp_path / "out"))
        assert excinfo.value.code == 1

    def test_strict_mode_rejects_blank_analysis(self, tmp_path, monkeypatch):
        monkeypatch.setattr("ledgerdown.__main__.appsettings", AppSettings(strict_mode=True))
        (tmp_path / "summary.json").write_text(json.dumps({"month": "2024-03"}), encoding="utf-8")
        (tmp_path / "analysis.md").write_text("  \n\t\n", encoding="utf-8")
        state = env_check(self.state_make(tmp_path, tmp_path / "out", analysisFile="analysis.md"))
        with pytest.raises(SystemExit) as excinfo:
            source_parse(state)
        assert excinfo.value.code == 1

    def test_blank_analysis_allowed_without_strict_mode(self, tmp_path):
        (tmp_path / "summary.json").write_text(json.dumps({"month": "2024-03"}), encoding="utf-8")
        (tmp_path / "analysis.md").write_text("  \n", encoding="utf-8")
        state = env_check(self.state_make(tmp_path, tmp_path / "out", analysisFile="analysis.md"))
        assert source_parse(state).analysis.analysis.strip() == ""

    def compileFailure_run(self, tmp_path) -> ProgramState:
        (tmp_path / "summary.json").write_text(json.dumps({"month": "2024-03"}), encoding="utf-8")
        state = source_parse(env_check(self.state_make(tmp_path, tmp_path / "out")))
        # a regular file where the output directory should be
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        state.htmlOutputdir = blocker
        return state

    def test_debug_mode_prints_traceback(self, tmp_path, monkeypatch, capsys):
        monkeypatch.setattr("ledgerdown.__main__.appsettings", AppSettings(debug_mode=True))
        state = self.compileFailure_run(tmp_path)
        with pytest.raises(SystemExit):
            html_compile(state)
        err = capsys.readouterr().err
        assert "Compilation error" in err
        assert "Traceback" in err

    def test_compile_error_without_debug_mode(self, tmp_path, capsys):
        state = self.compileFailure_run(tmp_path)
        with pytest.raises(SystemExit):
            html_compile(state)
        err = capsys.readouterr().err
        assert "Compilation error" in err
        assert "Traceback" not in err
