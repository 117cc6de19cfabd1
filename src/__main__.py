#!/usr/bin/env python3
"""
ledgerdown - Monthly finance summary report compiler

Compiles the monthly summary of a personal finance tracker, together with
its AI-generated analysis, into a standalone HTML report.

Inputs are the documents returned by the tracker backend:
    - summary JSON (GET /api/summary): totals and per-category breakdown
    - analysis (POST /api/summary/ai-analysis): JSON response, or the raw
      analysis text saved as .md/.txt

The analysis text is a restricted markdown subset (headings, lists,
**bold**, *italic*) rendered into the "Analiza AI" card.

Usage:
    ledgerdown inputdir/ outputdir/ --summaryFile summary.json --analysisFile analysis.json

Examples:
    # Summary only
    ledgerdown . output/ --summaryFile 2024-03.json

    # With analysis, custom theme and verbose output
    ledgerdown . output/ --summaryFile 2024-03.json --analysisFile 2024-03.md --theme default -vv
"""

import sys
import traceback
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from . import __version__
from .config import appsettings
from .lib import Compiler, LOG, state_connectToLogger, plainText_extract, markdown_format
from .lib.loader import SummaryError, summary_load, analysis_load
from .lib.theme import ThemeError
from .models import ProgramState, pipeline


parser = ArgumentParser(
    description="ledgerdown - Monthly finance summary report compiler",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--summaryFile", default="summary.json", type=str, help="Summary JSON file (relative to inputdir)"
)

parser.add_argument(
    "--analysisFile",
    default=None,
    type=str,
    help="AI analysis file, .json response or raw .md/.txt text (relative to inputdir)",
)

parser.add_argument("--theme", default=None, type=str, help="Report theme name")

parser.add_argument(
    "--assetsDir",
    default=None,
    type=str,
    help="Directory containing runtime assets (css/html). Defaults to package assets/ dir",
)

parser.add_argument(
    "--outputSubdir",
    default=".",
    type=str,
    help="Subdirectory within outputdir for the compiled report",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and resolve all file paths.

    Returns:
        ProgramState with summarySourceFile, analysisSourceFile,
        assetsInputdir, htmlOutputdir and envOK set

    Exits:
        1 if an input file or the assets directory is not found
    """
    state = inputstate.copy()

    LOG("Checking environment...", level=2)

    summary_file = state.inputdir / state.summaryFile
    if not summary_file.exists():
        print(f"Error: Summary file not found: {summary_file}", file=sys.stderr)
        sys.exit(1)
    state.summarySourceFile = summary_file
    LOG(f"Summary file: {summary_file}", level=2)

    if state.analysisFile:
        analysis_file = state.inputdir / state.analysisFile
        if not analysis_file.exists():
            print(f"Error: Analysis file not found: {analysis_file}", file=sys.stderr)
            sys.exit(1)
        state.analysisSourceFile = analysis_file
        LOG(f"Analysis file: {analysis_file}", level=2)
    elif appsettings.strict_mode:
        print("Error: --analysisFile is required in strict mode", file=sys.stderr)
        sys.exit(1)

    state.assetsInputdir = Path(state.assetsDir) if state.assetsDir else Path(__file__).parent / "assets"
    if not state.assetsInputdir.exists():
        print(f"Error: Assets directory not found: {state.assetsInputdir}", file=sys.stderr)
        sys.exit(1)
    LOG(f"Assets directory: {state.assetsInputdir}", level=2)

    state.htmlOutputdir = state.outputdir / state.outputSubdir
    state.htmlOutputdir.mkdir(parents=True, exist_ok=True)
    LOG(f"Output directory: {state.htmlOutputdir}", level=2)

    state.envOK = True
    return state


def source_parse(inputstate: ProgramState) -> ProgramState:
    """
    Load and validate the summary and analysis documents.

    Returns:
        ProgramState with summary and analysis set

    Exits:
        1 if a document is unreadable or invalid, or the analysis month
        does not match the summary month
    """
    state = inputstate.copy()

    LOG("Reading input documents...", level=1)
    try:
        state.summary = summary_load(state.summarySourceFile)
        if state.analysisSourceFile:
            state.analysis = analysis_load(state.analysisSourceFile, month=state.summary.month)
    except SummaryError as e:
        print(f"Input error: {e}", file=sys.stderr)
        sys.exit(1)

    if state.analysis is not None:
        if state.analysis.month != state.summary.month:
            print(
                f"Error: Analysis month {state.analysis.month} does not match "
                f"summary month {state.summary.month}",
                file=sys.stderr,
            )
            sys.exit(1)
        if appsettings.strict_mode and not state.analysis.analysis.strip():
            print("Error: Analysis text is empty", file=sys.stderr)
            sys.exit(1)
        LOG(f"Analysis text: {len(plainText_extract(markdown_format(state.analysis.analysis)))} visible characters", level=2)

    return state


def html_compile(inputstate: ProgramState) -> ProgramState:
    """
    Compile the loaded documents to a standalone HTML report.

    Returns:
        ProgramState with compileResult set

    Exits:
        1 if compilation fails
    """
    state = inputstate.copy()

    LOG("Compiling report to HTML...", level=1)

    try:
        compiler = Compiler(
            summary=state.summary,
            analysis=state.analysis,
            output_dir=str(state.htmlOutputdir),
            assets_dir=str(state.assetsInputdir),
            theme_name=state.theme,
        )
        state.compileResult = compiler.compile()
        LOG(f"Compilation complete: {state.compileResult['block_count']} analysis blocks", level=2)
    except ThemeError as e:
        print(f"Theme error: {e}", file=sys.stderr)
        sys.exit(1)
    except OSError as e:
        print(f"Compilation error: {e}", file=sys.stderr)
        if state.verbosity >= 3 or appsettings.debug_mode:
            traceback.print_exc()
        sys.exit(1)

    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display compilation results to the user.

    Exits:
        1 if compileResult is None
    """
    state: ProgramState = inputstate.copy()
    if not state.compileResult:
        print("Error: Compilation failed", file=sys.stderr)
        sys.exit(1)

    LOG("✓ Report compiled", level=1)
    LOG(f"  Output: {state.compileResult['output_file']}", level=1)
    LOG(f"  Categories: {state.compileResult['category_count']}", level=1)
    LOG(f"  Analysis blocks: {state.compileResult['block_count']}", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="ledgerdown - Monthly finance summary report compiler",
    category="Visualization",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - compile a monthly summary report.

    Orchestrates the pipeline:
        1. env_check: Validate paths and environment
        2. source_parse: Load summary and analysis documents
        3. html_compile: Compile report HTML with assets
        4. results_report: Display results to user
    """
    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    state_connectToLogger(state)

    pipeline(state, env_check, source_parse, html_compile, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
