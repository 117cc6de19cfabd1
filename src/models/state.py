"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

import dataclasses
from functools import reduce
from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, Dict, Callable
from dataclasses import dataclass, field


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the compilation pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as the compilation progresses.

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, summaryFile, analysisFile,
          theme, assetsDir, outputSubdir
        - env_check: summarySourceFile, analysisSourceFile, assetsInputdir,
          htmlOutputdir, envOK
        - source_parse: summary, analysis
        - html_compile: compileResult
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing the input documents
        outputdir: Base output directory for the report
        verbosity: Logging verbosity level (1-3)
        summaryFile: Summary JSON filename (relative to inputdir)
        analysisFile: Optional analysis filename (relative to inputdir)
        theme: Optional theme name
        assetsDir: Optional custom assets directory path
        outputSubdir: Subdirectory within outputdir for output
        envOK: Environment validation passed
        summarySourceFile: Resolved path to summary file
        analysisSourceFile: Resolved path to analysis file, if any
        assetsInputdir: Resolved path to assets directory
        htmlOutputdir: Final output directory (outputdir + outputSubdir)
        summary: Loaded MonthlySummary
        analysis: Loaded AIAnalysis, if any
        compileResult: Compilation results (output_file, block_count, status)
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    summaryFile: str = field(default="summary.json")
    analysisFile: Optional[str] = field(default=None)
    theme: Optional[str] = field(default=None)
    assetsDir: Optional[str] = field(default=None)
    outputSubdir: str = field(default=".")

    # Pipeline state
    envOK: bool = field(default=False)
    summarySourceFile: Path = field(default=Path("/"))
    analysisSourceFile: Optional[Path] = field(default=None)
    assetsInputdir: Path = field(default=Path("/"))
    htmlOutputdir: Path = field(default=Path("/"))
    summary: Optional[Any] = field(default=None)  # MonthlySummary at runtime
    analysis: Optional[Any] = field(default=None)  # AIAnalysis at runtime
    compileResult: Optional[Dict] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Options that are not ProgramState fields are ignored.
        """
        valid_fields = {f.name for f in dataclasses.fields(cls)}
        filtered_options = {k: v for k, v in vars(options).items() if k in valid_fields}
        merged_args = {**filtered_options, "inputdir": inputdir, "outputdir": outputdir}
        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            source_parse,
            html_compile,
            results_report
        )

    This is equivalent to:
        results_report(html_compile(source_parse(env_check(initial_state))))
    """
    return reduce(lambda state, stage: stage(state), stages, initial_state)
