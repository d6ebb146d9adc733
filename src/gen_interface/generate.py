"""
Interface generation driver.

Runs the pipeline over a source tree: parse each Go file, build the
synthesis units, render and format them, then write them under the
destination root at the same relative path. Failures are recorded per file
and do not stop other files unless fail_fast is set.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from .config import GenerationConfig, RunOptions
from .errors import DuplicateTargetError, GenInterfaceError, OutputWriteError
from .gofmt import format_source, gofmt_available
from .model import SynthesisUnit, build_units
from .render import render_interface
from .source import CompilationUnit, load_source
from .walk import iter_source_files

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratedFile:
    source: Path
    target: Path
    interface_name: str
    text: str


@dataclass(frozen=True)
class FileFailure:
    path: Path
    error: GenInterfaceError


@dataclass
class RunReport:
    """Outcome of one generation run."""
    generated: list[GeneratedFile] = field(default_factory=list)
    failures: list[FileFailure] = field(default_factory=list)
    files_scanned: int = 0

    @property
    def ok(self) -> bool:
        return not self.failures


def target_directory(src_file: Path, src_root: Path, dst_root: Path) -> Path:
    """Destination directory mirroring the source file's relative location."""
    return dst_root / src_file.relative_to(src_root).parent


def package_name_for(target_dir: Path) -> str:
    """Package clause for generated files: the destination directory's name."""
    return Path(os.path.abspath(target_dir)).name


def render_units(units: list[SynthesisUnit], config: GenerationConfig, source: Path) -> list[tuple[SynthesisUnit, str]]:
    """Render and format every unit; any FormatError aborts the whole file."""
    rendered = []
    for unit in units:
        label = f"{unit.interface_name} ({source})"
        text = format_source(render_interface(unit), config.gofmt_command, label)
        rendered.append((unit, text))
    return rendered


def generate_unit(
    unit: CompilationUnit,
    config: GenerationConfig,
    package_name: str,
    file_name: str,
) -> list[tuple[SynthesisUnit, str]]:
    """Build, render and format all interfaces for one parsed file."""
    units = build_units(unit, config, package_name, file_name)
    return render_units(units, config, unit.path)


def write_output(path: Path, text: str) -> None:
    """Write generated source, creating parent directories as needed."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise OutputWriteError(path, str(e)) from e


def claim_targets(targets: list[Path], source: Path, claimed: dict[Path, Path]) -> None:
    """Record the files *source* will write; raise if another file got there first."""
    owners = dict(claimed)
    for target in targets:
        if target in owners:
            raise DuplicateTargetError(target, owners[target], source)
        owners[target] = source
    claimed.update(owners)


def generate_file(
    src_file: Path,
    src_root: Path,
    dst_root: Path,
    config: GenerationConfig,
    claimed: dict[Path, Path] | None = None,
) -> list[GeneratedFile]:
    """
    Generate the interface files for one Go source file.

    *claimed* maps targets already written in this run to their source file.

    Raises SourceParseError, FormatError, DuplicateTargetError or
    OutputWriteError; nothing is written for the file when parsing,
    formatting or target assignment fails.
    """
    compilation_unit = load_source(src_file)
    target_dir = target_directory(src_file, src_root, dst_root)
    rendered = generate_unit(compilation_unit, config, package_name_for(target_dir), src_file.name)
    claim_targets(
        [target_dir / unit.target_file_name for unit, _ in rendered],
        src_file,
        claimed if claimed is not None else {},
    )

    generated = []
    for unit, text in rendered:
        target = target_dir / unit.target_file_name
        write_output(target, text)
        logger.info("generated interface file: %s", target)
        generated.append(GeneratedFile(
            source=src_file,
            target=target,
            interface_name=unit.interface_name,
            text=text,
        ))
    return generated


def generate_tree(options: RunOptions, config: GenerationConfig) -> RunReport:
    """Generate interfaces for every selected file below options.src."""
    report = RunReport()

    if config.gofmt_command and not gofmt_available(config.gofmt_command):
        logger.warning(
            "%s not found on PATH; generated files are written without gofmt formatting",
            config.gofmt_command,
        )

    try:
        options.dst.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        report.failures.append(FileFailure(options.dst, OutputWriteError(options.dst, str(e))))
        logger.error("failed to create target directory %s: %s", options.dst, e)
        return report

    claimed: dict[Path, Path] = {}
    for src_file in iter_source_files(options.src, options.include, options.exclude):
        report.files_scanned += 1
        try:
            report.generated.extend(generate_file(src_file, options.src, options.dst, config, claimed))
        except GenInterfaceError as e:
            # FormatError's message carries the rejected source
            report.failures.append(FileFailure(src_file, e))
            logger.error("%s", e)
            if options.fail_fast:
                logger.error("stopping after first failure")
                break

    logger.info(
        "scanned %d files, generated %d interfaces, %d failures",
        report.files_scanned, len(report.generated), len(report.failures),
    )
    return report
