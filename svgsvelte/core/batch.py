"""
Batch — Per-file conversion and aggregate results.

Each file converts independently; a failure is recorded and the
batch moves on. The caller decides what to print and which exit
status to return.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from svgsvelte.core.context import ConversionRequest
from svgsvelte.core.engine import get_engine
from svgsvelte.core.logging import LogChannel, get_logger
from svgsvelte.ir.enums import ConversionStatus
from svgsvelte.ir.schema import ConvertOptions
from svgsvelte.ir.serialization import to_json

log = get_logger(LogChannel.BATCH)

SVG_SUFFIX = ".svg"

# Output format -> file suffix
OUTPUT_SUFFIXES = {
    "component": ".svelte",
    "tree": ".json",
}


@dataclass
class FileResult:
    """Outcome of converting one file."""
    source: Path
    status: ConversionStatus
    output: Optional[Path] = None
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status == ConversionStatus.SUCCEEDED


@dataclass
class BatchReport:
    """Results of a directory conversion."""
    input_dir: Path
    results: list[FileResult] = field(default_factory=list)

    def record_success(self, source: Path, output: Path) -> FileResult:
        result = FileResult(source=source, status=ConversionStatus.SUCCEEDED, output=output)
        self.results.append(result)
        return result

    def record_failure(self, source: Path, error: Exception) -> FileResult:
        result = FileResult(source=source, status=ConversionStatus.FAILED, error=str(error))
        self.results.append(result)
        log.warning("file_failed", source=source.name, error=str(error))
        return result

    @property
    def succeeded_count(self) -> int:
        return sum(1 for r in self.results if r.succeeded)

    @property
    def failed_count(self) -> int:
        return sum(1 for r in self.results if not r.succeeded)

    @property
    def total_count(self) -> int:
        return len(self.results)

    @property
    def failures(self) -> list[FileResult]:
        return [r for r in self.results if not r.succeeded]


def find_svg_files(directory: Path) -> list[Path]:
    """SVG files directly inside a directory, sorted by name."""
    return sorted(
        (p for p in directory.iterdir() if p.is_file() and p.name.endswith(SVG_SUFFIX)),
        key=lambda p: p.name,
    )


def convert_file(
    source: Path,
    output: Path,
    options: Optional[ConvertOptions] = None,
    output_format: str = "component",
) -> Path:
    """
    Convert one SVG file and write the result.

    Args:
        source: SVG file to read (UTF-8)
        output: File to write; parent directories are created
        options: Conversion policy
        output_format: "component" (Svelte source) or "tree" (parsed tree as JSON)

    Returns:
        The output path

    Raises:
        ConversionError: If the document can't be converted
        OSError: If the source can't be read or the output written
    """
    if output_format not in OUTPUT_SUFFIXES:
        raise ValueError(f"Unknown output format: {output_format}")

    request = ConversionRequest(
        text=source.read_text(encoding="utf-8"),
        options=options or ConvertOptions(),
        source_name=source.name,
    )
    ctx = get_engine().run(request)

    if output_format == "tree":
        content = to_json(ctx.tree)
    else:
        content = ctx.component_text or ""

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(content, encoding="utf-8")

    log.verbose("file_written", source=source.name, output=str(output), chars=len(content))
    return output
