"""
Engine — Pipeline orchestration.

The engine selects a pipeline, runs passes in order, and returns
the finished context. The first pass to raise stops the pipeline;
its exception reaches the caller unchanged.

The engine is NOT where domain logic lives.
"""

from dataclasses import dataclass
from typing import Optional

from svgsvelte.core.context import ConversionContext, ConversionRequest
from svgsvelte.core.contracts import Pass
from svgsvelte.core.logging import ConversionLogger
from svgsvelte.ir.schema import ConvertOptions


@dataclass
class Pipeline:
    """A named sequence of passes."""

    id: str
    name: str
    passes: list[Pass]


class Engine:
    """
    Pipeline orchestrator.

    Runs passes in order and hands back the context.
    """

    def __init__(self) -> None:
        self._pipelines: dict[str, Pipeline] = {}

    def register_pipeline(self, pipeline: Pipeline) -> None:
        """Register a pipeline by ID."""
        self._pipelines[pipeline.id] = pipeline

    def list_pipelines(self) -> list[str]:
        """List registered pipeline IDs."""
        return list(self._pipelines.keys())

    def run(
        self,
        request: ConversionRequest,
        pipeline_id: Optional[str] = None,
    ) -> ConversionContext:
        """
        Run a conversion.

        Args:
            request: The conversion request
            pipeline_id: Which pipeline to use (default: 'default')

        Returns:
            The context after the last pass

        Raises:
            KeyError: If the pipeline is not registered
            ConversionError: Whatever the failing pass raised
        """
        pipeline_id = pipeline_id or "default"

        if pipeline_id not in self._pipelines:
            raise KeyError(f"Pipeline '{pipeline_id}' not registered")

        pipeline = self._pipelines[pipeline_id]
        ctx = ConversionContext.from_request(request)
        clog = ConversionLogger(request.request_id)

        for pass_fn in pipeline.passes:
            pass_name = pass_fn.__name__
            clog.pass_start(pass_name)
            try:
                ctx = pass_fn(ctx)
            except Exception as e:
                clog.pass_error(pass_name, e)
                raise
            clog.pass_end(pass_name)

        clog.conversion_complete(
            source=request.source_name,
            props=len(ctx.props),
            output_chars=len(ctx.component_text or ""),
        )

        return ctx


def setup_default_pipeline(engine: Engine) -> None:
    """Register the default normalize → parse → generate pipeline."""
    from svgsvelte.passes import generate, normalize, parse

    engine.register_pipeline(
        Pipeline(
            id="default",
            name="Default SVG to Svelte Pipeline",
            passes=[
                normalize,
                parse,
                generate,
            ],
        )
    )


# Global engine instance
_engine: Optional[Engine] = None


def get_engine() -> Engine:
    """Get or create the global engine instance, default pipeline registered."""
    global _engine
    if _engine is None:
        engine = Engine()
        setup_default_pipeline(engine)
        _engine = engine
    return _engine


def convert(
    raw_text: str,
    options: Optional[ConvertOptions] = None,
    source_name: Optional[str] = None,
) -> str:
    """
    Convert SVG markup to Svelte component source.

    Args:
        raw_text: Raw SVG document text
        options: Conversion policy (default: class attribute excluded)
        source_name: Optional name for log context (e.g., file name)

    Returns:
        The component text

    Raises:
        NormalizationError: The cleanup stage rejected the input
        ParseError: The cleaned document is not a valid single SVG tree
    """
    request = ConversionRequest(
        text=raw_text,
        options=options or ConvertOptions(),
        source_name=source_name,
    )
    ctx = get_engine().run(request)
    return ctx.component_text or ""
