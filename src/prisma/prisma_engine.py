"""
Prisma Engine - Main entry point for rendering a mesh to a draw list.

This module provides the primary API: take a mesh and a camera, run the
render pipeline and hand the draw list to a render context.

Usage:
    from prisma import run, PrismaConfig, Mesh

    mesh = Mesh.cube(colors)

    # Simple usage with defaults
    result = run(mesh)

    # With configuration
    config = PrismaConfig(width=640, height=480, output_format='json')
    result = run(mesh, config=config)

    # With individual options
    result = run(mesh, camera, output_format='json')

    # With profiling - shows timing for all instrumented pipeline stages
    result = run(mesh, profile=True)
    print(result.timings)
    # {'render': {'count': 1, 'total_ms': 1.2, ...},
    #  'camera_transform': {'count': 1, 'total_ms': 0.3, ...}, ...}
"""

from dataclasses import dataclass, field
from typing import Optional, Any, Literal, Dict, List
import logging
import warnings

from prisma.prisma_camera import CameraState
from prisma.prisma_render import PrismaRender, DrawCommand
from prisma.profiling import (
    enable_profiling,
    reset_profile,
    get_profile_results,
    perf_marker,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Configuration
# =============================================================================

OutputFormat = Literal['dict', 'json', 'mpl', 'commands', 'none']


@dataclass
class PrismaConfig:
    """
    Configuration options for the render pipeline.

    Attributes:
        width: Viewport width in pixels.
        height: Viewport height in pixels.
        background: Background color; also the source of the back-face tone.

        output_format: How to output the frame.
            - 'dict': Python dict of polygons and colors (default)
            - 'json': JSON-serializable dict with hex colors
            - 'mpl': matplotlib Figure
            - 'commands': the raw DrawCommand list
            - 'none': compute commands only, no render context

        profile: Enable timing profiling of pipeline stages.

        render_context: Custom render context instance (overrides output_format).
    """
    width: int = 400
    height: int = 400
    background: tuple = (255, 255, 255)
    output_format: OutputFormat = 'dict'
    profile: bool = False
    render_context: Optional[Any] = None

    # Additional options passed to the render context constructor
    options: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Viewport size must be positive, got {self.width}x{self.height}")


@dataclass
class PrismaResult:
    """
    Result from running the render pipeline.

    Attributes:
        commands: The draw list, back to front.
        output: The rendered output (format depends on config.output_format).
        timings: Timing data from profiled sections (if config.profile=True).
            Each key is a marker name, value contains count, total_ms, avg_ms, min_ms, max_ms.
        stats: Counts of faces in and polygons out.
    """
    commands: List[DrawCommand]
    output: Any = None
    timings: Optional[Dict[str, Any]] = None
    stats: Optional[Dict[str, int]] = None


# =============================================================================
# Internal Helpers
# =============================================================================

def _get_render_context(config: PrismaConfig):
    """Get or create the appropriate render context."""
    # Custom context takes priority
    if config.render_context is not None:
        return config.render_context

    if config.output_format == 'dict':
        from prisma.render_engines.dict_render_context import DictRenderContext
        return DictRenderContext(**config.options)

    elif config.output_format == 'json':
        from prisma.render_engines.json_render_context import JSONRenderContext
        return JSONRenderContext(**config.options)

    elif config.output_format == 'mpl':
        from prisma.render_engines.mpl_render_context import MplRenderContext
        return MplRenderContext(**config.options)

    elif config.output_format in ('commands', 'none'):
        return None

    else:
        raise ValueError(f"Unknown output_format: {config.output_format}")


def _collect_stats(mesh, commands) -> Dict[str, int]:
    """Collect statistics from the rendered frame."""
    front = sum(1 for c in commands if c.front_facing)
    return {
        'face_count': len(mesh.faces),
        'polygon_count': len(commands),
        'front_facing_count': front,
        'back_facing_count': len(commands) - front,
    }


# =============================================================================
# Main API
# =============================================================================

def run(
    mesh,
    camera: Optional[CameraState] = None,
    config: Optional[PrismaConfig] = None,
    *,
    # Convenience kwargs that override config
    output_format: Optional[OutputFormat] = None,
    profile: Optional[bool] = None,
) -> PrismaResult:
    """
    Run the render pipeline for one frame.

    Args:
        mesh: The Mesh to draw.
        camera: Camera state; defaults to CameraState().
        config: Configuration options (PrismaConfig instance).
        output_format: Override config.output_format.
        profile: Override config.profile.

    Returns:
        PrismaResult containing the draw list and the render context output.
    """
    # Build effective config
    if config is None:
        config = PrismaConfig()

    # Apply overrides
    if output_format is not None:
        config.output_format = output_format
    if profile is not None:
        config.profile = profile

    camera = camera or CameraState()

    # Setup profiling
    if config.profile:
        reset_profile()
        enable_profiling(True)

    try:
        commands = PrismaRender.render(mesh, camera, config.width, config.height, config.background)

        output = None
        render_ctx = _get_render_context(config)

        if render_ctx is not None:
            with perf_marker("draw"):
                PrismaRender.draw(commands, render_ctx, config.width, config.height, config.background)

            # Get output from context
            if hasattr(render_ctx, 'get_output'):
                output = render_ctx.get_output()
            else:
                warnings.warn(f"{type(render_ctx).__name__} has no get_output(); result.output is None")
        elif config.output_format == 'commands':
            output = commands

        timings = get_profile_results() if config.profile else None
        stats = _collect_stats(mesh, commands)
        logger.debug("Rendered %d of %d faces", stats['polygon_count'], stats['face_count'])

        return PrismaResult(
            commands=commands,
            output=output,
            timings=timings,
            stats=stats,
        )

    finally:
        # Always disable profiling when done
        if config.profile:
            enable_profiling(False)
