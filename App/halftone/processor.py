"""Main halftone processor orchestrating the complete pipeline.

AIDEV-NOTE: This module handles the pipeline from photograph to per-channel
vector artwork: load -> (optional downscale) -> color separation -> pattern
generation per channel -> raster + SVG per channel -> composite preview.
Channels are independent and may be rendered concurrently; they only share
the read-only intensity maps.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import numpy as np
from PIL import Image

from models import ChannelResult, ProcessedImage, ProcessingConfig

from .errors import ResourceExhaustedError
from .patterns import generate_pattern
from .raster import composite_multiply, render_raster
from .separation import image_to_pixels, separate
from .svg_writer import channel_to_svg, combined_to_svg
from .utils import plot_stats, scale_image_to_fit

logger = logging.getLogger(__name__)


class HalftoneProcessor:
    """Turns images into per-channel halftone patterns."""

    def __init__(self, config: "ProcessingConfig | None" = None):
        self.config = config or ProcessingConfig()

    def load_image(self, file_path: "str | Path") -> Image.Image:
        """Load and validate an image file.

        Args:
            file_path: Path to image file (PNG, JPG, etc.)

        Returns:
            PIL Image in RGBA mode

        Raises:
            ValueError: If file cannot be loaded or is invalid
        """
        try:
            image = Image.open(file_path)
            # AIDEV-NOTE: Always convert to RGBA for consistent processing
            if image.mode != "RGBA":
                image = image.convert("RGBA")
            return image
        except (OSError, SyntaxError) as e:
            raise ValueError(f"Failed to load image: {e}") from e

    def separate(self, image: Image.Image) -> "dict[str, np.ndarray]":
        """Separate an image into the channel set of the configured color mode.

        Returns:
            Dict of channel name -> intensity map, in compositing order
        """
        pixels, width, height = image_to_pixels(image)
        return separate(
            pixels,
            width,
            height,
            contrast=self.config.contrast,
            mode=self.config.color_mode,
            curve=self.config.intensity_curve,
        )

    def render_channel(
        self,
        channel: str,
        values: np.ndarray,
        width: int,
        height: int,
    ) -> ChannelResult:
        """Generate one channel's primitives, raster and SVG.

        Args:
            channel: Channel name (selects screen angle and color)
            values: Channel intensity map
            width: Canvas width
            height: Canvas height

        Returns:
            ChannelResult whose raster and SVG share the same primitives
        """
        channel_config = self.config.channel_config(channel)
        result = generate_pattern(
            channel_config.pattern_type, values, width, height, channel_config
        )

        raster = render_raster(result.primitives, width, height, result.color)
        svg_content = channel_to_svg(result.primitives, width, height, result.color)
        stats = plot_stats(result.primitives)
        logger.debug(
            "Channel %s: %d elements, est. plot time %s",
            channel,
            stats.total_elements,
            stats.estimated_plot_time,
        )

        return ChannelResult(
            channel=channel,
            config=channel_config,
            primitives=result.primitives,
            raster=raster,
            svg=svg_content,
            stats=stats,
        )

    def process(self, source: "str | Path | Image.Image") -> ProcessedImage:
        """Execute the complete halftone pipeline.

        Args:
            source: Image path or an already loaded PIL image

        Returns:
            ProcessedImage with every channel's output and the composite

        Raises:
            ValueError: If the image cannot be loaded
            InvalidInputError: If the image data or spacing is malformed
            ResourceExhaustedError: If the image is too large to process
        """
        try:
            return self._process(source)
        except MemoryError as e:
            if isinstance(e, ResourceExhaustedError):
                raise
            raise ResourceExhaustedError(f"Out of memory while processing image: {e}") from e

    def _process(self, source: "str | Path | Image.Image") -> ProcessedImage:
        logger.info("Starting halftone pipeline...")

        if isinstance(source, Image.Image):
            image = source
        else:
            logger.info("Loading image %s", source)
            image = self.load_image(source)

        orig_width, orig_height = image.size
        image, scale = scale_image_to_fit(image, self.config.max_dimension)
        width, height = image.size
        if scale != 1.0:
            logger.info(
                "Scaled image from %dx%d to %dx%d pixels",
                orig_width,
                orig_height,
                width,
                height,
            )

        logger.info("Separating %s channels...", self.config.color_mode.value)
        channels = self.separate(image)

        logger.info(
            "Rendering %s pattern for %d channel(s)...",
            self.config.pattern_type.value,
            len(channels),
        )
        results = self._render_channels(channels, width, height)

        composite = composite_multiply([r.raster for r in results.values()], (width, height))
        combined_svg = combined_to_svg(
            [(r.primitives, r.config.color) for r in results.values()], width, height
        )

        processed = ProcessedImage(
            channels=results,
            width=width,
            height=height,
            color_mode=self.config.color_mode,
            pattern_type=self.config.pattern_type,
            composite=composite,
            combined_svg=combined_svg,
        )
        logger.info("Halftone pipeline complete: %d elements", processed.total_elements)
        return processed

    def _render_channels(
        self, channels: "dict[str, np.ndarray]", width: int, height: int
    ) -> "dict[str, ChannelResult]":
        """Render every channel, concurrently when configured.

        AIDEV-NOTE: Results are always returned in compositing order,
        whatever order the workers finish in.
        """
        workers = min(self.config.workers, len(channels))
        if workers <= 1:
            return {
                name: self.render_channel(name, values, width, height)
                for name, values in channels.items()
            }

        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = {
                name: executor.submit(self.render_channel, name, values, width, height)
                for name, values in channels.items()
            }
            return {name: future.result() for name, future in futures.items()}
