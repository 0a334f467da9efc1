"""Canvas partitioning into horizontal bands.

Band ``i`` of ``threads`` covers rows ``[floor(H * i / T), floor(H * (i + 1) / T))``
and the full canvas width. The bands are disjoint, in order, and together
cover every row; the last one always ends at the canvas height.

Example:
    >>> from bandtrace.render.partition import partition_canvas
    >>> [(span.start_y, span.end_y) for span in partition_canvas(640, 360, 3)]
    [(0, 120), (120, 240), (240, 360)]
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class WorkerSpan:
    """A rectangle of the canvas, half-open on the end corner.

    Attributes:
        start_x: First column.
        start_y: First row.
        end_x: One past the last column.
        end_y: One past the last row.
    """

    start_x: int
    start_y: int
    end_x: int
    end_y: int

    @property
    def width(self) -> int:
        return self.end_x - self.start_x

    @property
    def height(self) -> int:
        return self.end_y - self.start_y

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    def contains(self, x: int, y: int) -> bool:
        """Check whether a canvas pixel lies inside the span."""
        return self.start_x <= x < self.end_x and self.start_y <= y < self.end_y


def band_span(canvas_width: int, canvas_height: int, threads: int, index: int) -> WorkerSpan:
    """Compute the band of one worker.

    Args:
        canvas_width: Canvas width in pixels.
        canvas_height: Canvas height in pixels.
        threads: Total number of bands.
        index: Band index in [0, threads).

    Returns:
        The WorkerSpan of band ``index``.

    Raises:
        ValueError: If the index is out of range.
    """
    if not 0 <= index < threads:
        raise ValueError(f"Band index {index} out of range for {threads} bands")
    # Integer arithmetic gives the exact floor of H * i / T
    start_y = canvas_height * index // threads
    end_y = canvas_height * (index + 1) // threads
    return WorkerSpan(start_x=0, start_y=start_y, end_x=canvas_width, end_y=end_y)


def partition_canvas(canvas_width: int, canvas_height: int, threads: int) -> list[WorkerSpan]:
    """Split the canvas into ``threads`` horizontal bands.

    Raises:
        ValueError: If the sizes or the band count are not positive.
    """
    if canvas_width < 1 or canvas_height < 1:
        raise ValueError(f"Canvas dimensions ({canvas_width}x{canvas_height}) must be positive")
    if threads < 1:
        raise ValueError(f"threads must be >= 1, got {threads}")
    return [band_span(canvas_width, canvas_height, threads, index) for index in range(threads)]
