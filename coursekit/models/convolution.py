"""Request and response models for the convolution widget."""

from pydantic import BaseModel


class ConvolutionRequest(BaseModel):
    """Request body for POST /widgets/convolution.

    ``grid`` falls back to ``sentence`` rasterized as 7x7 letter glyphs.
    ``kernel`` defaults to the 7x7 "S" pattern. ``position`` selects the
    column of the kernel's left edge; omit it to get only the sweep.
    """

    grid: list[list[float]] | None = None
    sentence: str = "ALL YOUR BASE"
    kernel: list[list[float]] | None = None
    position: int | None = None


class ConvolutionResponse(BaseModel):
    kernel: list[list[float]]
    responses: list[float]
    value_at_position: float | None = None
    best_position: int | None = None
