"""Request and response models for the toy neural-network widget."""

from typing import Literal

from pydantic import BaseModel, Field


class ForwardPassRequest(BaseModel):
    """A 2-2-1 network: two inputs, two hidden units, one output.

    ``weights_ih[i][j]`` connects input ``i`` to hidden unit ``j``.
    """

    inputs: list[float] = Field([1.0, 0.0], min_length=2, max_length=2)
    weights_ih: list[list[float]] = [[0.5, -0.3], [0.8, 0.2]]
    weights_ho: list[float] = Field([0.6, -0.4], min_length=2, max_length=2)
    bias_h: list[float] = Field([0.1, -0.1], min_length=2, max_length=2)
    bias_o: float = 0.2
    activation: Literal["sigmoid", "relu"] = "sigmoid"


class ForwardPassResponse(BaseModel):
    hidden_raw: list[float]
    hidden: list[float]
    output_raw: float
    output: float
    activation: str
