"""Forward pass of the 2-2-1 toy network shown in the neural-network widget."""

from __future__ import annotations

import numpy as np

from coursekit.models.neural_network import ForwardPassRequest, ForwardPassResponse
from coursekit.services.regression import logistic


def relu(x):
    return np.maximum(0.0, x)


ACTIVATIONS = {
    "sigmoid": logistic,
    "relu": relu,
}


def forward_pass(request: ForwardPassRequest) -> ForwardPassResponse:
    """Evaluate hidden and output activations for one input pair.

    Raises:
        ValueError: If ``weights_ih`` is not 2x2.
    """
    weights_ih = np.asarray(request.weights_ih, dtype=float)
    if weights_ih.shape != (2, 2):
        raise ValueError(f"weights_ih must be 2x2, got shape {weights_ih.shape}")

    activate = ACTIVATIONS[request.activation]
    inputs = np.asarray(request.inputs, dtype=float)

    hidden_raw = inputs @ weights_ih + np.asarray(request.bias_h, dtype=float)
    hidden = np.asarray(activate(hidden_raw), dtype=float)
    output_raw = float(hidden @ np.asarray(request.weights_ho, dtype=float) + request.bias_o)
    output = float(activate(output_raw))

    return ForwardPassResponse(
        hidden_raw=hidden_raw.tolist(),
        hidden=hidden.tolist(),
        output_raw=output_raw,
        output=output,
        activation=request.activation,
    )
