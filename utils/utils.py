import torch
from neural_network.errors import ShapeMismatch


DTYPE = torch.float64


def random_in_interval(dims, min_=-1, max_=1, generator=None):
    return (max_ - min_) * torch.rand(dims, generator=generator, dtype=DTYPE) + min_


def as_vector(values, size=None, name="vector"):
    """
    Copies `values` into a 1D float64 tensor, checking its length against `size` when given.
    """
    vector = torch.as_tensor(values, dtype=DTYPE).clone()
    if vector.dim() != 1:
        raise ShapeMismatch(f"[utils.py] {name} must be one-dimensional, got shape {tuple(vector.shape)}.")
    if size is not None and vector.size(0) != size:
        raise ShapeMismatch(f"[utils.py] {name} has {vector.size(0)} values, expected {size}.")
    return vector


def format_vector(vector, num_decimals=1):
    return " ".join(f"{float(value):.{num_decimals}f}" for value in vector)
