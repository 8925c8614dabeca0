import torch


class MeanSquaredError:

    def f(self, x, y):
        """
        x and y are 1D tensors holding a prediction and its target.
        """
        n = x.shape[0]
        return torch.einsum("h->", (x - y) ** 2) / n
