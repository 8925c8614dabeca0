import torch


class Sigmoid:
    """
    Logistic function s(x) = 1 / (1 + e^-x).
    """

    def f(self, x):
        """
        In float64 the result rounds to exactly 1.0 for x above about 37 and to 0.0 for x below about -745,
        so the output is strictly inside (0, 1) only for moderate weighted sums.
        """
        return 1 / (1 + torch.exp(-x))

    def der(self, output):
        """
        s'(x) = s(x) * (1 - s(x)), expressed through the output so the weighted sum is not needed again.
        """
        return output * (1 - output)
