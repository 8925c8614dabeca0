import sys
import torch
from neural_network.errors import LayerStateError, ShapeMismatch
from utils.functions import Sigmoid
from utils.utils import DTYPE, as_vector, format_vector, random_in_interval


WEIGHT_RANGE = (-1, 1)  # initial weights and biases are drawn uniformly from this interval


class Layer:

    def feedforward(self, input_):
        raise NotImplementedError

    def backpropagate(self, reference):
        raise NotImplementedError

    def optimize(self, input_, learning_rate):
        raise NotImplementedError


class DenseLayer(Layer):
    """
    Fully connected layer of sigmoid nodes, out = s(W @ x + b), where W is a nodes x inputs matrix and b is the bias.
    """

    def __init__(self, num_nodes=0, num_weights=0, generator=None):
        self.generator = generator
        self.activation = Sigmoid()
        self.clear()
        if num_nodes and num_weights:
            self.resize(num_nodes, num_weights)

    def __repr__(self):
        return f"<DenseLayer num_nodes={self.num_nodes}, num_weights={self.num_weights}>"

    @property
    def num_nodes(self):
        return self.weights.size(0)

    @property
    def num_weights(self):
        """
        Number of weights per node, i.e. the number of inputs the layer expects.
        """
        return self.weights.size(1)

    def resize(self, num_nodes, num_weights):
        if num_nodes < 1 or num_weights < 1:
            raise ValueError(f"[layers.py] A layer needs at least one node and one weight per node, "
                             f"got {num_nodes} nodes with {num_weights} weights.")
        self.weights = random_in_interval((num_nodes, num_weights), *WEIGHT_RANGE, generator=self.generator)
        self.biases = random_in_interval(num_nodes, *WEIGHT_RANGE, generator=self.generator)
        self.output = None
        self.error = None

    def clear(self):
        self.weights = torch.empty((0, 0), dtype=DTYPE)
        self.biases = torch.empty(0, dtype=DTYPE)
        self.output = None
        self.error = None

    def feedforward(self, input_):
        input_ = as_vector(input_, self.num_weights, "Layer input")
        # a new output invalidates the error of the previous one
        self.error = None
        self.output = self.activation.f(torch.einsum("xy,y->x", self.weights, input_) + self.biases)
        return self.output

    def backpropagate(self, reference):
        """
        Computes the error of every node.
        Given a DenseLayer, this is a hidden layer and the error flows back through the next layer's weights,
        e[i] = sum_k(next.e[k] * next.W[k, i]) * s'(i). Otherwise `reference` holds the targets of an output layer,
        e[i] = (reference[i] - out[i]) * s'(i).
        """
        if self.output is None:
            raise LayerStateError("[layers.py] No output saved. Probably caused by calling .backpropagate without "
                                  "previously calling .feedforward.")
        der = self.activation.der(self.output)
        if isinstance(reference, DenseLayer):
            if reference.error is None:
                raise LayerStateError("[layers.py] The next layer has no error. Backpropagate the output layer first.")
            if reference.num_weights != self.num_nodes:
                raise ShapeMismatch(f"[layers.py] Next layer expects {reference.num_weights} inputs but this layer "
                                    f"has {self.num_nodes} nodes.")
            # e @ W reads the next layer's weights transposed by index
            partials = torch.einsum("k,ki->i", reference.error, reference.weights)
        else:
            partials = as_vector(reference, self.num_nodes, "Reference") - self.output
        self.error = torch.einsum("x,x->x", partials, der)
        return self.error

    def optimize(self, input_, learning_rate):
        """
        Weights are updated by lr * e @ x^t where x is the input that fed the matching feedforward call.
        Biases are updated by lr * e.
        """
        if self.error is None:
            raise LayerStateError("[layers.py] No error saved. Probably caused by calling .optimize without "
                                  "previously calling .backpropagate.")
        input_ = as_vector(input_, self.num_weights, "Layer input")
        self.weights += learning_rate * torch.einsum("x,y->xy", self.error, input_)
        self.biases += learning_rate * self.error

    @staticmethod
    def print(vector, sink=None, num_decimals=1):
        sink = sys.stdout if sink is None else sink
        sink.write(format_vector(vector, num_decimals) + "\n")
