import logging
import sys
import torch
from tqdm import tqdm
from neural_network.errors import ShapeMismatch
from neural_network.layers import DenseLayer
from neural_network.loss import MeanSquaredError
from utils.utils import as_vector


logger = logging.getLogger(__name__)

SEPARATOR = "-" * 80


class NeuralNetwork:
    """
    Network with one hidden layer trained by online stochastic gradient descent.

    Input (R^i) => Hidden (R^h) => Output (R^o), every node being a sigmoid unit.

    Each epoch visits the stored training set in a freshly shuffled order. Every sample is fed forward,
    the errors of all layers are computed (output layer first) and only then are the weights updated,
    so the hidden layer always sees the output weights as they were during the feedforward.
    """

    def __init__(self, num_inputs=0, num_hidden_nodes=0, num_outputs=0, seed=None):
        """
        Parameters
        ----------
        num_inputs, num_hidden_nodes, num_outputs: int, default=0
            Size of each layer. When left at zero the network is empty and `init` must be called
            before training or predicting.

        seed: int, default=None
            Seed of the generator used for the initial weights and the shuffling of the training set.
            If None, the generator is seeded non-deterministically.
        """
        self.generator = torch.Generator()
        if seed is None:
            self.generator.seed()
        else:
            self.generator.manual_seed(seed)
        self.layers = [DenseLayer(generator=self.generator), DenseLayer(generator=self.generator)]
        self.loss = MeanSquaredError()
        self._train_in = []
        self._train_out = []
        self._train_order = []
        if num_inputs or num_hidden_nodes or num_outputs:
            self.init(num_inputs, num_hidden_nodes, num_outputs)

    def __repr__(self):
        return (f"<NeuralNetwork num_inputs={self.num_inputs}, num_hidden_nodes={self.num_hidden_nodes}, "
                f"num_outputs={self.num_outputs}>")

    @property
    def hidden_layer(self):
        return self.layers[0]

    @property
    def output_layer(self):
        return self.layers[-1]

    @property
    def train_in(self):
        return tuple(self._train_in)

    @property
    def train_out(self):
        return tuple(self._train_out)

    @property
    def training_order(self):
        return tuple(self._train_order)

    @property
    def num_inputs(self):
        return self.hidden_layer.num_weights

    @property
    def num_hidden_nodes(self):
        return self.hidden_layer.num_nodes

    @property
    def num_outputs(self):
        return self.output_layer.num_nodes

    @property
    def num_training_sets(self):
        return len(self._train_order)

    @property
    def output(self):
        return self.output_layer.output

    def init(self, num_inputs, num_hidden_nodes, num_outputs):
        if min(num_inputs, num_hidden_nodes, num_outputs) < 1:
            raise ValueError(f"[nn.py] Every layer needs at least one node, got {num_inputs} inputs, "
                             f"{num_hidden_nodes} hidden nodes and {num_outputs} outputs.")
        self.hidden_layer.resize(num_hidden_nodes, num_inputs)
        self.output_layer.resize(num_outputs, num_hidden_nodes)

    def clear(self):
        for layer in self.layers:
            layer.clear()
        self._train_in = []
        self._train_out = []
        self._train_order = []

    def set_training_data(self, train_in, train_out):
        """
        Stores a copy of the training data. If a different number of inputs and targets is given,
        e.g. seven inputs and five targets, only the five complete pairs are kept.

        Returns
        -------
        dropped: int
            Number of inputs or targets discarded to make both collections the same length.
        """
        train_in = list(train_in)
        train_out = list(train_out)
        n = min(len(train_in), len(train_out))
        dropped = max(len(train_in), len(train_out)) - n
        if dropped:
            logger.warning("Got %d inputs and %d targets, dropping %d unpaired samples.",
                           len(train_in), len(train_out), dropped)

        sized = self.num_inputs > 0
        self._train_in = [as_vector(x, self.num_inputs if sized else None, f"Training input {i}")
                          for i, x in enumerate(train_in[:n])]
        self._train_out = [as_vector(y, self.num_outputs if sized else None, f"Training target {i}")
                           for i, y in enumerate(train_out[:n])]
        self._train_order = list(range(n))
        return dropped

    def train(self, num_epochs, learning_rate, progress=False):
        if num_epochs < 0:
            raise ValueError(f"[nn.py] Number of epochs must be non-negative, got {num_epochs}.")
        if num_epochs == 0 or not self._train_order:
            logger.debug("Nothing to train: %d epochs over %d samples.", num_epochs, self.num_training_sets)
            return
        self._check_training_data()

        logger.info("Training %d epochs at learning rate %s over %d samples.",
                    num_epochs, learning_rate, self.num_training_sets)
        for _ in tqdm(range(num_epochs), disable=not progress):
            self._randomize_training_order()
            for i in self._train_order:
                self._train_step(self._train_in[i], self._train_out[i], learning_rate)
        logger.info("Training finished with mean squared error %.6f.", self.mean_squared_error())

    def predict(self, input_):
        self._feedforward(input_)
        return self.output

    def mean_squared_error(self, inputs=None, targets=None):
        """
        Mean of the per sample squared error over the given pairs, or over the stored training set when
        neither `inputs` nor `targets` is given. Unpaired samples are dropped as in `set_training_data`.
        """
        if (inputs is None) != (targets is None):
            raise ValueError("[nn.py] Give both inputs and targets, or neither to use the training set.")
        if inputs is None:
            inputs, targets = self._train_in, self._train_out
        inputs, targets = list(inputs), list(targets)
        if len(inputs) != len(targets):
            logger.warning("Got %d inputs and %d targets, dropping %d unpaired samples.",
                           len(inputs), len(targets), abs(len(inputs) - len(targets)))
        pairs = list(zip(inputs, targets))
        if not pairs:
            return 0.0
        total = 0.0
        for x, y in pairs:
            total += float(self.loss.f(self.predict(x), as_vector(y, self.num_outputs, "Target")))
        return total / len(pairs)

    def print(self, inputs=None, num_decimals=1, sink=None):
        """
        Predicts every input (the stored training inputs by default) and writes the input/output pairs to `sink`
        (standard output by default).
        """
        inputs = self._train_in if inputs is None else list(inputs)
        if not inputs:
            return
        sink = sys.stdout if sink is None else sink
        sink.write(SEPARATOR + "\n")
        for i, x in enumerate(inputs):
            sink.write("Input:\t")
            DenseLayer.print(x, sink, num_decimals)
            sink.write("Output:\t")
            DenseLayer.print(self.predict(x), sink, num_decimals)
            if i < len(inputs) - 1:
                sink.write("\n")
        sink.write(SEPARATOR + "\n\n")

    def _check_training_data(self):
        """
        Checks the stored samples against the current layer sizes, so data loaded before `init`
        fails before any weight is updated.
        """
        if self.num_inputs == 0:
            raise ShapeMismatch("[nn.py] The network is empty. Call .init before using it.")
        for i, (x, y) in enumerate(zip(self._train_in, self._train_out)):
            if x.size(0) != self.num_inputs:
                raise ShapeMismatch(f"[nn.py] Training input {i} has {x.size(0)} values, expected {self.num_inputs}.")
            if y.size(0) != self.num_outputs:
                raise ShapeMismatch(f"[nn.py] Training target {i} has {y.size(0)} values, "
                                    f"expected {self.num_outputs}.")

    def _feedforward(self, input_):
        """
        Returns the input each layer received, captured before any layer is updated.
        """
        if self.num_inputs == 0:
            raise ShapeMismatch("[nn.py] The network is empty. Call .init before using it.")
        layer_inputs = []
        res = input_
        for layer in self.layers:
            layer_inputs.append(res)
            res = layer.feedforward(res)
        return layer_inputs

    def _backpropagate(self, reference):
        self.output_layer.backpropagate(reference)
        for layer, next_layer in zip(reversed(self.layers[:-1]), reversed(self.layers[1:])):
            layer.backpropagate(next_layer)

    def _optimize(self, layer_inputs, learning_rate):
        for layer, layer_input in zip(reversed(self.layers), reversed(layer_inputs)):
            layer.optimize(layer_input, learning_rate)

    def _train_step(self, input_, reference, learning_rate):
        layer_inputs = self._feedforward(input_)
        self._backpropagate(reference)
        self._optimize(layer_inputs, learning_rate)

    def _randomize_training_order(self):
        """
        Swaps every position i with a uniformly drawn position r.
        """
        n = len(self._train_order)
        swaps = torch.randint(n, (n,), generator=self.generator).tolist()
        for i, r in enumerate(swaps):
            self._train_order[i], self._train_order[r] = self._train_order[r], self._train_order[i]
