class NeuralNetworkError(Exception):
    """ Base class of every error raised by the network and its layers
    """


class ShapeMismatch(NeuralNetworkError, ValueError):
    """ Raised when a vector or a layer does not have the width its consumer
    expects
    """


class LayerStateError(NeuralNetworkError, RuntimeError):
    """ Raised when a layer is asked to backpropagate or optimize before the
    state it depends on has been computed
    """
