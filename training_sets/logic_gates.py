"""
Truth tables of the two-input logic gates:
[a, b] -> [gate(a, b)] for every a, b in {0, 1}
"""
import itertools


GATES = {
    "and": lambda a, b: a and b,
    "or": lambda a, b: a or b,
    "xor": lambda a, b: a != b,
    "nand": lambda a, b: not (a and b),
    "nor": lambda a, b: not (a or b),
    "xnor": lambda a, b: a == b,
}


class LogicGateDataset(object):

    def __init__(self, gate):
        self.gate = gate.lower()
        if self.gate not in GATES:
            raise ValueError(f"[logic_gates.py] Unknown gate \"{gate}\". Choose one of: {', '.join(GATES)}.")
        function = GATES[self.gate]
        self.inputs = [[float(a), float(b)] for a, b in itertools.product((0, 1), repeat=2)]
        self.targets = [[float(bool(function(int(a), int(b))))] for a, b in self.inputs]

    def __len__(self):
        return len(self.inputs)

    def iterator(self):
        for x, y in zip(self.inputs, self.targets):
            yield x, y
