import argparse
from neural_network.nn import NeuralNetwork
from training_sets.logic_gates import GATES, LogicGateDataset


def build_parser():
    parser = argparse.ArgumentParser(description="Train a one hidden layer network on a two-input logic gate")
    parser.add_argument("--gate", type=str, default="xor", choices=sorted(GATES))
    parser.add_argument("--hidden-nodes", type=int, default=2)
    parser.add_argument("--epochs", type=int, default=10_000)
    parser.add_argument("--learning-rate", type=float, default=0.5)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--decimals", type=int, default=1)
    parser.add_argument("--progress", action="store_true")
    return parser


def run(args):
    # prepare dataset
    print(f"[train_gate.py] Preparing {args.gate} truth table.")
    dataset = LogicGateDataset(args.gate)

    # prepare nn
    print("[train_gate.py] Preparing nn.")
    nn = NeuralNetwork(2, args.hidden_nodes, 1, seed=args.seed)
    nn.set_training_data(dataset.inputs, dataset.targets)

    # train
    print("[train_gate.py] Training.")
    nn.train(args.epochs, args.learning_rate, progress=args.progress)
    print(f"\t[train_gate.py] Training results \t-> loss: {nn.mean_squared_error():.6f}")

    nn.print(num_decimals=args.decimals)
    return nn


def main(argv=None):
    run(build_parser().parse_args(argv))


if __name__ == '__main__':
    main()
