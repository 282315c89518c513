"""Train a network to recognise Semeion handwritten digits."""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path

from pysynapse.config import NetworkConfig, TrainingConfig
from pysynapse.network import Network
from pysynapse.persistence import save_network
from pysynapse.tasks.digits import CLASSES, PIXELS, DigitRecognitionTask, load_semeion
from pysynapse.training import Trainer


def configure_logging() -> None:
    level_name = os.getenv("LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--data-path", type=str, default="data/semeion.data")
    parser.add_argument("--hidden-layers", type=int, default=2)
    parser.add_argument("--lr", type=float, default=0.001)
    parser.add_argument("--momentum", type=float, default=0.0001)
    parser.add_argument("--rounds", type=int, default=1000)
    parser.add_argument("--train-iterations", type=int, default=100)
    parser.add_argument("--test-iterations", type=int, default=100)
    parser.add_argument("--progress", action="store_true")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--save-path", type=str, default=None)
    parser.add_argument("--plot-path", type=str, default=None)
    return parser.parse_args()


def main() -> None:
    configure_logging()
    args = parse_args()
    net_config = NetworkConfig(
        input_size=PIXELS,
        hidden_layers=args.hidden_layers,
        output_size=CLASSES,
        learning_rate=args.lr,
        momentum=args.momentum,
        seed=args.seed,
    )
    schedule = TrainingConfig(
        rounds=args.rounds,
        train_iterations=args.train_iterations,
        test_iterations=args.test_iterations,
        progress=args.progress,
    )
    network = Network.from_config(net_config)
    print(f"Simulating {network.node_count} neural nodes with layer sizes {network.sizes}")

    dataset = load_semeion(args.data_path)
    task = DigitRecognitionTask(network, dataset, seed=args.seed)
    trainer = Trainer.for_task(network, task)

    accuracies = []
    for round_index in range(schedule.rounds):
        trainer.train_n(schedule.train_iterations, progress=schedule.progress)
        accuracy = trainer.test_n(schedule.test_iterations)
        accuracies.append(accuracy)
        performed = (round_index + 1) * schedule.train_iterations
        print(f"{performed} training iterations performed, accuracy: {accuracy * 100:.0f}%")

    if args.save_path:
        save_network(
            network,
            args.save_path,
            metadata={
                "task": "semeion-digits",
                "rounds": schedule.rounds,
                "final_accuracy": accuracies[-1],
            },
        )
        print(f"Saved checkpoint to {args.save_path}")

    if args.plot_path:
        from pysynapse.utils.visualization import plot_accuracy_history

        figure = plot_accuracy_history(accuracies, schedule.train_iterations)
        Path(args.plot_path).parent.mkdir(parents=True, exist_ok=True)
        figure.savefig(args.plot_path)
        print(f"Saved accuracy plot to {args.plot_path}")


if __name__ == "__main__":
    main()
