"""
Perceptron Basics Tutorial

Goals:
- Build samples from text rows
- Train with the delta rule and inspect the iteration log
- Recognize a vector and read the per-neuron nets
"""

from gplab.perceptron.predictor import Predictor
from gplab.perceptron.sample import Sample
from gplab.perceptron.trainer import Trainer
from gplab.utils.rng_manager import RNGManager


def main():
    samples = [
        Sample.from_rows('VERTICAL', ["0100", "0100", "0100", "0100"]),
        Sample.from_rows('VERTICAL', ["0010", "0010", "0010", "0010"]),
        Sample.from_rows('HORIZONTAL', ["0000", "1111", "0000", "0000"]),
        Sample.from_rows('HORIZONTAL', ["0000", "0000", "1111", "0000"]),
    ]
    trainer = Trainer({'learning_rate': 0.1, 'max_epochs': 200}, rng_manager=RNGManager(seed=1))
    result = trainer.train(samples)
    print(f"epochs={result.epochs} mse={result.mse:.4f} accuracy={result.accuracy:.2f}")

    # The first few (sample, neuron) steps, rounded for display.
    for entry in result.iteration_log[:4]:
        print(entry)

    predictor = Predictor(result.perceptron)
    probe = Sample.from_rows('?', ["1000", "1000", "1000", "1000"])
    prediction = predictor.predict(probe.pixels)
    print('recognized:', prediction.label)
    for item in prediction.detail:
        print(f"  {item.label}: net={item.net:+.3f} output={item.output}")


if __name__ == '__main__':
    main()
