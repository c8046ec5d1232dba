"""
Translation & Determinism Tutorial

Goals:
- Export a trained perceptron to a torch.nn.Module and score a batch
- Show that the same seed yields the same determinism signature
"""

import torch

from gplab.perceptron.patterns import build_demo_samples
from gplab.perceptron.trainer import Trainer
from gplab.translation.pytorch_impl import to_pytorch_model
from gplab.utils.observability import determinism_signature
from gplab.utils.rng_manager import RNGManager


def train(seed: int):
    return Trainer({'max_epochs': 100}, rng_manager=RNGManager(seed=seed)).train(build_demo_samples())


def main():
    result = train(seed=11)
    model = to_pytorch_model(result.perceptron, {'device': 'cpu'})

    x = torch.tensor([s.pixels for s in build_demo_samples()], dtype=torch.float64)
    nets = model(x)
    print('nets_shape:', tuple(nets.shape))
    print('labels:', model.predict_labels(x)[:4])

    sig_a = determinism_signature(result.perceptron.to_dict())
    sig_b = determinism_signature(train(seed=11).perceptron.to_dict())
    print('determinism_sig:', sig_a)
    print('stable:', sig_a == sig_b)


if __name__ == '__main__':
    main()
