"""Interactive single-neuron perceptron trainer."""
