"""pricecast - Monte Carlo price projection and investment recommendation."""

__version__ = "0.1.0"
