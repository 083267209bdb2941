"""Run a commit AI-attribution analyzer in CI and publish its results."""

__version__ = "0.1.0"
