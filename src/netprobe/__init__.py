"""
netprobe: model-agnostic interpretability and architecture search toolkit.

Every component talks to a classifier only through the
``PredictionOracle`` protocol in ``netprobe.core``.
"""

__version__ = "0.1.0"
