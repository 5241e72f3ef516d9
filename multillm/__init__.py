"""Provider dispatch and normalization core for the multi-LLM proxy."""

__version__ = "0.1.0"
