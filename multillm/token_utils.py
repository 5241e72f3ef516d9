"""
Token and cost estimation for display.
- Default: a simple heuristic, ceil(chars / 4). This is an approximation, NOT a
  tokenizer, and must not be used for billing.
- Optional: tiktoken (o200k_base) when TOKENIZER=tiktoken; same contract, still an estimate.
Costs use the registry's per-model rate (unknown models get the default rate,
so their estimates are less accurate).
"""

import math
from typing import Protocol

import tiktoken


class _CostTable(Protocol):
    def cost_per_token(self, model: str) -> float: ...


def estimate_tokens(text: str) -> int:
    if not text:
        return 0
    # Heuristic: ~4 chars per token (common rule of thumb)
    return math.ceil(len(text) / 4)


def count_tokens_tiktoken(text: str) -> int:
    if not text:
        return 0
    try:
        enc = tiktoken.get_encoding("o200k_base")
        return len(enc.encode(text))
    except Exception:
        # encoding files are fetched on first use; offline hosts get the heuristic
        return estimate_tokens(text)


def estimate_cost(tokens: int, model: str, table: _CostTable) -> float:
    return round(max(0, tokens) * table.cost_per_token(model), 6)


class UsageEstimator:
    def __init__(self, table: _CostTable, tokenizer: str = "heuristic"):
        self.table = table
        self.tokenizer = tokenizer

    def tokens(self, text: str) -> int:
        if self.tokenizer == "tiktoken":
            return count_tokens_tiktoken(text)
        return estimate_tokens(text)

    def usage(self, input_text: str, output_text: str, model: str) -> tuple[int, float]:
        """(tokens_used, cost_estimate) for the combined input + output text."""
        tokens = self.tokens((input_text or "") + (output_text or ""))
        return tokens, estimate_cost(tokens, model, self.table)
