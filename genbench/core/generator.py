"""
Autoregressive decoding loop.
"""

import torch
from dataclasses import dataclass, asdict
from typing import List, Optional, Protocol, Sequence

from genbench.core.errors import InvalidArgument, ModelInferenceError, TokenizationError
from genbench.core.sampler import sample_next_token


class LanguageModel(Protocol):
    def infer(self, token_ids: Sequence[int]) -> torch.Tensor:
        """Return the logits for the position after the last token."""


class Tokenizer(Protocol):
    eos_token_id: int

    def encode(self, text: str) -> List[int]:
        ...

    def decode(self, token_ids: Sequence[int]) -> str:
        ...


@dataclass
class GenerationParams:
    """Parameters shared by every prompt of a generation run."""
    max_length: int = 40
    temperature: float = 1.2
    top_k: int = 10
    seed: Optional[int] = None

    def validate(self):
        if isinstance(self.max_length, bool) or not isinstance(self.max_length, int):
            raise InvalidArgument(f"max_length must be an int, got {self.max_length!r}")
        if self.max_length < 0:
            raise InvalidArgument(f"max_length must be >= 0, got {self.max_length}")
        if not self.temperature > 0:
            raise InvalidArgument(f"temperature must be > 0, got {self.temperature}")
        if isinstance(self.top_k, bool) or not isinstance(self.top_k, int):
            raise InvalidArgument(f"top_k must be an int, got {self.top_k!r}")
        if self.top_k < 1:
            raise InvalidArgument(f"top_k must be >= 1, got {self.top_k}")
        return self

    def to_dict(self):
        return asdict(self)


def make_rng(seed: Optional[int] = None) -> torch.Generator:
    """Create a private CPU random generator, seeded if a seed is given."""
    rng = torch.Generator()
    if seed is None:
        rng.seed()
    else:
        rng.manual_seed(seed)
    return rng


class TextGenerator:
    """
    Generates a completion for one prompt at a time.

    The model and tokenizer are only read, so one TextGenerator can be shared
    by many threads as long as each call gets its own random generator.
    """

    def __init__(self, model: LanguageModel, tokenizer: Tokenizer):
        self.model = model
        self.tokenizer = tokenizer

    def generate(self, prompt: str, params: Optional[GenerationParams] = None,
                 generator: Optional[torch.Generator] = None) -> str:
        """
        Complete a prompt.

        Args:
            prompt: Seed text, may be empty
            params: Sampling parameters (defaults: max_length=40, temperature=1.2, top_k=10)
            generator: Random source for this call. If None, one is created from params.seed.

        Returns:
            str: The decoded prompt plus generated tokens
        """
        if params is None:
            params = GenerationParams()
        params.validate()
        if generator is None:
            generator = make_rng(params.seed)

        token_ids = self._encode(prompt)
        eos_id = self.tokenizer.eos_token_id

        for _ in range(params.max_length):
            try:
                logits = self.model.infer(token_ids)
            except Exception as e:
                raise ModelInferenceError(f"Model call failed after {len(token_ids)} tokens: {e}") from e

            new_id = sample_next_token(logits, params.temperature, params.top_k, generator)
            token_ids.append(new_id)
            if new_id == eos_id:
                break

        return self._decode(token_ids)

    def _encode(self, text: str) -> List[int]:
        try:
            return list(self.tokenizer.encode(text))
        except Exception as e:
            raise TokenizationError(f"Failed to encode {text!r}: {e}") from e

    def _decode(self, token_ids: List[int]) -> str:
        try:
            return self.tokenizer.decode(token_ids)
        except Exception as e:
            raise TokenizationError(f"Failed to decode {len(token_ids)} tokens: {e}") from e
