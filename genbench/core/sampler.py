import torch
from typing import Optional, Tuple

from genbench.core.errors import InvalidArgument


def temperature_softmax(logits: torch.Tensor, temperature: float = 1.2) -> torch.Tensor:
    """
    Scale logits by 1/temperature and turn them into probabilities.

    Temperature < 1 sharpens the distribution, > 1 flattens it.
    """
    if not temperature > 0:
        raise InvalidArgument(f"temperature must be > 0, got {temperature}")

    logits = logits.detach().float()
    # Shift by the max so tiny temperatures cannot overflow to inf
    scaled = (logits - logits.max()) / temperature
    return torch.softmax(scaled, dim=-1)


def top_k_candidates(probs: torch.Tensor, k: int = 10) -> Tuple[torch.Tensor, torch.Tensor]:
    """
    Pick the k most probable token ids.

    Ties are broken by ascending token id so results only depend on the
    random generator used for the draw.

    Returns:
        Tuple of (token_ids, weights), both of length k, highest weight first
    """
    vocab_size = probs.shape[-1]
    if k < 1:
        raise InvalidArgument(f"top_k must be >= 1, got {k}")
    if k > vocab_size:
        raise InvalidArgument(f"top_k ({k}) exceeds vocabulary size ({vocab_size})")

    sorted_probs, sorted_ids = torch.sort(probs, descending=True, stable=True)
    return sorted_ids[:k], sorted_probs[:k]


def sample_next_token(logits: torch.Tensor, temperature: float = 1.2, k: int = 10,
                      generator: Optional[torch.Generator] = None) -> int:
    """
    Draw the next token id with temperature + top-k sampling.

    The k candidate probabilities are used as-is as sampling weights (they are
    not renormalized to sum to 1 first).

    Args:
        logits: Logits for the next position, shape (vocab_size,)
        temperature: Softmax temperature, must be > 0
        k: Number of candidates to sample from
        generator: Random source for the draw. Concurrent callers must each
                   pass their own generator.

    Returns:
        int: The chosen token id
    """
    probs = temperature_softmax(logits, temperature)
    token_ids, weights = top_k_candidates(probs, k)

    if k == 1:
        return int(token_ids[0])

    choice = torch.multinomial(weights, num_samples=1, generator=generator)
    return int(token_ids[choice.item()])
