"""
Exceptions raised by the generation and benchmark code.
"""


class GenBenchError(Exception):
    """Base class for all genbench errors."""


class InvalidArgument(GenBenchError, ValueError):
    """Bad temperature, top-k, max_length, mode or worker count."""


class TokenizationError(GenBenchError):
    """The tokenizer failed to encode or decode."""


class ModelInferenceError(GenBenchError):
    """The underlying model call failed."""


class TaskFailure(GenBenchError):
    """
    Generation for one prompt of a batch failed.

    The original error is available as ``__cause__``.
    """

    def __init__(self, index: int, prompt: str, message: str = ""):
        self.index = index
        self.prompt = prompt
        detail = f": {message}" if message else ""
        super().__init__(f"Generation failed for prompt #{index} ({prompt!r}){detail}")
