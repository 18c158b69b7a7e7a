"""
Tests for the decoding loop with stub model/tokenizer
"""

import pytest

from genbench.core.errors import InvalidArgument, ModelInferenceError, TokenizationError
from genbench.core.generator import GenerationParams, TextGenerator, make_rng

from stubs import BrokenModel, CharTokenizer, FlatModel, ScriptedModel


def test_stops_at_eos():
    """Generation ends as soon as the end-of-sequence token is sampled"""
    model = ScriptedModel({"A": "xx", "B": "yyy"})
    generator = TextGenerator(model, CharTokenizer())
    params = GenerationParams(max_length=5, top_k=1)

    assert generator.generate("A", params) == "Axx"
    assert model.calls == 3
    assert generator.generate("B", params) == "Byyy"
    assert model.calls == 3 + 4


def test_max_length_caps_generation():
    model = FlatModel()
    generator = TextGenerator(model, CharTokenizer())
    text = generator.generate("hello", GenerationParams(max_length=5, top_k=10, seed=0))
    assert text.startswith("hello")
    assert len(text) == len("hello") + 5
    assert model.calls == 5


def test_max_length_zero_returns_prompt():
    model = FlatModel()
    tokenizer = CharTokenizer()
    generator = TextGenerator(model, tokenizer)
    prompt = "The quick brown fox"
    text = generator.generate(prompt, GenerationParams(max_length=0))
    assert text == tokenizer.decode(tokenizer.encode(prompt))
    assert model.calls == 0


def test_empty_prompt():
    generator = TextGenerator(FlatModel(), CharTokenizer())
    assert generator.generate("", GenerationParams(max_length=0)) == ""
    assert len(generator.generate("", GenerationParams(max_length=3, seed=1))) == 3


def test_seeded_generation_is_reproducible():
    generator = TextGenerator(FlatModel(), CharTokenizer())
    params = GenerationParams(max_length=20, temperature=1.5, top_k=20, seed=1234)
    assert generator.generate("abc", params) == generator.generate("abc", params)
    assert (generator.generate("abc", params, generator=make_rng(99))
            == generator.generate("abc", params, generator=make_rng(99)))


@pytest.mark.parametrize("params", [
    GenerationParams(max_length=-1),
    GenerationParams(max_length=2.5),
    GenerationParams(max_length=True),
    GenerationParams(temperature=0),
    GenerationParams(top_k=0),
    GenerationParams(top_k=2.5),
    GenerationParams(top_k=True),
    GenerationParams(temperature=float("nan")),
])
def test_invalid_params_fail_before_work(params):
    class ExplodingTokenizer(CharTokenizer):
        def encode(self, text):
            raise AssertionError("tokenizer must not be called")

    generator = TextGenerator(FlatModel(), ExplodingTokenizer())
    with pytest.raises(InvalidArgument):
        generator.generate("abc", params)


def test_tokenizer_error_is_wrapped():
    generator = TextGenerator(FlatModel(), CharTokenizer())
    with pytest.raises(TokenizationError) as exc_info:
        generator.generate("bad prompt!", GenerationParams(max_length=3))
    assert isinstance(exc_info.value.__cause__, ValueError)


def test_model_error_is_wrapped():
    generator = TextGenerator(BrokenModel(), CharTokenizer())
    with pytest.raises(ModelInferenceError) as exc_info:
        generator.generate("abc", GenerationParams(max_length=3))
    assert isinstance(exc_info.value.__cause__, RuntimeError)
    assert "out of memory" in str(exc_info.value)


def test_top_k_larger_than_vocab():
    generator = TextGenerator(FlatModel(), CharTokenizer())
    with pytest.raises(InvalidArgument):
        generator.generate("abc", GenerationParams(max_length=3, top_k=10_000))
