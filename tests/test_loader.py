"""
Tests for the transformers adapters, using small fakes instead of real weights
"""

from types import SimpleNamespace

import torch

from genbench.core.generator import GenerationParams, TextGenerator
from genbench.core.loader import HFLanguageModel, HFTokenizer


class FakeHFTokenizer:
    bos_token_id = 1
    eos_token_id = 2

    def __init__(self):
        self.decode_calls = []

    def encode(self, text, add_special_tokens=True):
        assert add_special_tokens is False
        return [10 + i for i, _ in enumerate(text.split())]

    def decode(self, token_ids, skip_special_tokens=False):
        self.decode_calls.append(skip_special_tokens)
        ids = [i for i in token_ids if not (skip_special_tokens and i in (1, 2))]
        return " ".join(f"t{i}" for i in ids)


class FakeHFTokenizerNoBos(FakeHFTokenizer):
    bos_token_id = None


class FakeCausalLM:
    """Returns float16 logits of shape (1, seq, vocab) peaked at the position index."""

    def __init__(self, vocab_size=16):
        self.vocab_size = vocab_size
        self.inputs = []

    def __call__(self, input_ids):
        self.inputs.append(input_ids)
        seq_len = input_ids.shape[1]
        logits = torch.zeros(1, seq_len, self.vocab_size, dtype=torch.float16)
        for pos in range(seq_len):
            logits[0, pos, pos % self.vocab_size] = 5.0
        return SimpleNamespace(logits=logits)


def test_tokenizer_encode_and_eos():
    tokenizer = HFTokenizer(FakeHFTokenizer())
    assert tokenizer.eos_token_id == 2
    assert tokenizer.encode("hello big world") == [10, 11, 12]


def test_empty_encoding_becomes_bos():
    assert HFTokenizer(FakeHFTokenizer()).encode("") == [1]
    assert HFTokenizer(FakeHFTokenizerNoBos()).encode("") == []


def test_decode_skips_special_tokens():
    fake = FakeHFTokenizer()
    tokenizer = HFTokenizer(fake)
    assert tokenizer.decode([1, 10, 11, 2]) == "t10 t11"
    assert fake.decode_calls == [True]


def test_infer_returns_last_position_logits():
    model = FakeCausalLM()
    lm = HFLanguageModel(model)
    logits = lm.infer([10, 11, 12])

    assert model.inputs[0].dtype == torch.long
    assert model.inputs[0].tolist() == [[10, 11, 12]]
    assert logits.shape == (16,)
    assert logits.dtype == torch.float32
    assert logits.device.type == "cpu"
    assert int(logits.argmax()) == 2


def test_adapters_drive_generation():
    """Greedy decoding picks token id = current length - 1 until EOS (id 2)"""
    generator = TextGenerator(HFLanguageModel(FakeCausalLM()), HFTokenizer(FakeHFTokenizer()))
    params = GenerationParams(max_length=5, top_k=1)

    # [10] -> 0, [10, 0] -> 1, [10, 0, 1] -> 2 (EOS)
    assert generator.generate("a", params) == "t10 t0"
    # Empty prompt starts from [bos]
    assert generator.generate("", params) == "t0"
    assert generator.generate("a", GenerationParams(max_length=0)) == "t10"
