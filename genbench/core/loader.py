import torch
from modelscope import snapshot_download
from transformers import AutoModelForCausalLM, AutoTokenizer
import os


class HFLanguageModel:
    """Adapter exposing a transformers causal LM as `infer(token_ids) -> logits`."""

    def __init__(self, model, device="cpu"):
        self.model = model
        self.device = device

    def infer(self, token_ids):
        input_ids = torch.tensor([list(token_ids)], dtype=torch.long, device=self.device)
        with torch.inference_mode():
            outputs = self.model(input_ids=input_ids)
        # Logits of the last position, on CPU for the sampler's generator
        return outputs.logits[0, -1, :].float().cpu()


class HFTokenizer:
    """Adapter exposing a transformers tokenizer as encode/decode/eos_token_id."""

    def __init__(self, tokenizer):
        self.tokenizer = tokenizer
        self.eos_token_id = tokenizer.eos_token_id

    def encode(self, text):
        ids = self.tokenizer.encode(text, add_special_tokens=False)
        if not ids and self.tokenizer.bos_token_id is not None:
            # The model needs at least one input position
            ids = [self.tokenizer.bos_token_id]
        return ids

    def decode(self, token_ids):
        return self.tokenizer.decode(token_ids, skip_special_tokens=True)


class ModelLoader:
    def __init__(self, model_name_or_path, device="cpu"):
        self.model_name = model_name_or_path
        self.device = device
        self.model_dir = self._resolve_model_dir()
        self.model = self._load_model()
        self.tokenizer = self._load_tokenizer()

    def _resolve_model_dir(self):
        if os.path.exists(self.model_name):
            return self.model_name

        print(f"Downloading {self.model_name} via ModelScope...")
        try:
            return snapshot_download(self.model_name)
        except Exception as e:
            # transformers resolves the name against the Hugging Face hub instead
            print(f"ModelScope download failed, falling back to Hugging Face hub: {e}")
            return self.model_name

    def _load_model(self):
        print(f"Loading model from: {self.model_dir}")
        model = AutoModelForCausalLM.from_pretrained(
            self.model_dir,
            torch_dtype=torch.float32,
            trust_remote_code=True,
        )
        model.to(self.device)
        model.eval()
        return model

    def _load_tokenizer(self):
        return AutoTokenizer.from_pretrained(self.model_dir, trust_remote_code=True)

    def language_model(self):
        return HFLanguageModel(self.model, device=self.device)

    def text_tokenizer(self):
        return HFTokenizer(self.tokenizer)
