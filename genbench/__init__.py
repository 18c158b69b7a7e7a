from .core.errors import GenBenchError, InvalidArgument, TokenizationError, ModelInferenceError, TaskFailure
from .core.loader import ModelLoader
from .core.sampler import sample_next_token, temperature_softmax, top_k_candidates
from .core.generator import GenerationParams, TextGenerator, make_rng
from .core.parallel import ParallelGenerator, configure_threads, run, run_parallel, run_serial
from .core.benchmark import BenchmarkReport, run_benchmark, validate_results
from .prompts import BASE_PROMPTS, build_prompts, load_prompts


class GenBench:
    def __init__(self, model_name_or_path, device="cpu"):
        self.loader = ModelLoader(model_name_or_path, device)
        self.generator = TextGenerator(self.loader.language_model(), self.loader.text_tokenizer())
        self.model_name = model_name_or_path

    @property
    def model(self):
        return self.loader.model

    def generate(self, prompt, max_length=40, temperature=1.2, top_k=10, seed=None):
        """Complete a single prompt."""
        params = GenerationParams(max_length=max_length, temperature=temperature, top_k=top_k, seed=seed)
        return self.generator.generate(prompt, params)

    def run(self, prompts, mode="serial", params=None, num_workers=None):
        """
        Complete a batch of prompts.

        Args:
            prompts: Prompts to complete
            mode: "serial" or "parallel"
            params: GenerationParams shared by all prompts
            num_workers: Number of parallel workers (None = CPU count)
        """
        return run(self.generator, prompts, mode=mode, params=params, num_workers=num_workers)

    def benchmark(self, prompts=None, params=None, num_workers=None, mode="both", intra_op_threads=1):
        """
        Time serial vs. parallel generation.

        Args:
            prompts: Prompt batch (default: the base prompts repeated 3 times)
            params: GenerationParams shared by all prompts
            num_workers: Number of parallel workers (None = CPU count)
            mode: "serial", "parallel" or "both"
            intra_op_threads: torch threads per process, None leaves torch's default

        Returns:
            BenchmarkReport
        """
        if prompts is None:
            prompts = build_prompts()
        if intra_op_threads is not None:
            configure_threads(intra_op_threads)

        print(f"Benchmarking {self.model_name} with {len(prompts)} prompts...")
        return run_benchmark(
            self.generator, prompts, params=params, num_workers=num_workers, mode=mode,
            intra_op_threads=intra_op_threads, model_name=self.model_name,
        )
