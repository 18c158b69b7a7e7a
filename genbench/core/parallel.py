"""
Serial and parallel execution of a generation batch.
"""

import torch
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence
import multiprocessing as mp

from genbench.core.errors import InvalidArgument, TaskFailure
from genbench.core.generator import GenerationParams, TextGenerator, make_rng

MODES = ("serial", "parallel")


def configure_threads(num_threads: int = 1) -> int:
    """
    Limit the intra-op (BLAS) thread count of torch.

    With many generation tasks running at once, one thread per task avoids
    oversubscribing the CPU. This is process-wide.

    Returns:
        int: The previous thread count
    """
    if num_threads < 1:
        raise InvalidArgument(f"num_threads must be >= 1, got {num_threads}")
    previous = torch.get_num_threads()
    torch.set_num_threads(num_threads)
    print(f"Set torch intra-op threads: {previous} -> {num_threads}")
    return previous


def task_seed(seed: Optional[int], index: int) -> Optional[int]:
    """Seed for the prompt at `index`, the same in serial and parallel mode."""
    if seed is None:
        return None
    return seed + index


def generate_one(generator: TextGenerator, index: int, prompt: str,
                 params: GenerationParams) -> str:
    """
    Worker function: complete a single prompt with its own random generator.
    """
    rng = make_rng(task_seed(params.seed, index))
    try:
        return generator.generate(prompt, params, generator=rng)
    except Exception as e:
        raise TaskFailure(index, prompt, str(e)) from e


def run_serial(generator: TextGenerator, prompts: Sequence[str],
               params: Optional[GenerationParams] = None) -> List[str]:
    """
    Complete prompts one after another, in input order.

    The first failing prompt aborts the batch with TaskFailure.
    """
    params = (params or GenerationParams()).validate()

    results = []
    for index, prompt in enumerate(prompts):
        results.append(generate_one(generator, index, prompt, params))
    return results


class ParallelGenerator:
    """
    Completes a batch of prompts on a thread pool.
    """

    def __init__(self, num_workers: int = None):
        """
        Args:
            num_workers: Number of worker threads. None = CPU count (capped at 8)
        """
        if num_workers is not None and num_workers < 1:
            raise InvalidArgument(f"num_workers must be >= 1, got {num_workers}")
        self.num_workers = num_workers or min(mp.cpu_count(), 8)

    def generate_batch(self, generator: TextGenerator, prompts: Sequence[str],
                       params: Optional[GenerationParams] = None) -> List[str]:
        """
        Complete all prompts concurrently.

        Results are returned in input order regardless of completion order.
        Futures are joined in input order, so when several prompts fail the
        lowest index is reported, as in run_serial.
        A failure cancels the tasks that have not started yet and is
        raised as TaskFailure. There is no timeout: a hung generation blocks
        the join.

        Args:
            generator: Shared, read-only text generator
            prompts: Prompts to complete
            params: Sampling parameters for every prompt

        Returns:
            list: One completion per prompt
        """
        params = (params or GenerationParams()).validate()
        results: List[Optional[str]] = [None] * len(prompts)

        with ThreadPoolExecutor(max_workers=self.num_workers) as executor:
            # Submit all tasks
            futures = [
                executor.submit(generate_one, generator, index, prompt, params)
                for index, prompt in enumerate(prompts)
            ]

            # Join in input order
            for index, future in enumerate(futures):
                try:
                    results[index] = future.result()
                except TaskFailure:
                    for pending in futures:
                        pending.cancel()
                    raise

        return results


def run_parallel(generator: TextGenerator, prompts: Sequence[str],
                 params: Optional[GenerationParams] = None,
                 num_workers: int = None) -> List[str]:
    return ParallelGenerator(num_workers=num_workers).generate_batch(generator, prompts, params)


def run(generator: TextGenerator, prompts: Sequence[str], mode: str = "serial",
        params: Optional[GenerationParams] = None, num_workers: int = None) -> List[str]:
    """
    Complete a batch in "serial" or "parallel" mode.
    """
    if mode not in MODES:
        raise InvalidArgument(f"Unknown mode {mode!r}, expected one of {MODES}")

    print(f"Generating {len(prompts)} prompts ({mode})...")
    if mode == "parallel":
        return run_parallel(generator, prompts, params, num_workers=num_workers)
    return run_serial(generator, prompts, params)
