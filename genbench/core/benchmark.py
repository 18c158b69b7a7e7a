"""
Serial vs. parallel benchmark driver.
"""

import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from genbench.core.errors import InvalidArgument
from genbench.core.generator import GenerationParams, TextGenerator
from genbench.core.parallel import ParallelGenerator, run_serial

BENCHMARK_MODES = ("serial", "parallel", "both")


@dataclass
class BenchmarkReport:
    prompts: List[str]
    params: GenerationParams
    num_workers: int
    serial_results: Optional[List[str]] = None
    parallel_results: Optional[List[str]] = None
    serial_time: Optional[float] = None
    parallel_time: Optional[float] = None
    speedup: Optional[float] = None
    invalid_indices: List[int] = field(default_factory=list)
    intra_op_threads: Optional[int] = None
    model_name: Optional[str] = None

    @property
    def all_valid(self) -> bool:
        return not self.invalid_indices

    def to_dict(self) -> Dict:
        return {
            "model_name": self.model_name,
            "num_workers": self.num_workers,
            "intra_op_threads": self.intra_op_threads,
            "num_prompts": len(self.prompts),
            "params": self.params.to_dict(),
            "serial_time": self.serial_time,
            "parallel_time": self.parallel_time,
            "speedup": self.speedup,
            "all_valid": self.all_valid,
            "invalid_indices": self.invalid_indices,
            "prompts": self.prompts,
            "serial_results": self.serial_results,
            "parallel_results": self.parallel_results,
        }


def compute_speedup(serial_time: float, parallel_time: float) -> float:
    return serial_time / parallel_time if parallel_time > 0 else 1.0


def validate_results(prompts: Sequence[str], results: Optional[Sequence[str]]) -> List[int]:
    """
    Sanity check: every completion should be at least as long as its prompt.

    Sampling is random, so this does not compare serial and parallel outputs.

    Returns:
        list: Indices of completions shorter than their prompt
    """
    if results is None:
        return []
    return [i for i, (prompt, text) in enumerate(zip(prompts, results)) if len(text) < len(prompt)]


def run_benchmark(generator: TextGenerator, prompts: Sequence[str],
                  params: Optional[GenerationParams] = None,
                  num_workers: int = None, mode: str = "both",
                  intra_op_threads: Optional[int] = None,
                  model_name: Optional[str] = None) -> BenchmarkReport:
    """
    Time serial and/or parallel generation over the same prompts.

    Args:
        generator: Text generator shared by both runs
        prompts: Prompt batch
        params: Sampling parameters
        num_workers: Thread pool size for the parallel run
        mode: "serial", "parallel" or "both". Speedup is only computed for "both".
        intra_op_threads: Recorded in the report only, see configure_threads
        model_name: Recorded in the report only

    Returns:
        BenchmarkReport
    """
    if mode not in BENCHMARK_MODES:
        raise InvalidArgument(f"Unknown mode {mode!r}, expected one of {BENCHMARK_MODES}")
    params = (params or GenerationParams()).validate()
    prompts = list(prompts)
    parallel = ParallelGenerator(num_workers=num_workers)

    report = BenchmarkReport(
        prompts=prompts,
        params=params,
        num_workers=parallel.num_workers,
        intra_op_threads=intra_op_threads,
        model_name=model_name,
    )

    if mode in ("serial", "both"):
        print(f"\n=== SERIAL GENERATION ({len(prompts)} prompts) ===")
        start = time.time()
        report.serial_results = run_serial(generator, prompts, params)
        report.serial_time = time.time() - start
        print(f"   Time: {report.serial_time:.2f}s")

    if mode in ("parallel", "both"):
        print(f"\n=== PARALLEL GENERATION ({len(prompts)} prompts, {parallel.num_workers} workers) ===")
        start = time.time()
        report.parallel_results = parallel.generate_batch(generator, prompts, params)
        report.parallel_time = time.time() - start
        print(f"   Time: {report.parallel_time:.2f}s")

    if mode == "both":
        report.speedup = compute_speedup(report.serial_time, report.parallel_time)

    invalid = set(validate_results(prompts, report.serial_results))
    invalid.update(validate_results(prompts, report.parallel_results))
    report.invalid_indices = sorted(invalid)

    return report
