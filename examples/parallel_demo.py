"""
Example: Serial vs. parallel text generation with GPT-2
"""

from genbench import GenBench, GenerationParams, build_prompts
from genbench.visualizers import print_benchmark_report


def main():
    model_name = "openai-community/gpt2"

    print("=" * 70)
    print("Serial vs. Parallel Generation")
    print("=" * 70)

    bench = GenBench(model_name)
    prompts = build_prompts(repeat=3)
    params = GenerationParams(max_length=40, temperature=1.2, top_k=10)

    report = bench.benchmark(prompts, params=params, intra_op_threads=1)
    print_benchmark_report(report)

    print("\n" + "=" * 70)
    print(f"Parallel generation is {report.speedup:.1f}x faster!")
    print("=" * 70)


if __name__ == "__main__":
    main()
