import argparse
import json
import sys

from rich.console import Console

from genbench import GenBench
from genbench.core.generator import GenerationParams
from genbench.prompts import build_prompts, load_prompts
from genbench.visualizers.terminal import print_benchmark_report

DEFAULT_MODEL = "openai-community/gpt2"


def add_sampling_arguments(parser):
    parser.add_argument("--model", type=str, default=DEFAULT_MODEL, help="Model name or path")
    parser.add_argument("--device", type=str, default="cpu", help="Device to load model on")
    parser.add_argument("--max-length", type=int, default=40,
                        help="Maximum number of tokens to generate per prompt")
    parser.add_argument("--temperature", type=float, default=1.2, help="Softmax temperature (> 0)")
    parser.add_argument("--top-k", type=int, default=10, help="Sample from the k most likely tokens")
    parser.add_argument("--seed", type=int, default=None,
                        help="Base random seed (prompt i uses seed + i)")


def build_parser():
    parser = argparse.ArgumentParser(description="genbench: serial vs. parallel text generation benchmark")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Bench command
    bench_parser = subparsers.add_parser("bench", help="Time serial vs. parallel generation")
    add_sampling_arguments(bench_parser)
    bench_parser.add_argument("--mode", type=str, default="both", choices=["serial", "parallel", "both"],
                              help="Which execution modes to run")
    bench_parser.add_argument("--workers", type=int, default=None,
                              help="Number of parallel workers (default: CPU count, max 8)")
    bench_parser.add_argument("--intra-op-threads", type=int, default=1,
                              help="torch intra-op threads (1 avoids oversubscription)")
    bench_parser.add_argument("--prompts-file", type=str, help="Text file with one prompt per line")
    bench_parser.add_argument("--repeat", type=int, default=3,
                              help="Repeat the prompt set this many times")
    bench_parser.add_argument("--samples", type=int, default=2, help="Number of sample outputs to show")
    bench_parser.add_argument("--output", type=str, help="Output JSON file path")
    bench_parser.add_argument("--plot", type=str, help="Save a timing plot to this path")

    # Generate command
    generate_parser = subparsers.add_parser("generate", help="Complete one or more prompts")
    add_sampling_arguments(generate_parser)
    generate_parser.add_argument("--prompt", type=str, action="append", required=True,
                                 help="Prompt to complete (repeatable)")

    return parser


def params_from_args(args):
    return GenerationParams(
        max_length=args.max_length,
        temperature=args.temperature,
        top_k=args.top_k,
        seed=args.seed,
    ).validate()


def run_bench(args, console):
    params = params_from_args(args)
    if args.prompts_file:
        prompts = build_prompts(load_prompts(args.prompts_file), repeat=args.repeat)
    else:
        prompts = build_prompts(repeat=args.repeat)

    console.print(f"[bold green]Benchmarking {args.model} on {len(prompts)} prompts[/bold green]")
    bench = GenBench(args.model, device=args.device)
    report = bench.benchmark(prompts, params=params, num_workers=args.workers,
                             mode=args.mode, intra_op_threads=args.intra_op_threads)

    print_benchmark_report(report, console=console, samples=args.samples)

    # Save to JSON if requested
    if args.output:
        with open(args.output, 'w') as f:
            json.dump(report.to_dict(), f, indent=2)
        console.print(f"[green]Results saved to {args.output}[/green]")

    if args.plot:
        from genbench.visualizers.plot import plot_benchmark
        plot_benchmark(report, output_path=args.plot)


def run_generate(args, console):
    params = params_from_args(args)
    bench = GenBench(args.model, device=args.device)
    results = bench.run(args.prompt, mode="serial", params=params)
    for prompt, text in zip(args.prompt, results):
        console.print(f"[bold cyan]Prompt:[/bold cyan] {prompt}")
        console.print(f"[bold]Output:[/bold] {text}\n")


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    console = Console()

    if args.command is None:
        parser.print_help()
        return 1

    try:
        if args.command == "bench":
            run_bench(args, console)
        elif args.command == "generate":
            run_generate(args, console)
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        import traceback
        console.print(traceback.format_exc())
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
