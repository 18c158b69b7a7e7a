from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.markup import escape


def _format_time(seconds):
    return "N/A" if seconds is None else f"{seconds:.2f}"


def print_benchmark_report(report, console=None, samples=2):
    """
    Print a benchmark report (timings, sample outputs, validation) to terminal.
    """
    if console is None:
        console = Console()

    table = Table(title="Benchmark Results")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    if report.model_name:
        table.add_row("Model", report.model_name)
    table.add_row("Worker threads", str(report.num_workers))
    if report.intra_op_threads is not None:
        table.add_row("Intra-op threads", str(report.intra_op_threads))
    table.add_row("Prompts processed", str(len(report.prompts)))
    table.add_row("Serial time (s)", _format_time(report.serial_time))
    table.add_row("Parallel time (s)", _format_time(report.parallel_time))
    if report.speedup is not None:
        style = "green" if report.speedup > 1 else "yellow"
        table.add_row("Speedup", f"[{style}]{report.speedup:.2f}x[/{style}]")

    console.print(table)

    # Sample outputs
    for i, prompt in enumerate(report.prompts[:samples]):
        lines = [f"[bold]Prompt:[/bold] {escape(prompt)}"]
        if report.serial_results is not None:
            lines.append(f"[bold]Serial  :[/bold] {escape(report.serial_results[i])}")
        if report.parallel_results is not None:
            lines.append(f"[bold]Parallel:[/bold] {escape(report.parallel_results[i])}")
        console.print(Panel("\n".join(lines), title=f"Sample {i + 1}", border_style="cyan"))

    # Validation
    if report.all_valid:
        console.print("[green]All results valid: True[/green]")
    else:
        console.print(f"[red]All results valid: False[/red] "
                      f"({len(report.invalid_indices)} shorter than their prompt: {escape(str(report.invalid_indices[:10]))})")
    if report.serial_results is not None and report.parallel_results is not None:
        console.print("Serial and parallel outputs may differ due to random sampling - this is expected")
