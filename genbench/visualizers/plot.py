import matplotlib.pyplot as plt
import numpy as np


def plot_benchmark(report, output_path=None):
    """
    Plot elapsed time per mode and the output length of every prompt.
    """
    fig, axes = plt.subplots(1, 2, figsize=(14, 5))

    # Elapsed time
    modes, times = [], []
    if report.serial_time is not None:
        modes.append("serial")
        times.append(report.serial_time)
    if report.parallel_time is not None:
        modes.append(f"parallel ({report.num_workers} workers)")
        times.append(report.parallel_time)

    bars = axes[0].bar(modes, times, color=['#4C72B0', '#DD8452'][:len(modes)], edgecolor='black', alpha=0.8)
    for bar, t in zip(bars, times):
        axes[0].text(bar.get_x() + bar.get_width() / 2, bar.get_height(), f"{t:.2f}s",
                     ha='center', va='bottom')
    title = "Elapsed Time"
    if report.speedup is not None:
        title += f" (speedup {report.speedup:.2f}x)"
    axes[0].set_ylabel('Seconds')
    axes[0].set_title(title)
    axes[0].grid(True, axis='y', alpha=0.3)

    # Output lengths per prompt
    x = np.arange(len(report.prompts))
    prompt_lengths = np.array([len(p) for p in report.prompts])
    width = 0.4
    if report.serial_results is not None:
        axes[1].bar(x - width / 2, [len(r) for r in report.serial_results], width, label='serial', alpha=0.8)
    if report.parallel_results is not None:
        axes[1].bar(x + width / 2, [len(r) for r in report.parallel_results], width, label='parallel', alpha=0.8)
    axes[1].step(x, prompt_lengths, where='mid', color='black', linewidth=1, label='prompt length')
    axes[1].set_xlabel('Prompt Index')
    axes[1].set_ylabel('Characters')
    axes[1].set_title('Output Length per Prompt')
    axes[1].legend()
    axes[1].grid(True, axis='y', alpha=0.3)

    plt.tight_layout()

    if output_path:
        plt.savefig(output_path, dpi=150, bbox_inches='tight')
        print(f"Saved plot to {output_path}")
    else:
        plt.show()

    plt.close(fig)
