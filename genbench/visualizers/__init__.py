"""
genbench Visualizers Module
"""

from .plot import plot_benchmark
from .terminal import print_benchmark_report

__all__ = [
    'plot_benchmark',
    'print_benchmark_report'
]
