"""
visualize.py

Plot bayeslm inference results from a model output directory.

This script loads ``bayeslm_results.pkl`` written by ``infer.py`` and saves
trace, posterior density, regression and posterior predictive plots into a
``figs/`` subdirectory. The observations are taken from the pickled model, so
the original data file is not needed.

Typical usage:
    $ python visualize.py outputs/bdims/mcmc
    $ python visualize.py outputs/bdims/mcmc_chains --x0 170 --format pdf
    $ python visualize.py outputs/ --recursive
"""

import argparse
import os
import pickle

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
from rich.console import Console
from rich.panel import Panel

import bayeslm

console = Console()

RESULTS_FILE = "bayeslm_results.pkl"

# ------------------------------------------------------------------------------


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Plot bayeslm inference results from an output directory.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "model_dir",
        nargs="+",
        help=f"Output directory containing {RESULTS_FILE}. With "
        "--recursive, directories are searched for result files.",
    )
    parser.add_argument(
        "--recursive",
        action="store_true",
        help="Search each directory recursively for result files",
    )
    parser.add_argument(
        "--x0",
        type=float,
        default=180.0,
        help="Height at which to plot the posterior predictive (default: 180)",
    )
    parser.add_argument(
        "--level",
        type=float,
        default=0.95,
        help="Credible level of intervals and bands (default: 0.95)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=0,
        help="Seed for the predictive draws (default: 0)",
    )
    parser.add_argument(
        "--format",
        default="png",
        choices=["png", "pdf", "svg"],
        help="Figure file format (default: png)",
    )
    return parser.parse_args()


# ------------------------------------------------------------------------------


def _find_model_dirs(root_dir):
    """Directories below ``root_dir`` that contain a results file."""
    model_dirs = []
    for dirpath, _dirnames, filenames in os.walk(root_dir):
        if RESULTS_FILE in filenames:
            model_dirs.append(os.path.abspath(dirpath))
    return sorted(model_dirs)


def _resolve_model_dirs(paths, recursive=False):
    resolved = []
    for path in paths:
        path = os.path.abspath(path)
        if os.path.isfile(path):
            path = os.path.dirname(path)
        if not os.path.isdir(path):
            continue
        if recursive:
            resolved.extend(_find_model_dirs(path))
        elif os.path.exists(os.path.join(path, RESULTS_FILE)):
            resolved.append(path)
    return sorted(set(resolved))


# ------------------------------------------------------------------------------


def save_figures(results, figs_dir, x, y, x0, level=0.95, seed=0, fmt="png"):
    """
    Write every standard figure for ``results`` into ``figs_dir``.

    Returns
    -------
    list of str
        Paths of the written files.
    """
    os.makedirs(figs_dir, exist_ok=True)
    bayeslm.viz.matplotlib_style()

    predictive = results.predict(x0, rng_key=seed)
    figures = {
        "trace": bayeslm.viz.plot_trace(results),
        "posterior": bayeslm.viz.plot_posterior_density(results, level=level),
        "regression": bayeslm.viz.plot_regression(results, x, y, level=level),
        "predictive": bayeslm.viz.plot_predictive(
            predictive, x0=x0, level=level
        ),
    }

    written = []
    for name, fig in figures.items():
        path = os.path.join(figs_dir, f"{name}.{fmt}")
        fig.savefig(path)
        plt.close(fig)
        written.append(path)
    return written


# ------------------------------------------------------------------------------


def _process_single_model_dir(model_dir, args):
    console.print(f"[dim]Model directory:[/dim] [cyan]{model_dir}[/cyan]")
    results_file = os.path.join(model_dir, RESULTS_FILE)
    with open(results_file, "rb") as f:
        results = pickle.load(f)

    if results.model is None:
        console.print(
            "[bold red]ERROR: results do not carry the fitted model[/bold red]"
        )
        return False

    console.print(
        f"[dim]Chains:[/dim] {results.n_chains}  "
        f"[dim]Draws per chain:[/dim] {results.n_samples}"
    )
    written = save_figures(
        results,
        os.path.join(model_dir, "figs"),
        x=results.model.x,
        y=results.model.y,
        x0=args.x0,
        level=args.level,
        seed=args.seed,
        fmt=args.format,
    )
    for path in written:
        console.print(f"[green]Saved[/green] [cyan]{path}[/cyan]")
    return True


def main():
    args = parse_args()
    console.print(
        Panel.fit("[bold]BAYESLM VISUALIZATION[/bold]", border_style="blue")
    )

    model_dirs = _resolve_model_dirs(args.model_dir, recursive=args.recursive)
    if not model_dirs:
        console.print(
            f"[bold red]ERROR: no {RESULTS_FILE} found in "
            f"{args.model_dir}[/bold red]"
        )
        raise SystemExit(1)

    n_ok = sum(_process_single_model_dir(d, args) for d in model_dirs)
    console.print(
        f"[bold]Processed {n_ok}/{len(model_dirs)} directories[/bold]"
    )


if __name__ == "__main__":
    main()
