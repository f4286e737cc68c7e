"""
infer.py

Entry point for fitting the height/weight regression with Hydra.

The script loads the observations named by the ``data`` config group, samples
the posterior with the settings of the ``inference`` group, prints the
posterior summary, convergence diagnostics and the predictive interval at a
fixed height, and pickles the results into the Hydra output directory.

The observations are not shipped with the package. The default ``data`` group
expects ``data/bdims.csv``: the 507-row body dimensions table of Heinz et al.
(2003), distributed as ``bdims`` in the R package ``openintro``. Export it
with at least the ``hgt`` (cm) and ``wgt`` (kg) columns, e.g.

    $ Rscript -e 'write.csv(openintro::bdims, "data/bdims.csv", row.names=FALSE)'

or point ``data.path`` at another copy.

Typical usage:

    # One chain of 1000 samples
    $ python infer.py

    # A long single chain, or four chains with an R-hat guard
    $ python infer.py inference=mcmc_long
    $ python infer.py inference=mcmc_chains

    # Override individual settings and write figures
    $ python infer.py seed=7 predict.x0=170 priors.b=[1.0,0.25] viz=true
"""

import os
import pickle

import hydra
from hydra.core.hydra_config import HydraConfig
from omegaconf import DictConfig, OmegaConf
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax

import bayeslm
from bayeslm.data_loader import load_from_config

console = Console()

RESULTS_FILE = "bayeslm_results.pkl"


@hydra.main(version_base=None, config_path="conf", config_name="config")
def main(cfg: DictConfig) -> None:
    console.print(
        Panel.fit(
            "[bold]BAYESIAN LINEAR REGRESSION PIPELINE[/bold]",
            border_style="bright_blue",
        )
    )
    console.print(f"[dim]Working directory:[/dim] [cyan]{os.getcwd()}[/cyan]")
    console.print(Syntax(OmegaConf.to_yaml(cfg), "yaml", theme="ansi_dark"))

    # ==========================================================================
    # Data Loading Section
    # ==========================================================================
    console.rule("[bold]DATA LOADING")
    data_kwargs = OmegaConf.to_container(cfg.data, resolve=True)
    data_kwargs.pop("name", None)
    data_kwargs["path"] = hydra.utils.to_absolute_path(data_kwargs["path"])
    data_config = bayeslm.DataConfig(**data_kwargs)

    obs = load_from_config(data_config, verbose=True)
    console.print(f"[green]Data loaded![/green] {len(obs)} observations")
    console.print(obs.describe().round(2).to_string())

    # ==========================================================================
    # Configuration Preparation Section
    # ==========================================================================
    console.rule("[bold]CONFIGURATION")
    priors = bayeslm.PriorConfig(
        **OmegaConf.to_container(cfg.priors, resolve=True)
    )
    mcmc_config = bayeslm.MCMCConfig(
        **OmegaConf.to_container(cfg.inference, resolve=True)
    )
    console.print(f"[dim]Priors:[/dim] {priors.get_prior_params()}")
    console.print(
        f"[dim]Sampler:[/dim] {mcmc_config.kernel.value}, "
        f"{mcmc_config.n_chains} chain(s) x {mcmc_config.n_samples} samples"
    )

    # ==========================================================================
    # Model Inference Section
    # ==========================================================================
    console.rule("[bold]MODEL INFERENCE")
    results = bayeslm.run_regression(
        obs.x,
        obs.y,
        priors=priors,
        mcmc_config=mcmc_config,
        seed=cfg.seed,
        verbose=True,
    )
    console.print("[green]Inference completed![/green]")

    console.print(Panel(results.summary().round(3).to_string(), title="Summary"))
    console.print(
        Panel(results.diagnostics().round(3).to_string(), title="Diagnostics")
    )

    lo, hi = results.predictive_interval(
        cfg.predict.x0, level=cfg.predict.level, rng_key=cfg.predict.seed
    )
    console.print(
        f"[bold]{cfg.predict.level:.0%} predictive interval[/bold] of "
        f"{obs.y_name} at {obs.x_name}={cfg.predict.x0:g}: "
        f"[cyan]({lo:.2f}, {hi:.2f})[/cyan]"
    )

    # ==========================================================================
    # Results Saving Section
    # ==========================================================================
    console.rule("[bold]SAVING RESULTS")
    output_dir = HydraConfig.get().runtime.output_dir
    output_file = os.path.join(output_dir, RESULTS_FILE)
    with open(output_file, "wb") as f:
        pickle.dump(results, f)
    console.print(f"[green]Results saved to[/green] [cyan]{output_file}[/cyan]")

    # ==========================================================================
    # Visualization Section
    # ==========================================================================
    if cfg.get("viz"):
        console.rule("[bold]VISUALIZATION")
        from visualize import save_figures

        figs_dir = os.path.join(output_dir, "figs")
        save_figures(
            results,
            figs_dir,
            x=obs.x,
            y=obs.y,
            x0=cfg.predict.x0,
            level=cfg.predict.level,
            seed=cfg.predict.seed,
        )
        console.print(f"[green]Figures saved to[/green] [cyan]{figs_dir}[/cyan]")

    console.print(Panel.fit("[bold green]PIPELINE COMPLETED[/bold green]"))


if __name__ == "__main__":
    main()
