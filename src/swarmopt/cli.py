"""
Command Line Interface for swarmopt.
"""

import json
import sys
from pathlib import Path
from typing import Optional, Tuple

import click
from rich.console import Console
from rich.panel import Panel
from rich.progress import BarColumn, Progress, TextColumn
from rich.table import Table

from . import __version__, configure_logging
from .core.config import SwarmConfig, load_config
from .core.exceptions import SwarmError
from .objectives import BENCHMARKS, create_benchmark
from .optimization.particle_swarm import ParticleSwarmOptimizer


console = Console()


@click.group()
@click.version_option(version=__version__)
def cli():
    """swarmopt Particle Swarm Optimization CLI"""
    pass


@cli.command()
@click.option("--config", "-c", type=click.Path(), help="Configuration file path")
@click.option("--function", "-f", "function_name", type=click.Choice(sorted(BENCHMARKS)), help="Benchmark function")
@click.option("--dimensions", "-d", type=int, help="Problem dimensionality")
@click.option("--bounds", type=(float, float), help="Search box used for random initial positions")
@click.option("--integer", is_flag=True, help="Sample integer initial positions")
@click.option("--particles", "-p", type=int, help="Number of particles")
@click.option("--iterations", "-n", type=int, help="Number of iterations")
@click.option("--maximize/--minimize", default=None, help="Optimization direction")
@click.option("--c1", type=float, help="Personal best (local) learning factor")
@click.option("--c2", type=float, help="Global best learning factor")
@click.option("--seed", type=int, help="Random seed")
@click.option("--output", "-o", type=click.Path(), help="Write the result as JSON")
@click.option("--quiet", "-q", is_flag=True, help="Hide the progress bar")
def run(
    config: Optional[str],
    function_name: Optional[str],
    dimensions: Optional[int],
    bounds: Optional[Tuple[float, float]],
    integer: bool,
    particles: Optional[int],
    iterations: Optional[int],
    maximize: Optional[bool],
    c1: Optional[float],
    c2: Optional[float],
    seed: Optional[int],
    output: Optional[str],
    quiet: bool
):
    """Optimize a benchmark function."""
    try:
        swarm_config = load_config(config)

        overrides = {
            "particle_count": particles,
            "iteration_count": iterations,
            "local_weight": c1,
            "global_weight": c2,
            "seed": seed,
        }
        if maximize is not None:
            overrides["direction"] = "maximize" if maximize else "minimize"

        data = swarm_config.to_dict()
        data.update({k: v for k, v in overrides.items() if v is not None})
        swarm_config = SwarmConfig.from_dict(data)

        configure_logging(swarm_config.log_level)

        options = dict(swarm_config.objective_options)
        objective = create_benchmark(
            function_name or options.get("function", "sphere"),
            dimensions=dimensions or options.get("dimensions", 2),
            bounds=bounds or options.get("bounds"),
            integer=integer or bool(options.get("integer", False)),
            seed=swarm_config.seed
        )

        optimizer = ParticleSwarmOptimizer.from_config(objective, swarm_config)

        with Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TextColumn("{task.completed}/{task.total}"),
            console=console,
            disable=quiet,
        ) as progress:
            task = progress.add_task("Optimizing...", total=swarm_config.iteration_count)

            def on_iteration(iteration, global_best):
                progress.update(
                    task,
                    completed=iteration + 1,
                    description=f"Best fitness {global_best.fitness:.6g}"
                )

            result = optimizer.optimize(callback=on_iteration)

    except SwarmError as e:
        console.print(f"[red]Error: {e}")
        sys.exit(1)

    show_result(result)

    if output:
        output_path = Path(output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w') as f:
            json.dump(result.to_dict(), f, indent=2)
        console.print(f"[green]Result written to: {output_path}")


def show_result(result):
    """Show an optimization result."""
    result_table = Table(title="Optimization Result")
    result_table.add_column("Metric", style="cyan")
    result_table.add_column("Value", style="white")

    result_table.add_row("Direction", result.direction.value)
    result_table.add_row("Best Fitness", f"{result.fitness:.6g}")
    result_table.add_row("Best Position", ", ".join(f"{x:.6g}" for x in result.position))
    result_table.add_row("Iterations", str(result.iterations))
    result_table.add_row("Evaluations", str(result.evaluations))

    console.print(result_table)


@cli.command()
def functions():
    """List the available benchmark functions."""
    functions_table = Table(title="Benchmark Functions")
    functions_table.add_column("Name", style="cyan")
    functions_table.add_column("Default Bounds", style="white")

    for name, (_, (low, high)) in sorted(BENCHMARKS.items()):
        functions_table.add_row(name, f"[{low}, {high}]")

    console.print(functions_table)


@cli.command()
@click.option("--config", "-c", type=click.Path(), help="Configuration file path")
def config_show(config: Optional[str]):
    """Show current configuration."""
    try:
        swarm_config = load_config(config)
    except SwarmError as e:
        console.print(f"[red]Error loading configuration: {e}")
        sys.exit(1)

    console.print(Panel(
        json.dumps(swarm_config.to_dict(), indent=2),
        title="[bold blue]swarmopt Configuration[/bold blue]",
        expand=False
    ))


@cli.command()
def version():
    """Show version information."""
    console.print(Panel.fit(
        "[bold blue]swarmopt Particle Swarm Optimization[/bold blue]\n"
        f"Version: {__version__}",
        title="Version Information"
    ))


if __name__ == "__main__":
    cli()
