"""Command-line interface for the eda-lab workflows."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Tuple

import click
from pydantic import ValidationError

from eda_lab.core.exceptions import EDALabError
from eda_lab.core.utils import ConfigManager, LoggerFactory, NobelConfig, PathManager, TitanicConfig
from eda_lab.modeling.model_registry import ModelRegistry
from eda_lab import runner

logger = LoggerFactory.get_logger("eda_lab.cli")


def _load(ctx: click.Context, config_path: str, schema: type):
    """Read a YAML config (relative to the project root) into its pydantic schema."""
    path = ctx.obj["paths"].resolve(config_path)
    try:
        raw = ConfigManager(path.parent).load_config(str(path))
        return schema(**raw)
    except FileNotFoundError as e:
        raise click.ClickException(str(e)) from e
    except ValidationError as e:
        raise click.ClickException(f"Invalid config {path}:\n{e}") from e


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--project-root", type=click.Path(file_okay=False), default=None,
              help="Directory relative config paths are resolved against (default: cwd)")
@click.pass_context
def cli(ctx: click.Context, debug: bool, project_root: Optional[str]):
    """eda-lab - Titanic feature engineering and Nobel laureate age analysis."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    ctx.obj["paths"] = PathManager(Path(project_root) if project_root else None)
    if debug:
        LoggerFactory.set_level(logging.DEBUG)
        logger.debug("Debug mode enabled")


@cli.command()
@click.option("--config", "-c", "config_path", default="configs/titanic.yaml", show_default=True,
              help="Titanic configuration file")
@click.pass_context
def features(ctx: click.Context, config_path: str):
    """Derive passenger features and export the original and engineered tables."""
    config = _load(ctx, config_path, TitanicConfig)
    try:
        run = runner.build_features(config, ctx.obj["paths"], debug=ctx.obj["debug"])
    except (EDALabError, FileNotFoundError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    click.echo("✅ Features built and saved:")
    for name, path in run.paths.items():
        click.echo(f"   📁 {name}: {path}")


@cli.command()
@click.option("--config", "-c", "config_path", default="configs/titanic.yaml", show_default=True,
              help="Titanic configuration file")
@click.option("--model", "-m", "models", multiple=True,
              type=click.Choice(ModelRegistry().get_available_models()),
              help="Model to fit (repeatable); defaults to every model in the config")
@click.pass_context
def train(ctx: click.Context, config_path: str, models: Tuple[str, ...]):
    """Derive features, fit the survival models and write one submission per model."""
    config = _load(ctx, config_path, TitanicConfig)
    try:
        feature_run = runner.build_features(config, ctx.obj["paths"], debug=ctx.obj["debug"])
        train_run = runner.train_models(config, feature_run.derived, list(models) or None, ctx.obj["paths"])
    except (EDALabError, FileNotFoundError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    click.echo("✅ Models trained:")
    for name, result in train_run.results.items():
        cv = f"{result.cv_mean:.4f}" if result.cv_mean is not None else "n/a"
        click.echo(f"   🤖 {name}: train acc={result.train_accuracy:.4f}, cv acc={cv}")
        click.echo(f"      📄 {train_run.submissions[name]}")


@cli.command()
@click.option("--config", "-c", "config_path", default="configs/nobel.yaml", show_default=True,
              help="Nobel configuration file")
@click.pass_context
def nobel(ctx: click.Context, config_path: str):
    """Compute laureate ages at award and render the per-category ridge plot."""
    config = _load(ctx, config_path, NobelConfig)
    try:
        paths = runner.analyze_laureates(config, ctx.obj["paths"])
    except (EDALabError, FileNotFoundError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    click.echo("✅ Laureate ages analysed:")
    for name, path in paths.items():
        click.echo(f"   📁 {name}: {path}")


if __name__ == "__main__":
    cli()
