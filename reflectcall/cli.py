"""
CLI interface for reflectcall.

Provides commands to inspect a class's callable surface and to dispatch a
method call on a fresh instance with raw JSON params.

Targets are given as MODULE:CLASS (e.g. myapp.services:Calculator) and
instantiated with no arguments.
"""

import importlib
import inspect
from pathlib import Path

import click
from rich.table import Table

from reflectcall import __version__
from reflectcall.config import ReflectCallConfig
from reflectcall.errors import ConfigError
from reflectcall.utils import console, print_error, print_info, setup_logging, to_display


def _load_class(spec: str) -> type:
    """Import MODULE:CLASS and return the class."""
    module_name, sep, attr_path = spec.partition(":")
    if not sep or not module_name or not attr_path:
        raise click.BadParameter(f"expected MODULE:CLASS, got {spec!r}")

    try:
        obj = importlib.import_module(module_name)
    except ImportError as e:
        raise click.BadParameter(f"cannot import {module_name}: {e}")

    for part in attr_path.split("."):
        if not hasattr(obj, part):
            raise click.BadParameter(f"{module_name} has no attribute {attr_path}")
        obj = getattr(obj, part)

    if not inspect.isclass(obj):
        raise click.BadParameter(f"{spec} is not a class")
    return obj


@click.group()
@click.version_option(version=__version__, prog_name="reflectcall")
@click.pass_context
def main(ctx):
    """
    reflectcall - Dynamic method invocation by name.
    """
    from reflectcall.config import load_config

    ctx.ensure_object(dict)
    try:
        config = load_config()
    except FileNotFoundError:
        config = ReflectCallConfig()
    except ConfigError as e:
        # init must still run with a broken config
        print_error(f"Ignoring invalid config: {e}")
        config = ReflectCallConfig()

    ctx.obj["config"] = config
    setup_logging(
        log_level=config.log_level,
        log_format=config.log_format,
        log_file=Path(config.log_file).expanduser() if config.log_file else None,
    )


@main.command("init")
@click.option("--force", is_flag=True, help="Overwrite existing configuration")
def init(force: bool):
    """Initialize reflectcall configuration."""
    from reflectcall.config import get_reflectcall_home
    import yaml

    home = get_reflectcall_home()
    if not home.exists():
        home.mkdir(parents=True)

    cfg_path = home / "config.yaml"
    if cfg_path.exists() and not force:
        click.echo(f"Config already exists at {cfg_path}. Use --force to overwrite.", err=True)
        raise SystemExit(1)

    default_cfg = ReflectCallConfig(env_file=str(home / ".env")).to_dict()
    cfg_path.write_text(yaml.safe_dump(default_cfg, sort_keys=False))

    env_path = home / ".env"
    if not env_path.exists():
        env_path.write_text("# PYTHONPATH=...\n")

    click.echo(f"Initialized reflectcall config at {cfg_path}")


@main.command("methods")
@click.argument("target")
def list_methods(target: str):
    """
    List the public methods callable on TARGET (MODULE:CLASS).
    """
    from reflectcall.dispatch import public_methods

    cls = _load_class(target)
    methods = public_methods(cls)

    if not methods:
        print_info(f"{target} exposes no public methods")
        return

    table = Table(title=f"{cls.__qualname__} ({len(methods)} methods)")
    table.add_column("Method", style="cyan")
    table.add_column("Signature")
    for name, fn in methods.items():
        table.add_row(name, str(inspect.signature(fn)))
    console.print(table)


@main.command("call", context_settings={"ignore_unknown_options": True})
@click.argument("target")
@click.argument("method", required=False)
@click.argument("params", nargs=-1)
@click.option(
    "--envelope",
    "envelope_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Read a {\"method\": ..., \"params\": [...]} call envelope from FILE ('-' not supported)",
)
@click.pass_context
def call(ctx, target: str, method: str, params: tuple[str, ...], envelope_file: Path):
    """
    Call METHOD on a new TARGET instance with raw JSON PARAMS.

    Each PARAM is one JSON value, decoded into the type the method declares
    for that position.

    Examples:

        reflectcall call myapp.calc:Calculator add 1 2

        reflectcall call myapp.calc:Calculator add -5 3

        reflectcall call myapp.calc:Calculator greet '"world"'

        reflectcall call myapp.calc:Calculator --envelope request.json
    """
    from reflectcall.dispatch import call_envelope, call_method_raw, result_error

    config = ctx.obj["config"]
    cls = _load_class(target)

    try:
        instance = cls()
    except Exception as e:
        print_error(f"cannot instantiate {target}: {e}")
        raise SystemExit(1)

    if envelope_file is not None:
        if params:
            raise click.UsageError("PARAMS cannot be combined with --envelope")
        results = call_envelope(instance, envelope_file.read_bytes(), method_name=method, config=config)
    else:
        if not method:
            raise click.UsageError("METHOD is required without --envelope")
        results = call_method_raw(instance, method, list(params), config=config)

    error = result_error(results)
    if error is not None:
        print_error(error.message)
        raise SystemExit(1)

    for value in results:
        click.echo(to_display(value))


if __name__ == "__main__":
    main()
