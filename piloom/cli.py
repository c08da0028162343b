import logging
import os
import time

import click

from . import __version__
from .config import DEFAULT_SETTINGS, resolve_digits, resolve_workers
from .engine import GUARD_DIGITS, compute_pi, run_plan
from .errors import PiloomError
from .formats import render, serialize_payload
from .partition import partition


def _setup_logging(verbose: int):
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(processName)s %(name)s: %(message)s")


def _cpu_seconds() -> float:
    # pool workers are counted once they have been joined
    t = os.times()
    return t.user + t.system + t.children_user + t.children_system


def _positive(ctx, param, value):
    if value is not None and value < 1:
        raise click.BadParameter("must be >= 1")
    return value


@click.group(context_settings={"help_option_names": ["-h", "--help"], "auto_envvar_prefix": "PILOOM"})
@click.version_option(__version__, prog_name="piloom")
@click.option("-v", "--verbose", count=True)
def main(verbose: int):
    _setup_logging(verbose)


@main.command()
@click.option("-d", "--digits", default=DEFAULT_SETTINGS.default_digits, show_default=True, type=int, callback=_positive)
@click.option("-t", "--threads", default=None, type=int, callback=_positive, help="Worker processes (default: available CPUs, at most 32).")
@click.option("--full/--tail", default=False, show_default=True)
@click.option("--tail-digits", default=DEFAULT_SETTINGS.tail_digits, show_default=True, type=int, callback=_positive)
@click.option("--format", "fmt", type=click.Choice(["txt", "json"], case_sensitive=False), default="txt", show_default=True)
@click.option("--out", "out_path", default="", show_default=False)
@click.option("--timing/--no-timing", default=True, show_default=True)
def compute(digits: int, threads, full: bool, tail_digits: int, fmt: str, out_path: str, timing: bool):
    cpu_start = _cpu_seconds()
    start = time.perf_counter()
    try:
        result = compute_pi(digits, threads)
    except PiloomError as exc:
        raise click.ClickException(str(exc))
    elapsed = time.perf_counter() - start
    cpu_time = _cpu_seconds() - cpu_start
    shown = render(result, full, tail_digits)
    meta = {
        "digits": result.decimal_digits,
        "iterations": result.plan.iteration_count,
        "bits": result.plan.bit_precision,
        "threads": result.workers,
        "exponent": result.exponent,
    }
    payload, _ = serialize_payload(shown, fmt, meta)
    if out_path:
        with open(out_path, "wb") as f:
            f.write(payload)
        click.echo(out_path)
    else:
        if fmt == "txt" and shown != result.text:
            click.echo("Last digits of Pi are:")
        click.echo(payload.decode("utf-8").rstrip("\n"))
    if timing:
        click.echo(f"Run time: {elapsed:.9f} s", err=True)
        click.echo(f"CPU time: {cpu_time:.9f} s", err=True)


@main.command("plan")
@click.option("-d", "--digits", default=DEFAULT_SETTINGS.default_digits, show_default=True, type=int, callback=_positive)
@click.option("-t", "--threads", default=None, type=int, callback=_positive)
def plan_cmd(digits: int, threads):
    try:
        requested = resolve_digits(digits)
        p = run_plan(requested)
        workers = resolve_workers(threads)
        ranges = partition(p.iteration_count, workers)
    except PiloomError as exc:
        raise click.ClickException(str(exc))
    click.echo(f"digits: {requested}")
    click.echo(f"guard digits: {GUARD_DIGITS}")
    click.echo(f"bits: {p.bit_precision}")
    click.echo(f"working bits: {p.working_precision}")
    click.echo(f"iterations: {p.iteration_count}")
    click.echo(f"threads: {workers}")
    for i, r in enumerate(ranges):
        click.echo(f"  {i}: [{r.start}, {r.end})")
