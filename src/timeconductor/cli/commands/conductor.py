"""
Conductor command group.

Lists the modes offered for the built-in UTC time system and runs stepped
simulations of a mode so its bounds can be inspected tick by tick.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any, Optional

import typer

from ...domain.types import Deltas, ModeKey
from ...infra.exceptions import TimeConductorError
from ...infra.logging import get_logger
from ...runtime import (
    ConductorViewService,
    LatestDataTickSource,
    LocalClockTickSource,
    SteppedMasterClock,
    TimeConductor,
    UTCTimeSystem,
)

app = typer.Typer(name="conductor", help="Time conductor mode operations")


class _Environment:
    """Stepped clock, UTC time system and tick sources wired to a view service."""

    def __init__(self, start_ms: float = 0.0) -> None:
        self.clock = SteppedMasterClock(start=start_ms / 1000.0)
        self.local = LocalClockTickSource(self.clock, sleep_fn=None)
        self.lad = LatestDataTickSource()
        self.time_system = UTCTimeSystem(self.clock, [self.local, self.lad])
        self.conductor = TimeConductor()
        self.view = ConductorViewService(self.conductor, [self.time_system])

    def step(self, step_ms: float) -> None:
        self.clock.advance(step_ms / 1000.0)
        mode = self.view.mode
        if mode == ModeKey.REALTIME.value:
            self.local.run_once()
        elif mode == ModeKey.LAD.value:
            self.lad.push(self.clock.now() * 1000.0)


def _format_json_output(result: dict[str, Any]) -> str:
    return json.dumps(result, indent=2)


def _fail(message: str, json_output: bool) -> None:
    if json_output:
        typer.echo(_format_json_output({"status": "error", "errors": [message]}))
    else:
        typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(code=1)


@app.command("modes")
def list_modes(
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """List the modes available for the built-in time systems."""
    env = _Environment()
    modes = [asdict(metadata) for metadata in env.view.available_modes.values()]

    if json_output:
        typer.echo(_format_json_output({"status": "ok", "modes": modes}))
        return
    for mode in modes:
        typer.echo(f"{mode['key']:<10} {mode['name']}")


@app.command("simulate")
def simulate(
    mode: str = typer.Option("realtime", "--mode", "-m", help="Mode key: fixed, realtime or LAD"),
    ticks: int = typer.Option(5, "--ticks", "-n", min=0, help="Number of ticks to fire"),
    step_ms: float = typer.Option(1000.0, "--step-ms", min=0.0, help="Clock advance per tick"),
    start_ms: float = typer.Option(0.0, "--start-ms", help="Initial clock time"),
    delta_start: Optional[float] = typer.Option(None, "--delta-start", help="Start delta override"),
    delta_end: Optional[float] = typer.Option(None, "--delta-end", help="End delta override"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """
    Switch to a mode on a stepped clock and print the bounds after each tick.
    """
    log = get_logger(__name__)
    env = _Environment(start_ms=start_ms)

    try:
        env.view.set_mode(mode)
        if delta_start is not None or delta_end is not None:
            current = env.view.deltas or Deltas(0, 0)
            env.view.set_deltas(
                Deltas(
                    start=current.start if delta_start is None else delta_start,
                    end=current.end if delta_end is None else delta_end,
                )
            )
    except TimeConductorError as e:
        _fail(str(e), json_output)

    log.info("simulation_started", mode=env.view.mode, ticks=ticks, step_ms=step_ms)

    history: list[dict[str, float]] = []
    for index in range(1, ticks + 1):
        env.step(step_ms)
        bounds = env.conductor.bounds
        history.append({"tick": index, "start": bounds.start, "end": bounds.end})

    deltas = env.view.deltas
    result = {
        "status": "ok",
        "mode": env.view.mode,
        "time_system": env.conductor.time_system.metadata.key,
        "follow": env.conductor.follow,
        "deltas": asdict(deltas) if deltas is not None else None,
        "bounds": history,
    }

    if json_output:
        typer.echo(_format_json_output(result))
        return

    typer.echo(f"mode={result['mode']} time_system={result['time_system']} follow={result['follow']}")
    if deltas is not None:
        typer.echo(f"deltas start={deltas.start} end={deltas.end}")
    for entry in history:
        typer.echo(f"tick {entry['tick']}: start={entry['start']} end={entry['end']}")
