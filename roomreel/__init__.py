import asyncio
import json
from logging import getLogger

import click

from roomreel.cli import console
from roomreel.cli.analyze import analyze_video, summarize, watch_source
from roomreel.cli.draw import simulate_draws
from roomreel.cli.errors import CLIError
from roomreel.rewards.catalog import REWARD_CATALOG
from roomreel.utils.logging import setup_logging
from roomreel.utils.rng import get_rng
from roomreel.utils.settings import get_settings

logger = getLogger(__name__)


@click.group(name="roomreel")
@click.option(
    "-v",
    "--verbosity",
    count=True,
    help="Increase verbosity (-v INFO, -vv DEBUG)",
)
def cli(verbosity: int):
    """RoomReel Challenge CLI"""
    settings = get_settings()
    setup_logging(verbosity)
    logger.debug(f"RoomReel started (version={settings.ROOMREEL_VERSION})")


@cli.command("serve")
@click.option("--host", default=None, help="Bind address (default ROOMREEL_HOST).")
@click.option("--port", type=int, default=None, help="Bind port (default ROOMREEL_PORT).")
def serve_cmd(host: str | None, port: int | None):
    """Run the challenge and submission API."""
    import uvicorn

    from roomreel.server.app import create_app

    settings = get_settings()
    uvicorn.run(
        create_app(),
        host=host or settings.ROOMREEL_HOST,
        port=port or settings.ROOMREEL_PORT,
    )


@cli.command("analyze")
@click.argument("source")
@click.option("--frames", "max_frames", type=int, default=None, help="Stop after reading this many frames.")
@click.option("--every", type=int, default=1, show_default=True, help="Score every N-th frame.")
@click.option("--seed", type=int, default=None, help="Seed the scoring jitter.")
@click.option("--live", is_flag=True, help="Run the periodic analyzer instead of walking frames.")
@click.option("--duration", type=float, default=5.0, show_default=True, help="Seconds to watch with --live.")
@click.option("--json", "as_json", is_flag=True, help="Output raw JSON instead of a table.")
def analyze_cmd(
    source: str,
    max_frames: int | None,
    every: int,
    seed: int | None,
    live: bool,
    duration: float,
    as_json: bool,
):
    """Score frames of a video file or camera index (e.g. 0) as good shots."""
    try:
        if live:
            interval = get_settings().ROOMREEL_ANALYSIS_INTERVAL_S

            def show(result):
                if as_json:
                    click.echo(json.dumps(result.model_dump(by_alias=True)))
                else:
                    mark = "✓" if result.is_good_shot else "·"
                    console.console.print(f"{mark} {result.confidence:5.1f} {', '.join(result.reasons)}")

            ticks = asyncio.run(watch_source(source, duration, interval, seed, show))
            if not as_json:
                console.success(f"{ticks} analysis ticks in {duration:.1f}s")
            return

        reports = analyze_video(source, max_frames=max_frames, every=every, seed=seed)
    except CLIError as e:
        console.error(str(e))
        raise SystemExit(1)

    if as_json:
        click.echo(
            json.dumps(
                {"frames": [r.to_dict() for r in reports], "summary": summarize(reports)},
                indent=2,
            )
        )
        return

    if not reports:
        console.warn(f"No frames read from {source}")
        return

    console.table(
        f"Frame analysis: {source}",
        ["frame", "good shot", "confidence", "reasons"],
        [
            [
                str(r.frame_number),
                "yes" if r.result.is_good_shot else "no",
                f"{r.result.confidence:.1f}",
                ", ".join(r.result.reasons),
            ]
            for r in reports
        ],
    )
    stats = summarize(reports)
    console.info(
        f"{stats['good_shots']}/{stats['frames']} good shots, "
        f"mean confidence {stats['mean_confidence']:.1f}"
    )


@cli.command("draw")
@click.option("-n", "n", type=int, default=10000, show_default=True, help="Number of draws.")
@click.option("--seed", type=int, default=None, help="Seed the random source.")
@click.option("--json", "as_json", is_flag=True, help="Output raw JSON instead of a table.")
def draw_cmd(n: int, seed: int | None, as_json: bool):
    """Simulate reward draws and compare with the catalog weights."""
    try:
        stats = simulate_draws(REWARD_CATALOG, rng=get_rng(seed), n=n)
    except ValueError as e:
        console.error(str(e))
        raise SystemExit(1)

    if as_json:
        click.echo(json.dumps([s.to_dict() for s in stats], indent=2))
        return

    console.table(
        f"Reward draws (n={n})",
        ["reward", "rarity", "weight", "expected", "observed"],
        [
            [
                s.entry.value,
                s.entry.rarity.value,
                str(s.entry.weight),
                f"{s.expected:.2%}",
                f"{s.observed:.2%}",
            ]
            for s in stats
        ],
    )
