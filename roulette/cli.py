"""Command-line interface for the channel roulette."""

import asyncio
import logging
import sys
import webbrowser
from typing import Optional

import click
from tqdm import tqdm

from roulette import __version__
from roulette.config import LOG_LEVELS, RouletteConfig, load_config, save_config_template
from roulette.session import SearchSession, SearchState
from roulette.utils import setup_logging, watch_url

QUIT_COMMANDS = {":q", ":quit", "quit", "exit"}
REROLL_COMMANDS = {":r", ":reroll"}


def _prepare(
    config: Optional[str], locale: Optional[str], verbose: bool, log_level: Optional[str] = None
) -> RouletteConfig:
    """Load configuration, apply CLI overrides and configure logging."""
    roulette_config = load_config(config)
    if locale:
        roulette_config.ui.locale = locale
    if log_level:
        roulette_config.logging.level = log_level.upper()

    log_config = roulette_config.logging
    level = logging.DEBUG if verbose else getattr(logging, log_config.level.upper())
    setup_logging(
        level=level,
        log_file=log_config.file_path,
        max_bytes=log_config.max_file_size_mb * 1024 * 1024,
        backup_count=log_config.backup_count,
        console_output=log_config.console_output or verbose,
    )
    return roulette_config


async def _run_search(session: SearchSession, query: str) -> Optional[SearchState]:
    """Submit one query, showing page progress when enabled."""
    config = session.config
    if not config.ui.show_progress_bar:
        return await session.submit(query)

    with tqdm(
        total=config.sampling.max_pages, desc="Fetching pages", unit="page", leave=False
    ) as progress:

        def on_page(page_number: int, collected: int) -> None:
            progress.update(1)
            progress.set_postfix(videos=collected)

        return await session.submit(query, on_page=on_page)


def _print_state(state: SearchState) -> None:
    print("\n" + "=" * 50)
    print(f"Query: {state.query}")
    print(f"Channel: {state.channel_name}")

    video_outcome = state.video_outcome
    if video_outcome is None:
        return
    print(f"Videos collected: {len(state.video_ids)}")
    if video_outcome.is_success and state.selected_video_id:
        print(f"Random video: {watch_url(state.selected_video_id)}")
        print(f"Embed: {state.embed_url}")
    else:
        print(video_outcome.message)


async def _search_async(
    roulette_config: RouletteConfig, query: str, rerolls: int
) -> Optional[SearchState]:
    async with SearchSession(roulette_config) as session:
        state = await _run_search(session, query)
        if state is None:
            return None
        _print_state(state)
        for _ in range(rerolls):
            video_id = session.reroll()
            if video_id:
                print(f"Reroll: {watch_url(video_id)}")
        return state


async def _interactive_async(roulette_config: RouletteConfig, open_browser: bool) -> None:
    async with SearchSession(roulette_config) as session:
        while True:
            try:
                line = await asyncio.to_thread(
                    click.prompt, "Channel", default="", show_default=False
                )
            except click.Abort:
                break

            command = line.strip()
            if command.lower() in QUIT_COMMANDS:
                break
            if command.lower() in REROLL_COMMANDS:
                video_id = session.reroll()
                if video_id:
                    print(f"Random video: {watch_url(video_id)}")
                    if open_browser:
                        webbrowser.open(watch_url(video_id))
                else:
                    print("Nothing to reroll yet.")
                continue

            state = await _run_search(session, command)
            if state is None:
                continue
            _print_state(state)
            if open_browser and state.selected_video_id:
                webbrowser.open(watch_url(state.selected_video_id))


@click.group()
@click.version_option(__version__)
def cli():
    """Channel Roulette - play a random video from a YouTube channel."""
    pass


@cli.command()
@click.argument("query")
@click.option("--config", "-c", type=click.Path(exists=True), help="Path to configuration file")
@click.option("--open", "open_browser", is_flag=True, help="Open the chosen video in a browser")
@click.option("--reroll", "-r", default=0, type=int, help="Extra random picks from the same channel")
@click.option("--locale", type=click.Choice(["en", "ko"]), help="Message language")
@click.option(
    "--log-level", type=click.Choice(LOG_LEVELS, case_sensitive=False), help="Override logging.level"
)
@click.option("--verbose", "-v", is_flag=True, help="Verbose logging")
def search(query, config, open_browser, reroll, locale, log_level, verbose):
    """Find a channel by name and pick one of its videos at random."""
    roulette_config = _prepare(config, locale, verbose, log_level)

    try:
        state = asyncio.run(_search_async(roulette_config, query, reroll))
    except KeyboardInterrupt:
        logging.info("Search interrupted by user")
        sys.exit(130)

    if state is None:
        print("Please enter a channel name.")
        sys.exit(2)
    if not state.selected_video_id:
        sys.exit(1)
    if open_browser:
        webbrowser.open(watch_url(state.selected_video_id))


@cli.command()
@click.option("--config", "-c", type=click.Path(exists=True), help="Path to configuration file")
@click.option("--open", "open_browser", is_flag=True, help="Open each chosen video in a browser")
@click.option("--locale", type=click.Choice(["en", "ko"]), help="Message language")
@click.option(
    "--log-level", type=click.Choice(LOG_LEVELS, case_sensitive=False), help="Override logging.level"
)
@click.option("--verbose", "-v", is_flag=True, help="Verbose logging")
def interactive(config, open_browser, locale, log_level, verbose):
    """Prompt for channel names until 'quit' (':r' picks another video)."""
    roulette_config = _prepare(config, locale, verbose, log_level)

    try:
        asyncio.run(_interactive_async(roulette_config, open_browser))
    except KeyboardInterrupt:
        logging.info("Interactive session interrupted by user")


@cli.command()
@click.option("--output", "-o", default="config_template.yaml", help="Output path for template")
def create_config(output):
    """Create a configuration file template."""
    save_config_template(output)


if __name__ == "__main__":
    cli()
