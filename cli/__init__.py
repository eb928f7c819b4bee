"""Freepik Studio CLI"""

import logging

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

from .ad import ad_cmd
from .config import config_cmd
from .film import film_cmd, filmmaker_cmd
from .generate import enhance_cmd, images_cmd, video_cmd, voice_cmd
from .secrets import secrets_cli
from .status import status_cmd

# Load .env file at CLI startup
load_dotenv()

console = Console(stderr=True)


def setup_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_time=False, show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(version="0.3.0")
@click.option("--verbose", is_flag=True, help="Debug logging")
@click.option("--mock", is_flag=True, help="Use the offline mock client (no API key needed)")
@click.option("--user", "-u", default="", help="Name attached to shared results")
@click.option("--no-share", is_flag=True, help="Do not share results to the notification channel")
@click.pass_context
def main(ctx, verbose, mock, user, no_share):
    """Freepik Studio - Stock-backed video, image and narration studio

    \b
    Quick Start:
      freepik-studio video "a lighthouse at dawn" --mock
      freepik-studio film "a courier racing the storm" --scenes 4

    \b
    Commands:
      video      Generate videos (single or batch)
      images     Generate images
      voice      Narrate a script
      film       Write a storyboard
      filmmaker  Character-consistent scene images
      ad         Product photo to video ad
      enhance    Enhance a prompt
      status     Show system status
      config     Manage configuration
      secrets    Manage API keys
    """
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj.update({"mock": mock, "user": user, "no_share": no_share})


# Generation commands
main.add_command(video_cmd, name="video")
main.add_command(images_cmd, name="images")
main.add_command(voice_cmd, name="voice")
main.add_command(film_cmd, name="film")
main.add_command(filmmaker_cmd, name="filmmaker")
main.add_command(ad_cmd, name="ad")
main.add_command(enhance_cmd, name="enhance")

# Status and info commands
main.add_command(status_cmd, name="status")
main.add_command(config_cmd, name="config")
main.add_command(secrets_cli, name="secrets")


if __name__ == "__main__":
    main()
