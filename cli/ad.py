"""Ad command: product photo to narrated video ad"""

import click

from agents.prompts import LANGUAGE_NAMES

from .runtime import load_image, run_studio

LANGUAGES = list(LANGUAGE_NAMES) + ["ko-KR"]


@click.command()
@click.argument("image_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--language", "-l", type=click.Choice(LANGUAGES), default="id-ID", show_default=True)
@click.option("--voice", "-v", default="Kore", show_default=True)
@click.option("--aspect-ratio", "-a", type=click.Choice(["16:9", "9:16"]), default="16:9", show_default=True)
@click.option("--output", "-o", "output_dir", type=click.Path(file_okay=False), help="Save assets here")
@click.pass_context
def ad_cmd(ctx, image_path, language, voice, aspect_ratio, output_dir):
    """Create a short video ad for the product in IMAGE_PATH."""
    image = load_image(image_path)

    async def job(studio):
        return await studio.ad(image, language=language, voice=voice, aspect_ratio=aspect_ratio)

    run_studio(ctx, job, output_dir)
