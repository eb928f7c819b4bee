"""Generation commands: video, images, voice, enhance"""

import asyncio

import click
from rich.console import Console
from rich.panel import Panel

from .runtime import build_client, load_image, run_studio

console = Console()

ASPECT_RATIOS = ["16:9", "9:16"]
IMAGE_ASPECT_RATIOS = ["1:1", "16:9", "9:16", "4:3", "3:4"]


@click.command()
@click.argument("prompts", nargs=-1)
@click.option("--batch", "-b", "batch_file", type=click.Path(exists=True, dir_okay=False),
              help="File of prompts separated by blank lines; one video each")
@click.option("--aspect-ratio", "-a", type=click.Choice(ASPECT_RATIOS), default="16:9", show_default=True)
@click.option("--image", "-i", "image_path", type=click.Path(exists=True, dir_okay=False),
              help="Reference image")
@click.option("--enhance", is_flag=True, help="Enhance each prompt before generating")
@click.option("--output", "-o", "output_dir", type=click.Path(file_okay=False), help="Save assets here")
@click.pass_context
def video_cmd(ctx, prompts, batch_file, aspect_ratio, image_path, enhance, output_dir):
    """Generate videos from scene prompts.

    \b
    Single mode combines every PROMPT into one video:
      freepik-studio video "a lighthouse at dawn" "waves crash on rocks"
    Batch mode renders one video per blank-line separated prompt:
      freepik-studio video --batch prompts.txt
    """
    image = load_image(image_path)

    async def job(studio):
        if batch_file:
            with open(batch_file, "r") as f:
                text = f.read()
            return await studio.manual_batch(text, aspect_ratio=aspect_ratio, image=image)

        scenes = list(prompts)
        if enhance:
            scenes = [await studio.enhance(p) for p in scenes]
        return await studio.manual_single(scenes, aspect_ratio=aspect_ratio, image=image)

    run_studio(ctx, job, output_dir)


@click.command()
@click.argument("prompt")
@click.option("--count", "-n", type=click.IntRange(1, 4), default=1, show_default=True)
@click.option("--aspect-ratio", "-a", type=click.Choice(IMAGE_ASPECT_RATIOS), default="1:1", show_default=True)
@click.option("--person-generation", type=click.Choice(["dont_allow", "allow_adult", "allow_all"]),
              default="allow_adult", show_default=True)
@click.option("--image-size", type=click.Choice(["1K", "2K"]), default=None)
@click.option("--output", "-o", "output_dir", type=click.Path(file_okay=False), help="Save assets here")
@click.pass_context
def images_cmd(ctx, prompt, count, aspect_ratio, person_generation, image_size, output_dir):
    """Generate images for PROMPT."""

    async def job(studio):
        return await studio.images(
            prompt,
            number_of_images=count,
            aspect_ratio=aspect_ratio,
            person_generation=person_generation,
            image_size=image_size,
        )

    run_studio(ctx, job, output_dir)


@click.command()
@click.argument("script")
@click.option("--voice", "-v", default="Kore", show_default=True)
@click.option("--temperature", "-t", type=click.FloatRange(0.0, 2.0), default=1.0, show_default=True)
@click.option("--output", "-o", "output_dir", type=click.Path(file_okay=False), help="Save assets here")
@click.pass_context
def voice_cmd(ctx, script, voice, temperature, output_dir):
    """Narrate SCRIPT with the chosen voice."""

    async def job(studio):
        return await studio.voice(script, voice=voice, temperature=temperature)

    run_studio(ctx, job, output_dir)


@click.command()
@click.argument("prompt")
@click.pass_context
def enhance_cmd(ctx, prompt):
    """Expand PROMPT into a detailed cinematic description."""
    from agents.prompt_enhancer import enhance_prompt
    from core.config import StudioConfig

    opts = ctx.obj or {}
    config = opts.get("config") or StudioConfig.from_env()

    async def _run():
        async with build_client(config, opts.get("mock", False)) as client:
            return await enhance_prompt(client, prompt)

    enhanced = asyncio.run(_run())
    if enhanced == prompt:
        console.print("[yellow]Prompt left unchanged.[/yellow]")
    console.print(Panel(enhanced, title="Enhanced Prompt", border_style="green"))
