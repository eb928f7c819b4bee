"""Film commands: storyboard and character-consistent filmmaker"""

import click

from .runtime import load_image, run_studio


@click.command()
@click.argument("topic")
@click.option("--scenes", "-s", "scene_count", type=int, default=4, show_default=True)
@click.option("--aspect-ratio", "-a", type=click.Choice(["16:9", "9:16"]), default="16:9", show_default=True)
@click.option("--render", "render_scenes", is_flag=True, help="Render a video for every scene card")
@click.option("--output", "-o", "output_dir", type=click.Path(file_okay=False), help="Save assets here")
@click.pass_context
def film_cmd(ctx, topic, scene_count, aspect_ratio, render_scenes, output_dir):
    """Write a storyboard of 8-second scenes for TOPIC."""

    async def job(studio):
        cards = await studio.film(topic, scene_count, aspect_ratio=aspect_ratio)
        if render_scenes:
            for card in cards:
                await studio.generate_scene_video(card.card_id)
        return cards

    run_studio(ctx, job, output_dir)


@click.command()
@click.argument("story")
@click.option("--character", "-c", "character_path", type=click.Path(exists=True, dir_okay=False),
              required=True, help="Reference image of the main character")
@click.option("--scenes", "-s", "scene_count", type=int, default=6, show_default=True,
              help="Number of scenes (3-30)")
@click.option("--videos", is_flag=True, help="Turn every scene image into a video")
@click.option("--output", "-o", "output_dir", type=click.Path(file_okay=False), help="Save assets here")
@click.pass_context
def filmmaker_cmd(ctx, story, character_path, scene_count, videos, output_dir):
    """Render STORY as scene images that keep one character consistent."""
    reference = load_image(character_path)

    async def job(studio):
        result = await studio.filmmaker(reference, story, scene_count)
        if videos:
            for card in result.cards:
                if card.assets:
                    await studio.generate_scene_video(card.card_id)
        return result

    run_studio(ctx, job, output_dir)
