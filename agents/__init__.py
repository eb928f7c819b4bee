"""Agent implementations"""

# Note: Agents are imported lazily to avoid circular imports
# Example: from agents.video_generator import VideoGeneratorAgent

__all__ = [
    "StudioAgent",
    "PromptEnhancerAgent",
    "enhance_prompt",
    "VoiceoverAgent",
    "VoiceoverPlan",
    "VideoGeneratorAgent",
    "ImageGeneratorAgent",
    "StoryboardAgent",
    "FilmmakerAgent",
    "FilmResult",
    "AdProducerAgent",
    "AdAnalysis",
    "AGENT_REGISTRY",
    "get_all_agents",
]

_LAZY = {
    "StudioAgent": ".base",
    "PromptEnhancerAgent": ".prompt_enhancer",
    "enhance_prompt": ".prompt_enhancer",
    "VoiceoverAgent": ".voiceover",
    "VoiceoverPlan": ".voiceover",
    "VideoGeneratorAgent": ".video_generator",
    "ImageGeneratorAgent": ".image_generator",
    "StoryboardAgent": ".storyboard",
    "FilmmakerAgent": ".filmmaker",
    "FilmResult": ".filmmaker",
    "AdProducerAgent": ".ad_producer",
    "AdAnalysis": ".ad_producer",
}


def __getattr__(name):
    """Lazy imports to avoid circular dependencies"""
    if name in _LAZY:
        import importlib
        module = importlib.import_module(_LAZY[name], __name__)
        return getattr(module, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


# Agent Registry for CLI introspection and dynamic loading
AGENT_REGISTRY = {
    "prompt_enhancer": {
        "name": "prompt_enhancer",
        "class": "PromptEnhancerAgent",
        "module": "agents.prompt_enhancer",
        "status": "implemented",
        "description": "Expands a short prompt into a detailed cinematic description",
        "inputs": {
            "prompt": "str - User's original prompt",
        },
        "outputs": "str - Enhanced prompt, or the original on any failure",
    },
    "video_generator": {
        "name": "video_generator",
        "class": "VideoGeneratorAgent",
        "module": "agents.video_generator",
        "status": "implemented",
        "description": "Fills a result card with a matching stock video and smart voice-over",
        "inputs": {
            "card": "ResultCard - Card to report into",
            "prompt": "str - Video description",
            "aspect_ratio": "str - '16:9' or '9:16'",
            "image": "InlineData - Optional reference image",
            "skip_voice_over": "bool - Leave the video silent",
        },
        "outputs": "GeneratedAsset - Registered video asset, or None on failure",
    },
    "voiceover": {
        "name": "voiceover",
        "class": "VoiceoverAgent",
        "module": "agents.voiceover",
        "status": "implemented",
        "description": "Chooses voice and script for a video and renders synced narration",
        "inputs": {
            "card": "ResultCard - Video card to narrate",
            "video_prompt": "str - What the video shows",
        },
        "outputs": "GeneratedAsset - Narration audio bound to the card's video",
    },
    "image_generator": {
        "name": "image_generator",
        "class": "ImageGeneratorAgent",
        "module": "agents.image_generator",
        "status": "implemented",
        "description": "Generates a set of images, one card per image",
        "inputs": {
            "prompt": "str - Image description",
            "number_of_images": "int - How many images",
            "aspect_ratio": "str - e.g. '1:1', '16:9'",
        },
        "outputs": "List[ResultCard] - One finished card per image",
    },
    "storyboard": {
        "name": "storyboard",
        "class": "StoryboardAgent",
        "module": "agents.storyboard",
        "status": "implemented",
        "description": "Writes an 8-second-per-scene storyboard for a film topic",
        "inputs": {
            "topic": "str - Film topic",
            "scene_count": "int - Number of scenes",
        },
        "outputs": "List[ResultCard] - Scene cards ready for video generation",
    },
    "filmmaker": {
        "name": "filmmaker",
        "class": "FilmmakerAgent",
        "module": "agents.filmmaker",
        "status": "implemented",
        "description": "Renders character-consistent scene images from a reference photo",
        "inputs": {
            "reference": "InlineData - Character reference image",
            "story": "str - Story outline",
            "scene_count": "int - 3 to 30 scenes",
        },
        "outputs": "FilmResult - Character description, scenes, cards and batch report",
    },
    "ad_producer": {
        "name": "ad_producer",
        "class": "AdProducerAgent",
        "module": "agents.ad_producer",
        "status": "implemented",
        "description": "Turns a product photo into a video ad with narration",
        "inputs": {
            "image": "InlineData - Product image",
            "language": "str - Narration language code, e.g. 'id-ID'",
            "voice": "str - Narration voice",
        },
        "outputs": "ResultCard - Video card with synced narration",
    },
}


def get_all_agents():
    """
    Get all agents with their metadata.

    Returns:
        list: List of all agent metadata dicts
    """
    return list(AGENT_REGISTRY.values())

