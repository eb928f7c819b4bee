"""Prompt templates used by the studio agents"""

ENHANCEMENT_TEMPLATE = """You are an expert video prompt engineer for Veo 3. Your task is to enhance and expand the user's prompt while maintaining their original intent and vision. Make it more detailed, cinematic, and descriptive.

IMPORTANT RULES:
1. PRESERVE the user's original concept - don't change what they want
2. ADD rich details about visuals, lighting, camera work, and atmosphere
3. ENHANCE with cinematic language and professional video terminology
4. MAINTAIN the same subjects, actions, and style the user requested
5. EXPAND descriptions to help AI generate better quality video
6. Keep it natural and flowing - not a rigid template

User's original prompt: "{prompt}"

Enhance this prompt by adding:
- Visual details (textures, colors, materials, scale)
- Lighting and atmosphere (time of day, weather, mood)
- Camera specifications (angle, movement, framing)
- Motion and dynamics (speed, direction, transitions)
- Environmental context (setting details, background elements)
- Artistic style if applicable (cinematic, realistic, stylized)

Return an enhanced, natural-flowing prompt that feels like a detailed description of the exact video the user wants. Make it rich and cinematic while staying true to their vision. Keep it under 200 words but pack it with vivid details.

DO NOT use rigid templates or forced structure. Write it as a flowing, natural description that a cinematographer would understand."""


VOICE_ANALYSIS_TEMPLATE = """Analyze this video content and recommend the perfect voice & script:

VIDEO CONTENT: "{video_prompt}"

Available Voices:
- BRIGHT & UPBEAT: Zephyr, Puck, Autonoe, Laomedeia
- FIRM & STRONG: Kore, Orus, Alnilam
- SMOOTH & CLEAR: Aoede, Algieba, Erinome, Iapetus, Despina
- EASY-GOING & CASUAL: Umbriel, Callirrhoe, Zubenelgenubi
- INFORMATIVE & KNOWLEDGEABLE: Charon, Rasalgethi, Sadaltager
- SOFT & GENTLE: Enceladus, Vindemiatrix, Sulafat
- SPECIAL: Fenrir (Excitable), Leda (Youthful), Schedar (Even), Achird (Friendly), Gacrux (Mature), Sadachbia (Lively), Algenib (Gravelly), Pulcherrima (Forward)

REQUIREMENTS:
1. Analyze video content: mood, theme, energy, target audience
2. Select 1 PERFECT voice from the list above
3. Create POV storytelling script (maximum 8 words) as if someone is narrating what they're witnessing
4. Use conversational, storytelling tone like "Look at this..." "Watch as..." "Here we see..." etc.

FORMAT:
VOICE: [exact voice name from list]
SCRIPT: [POV storytelling script, max 8 words]
TONE: [delivery tone/style instruction]

Example responses:
VOICE: Puck
SCRIPT: Watch this incredible moment unfold before us
TONE: Excited observer sharing something amazing

VOICE: Aoede
SCRIPT: Here's a peaceful scene that touches hearts
TONE: Gentle storyteller describing beauty

Now analyze: "{video_prompt}\""""


POV_NARRATION_TEMPLATE = """As a {tone}, say this with the perfect POV storytelling delivery: "{script}"

Context: {video_prompt}
Style: {tone}

Deliver it naturally as if you're personally witnessing and narrating this moment to a friend."""


STORYBOARD_DIRECTOR_PROMPT = """
You are an expert Visual Story Director for Veo 3 video generation. Your mission is to create a COMPELLING NARRATIVE with perfect character consistency and continuous story flow.

# STORY STRUCTURE REQUIREMENTS

## NARRATIVE ARC (MANDATORY):
Your story MUST follow this structure:
1. **SETUP** (Scenes 1-2): Introduce character, establish world, hint at conflict
2. **RISING ACTION** (Middle scenes): Build tension, develop conflict, show character journey
3. **CLIMAX** (Near-end scenes): Peak moment of conflict/emotion/discovery
4. **RESOLUTION** (Final scene): Conclude story, show transformation or outcome

## STORY CONTINUITY CHECKLIST:
- Each scene DIRECTLY continues from the previous one
- Actions have consequences that carry forward
- Character emotions evolve based on what happened before
- Objects/props introduced must reappear when relevant
- Time progression is logical (morning -> afternoon -> evening)
- Location changes make geographical sense
- Character goals drive the plot forward

# CHARACTER CONSISTENCY TEMPLATE

## MANDATORY CHARACTER FORMAT (Copy EXACTLY in EVERY scene):
[CHARACTER NAME]: [GENDER] character, [EXACT AGE] years old, [EXACT HEIGHT] tall, [BODY TYPE] build
- FACE: [FACE SHAPE] face, [SKIN TONE] skin, [EYE COLOR] eyes, [NOSE TYPE] nose, [MOUTH/LIPS] lips
- HAIR: [EXACT STYLE] [COLOR] hair ([LENGTH] length, [TEXTURE] texture)
- OUTFIT: Wearing [EXACT TOP DESCRIPTION], [EXACT BOTTOM DESCRIPTION], [EXACT FOOTWEAR]
- ACCESSORIES: [LIST ALL ACCESSORIES OR "none"]
- DISTINGUISHING MARKS: [SCARS/TATTOOS/BIRTHMARKS OR "none"]

# SCENE FORMAT (Use EXACTLY this structure):

Scene [NUMBER]: [8-second HD 1080p video] - [STORY BEAT NAME]

**STORY CONTEXT**: [How this scene connects to previous events and advances the plot]

**SETTING**: [Exact location with lighting, weather, time of day, atmosphere]

**CHARACTER STATE**:
- Emotional state: [Based on what just happened]
- Physical state: [Tired/energetic/injured based on story]
- Motivation: [What the character wants in this moment]

**CHARACTER APPEARANCE**:
[Copy EXACT character template from above - NEVER abbreviate or skip]

**ACTION SEQUENCE (0:00-0:08)**:
- Starting moment (0:00-0:02): [Continues from previous scene's ending]
- Core action (0:02-0:06): [Main story development]
- Transition moment (0:06-0:08): [Sets up next scene]

**OBJECTS/PROPS**: [List any important items that appear - must be consistent]

**CAMERA WORK**:
- Shot type: [Chosen to enhance story emotion]
- Movement: [Supports narrative tension]
- Focus: [Draws attention to story elements]

**VISUAL CONSISTENCY**:
- Visual style: "Cinematic realism, high contrast, film grain"
- Color grading: "Consistent color palette throughout all scenes"
- Quality: "1080p HD video, 24fps, professional cinematography"

# ABSOLUTE STORYTELLING RULES:

1. **STORY FIRST**: Every scene must advance the plot or reveal character
2. **CAUSE & EFFECT**: What happens in Scene N directly influences Scene N+1
3. **EMOTIONAL JOURNEY**: Character's feelings must evolve based on events
4. **VISUAL CONTINUITY**: If character gets wet/dirty/injured, show it in next scenes
5. **TIME LOGIC**: Story timeline must make sense (can't go from night to morning instantly)
6. **PROP TRACKING**: Important objects must appear consistently when needed
7. **NO RANDOM SCENES**: Every moment must serve the overall narrative
8. **CHARACTER GROWTH**: Show how events change the character

REMEMBER: Create a COMPLETE STORY, not just random scenes. Each 8-second video is a chapter in your visual novel.
"""


STORYBOARD_REQUEST_TEMPLATE = """{director}

User Request: "{topic}"
Number of Scenes Required: {scene_count}

IMPORTANT INSTRUCTIONS:
1. Create exactly {scene_count} scenes, each 8 seconds long
2. Develop engaging characters with FULL physical descriptions that remain IDENTICAL across all scenes
3. Establish a clear visual style in Scene 1 and maintain it throughout
4. Each scene must flow naturally from the previous one
5. Focus on visual storytelling - NO dialogue or speech
6. Include specific camera angles and movements for cinematic effect

Generate {scene_count} detailed scene prompts following the format specified above. Make sure to tell a complete story arc with beginning, middle, and end."""


CHARACTER_ANALYSIS_PROMPT = """Analyze this image and provide a detailed character description.

IMPORTANT: Give me ONLY the character analysis, no other text.

Provide:
1. Physical appearance (face, body, clothing details)
2. Color palette (skin tone, hair color, outfit colors)
3. Style and aesthetic (modern, vintage, casual, formal, etc.)
4. Notable features or distinguishing marks
5. Overall vibe and personality suggested by appearance

Be very detailed and specific - this will be used to maintain consistency across multiple scenes."""


FILMMAKER_SCENES_TEMPLATE = """You are a professional film director creating a cinematic visual story with SMOOTH story progression and DIVERSE camera angles.

CHARACTER DESCRIPTION:
{character}

STORY: {story}
NUMBER OF SCENES: {scene_count}

Create {scene_count} detailed scene descriptions with CONTINUOUS NARRATIVE FLOW. Each scene must:
1. Feature the SAME character with consistent appearance
2. Progress SMOOTHLY from previous scene - NO BIG JUMPS in story
3. Show CONTINUOUS ACTION - each scene flows naturally to the next
4. Use DIFFERENT camera angles for visual variety (MANDATORY)
5. Maintain consistent visual style, color palette, and lighting
6. Be cinematic and film-like

STORY CONTINUITY RULES (CRITICAL):
- Scene 2 should continue DIRECTLY from Scene 1's ending
- Scene 3 should continue from Scene 2, and so on
- NO time jumps or location jumps without transition
- Show the COMPLETE journey, not just highlights
- Each scene should answer: "What happens next?"
- Think of it as a continuous 8-second video sequence

CAMERA ANGLE VARIETY (Use these across different scenes):
- Wide shot / Establishing shot (show full environment)
- Medium shot (waist up, showing interaction)
- Close-up (face, showing emotions)
- Extreme close-up (eyes, hands, specific details)
- Over-the-shoulder shot (showing perspective)
- Low angle (looking up at subject, powerful)
- High angle / Bird's eye view (looking down)
- Dutch angle / Tilted (dynamic, tension)
- Tracking shot (following movement)
- Point of view shot (seeing what character sees)

Format each scene as:
SCENE [number]: [Camera angle] - [detailed prompt for image generation including character, setting, action, lighting, and mood. Include how this continues from previous scene]

IMPORTANT:
- Each scene should have DIFFERENT camera angle
- Create SMOOTH story progression - no skipping steps
- Make it feel like watching a continuous film
- Include specific details about character position, lighting, and atmosphere
- Show the journey step by step, not just key moments"""


CHARACTER_LOCK_SUFFIX = (
    "\n\nIMPORTANT: The main character MUST look exactly like the person in the reference image. "
    "Maintain the same face, hairstyle, clothing style, and overall appearance. Keep the visual style, "
    "color grading, and cinematic quality consistent with a professional film production."
)


AD_ANALYSIS_TEMPLATE = """Analyze this product image and create an engaging advertisement script.

Instructions:
- Identify the product/service in the image
- Create a compelling advertisement script in {language_name}
- CRITICAL: Voiceover script must be MAXIMUM 8 words for perfect 8-second video timing
- Focus on ONE key benefit or emotional appeal only
- Make it punchy, memorable, and impactful
- Keep the tone engaging and persuasive

Return response in this format:
PRODUCT: [product name]
VIDEO_PROMPT: [detailed video generation prompt describing scenes, actions, and visual elements for 8-second video]
VOICEOVER_SCRIPT: [maximum 8 words punchy advertisement script for voiceover]"""


LANGUAGE_NAMES = {
    "id-ID": "Indonesian",
    "en-US": "English",
    "ms-MY": "Malay",
    "zh-CN": "Chinese",
    "ja-JP": "Japanese",
}
DEFAULT_LANGUAGE_NAME = "Korean"


def language_name(code: str) -> str:
    return LANGUAGE_NAMES.get(code, DEFAULT_LANGUAGE_NAME)


# Keywords (English and Indonesian) used to pick a delivery style for ad narration
PRODUCT_CATEGORIES = (
    ("food", ("food", "drink", "restaurant", "coffee", "eat", "makanan", "minuman", "roti", "nasi", "snack")),
    ("tech", ("phone", "computer", "app", "digital", "tech", "smartphone", "laptop", "gadget", "elektronik")),
    ("fashion", ("fashion", "clothes", "style", "beauty", "baju", "sepatu", "tas", "pakaian", "kosmetik")),
    ("health", ("health", "medical", "fitness", "care", "kesehatan", "obat", "vitamin", "olahraga")),
    ("service", ("service", "layanan", "jasa", "konsultasi", "delivery", "transport")),
    ("education", ("education", "course", "book", "belajar", "kursus", "sekolah")),
)

TONE_INSTRUCTIONS = {
    "id-ID": {
        "food": 'Ucapkan dengan nada hangat dan menggugah selera, seperti food vlogger yang sedang review makanan enak: "{text}"',
        "tech": 'Sampaikan dengan nada excited dan tech-savvy, seperti unboxing gadget baru yang ditunggu-tunggu: "{text}"',
        "fashion": 'Ucapkan dengan nada trendy dan confident, seperti fashion influencer yang lagi showcase outfit OOTD: "{text}"',
        "health": 'Sampaikan dengan nada caring dan motivational, seperti fitness trainer yang support client: "{text}"',
        "service": 'Ucapkan dengan nada helpful dan reliable, seperti customer service yang baik banget: "{text}"',
        "education": 'Sampaikan dengan nada inspiring dan encouraging, seperti mentor yang motivasi murid: "{text}"',
        "default": 'Ucapkan dengan nada natural dan conversational, seperti lagi ngobrol santai sama bestie: "{text}"',
    },
    "default": {
        "food": 'Say this with a mouth-watering, enthusiastic tone like a food reviewer discovering something amazing: "{text}"',
        "tech": 'Deliver with an excited, tech-enthusiast tone like unboxing the latest must-have gadget: "{text}"',
        "fashion": 'Speak with a trendy, confident tone like a fashion influencer showcasing the perfect look: "{text}"',
        "health": 'Say with a motivational, caring tone like a personal trainer cheering on their client: "{text}"',
        "service": 'Speak with a helpful, reliable tone like excellent customer service: "{text}"',
        "education": 'Deliver with an inspiring, encouraging tone like a mentor motivating students: "{text}"',
        "default": 'Speak with a natural, conversational tone like chatting with your best friend: "{text}"',
    },
}


def build_enhancement_prompt(prompt: str) -> str:
    return ENHANCEMENT_TEMPLATE.format(prompt=prompt)


def build_storyboard_prompt(topic: str, scene_count: int) -> str:
    return STORYBOARD_REQUEST_TEMPLATE.format(
        director=STORYBOARD_DIRECTOR_PROMPT,
        topic=topic,
        scene_count=scene_count,
    )
