"""
Editing instruction sent to the image model alongside the photo.

The rule order is fixed: the model sees a numbered list and positions 2-4
depend on the user's options.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List


class BackgroundStyle(str, Enum):
    OFFICE = "Office"
    MODERN = "Modern"
    TEXTURED = "Textured"
    AI_CHOICE = "AI Choice"


@dataclass(frozen=True)
class EnhancementOptions:
    """User toggles for a single enhancement request."""

    background_style: str = BackgroundStyle.AI_CHOICE.value
    adjust_brightness: bool = True
    smooth_skin: bool = True


PREAMBLE = (
    "You are a Professional LinkedIn Photo Editor AI.\n"
    "Your job is to enhance profile photos while keeping the person's natural identity, "
    "hairstyle, and facial features intact."
)

HAIRSTYLE_RULE = (
    "Keep the hairstyle as it is, do not cut, shorten, or erase hair. "
    "Ensure the person does not look bald."
)

BRIGHTNESS_RULE = "Adjust lighting, skin tone, and contrast for a natural but polished look."
PRESERVE_LIGHTING_RULE = (
    "Keep the original lighting, skin tone, and contrast. "
    "Do not apply any automatic brightness or color adjustment."
)

SMOOTH_SKIN_RULE = (
    "Subtly reduce blemishes and fine wrinkles while keeping natural skin texture."
)
NO_RETOUCH_RULE = "Do not retouch the face in any way. Leave skin texture and features untouched."

BACKGROUND_RULES = {
    BackgroundStyle.OFFICE.value: (
        "Replace the background with a softly blurred, modern office setting."
    ),
    BackgroundStyle.MODERN.value: (
        "Replace the background with a clean, minimalist modern interior in neutral tones."
    ),
    BackgroundStyle.TEXTURED.value: (
        "Replace the background with a subtle textured wall in a neutral professional color."
    ),
    BackgroundStyle.AI_CHOICE.value: (
        "Clean background to a neutral professional shade (light gray, soft blue, or white) "
        "or a softly blurred professional setting, whichever suits the photo best."
    ),
}

HARMONY_RULE = (
    "Match the lighting of the subject to the new background and blend the edges "
    "so the person does not look cut out."
)
CLOTHING_RULE = (
    "Smooth clothing edges and enhance sharpness, but do not replace or distort the outfit."
)
AUTHENTICITY_RULE = (
    "Avoid making the photo look \"AI-generated\" or plastic. "
    "It should look like a real, high-quality camera photo."
)
IDENTITY_RULE = "Always maintain the original face structure and identity."


def background_rule(style: str) -> str:
    """Unknown styles fall back to the "AI Choice" text."""
    return BACKGROUND_RULES.get(style, BACKGROUND_RULES[BackgroundStyle.AI_CHOICE.value])


def build_rules(options: EnhancementOptions) -> List[str]:
    rules = [HAIRSTYLE_RULE]
    rules.append(BRIGHTNESS_RULE if options.adjust_brightness else PRESERVE_LIGHTING_RULE)
    rules.append(SMOOTH_SKIN_RULE if options.smooth_skin else NO_RETOUCH_RULE)
    rules.append(background_rule(options.background_style))
    rules.extend([HARMONY_RULE, CLOTHING_RULE, AUTHENTICITY_RULE, IDENTITY_RULE])
    return rules


def build_instruction(options: EnhancementOptions) -> str:
    numbered = "\n".join(f"{i}. {rule}" for i, rule in enumerate(build_rules(options), start=1))
    return f"{PREAMBLE}\n\nEditing rules:\n{numbered}"
