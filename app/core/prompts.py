"""System prompt assembly for content transformations."""

from typing import Dict, List

from app.schemas.job import ProcessingOptions, TargetFormat


PLATFORM_GUIDELINES: Dict[str, str] = {
    "twitter": (
        "For Twitter: Keep posts under 280 characters, use hashtags "
        "strategically, and create engaging hooks."
    ),
    "linkedin": (
        "For LinkedIn: Use a professional tone, include a call to action, "
        "and format for readability with paragraph breaks."
    ),
    "instagram": (
        "For Instagram: Create visually descriptive content, use emojis "
        "appropriately, and suggest image descriptions."
    ),
    "facebook": (
        "For Facebook: Create conversational content that encourages "
        "engagement and discussion."
    ),
}

FORMAT_INSTRUCTIONS: Dict[str, str] = {
    TargetFormat.SOCIAL_POSTS.value: (
        "Return a JSON array of social media posts, each with 'platform', "
        "'content', and 'hashtags' fields."
    ),
    TargetFormat.BLOG_ARTICLE.value: (
        "Structure the output as a blog article with a title, introduction, "
        "sections with subheadings, and a conclusion."
    ),
    TargetFormat.NEWSLETTER.value: (
        "Format as an email newsletter with a subject line, greeting, main "
        "content with sections, and a call to action."
    ),
    TargetFormat.VIDEO_SCRIPT.value: (
        "Create a video script with clear scene directions, narration text, "
        "and visual cues in a two-column format."
    ),
    TargetFormat.PODCAST_SCRIPT.value: (
        "Develop a conversational podcast script with an intro, segments, and "
        "outro. Include speaker indicators."
    ),
    TargetFormat.INFOGRAPHIC.value: (
        "Provide content organized into key statistics, facts, and brief "
        "explanations suitable for an infographic."
    ),
}

DEFAULT_FORMAT_INSTRUCTION = (
    "Transform the content while maintaining its core message and value."
)


def _length_instruction(length: int) -> str:
    if length < 100:
        return (
            "Make the output significantly shorter than the input "
            f"(about {length}% of original length)."
        )
    if length > 100:
        return (
            "Expand on the input to make the output longer "
            f"(about {length}% of original length)."
        )
    return "Keep the output approximately the same length as the input."


def _platform_instructions(platforms: List[str]) -> List[str]:
    lines = [f"Optimize for the following platforms: {', '.join(platforms)}."]
    for platform, guideline in PLATFORM_GUIDELINES.items():
        if platform in platforms:
            lines.append(guideline)
    return lines


def build_system_prompt(options: ProcessingOptions) -> str:
    """
    Assemble the system message for a transformation request.

    Lines are emitted in a fixed order: role and task, tone, length,
    key-point preservation, platform guidance (social posts only), custom
    instructions, style sample, and finally the output-format instruction.
    """
    lines = [
        "You are an expert content repurposer. Transform the following "
        f"{options.content_type} into {options.target_format} format.",
        f"Use a {options.tone} tone in the output.",
        _length_instruction(options.length),
    ]

    if options.preserve_key_points:
        lines.append(
            "Ensure all key points and important information from the "
            "original content are preserved."
        )

    if options.platforms and options.target_format == TargetFormat.SOCIAL_POSTS.value:
        lines.extend(_platform_instructions(options.platforms))

    if options.custom_instructions:
        lines.append(options.custom_instructions)

    if options.sample_output:
        lines.append(
            "Match the style and structure of this sample output:\n"
            f"{options.sample_output}"
        )

    lines.append(
        FORMAT_INSTRUCTIONS.get(options.target_format, DEFAULT_FORMAT_INSTRUCTION)
    )

    return "\n".join(lines)
