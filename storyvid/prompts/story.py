"""Prompts for the storyboard assistant.

Every prompt asks for a single JSON object so that the chat API's JSON
mode can be used; list payloads are wrapped in a named key.
"""

from typing import Any

AVAILABLE_ICONS = [
    # Communication & social
    "MessageCircle", "Heart", "ThumbsUp", "Share2", "Users", "Mail", "Phone", "Video",
    # Business
    "Briefcase", "TrendingUp", "Target", "Award", "DollarSign", "PieChart", "BarChart",
    # Technology
    "Smartphone", "Monitor", "Laptop", "Globe", "Wifi", "Database", "Cloud", "Cpu",
    # Actions
    "Play", "Pause", "Check", "X", "Plus", "Minus", "ArrowRight", "ArrowUp", "ArrowDown",
    # Objects
    "Book", "Camera", "Music", "Image", "File", "Folder", "Package", "ShoppingCart",
    # Nature & science
    "Sun", "Moon", "Star", "Zap", "Lightbulb", "Rocket", "Atom", "Leaf",
    # States
    "Smile", "Frown", "AlertCircle", "Info", "HelpCircle", "Eye", "Lock", "Unlock",
]

SCENES_SYSTEM_PROMPT = (
    "You turn scripts into visual storyboards for explainer videos. "
    "Always respond with valid JSON only."
)

SCRIPT_EDITOR_SYSTEM_PROMPT = (
    "You are a video script editor. You make scripts clearer, more engaging and better paced."
)

SCENE_CONSULTANT_SYSTEM_PROMPT = (
    "You review storyboard scenes for an explainer video studio and give actionable feedback."
)

TIMING_SYSTEM_PROMPT = (
    "You are a video editor who sets scene durations from voiceover length, "
    "visual complexity and viewer comprehension."
)

EDITOR_SYSTEM_PROMPT = "You are a video editor. Respond only with valid JSON."

MOTION_SYSTEM_PROMPT = "You design motion graphics. Respond only with valid JSON."

CREATIVE_SYSTEM_PROMPT = "You are a creative director. Respond only with valid JSON."

STORY_ANALYST_SYSTEM_PROMPT = "You analyse stories for film and video. Respond only with valid JSON."

TRANSLATOR_SYSTEM_PROMPT = "You are a professional translator. Respond only with valid JSON."


def _scene_lines(scenes: list[dict[str, Any]], fields: str = "description") -> str:
    lines = []
    for i, scene in enumerate(scenes, start=1):
        detail = str(scene.get(fields) or "")[:200]
        lines.append(
            f'Scene {i} (id: {scene.get("id")}): "{scene.get("title", "")}" - '
            f'{scene.get("duration", 5)}s - {detail}'
        )
    return "\n".join(lines)


def build_scenes_prompt(script: str) -> str:
    return f"""Read the script below and break it down into storyboard scenes for an explainer video.
Use between 3 and 20 scenes depending on the length and complexity of the script.

For every scene give:
- "title": at most six words
- "description": one or two sentences about what is on screen
- "voiceover": the words spoken during the scene
- "keywords": two or three words for the main ideas
- "duration": seconds, between 3 and 10
- "suggestedIcons": two to four names taken only from this list: {", ".join(AVAILABLE_ICONS)}

Aim for 30 to 120 seconds in total and keep the voiceover conversational.

Script:
{script}

Return {{"scenes": [ ... ]}}."""


def build_improve_script_prompt(script: str) -> str:
    return f"""Improve this video script and score it.

Script:
{script}

Return a JSON object with:
- "clarityScore", "engagementScore", "pacingScore", "overallScore": integers 0-100
- "improvements": list of {{"type", "original", "improved", "reason"}} where type is
  clarity, engagement, pacing, tone or structure
- "strengthAreas" and "weakAreas": lists of short strings
- "toneAnalysis": {{"currentTone", "consistency", "recommendedTone"}}
- "structureAnalysis": {{"hasHook", "hasClearMessage", "hasCallToAction", "flow"}}
- "improvedScript": the full rewritten script
- "keyChanges": list of the main edits"""


def build_optimize_scene_prompt(scene: dict[str, Any]) -> str:
    illustrations = scene.get("illustrations") or []
    return f"""Review this storyboard scene.

Title: {scene.get("title", "")}
Description: {scene.get("description", "")}
Voiceover: {scene.get("voiceover", "")}
Duration: {scene.get("duration", 5)}s
Layout: {scene.get("layoutType")}
Animation: {scene.get("animationType")}
Illustrations: {len(illustrations)}

Return a JSON object with "overallScore", "visualScore", "contentScore", "timingScore"
(0-100), "suggestions" (list of {{"category", "priority", "issue", "suggestion", "impact"}}),
"strengths", "improvementAreas", "recommendedDuration", "recommendedLayout" and
"recommendedAnimation"."""


def build_timing_prompt(analysis: list[dict[str, Any]]) -> str:
    lines = "\n".join(
        f"Scene {item['index'] + 1} (id: {item['id']}): {item['title']} - "
        f"{item['wordCount']} voiceover words, {item['illustrationCount']} illustrations, "
        f"currently {item['currentDuration']}s"
        for item in analysis
    )
    return f"""Work out the best duration for each storyboard scene.

{lines}

Assume voiceover is read at 150-160 words per minute, each illustration needs one to
two extra seconds to take in, and transitions take half a second to a second.

Return a JSON object with "totalRecommendedDuration", "scenes" (list of {{"sceneId",
"currentDuration", "recommendedDuration", "reason", "readingSpeed", "visualComplexity",
"pacing"}}), "pacingRecommendations" ({{"intro", "body", "conclusion"}}) and "overallPacing"."""


def build_optimize_scenes_prompt(scenes: list[dict[str, Any]], target_duration: float) -> str:
    return f"""Tighten the pacing of these storyboard scenes.

{_scene_lines(scenes)}

Target total duration: about {target_duration}s.
Look for scenes that run long or short, monotonous rhythm, and scenes that should be
merged or split.

Return {{"changes": [{{"sceneId", "type" ("merge" | "split" | "adjust_timing"), "reason",
"before", "after"}}]}} where before and after are durations in seconds."""


def build_transitions_prompt(scenes: list[dict[str, Any]], music_bpm: float | None) -> str:
    bpm_line = f"Music tempo: {music_bpm} BPM\n" if music_bpm else ""
    return f"""Recommend transitions between these storyboard scenes.

{_scene_lines(scenes)}
{bpm_line}
Pick one of fade, slide, zoom, bounce, morph, particle, path or physics for each scene.

Return {{"suggestions": [{{"sceneId", "transition": {{"type", "duration", "reasoning",
"musicSync", "continuityScore", "moodAlignment"}}}}]}} with scores from 0 to 100."""


def build_suggestions_prompt(scene: dict[str, Any], context: dict[str, Any]) -> str:
    illustrations = scene.get("illustrations") or []
    return f"""Suggest improvements for this storyboard scene.

Scene: "{scene.get("title", "")}"
Description: {scene.get("description", "")}
Duration: {scene.get("duration", 5)}s
Layout: {scene.get("layoutType") or scene.get("layout")}
Animation: {scene.get("animationType") or scene.get("animation")}
Illustrations: {len(illustrations)}

Genre: {context.get("genre", "general")}
Audience: {context.get("targetAudience", "general")}
Purpose: {context.get("purpose", "presentation")}

Give five to seven ideas spread over creative, visual, accessibility, template and
character categories.

Return {{"suggestions": [{{"type", "title", "description", "implementation",
"confidence", "impact" ("low" | "medium" | "high")}}]}}."""


def build_story_analysis_prompt(script: str, scenes: list[dict[str, Any]], genre: str) -> str:
    return f"""Analyse the story told by this script and its storyboard.

Script:
{script}

Scenes:
{_scene_lines(scenes)}

Genre: {genre}

Return a JSON object with "pacingScore" (0-100), "flowOptimization" (list),
"characterConsistency" (list), "industryBenchmark" ({{"averagePacing", "averageDuration",
"idealSceneCount"}}), "suggestions" (list) and "deadTimeDetection" (list of slow scenes)."""


def build_translation_prompt(text: str, source: str, target: str, context: str) -> str:
    return f"""Translate this {context} from {source} to {target}.
Keep the tone and meaning and prefer natural, idiomatic wording.
Note any idioms or cultural references that need adapting.

Text:
{text}

Return {{"translatedText", "confidence" (0-1), "culturalAdaptations" (list)}}."""
