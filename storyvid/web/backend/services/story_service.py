"""Story service: storyboard generation and AI review of scripts and scenes.

Advisory calls (batch optimisation, transitions, suggestions, story
analysis, translation) fall back to a neutral default when the model
answers with something that is not the expected JSON. Transport, auth
and rate-limit failures are never masked.
"""

import logging
import uuid
from typing import Any

from ....errors import LLMResponseError, ValidationError
from ....layout import LayoutPosition, get_layout_config
from ....prompts import story as prompts
from ....understanding.llm_provider import LLMProvider

logger = logging.getLogger(__name__)

LAYOUTS = (
    "horizontal-row",
    "vertical-stack",
    "grid-2x2",
    "centered-large",
    "side-by-side",
    "scattered",
    "editorial",
)

ANIMATIONS = ("fade", "slide", "zoom", "bounce")

COLORS = (
    "#8B5CF6",  # purple
    "#14B8A6",  # teal
    "#F59E0B",  # amber
    "#EF4444",  # red
    "#3B82F6",  # blue
    "#10B981",  # green
    "#EC4899",  # pink
    "#F97316",  # orange
)

MAX_ICONS_PER_SCENE = 4
DEFAULT_SCENE_DURATION = 5
TEXT_COLOR = "#FFFFFF"

# Placement for icons beyond the slots a layout defines
_FALLBACK_POSITION = LayoutPosition(x=50, y=50, size=80)

LANGUAGE_NAMES = {
    "en": "English",
    "es": "Spanish",
    "fr": "French",
    "de": "German",
    "zh": "Chinese",
    "ja": "Japanese",
    "ko": "Korean",
    "it": "Italian",
    "pt": "Portuguese",
}


def _as_list(payload: Any, key: str) -> list | None:
    """Return ``payload`` if it is a list, or ``payload[key]`` if that is one."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get(key), list):
        return payload[key]
    return None


def build_scene(raw: dict[str, Any], index: int) -> dict[str, Any]:
    """Turn one model-suggested scene into a storyboard scene.

    Layout, animation and colours cycle with the scene index so that
    consecutive scenes look different.
    """
    icons = [icon for icon in raw.get("suggestedIcons") or [] if isinstance(icon, str)]
    icon_count = min(len(icons) or 2, MAX_ICONS_PER_SCENE)
    layout = LAYOUTS[index % len(LAYOUTS)]
    positions = get_layout_config(layout, icon_count)

    illustrations = []
    for icon_index, icon_name in enumerate(icons[:icon_count]):
        position = positions[icon_index] if icon_index < len(positions) else _FALLBACK_POSITION
        illustrations.append(
            {
                "iconName": icon_name,
                "iconLibrary": "lucide",
                "position": {"x": position.x, "y": position.y},
                "size": position.size,
                "color": COLORS[(index + icon_index) % len(COLORS)],
                "rotation": 0,
            }
        )

    return {
        "title": raw.get("title") or f"Scene {index + 1}",
        "description": raw.get("description") or "",
        "duration": raw.get("duration") or DEFAULT_SCENE_DURATION,
        "voiceover": raw.get("voiceover") or raw.get("description") or "",
        "keywords": raw.get("keywords") or [],
        "layout": layout,
        "animation": ANIMATIONS[index % len(ANIMATIONS)],
        "illustrations": illustrations,
        "backgroundColor": COLORS[index % len(COLORS)],
        "textColor": TEXT_COLOR,
    }


def default_transitions(scenes: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """A half-second fade for every scene."""
    return [
        {
            "sceneId": scene.get("id"),
            "transition": {
                "type": "fade",
                "duration": 0.5,
                "reasoning": "Smooth transition between scenes",
                "musicSync": False,
                "continuityScore": 75,
                "moodAlignment": 75,
            },
        }
        for scene in scenes
    ]


def default_suggestions() -> list[dict[str, Any]]:
    return [
        {
            "id": str(uuid.uuid4()),
            "type": "visual",
            "title": "Enhance Visual Hierarchy",
            "description": "Use size and color contrast to create clear focal points",
            "implementation": {"suggestion": "Make primary elements 50% larger"},
            "confidence": 0.8,
            "impact": "medium",
        },
        {
            "id": str(uuid.uuid4()),
            "type": "accessibility",
            "title": "Improve Text Contrast",
            "description": "Ensure text meets WCAG AA standards for readability",
            "implementation": {"suggestion": "Use high contrast colors for text"},
            "confidence": 0.9,
            "impact": "high",
        },
    ]


def default_story_analysis(genre: str) -> dict[str, Any]:
    return {
        "pacingScore": 75,
        "flowOptimization": [
            "Consider varying scene durations for better rhythm",
            "Add transition cues between major story beats",
        ],
        "characterConsistency": [],
        "industryBenchmark": {
            "averagePacing": 3.5,
            "averageDuration": 60,
            "idealSceneCount": {"min": 5, "max": 15},
            "genre": genre,
        },
        "suggestions": ["Review scene transitions", "Ensure visual variety between scenes"],
        "deadTimeDetection": [],
    }


class StoryService:
    """Service for AI-assisted storyboard work."""

    def __init__(self, llm: LLMProvider):
        """Initialize the story service.

        Args:
            llm: Language model used for every request.
        """
        self.llm = llm

    def generate_scenes(self, script: str | None) -> list[dict[str, Any]]:
        """Break a script into laid-out storyboard scenes.

        Args:
            script: The video script.

        Returns:
            Scenes with layout, animation, colours and positioned icons.

        Raises:
            ValidationError: If the script is empty.
            UpstreamError: If the model fails or returns no scene list.
        """
        if not script or not script.strip():
            raise ValidationError("Script is required")

        payload = self.llm.generate_json(
            prompts.build_scenes_prompt(script),
            system_prompt=prompts.SCENES_SYSTEM_PROMPT,
            temperature=0.7,
            max_tokens=4000,
        )
        raw_scenes = _as_list(payload, "scenes")
        if raw_scenes is None:
            raise LLMResponseError("Invalid JSON response from AI")

        scenes = [
            build_scene(raw if isinstance(raw, dict) else {}, index)
            for index, raw in enumerate(raw_scenes)
        ]
        logger.info("Generated %d scenes from a %d character script", len(scenes), len(script))
        return scenes

    def improve_script(self, script: str | None) -> dict[str, Any]:
        if not script:
            raise ValidationError("Script is required")

        analysis = self.llm.generate_json(
            prompts.build_improve_script_prompt(script),
            system_prompt=prompts.SCRIPT_EDITOR_SYSTEM_PROMPT,
            temperature=0.7,
        )
        if not isinstance(analysis, dict):
            raise LLMResponseError("Invalid JSON response from AI")

        improved = analysis.get("improvedScript")
        return {
            "success": True,
            "analysis": analysis,
            "originalLength": len(script),
            "improvedLength": len(improved) if isinstance(improved, str) else 0,
        }

    def optimize_scene(self, scene: dict[str, Any] | None) -> dict[str, Any]:
        if not scene:
            raise ValidationError("Scene data is required")

        analysis = self.llm.generate_json(
            prompts.build_optimize_scene_prompt(scene),
            system_prompt=prompts.SCENE_CONSULTANT_SYSTEM_PROMPT,
            temperature=0.7,
        )
        if not isinstance(analysis, dict):
            raise LLMResponseError("Invalid JSON response from AI")

        return {"success": True, "analysis": analysis, "sceneId": scene.get("id")}

    def calculate_timing(self, scenes: list[dict[str, Any]] | None) -> dict[str, Any]:
        """Ask for the best duration of each scene given its content density."""
        if not scenes:
            raise ValidationError("Scenes data is required")

        analysis = [
            {
                "index": index,
                "id": scene.get("id"),
                "title": scene.get("title", ""),
                "wordCount": len(str(scene.get("voiceover") or "").split()),
                "illustrationCount": len(scene.get("illustrations") or []),
                "currentDuration": scene.get("duration") or DEFAULT_SCENE_DURATION,
            }
            for index, scene in enumerate(scenes)
        ]
        timing = self.llm.generate_json(
            prompts.build_timing_prompt(analysis),
            system_prompt=prompts.TIMING_SYSTEM_PROMPT,
            temperature=0.5,
        )
        if not isinstance(timing, dict):
            raise LLMResponseError("Invalid JSON response from AI")

        return {
            "success": True,
            "timingAnalysis": timing,
            "originalDuration": sum(item["currentDuration"] for item in analysis),
        }

    def optimize_scenes(
        self,
        scenes: list[dict[str, Any]] | None,
        target_duration: float = 60,
    ) -> dict[str, Any]:
        """Get pacing changes and apply the timing adjustments to the scenes.

        Args:
            scenes: Current scenes.
            target_duration: Desired total duration in seconds.

        Returns:
            ``optimizedScenes`` (scenes with ``adjust_timing`` changes applied)
            and the full list of proposed ``changes``.
        """
        if scenes is None:
            raise ValidationError("Scenes array is required")

        try:
            payload = self.llm.generate_json(
                prompts.build_optimize_scenes_prompt(scenes, target_duration),
                system_prompt=prompts.EDITOR_SYSTEM_PROMPT,
                temperature=0.7,
                max_tokens=1500,
            )
            changes = _as_list(payload, "changes") or []
        except LLMResponseError as e:
            logger.warning("Scene optimisation answer unusable, proposing no changes: %s", e)
            changes = []

        timing = {
            change.get("sceneId"): change.get("after")
            for change in changes
            if isinstance(change, dict)
            and change.get("type") == "adjust_timing"
            and isinstance(change.get("sceneId"), str)
        }
        optimized = [
            {**scene, "duration": timing[str(scene["id"])]}
            if scene.get("id") is not None and str(scene["id"]) in timing
            else scene
            for scene in scenes
        ]
        return {"optimizedScenes": optimized, "changes": changes}

    def suggest_transitions(
        self,
        scenes: list[dict[str, Any]] | None,
        music_bpm: float | None = None,
    ) -> list[dict[str, Any]]:
        if scenes is None:
            raise ValidationError("Scenes array is required")

        try:
            payload = self.llm.generate_json(
                prompts.build_transitions_prompt(scenes, music_bpm),
                system_prompt=prompts.MOTION_SYSTEM_PROMPT,
                temperature=0.7,
                max_tokens=2000,
            )
        except LLMResponseError as e:
            logger.warning("Transition answer unusable, using fades: %s", e)
            return default_transitions(scenes)

        suggestions = _as_list(payload, "suggestions")
        if suggestions is None:
            return default_transitions(scenes)
        return suggestions

    def suggest_improvements(
        self,
        scene: dict[str, Any] | None,
        project_context: dict[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        """Creative ideas for a scene, each tagged with a fresh ``id``."""
        if not scene:
            raise ValidationError("Scene is required")

        try:
            payload = self.llm.generate_json(
                prompts.build_suggestions_prompt(scene, project_context or {}),
                system_prompt=prompts.CREATIVE_SYSTEM_PROMPT,
                temperature=0.8,
                max_tokens=2000,
            )
        except LLMResponseError as e:
            logger.warning("Suggestion answer unusable, using defaults: %s", e)
            return default_suggestions()

        suggestions = _as_list(payload, "suggestions")
        if suggestions is None:
            return default_suggestions()
        return [
            {**suggestion, "id": str(uuid.uuid4())}
            for suggestion in suggestions
            if isinstance(suggestion, dict)
        ]

    def analyze_story(
        self,
        script: str | None,
        scenes: list[dict[str, Any]] | None,
        genre: str = "general",
    ) -> dict[str, Any]:
        if not script or scenes is None:
            raise ValidationError("Script and scenes are required")

        try:
            analysis = self.llm.generate_json(
                prompts.build_story_analysis_prompt(script, scenes, genre),
                system_prompt=prompts.STORY_ANALYST_SYSTEM_PROMPT,
                temperature=0.7,
                max_tokens=2000,
            )
        except LLMResponseError as e:
            logger.warning("Story analysis answer unusable, using defaults: %s", e)
            return default_story_analysis(genre)

        if not isinstance(analysis, dict):
            return default_story_analysis(genre)
        return analysis

    def translate(
        self,
        text: str | None,
        target_language: str | None,
        source_language: str | None = None,
        context: str = "script",
    ) -> dict[str, Any]:
        """Translate text, returning it unchanged when the answer is unusable.

        Language codes are expanded to names; an unknown source language
        is treated as English and an unknown target is passed through.
        """
        if not text or not target_language:
            raise ValidationError("Text and target language are required")

        source = LANGUAGE_NAMES.get(source_language or "", "English")
        target = LANGUAGE_NAMES.get(target_language, target_language)
        fallback = {"translatedText": text, "confidence": 0.5, "culturalAdaptations": []}

        try:
            result = self.llm.generate_json(
                prompts.build_translation_prompt(text, source, target, context),
                system_prompt=prompts.TRANSLATOR_SYSTEM_PROMPT,
                temperature=0.3,
                max_tokens=1500,
            )
        except LLMResponseError as e:
            logger.warning("Translation answer unusable, returning source text: %s", e)
            return fallback

        if not isinstance(result, dict) or not result.get("translatedText"):
            return fallback
        return result
