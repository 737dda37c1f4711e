"""Storyboard AI router: scene generation, reviews and translation."""

from typing import Any

from fastapi import APIRouter

from ..dependencies import StoryServiceDep
from ..models.requests import (
    AnalyzeStoryRequest,
    OptimizeScenesRequest,
    SceneRequest,
    ScenesRequest,
    ScriptRequest,
    SmartTransitionsRequest,
    SuggestionsRequest,
    TranslateRequest,
)

router = APIRouter(tags=["story"])


@router.post("/generate-scenes")
def generate_scenes(request: ScriptRequest, service: StoryServiceDep) -> dict[str, Any]:
    """Break a script into storyboard scenes."""
    return {"scenes": service.generate_scenes(request.script)}


@router.post("/ai-improve-script")
def improve_script(request: ScriptRequest, service: StoryServiceDep) -> dict[str, Any]:
    """Score a script and propose a rewrite."""
    return service.improve_script(request.script)


@router.post("/ai-optimize-scene")
def optimize_scene(request: SceneRequest, service: StoryServiceDep) -> dict[str, Any]:
    """Review a single scene."""
    return service.optimize_scene(request.scene)


@router.post("/ai-calculate-timing")
def calculate_timing(request: ScenesRequest, service: StoryServiceDep) -> dict[str, Any]:
    """Recommend durations for each scene."""
    return service.calculate_timing(request.scenes)


@router.post("/optimize-scenes")
def optimize_scenes(request: OptimizeScenesRequest, service: StoryServiceDep) -> dict[str, Any]:
    """Tighten pacing and apply the timing changes."""
    return service.optimize_scenes(request.scenes, target_duration=request.target_duration)


@router.post("/smart-transitions")
def smart_transitions(request: SmartTransitionsRequest, service: StoryServiceDep) -> dict[str, Any]:
    """Recommend a transition for each scene."""
    return {"suggestions": service.suggest_transitions(request.scenes, music_bpm=request.music_bpm)}


@router.post("/ai-suggestions")
def ai_suggestions(request: SuggestionsRequest, service: StoryServiceDep) -> dict[str, Any]:
    """Creative improvement ideas for a scene."""
    context = request.project_context.model_dump(by_alias=True)
    return {"suggestions": service.suggest_improvements(request.scene, context)}


@router.post("/analyze-story")
def analyze_story(request: AnalyzeStoryRequest, service: StoryServiceDep) -> dict[str, Any]:
    """Analyse pacing and flow of the whole story."""
    return {"analysis": service.analyze_story(request.script, request.scenes, genre=request.genre)}


@router.post("/translate")
def translate(request: TranslateRequest, service: StoryServiceDep) -> dict[str, Any]:
    """Translate script or scene text."""
    return service.translate(
        request.text,
        request.target_language,
        source_language=request.source_language,
        context=request.context,
    )
