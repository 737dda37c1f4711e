"""Audio router: voiceovers, transcription and voice commands."""

from fastapi import APIRouter

from ..dependencies import AudioServiceDep
from ..models.requests import (
    VoiceCommandRequest,
    VoiceoverRequest,
    VoiceoverSyncRequest,
    VoiceToScriptRequest,
)
from ..models.responses import (
    TranscriptionResponse,
    VoiceCommandResponse,
    VoiceoverResponse,
    VoiceoverSyncResponse,
)

router = APIRouter(tags=["audio"])


@router.post("/generate-voiceover", response_model=VoiceoverResponse)
def generate_voiceover(request: VoiceoverRequest, service: AudioServiceDep) -> VoiceoverResponse:
    """Synthesize a voiceover for a piece of text."""
    result = service.generate_voiceover(request.text, voice=request.voice, speed=request.speed)
    return VoiceoverResponse.model_validate(result)


@router.post(
    "/voiceover-sync",
    response_model=VoiceoverSyncResponse,
    response_model_exclude_none=True,
)
def voiceover_sync(request: VoiceoverSyncRequest, service: AudioServiceDep) -> VoiceoverSyncResponse:
    """Synthesize voiceovers for all scenes and fit durations to the audio."""
    result = service.sync_voiceovers(request.scenes, voice=request.voice, speed=request.speed)
    return VoiceoverSyncResponse.model_validate(result)


@router.post("/voice-to-script", response_model=TranscriptionResponse)
def voice_to_script(request: VoiceToScriptRequest, service: AudioServiceDep) -> TranscriptionResponse:
    """Transcribe recorded speech."""
    result = service.transcribe(request.audio_data, language=request.language)
    return TranscriptionResponse.model_validate(result)


@router.post("/voice-commands", response_model=VoiceCommandResponse)
def voice_commands(request: VoiceCommandRequest, service: AudioServiceDep) -> VoiceCommandResponse:
    """Recognise an editor command in a transcription."""
    return VoiceCommandResponse.model_validate(service.interpret_command(request.transcription))
