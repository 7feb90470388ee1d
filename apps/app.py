# -*- coding: utf-8 -*-
import mimetypes
from pathlib import Path
from typing import Any, Dict, Optional

import gradio as gr

from destination_resolver.container import get_container
from destination_resolver.domain.errors import DestinationResolverError
from destination_resolver.logging_config import configure_logging
from destination_resolver.services import DestinationService

configure_logging()
SERVICE: DestinationService = get_container().resolve(DestinationService)


def _error_payload(transcript: str, message: str) -> Dict[str, Any]:
    return {
        "transcript": transcript,
        "normalizedTranscript": "",
        "destination": None,
        "error": message,
    }


def _summary(payload: Dict[str, Any]) -> str:
    destination = payload.get("destination")
    if not destination:
        return f"❌ {payload.get('error') or 'No destination'}"
    return (
        f"📍 {destination['canonicalName']} "
        f"({destination['lat']:.5f}, {destination['lon']:.5f})\n"
        f"🔎 {destination['matchedBy']} | "
        f"🎯 {destination['confidence']:.2f} | "
        f"🔤 {destination['matchedVariant']}"
    )


def resolve_audio(audio_path: Optional[str]) -> tuple[str, Dict[str, Any]]:
    if not audio_path:
        payload = _error_payload("", "❌ No audio file")
        return _summary(payload), payload

    path = Path(audio_path)
    mime_hint, _ = mimetypes.guess_type(path.name)
    try:
        payload = SERVICE.handle_audio(
            path.read_bytes(), mime_hint=mime_hint, filename=path.name
        )
    except (OSError, DestinationResolverError) as e:
        payload = _error_payload("", str(e))
    return _summary(payload), payload


def resolve_text(text: str) -> tuple[str, Dict[str, Any]]:
    try:
        payload = SERVICE.handle_transcript(text or "")
    except DestinationResolverError as e:
        payload = _error_payload(text or "", str(e))
    return _summary(payload), payload


with gr.Blocks(title="Nouakchott destination resolver") as app:
    gr.Markdown(
        "# 🚕 Nouakchott destination resolver\n"
        "Record or upload a short Hassaniya request, or type it."
    )

    with gr.Row():
        audio_file = gr.Audio(
            sources=["microphone", "upload"], type="filepath", label="🎵 Audio"
        )
        text_input = gr.Textbox(
            label="📝 Transcript", placeholder="نبغي نمشي توجنين", rtl=True
        )

    with gr.Row():
        btn_audio = gr.Button("🚀 Transcribe and resolve")
        btn_text = gr.Button("📝 Resolve text")

    summary = gr.Textbox(label="Destination", lines=3)
    payload_view = gr.JSON(label="Response payload")

    btn_audio.click(resolve_audio, inputs=audio_file, outputs=[summary, payload_view])
    btn_text.click(resolve_text, inputs=text_input, outputs=[summary, payload_view])

if __name__ == "__main__":
    app.launch()
