"""Gradio front-end for browsing phrase sequences."""

from __future__ import annotations

import os

import gradio as gr

from four_word_phrase.core.errors import PhraseError, format_error_text

from ..app import PhraseApp

SHARE_ENV = "FOUR_WORD_PHRASE_SHARE"


def should_share_interface() -> bool:
    """Return whether the UI should request a public share link."""

    env_value = os.environ.get(SHARE_ENV, "")
    return env_value.strip().lower() in {"1", "true", "yes", "on"}


def generate_markdown(
    app: PhraseApp,
    base_seed: str,
    phrase_length: float,
    total: float,
    start_count: float,
) -> str:
    """Render a block of phrases, or the error that prevented it."""

    try:
        app.set_base_seed(base_seed or "", count=int(start_count or 0))
        rendered = app.render_phrases(int(total), int(phrase_length))
    except PhraseError as exc:
        return f"**Error** `{format_error_text(exc)}`"
    return rendered or "_No phrases requested._"


def create_interface(app: PhraseApp) -> gr.Blocks:
    """Construct the interactive Gradio Blocks UI."""

    with gr.Blocks(title="Four Word Phrase") as demo:
        gr.Markdown(
            "## Four Word Phrase\n"
            f"Dictionary size: **{app.store.length()}** words. The same seed and "
            "starting counter always give the same phrases."
        )
        with gr.Row():
            with gr.Column(scale=1):
                seed_input = gr.Textbox(label="Base seed", value=app.generator.base_seed)
                length_input = gr.Slider(minimum=1, maximum=12, value=4, step=1, label="Words per phrase")
                total_input = gr.Slider(minimum=1, maximum=50, value=10, step=1, label="Phrases")
                start_input = gr.Number(value=0, precision=0, label="Starting counter")
                generate_button = gr.Button("Generate", variant="primary")
            with gr.Column(scale=2):
                output = gr.Markdown("Pick a seed and click **Generate**.")

        generate_button.click(
            lambda seed, length, total, start: generate_markdown(app, seed, length, total, start),
            inputs=[seed_input, length_input, total_input, start_input],
            outputs=output,
        )
    return demo


__all__ = ["create_interface", "generate_markdown", "should_share_interface", "SHARE_ENV"]
