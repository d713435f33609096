"""
Gradio Web UI for ragchat.

Two screens over one retrieval session:
- Upload: index PDF and text documents, see chunks per document
- Chat: ask questions answered from the indexed chunks
"""

from __future__ import annotations

from typing import Any

import gradio as gr

from ragchat.providers.openai import OpenAIProvider
from ragchat.rag.extraction import TEXT_SUFFIXES

from .backend import get_backend

UPLOAD_FILE_TYPES = [".pdf", *sorted(TEXT_SUFFIXES)]
DOCUMENT_HEADERS = ["Document", "Chunks"]


async def handle_upload(files: list[str] | None) -> tuple[str, list[list[Any]]]:
    """Index uploaded files."""
    backend = get_backend()
    status = await backend.process_files(list(files or []))
    return status, backend.document_table()


async def handle_chat(message: str, history: list[dict[str, Any]]):
    """Handle chat message."""
    backend = get_backend()
    if not message.strip():
        return history, message

    response = await backend.chat(message)
    history = history + [
        {"role": "user", "content": message},
        {"role": "assistant", "content": response},
    ]
    return history, ""


def handle_settings(api_key: str, model: str, top_k: float) -> str:
    """Apply settings."""
    return get_backend().configure(api_key=api_key, model=model, top_k=int(top_k))


async def handle_reset() -> tuple[list[dict[str, Any]], str, list[list[Any]]]:
    """Reset everything."""
    backend = get_backend()
    msg = await backend.reset()
    return [], msg, backend.document_table()


def update_status() -> str:
    """Update status bar."""
    status = get_backend().get_status()
    if status["documents"] == 0:
        return "No documents indexed"
    return (
        f"Documents: {status['documents']}  |  Chunks: {status['chunks']}  |  "
        f"Turns: {status['turns']}  |  Model: {status['model']}"
    )


def create_app(title: str = "Document Chat") -> gr.Blocks:
    """Create the Gradio application."""
    backend = get_backend()
    models = OpenAIProvider().get_available_models()
    default_model = backend.config.model
    if default_model not in models:
        models = [default_model, *models]

    with gr.Blocks(title=title, theme=gr.themes.Soft()) as app:
        gr.Markdown(f"# {title}\nUpload documents, then ask questions about them.")

        with gr.Accordion("Settings", open=False):
            with gr.Row():
                api_key_input = gr.Textbox(
                    label="OpenAI API Key",
                    type="password",
                    placeholder="Or set OPENAI_API_KEY",
                    scale=2,
                )
                model_dropdown = gr.Dropdown(
                    choices=models,
                    value=default_model,
                    label="Model",
                    scale=1,
                )
                top_k_slider = gr.Slider(
                    minimum=1, maximum=10, value=backend.config.top_k, step=1,
                    label="Chunks per answer", scale=1,
                )
            apply_btn = gr.Button("Apply", variant="secondary")

        with gr.Tabs():
            with gr.Tab("Upload"):
                file_input = gr.File(
                    label="Documents",
                    file_count="multiple",
                    file_types=UPLOAD_FILE_TYPES,
                )
                process_btn = gr.Button("Process documents", variant="primary")
                upload_status = gr.Textbox(
                    label="Processing status",
                    lines=4,
                    interactive=False,
                )
                documents_table = gr.Dataframe(
                    headers=DOCUMENT_HEADERS,
                    datatype=["str", "number"],
                    value=backend.document_table(),
                    interactive=False,
                    label="Indexed documents",
                )

            with gr.Tab("Chat"):
                chatbot = gr.Chatbot(
                    label="Conversation",
                    type="messages",
                    height=450,
                    show_copy_button=True,
                )
                with gr.Row():
                    with gr.Column(scale=5):
                        msg_input = gr.Textbox(
                            placeholder="Ask a question about your documents...",
                            show_label=False,
                            container=False,
                        )
                    with gr.Column(scale=1, min_width=80):
                        send_btn = gr.Button("Send", variant="primary")

        with gr.Row():
            reset_btn = gr.Button("Reset", variant="stop")

        status_output = gr.Textbox(
            value=update_status(),
            interactive=False,
            show_label=False,
            container=False,
        )

        # Event handlers

        apply_btn.click(
            fn=handle_settings,
            inputs=[api_key_input, model_dropdown, top_k_slider],
            outputs=[status_output],
        )

        process_btn.click(
            fn=handle_upload,
            inputs=[file_input],
            outputs=[upload_status, documents_table],
        ).then(
            fn=update_status,
            outputs=[status_output],
        )

        for trigger in (msg_input.submit, send_btn.click):
            trigger(
                fn=handle_chat,
                inputs=[msg_input, chatbot],
                outputs=[chatbot, msg_input],
            ).then(
                fn=update_status,
                outputs=[status_output],
            )

        reset_btn.click(
            fn=handle_reset,
            outputs=[chatbot, upload_status, documents_table],
        ).then(
            fn=update_status,
            outputs=[status_output],
        )

    return app


def launch_app(
    host: str = "127.0.0.1",
    port: int = 7860,
    share: bool = False,
    title: str = "Document Chat",
    **kwargs,
) -> None:
    """Launch the Gradio application."""
    app = create_app(title=title)
    app.launch(
        server_name=host,
        server_port=port,
        share=share,
        **kwargs,
    )


if __name__ == "__main__":
    launch_app()
