"""NiceGUI interface: document viewer, chat panel and chat history.

Holds only presentation state. Documents are processed and questions are
answered through the HTTP API.
"""

import logging
import os
import uuid
from typing import Any

from nicegui import app, ui

from src.agent.prompts import QUICK_ACTIONS, WELCOME_MESSAGE, WELCOME_MESSAGE_ID, action_prompt
from src.models.schemas import DocumentType, TextAction
from src.ui.api_client import (
    ApiClientError,
    api_base_url,
    chat_payload,
    load_document,
    stream_chat,
)
from src.ui.history import HISTORY_KEY, append_exchange, preview, recent_conversations
from src.ui.viewer import TEXT_TYPES, ViewerState, pdf_frame_url, proxy_url, selection_preview

logger = logging.getLogger(__name__)

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: linear-gradient(135deg, #f9fafb 0%, #f3f4f6 100%); }

    .brand { background: linear-gradient(135deg, #2563eb 0%, #9333ea 100%); }

    .message-user {
        background: linear-gradient(90deg, #2563eb 0%, #9333ea 100%);
        color: white;
        border-radius: 14px 14px 4px 14px;
    }

    .message-assistant {
        background: rgba(255, 255, 255, 0.85);
        border: 1px solid rgba(229, 231, 235, 0.6);
        color: #1f2937;
        border-radius: 14px 14px 14px 4px;
    }

    .avatar-assistant { background: linear-gradient(135deg, #22c55e 0%, #059669 100%); }

    .typing-dot {
        width: 8px; height: 8px;
        background: #9ca3af;
        border-radius: 50%;
        animation: bounce 1.4s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.1s; }
    .typing-dot:nth-child(3) { animation-delay: 0.2s; }

    @keyframes bounce {
        0%, 60%, 100% { transform: translateY(0); }
        30% { transform: translateY(-6px); }
    }

    .document-text { white-space: pre-wrap; transform-origin: top left; }
</style>
"""

FORMAT_HINTS = [
    ("picture_as_pdf", "PDF", "text-red-500"),
    ("description", "Word", "text-blue-500"),
    ("table_chart", "Excel", "text-green-500"),
]


def _new_message(role: str, content: str) -> dict[str, Any]:
    return {"id": uuid.uuid4().hex, "role": role, "content": content}


class PageState:
    """State of one browser tab."""

    def __init__(self) -> None:
        self.document: dict[str, Any] | None = None
        self.document_url: str = ""
        self.is_loading_document: bool = False
        self.document_error: str | None = None
        self.messages: list[dict[str, Any]] = []
        self.selected_text: str = ""
        self.is_chatting: bool = False
        self.chat_error: str | None = None

    @property
    def document_type(self) -> DocumentType | None:
        if not self.document:
            return None
        return DocumentType(self.document["type"])

    @property
    def has_conversation(self) -> bool:
        return any(m["role"] != "system" and m["id"] != WELCOME_MESSAGE_ID for m in self.messages)

    def start_document(self, data: dict[str, Any]) -> None:
        """Show a freshly loaded document with an empty chat."""
        self.document = data
        self.document_error = None
        self.selected_text = ""
        self.chat_error = None
        self.messages = [{"id": WELCOME_MESSAGE_ID, "role": "assistant", "content": WELCOME_MESSAGE}]


@ui.page("/")
def chat_page() -> None:
    """Main page: sidebar, document viewer and chat panel."""
    ui.add_head_html(CUSTOM_CSS)
    state = PageState()
    viewer = ViewerState()

    def stored_history() -> list[dict[str, Any]]:
        return list(app.storage.user.get(HISTORY_KEY, []))

    # === Sidebar: chat history ===

    @ui.refreshable
    def history_list() -> None:
        conversations = recent_conversations(stored_history())
        with ui.row().classes("w-full items-center justify-between"):
            with ui.row().classes("items-center gap-3"):
                with ui.element("div").classes("w-8 h-8 rounded-lg brand flex items-center justify-center"):
                    ui.icon("history").classes("text-white")
                ui.label("Chat History").classes("text-lg font-semibold text-gray-900")
            if stored_history():
                ui.button(icon="delete", on_click=clear_history).props("flat round color=red")

        if not conversations:
            with ui.column().classes("w-full items-center py-10 gap-2"):
                ui.icon("chat_bubble_outline").classes("text-4xl text-gray-300")
                ui.label("No chat history yet").classes("text-sm font-medium text-gray-900")
                ui.label(
                    "Start chatting with documents to see your conversation history here"
                ).classes("text-xs text-gray-500 text-center")
            return

        ui.label("Recent Conversations").classes("text-xs font-medium text-gray-500")
        for conversation in conversations:
            with (
                ui.card()
                .classes("w-full p-3 cursor-pointer hover:bg-gray-50")
                .on("click", lambda c=conversation: restore_chat(c))
            ):
                ui.label(preview(conversation[0]["content"])).classes("text-xs text-gray-900")
                ui.label("Click to restore chat").classes("text-xs text-gray-500 font-medium")

    def clear_history() -> None:
        app.storage.user.pop(HISTORY_KEY, None)
        history_list.refresh()

    def restore_chat(conversation: list[dict[str, Any]]) -> None:
        state.messages = [dict(m) for m in conversation]
        state.chat_error = None
        refresh_chat()

    # === Document loading ===

    async def load(url: str) -> None:
        url = url.strip()
        if not url or state.is_loading_document:
            return

        state.document_url = url
        state.is_loading_document = True
        state.document_error = None
        viewer.reset()
        document_view.refresh()
        load_button.disable()

        try:
            data = await load_document(url)
        except ApiClientError as e:
            state.document = None
            state.document_error = str(e)
            ui.notify(str(e), type="negative")
        else:
            state.start_document(data)
            viewer.total_pages = int(data.get("metadata", {}).get("num_pages") or 1)
        finally:
            state.is_loading_document = False
            load_button.enable()

        document_view.refresh()
        refresh_chat()

    # === Document viewer ===

    async def capture_selection() -> None:
        text = await ui.run_javascript("window.getSelection().toString()")
        if text and str(text).strip():
            state.selected_text = str(text)
            selection_box.refresh()
            quick_actions.refresh()
            chat_input.refresh()

    def update_view() -> None:
        document_view.refresh()

    def toolbar() -> None:
        doc_type = state.document_type
        with ui.row().classes("w-full items-center justify-between px-6 py-3 bg-white/80 border-b"):
            with ui.row().classes("items-center gap-2"):
                ui.button(icon="zoom_out", on_click=lambda: (viewer.zoom_out(), update_view())).props("outline dense")
                ui.label(f"{viewer.zoom}%").classes("text-sm font-semibold bg-gray-100 px-3 py-1 rounded-md")
                ui.button(icon="zoom_in", on_click=lambda: (viewer.zoom_in(), update_view())).props("outline dense")
                ui.button("Fit", on_click=lambda: (viewer.reset_zoom(), update_view())).props("outline dense")

            if doc_type is DocumentType.PDF:
                with ui.row().classes("items-center gap-2"):
                    ui.toggle(
                        {"visual": "Visual", "text": "Text"},
                        value=viewer.view_mode,
                        on_change=lambda e: (setattr(viewer, "view_mode", e.value), update_view()),
                    ).props("dense no-caps")
                    if viewer.view_mode == "visual":
                        ui.button(
                            icon="chevron_left",
                            on_click=lambda: (viewer.previous_page(), update_view()),
                        ).props("outline dense").set_enabled(viewer.page > 1)
                        ui.label(f"{viewer.page} / {viewer.total_pages}").classes(
                            "text-sm font-medium bg-gray-100 px-3 py-1 rounded-md"
                        )
                        ui.button(
                            icon="chevron_right",
                            on_click=lambda: (viewer.next_page(), update_view()),
                        ).props("outline dense").set_enabled(viewer.page < viewer.total_pages)

            with ui.row().classes("items-center gap-2"):
                if doc_type is not None and not doc_type.uses_iframe:
                    ui.button(icon="rotate_right", on_click=lambda: (viewer.rotate(), update_view())).props("outline dense")
                ui.button(icon="print", on_click=lambda: ui.run_javascript("window.print()")).props("outline dense")
                ui.button(
                    icon="download",
                    on_click=lambda: ui.navigate.to(
                        proxy_url(api_base_url(), state.document_url), new_tab=True
                    ),
                ).props("outline dense")
                ui.button(
                    icon="fullscreen_exit" if viewer.is_fullscreen else "fullscreen",
                    on_click=toggle_fullscreen,
                ).props("outline dense")

    def toggle_fullscreen() -> None:
        viewer.is_fullscreen = not viewer.is_fullscreen
        fullscreen.set_value(viewer.is_fullscreen)
        document_view.refresh()

    def text_view(content: str | None, empty_label: str) -> None:
        with ui.element("div").classes("w-full h-full overflow-auto bg-white p-6").on(
            "mouseup", capture_selection
        ):
            if content:
                ui.label(content).classes(
                    "document-text text-sm leading-relaxed text-gray-800 select-text"
                ).style(f"transform: {viewer.transform}")
            else:
                ui.label(empty_label).classes("text-gray-500")

    def iframe(src: str, style: str = "") -> None:
        ui.element("iframe").props(
            f'src="{src}" sandbox="allow-same-origin allow-scripts allow-popups allow-forms"'
        ).classes("w-full h-full border-0").style(style)

    @ui.refreshable
    def document_view() -> None:
        if state.is_loading_document:
            with ui.column().classes("w-full h-full items-center justify-center"):
                ui.spinner(size="xl", color="primary")
                ui.label("Loading document...").classes("text-gray-600")
            return

        if state.document_error:
            with ui.column().classes("w-full h-full items-center justify-center text-red-600 gap-2"):
                ui.icon("description").classes("text-5xl text-red-500")
                ui.label("Error Loading Document").classes("text-lg font-semibold")
                ui.label(state.document_error).classes("text-sm")
                ui.button("Retry", on_click=lambda: load(state.document_url)).props("outline")
            return

        if state.document is None:
            with ui.column().classes("w-full h-full items-center justify-center gap-3"):
                with ui.element("div").classes(
                    "w-32 h-32 rounded-3xl bg-blue-50 flex items-center justify-center shadow-lg"
                ):
                    ui.icon("article").classes("text-6xl text-blue-600")
                ui.label("Ready to analyze").classes("text-2xl font-bold text-gray-900")
                ui.label(
                    "Enter a document URL in the sidebar to start chatting with your "
                    "PDF, Word, or Excel files using AI"
                ).classes("text-gray-600 text-center max-w-md")
            return

        toolbar()
        doc_type = state.document_type
        content = state.document.get("content")
        with ui.element("div").classes("w-full flex-grow relative overflow-hidden"):
            if doc_type is DocumentType.PDF and viewer.view_mode == "text":
                text_view(content, "No text content available")
            elif doc_type is DocumentType.PDF:
                with ui.element("div").classes("w-full h-full bg-gray-100 flex justify-center"):
                    iframe(
                        pdf_frame_url(api_base_url(), state.document_url, viewer),
                        f"transform: rotate({viewer.rotation}deg)",
                    )
            elif doc_type is not None and doc_type.uses_iframe:
                view_url = state.document.get("metadata", {}).get("view_url", state.document_url)
                scale = 10000 / viewer.zoom
                iframe(
                    view_url,
                    f"transform: scale({viewer.zoom / 100}); transform-origin: top left; "
                    f"width: {scale}%; height: {scale}%",
                )
            elif doc_type in TEXT_TYPES:
                text_view(content, "No content available")
            else:
                ui.label(f"Unsupported document type: {doc_type}").classes("text-gray-600")

            if state.selected_text:
                ui.label(f"Selected: {state.selected_text}").classes(
                    "absolute bottom-4 right-4 bg-blue-600 text-white px-3 py-2 rounded-md "
                    "shadow-lg text-sm max-w-xs truncate"
                )

    # === Chat panel ===

    def render_message(message: dict[str, Any]) -> None:
        is_user = message["role"] == "user"
        with ui.row().classes(f"w-full {'justify-end' if is_user else 'justify-start'}"):
            with ui.element("div").classes(
                f"px-4 py-3 max-w-[85%] {'message-user' if is_user else 'message-assistant'}"
            ):
                if is_user:
                    ui.label(message["content"]).classes("text-sm whitespace-pre-wrap")
                else:
                    ui.markdown(message["content"]).classes("text-sm")

    @ui.refreshable
    def chat_messages() -> None:
        for message in state.messages:
            if message["role"] != "system":
                render_message(message)
        if state.is_chatting:
            with ui.row().classes("w-full justify-start gap-1 px-4 py-3"):
                for _ in range(3):
                    ui.element("div").classes("typing-dot")

    @ui.refreshable
    def error_banner() -> None:
        if state.chat_error:
            with ui.row().classes("w-full p-4 bg-red-50 border-b items-start gap-2"):
                ui.icon("error_outline").classes("text-red-500")
                ui.label(f"Error: {state.chat_error}").classes("text-sm text-red-700")

    @ui.refreshable
    def selection_box() -> None:
        if not state.selected_text:
            return
        with ui.column().classes("w-full p-4 border-b bg-blue-50 gap-2"):
            with ui.row().classes("w-full items-center justify-between"):
                ui.label("Text Selected").classes("text-sm font-medium text-gray-700")
                ui.button("Clear", on_click=clear_selection).props("flat dense")
            ui.label(selection_preview(state.selected_text)).classes(
                "text-xs text-gray-600 p-2 bg-white rounded border w-full"
            )
            with ui.row().classes("w-full gap-2"):
                ui.button(
                    "Summarize", on_click=lambda: text_action(TextAction.SUMMARIZE)
                ).classes("flex-1").props("color=primary")
                ui.button(
                    "Explain", on_click=lambda: text_action(TextAction.EXPLAIN)
                ).classes("flex-1").props("color=purple")

    @ui.refreshable
    def quick_actions() -> None:
        if not state.document or state.has_conversation or state.selected_text:
            return
        with ui.column().classes("w-full p-4 border-b gap-2"):
            ui.label("Quick Actions").classes("text-sm font-semibold text-gray-700")
            for label, prompt, icon in QUICK_ACTIONS:
                ui.button(label, icon=icon, on_click=lambda p=prompt: send(p)).props(
                    "outline no-caps align=left"
                ).classes("w-full")

    @ui.refreshable
    def chat_input() -> None:
        if not state.document:
            placeholder = "Load a document to start chatting..."
        elif state.selected_text:
            placeholder = "Ask about the selected text..."
        else:
            placeholder = "Ask about the document..."
        enabled = state.document is not None and not state.is_chatting

        with ui.row().classes("w-full p-4 gap-3 items-center border-t bg-white/50"):
            field = (
                ui.input(placeholder=placeholder)
                .props("outlined dense")
                .classes("flex-grow")
            )
            field.set_enabled(enabled)

            async def submit() -> None:
                text = (field.value or "").strip()
                if text:
                    await send(text)

            field.on("keydown.enter", submit)
            ui.button(icon="send", on_click=submit).props("round unelevated").classes(
                "brand text-white"
            ).set_enabled(enabled)

    def refresh_chat() -> None:
        selection_box.refresh()
        quick_actions.refresh()
        error_banner.refresh()
        chat_messages.refresh()
        chat_input.refresh()

    def clear_selection() -> None:
        state.selected_text = ""
        ui.run_javascript("window.getSelection().removeAllRanges()")
        refresh_chat()
        document_view.refresh()

    async def text_action(action: TextAction) -> None:
        if state.selected_text:
            await send(action_prompt(action, state.selected_text), action)

    async def send(text: str, action: TextAction | None = None) -> None:
        if not text or not state.document or state.is_chatting:
            return

        user_message = _new_message("user", text)
        state.messages.append(user_message)
        state.is_chatting = True
        state.chat_error = None
        refresh_chat()

        payload = chat_payload(
            state.messages,
            state.document.get("content"),
            state.selected_text,
            action,
        )
        reply: list[str] = []
        failure: list[str] = []

        try:
            await stream_chat(
                payload,
                on_chunk=reply.append,
                on_complete=lambda: None,
                on_error=failure.append,
            )
        except Exception as e:
            logger.error(f"Chat request failed: {e}")
            failure.append(f"Failed to get AI response: {e}")
        finally:
            state.is_chatting = False

        if failure:
            state.chat_error = failure[0]
            ui.notify(failure[0], type="negative")
            refresh_chat()
            return

        assistant_message = _new_message("assistant", "".join(reply))
        state.messages.append(assistant_message)
        app.storage.user[HISTORY_KEY] = append_exchange(
            stored_history(), user_message, assistant_message
        )
        history_list.refresh()

        if state.selected_text:
            clear_selection()
        else:
            refresh_chat()

    # === Layout ===

    fullscreen = ui.fullscreen(on_value_change=lambda e: setattr(viewer, "is_fullscreen", e.value))

    with ui.header().classes("bg-white text-gray-900 shadow-sm items-center justify-between px-4"):
        with ui.row().classes("items-center gap-3"):
            ui.button(icon="menu", on_click=lambda: drawer.toggle()).props("flat round color=grey-8")
            with ui.element("div").classes("w-9 h-9 rounded-xl brand flex items-center justify-center"):
                ui.icon("auto_stories").classes("text-white")
            with ui.column().classes("gap-0"):
                ui.label("DocChat").classes("text-lg font-bold")
                ui.label("AI-powered document analysis").classes("text-xs text-gray-500")

    with ui.left_drawer(value=True).classes("bg-white/90 p-4 gap-8").props("width=320") as drawer:
        with ui.row().classes("items-center gap-3"):
            with ui.element("div").classes("w-8 h-8 rounded-lg brand flex items-center justify-center"):
                ui.icon("upload").classes("text-white")
            ui.label("Load Document").classes("text-lg font-semibold text-gray-900")
        with ui.card().classes("w-full p-5 gap-4"):
            url_input = (
                ui.input("Document URL", placeholder="https://example.com/document.pdf")
                .props("outlined dense type=url")
                .classes("w-full")
            )
            load_button = ui.button(
                "Load Document", on_click=lambda: load(url_input.value or "")
            ).classes("w-full brand text-white")
            url_input.on("keydown.enter", lambda: load(url_input.value or ""))
            ui.separator()
            ui.label("Supported formats:").classes("text-sm font-medium text-gray-700")
            with ui.row().classes("w-full justify-between"):
                for icon, label, color in FORMAT_HINTS:
                    with ui.row().classes("items-center gap-1"):
                        ui.icon(icon).classes(color)
                        ui.label(label).classes("text-xs text-gray-600")
        with ui.scroll_area().classes("w-full h-[400px]"):
            history_list()

    with ui.row().classes("w-full h-[calc(100vh-5rem)] gap-0 no-wrap"):
        with ui.column().classes("flex-grow h-full gap-0 bg-white/70 border-r"):
            document_view()

        with ui.column().classes("w-96 h-full gap-0 bg-white/70 shadow-lg"):
            with ui.row().classes("w-full p-4 border-b items-center gap-3"):
                with ui.element("div").classes(
                    "w-8 h-8 rounded-lg avatar-assistant flex items-center justify-center"
                ):
                    ui.icon("smart_toy").classes("text-white")
                ui.label("AI Assistant").classes("font-semibold text-gray-900")
            selection_box()
            quick_actions()
            error_banner()
            with ui.scroll_area().classes("flex-grow w-full p-4"):
                with ui.column().classes("w-full gap-4"):
                    chat_messages()
            chat_input()


def main() -> None:
    ui.run(
        title="DocChat",
        port=8080,
        reload=False,
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "docchat-secret"),
    )


if __name__ == "__main__":
    main()
