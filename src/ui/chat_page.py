"""NiceGUI chat page on top of ChatSessionClient.

The page only calls documented client operations and redraws whenever the
client's revision changes. It holds no conversation state of its own.
"""

import logging

from nicegui import ui

from src.client import BackendError, ChatSessionClient, NoActiveSession
from src.models.schemas import SessionSummary
from src.ui.view_models import MessageView, message_view, session_title

logger = logging.getLogger(__name__)

REFRESH_INTERVAL = 0.1

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #f5f5f5; min-height: 100vh; }

    .header { background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); }

    .message-user {
        background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
        color: white;
        border-radius: 18px 18px 4px 18px;
    }

    .message-assistant {
        background: #f3f4f6;
        color: #1f2937;
        border-radius: 18px 18px 18px 4px;
    }

    .message-system {
        background: #fef2f2;
        color: #b91c1c;
        border: 1px solid #fecaca;
        border-radius: 12px;
    }

    .session-active { background: rgba(102, 126, 234, 0.12); }

    .typing-dot {
        width: 8px; height: 8px;
        background: #667eea;
        border-radius: 50%;
        animation: bounce 1.4s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.2s; }
    .typing-dot:nth-child(3) { animation-delay: 0.4s; }

    @keyframes bounce {
        0%, 60%, 100% { transform: translateY(0); }
        30% { transform: translateY(-6px); }
    }
</style>
"""


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    client = ChatSessionClient()
    sessions: list[SessionSummary] = []
    rendered_revision = -1

    sessions_container: ui.column
    messages_container: ui.column
    scroll_area: ui.scroll_area
    error_banner: ui.label
    input_field: ui.textarea

    def render_avatar(is_user: bool) -> None:
        icon = "person" if is_user else "smart_toy"
        color = "bg-indigo-500" if is_user else "bg-gray-500"
        with ui.element("div").classes(
            f"w-9 h-9 rounded-full flex items-center justify-center {color}"
        ):
            ui.icon(icon).classes("text-white text-lg")

    def render_message(view: MessageView) -> None:
        is_user = view.bubble == "message-user"
        with ui.row().classes(f"w-full {view.align} gap-3 items-end"):
            if view.show_avatar and not is_user:
                render_avatar(False)
            with ui.column().classes("max-w-[70%] gap-1"):
                with ui.element("div").classes(f"px-4 py-3 {view.bubble}"):
                    if view.markdown:
                        ui.markdown(view.text).classes("text-sm leading-relaxed")
                    else:
                        ui.label(view.text).classes("text-sm whitespace-pre-wrap")
                ui.label(view.time).classes("text-[10px] text-gray-400")
            if view.show_avatar and is_user:
                render_avatar(True)

    def render_typing_indicator() -> None:
        with ui.row().classes("w-full justify-start gap-3 items-end"):
            render_avatar(False)
            with ui.element("div").classes("message-assistant px-4 py-3"):
                with ui.row().classes("gap-1"):
                    for _ in range(3):
                        ui.element("div").classes("typing-dot")

    def refresh_messages() -> None:
        nonlocal rendered_revision
        rendered_revision = client.revision

        error_banner.set_text(client.error or "")
        error_banner.set_visibility(client.error is not None)

        messages_container.clear()
        with messages_container:
            messages = client.messages
            if not messages and not client.waiting:
                with ui.column().classes("w-full h-64 items-center justify-center gap-3"):
                    ui.icon("forum").classes("text-5xl text-gray-300")
                    ui.label("How can I help?").classes("text-lg text-gray-400")
            for message in messages:
                render_message(message_view(message))
            if client.waiting:
                render_typing_indicator()
        scroll_area.scroll_to(percent=1.0)

    def refresh_if_changed() -> None:
        if client.revision != rendered_revision:
            refresh_messages()

    def refresh_sessions() -> None:
        sessions_container.clear()
        with sessions_container:
            if not sessions:
                ui.label("No previous chats").classes("text-sm text-gray-400 p-4")
            for session in sessions:
                active = "session-active" if session.session_id == client.session_id else ""
                with ui.row().classes(
                    f"w-full items-center gap-2 px-3 py-2 rounded cursor-pointer {active}"
                ).on("click", lambda s=session.session_id: open_session(s)):
                    ui.icon("chat_bubble_outline").classes("text-gray-500")
                    ui.label(session_title(session)).classes("flex-grow text-sm truncate")
                    ui.button(icon="delete").props("flat round dense size=sm").on(
                        "click.stop", lambda s=session.session_id: delete_session(s)
                    )

    async def load_sessions() -> None:
        nonlocal sessions
        try:
            sessions = await client.sessions.list_sessions()
        except BackendError as e:
            logger.warning(f"Could not list sessions: {e}")
            ui.notify(f"Could not load chats: {e.message}", type="negative")
        refresh_sessions()

    async def open_session(session_id: str) -> None:
        client.connect(session_id)
        refresh_sessions()
        try:
            await client.load_message_history(session_id)
        except BackendError as e:
            ui.notify(f"Could not load history: {e.message}", type="negative")

    async def new_chat() -> None:
        try:
            session_id = await client.sessions.create_session()
        except BackendError as e:
            ui.notify(f"Could not start a chat: {e.message}", type="negative")
            return
        client.connect(session_id)
        await load_sessions()

    async def delete_session(session_id: str) -> None:
        try:
            await client.sessions.delete_session(session_id)
        except BackendError as e:
            ui.notify(f"Could not delete chat: {e.message}", type="negative")
            return
        if session_id == client.session_id:
            client.close()
        await load_sessions()

    async def send_message() -> None:
        text = input_field.value or ""
        if not text.strip():
            return
        input_field.value = ""
        try:
            await client.send_message(text)
        except NoActiveSession:
            ui.notify("Start a new chat first", type="warning")

    # === UI Layout ===
    with ui.row().classes("w-full h-screen no-wrap gap-0"):
        # Sidebar
        with ui.column().classes("w-64 h-full bg-white border-r gap-0"):
            with ui.row().classes("w-full px-4 py-4 items-center justify-between"):
                ui.label("New chat").classes("text-md font-medium")
                ui.button(icon="edit", on_click=new_chat).props("flat round dense")
            with ui.scroll_area().classes("flex-grow w-full"):
                sessions_container = ui.column().classes("w-full gap-1 px-2")

        # Conversation
        with ui.column().classes("flex-grow h-full gap-0"):
            with ui.row().classes("w-full header px-5 py-4 items-center"):
                ui.icon("smart_toy").classes("text-white text-3xl")
                ui.label("Chat").classes("text-lg font-semibold text-white")

            error_banner = ui.label().classes(
                "w-full bg-red-100 text-red-700 px-5 py-2 text-sm"
            )
            error_banner.set_visibility(False)

            with ui.scroll_area().classes("flex-grow w-full bg-gray-50") as scroll_area:
                messages_container = ui.column().classes("w-full gap-4 p-5")

            with ui.row().classes("w-full p-4 gap-3 items-end bg-white border-t"):
                input_field = (
                    ui.textarea(placeholder="Type a message...")
                    .props("autogrow outlined dense rows=1")
                    .classes("flex-grow")
                    .on("keydown.enter.prevent", send_message)
                )
                ui.button(icon="send", on_click=send_message).props("round unelevated")

    refresh_messages()
    refresh_sessions()
    ui.timer(REFRESH_INTERVAL, refresh_if_changed)
    ui.timer(0.0, new_chat, once=True)
    ui.context.client.on_disconnect(client.aclose)

