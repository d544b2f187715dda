"""NiceGUI chat interface with SSE streaming support."""

import os
from collections.abc import Callable
from typing import Any

import httpx
from nicegui import ui

from deepsearch.models.schemas import Message, StreamEvent, StreamEventType
from deepsearch.ui.rendering import render_message
from deepsearch.ui.session import ChatSession

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #030712; color: #d1d5db; min-height: 100vh; }

    .app-container {
        background: #111827;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.4);
        overflow: hidden;
    }

    .typing-dot {
        width: 8px; height: 8px;
        background: #60a5fa;
        border-radius: 50%;
        animation: bounce 1.4s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.2s; }
    .typing-dot:nth-child(3) { animation-delay: 0.4s; }

    @keyframes bounce {
        0%, 60%, 100% { transform: translateY(0); }
        30% { transform: translateY(-6px); }
    }

    .prose pre code { font-family: 'Menlo', 'Monaco', monospace; }
</style>
"""


async def request_session(name: str, password: str) -> dict[str, str] | None:
    """Sign in against /api/auth/login.

    Returns:
        Session cookies, or None if the credentials were rejected.

    Raises:
        httpx.HTTPError: If the API is unreachable or fails.
    """
    async with httpx.AsyncClient(timeout=30.0) as client:
        response = await client.post(
            f"{API_BASE_URL}/api/auth/login",
            json={"name": name, "password": password},
        )
        if response.status_code == httpx.codes.UNAUTHORIZED:
            return None
        response.raise_for_status()
        return dict(response.cookies)


async def stream_chat_response(
    messages: list[dict[str, Any]],
    cookies: dict[str, str],
    on_event: Callable[[StreamEvent], None],
    on_error: Callable[[str], None],
) -> None:
    """Consume SSE stream from /api/chat endpoint."""
    async with httpx.AsyncClient(timeout=120.0, cookies=cookies) as client:
        try:
            async with client.stream(
                "POST",
                f"{API_BASE_URL}/api/chat",
                json={"messages": messages},
                headers={"Accept": "text/event-stream"},
            ) as response:
                response.raise_for_status()
                async for line in response.aiter_lines():
                    if not line.startswith("data: "):
                        continue
                    event = StreamEvent.model_validate_json(line[6:])
                    on_event(event)
                    if event.done:
                        return
        except httpx.HTTPStatusError as e:
            on_error(f"HTTP {e.response.status_code}")
        except httpx.RequestError as e:
            on_error(f"Connection failed: {e}")


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    ui.dark_mode().enable()
    session = ChatSession()

    login_view: ui.column
    chat_view: ui.column
    messages_container: ui.column
    name_field: ui.input
    password_field: ui.input
    input_field: ui.textarea
    send_btn: ui.button

    def render(msg: Message) -> ui.html:
        return ui.html(
            render_message(msg.role, session.user_name or "You", msg.parts),
            sanitize=False,
        ).classes("w-full")

    def refresh_messages() -> None:
        messages_container.clear()
        with messages_container:
            if not session.messages:
                with ui.column().classes("w-full h-64 items-center justify-center gap-3"):
                    ui.icon("travel_explore").classes("text-5xl text-gray-600")
                    ui.label("Ask anything. Answers cite the web.").classes(
                        "text-lg text-gray-500"
                    )
            else:
                for msg in session.messages:
                    render(msg)

    def show_views() -> None:
        login_view.set_visibility(not session.signed_in)
        chat_view.set_visibility(session.signed_in)

    async def sign_in() -> None:
        name = (name_field.value or "").strip()
        password = password_field.value or ""
        if not name or not password:
            ui.notify("Enter a name and password", type="warning")
            return

        try:
            cookies = await request_session(name, password)
        except httpx.HTTPError as e:
            ui.notify(f"Sign in failed: {e}", type="negative")
            return

        if cookies is None:
            ui.notify("Invalid credentials", type="negative")
            return

        password_field.value = ""
        session.sign_in(name, cookies)
        refresh_messages()
        show_views()

    def sign_out() -> None:
        session.sign_out()
        show_views()

    def render_status_indicator() -> ui.row:
        """Render the typing indicator shown until the first event arrives."""
        with ui.row().classes("w-full justify-start px-4") as row:
            with ui.row().classes("items-center gap-2"):
                with ui.row().classes("gap-1"):
                    for _ in range(3):
                        ui.element("div").classes("typing-dot")
                ui.label("Searching...").classes("text-sm text-gray-500 italic")
        return row

    async def send_message() -> None:
        text = (input_field.value or "").strip()
        if not text or session.is_streaming:
            return

        input_field.value = ""
        session.is_streaming = True
        send_btn.disable()

        session.add_user_message(text)
        payload = session.history_payload()
        assistant = Message(role="assistant")
        refresh_messages()

        with messages_container:
            status_row = render_status_indicator()

        response_html: ui.html | None = None

        def show_assistant() -> None:
            nonlocal response_html
            if not assistant.parts:
                return
            if response_html is None:
                status_row.delete()
                session.messages.append(assistant)
                with messages_container:
                    response_html = render(assistant)
            else:
                response_html.set_content(
                    render_message(assistant.role, session.user_name or "You", assistant.parts)
                )

        def on_event(event: StreamEvent) -> None:
            ChatSession.apply_event(assistant, event)
            show_assistant()
            if event.type == StreamEventType.ERROR and event.error:
                ui.notify(event.error, type="negative")

        def on_error(error: str) -> None:
            on_event(StreamEvent(type=StreamEventType.ERROR, error=error, done=True))

        await stream_chat_response(payload, session.cookies, on_event, on_error)

        if response_html is None:
            status_row.delete()
        session.is_streaming = False
        send_btn.enable()
        refresh_messages()

    def new_chat() -> None:
        session.new_chat()
        refresh_messages()

    # === UI Layout ===
    with (
        ui.element("div").classes("w-full min-h-screen p-4 md:p-8"),
        ui.column().classes("w-full max-w-3xl mx-auto app-container").style(
            "height: calc(100vh - 4rem)"
        ),
    ):
        # Header
        with ui.row().classes("w-full px-5 py-4 items-center justify-between border-b border-gray-800"):
            with ui.row().classes("items-center gap-3"):
                ui.icon("travel_explore").classes("text-blue-400 text-3xl")
                ui.label("Deepsearch").classes("text-lg font-semibold text-gray-200")
            with ui.row().classes("items-center gap-2"):
                ui.label().bind_text_from(
                    session, "user_name", lambda name: name or ""
                ).classes("text-xs text-gray-400")
                ui.button(icon="add", on_click=new_chat).props("flat round color=grey")
                ui.button(icon="logout", on_click=sign_out).props("flat round color=grey")

        # Sign in
        with ui.column().classes("w-full flex-grow items-center justify-center") as login_view:
            with ui.card().classes("w-80 bg-gray-900"):
                ui.label("Sign in").classes("text-lg font-semibold text-gray-200")
                name_field = ui.input("Name").classes("w-full")
                password_field = (
                    ui.input("Password", password=True)
                    .classes("w-full")
                    .on("keydown.enter", sign_in)
                )
                ui.button("Sign in", on_click=sign_in).classes("w-full")

        # Chat
        with ui.column().classes("w-full flex-grow gap-0") as chat_view:
            with (
                ui.scroll_area().classes("flex-grow w-full"),
                ui.column().classes("w-full p-5"),
            ):
                messages_container = ui.column().classes("w-full gap-0")
                refresh_messages()

            with ui.row().classes("w-full p-4 gap-3 items-end border-t border-gray-800"):
                with ui.element("div").classes("flex-grow px-3 py-2 rounded-lg bg-gray-800"):
                    input_field = (
                        ui.textarea(placeholder="Ask a question...")
                        .props("autogrow borderless dense rows=1 dark")
                        .classes("w-full")
                        .on("keydown.enter.prevent", send_message)
                    )
                send_btn = ui.button(icon="send", on_click=send_message).props("round unelevated")

    show_views()


def main() -> None:
    ui.run(title="Deepsearch", port=8080, reload=False)


if __name__ == "__main__":
    main()
