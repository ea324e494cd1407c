"""NiceGUI chat page observing the conversation store."""

from datetime import datetime

from nicegui import Client, ui

from etf_chat.chat.session import ChatSession
from etf_chat.models.schemas import ConversationState, Message, Role

CUSTOM_CSS = """
<style>
    body { background: #030712; min-height: 100vh; }
    .typing-dot {
        width: 8px; height: 8px;
        background: #9ca3af;
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


def format_stamp(timestamp: str) -> str:
    """Render an ISO-8601 timestamp as local clock time."""
    try:
        return datetime.fromisoformat(timestamp).astimezone().strftime("%I:%M %p")
    except ValueError:
        return ""


@ui.page("/")
def chat_page(client: Client) -> None:
    """Main chat page.

    Each browser tab gets its own store, credentials, transport client and
    controller; they are released when the page client is deleted, not on
    a disconnect the browser may recover from.
    """
    ui.add_head_html(CUSTOM_CSS)
    session = ChatSession()
    store = session.store
    controller = session.controller

    input_field: ui.input
    send_btn: ui.button

    def render_message(msg: Message, streaming: bool) -> None:
        sent = msg.role == Role.USER
        with ui.chat_message(
            name="You" if sent else "ETF Assistant",
            sent=sent,
            stamp=format_stamp(msg.timestamp),
        ):
            if streaming and not msg.content:
                with ui.row().classes("gap-1 py-2"):
                    for _ in range(3):
                        ui.element("div").classes("typing-dot")
            else:
                ui.label(msg.content).classes("whitespace-pre-wrap")

    @ui.refreshable
    def messages_view() -> None:
        state = store.state
        last_index = len(state.messages) - 1
        for index, msg in enumerate(state.messages):
            render_message(msg, streaming=state.is_loading and index == last_index)

    def on_state(state: ConversationState) -> None:
        messages_view.refresh()
        send_btn.set_enabled(not state.is_loading)

    async def send_message() -> None:
        text = input_field.value or ""
        if not text.strip() or controller.busy:
            return
        input_field.value = ""
        await controller.send_and_stream(text)

    def new_chat() -> None:
        if not controller.busy:
            store.initialize_chat()

    # === UI Layout ===
    with ui.column().classes("w-full max-w-3xl mx-auto p-6 gap-4"):
        with ui.row().classes("w-full items-center justify-between"):
            ui.label("ETF Alert Chatbot").classes("text-2xl font-semibold text-white")
            ui.button(icon="add", on_click=new_chat).props("flat round color=white")

        with ui.column().classes("w-full gap-4 bg-gray-900 rounded-lg p-6 min-h-[300px]"):
            messages_view()

        with ui.row().classes("w-full items-center gap-2"):
            input_field = (
                ui.input(placeholder="Ask about ETFs and financial information!")
                .props("dark outlined dense")
                .classes("flex-grow")
                .on("keydown.enter", send_message)
            )
            send_btn = ui.button(icon="send", on_click=send_message).props("round unelevated")

    session.observe(on_state)
    session.bind(client)
