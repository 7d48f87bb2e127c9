"""
Streamlit chat UI for the MCP Chat Relay.

Run with ``streamlit run src/presentation/ui/app.py`` while the API is
being served. All state lives in a :class:`ChatStore` kept in the
Streamlit session, one per browser tab.
"""

import httpx
import streamlit as st

from src.infrastructure.config.logging_config import setup_logging
from src.infrastructure.config.settings import get_settings
from src.presentation.ui.chat_store import ChatStore
from src.presentation.ui.hints import connection_hint

SETUP_INSTRUCTIONS = """
**Important Setup Instructions:**
1. Create a `.env` file in your project root
2. Add your API key: `GEMINI_API_KEY=your_key_here`
3. Restart the API server after adding the key
4. Make sure your MCP server script is properly implemented
"""

PATH_EXAMPLES = """
Example formats (notice forward slashes for Windows paths):
- `node G:/path/to/script.js`
- `node ./relative/path/script.js`
- `python C:/Users/name/script.py`
"""

settings = get_settings()
setup_logging(settings.log_level, settings.log_file)


@st.cache_resource
def get_relay_client() -> httpx.Client:
    """One connection pool shared by every browser session."""
    return httpx.Client(base_url=settings.relay_url, timeout=None)


def get_store() -> ChatStore:
    if "store" not in st.session_state:
        st.session_state["store"] = ChatStore(http=get_relay_client())
    return st.session_state["store"]


def render_connection(store: ChatStore) -> None:
    st.subheader("MCP Server Connection")
    st.info(SETUP_INSTRUCTIONS)

    error = st.session_state.get("connection_error")
    if error:
        st.error(error)

    if not store.is_connected:
        with st.form("connect"):
            server_path = st.text_input(
                "Server Path",
                value=settings.default_server_path,
                placeholder="node path/to/script.js",
                help="Always include node or python before the script path",
            )
            submitted = st.form_submit_button(
                "Connect to Server",
                disabled=store.is_loading,
                use_container_width=True,
            )
        st.caption(PATH_EXAMPLES)

        if submitted:
            if not server_path.strip():
                st.session_state["connection_error"] = "Please enter a valid server path"
            else:
                with st.spinner("Connecting..."):
                    store.connect_to_server(server_path)
                st.session_state["connection_error"] = (
                    None if store.is_connected else connection_hint(store.last_error or "")
                )
            st.rerun()
        return

    st.success("Connected to MCP server")
    if store.tools:
        st.markdown("**Available Tools:**")
        for tool in store.tools:
            st.markdown(f"- **{tool.name}**: {tool.description}")

    if st.button("Disconnect", disabled=store.is_loading, use_container_width=True):
        with st.spinner("Disconnecting..."):
            store.disconnect_from_server()
        st.session_state["connection_error"] = (
            f"Failed to disconnect: {store.last_error}" if store.is_connected else None
        )
        st.rerun()


def render_chat(store: ChatStore) -> None:
    st.subheader("Chat")

    for message in store.transcript():
        with st.chat_message(message["role"]):
            st.text(message["content"])

    placeholder = (
        "Type your message..."
        if store.is_connected
        else "Connect to an MCP server first..."
    )
    prompt = st.chat_input(
        placeholder, disabled=not store.is_connected or store.is_loading
    )
    if prompt and prompt.strip():
        with st.spinner("Processing..."):
            store.send_message(prompt)
        st.rerun()


st.set_page_config(page_title="MCP Client Chatbot", page_icon="🔌", layout="wide")
st.title("MCP Client Chatbot")
st.caption("Connect to an MCP server and start chatting with an LLM")

chat_store = get_store()

with st.sidebar:
    render_connection(chat_store)

render_chat(chat_store)

st.caption(
    "Powered by the Model Context Protocol - "
    "[Learn more](https://modelcontextprotocol.io/)"
)
