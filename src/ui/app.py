"""
VoiceScribe Streamlit UI: main entry point.

Run with: ``streamlit run src/ui/app.py``
"""

# ---------------------------------------------------------------------------
# Ensure project root is on sys.path so ``from src.xxx`` imports work.
# Streamlit replaces sys.path[0] with the script directory (src/ui/),
# which removes the project root needed for absolute ``src.*`` imports.
# ---------------------------------------------------------------------------
import sys  # noqa: E402
from pathlib import Path  # noqa: E402

_project_root = str(Path(__file__).resolve().parent.parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

import streamlit as st  # noqa: E402

from src.core.config import get_settings  # noqa: E402
from src.core.logging import configure_logging  # noqa: E402
from src.ui.api_client import get_api_client  # noqa: E402
from src.ui.components.voice_input import render_voice_input  # noqa: E402

# ---------------------------------------------------------------------------
# Page config (must be first Streamlit call)
# ---------------------------------------------------------------------------
st.set_page_config(
    page_title="VoiceScribe",
    page_icon="\U0001f399️",
    layout="centered",
)

_settings = get_settings()
configure_logging(_settings.log_level)

if "api_base_url" not in st.session_state:
    st.session_state.api_base_url = _settings.api_base_url

# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------
with st.sidebar:
    st.title("\U0001f399️ VoiceScribe")
    st.caption("Speak, and let Gemini write it down")
    st.divider()
    st.session_state.api_base_url = st.text_input(
        "Gateway URL",
        value=st.session_state.api_base_url,
        help="URL of the VoiceScribe FastAPI gateway (default: http://localhost:3000)",
    )

    # Connection status indicator
    _client = get_api_client(st.session_state.api_base_url)
    _conn_ok, _conn_msg = _client.check_connection()
    if _conn_ok:
        st.success(f"Gateway: {_conn_msg}")
    else:
        st.error(f"Gateway: {_conn_msg}")

# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------
st.header("Voice Input")
render_voice_input()
