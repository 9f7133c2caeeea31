"""UI resource generators."""

from mcp_ui_server import create_ui_resource
from mcp_ui_server.core import UIResource

from terminal_mcp.services.session import TerminalSession
from terminal_mcp.ui.templates import get_terminal_html


def create_terminal_ui(session: TerminalSession) -> UIResource:
    """Render a session transcript as a rawHtml UIResource.

    Args:
        session: Session to render

    Returns:
        UIResource addressed as ``ui://terminal/<session>``
    """
    html = get_terminal_html(
        session.name,
        session.lines,
        session.current_dir,
        session.short_dir,
    )
    return create_ui_resource({
        "uri": f"ui://terminal/{session.name}",
        "content": {"type": "rawHtml", "htmlString": html},
        "encoding": "text",
    })
