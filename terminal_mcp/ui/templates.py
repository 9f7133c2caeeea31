"""HTML templates for the terminal transcript view."""

import html as html_lib
import re

from terminal_mcp.models import TerminalLine

LINE_CLASSES = {
    "command": "line-command",
    "output": "line-output",
    "error": "line-error",
}


def minify_html(html: str) -> str:
    """Strip comments and whitespace between tags."""
    html = re.sub(r"<!--.*?-->", "", html, flags=re.DOTALL)
    html = re.sub(r">\s+<", "><", html)
    return html.strip()


def get_terminal_styles() -> str:
    return """
    <style>
        * { box-sizing: border-box; margin: 0; padding: 0; }
        body {
            background: #111827;
            color: #f3f4f6;
            font-family: ui-monospace, SFMono-Regular, Menlo, Consolas, monospace;
            font-size: 13px;
            padding: 16px;
        }
        .transcript > div { white-space: pre-wrap; word-break: break-all; }
        .line-command { color: #4ade80; font-weight: bold; }
        .line-output { color: #d1d5db; }
        .line-error { color: #f87171; }
        .cwd {
            border-top: 1px solid #374151;
            margin-top: 8px;
            padding-top: 8px;
            color: #60a5fa;
            font-size: 11px;
        }
        .cwd .session { color: #6b7280; margin-right: 8px; }
        .empty { color: #6b7280; }
    </style>
    """


def render_lines(lines: list[TerminalLine]) -> str:
    """Render transcript lines as escaped, classed ``<div>`` elements."""
    if not lines:
        return '<div class="empty">(empty transcript)</div>'
    return "\n".join(
        f'<div class="{LINE_CLASSES.get(line.kind, "line-output")}">'
        f"{html_lib.escape(line.text)}</div>"
        for line in lines
    )


def get_terminal_html(
    session_name: str,
    lines: list[TerminalLine],
    current_dir: str,
    short_dir: str,
) -> str:
    """Build the transcript page for one session.

    Args:
        session_name: Session the transcript belongs to
        lines: Transcript lines, oldest first
        current_dir: Full working directory (shown as tooltip)
        short_dir: Shortened working directory (shown inline)

    Returns:
        Minified HTML document
    """
    name = html_lib.escape(session_name)
    cwd_title = html_lib.escape(current_dir, quote=True)
    cwd_text = html_lib.escape(short_dir) if short_dir else "(unknown directory)"

    page = f"""
    <!DOCTYPE html>
    <html>
    <head>
        <meta charset="utf-8">
        <title>{name}</title>
        {get_terminal_styles()}
    </head>
    <body>
        <div class="transcript">__LINES__</div>
        <div class="cwd" title="{cwd_title}">
            <span class="session">[{name}]</span><span>{cwd_text}</span>
        </div>
    </body>
    </html>
    """
    # Transcript text is inserted after minifying so its whitespace survives
    return minify_html(page).replace("__LINES__", render_lines(lines), 1)
