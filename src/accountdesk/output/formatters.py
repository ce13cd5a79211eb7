"""Human and JSON rendering of ServiceResult.

Human mode prints one line per toast, then key/value data, then the
error line when the operation failed. ``--json`` dumps the model as is.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.markup import escape

from accountdesk.output.console import TOAST_ICONS, create_console, get_output, style_for_severity

if TYPE_CHECKING:
    from accountdesk.services.result import ServiceResult


def _format_value(value: Any) -> str:
    if isinstance(value, dict):
        return ", ".join(f"{k}={v}" for k, v in value.items())
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value)
    return str(value)


def format_result(
    result: ServiceResult,
    *,
    json_output: bool = False,
    quiet: bool = False,
    no_color: bool = False,
) -> str:
    """Render *result* for display.

    Args:
        json_output: Return the JSON dump instead of human text.
        quiet: Human mode prints only toasts and the error line.
        no_color: Strip ANSI styles (tests).
    """
    if json_output:
        return result.model_dump_json(indent=2)

    console = create_console(no_color=no_color)
    for toast in result.notifications:
        severity = toast.get("severity", "info")
        style = style_for_severity(severity)
        icon = TOAST_ICONS.get(severity, "-")
        text = escape(toast.get("text", ""))
        console.print(f"[{style}]{icon} {text}[/]" if style else f"{icon} {text}")

    if result.ok:
        if not quiet:
            console.print(f"[desk.ok]OK:[/] [desk.op]{result.op}[/]")
            for key, value in result.data.items():
                console.print(f"  [desk.key]{key}:[/] {escape(_format_value(value))}")
    else:
        message = result.error.message if result.error else "Unknown error"
        console.print(f"[desk.error]ERROR:[/] [desk.op]{result.op}[/] - {escape(message)}")
        if result.error and result.error.detail and not quiet:
            for key, value in result.error.detail.items():
                console.print(f"  [desk.key]{key}:[/] {escape(_format_value(value))}")

    return get_output(console).rstrip("\n")
