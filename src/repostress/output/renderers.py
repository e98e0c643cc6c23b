"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from repostress.output.console import create_console, get_output, style_for_type

if TYPE_CHECKING:
    from rich.console import Console

    from repostress.services.result import ServiceResult


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()
    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Minimal output for ``--quiet``: paths only."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"
    items = result.data.get("items") or result.data.get("issues")
    if isinstance(items, list):
        return "\n".join(str(item.get("path", "")) for item in items if isinstance(item, dict))
    if result.data.get("path"):
        return str(result.data["path"])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="rs.ok"), Text(f" {result.op}", style="rs.op"))


def _field(console: Console, key: str, value: Any) -> None:
    if isinstance(value, (dict, list)):
        value = _json.dumps(value, separators=(",", ":"))
    style = "rs.path" if key in ("path", "source", "base_path") else ""
    console.print(Text(f"  {key}:", style="rs.key"), Text(str(value), style=style))


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the telemetry span tree (verbose only)."""
    if not result.meta or "telemetry" not in result.meta:
        return
    console.print()
    console.print(Text("  telemetry:", style="dim"))
    _render_span(console, result.meta["telemetry"], indent=4)


def _render_span(console: Console, span: dict[str, Any], indent: int) -> None:
    duration = span.get("duration_ms", 0.0)
    style = "bold red" if duration > 1000 else "yellow" if duration > 100 else "dim"
    console.print(f"{' ' * indent}[{style}]{duration:>9.2f}ms[/{style}]  {span.get('name', '?')}")
    for child in span.get("children", []):
        _render_span(console, child, indent + 4)


# ── Renderers ─────────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    error = result.error
    message = error.message if error else "Unknown error"
    code = error.code if error else "UNKNOWN"
    console.print(Text("ERROR", style="rs.error"), Text(f" {result.op}", style="rs.op"))
    console.print(f"  {code}: {message}", markup=False)
    if verbose and error and error.detail:
        for key, value in error.detail.items():
            _field(console, key, value)


def _render_tree(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    for item in result.data.get("items", []):
        name = item["path"].rsplit("/", 1)[-1] or "/"
        line = Text("  " * item["depth"])
        line.append(name, style=style_for_type(item["type"]))
        if verbose:
            line.append(f"  [{item['type']} #{item['id']}]", style="dim")
        console.print(line)


def _render_run(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    for key in ("seed", "workers", "iterations", "executed", "succeeded", "failed", "skipped"):
        _field(console, key, d.get(key))
    _field(console, "duration_ms", d.get("duration_ms"))

    if d.get("actions"):
        table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
        table.add_column("action")
        table.add_column("ok", justify="right")
        table.add_column("failed", justify="right")
        for name, counts in d["actions"].items():
            failed = counts["failed"]
            table.add_row(name, str(counts["ok"]), Text(str(failed), style="rs.error" if failed else ""))
        console.print()
        console.print(table)

    if d.get("errors"):
        console.print()
        console.print(Text("  errors:", style="rs.warning"))
        for name, count in d["errors"].items():
            console.print(f"    {name}: {count}")

    if verbose and d.get("failures"):
        console.print()
        for failure in d["failures"]:
            console.print(
                f"    [{failure['worker']}] {failure['action']} {failure['path']}: "
                f"{failure['error']}: {failure['message']}",
                markup=False,
            )
    if verbose:
        _render_meta(console, result)


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "checked", d.get("checked", 0))
    _field(console, "issues", d.get("count", 0))
    for issue in d.get("issues", []):
        console.print(
            Text(f"    {issue['kind']}", style="rs.warning"),
            Text(f" {issue['path']}", style="rs.path"),
            Text(f" {issue['message']}"),
        )


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


_OP_RENDERERS: dict[str, Any] = {
    "tree": _render_tree,
    "run": _render_run,
    "check": _render_check,
}
