"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op``; unknown ops fall through to a
generic key-value renderer. Failed results always get the error line,
followed by the op's payload when it carries something worth showing
(check issues, blocking dependants).
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from layerctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from layerctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)
        detail_renderer = _FAILURE_RENDERERS.get(result.op)
        if detail_renderer is not None and result.data:
            detail_renderer(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode: names only."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    items = result.data.get("items")
    if items and isinstance(items, list):
        return "\n".join(name for item in items if (name := _extract_name(item)))

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _extract_name(item: Any) -> str:
    if isinstance(item, dict):
        for key in ("name", "instance_name", "instance"):
            val = item.get(key)
            if val:
                return str(val)
    return ""


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="lc.ok"), Text(f"  {result.op}", style="lc.op"))


def _field(console: Console, key: str, value: Any) -> None:
    k = Text(f"  {key}: ", style="lc.key")
    if isinstance(value, (dict, list)):
        v = Text(json.dumps(value, separators=(",", ":")))
    elif key in ("name", "layer"):
        v = Text(str(value), style="lc.layer")
    elif key == "instance":
        v = Text(str(value), style="lc.instance")
    else:
        v = Text(str(value))
    console.print(Text.assemble(k, v))


def _qualified(layer: str, instance: str) -> Text:
    return Text.assemble((str(layer), "lc.layer"), "/", (str(instance), "lc.instance"))


def _layer_table(items: list[dict[str, Any]], *, numbered: bool = False) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    if numbered:
        table.add_column("#", style="dim", justify="right")
    table.add_column("Layer", style="lc.layer", no_wrap=True)
    table.add_column("Dependencies")
    for index, item in enumerate(items, start=1):
        row = [
            Text(str(item.get("name", ""))),
            Text(", ".join(item.get("dependencies", [])) or "-"),
        ]
        if numbered:
            row.insert(0, Text(str(index)))
        table.add_row(*row)
    return table


def _instance_table(items: list[dict[str, Any]]) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Layer", style="lc.layer", no_wrap=True)
    table.add_column("Instance", style="lc.instance", no_wrap=True)
    table.add_column("Built on")
    table.add_column("Status")
    for item in items:
        parents = item.get("dependencies_instance", {})
        built_on = ", ".join(f"{layer}={inst}" for layer, inst in parents.items()) or "-"
        table.add_row(
            Text(str(item.get("definition_name", ""))),
            Text(str(item.get("instance_name", ""))),
            Text(built_on),
            Text(str(item.get("status", ""))),
        )
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="lc.error"), Text(result.op, style="lc.op"), "—", Text(msg)
    )

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Op renderers ──────────────────────────────────────────────────────


def _render_layer_list(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    if not items:
        console.print("No layers defined.")
        return
    console.print(_layer_table(items))
    console.print(f"\n{result.data.get('count', len(items))} layers")


def _render_layer(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "name", d.get("name", ""))
    _field(console, "dependencies", ", ".join(d.get("dependencies", [])) or "-")
    _field(console, "dependants", ", ".join(d.get("dependants", [])) or "-")


def _render_resolve(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    layer = str(result.data.get("layer", ""))
    if not items:
        console.print(Text.assemble("Layer ", (layer, "lc.layer"), " has no dependencies."))
        return
    console.print(Text.assemble("Dependencies of ", (layer, "lc.layer"), " in resolution order:"))
    console.print(_layer_table(items, numbered=True))


def _render_update(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "count", result.data.get("count", 0))
    if verbose:
        _field(console, "names", ", ".join(result.data.get("names", [])))


def _render_instances(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    if not items:
        console.print("No instances found.")
        return
    console.print(_instance_table(items))
    console.print(f"\n{result.data.get('count', len(items))} instances")


def _render_dependants(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    items = d.get("items", [])
    if not items:
        if result.ok:
            console.print(
                Text.assemble(
                    ("OK", "lc.ok"),
                    "  No dependants: ",
                    _qualified(d.get("layer", ""), d.get("instance", "")),
                    " can be deleted.",
                )
            )
        return
    for item in items:
        console.print(Text.assemble("  ", _qualified(item["layer"], item["instance"])))


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    issues = result.data.get("issues", [])
    if not issues:
        layers = result.data.get("layers", 0)
        console.print(Text.assemble(("OK", "lc.ok"), f"  {layers} layers, no issues found."))
        return
    for issue in issues:
        console.print(
            Text.assemble("  ", (issue.get("code", ""), "lc.error"), ": ", issue.get("message", ""))
        )
    console.print(f"\n{len(issues)} issues")


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


# ── Dispatch tables ───────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "list_layers": _render_layer_list,
    "get_layer": _render_layer,
    "resolve": _render_resolve,
    "update_layers": _render_update,
    "list_instances": _render_instances,
    "dependants": _render_dependants,
    "check": _render_check,
}

_FAILURE_RENDERERS: dict[str, Any] = {
    "dependants": _render_dependants,
    "check": _render_check,
}
