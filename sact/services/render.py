"""Text rendering of the browser state.

Pure functions of Session; widgets only decide where the text goes.
Output is Rich markup, so user data is escaped before it is embedded.
"""

from __future__ import annotations

from rich.markup import escape

from ..models.resource import ZONES, DetailRecord, ListItem
from ..models.session import Mode, Session

# Column widths for list rows
NAME_WIDTH = 32
ID_WIDTH = 14
STATUS_WIDTH = 12


def _fit(text: str, width: int) -> str:
    """Pad or truncate to exactly `width` cells."""
    if len(text) > width:
        return text[: width - 1] + "…"
    return text.ljust(width)


def render_zone_strip(session: Session) -> str:
    """Zones with the current one highlighted; "global" for unzoned types."""
    if session.resource_type.is_global:
        return "[bold]global[/bold]"
    parts = []
    for zone in ZONES:
        if zone == session.zone:
            parts.append(f"[reverse] {zone} [/reverse]")
        else:
            parts.append(f"[dim] {zone} [/dim]")
    return "".join(parts)


def render_header(session: Session) -> str:
    account = escape(session.account_name) if session.account_name else "-"
    label = escape(session.resource_type.label)
    return f"[bold]sact[/bold]  account: {account}  zone: {render_zone_strip(session)}  type: [bold]{label}[/bold]"


def render_search_status(session: Session) -> str:
    """Search line: the query being typed, or the match position after commit.

    Empty when there is no search or the committed query is empty.
    """
    search = session.search
    if search is None:
        return ""
    if search.composing:
        return f"/{escape(search.query)}█"
    if not search.query:
        return ""
    if not search.has_matches:
        return f"Search: {escape(search.query)} [dim](0 matches)[/dim]"
    return f"Search: {escape(search.query)} ({search.current_match_pos + 1}/{len(search.matches)})"


def render_error(session: Session) -> str:
    if session.error is None:
        return ""
    return f"[bold red]Error:[/bold red] {escape(session.error)}"


def render_row(item: ListItem, selected: bool = False, matched: bool = False) -> str:
    """One list row: marker, name, id, status, summary."""
    marker = "▸" if selected else " "
    text = (
        f"{marker} {_fit(item.name or '-', NAME_WIDTH)} {_fit(item.id, ID_WIDTH)} "
        f"{_fit(item.status, STATUS_WIDTH)} {item.summary}"
    )
    text = escape(text.rstrip())
    if selected:
        return f"[reverse]{text}[/reverse]"
    if matched:
        return f"[yellow]{text}[/yellow]"
    return text


def render_list(session: Session) -> list[str]:
    """All list lines, including the loading and empty placeholders."""
    if session.loading and not session.items:
        return [f"[dim]Loading {escape(session.resource_type.label)}...[/dim]"]
    if not session.items:
        return [f"[dim]No {escape(session.resource_type.label)} resources in {session.zone_label}[/dim]"]

    matched = set(session.search.matches) if session.search is not None else set()
    lines = [
        render_row(item, selected=i == session.cursor_index, matched=i in matched)
        for i, item in enumerate(session.items)
    ]
    if session.loading:
        lines.insert(0, "[dim]Refreshing...[/dim]")
    return lines


def render_detail(record: DetailRecord) -> str:
    """Full detail text for one resource."""
    lines = [
        f"[bold]{escape(record.name or record.id)}[/bold]  [dim]{escape(record.resource_type.label)}[/dim]",
        "",
        f"  ID:          {escape(record.id)}",
    ]
    if record.status:
        lines.append(f"  Status:      {escape(record.status)}")
    if record.zone:
        lines.append(f"  Zone:        {escape(record.zone)}")
    if record.description:
        lines.append(f"  Description: {escape(record.description)}")
    if record.tags:
        lines.append(f"  Tags:        {escape(', '.join(record.tags))}")

    if record.fields:
        lines.append("")
        width = max(len(label) for label, _ in record.fields) + 1
        for label, value in record.fields:
            lines.append(f"  {escape((label + ':').ljust(width))} {escape(value)}")

    for section in record.sections:
        lines.append("")
        lines.append(f"[bold]{escape(section.title)}[/bold]")
        if not section.rows:
            lines.append("  [dim](none)[/dim]")
            continue
        widths = [len(col) for col in section.columns]
        for row in section.rows:
            for i, cell in enumerate(row[: len(widths)]):
                widths[i] = max(widths[i], len(cell))
        header = "  ".join(col.ljust(widths[i]) for i, col in enumerate(section.columns))
        lines.append(f"  [dim]{escape(header.rstrip())}[/dim]")
        for row in section.rows:
            cells = "  ".join(cell.ljust(widths[i]) for i, cell in enumerate(row[: len(widths)]))
            lines.append(f"  {escape(cells.rstrip())}")

    return "\n".join(lines)


def render_detail_view(session: Session) -> str:
    """Detail pane text for the current mode (empty outside detail)."""
    if session.mode == Mode.DETAIL_LOADING:
        return "[dim]Loading details...[/dim]"
    if session.mode == Mode.DETAIL_SHOWN and session.detail.record is not None:
        return render_detail(session.detail.record)
    return ""


def render_hints(session: Session) -> str:
    """Key hints for the footer line."""
    mode = session.mode
    if mode == Mode.SEARCH_COMPOSING:
        return "enter search  esc cancel"
    if mode in (Mode.DETAIL_LOADING, Mode.DETAIL_SHOWN):
        return "esc/q back  ↑↓ scroll  ctrl+c quit"
    hints = "↑↓/jk move  enter detail  / search  t/T type  r refresh  ? help  q quit"
    if not session.resource_type.is_global:
        hints = "z zone  " + hints
    if session.search is not None and session.search.has_matches:
        hints = "n/N match  " + hints
    return hints
