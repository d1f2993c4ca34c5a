"""Central CSS definitions for sact."""

# Modal base styles
MODAL_CSS = """
.modal-base {
    align: center middle;
}

.modal-base #dialog {
    height: auto;
    max-height: 90%;
    padding: 1 2;
    background: $surface;
    border: round $surface-lighten-1;
    overflow-y: auto;
}

.modal-md #dialog {
    width: 60vw;
    min-width: 50;
    max-width: 72;
}
"""

CONTAINER_CSS = """
/* Hidden containers take no space */
.hidden {
    display: none;
}
"""

COMMON_CSS = """
/* Footer hint line */
.hint {
    height: 1;
    color: $text-disabled;
    padding: 0 1;
}
"""

NOTIFICATION_CSS = """
NotificationRack {
    height: auto;
    width: 100%;
    align-horizontal: right;
}

Notification {
    width: auto;
    max-width: 80;
    height: auto;
    padding: 0 2;
    margin-right: 1;
    background: $surface;
    border: round $surface-lighten-1;
    color: $text-muted;
}

Notification.-warning {
    border: round $warning-darken-2;
    color: $warning;
}

Notification.-error {
    border: round $error-darken-2;
    color: $error;
}
"""

# Combined base CSS for import
BASE_CSS = MODAL_CSS + CONTAINER_CSS + COMMON_CSS + NOTIFICATION_CSS
