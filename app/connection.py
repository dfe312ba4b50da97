"""
Connect/Disconnect control.

Kept free of Tk so the toggle rules can be exercised without a display:
the port chooser is passed in as a callable.
"""

from __future__ import annotations
from typing import Any, Callable, Optional, Protocol

from app.settings import ComConfig

LABEL_CONNECT = "Connect to Arduino"
LABEL_DISCONNECT = "Disconnect"


class Link(Protocol):
    is_open: bool

    def open(self, port: str, baud: int) -> None: ...
    def close(self) -> None: ...
    def list_ports(self) -> list[str]: ...


def button_label(is_open: bool) -> str:
    return LABEL_DISCONNECT if is_open else LABEL_CONNECT


def remembered_port(link: Link, com: ComConfig) -> Optional[str]:
    """Saved port if it is currently present, else None."""
    if not com.port:
        return None
    if com.port not in set(link.list_ports()):
        return None
    return com.port


def auto_connect(link: Link, com: ComConfig) -> bool:
    """Startup: open the remembered port, never prompt."""
    port = remembered_port(link, com)
    if port is None:
        return False
    link.open(port, com.baud)
    return link.is_open


def toggle_connection(
    link: Link,
    com: ComConfig,
    choose_port: Callable[[str], Optional[str]],
    on_remember: Optional[Callable[[ComConfig], None]] = None,
) -> Optional[str]:
    """
    Click handler. Open -> close. Closed -> remembered port, or ask the chooser
    (called with the current port as a hint; returns None on cancel).
    Returns the port an open was attempted on, None if nothing was opened.
    """
    if link.is_open:
        link.close()
        return None

    port = remembered_port(link, com)
    if port is None:
        port = choose_port(com.port)
        if not port:
            return None

    link.open(port, com.baud)
    if link.is_open and port != com.port:
        com.port = port
        if on_remember is not None:
            on_remember(com)
    return port


def link_status_text(link: Any) -> str:
    """Status line next to the connect button: line counters of the link."""
    return f"RX {link.rx_lines}  TX {link.tx_lines}  dropped {link.rx_dropped}"
