"""
Entry point.

GUI: Tkinter (stdlib).
UART: pyserial.
"""

from __future__ import annotations

import click

from app.settings import DEFAULT_SETTINGS_PATH
from comm.serial_link import SerialLink


@click.command()
@click.option("--port", default=None, help="Serial port to use instead of the remembered one")
@click.option("--settings", "settings_path", default=DEFAULT_SETTINGS_PATH, show_default=True,
              type=click.Path(dir_okay=False), help="Settings JSON file")
@click.option("--list-ports", is_flag=True, help="Print available serial ports and exit")
@click.option("--quiet", is_flag=True, help="Don't echo received/sent lines to the console")
def main(port: str | None, settings_path: str, list_ports: bool, quiet: bool) -> None:
    """Show two servo angles from an Arduino as gauges and echo them back."""
    if list_ports:
        for name in SerialLink.list_ports():
            click.echo(name)
        return

    from app.gui_app import GaugeApp

    app = GaugeApp(settings_path=settings_path, port=port, echo=not quiet)
    try:
        app.run()
    except KeyboardInterrupt:
        pass
    finally:
        app.shutdown()


if __name__ == "__main__":
    main()
