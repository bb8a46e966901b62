"""Command-line entry point that shows the headset stream in the terminal."""

from __future__ import annotations

import argparse
import os
import sys
import threading
import time
from collections.abc import Iterable, Iterator

from rich.console import Console
from rich.live import Live
from rich.text import Text

from .dataparser import POLL_INTERVAL, DataParser
from .icd import DataSourceType
from .localfile import LocalFile
from .mainwidget import Viewer
from .retriever import Retriever, SerialSettings, available_ports
from .simulator import TICK_INTERVAL, Simulator

_SOURCES = {
    "sim": DataSourceType.SIM,
    "com": DataSourceType.COM,
    "local": DataSourceType.LOCAL,
}


def build_arg_parser() -> argparse.ArgumentParser:
    """Return the parser for the command-line options."""
    parser = argparse.ArgumentParser(
        prog="mindviewer", description="Show brainwave headset data in the terminal."
    )
    parser.add_argument("--source", choices=sorted(_SOURCES), help="where the data comes from")
    parser.add_argument("--file", help="capture file to replay with --source local")
    parser.add_argument("--port", help="serial device to read with --source com")
    parser.add_argument("--baudrate", type=int, default=57600)
    parser.add_argument("--bytesize", type=int, default=8, choices=(5, 6, 7, 8))
    parser.add_argument("--stopbits", type=float, default=1, choices=(1, 1.5, 2))
    parser.add_argument(
        "--parity", type=int, default=0, help="0 none, 1 even, 2 odd, 3 space, 4 mark"
    )
    parser.add_argument(
        "--flow-control", type=int, default=0, choices=(0, 1, 2),
        help="0 none, 1 hardware, 2 software",
    )
    parser.add_argument("--save", action="store_true", help="keep the serial capture file")
    parser.add_argument("--duration", type=float, help="stop after this many seconds")
    parser.add_argument("--refresh", type=float, default=0.1, help="screen refresh interval")
    parser.add_argument("--no-live", action="store_true", help="print the view once at the end")
    parser.add_argument("--list-ports", action="store_true", help="list serial ports and exit")
    return parser


def _serial_chunks(retriever: Retriever, stop: threading.Event) -> Iterator[bytes]:
    while not stop.is_set():
        yield retriever.read()


def _feed(
    chunks: Iterable[bytes], parser: DataParser, stop: threading.Event, delay: float
) -> None:
    for chunk in chunks:
        parser.feed(chunk)
        if stop.wait(delay) if delay else stop.is_set():
            break


def main(argv: list[str] | None = None) -> int:
    """Run the viewer until the duration passes or the user interrupts it."""
    arg_parser = build_arg_parser()
    args = arg_parser.parse_args(argv)

    if args.list_ports:
        for name in available_ports():
            print(name)
        return 0
    if args.source is None:
        arg_parser.error("--source is required")
    source = _SOURCES[args.source]
    if source is DataSourceType.LOCAL and not args.file:
        arg_parser.error("--source local needs --file")
    if source is DataSourceType.COM and not args.port:
        arg_parser.error("--source com needs --port")

    stop = threading.Event()
    retriever: Retriever | None = None
    if source is DataSourceType.SIM:
        chunks: Iterable[bytes] = Simulator()
        delay = TICK_INTERVAL
    elif source is DataSourceType.LOCAL:
        if not os.path.isfile(args.file):
            print(f"cannot open file: {args.file}", file=sys.stderr)
            return 1
        chunks = LocalFile(args.file).packets()
        delay = 0.0
    else:
        try:
            settings = SerialSettings(
                args.port,
                baudrate=args.baudrate,
                bytesize=args.bytesize,
                stopbits=args.stopbits,
                parity=args.parity,
                flow_control=args.flow_control,
            )
        except ValueError as exc:
            arg_parser.error(str(exc))
        retriever = Retriever(settings)
        try:
            retriever.open()
        except OSError as exc:
            print(str(exc), file=sys.stderr)
            return 1
        chunks = _serial_chunks(retriever, stop)
        delay = POLL_INTERVAL

    parser = DataParser()
    viewer = Viewer(parser)
    view_lock = threading.Lock()
    viewer.select_source(source)

    def show(packet) -> None:
        with view_lock:
            viewer.update(packet)

    def render() -> str:
        with view_lock:
            return viewer.render()

    feeder = threading.Thread(target=_feed, args=(chunks, parser, stop, delay), daemon=True)
    decoder = threading.Thread(target=parser.run, args=(show, stop), daemon=True)
    feeder.start()
    decoder.start()

    deadline = None if args.duration is None else time.monotonic() + args.duration

    def waiting() -> bool:
        return deadline is None or time.monotonic() < deadline

    console = Console()
    try:
        if args.no_live:
            while waiting():
                stop.wait(args.refresh)
        else:
            with Live(Text(render()), console=console, auto_refresh=False) as live:
                while waiting():
                    stop.wait(args.refresh)
                    live.update(Text(render()), refresh=True)
    except KeyboardInterrupt:
        pass
    finally:
        stop.set()
        feeder.join()
        decoder.join()
        for packet in parser.packets():
            viewer.update(packet)
        if retriever is not None:
            retriever.close()
        if args.save and source is DataSourceType.COM:
            viewer.save()
        parser.close()

    if args.no_live:
        print(viewer.render())
    return 0


if __name__ == "__main__":
    sys.exit(main())