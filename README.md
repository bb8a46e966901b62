# mindviewer

A terminal viewer for the ThinkGear packet stream that EEG headsets send. It
reads bytes from one of three sources, decodes them into packets and shows
the result live in the terminal:

- **com**: a serial port the headset is connected to.
- **sim**: a built-in simulator that produces random raw-sample packets, with
  an EEG power packet every 512th packet.
- **local**: a text file of recorded bytes, written as space-separated hex
  pairs, each line replayed as one chunk of the stream (for example
  `AA AA 04 80 02 12 34 37`).

The view shows the status and source, an elapsed-time clock, the power and
signal values, packet counters (total, lost, raw, EEG, noise bytes), text
gauges for attention and meditation, and sparkline curves for the raw signal
and the eight EEG bands (delta, theta, low/high alpha, low/high beta, low
gamma and mid gamma).

## Installation

```
pip install .
```

This installs `pyserial` for the serial port and `rich` for the live display.

## Usage

```
mindviewer --source sim
mindviewer --source local --file capture.txt
mindviewer --source com --port /dev/ttyUSB0 --baudrate 57600
mindviewer --list-ports
```

Options:

- `--source {com,local,sim}`: where the data comes from (required unless
  `--list-ports` is given).
- `--file PATH`: the capture file to replay with `--source local`.
- `--port DEVICE`: the serial device to read with `--source com`.
- `--baudrate N` (default 57600), `--bytesize {5,6,7,8}` (default 8),
  `--stopbits {1,1.5,2}` (default 1), `--parity N` (0 none, 1 even, 2 odd,
  3 space, 4 mark; default 0), `--flow-control {0,1,2}` (0 none, 1 hardware,
  2 software; default 0): serial port settings.
- `--save`: keep the capture file of the serial stream.
- `--duration SECONDS`: stop after this many seconds; otherwise run until
  interrupted with Ctrl-C.
- `--refresh SECONDS`: how often the screen is redrawn (default 0.1).
- `--no-live`: do not redraw while running; print the view once at the end.
- `--list-ports`: print the serial devices present and exit.

With `--source com`, every byte received is also written to a capture file
named after the current time (`YYYY-MM-DD-hh-mm-ss.txt`) in the current
directory. The file is deleted on exit unless `--save` is given. The file
holds the raw bytes as received, not the hex text that `--source local`
reads.

The clock advances one second for every packet shown, not by wall time.

## Library use

The pieces can also be used on their own:

- `mindviewer.dataparser.DataParser` buffers bytes given to `feed()`, skips
  noise, checks checksums and yields `EEGPacket` values from `packets()`.
  Raw samples are collected and handed over in the `raw` list of the next
  packet that carries no raw sample. `parse_packet()` decodes a single packet
  into a `ParseResult`.
- `mindviewer.simulator.Simulator` produces valid packet byte strings
  (`raw_packet()`, `eeg_packet()`, `next_packet()`, or by iteration).
- `mindviewer.localfile.LocalFile` yields the bytes of each line of a hex
  capture file; `parse_line()` converts a single line.
- `mindviewer.retriever.Retriever` reads from a serial port opened with
  `SerialSettings`, and works as a context manager; `available_ports()`
  lists the devices.
- `mindviewer.mainwidget.Viewer` holds the view state with `play()`,
  `pause()`, `clear()`, `save()`, `update()` and `render()`, raising
  `ViewerError` for actions the current state does not allow.
- `mindviewer.curve.Curve` and `mindviewer.indicator.Indicator` keep the
  plotted series and gauge values and draw them as text.
- `mindviewer.icd` holds the protocol constants, `EEGPacket`,
  `DataSourceType` and the `checksum()` and hex helpers.

```python
from mindviewer.dataparser import DataParser
from mindviewer.simulator import Simulator

parser = DataParser()
sim = Simulator()
for _ in range(600):
    parser.feed(sim.next_packet())
for packet in parser.packets():
    print(packet.attention, packet.meditation, len(packet.raw))
```

## What it does not do

There is no graphical window: gauges and curves are drawn as text in the
terminal. Saving is only possible for the serial stream; `Viewer.save()`
refuses simulated data and data read from a file.

## Tests

```
pip install .[test]
pytest
```