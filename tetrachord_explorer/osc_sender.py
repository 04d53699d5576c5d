"""OSC output of derived scales.

Publishes each derived tetrachord to an external sampler, synth or
visualizer, which does the audio and drawing work.

Messages:
- /tetrachord/intervals i1 i2 i3 residual             - step counts
- /tetrachord/degree index note rate ratio            - one per scale degree
- /tetrachord/label index numerator denominator pos   - one per number line label
"""

from typing import Optional

from pythonosc import udp_client

from . import config
from .explorer import ScaleSnapshot


class ScaleSender:
    """Sends scale snapshots over OSC.

    Uses python-osc's SimpleUDPClient. Scale degrees carry the MIDI note
    whose sample is played and the playback rate that bends it to the
    exact ratio.
    """

    def __init__(
        self,
        host: str = config.OSC_HOST,
        port: int = config.OSC_PORT,
    ):
        """Initialize the sender.

        Args:
            host: Target host address
            port: Target UDP port
        """
        self.host = host
        self.port = port
        self._client: Optional[udp_client.SimpleUDPClient] = None

    def open(self) -> None:
        """Open the OSC connection."""
        self._client = udp_client.SimpleUDPClient(self.host, self.port)

    def close(self) -> None:
        """Close the OSC connection."""
        self._client = None

    def _send(self, address: str, args: list) -> None:
        if self._client is None:
            return
        self._client.send_message(address, args)

    def send_snapshot(self, snapshot: ScaleSnapshot) -> None:
        """Publish intervals, scale degrees and labels of a snapshot."""
        self._send(config.OSC_INTERVALS, [int(i) for i in snapshot.intervals])

        for index, degree in enumerate(snapshot.degrees):
            self._send(
                config.OSC_DEGREE,
                [index, int(degree.note_number), float(degree.playback_rate), float(degree.ratio)],
            )

        for index, label in enumerate(snapshot.labels):
            numerator, denominator = label.ratio
            self._send(
                config.OSC_LABEL,
                [index, int(numerator), int(denominator), float(label.position)],
            )

    @property
    def is_open(self) -> bool:
        """Whether the OSC connection is open."""
        return self._client is not None

    def __enter__(self) -> "ScaleSender":
        """Context manager entry."""
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()


class MockScaleSender(ScaleSender):
    """Mock sender for running without a consumer.

    Logs all messages (and prints them when verbose) instead of sending.
    """

    def __init__(self, *args, verbose: bool = True, **kwargs):
        super().__init__(*args, **kwargs)
        self.verbose = verbose
        self._message_log: list[dict] = []
        self._open = False

    def open(self) -> None:
        """Mock open."""
        self._open = True
        if self.verbose:
            print(f"[MockOSC] Opened connection to {self.host}:{self.port}")

    def close(self) -> None:
        """Mock close."""
        self._open = False
        if self.verbose:
            print("[MockOSC] Connection closed")

    def _send(self, address: str, args: list) -> None:
        if not self._open:
            return
        self._message_log.append({"address": address, "args": list(args)})
        if self.verbose:
            print(f"[MockOSC] {address} {' '.join(str(a) for a in args)}")

    @property
    def is_open(self) -> bool:
        return self._open

    def get_log(self) -> list[dict]:
        """Get the message log."""
        return self._message_log.copy()

    def clear_log(self) -> None:
        """Clear the message log."""
        self._message_log.clear()
