"""Tests for OSC publishing of scale snapshots."""

import pytest

from tetrachord_explorer import config
from tetrachord_explorer import osc_sender
from tetrachord_explorer.explorer import TetrachordExplorer
from tetrachord_explorer.osc_sender import MockScaleSender, ScaleSender


@pytest.fixture
def snapshot():
    return TetrachordExplorer(equave=2.0, divisions=12).snapshot


class FakeClient:
    """Stands in for SimpleUDPClient and records messages."""

    def __init__(self, host, port):
        self.host = host
        self.port = port
        self.messages = []

    def send_message(self, address, value):
        self.messages.append((address, value))


class TestMockScaleSender:
    """Tests for the logging mock sender."""

    def test_messages_per_snapshot(self, snapshot):
        with MockScaleSender(verbose=False) as sender:
            sender.send_snapshot(snapshot)
            log = sender.get_log()
        # intervals + 5 degrees + 5 labels
        assert len(log) == 11
        assert log[0] == {"address": config.OSC_INTERVALS, "args": [2, 1, 2, 2]}

    def test_degree_message(self, snapshot):
        with MockScaleSender(verbose=False) as sender:
            sender.send_snapshot(snapshot)
            degrees = [m for m in sender.get_log() if m["address"] == config.OSC_DEGREE]
        index, note, rate, ratio = degrees[1]["args"]
        assert (index, note) == (1, 62)
        assert rate == pytest.approx(1.0)
        assert ratio == pytest.approx(2 ** (2 / 12))

    def test_label_message(self, snapshot):
        with MockScaleSender(verbose=False) as sender:
            sender.send_snapshot(snapshot)
            labels = [m for m in sender.get_log() if m["address"] == config.OSC_LABEL]
        assert labels[-1]["args"][:3] == [4, 3, 2]
        assert labels[-1]["args"][3] == pytest.approx(1.0)

    def test_closed_sender_logs_nothing(self, snapshot):
        sender = MockScaleSender(verbose=False)
        sender.send_snapshot(snapshot)
        assert sender.get_log() == []
        assert not sender.is_open

    def test_clear_log(self, snapshot):
        with MockScaleSender(verbose=False) as sender:
            sender.send_snapshot(snapshot)
            sender.clear_log()
            assert sender.get_log() == []

    def test_verbose_output(self, snapshot, capsys):
        with MockScaleSender(verbose=True) as sender:
            sender.send_snapshot(snapshot)
        out = capsys.readouterr().out
        assert "[MockOSC] /tetrachord/intervals 2 1 2 2" in out
        assert "[MockOSC] Connection closed" in out


class TestScaleSender:
    """Tests for the python-osc sender."""

    def test_sends_through_udp_client(self, snapshot, monkeypatch):
        monkeypatch.setattr(osc_sender.udp_client, "SimpleUDPClient", FakeClient)
        sender = ScaleSender(port=9100)
        sender.open()
        client = sender._client
        sender.send_snapshot(snapshot)
        assert client.port == 9100
        assert client.messages[0] == (config.OSC_INTERVALS, [2, 1, 2, 2])
        assert len(client.messages) == 11

    def test_not_open_is_noop(self, snapshot):
        sender = ScaleSender()
        sender.send_snapshot(snapshot)
        assert not sender.is_open

    def test_context_manager_closes(self, monkeypatch):
        monkeypatch.setattr(osc_sender.udp_client, "SimpleUDPClient", FakeClient)
        with ScaleSender() as sender:
            assert sender.is_open
        assert not sender.is_open
