#!/usr/bin/env python3
import socket
import unittest

import msgpack

from dropbench import DecodeError, MessageRecord, Sink, get_codec


def consume(sink, payload):
    """Feed ``payload`` to ``sink`` through a socketpair and return the stats."""
    left, right = socket.socketpair()
    with left, right:
        left.sendall(payload)
        left.shutdown(socket.SHUT_WR)
        return sink.consume(right)


class SinkTestCase(unittest.TestCase):
    def setUp(self):
        self.codec = get_codec("msgpack")

    def test_counts_records(self):
        payload = b"".join(self.codec.pack(MessageRecord.for_index(i)) for i in range(10))
        stats = consume(Sink(self.codec), payload)
        self.assertEqual(stats.records, 10)
        self.assertEqual(stats.dropped, 0)
        self.assertEqual(stats.bytes_received, len(payload))

    def test_drops_records_without_message(self):
        """Maps lacking a message field and non-map values are dropped and counted."""
        payload = (
            self.codec.pack(MessageRecord.for_index(0))
            + msgpack.packb({"id": 42, "source": "service"})
            + msgpack.packb(7)
            + self.codec.pack(MessageRecord.for_index(1))
        )
        sink = Sink(self.codec, keep=True)
        with self.assertLogs(level="WARNING") as logs:
            stats = consume(sink, payload)
        self.assertEqual(stats.records, 2)
        self.assertEqual(stats.dropped, 2)
        self.assertEqual([r["message"] for r in sink.records], ["le message - 0", "le message - 1"])
        self.assertEqual(len(logs.records), 2)

    def test_keeps_everything_when_message_not_required(self):
        payload = msgpack.packb({"id": 1}) + msgpack.packb("bare")
        sink = Sink(self.codec, require_message=False, keep=True)
        stats = consume(sink, payload)
        self.assertEqual(stats.records, 2)
        self.assertEqual(sink.records, [{"id": 1}, "bare"])

    def test_records_not_kept_by_default(self):
        sink = Sink(self.codec)
        consume(sink, self.codec.pack(MessageRecord.for_index(0)))
        self.assertEqual(sink.records, [])

    def test_truncated_stream(self):
        frame = self.codec.pack(MessageRecord.for_index(0))
        for cut in [1, 5, 10]:
            with self.subTest(cut=cut):
                with self.assertRaises(DecodeError):
                    consume(Sink(self.codec), frame + frame[:cut])

    def test_json_lines(self):
        codec = get_codec("json")
        payload = b"".join(codec.pack(MessageRecord.for_index(i)) for i in range(3))
        sink = Sink(codec, keep=True)
        stats = consume(sink, payload)
        self.assertEqual(stats.records, 3)
        self.assertEqual(MessageRecord.from_dict(sink.records[2]), MessageRecord.for_index(2))

    def test_small_receive_buffer(self):
        payload = b"".join(self.codec.pack(MessageRecord.for_index(i)) for i in range(20))
        stats = consume(Sink(self.codec, buffer_size=3), payload)
        self.assertEqual(stats.records, 20)


if __name__ == "__main__":
    unittest.main()
