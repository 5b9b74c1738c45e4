import json
import logging
import sys
import unittest

from flash_stats.errors import ProtocolViolationError
from flash_stats.logging.correlation import get_correlation_id, run_context
from flash_stats.logging.json_formatter import StructuredJSONFormatter


def _record(msg: str = "Segment 1 collected", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="flash_stats.classifier.flash_stats",
        level=logging.INFO,
        pathname="flash_stats.py",
        lineno=10,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestStructuredJSONFormatter(unittest.TestCase):
    def test_extra_fields_are_merged(self):
        formatter = StructuredJSONFormatter()
        data = json.loads(formatter.format(_record(segment=1, byte_hit_ratio=0.5)))

        self.assertEqual(data["message"], "Segment 1 collected")
        self.assertEqual(data["segment"], 1)
        self.assertEqual(data["byte_hit_ratio"], 0.5)
        self.assertEqual(data["level"], "INFO")

    def test_run_context_is_attached(self):
        formatter = StructuredJSONFormatter()
        with run_context("run-1", trace="events.csv"):
            data = json.loads(formatter.format(_record()))
            self.assertEqual(get_correlation_id(), "run-1")

        self.assertEqual(data["correlation_id"], "run-1")
        self.assertEqual(data["trace"], "events.csv")
        self.assertEqual(get_correlation_id(), "")

    def test_exception_context_is_serialized(self):
        formatter = StructuredJSONFormatter()
        try:
            raise ProtocolViolationError(
                "erase of a key that was never seen", event="erase", key=3, size=8
            )
        except ProtocolViolationError:
            record = _record("violation")
            record.exc_info = sys.exc_info()

        data = json.loads(formatter.format(record))
        self.assertEqual(data["exception"]["type"], "ProtocolViolationError")
        self.assertEqual(data["exception"]["context"]["key"], 3)

    def test_unserializable_values_fall_back_to_str(self):
        formatter = StructuredJSONFormatter()
        data = json.loads(formatter.format(_record(flags=frozenset({"read"}))))

        self.assertEqual(data["flags"], "frozenset({'read'})")

    def test_sensitive_keys_are_redacted(self):
        formatter = StructuredJSONFormatter()
        record = _record(
            api_key="secret_key_value",
            apiKey="camel_key",
            nested={"password": "hunter2", "public_data": "visible"},
            list_data=[{"token": "secret_token"}, {"other": "visible"}],
            key=42,
        )

        data = json.loads(formatter.format(record))

        self.assertEqual(data["api_key"], "[REDACTED]")
        self.assertEqual(data["apiKey"], "[REDACTED]")
        self.assertEqual(data["nested"]["password"], "[REDACTED]")
        self.assertEqual(data["nested"]["public_data"], "visible")
        self.assertEqual(data["list_data"][0]["token"], "[REDACTED]")
        self.assertEqual(data["list_data"][1]["other"], "visible")
        # cache keys are identifiers, not credentials
        self.assertEqual(data["key"], 42)


if __name__ == "__main__":
    unittest.main()
