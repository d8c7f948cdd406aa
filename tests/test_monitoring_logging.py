from __future__ import annotations

import io
import json
import logging
import unittest

from ycat.monitoring import ContextFormatter, JsonFormatter, configure_logging


class ConfigureLoggingTests(unittest.TestCase):
    def setUp(self) -> None:
        self.logger = logging.getLogger("ycat")
        self._saved = (list(self.logger.handlers), self.logger.level, self.logger.propagate)
        self._root_handlers = list(logging.getLogger().handlers)

    def tearDown(self) -> None:
        handlers, level, propagate = self._saved
        self.logger.handlers = handlers
        self.logger.setLevel(level)
        self.logger.propagate = propagate

    def test_json_records_carry_context(self) -> None:
        stream = io.StringIO()
        configure_logging("info", json_logs=True, stream=stream)

        logging.getLogger("ycat.catalog").info(
            "catalog built", extra={"context": {"stems": 3, "policy": "sorted"}}
        )

        payload = json.loads(stream.getvalue().strip())
        self.assertEqual(payload["level"], "INFO")
        self.assertEqual(payload["logger"], "ycat.catalog")
        self.assertEqual(payload["message"], "catalog built")
        self.assertEqual(payload["stems"], 3)
        self.assertEqual(payload["policy"], "sorted")
        self.assertIn("ts", payload)

    def test_text_records_append_context(self) -> None:
        stream = io.StringIO()
        configure_logging("DEBUG", stream=stream)

        logging.getLogger("ycat.pairing").debug("duplicate stem", extra={"context": {"stem": "cat"}})

        line = stream.getvalue().strip()
        self.assertIn("DEBUG ycat.pairing - duplicate stem", line)
        self.assertTrue(line.endswith("stem=cat"))

    def test_reconfiguring_keeps_one_handler_and_leaves_root_alone(self) -> None:
        configure_logging("INFO", stream=io.StringIO())
        stream = io.StringIO()
        logger = configure_logging("WARNING", json_logs=True, stream=stream)

        self.assertIs(logger, self.logger)
        self.assertEqual(len(logger.handlers), 1)
        self.assertIsInstance(logger.handlers[0].formatter, JsonFormatter)
        self.assertFalse(logger.propagate)
        self.assertEqual(logger.level, logging.WARNING)
        self.assertEqual(logging.getLogger().handlers, self._root_handlers)

        logging.getLogger("ycat.indexer").info("filtered out")
        self.assertEqual(stream.getvalue(), "")

    def test_context_formatter_without_context(self) -> None:
        formatter = ContextFormatter(fmt="%(levelname)s %(message)s")
        record = logging.LogRecord("ycat", logging.ERROR, __file__, 1, "boom", None, None)

        self.assertEqual(formatter.format(record), "ERROR boom")


if __name__ == "__main__":
    unittest.main()
