import json
import logging
import sys
import unittest

from dashboard.shared.infrastructure.cache.route_cache import RouteCache
from dashboard.shared.infrastructure.logging.structured_logger import (
    JsonFormatter,
    configure_json_logging,
)


class TestRouteCache(unittest.TestCase):
    def test_revalidate_drops_only_the_given_path(self) -> None:
        cache = RouteCache()
        cache.set("/dashboard/invoices", ["page"])
        cache.set("/dashboard/customers", ["other"])

        cache.revalidate_path("/dashboard/invoices")

        self.assertNotIn("/dashboard/invoices", cache)
        self.assertEqual(cache.get("/dashboard/customers"), ["other"])

    def test_revalidating_an_uncached_path_is_a_no_op(self) -> None:
        cache = RouteCache()

        cache.revalidate_path("/dashboard/invoices")

        self.assertIsNone(cache.get("/dashboard/invoices"))


class TestJsonFormatter(unittest.TestCase):
    def test_action_field_defaults_to_unknown(self) -> None:
        record = logging.LogRecord("dashboard", logging.INFO, __file__, 1, "hello %s", ("world",), None)

        formatted = JsonFormatter().format(record)

        self.assertIn('"message": "hello world"', formatted)
        self.assertIn('"action": "unknown"', formatted)

    def test_exception_traceback_is_included(self) -> None:
        try:
            raise RuntimeError("insert failed")
        except RuntimeError:
            exc_info = sys.exc_info()
        record = logging.LogRecord(
            "dashboard", logging.ERROR, __file__, 1, "invoice_create_failed", (), exc_info
        )
        record.action = "create_invoice"

        payload = json.loads(JsonFormatter().format(record))

        self.assertEqual(payload["action"], "create_invoice")
        self.assertIn("RuntimeError: insert failed", payload["exception"])

    def test_configure_json_logging_sets_level_once(self) -> None:
        root_logger = logging.getLogger()
        saved_handlers, saved_level = root_logger.handlers[:], root_logger.level
        try:
            root_logger.handlers = []
            configure_json_logging(level=logging.WARNING)
            configure_json_logging(level=logging.DEBUG)

            self.assertEqual(root_logger.level, logging.WARNING)
            self.assertEqual(len(root_logger.handlers), 1)
            self.assertIsInstance(root_logger.handlers[0].formatter, JsonFormatter)
        finally:
            root_logger.handlers = saved_handlers
            root_logger.setLevel(saved_level)


if __name__ == "__main__":
    unittest.main()
