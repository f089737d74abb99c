import logging
import unittest

from caged_explorer.logger import get_logger
from caged_explorer.logging_config import MODULE_LOG_LEVELS, setup_logging


class TestGetLogger(unittest.TestCase):
    def test_package_names_kept(self):
        self.assertEqual(get_logger("caged_explorer.shapes").name, "caged_explorer.shapes")
        self.assertEqual(get_logger("caged_explorer").name, "caged_explorer")

    def test_outside_names_nested(self):
        self.assertEqual(get_logger("__main__").name, "caged_explorer.main")
        self.assertEqual(get_logger("tools").name, "caged_explorer.tools")
        self.assertEqual(get_logger("caged_explorer_extra").name, "caged_explorer.caged_explorer_extra")

    def test_cached(self):
        self.assertIs(get_logger("caged_explorer.clusters"), get_logger("caged_explorer.clusters"))


class TestSetupLogging(unittest.TestCase):
    def tearDown(self):
        setup_logging()

    def test_module_levels(self):
        setup_logging()
        for name, level in MODULE_LOG_LEVELS.items():
            self.assertEqual(logging.getLogger(name).level, level, name)

    def test_debug_override(self):
        setup_logging("debug")
        self.assertEqual(logging.getLogger("caged_explorer.cli").level, logging.DEBUG)
        self.assertEqual(logging.getLogger("pyfiglet").level, logging.ERROR)

    def test_shared_handler(self):
        setup_logging()
        handlers = {id(h) for name in MODULE_LOG_LEVELS for h in logging.getLogger(name).handlers}
        self.assertEqual(len(handlers), 1)


if __name__ == "__main__":
    unittest.main()
