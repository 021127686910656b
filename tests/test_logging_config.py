import logging
import os
import tempfile
import unittest

from logging_config import setup_logging, configured_level, LOGS_DIR


class TestLoggingConfig(unittest.TestCase):
    def test_setup_logging_creates_rotating_and_stream_handlers(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            log_file = os.path.join(tmpdir, "builds.log")

            logger = setup_logging(name="test_nexdrive_logger", log_file=log_file)

            self.assertIsInstance(logger, logging.Logger)
            self.assertEqual(logger.name, "test_nexdrive_logger")
            self.assertEqual(len(logger.handlers), 2)

            logger.info("build saved")
            for h in logger.handlers:
                h.flush()

            # File exists and is non-empty
            with open(log_file, "r", encoding="utf-8") as f:
                content = f.read()
                self.assertIn("build saved", content)

    def test_default_log_goes_to_logs_dir(self):
        """Default log_file should be routed to the project's logs/ directory."""
        logger = setup_logging(name="test_default_dir")
        file_handler = [h for h in logger.handlers if hasattr(h, "baseFilename")][0]
        self.assertIn(os.sep + "logs" + os.sep, file_handler.baseFilename)
        self.assertTrue(file_handler.baseFilename.endswith("nexdrive.log"))

    def test_custom_log_file_goes_to_logs_dir(self):
        """A relative log_file name should be placed inside the logs/ directory."""
        logger = setup_logging(name="test_custom_dir", log_file="scene_composer.log")
        file_handler = [h for h in logger.handlers if hasattr(h, "baseFilename")][0]
        expected = os.path.join(LOGS_DIR, "scene_composer.log")
        self.assertEqual(file_handler.baseFilename, expected)

    def test_absolute_path_respected(self):
        """An absolute log_file path should be used as-is, not redirected."""
        with tempfile.TemporaryDirectory() as tmpdir:
            abs_path = os.path.join(tmpdir, "abs_test.log")
            logger = setup_logging(name="test_abs_path", log_file=abs_path)
            file_handler = [h for h in logger.handlers if hasattr(h, "baseFilename")][0]
            self.assertEqual(file_handler.baseFilename, abs_path)

    def test_relative_path_with_dirs_stripped(self):
        """A relative path like 'pages/garage.log' should be stripped to 'garage.log' in logs/."""
        logger = setup_logging(name="test_strip_dirs", log_file="pages/garage.log")
        file_handler = [h for h in logger.handlers if hasattr(h, "baseFilename")][0]
        expected = os.path.join(LOGS_DIR, "garage.log")
        self.assertEqual(file_handler.baseFilename, expected)

    def test_level_defaults_to_settings(self):
        """Without an explicit level, settings.toml's log_level applies."""
        logger = setup_logging(name="test_level_default", log_file="level.log")
        self.assertEqual(logger.level, configured_level())
        self.assertEqual(configured_level(), logging.INFO)

    def test_explicit_level_wins(self):
        logger = setup_logging(name="test_level_explicit", log_file="level.log", level=logging.DEBUG)
        self.assertEqual(logger.level, logging.DEBUG)


if __name__ == "__main__":
    unittest.main()
