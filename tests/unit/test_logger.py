from unittest import TestCase, mock
import tempfile
import logging
import os

from ballotbox import logger


class TestLogger(TestCase):
    def test_single_colored_stream_handler(self):
        log = logger.get_logger('TestLoggerSingle')
        logger.get_logger('TestLoggerSingle')

        self.assertEqual(len(log.handlers), 1)
        self.assertIsInstance(log.handlers[0], logger.ColoredStreamHandler)
        self.assertFalse(log.propagate)

    def test_level_from_environment(self):
        log = logger.get_logger('TestLoggerLevel')

        self.assertEqual(log.level, logger._LOG_LVL)

    def test_file_handler_when_log_dir_set(self):
        with tempfile.TemporaryDirectory() as d:
            with mock.patch.object(logger.config, 'LOG_DIR', os.path.join(d, 'logs')):
                log = logger.get_logger('TestLoggerFile')

            file_handlers = [h for h in log.handlers if isinstance(h, logging.FileHandler)]

            self.assertEqual(len(file_handlers), 1)
            self.assertEqual(file_handlers[0].baseFilename, os.path.join(d, 'logs', 'TestLoggerFile.log'))

            for h in file_handlers:
                h.close()
