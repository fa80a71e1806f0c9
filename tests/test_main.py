import logging
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from unari.main import build_parser, main


class TestMain(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.env_file = str(Path(self._tmp.name) / "missing.env")
        self._root_handlers = list(logging.getLogger().handlers)

    def tearDown(self):
        root = logging.getLogger()
        for handler in root.handlers:
            if handler not in self._root_handlers:
                handler.close()
        root.handlers[:] = self._root_handlers
        self._tmp.cleanup()

    def test_subcommand_is_required(self):
        with self.assertRaises(SystemExit):
            build_parser().parse_args([])

    def test_invalid_port_exits_with_error(self):
        with patch.dict(os.environ, {"PORT": "not-a-port"}):
            self.assertEqual(main(["--env-file", self.env_file, "serve"]), 1)

    def test_local_runs_textual_app_and_logs_to_file(self):
        log_path = Path(self._tmp.name) / "logs" / "unari.log"
        with patch.dict(os.environ, {"UNARI_LOG_PATH": str(log_path), "PORT": "2222"}), patch("unari.main.MenuApp") as app_cls:
            self.assertEqual(main(["--env-file", self.env_file, "local"]), 0)
        app_cls.return_value.run.assert_called_once_with()
        self.assertTrue(log_path.parent.is_dir())

    def test_serve_reports_bind_failure(self):
        def fail(coro):
            coro.close()
            raise OSError("address in use")

        with patch.dict(os.environ, {"PORT": "2222"}), patch("unari.main.asyncio.run", side_effect=fail):
            self.assertEqual(main(["--env-file", self.env_file, "serve"]), 1)


if __name__ == "__main__":
    unittest.main()
