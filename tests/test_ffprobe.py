import unittest
from pathlib import Path
from subprocess import CalledProcessError, CompletedProcess
from unittest.mock import patch

from clipsplit.exceptions import MetadataError
from clipsplit.ffprobe import get_duration

class TestFFProbe(unittest.TestCase):
    @patch("clipsplit.utils.subprocess.run")
    def test_get_duration(self, mock_run):
        mock_run.return_value = CompletedProcess(
            args=["ffprobe"], returncode=0, stdout="120.5\n", stderr=""
        )
        self.assertAlmostEqual(get_duration(Path("/tmp/fake.mp4")), 120.5)
        cmd = mock_run.call_args[0][0]
        self.assertEqual(cmd[0], "ffprobe")
        self.assertIn("format=duration", cmd)

    @patch("clipsplit.utils.subprocess.run")
    def test_get_duration_missing_value(self, mock_run):
        mock_run.return_value = CompletedProcess(
            args=["ffprobe"], returncode=0, stdout="N/A\n", stderr=""
        )
        with self.assertRaises(MetadataError):
            get_duration(Path("/tmp/fake.mp4"))

    @patch("clipsplit.utils.subprocess.run")
    def test_get_duration_zero(self, mock_run):
        mock_run.return_value = CompletedProcess(
            args=["ffprobe"], returncode=0, stdout="0.0\n", stderr=""
        )
        with self.assertRaises(MetadataError):
            get_duration(Path("/tmp/fake.mp4"))

    @patch("clipsplit.utils.subprocess.run")
    def test_get_duration_command_failure(self, mock_run):
        mock_run.side_effect = CalledProcessError(1, ["ffprobe"], stderr="No such file")
        with self.assertRaises(MetadataError):
            get_duration(Path("/tmp/missing.mp4"))

if __name__ == "__main__":
    unittest.main()
