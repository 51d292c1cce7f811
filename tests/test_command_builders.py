"""Unit tests for command builder functionality

This test suite verifies the construction of ffmpeg commands
for lossless cutting and concatenation.
"""

import tempfile
import unittest
from pathlib import Path
from clipsplit.export.command_builders import (
    build_concat_command, build_cut_command, write_concat_list
)

class TestCommandBuilders(unittest.TestCase):
    """Test cases for command builder utilities"""
    def test_build_cut_command(self):
        cmd = build_cut_command(Path("/tmp/input.mp4"), Path("/tmp/out.mp4"), 30.0, 70.5)
        self.assertEqual(cmd[0], "ffmpeg")
        self.assertEqual(cmd[cmd.index("-i") + 1], "/tmp/input.mp4")
        self.assertEqual(cmd[cmd.index("-ss") + 1], "30.000")
        self.assertEqual(cmd[cmd.index("-to") + 1], "70.500")
        self.assertEqual(cmd[cmd.index("-c") + 1], "copy")
        self.assertIn("/tmp/out.mp4", cmd)
        self.assertIn("-y", cmd)
        # Range options apply to the output, after the input
        self.assertGreater(cmd.index("-ss"), cmd.index("-i"))

    def test_build_concat_command(self):
        cmd = build_concat_command(Path("/tmp/concat.txt"), Path("/tmp/merged.mp4"))
        self.assertEqual(cmd[cmd.index("-f") + 1], "concat")
        self.assertEqual(cmd[cmd.index("-safe") + 1], "0")
        self.assertEqual(cmd[cmd.index("-i") + 1], "/tmp/concat.txt")
        self.assertEqual(cmd[cmd.index("-c") + 1], "copy")
        self.assertLess(cmd.index("-f"), cmd.index("-i"))
        # Timestamp regeneration is an input option of the concat demuxer
        self.assertEqual(cmd[cmd.index("-fflags") + 1], "+genpts")
        self.assertLess(cmd.index("-fflags"), cmd.index("-i"))
        self.assertIn("/tmp/merged.mp4", cmd)

    def test_write_concat_list_keeps_order(self):
        with tempfile.TemporaryDirectory() as tmp:
            tmp_dir = Path(tmp)
            parts = [tmp_dir / "temp_1.mp4", tmp_dir / "temp_0.mp4", tmp_dir / "it's.mp4"]
            concat_file = tmp_dir / "concat.txt"
            write_concat_list(parts, concat_file)
            lines = concat_file.read_text().splitlines()
        self.assertEqual(len(lines), 3)
        self.assertTrue(lines[0].endswith("temp_1.mp4'"))
        self.assertTrue(lines[1].endswith("temp_0.mp4'"))
        self.assertIn("it'\\''s.mp4", lines[2])

if __name__ == "__main__":
    unittest.main()
