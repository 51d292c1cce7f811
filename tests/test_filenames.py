"""Tests for export naming and format checks."""
import pytest

from clipsplit.export.filenames import (
    generate_export_filename, generate_merged_filename, get_file_extension,
    get_supported_formats, is_valid_video_format, sanitize_filename,
    unique_export_names
)


@pytest.mark.parametrize("name,expected", [
    ("Intro", "Intro"),
    ('a<b>c:d"e/f\\g|h?i*j', "a_b_c_d_e_f_g_h_i_j"),
    ("  padded  ", "padded"),
    ("tab\there", "tab_here"),
    ("", "untitled"),
    ("   ", "untitled"),
    (None, "untitled"),
])
def test_sanitize_filename(name, expected):
    assert sanitize_filename(name) == expected


def test_generate_export_filename():
    assert generate_export_filename("Part 1", ".MOV") == "Part 1.mov"
    assert generate_export_filename("Part 1", "mkv") == "Part 1.mkv"


def test_generate_merged_filename():
    assert generate_merged_filename("trip.MP4") == "trip_merged.mp4"
    assert generate_merged_filename("my.trip.mov") == "my.trip_merged.mov"
    assert generate_merged_filename("noext") == "noext_merged.mp4"
    assert generate_merged_filename(".hidden") == ".hidden_merged.mp4"


def test_get_file_extension():
    assert get_file_extension("clip.MKV") == ".mkv"
    assert get_file_extension("clip") == ""
    assert get_file_extension("") == ""


def test_is_valid_video_format():
    assert is_valid_video_format("a.mp4")
    assert is_valid_video_format("A.MOV")
    assert not is_valid_video_format("a.webm")
    assert not is_valid_video_format("mp4")


def test_supported_formats_is_a_copy():
    formats = get_supported_formats()
    formats.append(".webm")
    assert ".webm" not in get_supported_formats()


def test_unique_export_names():
    assert unique_export_names(["Take", "Intro", "Take", "take", "Take_2"]) == [
        "Take", "Intro", "Take_2", "take_3", "Take_2_2"
    ]
    assert unique_export_names(["a/b", "a:b"]) == ["a_b", "a_b_2"]
