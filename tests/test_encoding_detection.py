"""Tests for the UTF-8 / GB18030 / Latin-1 decode chain."""

import pytest

from core.encoding_detection import EncodingDetector
from core.exceptions import SubtitleEncodingError, SubtitleFileNotFoundError


def test_utf8_is_tried_first():
    text, encoding = EncodingDetector.decode_bytes("héllo 你好".encode('utf-8'))
    assert encoding == 'utf-8'
    assert text == "héllo 你好"


def test_gb18030_fallback_for_legacy_chinese():
    data = "你好世界".encode('gb18030')
    text, encoding = EncodingDetector.decode_bytes(data)
    assert encoding == 'gb18030'
    assert text == "你好世界"


def test_latin1_fallback_accepts_anything(caplog):
    text, encoding = EncodingDetector.decode_bytes(b"caf\xe9 au lait", "menu.srt")
    assert encoding == 'latin-1'
    assert text == "café au lait"
    assert "menu.srt" in caplog.text


def test_exhausted_chain_raises(monkeypatch):
    monkeypatch.setattr("core.encoding_detection.DECODE_ORDER", ['utf-8'])
    with pytest.raises(SubtitleEncodingError):
        EncodingDetector.decode_bytes(b"\xff\xfe\xfa")


def test_read_file_with_encoding(tmp_path):
    path = tmp_path / "chinese.srt"
    path.write_bytes("字幕".encode('gb18030'))
    assert EncodingDetector.read_file_with_encoding(path) == ("字幕", 'gb18030')


def test_read_missing_file_raises_not_found(tmp_path):
    with pytest.raises(SubtitleFileNotFoundError) as excinfo:
        EncodingDetector.read_file_with_encoding(tmp_path / "missing.srt")
    assert isinstance(excinfo.value, FileNotFoundError)


def test_has_bom():
    assert EncodingDetector.has_bom(b"\xef\xbb\xbfWEBVTT")
    assert not EncodingDetector.has_bom(b"WEBVTT")


def test_detect_encoding_empty_data():
    assert EncodingDetector.detect_encoding(b"") is None
