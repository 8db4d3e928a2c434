"""Tests for sibling association and recursive discovery."""

import pytest

from utils.constants import VIDEO_EXTENSIONS
from utils.file_operations import FileHandler


def _touch(tmp_path, *names):
    for name in names:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.touch()


def test_find_sibling_uses_extension_priority(tmp_path):
    _touch(tmp_path, 'movie.srt', 'movie.avi', 'movie.mkv')
    assert FileHandler.find_sibling(tmp_path / 'movie.srt', VIDEO_EXTENSIONS) == tmp_path / 'movie.mkv'


def test_find_sibling_none_when_missing(tmp_path):
    _touch(tmp_path, 'movie.srt', 'other.mp4')
    assert FileHandler.find_video_for(tmp_path / 'movie.srt') is None


def test_find_sibling_sees_files_created_later(tmp_path):
    _touch(tmp_path, 'movie.srt')
    assert FileHandler.find_video_for(tmp_path / 'movie.srt') is None
    _touch(tmp_path, 'movie.mov')
    assert FileHandler.find_video_for(tmp_path / 'movie.srt') == tmp_path / 'movie.mov'


def test_find_sibling_ignores_directories(tmp_path):
    _touch(tmp_path, 'movie.srt')
    (tmp_path / 'movie.mp4').mkdir()
    assert FileHandler.find_video_for(tmp_path / 'movie.srt') is None


def test_find_subtitles_and_notes_for_video(tmp_path):
    _touch(tmp_path, 'talk.mp4', 'talk.vtt', 'talk.srt', 'talk.md', 'talk.txt', 'other.srt')
    video = tmp_path / 'talk.mp4'
    assert FileHandler.find_subtitles_for(video) == [tmp_path / 'talk.srt', tmp_path / 'talk.vtt']
    assert FileHandler.find_notes_for(video) == [tmp_path / 'talk.md', tmp_path / 'talk.txt']


def test_find_video_for_note(tmp_path):
    _touch(tmp_path, 'lesson.md', 'lesson.m4v')
    assert FileHandler.find_video_for(tmp_path / 'lesson.md') == tmp_path / 'lesson.m4v'


def test_find_subtitle_files_skips_hidden_and_bundles(tmp_path):
    _touch(tmp_path,
           'b.srt', 'a.VTT', 'notes.txt', '.hidden.srt',
           'sub/c.ass', '.cache/d.srt', 'Player.app/e.srt', 'Library.bundle/f.srt')

    found = FileHandler.find_subtitle_files(tmp_path)

    assert found == [tmp_path / 'a.VTT', tmp_path / 'b.srt', tmp_path / 'sub' / 'c.ass']


def test_iter_files_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        FileHandler.iter_files(tmp_path / 'missing', ['srt'])


def test_iter_files_on_a_file(tmp_path):
    _touch(tmp_path, 'movie.srt')
    with pytest.raises(NotADirectoryError):
        FileHandler.iter_files(tmp_path / 'movie.srt', ['srt'])


def test_find_media_files(tmp_path):
    _touch(tmp_path,
           'zeta.mp4', 'zeta.srt', 'zeta.md',
           'season/alpha.mkv', 'season/alpha.vtt',
           'readme.txt', '.secret.mp4')

    library = FileHandler.find_media_files(tmp_path)

    assert [video.name for video in library.videos] == ['alpha', 'zeta']
    alpha, zeta = library.videos
    assert alpha.subtitle_paths == [tmp_path / 'season' / 'alpha.vtt']
    assert alpha.note_paths == []
    assert zeta.subtitle_paths == [tmp_path / 'zeta.srt']
    assert zeta.note_paths == [tmp_path / 'zeta.md']
    assert library.notes == [tmp_path / 'readme.txt', tmp_path / 'zeta.md']


def test_safe_write_creates_parents(tmp_path):
    target = tmp_path / 'reports' / 'out.md'
    FileHandler.safe_write(target, "# Report\n")
    assert target.read_text(encoding='utf-8') == "# Report\n"
