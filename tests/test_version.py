"""Test version reporting."""

from unittest.mock import patch

from termed import version
from termed.version import BuildInfo, get_version_string


def test_version_without_build_info():
    with patch.object(version, 'get_build_info', return_value=BuildInfo(None, None, False)), \
         patch.object(version, 'get_installed_version', return_value='0.0.1'):
        assert get_version_string() == 'termed 0.0.1'


def test_version_with_commit():
    info = BuildInfo('0123456789abcdef', '2026-01-02T03:04:05+00:00', True)
    with patch.object(version, 'get_build_info', return_value=info), \
         patch.object(version, 'get_installed_version', return_value='0.0.1'):
        assert get_version_string() == 'termed 0.0.1 (0123456-dirty 2026-01-02T03:04:05+00:00)'


def test_build_info_falls_back_to_unknown():
    with patch.object(version, '_from_git_repo', return_value=None), \
         patch.object(version, '_from_embedded_file', return_value=None):
        assert version.get_build_info() == BuildInfo(None, None, False)
