"""Unit tests for configuration management."""

import pytest
from gitlet.core.config import Config, get_config
from gitlet.core.errors import ConfigError


def test_defaults(repo):
    """Test built-in defaults apply when nothing is configured."""
    config = get_config(repo)
    assert config.get_int('core', 'compression') == -1
    assert config.get('user', 'name') is None
    assert config.get('user', 'name', 'fallback') == 'fallback'


def test_set_repo_value(repo):
    """Test repository values are written to .gitlet/config."""
    get_config(repo).set('core', 'compression', '9')

    assert get_config(repo).get_int('core', 'compression') == 9
    assert 'compression = 9' in repo.config_file.read_text()


def test_repo_overrides_global(repo):
    """Test repository config wins over global config."""
    get_config(repo).set('core', 'compression', '1', global_config=True)
    assert get_config(repo).get('core', 'compression') == '1'

    get_config(repo).set('core', 'compression', '5')
    assert get_config(repo).get('core', 'compression') == '5'


def test_environment_overrides_files(repo, monkeypatch):
    """Test environment variables win over every file."""
    get_config(repo).set('core', 'compression', '5')
    monkeypatch.setenv('GITLET_CORE_COMPRESSION', '0')

    assert get_config(repo).get_int('core', 'compression') == 0


def test_get_int_invalid(repo):
    """Test non-integer values raise ConfigError."""
    get_config(repo).set('user', 'retries', 'many')
    with pytest.raises(ConfigError):
        get_config(repo).get_int('user', 'retries')


@pytest.mark.parametrize('value', ['max', '42', '-2', ''])
def test_set_rejects_bad_compression(repo, value):
    """Test an unusable compression level is never written."""
    with pytest.raises(ConfigError):
        get_config(repo).set('core', 'compression', value)
    assert get_config(repo).compression_level() == -1


def test_bad_compression_from_file(repo):
    """Test a hand-edited level is reported when the object store is built."""
    repo.config_file.write_text('[core]\ncompression = 42\n')
    repo._config = None
    repo._object_store = None

    with pytest.raises(ConfigError):
        repo.objects


def test_bad_compression_from_environment(repo, monkeypatch):
    monkeypatch.setenv('GITLET_CORE_COMPRESSION', 'fast')
    with pytest.raises(ConfigError):
        get_config(repo).compression_level()


def test_unset(repo):
    """Test removing a value."""
    config = get_config(repo)
    config.set('user', 'name', 'Ada')

    assert config.unset('user', 'name')
    assert not config.unset('user', 'name')
    assert get_config(repo).get('user', 'name') is None


def test_list_all(repo):
    """Test listing merges global and repository values."""
    get_config(repo).set('user', 'name', 'Global', global_config=True)
    get_config(repo).set('user', 'name', 'Local')

    values = get_config(repo).list_all()

    assert values['user']['name'] == 'Local'
    assert values['core']['repositoryformatversion'] == '0'


def test_global_only_config():
    """Test a config without a repository cannot set repository values."""
    with pytest.raises(ValueError):
        Config().set('core', 'compression', '1')


def test_compression_level_reaches_object_store(repo):
    """Test the object store uses the configured level."""
    get_config(repo).set('core', 'compression', '9')
    repo._config = None
    repo._object_store = None

    assert repo.objects.compression_level == 9
