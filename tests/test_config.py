import pytest

import riakpb


def test_defaults(clean_environment):

    settings = riakpb.config.load()

    assert settings == riakpb.config.defaults
    assert settings['host'] == '127.0.0.1'
    assert settings['port'] == 8087


def test_file(clean_environment):

    filename = clean_environment / 'config.json'
    filename.write_text('{"host": "riak.example.com", "timeout": 2.5, "max_frame_size": null}')

    settings = riakpb.config.load(str(filename))

    assert settings['host'] == 'riak.example.com'
    assert settings['port'] == 8087
    assert settings['timeout'] == 2.5
    assert settings['max_frame_size'] is None


def test_environment_overrides_file(clean_environment, monkeypatch):

    filename = clean_environment / 'config.json'
    filename.write_text('{"port": 10017}')
    monkeypatch.setenv('RIAKPB_CONFIG', str(filename))
    monkeypatch.setenv('RIAKPB_PORT', '10018')
    monkeypatch.setenv('RIAKPB_MAX_FRAME_SIZE', '1048576')

    settings = riakpb.config.load()

    assert settings['port'] == 10018
    assert settings['max_frame_size'] == 1048576


def test_invalid_values(clean_environment, monkeypatch):

    monkeypatch.setenv('RIAKPB_PORT', '70000')
    with pytest.raises(ValueError):
        riakpb.config.load()

    monkeypatch.setenv('RIAKPB_PORT', 'eighty')
    with pytest.raises(ValueError):
        riakpb.config.load()

    monkeypatch.delenv('RIAKPB_PORT')
    monkeypatch.setenv('RIAKPB_TIMEOUT', '-1')
    with pytest.raises(ValueError):
        riakpb.config.load()


def test_invalid_file(clean_environment):

    filename = clean_environment / 'config.json'

    filename.write_text('{"port": ')
    with pytest.raises(ValueError):
        riakpb.config.load(str(filename))

    filename.write_text('[8087]')
    with pytest.raises(ValueError):
        riakpb.config.load(str(filename))

    filename.write_text('{"hostname": "localhost"}')
    with pytest.raises(ValueError):
        riakpb.config.load(str(filename))


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
