""" Session defaults. Values are read from, in increasing order of
    precedence: the built-in defaults below, an optional JSON file, and
    environment variables. Arguments passed to :func:`riakpb.connect`
    override all of these.

    The JSON file is ``~/.riakpb/config.json`` unless the ``RIAKPB_CONFIG``
    environment variable names another one. It holds a single object with
    any of the keys ``host``, ``port``, ``timeout``, ``max_frame_size``.
"""

import os

from . import json


defaults = dict(host='127.0.0.1', port=8087, timeout=None, max_frame_size=None)

environment = dict(
    host='RIAKPB_HOST',
    port='RIAKPB_PORT',
    timeout='RIAKPB_TIMEOUT',
    max_frame_size='RIAKPB_MAX_FRAME_SIZE',
)

directory = os.path.join(os.path.expanduser('~'), '.riakpb')


def path():
    """ Return the location of the configuration file, whether or not it
        exists.
    """

    try:
        return os.environ['RIAKPB_CONFIG']
    except KeyError:
        return os.path.join(directory, 'config.json')


def load(filename=None):
    """ Return the merged configuration as a dictionary. Raises ValueError
        if the file or an environment variable holds an invalid value.
    """

    if filename is None:
        filename = path()

    settings = dict(defaults)

    if os.path.exists(filename):
        settings.update(_load_file(filename))

    for key, variable in environment.items():
        try:
            raw = os.environ[variable]
        except KeyError:
            continue

        if raw == '':
            continue

        settings[key] = _convert(key, raw, variable)

    return settings


def _load_file(filename):

    with open(filename, 'rb') as handle:
        contents = handle.read()

    try:
        loaded = json.loads(contents)
    except json.DecodeError as e:
        raise ValueError('invalid JSON in %s: %s' % (filename, e)) from e

    if not isinstance(loaded, dict):
        raise ValueError('%s must contain a JSON object' % (filename))

    settings = dict()

    for key, value in loaded.items():
        if key not in defaults:
            raise ValueError('%s: unknown setting %r' % (filename, key))
        if value is None:
            settings[key] = None
        else:
            settings[key] = _convert(key, value, filename)

    return settings


def _convert(key, value, source):

    try:
        if key == 'host':
            return str(value)
        if key == 'timeout':
            value = float(value)
            if value <= 0:
                raise ValueError('must be positive')
            return value

        value = int(value)
        if value <= 0:
            raise ValueError('must be positive')
        if key == 'port' and value > 65535:
            raise ValueError('must be a TCP port number')
        return value

    except (TypeError, ValueError) as e:
        raise ValueError('%s: invalid %s %r: %s' % (source, key, value, e)) from e


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
