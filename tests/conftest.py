import os

import pytest

from score.assetgroups import init


SOURCES = {
    'css/a.css': 'body { color: red; }',
    'css/b.css': 'p { margin: 0; }',
    'js/app.js': 'var app = {};',
    'js/lib/one.js': 'var one = 1;',
    'js/lib/two.js': 'var two = 2;',
}


def touch(path, mtime):
    os.utime(str(path), (mtime, mtime))


class FakeResponse:

    def __init__(self, text='', headers=None):
        self.text = text
        self.content = text.encode('UTF-8')
        self.headers = headers or {}

    def raise_for_status(self):
        pass


@pytest.fixture
def rootdir(tmp_path):
    """Create a theme folder containing some source files."""
    root = tmp_path / 'themes'
    for relative, content in SOURCES.items():
        path = root / 'default' / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        touch(path, 1000000)
    return root


@pytest.fixture
def publicdir(tmp_path):
    public = tmp_path / 'public'
    public.mkdir()
    return public


@pytest.fixture
def confdict(rootdir, publicdir):
    return {
        'rootdir': str(rootdir),
        'publicdir': str(publicdir),
        'default.groups.main.assets': ['css/a.css', 'css/b.css'],
        'default.groups.main.output': 'css/main.css',
    }


@pytest.fixture
def make_conf(confdict):
    """Initialize the module with additional configuration values."""
    def make_conf(extra=None):
        conf = dict(confdict)
        conf.update(extra or {})
        return init(conf)
    return make_conf
