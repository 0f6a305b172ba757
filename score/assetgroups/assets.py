# Copyright © 2015-2018 STRG.AT GmbH, Vienna, Austria
#
# This file is part of the The SCORE Framework.
#
# The SCORE Framework and all its parts are free software: you can redistribute
# them and/or modify them under the terms of the GNU Lesser General Public
# License version 3 as published by the Free Software Foundation which is in the
# file named COPYING.LESSER.txt.
#
# The SCORE Framework and all its parts are distributed without any WARRANTY;
# without even the implied warranty of MERCHANTABILITY or FITNESS FOR A
# PARTICULAR PURPOSE. For more details see the GNU Lesser General Public
# License.
#
# If you have not received a copy of the GNU Lesser General Public License see
# http://www.gnu.org/licenses/.
#
# The License-Agreement realised between you as Licensee and STRG.AT GmbH as
# Licenser including the issue of its valid conclusion and its pre- and
# post-contractual effects is governed by the laws of Austria. Any disputes
# concerning this License-Agreement including the issue of its valid conclusion
# and its pre- and post-contractual effects are exclusively decided by the
# competent court, in whose district STRG.AT GmbH has its registered seat, at
# the discretion of STRG.AT GmbH also the competent court, in whose district the
# Licensee has his registered seat, an establishment or assets.


"""
Asset handles. Every asset referenced by a :term:`group <asset group>` is
represented by an :class:`Asset` object, which knows how to provide its
content, its last modification time and a digest of its content.

None of the classes here check for the existence of their source when they
are constructed. Missing files are only detected when the asset is actually
read, i.e. when calling :meth:`Asset.load`, :meth:`Asset.last_modified` or
:meth:`Asset.hash`.
"""

import abc
import email.utils
import enum
import glob
import hashlib
import os

import requests


class AssetKind(enum.Enum):
    LOCAL_FILE = 'file'
    GLOB_SET = 'glob'
    REMOTE_HTTP = 'http'


def looks_like_path(reference):
    """
    Tests whether an :term:`asset reference` should be treated as a file,
    glob pattern or URL instead of the name of a registered asset.
    """
    return any(char in reference for char in '/.-')


def classify_asset(reference):
    """
    Returns the :class:`AssetKind` of given *reference* string. This function
    does not access the file system.

    >>> classify_asset('http://example.com/jquery.js')
    <AssetKind.REMOTE_HTTP: 'http'>
    >>> classify_asset('css/*.css')
    <AssetKind.GLOB_SET: 'glob'>
    >>> classify_asset('js/app.js')
    <AssetKind.LOCAL_FILE: 'file'>
    """
    if reference.startswith('http://'):
        return AssetKind.REMOTE_HTTP
    if '*' in reference or '?' in reference:
        return AssetKind.GLOB_SET
    return AssetKind.LOCAL_FILE


def create_asset(reference, theme):
    """
    Creates the :class:`Asset` described by given *reference*. Local files
    and glob patterns are relative to the folder of the active *theme*.
    """
    kind = classify_asset(reference)
    if kind is AssetKind.REMOTE_HTTP:
        return HttpAsset(reference)
    elif kind is AssetKind.GLOB_SET:
        return GlobAsset(theme.theme_path(reference))
    else:
        return FileAsset(theme.theme_path(reference))


class Asset(abc.ABC):
    """
    A single input resource of an :term:`asset group`.
    """

    @abc.abstractmethod
    def load(self):
        """
        Provides the unfiltered content of this asset as a string.
        """

    @abc.abstractmethod
    def last_modified(self):
        """
        Returns the timestamp of the last modification of this asset, or
        `None` if it cannot be determined.
        """

    def read_bytes(self):
        """
        Provides the unfiltered content as it is stored, without decoding or
        newline translation.
        """
        return self.load().encode('UTF-8')

    def hash(self):
        """
        Returns the md5 hex digest of the raw content as provided by
        :meth:`read_bytes`.
        """
        return hashlib.md5(self.read_bytes()).hexdigest()

    def leaves(self):
        """
        Iterates over the assets providing actual content. This is just this
        asset itself, unless it is an :class:`AssetCollection`.
        """
        yield self


class FileAsset(Asset):

    def __init__(self, path):
        self.path = path

    def load(self):
        with open(self.path, encoding='UTF-8') as fp:
            return fp.read()

    def last_modified(self):
        return os.path.getmtime(self.path)

    def read_bytes(self):
        with open(self.path, 'rb') as fp:
            return fp.read()

    def hash(self):
        md5 = hashlib.md5()
        with open(self.path, 'rb') as fp:
            for chunk in iter(lambda: fp.read(4096), b''):
                md5.update(chunk)
        return md5.hexdigest()

    def __repr__(self):
        return '<FileAsset %s>' % self.path


class GlobAsset(Asset):
    """
    All files matching a glob *pattern*, in sorted order. The pattern is
    expanded anew on each access, so files added later will be picked up.
    """

    def __init__(self, pattern):
        self.pattern = pattern

    def files(self):
        return sorted(path for path in glob.glob(self.pattern)
                      if os.path.isfile(path))

    def load(self):
        parts = []
        for path in self.files():
            with open(path, encoding='UTF-8') as fp:
                parts.append(fp.read())
        return '\n'.join(parts)

    def read_bytes(self):
        parts = []
        for path in self.files():
            with open(path, 'rb') as fp:
                parts.append(fp.read())
        return b'\n'.join(parts)

    def last_modified(self):
        mtimes = [os.path.getmtime(path) for path in self.files()]
        if not mtimes:
            return None
        return max(mtimes)

    def __repr__(self):
        return '<GlobAsset %s>' % self.pattern


class HttpAsset(Asset):
    """
    A remote asset, fetched via HTTP whenever its content is needed.
    """

    timeout = 10

    def __init__(self, url):
        self.url = url

    def load(self):
        response = requests.get(self.url, timeout=self.timeout)
        response.raise_for_status()
        return response.text

    def read_bytes(self):
        response = requests.get(self.url, timeout=self.timeout)
        response.raise_for_status()
        return response.content

    def last_modified(self):
        response = requests.head(self.url, timeout=self.timeout,
                                 allow_redirects=True)
        response.raise_for_status()
        header = response.headers.get('Last-Modified')
        if not header:
            return None
        parsed = email.utils.parsedate_to_datetime(header)
        return parsed.timestamp()

    def __repr__(self):
        return '<HttpAsset %s>' % self.url


class AssetCollection(Asset):
    """
    An ordered list of *assets* and an ordered list of *filters*. Dumping a
    collection applies all filters, in order, to each of its leaf assets and
    concatenates the results.

    A leaf asset object occurring more than once, for example because the
    same registered asset was referenced twice, will only be dumped once.

    The *target_path* is the path of the merged file relative to the public
    folder, or `None` if the collection is never written to disk.
    """

    def __init__(self, assets, filters=(), target_path=None):
        self.assets = list(assets)
        self.filters = list(filters)
        self.target_path = target_path

    def leaves(self):
        seen = set()
        for asset in self.assets:
            for leaf in asset.leaves():
                if id(leaf) in seen:
                    continue
                seen.add(id(leaf))
                yield leaf

    def _filtered_parts(self, seen):
        for asset in self.assets:
            if isinstance(asset, AssetCollection):
                parts = asset._filtered_parts(seen)
            elif id(asset) in seen:
                continue
            else:
                seen.add(id(asset))
                parts = [(asset, asset.load())]
            for leaf, content in parts:
                for filter_ in self.filters:
                    content = filter_.filter(content, leaf)
                yield leaf, content

    def dump(self):
        """
        Returns the filtered and merged content of all assets.
        """
        return '\n'.join(content for _, content in self._filtered_parts(set()))

    def load(self):
        return '\n'.join(leaf.load() for leaf in self.leaves())

    def read_bytes(self):
        return b'\n'.join(leaf.read_bytes() for leaf in self.leaves())

    def last_modified(self):
        mtimes = [leaf.last_modified() for leaf in self.leaves()]
        mtimes = [mtime for mtime in mtimes if mtime is not None]
        if not mtimes:
            return None
        return max(mtimes)

    def __iter__(self):
        return iter(self.assets)

    def __len__(self):
        return len(self.assets)

    def __repr__(self):
        return '<AssetCollection %r -> %s>' % (self.assets, self.target_path)
