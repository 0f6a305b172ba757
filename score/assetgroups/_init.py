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


from score.init import (
    ConfiguredModule, ConfigurationError, extract_conf, parse_bool,
    parse_list)
import logging
import os
import shutil
import threading

from .assets import AssetCollection, create_asset, looks_like_path
from .filters import build_filter_registry
from .theme import Theme


log = logging.getLogger(__name__)

defaults = {
    'theme': 'default',
    'rootdir': None,
    'publicdir': None,
    'assetsdir': 'themes/{theme}',
    'md5': False,
    'secure': False,
}


def init(confdict, tpl=None):
    """
    Initializes this module acoording to :ref:`our module initialization
    guidelines <module_initialization>` with the following configuration keys:

    :confkey:`theme` :confdefault:`default`
        Name of the active theme.

    :confkey:`rootdir`
        The folder containing the source files of all themes, one sub-folder
        per theme.

    :confkey:`publicdir`
        The public folder of the web application. Merged group files will be
        written below this folder.

    :confkey:`assetsdir` :confdefault:`themes/{theme}`
        The folder, relative to *publicdir*, containing the public assets of
        the active theme. ``{theme}`` is replaced with the theme name.

    :confkey:`md5` :confdefault:`False`
        Whether :meth:`ConfiguredAssetGroupsModule.url` should append a
        content hash to the URL by default.

    :confkey:`secure` :confdefault:`False`
        Accepted for compatibility, currently without effect.

    :confkey:`assets.*`
        Registered assets: each key below this prefix is an asset name, the
        value is a list of :term:`asset references <asset reference>`.

    :confkey:`filters.*`
        Registered filters: each key below this prefix is a filter name, the
        value is a dotted path to a filter class, a filter instance or a
        callable returning a filter.

    :confkey:`<theme>.groups.<group>.assets`
        The assets of a group: registered asset names, file paths, glob
        patterns or URLs.

    :confkey:`<theme>.groups.<group>.filters`
        Names of registered filters to apply to the group's assets.

    :confkey:`<theme>.groups.<group>.output`
        Where to store the merged file, relative to *assetsdir*. Groups
        without an output are never written to disk.
    """
    conf = dict(defaults.items())
    conf.update(confdict)
    for key in ('rootdir', 'publicdir'):
        if not conf[key]:
            raise ConfigurationError(
                'score.assetgroups', 'No %s configured' % key)
        if not os.path.isdir(conf[key]):
            raise ConfigurationError(
                'score.assetgroups', 'Configured %s does not exist' % key)
    theme = Theme(conf['theme'], conf['rootdir'], conf['assetsdir'])
    groups = extract_conf(conf, '%s.groups.' % theme.name)
    return ConfiguredAssetGroupsModule(
        tpl, theme, conf['publicdir'],
        extract_conf(conf, 'assets.'), extract_conf(conf, 'filters.'),
        groups, parse_bool(conf['md5']), parse_bool(conf['secure']))


class ConfiguredAssetGroupsModule(ConfiguredModule):
    """
    This module's :class:`configuration class
    <score.init.ConfiguredModule>`.
    """

    def __init__(self, tpl, theme, publicdir, assets, filters, groupconf,
                 md5, secure):
        super().__init__(__package__)
        self.tpl = tpl
        self.theme = theme
        self.publicdir = publicdir
        self.groupconf = groupconf
        self.md5 = md5
        self.secure = secure
        self.filters = build_filter_registry(filters)
        self.assets = self._build_asset_registry(assets)
        self._groups = {}
        self._group_locks = {}
        self._lock = threading.Lock()
        if tpl:
            self._register_tpl_globals()

    def _register_tpl_globals(self):
        filetype = self.tpl.filetypes['text/html']
        filetype.add_global('assetgroups_url', self.url)
        filetype.add_global('assetgroups_file', self.file)
        filetype.add_global('assetgroups_image', self.image)
        filetype.add_global('assetgroups_document', self.document)

    def _build_asset_registry(self, assetconf):
        registry = {}
        for name, refs in assetconf.items():
            if isinstance(refs, str):
                refs = parse_list(refs)
            assets = [create_asset(ref, self.theme) for ref in refs]
            if not assets:
                continue
            if len(assets) == 1:
                registry[name] = assets[0]
            else:
                registry[name] = AssetCollection(assets)
        return registry

    def groups(self):
        """
        Returns the names of all groups configured for the active theme.
        """
        names = []
        for key in self.groupconf:
            name = key.rsplit('.', maxsplit=1)[0]
            if name not in names:
                names.append(name)
        return names

    def resolve_group(self, name, overwrite=False):
        """
        Provides the :class:`AssetCollection` of the group with given *name*.
        The collection is built on the first call and cached for the lifetime
        of this object.

        The merged file of the group is written if it does not exist yet, or
        if any of the group's assets was modified after it was written. Passing
        a truthy *overwrite* will write the file in any case.
        """
        if name not in self.groups():
            raise ConfigurationError(
                'score.assetgroups', 'Unknown group %s in theme %s' % (
                    name, self.theme.name))
        with self._lock:
            lock = self._group_locks.setdefault(name, threading.Lock())
        with lock:
            if name in self._groups and not overwrite:
                return self._groups[name]
            if name in self._groups:
                group = self._groups[name]
            else:
                group = self._create_group(name)
            if group.target_path and (overwrite or self._is_stale(group)):
                self._write(group)
            self._groups[name] = group
            return group

    def _create_group(self, name):
        assets = []
        for ref in self._get_config(name, 'assets', []):
            if ref in self.assets:
                assets.append(self.assets[ref])
            elif looks_like_path(ref):
                assets.append(create_asset(ref, self.theme))
            else:
                raise UnknownAssetError(name, ref)
        filters = []
        for filter_name in self._get_config(name, 'filters', []):
            try:
                filters.append(self.filters[filter_name])
            except KeyError:
                raise UnknownFilterSpecError(
                    filter_name, 'No filter %s defined' % filter_name)
        output = self.groupconf.get(name + '.output')
        target_path = None
        if output:
            target_path = self.theme.assets_path(output)
        return AssetCollection(assets, filters, target_path)

    def _get_config(self, group, key, default):
        value = self.groupconf.get('%s.%s' % (group, key), default)
        if isinstance(value, str):
            value = parse_list(value)
        return value

    def _output_file(self, group):
        return os.path.join(self.publicdir, group.target_path)

    def _is_stale(self, group):
        file = self._output_file(group)
        if not os.path.exists(file):
            return True
        asset_mtime = group.last_modified()
        if asset_mtime and os.path.getmtime(file) >= asset_mtime:
            log.debug('Output of %s is up to date', group.target_path)
            return False
        return True

    def _write(self, group):
        file = self._output_file(group)
        folder = os.path.dirname(file)
        os.makedirs(folder, exist_ok=True)
        content = group.dump()
        tmppath = file + '.tmp'
        try:
            with open(tmppath, 'w', encoding='UTF-8') as fp:
                fp.write(content)
            shutil.move(tmppath, file)
        finally:
            if os.path.exists(tmppath):
                os.unlink(tmppath)
        log.info('Wrote %s', file)

    def url(self, name, md5=None, secure=None):
        """
        Returns the URL to the merged file of given group. If *md5* is
        true--or omitted while the configuration value ``md5`` is true--the URL
        will contain the md5 hash of the group's *first* asset as query
        string. Note that this hash does not change when other assets of the
        group or its filters change.

        The *secure* parameter is accepted, but currently has no effect.
        """
        group = self.resolve_group(name)
        if not group.target_path:
            raise ConfigurationError(
                'score.assetgroups', 'Group %s has no output' % name)
        cache_buster = ''
        if md5 is None:
            md5 = self.md5
        if md5 and group.assets:
            cache_buster = '?' + group.assets[0].hash()
        return '/' + group.target_path + cache_buster

    def file(self, name):
        """
        Returns the path to the merged file of given group, relative to the
        public folder. Will return `None` if the group has no output.
        """
        return self.resolve_group(name).target_path

    def content(self, name):
        """
        Returns the filtered and merged content of given group.
        """
        return self.resolve_group(name).dump()

    def image(self, file):
        return self._get_asset(file, 'img')

    def document(self, file):
        return self._get_asset(file, 'pdf')

    def _get_asset(self, file, type_):
        return '/' + self.theme.assets_path('%s/%s' % (type_, file))


class AssetGroupsError(Exception):
    """
    Base class for errors raised by this module.
    """


class UnknownAssetError(AssetGroupsError):
    """
    Thrown when a group references an asset that is neither registered nor
    looks like a file name, glob pattern or URL.
    """

    def __init__(self, group, reference):
        self.group = group
        self.reference = reference
        super().__init__("No asset '%s' defined (group %s)" % (
            reference, group))


class UnknownFilterSpecError(AssetGroupsError):
    """
    Thrown when a configured value cannot be converted into a :class:`Filter
    <score.assetgroups.filters.Filter>`, or when a group references a filter
    name that was never configured.
    """

    def __init__(self, spec, message=None):
        self.spec = spec
        if message is None:
            message = 'Cannot convert %r to filter' % (spec,)
        super().__init__(message)
