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
This module manages :term:`asset groups <asset group>` of a theme: named,
ordered bundles of javascript, css or other text files, that are passed
through a chain of filters and merged into a single file below the public
folder of a web application. The merged file is only regenerated if one of
its source files changed.

Templates and views usually only need :meth:`ConfiguredAssetGroupsModule.url`
to embed a group into a web page.
"""

from ._init import (
    init, ConfiguredAssetGroupsModule, AssetGroupsError, UnknownAssetError,
    UnknownFilterSpecError)
from .assets import (
    Asset, AssetCollection, AssetKind, FileAsset, GlobAsset, HttpAsset,
    classify_asset, create_asset)
from .filters import Filter


__all__ = (
    'init', 'ConfiguredAssetGroupsModule', 'AssetGroupsError',
    'UnknownAssetError', 'UnknownFilterSpecError', 'Asset', 'AssetCollection',
    'AssetKind', 'FileAsset', 'GlobAsset', 'HttpAsset', 'classify_asset',
    'create_asset', 'Filter',)
